"""
core/parallel - 병렬 처리 모듈

멀티 프로파일/리전 AWS 작업을 병렬로 안전하게 처리합니다.

주요 구성 요소:
- ParallelSessionExecutor: 워커 수 상한 + 마감 시간 + 취소를 지원하는 실행기
- get_client: 타임아웃이 설정된 boto3 client 생성
- categorize_error: 작업 실패 분류

Example:
    from core.parallel import ParallelConfig, ParallelSessionExecutor

    executor = ParallelSessionExecutor(ParallelConfig(max_workers=30, timeout=120))
    summary = executor.execute(tasks, worker, sink, on_error, on_timeout)
"""

from .client import get_client
from .errors import categorize_error, categorize_error_code, describe_task_error, get_error_code
from .executor import ParallelConfig, ParallelSessionExecutor
from .types import ErrorCategory, ParallelExecutionResult

__all__: list[str] = [
    "get_client",
    "categorize_error",
    "categorize_error_code",
    "describe_task_error",
    "get_error_code",
    "ParallelConfig",
    "ParallelSessionExecutor",
    "ErrorCategory",
    "ParallelExecutionResult",
]
