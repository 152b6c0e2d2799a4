"""
core/parallel/types.py - 병렬 실행 결과 타입

주요 구성 요소:
- ErrorCategory: 작업 실패 분류 (로깅/요약용)
- ParallelExecutionResult: 전체 실행 요약
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(Enum):
    """에러 카테고리"""

    THROTTLING = "throttling"
    ACCESS_DENIED = "access_denied"
    NOT_FOUND = "not_found"
    EXPIRED_TOKEN = "expired_token"
    INVALID_REQUEST = "invalid_request"
    SERVICE_ERROR = "service_error"
    NETWORK = "network"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ParallelExecutionResult:
    """병렬 실행 요약

    Attributes:
        total: 전체 작업 수 (= 게시된 결과 수)
        succeeded: 정상 완료된 작업 수
        failed: 예외로 끝난 작업 수
        timed_out: 마감 시간 초과로 취소된 작업 수
        duration_ms: 전체 소요 시간 (밀리초)
    """

    total: int = 0
    succeeded: int = 0
    failed: int = 0
    timed_out: int = 0
    duration_ms: float = 0.0

    @property
    def error_count(self) -> int:
        return self.failed + self.timed_out
