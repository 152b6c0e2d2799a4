"""
core/parallel/executor.py - 병렬 세션 실행기

멀티 프로파일/리전 작업을 크기가 제한된 ThreadPoolExecutor로 실행하고,
각 작업의 결과를 정확히 한 번 sink에 전달합니다.

동작:
- 작업 함수가 예외를 던지면 on_error로 결과를 만들어 전달
- 전체 마감 시간이 지나면 취소 이벤트를 설정하고, 끝나지 않은 작업마다
  on_timeout으로 결과를 만들어 전달 (늦게 끝난 작업의 결과는 버림)
- KeyboardInterrupt 시 취소 이벤트 설정 후 대기 중인 작업을 취소하고 전파

주요 구성 요소:
- ParallelConfig: 워커 수, 마감 시간
- ParallelSessionExecutor: 실행기

Example:
    executor = ParallelSessionExecutor(ParallelConfig(max_workers=20, timeout=300))
    summary = executor.execute(
        tasks,
        worker=lambda task: search(task),
        sink=publish,
        on_error=lambda task, e: ResultSet(task.profile, task.region, errors=[str(e)]),
        on_timeout=lambda task: ResultSet(task.profile, task.region, errors=["timed out"]),
    )
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Generic, TypeVar

from core.config import settings

from .errors import categorize_error, get_error_code
from .types import ParallelExecutionResult

logger = logging.getLogger(__name__)

TaskT = TypeVar("TaskT")
R = TypeVar("R")


def _clear_exception_chain(e: BaseException) -> None:
    """traceback + chained exception 메모리 누수 방지"""
    e.__traceback__ = None
    if e.__context__ is not None:
        e.__context__.__traceback__ = None
    if e.__cause__ is not None:
        e.__cause__.__traceback__ = None


@dataclass(frozen=True)
class ParallelConfig:
    """병렬 실행 설정

    Attributes:
        max_workers: 최대 동시 스레드 수 (1~100, 초과 시 100)
        timeout: 전체 마감 시간 (초, None이면 무제한)
    """

    max_workers: int = settings.MAX_WORKERS
    timeout: float | None = settings.SEARCH_TIMEOUT

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.max_workers > settings.MAX_WORKERS_LIMIT:
            object.__setattr__(self, "max_workers", settings.MAX_WORKERS_LIMIT)
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be > 0, got {self.timeout}")


class _Publisher(Generic[TaskT, R]):
    """작업별 결과를 정확히 한 번만 sink에 전달하고 결과 종류를 센다"""

    def __init__(self, sink: Callable[[TaskT, R], None]):
        self._sink = sink
        self._lock = threading.Lock()
        self._published: set[int] = set()
        self.counts = {"succeeded": 0, "failed": 0, "timed_out": 0}

    def publish(self, index: int, task: TaskT, result: R, outcome: str) -> bool:
        with self._lock:
            if index in self._published:
                return False
            self._published.add(index)
            self._sink(task, result)
            self.counts[outcome] += 1
            return True


class ParallelSessionExecutor:
    """병렬 세션 실행기

    특징:
    - 워커 수 상한이 있는 ThreadPoolExecutor
    - 전체 마감 시간 + 협조적 취소 (cancel_event)
    - 작업마다 결과 정확히 한 번 전달

    cancel_event는 작업 함수가 긴 호출 전에 확인할 수 있도록 공개됩니다.
    """

    def __init__(self, config: ParallelConfig | None = None, log: logging.Logger | None = None):
        self.config = config or ParallelConfig()
        self.cancel_event = threading.Event()
        self._logger = log or logger

    def execute(
        self,
        tasks: Sequence[TaskT],
        worker: Callable[[TaskT], R],
        sink: Callable[[TaskT, R], None],
        on_error: Callable[[TaskT, BaseException], R],
        on_timeout: Callable[[TaskT], R],
    ) -> ParallelExecutionResult:
        """모든 작업을 병렬 실행하고 결과를 sink로 전달

        Args:
            tasks: 작업 목록
            worker: 작업 함수 (워커 스레드에서 호출)
            sink: 결과 수신 함수 (스레드 세이프하게 직렬 호출됨)
            on_error: 작업 함수 예외 -> 결과
            on_timeout: 마감 시간 초과 작업 -> 결과

        Returns:
            ParallelExecutionResult: 실행 요약
        """
        if not tasks:
            self._logger.warning("실행할 작업이 없습니다")
            return ParallelExecutionResult()

        self._logger.info(
            f"병렬 실행 시작: {len(tasks)}개 작업, max_workers={self.config.max_workers}, timeout={self.config.timeout}"
        )

        publisher: _Publisher[TaskT, R] = _Publisher(sink)
        start_time = time.monotonic()

        def run(index: int, task: TaskT) -> None:
            if self.cancel_event.is_set():
                return
            task_start = time.monotonic()
            try:
                result = worker(task)
                outcome = "succeeded"
            except Exception as e:
                self._logger.warning(f"작업 실패 [{task}]: [{get_error_code(e)}] {categorize_error(e).value}: {e}")
                result = on_error(task, e)
                _clear_exception_chain(e)
                outcome = "failed"

            if publisher.publish(index, task, result, outcome):
                self._logger.debug(f"작업 완료 [{task}]: {(time.monotonic() - task_start) * 1000:.0f}ms")
            else:
                self._logger.debug(f"마감 이후 완료된 작업 결과 무시 [{task}]")

        pool = ThreadPoolExecutor(max_workers=self.config.max_workers, thread_name_prefix="awss-search")
        futures: dict[Future[None], int] = {}
        try:
            for index, task in enumerate(tasks):
                futures[pool.submit(run, index, task)] = index

            _, not_done = wait(futures, timeout=self.config.timeout)
            if not_done:
                self.cancel_event.set()
                self._logger.warning(f"검색 마감 시간 초과: {len(not_done)}개 작업 취소")
                for future in not_done:
                    future.cancel()
                for index in sorted(futures[f] for f in not_done):
                    publisher.publish(index, tasks[index], on_timeout(tasks[index]), "timed_out")
        except BaseException:
            self.cancel_event.set()
            raise
        finally:
            # 마감 초과/중단 시 실행 중인 작업은 기다리지 않음 (client read_timeout으로 종료)
            pool.shutdown(wait=not self.cancel_event.is_set(), cancel_futures=True)

        duration_ms = (time.monotonic() - start_time) * 1000
        summary = ParallelExecutionResult(
            total=len(tasks),
            succeeded=publisher.counts["succeeded"],
            failed=publisher.counts["failed"],
            timed_out=publisher.counts["timed_out"],
            duration_ms=duration_ms,
        )
        self._logger.info(
            f"병렬 실행 완료: 성공 {summary.succeeded}, 실패 {summary.failed}, "
            f"시간 초과 {summary.timed_out}, 총 {duration_ms:.0f}ms"
        )
        return summary
