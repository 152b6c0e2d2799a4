"""
core/search/coordinator.py - 검색 코디네이터

(프로파일 x 리전) 작업을 병렬로 실행하고 결과를 출력기에 흘려보냅니다.

실행 순서:
    1. 리소스 종류 / 프로파일·리전 목록 / 정렬 키 검증
    2. 모든 리전에 대해 필터 컴파일 (네트워크 호출 전에 입력 오류 거부)
    3. 첫 번째 (프로파일, 리전)으로 인증 프로브 1회 (실패 시 중단)
    4. 작업 병렬 실행 -> 결과 큐 -> 단일 출력 스레드
    5. 모든 결과 게시 후 종료 신호를 보내고 출력 완료까지 대기

작업 하나의 실패(세션, API 오류, 마감 시간 초과)는 그 작업의 ResultSet.errors에
기록될 뿐 다른 작업이나 종료 코드에 영향을 주지 않습니다.
게시되는 ResultSet 수는 항상 len(profiles) * len(regions)입니다.

Example:
    coordinator = SearchCoordinator(config=ParallelConfig(max_workers=10, timeout=120))
    summary = coordinator.execute(
        "instances",
        profiles=["dev", "prod"],
        regions=["us-east-1"],
        filters=FilterSet({"names": ["web-*"]}),
        sort_field="name",
        render_options=RenderOptions(output="table"),
    )
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TextIO

from core.exceptions import ProbeError, ValidationError
from core.parallel.errors import describe_task_error
from core.parallel.executor import ParallelConfig, ParallelSessionExecutor
from core.parallel.types import ParallelExecutionResult

from .filters import CompiledQuery, compile_filters
from .registry import ResourceKind, ResourceRegistry, get_registry
from .render import RenderOptions, ResultRenderer
from .results import ResultSet
from .sorting import validate_sort_field

if TYPE_CHECKING:
    import boto3

logger = logging.getLogger(__name__)

SessionFactory = Callable[[str, str], "boto3.Session"]
IdentityProbe = Callable[[str, str], str]


@dataclass(frozen=True)
class SearchTask:
    """(프로파일, 리전) 검색 작업 하나"""

    kind: ResourceKind
    profile: str
    region: str
    query: CompiledQuery
    sort_field: str | None

    def __str__(self) -> str:
        return f"{self.kind.name}:{self.profile}/{self.region}"


def _default_session_factory(profile: str, region: str) -> boto3.Session:
    from core.auth.session import get_session

    return get_session(profile, region)


def _default_identity_probe(profile: str, region: str) -> str:
    from core.auth.session import get_session, who_am_i

    return who_am_i(get_session(profile, region))


class SearchCoordinator:
    """검색 코디네이터

    Args:
        registry: 리소스 종류 레지스트리 (None이면 플러그인 discovery)
        session_factory: (profile, region) -> boto3.Session
        identity_probe: (profile, region) -> 계정 ID. 실패 시 예외
        config: 병렬 실행 설정
        log: 로거 (None이면 모듈 로거)
    """

    def __init__(
        self,
        registry: ResourceRegistry | None = None,
        session_factory: SessionFactory | None = None,
        identity_probe: IdentityProbe | None = None,
        config: ParallelConfig | None = None,
        log: logging.Logger | None = None,
    ):
        self.registry = registry if registry is not None else get_registry()
        self.session_factory = session_factory or _default_session_factory
        self.identity_probe = identity_probe or _default_identity_probe
        self.config = config or ParallelConfig()
        self._logger = log or logger

    # -------------------------------------------------------------------------
    # 검증
    # -------------------------------------------------------------------------

    def validate(self, kind_name: str, filters: Any, sort_field: str | None, region: str) -> ResourceKind:
        """리소스 종류, 정렬 키, 필터만 검증 (프로파일/리전 확장 전에 호출)"""
        kind = self.registry.get(kind_name)
        validate_sort_field(kind.schema, sort_field)
        compile_filters(filters, region, kind.filter_fields)
        return kind

    def plan(
        self,
        kind_name: str,
        profiles: Sequence[str],
        regions: Sequence[str],
        filters: Any,
        sort_field: str | None,
    ) -> list[SearchTask]:
        """입력을 검증하고 작업 목록 생성 (네트워크 호출 없음)

        Raises:
            ValidationError: 알 수 없는 리소스 종류, 빈 프로파일/리전 목록
            SortFieldError: 알 수 없는 정렬 키
            FilterError: 필터 컴파일 실패
        """
        kind = self.registry.get(kind_name)
        if not profiles:
            raise ValidationError("at least one profile is required", field="profiles")
        if not regions:
            raise ValidationError("at least one region is required", field="regions")
        validate_sort_field(kind.schema, sort_field)

        queries = {region: compile_filters(filters, region, kind.filter_fields) for region in dict.fromkeys(regions)}

        return [
            SearchTask(kind=kind, profile=profile, region=region, query=queries[region], sort_field=sort_field or None)
            for profile in profiles
            for region in regions
        ]

    def probe(self, profile: str, region: str) -> str:
        """인증 프로브 1회

        Raises:
            ProbeError: 자격 증명이 유효하지 않은 경우
        """
        try:
            account = self.identity_probe(profile, region)
        except Exception as e:
            raise ProbeError(profile, region, cause=e) from e
        self._logger.info(f"인증 확인 [{profile}/{region}]: account={account}")
        return account

    # -------------------------------------------------------------------------
    # 실행
    # -------------------------------------------------------------------------

    def _run_task(self, task: SearchTask, cancel: threading.Event) -> ResultSet:
        result = ResultSet(profile=task.profile, region=task.region, sort_field=task.sort_field)
        session = self.session_factory(task.profile, task.region)
        if cancel.is_set():
            result.add_error("search cancelled")
            return result
        rows, errors = task.kind.search(session, task.region, task.query, task.sort_field)
        result.data = rows
        result.errors.extend(errors)
        self._logger.debug(f"검색 결과 [{task}]: {len(rows)}건")
        return result

    def execute(
        self,
        kind_name: str,
        profiles: Sequence[str],
        regions: Sequence[str],
        filters: Any,
        sort_field: str | None,
        render_options: RenderOptions | None = None,
        out: TextIO | None = None,
        renderer: ResultRenderer | None = None,
    ) -> ParallelExecutionResult:
        """검색 실행

        Args:
            kind_name: 리소스 종류 이름
            profiles: 프로파일 목록 (확장 완료된 값)
            regions: 리전 목록 (확장 완료된 값)
            filters: FilterSet
            sort_field: 정렬 키 (None이면 정렬 안 함)
            render_options: 출력 옵션
            out: 출력 스트림 (기본: stdout)
            renderer: 출력기 직접 지정 (테스트용)

        Returns:
            ParallelExecutionResult: 실행 요약

        Raises:
            ValidationError, SortFieldError, FilterError, ProbeError: 검색 시작 전 오류
        """
        tasks = self.plan(kind_name, profiles, regions, filters, sort_field)
        kind = tasks[0].kind
        self.probe(tasks[0].profile, tasks[0].region)

        renderer = renderer or ResultRenderer(kind.schema, render_options, out=out)
        results: queue.Queue[ResultSet | None] = queue.Queue(maxsize=len(tasks) + 1)
        done = threading.Event()
        consumer = threading.Thread(target=renderer.consume, args=(results, done), name="awss-render", daemon=True)
        consumer.start()

        executor = ParallelSessionExecutor(self.config, log=self._logger)
        timeout_message = f"search timed out after {self.config.timeout:g}s" if self.config.timeout else "search timed out"

        def on_error(task: SearchTask, error: BaseException) -> ResultSet:
            return ResultSet(
                profile=task.profile,
                region=task.region,
                errors=[describe_task_error(error)],
                sort_field=task.sort_field,
            )

        def on_timeout(task: SearchTask) -> ResultSet:
            return ResultSet(profile=task.profile, region=task.region, errors=[timeout_message], sort_field=task.sort_field)

        try:
            summary = executor.execute(
                tasks,
                worker=lambda task: self._run_task(task, executor.cancel_event),
                sink=lambda task, result: results.put(result),
                on_error=on_error,
                on_timeout=on_timeout,
            )
        finally:
            results.put(None)

        done.wait()
        self._logger.info(f"출력 완료: {renderer.rendered}/{summary.total}개 결과")
        return summary
