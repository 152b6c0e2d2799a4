"""
core/search/registry.py - 리소스 종류 레지스트리

검색 가능한 리소스 종류(ResourceKind)를 이름으로 등록/조회합니다.
각 종류는 필터 메타데이터, 행 스키마, 기본 정렬 키, 조회 함수, 행 변환 함수를
하나의 객체로 제공하므로 코디네이터는 종류별 분기 없이 동작합니다.

플러그인 구조:
    plugins/<category>/__init__.py
        CATEGORY = {"name": "ec2", ...}
        RESOURCES = [{"name": "instances", "module": "instances"}, ...]
    plugins/<category>/<module>.py
        RESOURCE = InstanceKind()

Example:
    registry = discover_resources()
    kind = registry.get("instances")
    rows, errors = kind.search(session, "us-east-1", query, "name")
"""

from __future__ import annotations

import importlib
import logging
import pkgutil
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from core.exceptions import ValidationError

from .filters import CompiledQuery, FilterField
from .schema import RowSchema
from .sorting import sort_rows

if TYPE_CHECKING:
    import boto3

logger = logging.getLogger(__name__)


class ResourceKind(ABC):
    """검색 가능한 리소스 종류

    서브클래스는 클래스 속성과 query/to_row를 정의합니다.

    Attributes:
        name: CLI 하위 명령 이름 (예: "instances")
        description: 도움말
        service: AWS 서비스 이름 (client 생성용)
        ids_param: ID 목록 파라미터 이름 (예: "InstanceIds")
        filter_fields: 지원 필터 메타데이터
        schema: 행 스키마
        default_sort: 기본 정렬 키
    """

    name: str = ""
    description: str = ""
    service: str = "ec2"
    ids_param: str = ""
    filter_fields: tuple[FilterField, ...] = ()
    schema: RowSchema
    default_sort: str | None = None

    @abstractmethod
    def query(self, session: boto3.Session, region: str, query: CompiledQuery) -> list[dict[str, Any]]:
        """AWS API로 원시 레코드 조회 (실패 시 예외)"""

    @abstractmethod
    def to_row(self, record: dict[str, Any]) -> Any:
        """원시 레코드 -> 행"""

    def enrich(self, rows: list[Any], session: boto3.Session, region: str) -> list[str]:
        """행 보강 (추가 조회). 치명적이지 않은 오류 메시지 목록 반환"""
        return []

    def search(
        self,
        session: boto3.Session,
        region: str,
        query: CompiledQuery,
        sort_field: str | None,
    ) -> tuple[list[Any], list[str]]:
        """조회 -> 행 변환 -> 보강 -> 정렬

        Returns:
            (정렬된 행 목록, 보강 단계의 오류 메시지)
        """
        records = self.query(session, region, query)
        rows = [self.to_row(record) for record in records]
        errors = self.enrich(rows, session, region) if rows else []
        sort_rows(rows, sort_field, self.schema)
        return rows, errors

    def filter_keys(self) -> list[str]:
        return [f.key for f in self.filter_fields]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class ResourceRegistry:
    """리소스 종류 레지스트리 (이름 -> ResourceKind)"""

    def __init__(self, kinds: list[ResourceKind] | None = None):
        self._kinds: dict[str, ResourceKind] = {}
        for kind in kinds or []:
            self.register(kind)

    def register(self, kind: ResourceKind) -> None:
        """리소스 종류 등록

        Raises:
            ValueError: 이름이 비었거나 이미 등록된 경우
        """
        if not kind.name:
            raise ValueError(f"{kind.__class__.__name__} has no name")
        if kind.name in self._kinds:
            raise ValueError(f"resource kind already registered: {kind.name}")
        self._kinds[kind.name] = kind

    def get(self, name: str) -> ResourceKind:
        """이름으로 조회

        Raises:
            ValidationError: 등록되지 않은 종류
        """
        kind = self._kinds.get(name)
        if kind is None:
            raise ValidationError(
                f"unknown resource kind: {name}. The options are: {', '.join(self.names())}",
                field="resource",
                value=name,
            )
        return kind

    def names(self) -> list[str]:
        return sorted(self._kinds)

    def __contains__(self, name: object) -> bool:
        return name in self._kinds

    def __iter__(self) -> Iterator[ResourceKind]:
        return iter(self._kinds[name] for name in self.names())

    def __len__(self) -> int:
        return len(self._kinds)


# =============================================================================
# 플러그인 discovery
# =============================================================================


def discover_resources(package: str = "plugins") -> ResourceRegistry:
    """플러그인 패키지에서 리소스 종류를 찾아 레지스트리 생성

    각 하위 패키지의 RESOURCES 목록에 있는 모듈을 임포트하고
    모듈의 RESOURCE 객체를 등록합니다.

    Raises:
        ImportError: 플러그인 모듈 임포트 실패
        ValueError: RESOURCE가 없거나 이름이 중복된 경우
    """
    registry = ResourceRegistry()
    root = importlib.import_module(package)

    for info in sorted(pkgutil.iter_modules(root.__path__), key=lambda m: m.name):
        if not info.ispkg:
            continue
        category = importlib.import_module(f"{package}.{info.name}")
        for entry in getattr(category, "RESOURCES", []):
            module = importlib.import_module(f"{package}.{info.name}.{entry['module']}")
            kind = getattr(module, "RESOURCE", None)
            if not isinstance(kind, ResourceKind):
                raise ValueError(f"{module.__name__} does not define RESOURCE")
            registry.register(kind)
            logger.debug(f"리소스 종류 등록: {kind.name} ({module.__name__})")

    return registry


_default_registry: ResourceRegistry | None = None
_registry_lock = threading.Lock()


def get_registry() -> ResourceRegistry:
    """기본 레지스트리 (최초 호출 시 discovery)"""
    global _default_registry
    with _registry_lock:
        if _default_registry is None:
            _default_registry = discover_resources()
        return _default_registry


def reset_registry() -> None:
    """기본 레지스트리 초기화 (테스트용)"""
    global _default_registry
    with _registry_lock:
        _default_registry = None
