"""
core/search/filters.py - 필터 컴파일러

사용자 필터(FilterSet)를 리소스 종류의 필터 메타데이터(FilterField)에 따라
AWS Describe* API의 predicate 목록과 ID 목록(CompiledQuery)으로 변환합니다.
네트워크 호출이 없는 순수 함수이며, 잘못된 입력은 FilterError로 거부합니다.

변환 규칙 (필드 종류별):
    ids     -> CompiledQuery.ids (predicate 아님)
    names   -> tag:Name
    tags    -> "Key=V1:V2" 항목마다 tag:Key (값은 ':'로 분리)
    zones   -> availability-zone (리전 + 영역 문자)
    default -> 필드의 provider 이름 그대로

여러 필터를 함께 주면 AWS API 의미대로 AND로 결합됩니다.

Example:
    fields = InstanceKind.filter_fields
    query = compile_filters(FilterSet({"names": ["web"], "availability-zones": ["a"]}), "us-east-1", fields)
    ec2.describe_instances(**query.to_request("InstanceIds"))
"""

from __future__ import annotations

import ipaddress
import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from core.exceptions import FilterError

logger = logging.getLogger(__name__)

# 가용 영역 접미 문자 (원 도구와 동일하게 a-f만 허용)
ZONE_LETTERS = ("a", "b", "c", "d", "e", "f")


# =============================================================================
# 필터 메타데이터
# =============================================================================


class FilterKind(Enum):
    """필터 컴파일 방식"""

    IDS = "ids"
    NAMES = "names"
    TAGS = "tags"
    ZONES = "zones"
    DEFAULT = "default"


class ValueType(Enum):
    """필터 값 검증 타입"""

    STRING = "string"
    IP = "ip"


@dataclass(frozen=True)
class FilterField:
    """리소스 종류가 지원하는 필터 하나의 메타데이터

    CLI 옵션 생성과 컴파일이 같은 테이블을 사용합니다.

    Attributes:
        key: FilterSet 키이자 CLI 옵션 이름 (예: "private-ips")
        name: AWS 필터 이름 (예: "network-interface.addresses.private-ip-address")
        kind: 컴파일 방식
        value_type: 값 검증 타입
        short: 짧은 CLI 플래그 (예: "-p")
        help: CLI 도움말
    """

    key: str
    name: str
    kind: FilterKind = FilterKind.DEFAULT
    value_type: ValueType = ValueType.STRING
    short: str | None = None
    help: str = ""


# =============================================================================
# 입력 / 출력 타입
# =============================================================================


class FilterSet(Mapping[str, tuple[str, ...]]):
    """사용자 필터 (키 -> 값 목록), 불변

    값 목록이 비어 있는 키는 생성 시 제거됩니다. 값의 순서는 유지됩니다.

    Example:
        FilterSet({"names": ["web"], "ids": []})  # ids는 제거됨
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, Iterable[str]] | None = None):
        items: dict[str, tuple[str, ...]] = {}
        for key, values in (data or {}).items():
            if isinstance(values, str):
                values = [values]
            normalized = tuple(str(v) for v in values)
            if normalized:
                items[key] = normalized
        self._data = items

    def __getitem__(self, key: str) -> tuple[str, ...]:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"FilterSet({self._data!r})"


@dataclass(frozen=True)
class CompiledPredicate:
    """AWS API 필터 하나 (Name + Values)"""

    name: str
    values: tuple[str, ...]

    def to_api(self) -> dict[str, Any]:
        return {"Name": self.name, "Values": list(self.values)}


@dataclass(frozen=True)
class CompiledQuery:
    """컴파일된 조회 조건

    Attributes:
        ids: ID 목록 (InstanceIds / NetworkInterfaceIds로 전달)
        predicates: AWS 필터 목록
    """

    ids: tuple[str, ...] = ()
    predicates: tuple[CompiledPredicate, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.ids and not self.predicates

    def to_request(self, ids_param: str) -> dict[str, Any]:
        """boto3 Describe* 호출 인자로 변환

        Args:
            ids_param: ID 목록 파라미터 이름 (예: "InstanceIds")
        """
        request: dict[str, Any] = {}
        if self.ids:
            request[ids_param] = list(self.ids)
        if self.predicates:
            request["Filters"] = [p.to_api() for p in self.predicates]
        return request


# =============================================================================
# 필드별 변환 헬퍼
# =============================================================================


def parse_tags(values: Iterable[str]) -> dict[str, list[str]]:
    """태그 항목("Key=V1:V2")을 {키: 값 목록}으로 파싱

    '='로 나눈 결과가 정확히 2개가 아니면 거부합니다.
    같은 키가 다시 나오면 뒤의 값이 앞의 값을 대체합니다 (삽입 순서 유지).

    Raises:
        FilterError: "invalid tag: <항목>"
    """
    tags: dict[str, list[str]] = {}
    for value in values:
        parts = value.split("=")
        if len(parts) != 2 or not parts[0]:
            raise FilterError(f"invalid tag: {value}", field="tags", value=value)
        key, raw = parts
        tags[key] = raw.split(":")
    return tags


def filter_by_names(values: Sequence[str]) -> CompiledPredicate:
    """이름 필터 -> tag:Name predicate"""
    return CompiledPredicate(name="tag:Name", values=tuple(values))


def filter_by_tags(values: Iterable[str]) -> list[CompiledPredicate]:
    """태그 필터 -> 키마다 tag:<Key> predicate

    쉼표로 연결된 항목("Env=prod,Team=a:b")도 개별 항목으로 취급합니다.
    """
    items = [item for value in values for item in value.split(",") if item]
    return [CompiledPredicate(name=f"tag:{key}", values=tuple(vals)) for key, vals in parse_tags(items).items()]


def filter_by_availability_zones(values: Iterable[str], region: str) -> CompiledPredicate:
    """영역 문자 필터 -> availability-zone predicate

    각 값은 정확히 한 글자여야 합니다. a-f 이외의 문자(대문자 포함)는 경고 후 제외하며,
    남는 값이 없으면 거부합니다.

    Raises:
        FilterError: 길이가 1이 아닌 값, 또는 유효한 영역이 하나도 없는 경우
    """
    zones: list[str] = []
    for value in values:
        if len(value) != 1:
            raise FilterError(
                f"invalid availability zone: {value}. It must be a single letter",
                field="availability-zones",
                value=value,
            )
        if value not in ZONE_LETTERS:
            logger.warning(f"알 수 없는 가용 영역 문자 무시: {value}")
            continue
        zones.append(f"{region}{value}")

    if not zones:
        raise FilterError(
            f"no valid availability zone letter given (valid: {', '.join(ZONE_LETTERS)})",
            field="availability-zones",
        )
    return CompiledPredicate(name="availability-zone", values=tuple(zones))


def filter_default(name: str, values: Sequence[str]) -> CompiledPredicate:
    """기본 필터 -> 이름 그대로 predicate"""
    return CompiledPredicate(name=name, values=tuple(values))


def _validate_ips(key: str, values: Sequence[str]) -> tuple[str, ...]:
    normalized = []
    for value in values:
        try:
            normalized.append(str(ipaddress.ip_address(value.strip())))
        except ValueError as e:
            raise FilterError(f"invalid IP address: {value}", field=key, value=value) from e
    return tuple(normalized)


# =============================================================================
# 컴파일
# =============================================================================


def compile_filters(filter_set: Mapping[str, Sequence[str]], region: str, fields: Sequence[FilterField]) -> CompiledQuery:
    """FilterSet을 리전에 맞는 CompiledQuery로 변환

    Args:
        filter_set: 사용자 필터
        region: 대상 리전 (가용 영역 이름 생성용)
        fields: 리소스 종류의 필터 메타데이터

    Returns:
        CompiledQuery

    Raises:
        FilterError: 빈 필터, 알 수 없는 키, 잘못된 값
    """
    if not filter_set or not any(filter_set.values()):
        raise FilterError("you must provide at least one filter")

    by_key = {f.key: f for f in fields}
    ids: list[str] = []
    predicates: list[CompiledPredicate] = []

    for key, values in filter_set.items():
        if not values:
            continue
        filter_field = by_key.get(key)
        if filter_field is None:
            raise FilterError(f"unknown filter: {key}", field=key)

        vals = tuple(values)
        if filter_field.value_type is ValueType.IP:
            vals = _validate_ips(key, vals)

        if filter_field.kind is FilterKind.IDS:
            ids.extend(vals)
        elif filter_field.kind is FilterKind.NAMES:
            predicates.append(filter_by_names(vals))
        elif filter_field.kind is FilterKind.TAGS:
            predicates.extend(filter_by_tags(vals))
        elif filter_field.kind is FilterKind.ZONES:
            predicates.append(filter_by_availability_zones(vals, region))
        else:
            predicates.append(filter_default(filter_field.name, vals))

    query = CompiledQuery(ids=tuple(ids), predicates=tuple(predicates))
    logger.debug(f"필터 컴파일 [{region}]: ids={len(query.ids)}, predicates={[p.name for p in query.predicates]}")
    return query
