"""
core/search/schema.py - 행 스키마

리소스 종류마다 행(row) 타입의 컬럼을 명시적으로 선언합니다.
테이블 헤더, 정렬 키, 셀 렌더링 방식, JSON 키가 모두 이 선언에서 나오며
런타임 리플렉션은 사용하지 않습니다.

컬럼 종류(ValueKind):
    SCALAR  - 문자열 한 개
    LABELS  - 키/값 매핑 (태그). show_tags가 아니면 테이블에서 숨김
    LIST    - 문자열 목록
    RECORD  - 중첩 레코드 (자체 RowSchema를 가짐)

Example:
    @dataclass
    class VolumeRow:
        volume_id: str = ""
        tags: dict[str, str] = field(default_factory=dict)

    VOLUME_SCHEMA = RowSchema(
        VolumeRow,
        [
            Column("ID", "volume_id", sort_key="id"),
            Column("Tags", "tags", ValueKind.LABELS),
        ],
    )
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ValueKind(Enum):
    """컬럼 값 종류"""

    SCALAR = "scalar"
    LABELS = "labels"
    LIST = "list"
    RECORD = "record"


@dataclass(frozen=True)
class Column:
    """행의 컬럼 하나

    Attributes:
        header: 테이블 헤더 (예: "Private IP")
        attr: 행 속성 이름이자 JSON 키 (예: "private_ip_address")
        kind: 값 종류
        sort_key: 정렬 키 (None이면 정렬 불가)
        record: kind가 RECORD일 때 중첩 스키마
    """

    header: str
    attr: str
    kind: ValueKind = ValueKind.SCALAR
    sort_key: str | None = None
    record: RowSchema | None = None


class RowSchema:
    """행 타입의 컬럼 선언 (생성 후 불변)

    정렬 키 테이블은 생성 시 한 번 계산되며 중첩 레코드의 정렬 키도 포함합니다.

    Raises:
        ValueError: 중복 속성/정렬 키, 정렬할 수 없는 컬럼의 정렬 키,
            중첩 스키마가 없는 RECORD 컬럼
    """

    def __init__(self, row_type: type, columns: Sequence[Column]):
        self._row_type = row_type
        self._columns = tuple(columns)
        self._sort_paths: dict[str, tuple[str, ...]] = {}

        attrs = [c.attr for c in self._columns]
        if len(set(attrs)) != len(attrs):
            raise ValueError(f"duplicate column attribute in {row_type.__name__}")

        for column in self._columns:
            if column.kind is ValueKind.RECORD:
                if column.record is None:
                    raise ValueError(f"record column {column.attr} has no schema")
                for key, path in column.record.sort_paths.items():
                    self._add_sort_key(key, (column.attr, *path))
            if column.sort_key is None:
                continue
            if column.kind not in (ValueKind.SCALAR, ValueKind.LIST):
                raise ValueError(f"column {column.attr} ({column.kind.value}) cannot be sorted")
            self._add_sort_key(column.sort_key, (column.attr,))

    def _add_sort_key(self, key: str, path: tuple[str, ...]) -> None:
        if key in self._sort_paths:
            raise ValueError(f"duplicate sort key: {key}")
        self._sort_paths[key] = path

    def __repr__(self) -> str:
        return f"RowSchema({self._row_type.__name__}, {[c.attr for c in self._columns]})"

    # -------------------------------------------------------------------------
    # 조회
    # -------------------------------------------------------------------------

    @property
    def row_type(self) -> type:
        return self._row_type

    @property
    def columns(self) -> tuple[Column, ...]:
        return self._columns

    @property
    def sort_paths(self) -> dict[str, tuple[str, ...]]:
        return dict(self._sort_paths)

    def sort_keys(self) -> list[str]:
        """정렬 키 목록 (알파벳 순)"""
        return sorted(self._sort_paths)

    def resolve_sort(self, sort_field: str) -> tuple[str, ...] | None:
        """정렬 키 -> 속성 경로 (없으면 None)

        밑줄 표기(private_ip)도 하이픈 표기(private-ip)와 같은 키로 취급합니다.
        """
        return self._sort_paths.get(sort_field.replace("_", "-"))

    def visible_columns(self, show_tags: bool) -> list[Column]:
        """테이블에 표시할 컬럼 (LABELS 컬럼은 show_tags일 때만)"""
        return [c for c in self._columns if show_tags or c.kind is not ValueKind.LABELS]

    def headers(self, show_tags: bool = False) -> list[str]:
        return [c.header for c in self.visible_columns(show_tags)]

    @staticmethod
    def value_at(row: Any, path: Sequence[str]) -> Any:
        """속성 경로를 따라 값 조회"""
        value = row
        for attr in path:
            value = getattr(value, attr)
        return value

    @staticmethod
    def sort_text(value: Any) -> str:
        """정렬 비교용 문자열 (목록은 정렬 후 ','로 연결)"""
        if value is None:
            return ""
        if isinstance(value, (list, tuple)):
            return ",".join(sorted(str(v) for v in value))
        return str(value)

    # -------------------------------------------------------------------------
    # JSON 변환
    # -------------------------------------------------------------------------

    def to_dict(self, row: Any) -> dict[str, Any]:
        """행을 JSON용 딕셔너리로 변환 (빈 값은 생략)"""
        data: dict[str, Any] = {}
        for column in self._columns:
            value = getattr(row, column.attr)
            if column.kind is ValueKind.RECORD:
                assert column.record is not None
                data[column.attr] = column.record.to_dict(value)
                continue
            if value is None or value == "" or value == [] or value == {}:
                continue
            if column.kind is ValueKind.LIST:
                value = list(value)
            elif column.kind is ValueKind.LABELS:
                value = dict(value)
            data[column.attr] = value
        return data

    def from_dict(self, data: dict[str, Any]) -> Any:
        """to_dict의 역변환 (생략된 값은 행 타입의 기본값)"""
        kwargs: dict[str, Any] = {}
        for column in self._columns:
            if column.attr not in data:
                continue
            value = data[column.attr]
            if column.kind is ValueKind.RECORD:
                assert column.record is not None
                kwargs[column.attr] = column.record.from_dict(value or {})
            elif column.kind is ValueKind.LIST:
                kwargs[column.attr] = [str(v) for v in value or []]
            elif column.kind is ValueKind.LABELS:
                kwargs[column.attr] = {str(k): str(v) for k, v in (value or {}).items()}
            else:
                kwargs[column.attr] = "" if value is None else str(value)
        return self._row_type(**kwargs)
