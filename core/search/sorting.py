"""
core/search/sorting.py - 행 정렬

스키마에 선언된 정렬 키로 행 목록을 안정 정렬(오름차순)합니다.
비교는 해석된 값의 문자열 표현으로 합니다.
"""

from __future__ import annotations

from typing import Any

from core.exceptions import SortFieldError

from .schema import RowSchema


def sort_fields(schema: RowSchema) -> list[str]:
    """허용되는 정렬 키 목록 (알파벳 순)"""
    return schema.sort_keys()


def validate_sort_field(schema: RowSchema, sort_field: str | None) -> tuple[str, ...] | None:
    """정렬 키를 속성 경로로 해석

    Returns:
        속성 경로. sort_field가 비어 있으면 None

    Raises:
        SortFieldError: 스키마에 없는 정렬 키
    """
    if not sort_field:
        return None
    path = schema.resolve_sort(sort_field)
    if path is None:
        raise SortFieldError(sort_field, sort_fields(schema))
    return path


def sort_rows(rows: list[Any], sort_field: str | None, schema: RowSchema) -> list[Any]:
    """행 목록을 제자리에서 안정 정렬

    Args:
        rows: 정렬할 행 목록 (변경됨)
        sort_field: 정렬 키 (비어 있으면 정렬하지 않음)
        schema: 행 스키마

    Returns:
        같은 리스트 객체

    Raises:
        SortFieldError: 알 수 없는 정렬 키
    """
    path = validate_sort_field(schema, sort_field)
    if path is None or len(rows) < 2:
        return rows
    rows.sort(key=lambda row: RowSchema.sort_text(RowSchema.value_at(row, path)))
    return rows
