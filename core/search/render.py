"""
core/search/render.py - 검색 결과 출력

ResultSet 스트림을 단일 소비자 스레드에서 받아 테이블(rich) 또는 JSON으로 출력합니다.
출력 형식은 이름 -> 포맷 함수 레지스트리(OUTPUTS)로 관리합니다.

출력 규칙:
    - 행이 없는 ResultSet은 show_empty가 아니면 생략 (오류가 있어도 동일, 모든 형식)
    - table: 제목 "[Profile] p [Region] r [Sort] s" + 오류 목록, 행 사이 구분선
    - json: 한 줄 JSON, json-pretty: 2칸 들여쓰기

Example:
    renderer = ResultRenderer(kind.schema, RenderOptions(output="table", show_tags=True))
    thread = threading.Thread(target=renderer.consume, args=(queue, done))
"""

from __future__ import annotations

import json
import logging
import queue
import sys
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TextIO

from rich.console import Console
from rich.table import Table
from rich.text import Text

from core.exceptions import ValidationError

from .results import ResultSet
from .schema import Column, RowSchema, ValueKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderOptions:
    """출력 옵션

    Attributes:
        output: 출력 형식 (json, json-pretty, table)
        show_empty: 빈 결과도 출력
        show_tags: 테이블에 태그 컬럼 표시
    """

    output: str = "table"
    show_empty: bool = False
    show_tags: bool = False

    def __post_init__(self) -> None:
        if self.output not in OUTPUTS:
            raise ValidationError(
                f"invalid output: {self.output}. The options are: {', '.join(valid_outputs())}",
                field="output",
                value=self.output,
            )


# =============================================================================
# 셀 포맷팅
# =============================================================================


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == [] or value == {}


def _plain(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(sorted(str(v) for v in value))
    return str(value)


def format_labels(labels: dict[str, str]) -> Text:
    """키/값 매핑 -> 키 순으로 정렬된 "key: value" 줄 (키는 굵게)"""
    text = Text()
    for i, key in enumerate(sorted(labels)):
        if i:
            text.append("\n")
        text.append(key, style="bold")
        text.append(f": {labels[key]}")
    return text


def format_list(values: list[str]) -> Text:
    """목록 -> 오름차순 정렬된 값 한 줄씩"""
    return Text("\n".join(sorted(str(v) for v in values)))


def format_record(record: Any, schema: RowSchema) -> Text:
    """중첩 레코드 -> 선언 순서의 "header: value" 줄 (빈 값 생략)"""
    text = Text()
    first = True
    for column in schema.columns:
        value = getattr(record, column.attr)
        if _is_empty(value):
            continue
        if not first:
            text.append("\n")
        first = False
        text.append(column.header, style="bold")
        text.append(f": {_plain(value)}")
    return text


def format_cell(row: Any, column: Column) -> Text:
    """컬럼 종류에 맞게 셀 텍스트 생성"""
    value = getattr(row, column.attr)
    if column.kind is ValueKind.LABELS:
        return format_labels(value or {})
    if column.kind is ValueKind.LIST:
        return format_list(value or [])
    if column.kind is ValueKind.RECORD:
        assert column.record is not None
        return format_record(value, column.record)
    return Text(_plain(value))


def format_title(result_set: ResultSet) -> Text:
    """테이블 제목: [Profile] p [Region] r [Sort] s + 오류 목록"""
    title = Text()
    title.append("[Profile]", style="bold")
    title.append(f" {result_set.profile} ")
    title.append("[Region]", style="bold")
    title.append(f" {result_set.region}")
    if result_set.sort_field:
        title.append(" ")
        title.append("[Sort]", style="bold")
        title.append(f" {result_set.sort_field}")
    if result_set.errors:
        title.append("\n\n")
        title.append("\n".join(result_set.errors), style="red")
    return title


# =============================================================================
# 출력 형식
# =============================================================================


def to_table(result_set: ResultSet, schema: RowSchema, options: RenderOptions) -> Table:
    """ResultSet -> rich Table"""
    table = Table(
        title=format_title(result_set),
        title_justify="left",
        show_lines=True,
        header_style="bold",
    )
    columns = schema.visible_columns(options.show_tags)
    for column in columns:
        table.add_column(column.header, overflow="fold")
    for row in result_set.data:
        table.add_row(*(format_cell(row, column) for column in columns))
    return table


def to_json(result_set: ResultSet, schema: RowSchema, options: RenderOptions) -> str:
    """ResultSet -> 한 줄 JSON"""
    return json.dumps(result_set.to_dict(schema), ensure_ascii=False, separators=(",", ":"))


def to_json_pretty(result_set: ResultSet, schema: RowSchema, options: RenderOptions) -> str:
    """ResultSet -> 들여쓰기 JSON"""
    return json.dumps(result_set.to_dict(schema), ensure_ascii=False, indent=2)


OUTPUTS: dict[str, Callable[[ResultSet, RowSchema, RenderOptions], Any]] = {
    "json": to_json,
    "json-pretty": to_json_pretty,
    "table": to_table,
}


def valid_outputs() -> list[str]:
    """지원 출력 형식 (알파벳 순)"""
    return sorted(OUTPUTS)


# =============================================================================
# 렌더러
# =============================================================================


class ResultRenderer:
    """ResultSet 출력기 (단일 소비자)

    Args:
        schema: 행 스키마
        options: 출력 옵션
        out: 출력 스트림 (기본: stdout)
        err: 렌더링 오류 출력 스트림 (기본: stderr)
        width: 테이블 폭 (None이면 터미널 폭)
    """

    def __init__(
        self,
        schema: RowSchema,
        options: RenderOptions | None = None,
        out: TextIO | None = None,
        err: TextIO | None = None,
        width: int | None = None,
    ):
        self.schema = schema
        self.options = options or RenderOptions()
        self._out = out or sys.stdout
        self._err = err or sys.stderr
        self._console = Console(file=self._out, highlight=False, width=width)
        self.rendered = 0

    def should_render(self, result_set: ResultSet) -> bool:
        return bool(result_set.data) or self.options.show_empty

    def format(self, result_set: ResultSet) -> str | None:
        """ResultSet을 출력 문자열로 변환 (생략 대상이면 None)"""
        if not self.should_render(result_set):
            return None
        formatted = OUTPUTS[self.options.output](result_set, self.schema, self.options)
        if isinstance(formatted, str):
            return formatted + "\n"
        with self._console.capture() as capture:
            self._console.print(formatted)
            self._console.print()
        return capture.get()

    def write(self, result_set: ResultSet) -> bool:
        """ResultSet 하나를 출력. 출력했으면 True"""
        text = self.format(result_set)
        if text is None:
            logger.debug(f"빈 결과 생략 [{result_set.profile}/{result_set.region}]")
            return False
        self._out.write(text)
        self._out.flush()
        self.rendered += 1
        return True

    def consume(self, results: queue.Queue[ResultSet | None], done: threading.Event) -> None:
        """큐가 종료 신호(None)를 줄 때까지 출력하고 done 설정

        한 ResultSet의 출력 실패는 기록 후 계속 진행합니다.
        """
        try:
            while True:
                result_set = results.get()
                if result_set is None:
                    break
                try:
                    self.write(result_set)
                except Exception as e:
                    logger.error(f"출력 실패 [{result_set.profile}/{result_set.region}]: {e}")
                    self._err.write(f"error rendering {result_set.profile}/{result_set.region}: {e}\n")
        finally:
            done.set()
