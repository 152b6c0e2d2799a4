"""
tests/core/search/test_search_render.py - 결과 출력 테스트
"""

import io
import json
import queue
import threading

import pytest

from core.exceptions import ValidationError
from core.search.render import (
    RenderOptions,
    ResultRenderer,
    format_labels,
    format_list,
    format_record,
    format_title,
    valid_outputs,
)
from core.search.results import ResultSet
from plugins.ec2.instances import INSTANCE_SCHEMA, InstanceRow
from plugins.ec2.network_interfaces import INTERFACE_INFO_SCHEMA, InterfaceInfo


def _result(data=None, errors=None, sort_field="name"):
    return ResultSet(profile="dev", region="us-east-1", data=data or [], errors=errors or [], sort_field=sort_field)


def _renderer(output="table", **kwargs):
    out = io.StringIO()
    err = io.StringIO()
    renderer = ResultRenderer(INSTANCE_SCHEMA, RenderOptions(output=output, **kwargs), out=out, err=err, width=200)
    return renderer, out, err


class TestRenderOptions:
    """RenderOptions 테스트"""

    def test_valid_outputs(self):
        assert valid_outputs() == ["json", "json-pretty", "table"]

    def test_invalid_output(self):
        with pytest.raises(ValidationError, match="invalid output: yaml"):
            RenderOptions(output="yaml")


class TestCellFormatting:
    """셀 포맷팅 테스트"""

    def test_labels_sorted_by_key(self):
        assert format_labels({"b": "2", "a": "1"}).plain == "a: 1\nb: 2"

    def test_list_sorted(self):
        assert format_list(["10.0.0.2", "10.0.0.1"]).plain == "10.0.0.1\n10.0.0.2"

    def test_record_skips_empty(self):
        """중첩 레코드는 선언 순서, 빈 값 생략"""
        info = InterfaceInfo(network_interface_id="eni-1", status="in-use")

        assert format_record(info, INTERFACE_INFO_SCHEMA).plain == "ID: eni-1\nStatus: in-use"

    def test_title(self):
        assert format_title(_result()).plain == "[Profile] dev [Region] us-east-1 [Sort] name"

    def test_title_without_sort(self):
        assert format_title(_result(sort_field=None)).plain == "[Profile] dev [Region] us-east-1"

    def test_title_with_errors(self):
        title = format_title(_result(errors=["e1", "e2"]))

        assert title.plain.endswith("\n\ne1\ne2")


class TestResultRenderer:
    """ResultRenderer 테스트"""

    def test_empty_result_skipped(self):
        """행도 오류도 없으면 생략"""
        renderer, out, _ = _renderer("json")

        assert renderer.write(_result()) is False
        assert out.getvalue() == ""
        assert renderer.rendered == 0

    def test_empty_result_with_show_empty(self):
        renderer, out, _ = _renderer("json", show_empty=True)

        assert renderer.write(_result())
        assert json.loads(out.getvalue()) == {"profile": "dev", "region": "us-east-1", "data": []}

    @pytest.mark.parametrize("output", ["table", "json", "json-pretty"])
    def test_error_result_without_rows_skipped(self, output):
        """행이 없으면 오류가 있어도 생략"""
        renderer, out, _ = _renderer(output)

        assert renderer.write(_result(errors=["boom"])) is False
        assert out.getvalue() == ""

    def test_error_result_with_show_empty(self):
        renderer, out, _ = _renderer("json", show_empty=True)

        renderer.write(_result(errors=["ec2.describe_instances failed (AuthFailure): denied"]))

        assert json.loads(out.getvalue())["errors"] == ["ec2.describe_instances failed (AuthFailure): denied"]

    def test_json_single_line(self):
        renderer, out, _ = _renderer("json")

        renderer.write(_result([InstanceRow(instance_id="i-1", instance_name="web")]))

        text = out.getvalue()
        assert text.count("\n") == 1
        assert json.loads(text)["data"] == [{"instance_id": "i-1", "instance_name": "web"}]

    def test_json_pretty(self):
        renderer, out, _ = _renderer("json-pretty")

        renderer.write(_result([InstanceRow(instance_id="i-1")]))

        assert '\n  "profile": "dev"' in out.getvalue()

    def test_table(self):
        renderer, out, _ = _renderer("table")

        renderer.write(_result([InstanceRow(instance_id="i-1", instance_name="web", tags={"Env": "prod"})]))

        text = out.getvalue()
        assert "[Profile] dev [Region] us-east-1 [Sort] name" in text
        assert "i-1" in text
        assert "Private IP" in text
        assert "Tags" not in text

    def test_table_with_tags(self):
        renderer, out, _ = _renderer("table", show_tags=True)

        renderer.write(_result([InstanceRow(instance_id="i-1", tags={"Env": "prod"})]))

        assert "Env: prod" in out.getvalue()

    def test_consume_until_sentinel(self):
        """None을 받을 때까지 출력 후 done 설정"""
        renderer, out, _ = _renderer("json")
        results: queue.Queue = queue.Queue()
        done = threading.Event()
        for i in range(3):
            results.put(ResultSet(profile=f"p{i}", region="us-east-1", data=[InstanceRow(instance_id=f"i-{i}")]))
        results.put(None)

        renderer.consume(results, done)

        assert done.is_set()
        assert renderer.rendered == 3
        assert [json.loads(line)["profile"] for line in out.getvalue().splitlines()] == ["p0", "p1", "p2"]

    def test_consume_continues_after_render_error(self):
        """ResultSet 하나의 출력 실패는 나머지에 영향 없음"""
        renderer, out, err = _renderer("json")
        results: queue.Queue = queue.Queue()
        done = threading.Event()
        results.put(ResultSet(profile="bad", region="us-east-1", data=[object()]))
        results.put(ResultSet(profile="good", region="us-east-1", data=[InstanceRow(instance_id="i-1")]))
        results.put(None)

        renderer.consume(results, done)

        assert done.is_set()
        assert "error rendering bad/us-east-1" in err.getvalue()
        assert json.loads(out.getvalue())["profile"] == "good"
