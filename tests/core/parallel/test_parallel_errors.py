"""
tests/core/parallel/test_parallel_errors.py - core/parallel/errors.py 테스트
"""

import pytest
from botocore.exceptions import ClientError, ConnectTimeoutError, EndpointConnectionError, ReadTimeoutError

from core.exceptions import APICallError
from core.parallel.errors import categorize_error, categorize_error_code, describe_task_error, get_error_code
from core.parallel.types import ErrorCategory, ParallelExecutionResult


def _client_error(code, message="Test error", operation="DescribeInstances"):
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


class TestErrorCategory:
    """ErrorCategory 열거형 테스트"""

    def test_all_categories_exist(self):
        """모든 카테고리 존재 확인"""
        assert ErrorCategory.ACCESS_DENIED.value == "access_denied"
        assert ErrorCategory.NOT_FOUND.value == "not_found"
        assert ErrorCategory.THROTTLING.value == "throttling"
        assert ErrorCategory.TIMEOUT.value == "timeout"
        assert ErrorCategory.NETWORK.value == "network"
        assert ErrorCategory.UNKNOWN.value == "unknown"


class TestCategorizeErrorCode:
    """categorize_error_code 테스트"""

    @pytest.mark.parametrize(
        "code,expected",
        [
            ("AccessDenied", ErrorCategory.ACCESS_DENIED),
            ("UnauthorizedOperation", ErrorCategory.ACCESS_DENIED),
            ("InvalidInstanceID.NotFound", ErrorCategory.NOT_FOUND),
            ("RequestLimitExceeded", ErrorCategory.THROTTLING),
            ("ExpiredToken", ErrorCategory.EXPIRED_TOKEN),
            ("RequestTimeout", ErrorCategory.TIMEOUT),
            ("InvalidParameterValue", ErrorCategory.INVALID_REQUEST),
            ("InternalError", ErrorCategory.SERVICE_ERROR),
            ("SomethingElse", ErrorCategory.UNKNOWN),
        ],
    )
    def test_codes(self, code, expected):
        assert categorize_error_code(code) == expected


class TestCategorizeError:
    """categorize_error 테스트"""

    def test_client_error(self):
        assert categorize_error(_client_error("Throttling")) == ErrorCategory.THROTTLING
        assert categorize_error(_client_error("AuthFailure")) == ErrorCategory.UNKNOWN

    def test_api_call_error(self):
        error = APICallError("ec2", "describe_instances", "UnauthorizedOperation", "denied")

        assert categorize_error(error) == ErrorCategory.ACCESS_DENIED

    def test_timeouts(self):
        assert categorize_error(ReadTimeoutError(endpoint_url="https://ec2")) == ErrorCategory.TIMEOUT
        assert categorize_error(ConnectTimeoutError(endpoint_url="https://ec2")) == ErrorCategory.TIMEOUT

    def test_network(self):
        assert categorize_error(EndpointConnectionError(endpoint_url="https://ec2")) == ErrorCategory.NETWORK

    def test_unknown(self):
        assert categorize_error(ValueError("x")) == ErrorCategory.UNKNOWN


class TestDescribeTaskError:
    """작업 실패 메시지 테스트"""

    def test_client_error_message(self):
        assert describe_task_error(_client_error("AuthFailure", "bad")) == "DescribeInstances failed (AuthFailure): bad"

    def test_api_call_error_message(self):
        error = APICallError.from_client_error("ec2", "describe_instances", _client_error("AuthFailure", "bad"))

        assert describe_task_error(error) == "ec2.describe_instances failed (AuthFailure): bad"

    def test_plain_exception(self):
        assert describe_task_error(RuntimeError("boom")) == "boom"
        assert describe_task_error(RuntimeError()) == "RuntimeError"

    def test_get_error_code(self):
        assert get_error_code(_client_error("AuthFailure")) == "AuthFailure"
        assert get_error_code(APICallError("ec2", "op", "Throttling")) == "Throttling"
        assert get_error_code(KeyError("x")) == "KeyError"


class TestParallelExecutionResult:
    def test_error_count(self):
        assert ParallelExecutionResult(total=5, succeeded=2, failed=2, timed_out=1).error_count == 3
