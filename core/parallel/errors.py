"""
core/parallel/errors.py - 작업 에러 분류

병렬 작업에서 발생한 예외를 ErrorCategory로 분류하고,
ResultSet.errors에 기록할 메시지로 변환합니다.

주요 구성 요소:
- categorize_error_code: 에러 코드 문자열 기반 분류
- categorize_error: 예외 객체 기반 분류
- get_error_code: 예외에서 에러 코드 추출
- describe_task_error: 작업 실패 메시지 생성

Example:
    try:
        rows = kind.query(session, region, query)
    except Exception as e:
        logger.warning(f"[{get_error_code(e)}] {categorize_error(e).value}")
        result.errors.append(describe_task_error(e))
"""

from __future__ import annotations

from botocore.exceptions import ClientError, ConnectTimeoutError, EndpointConnectionError, ReadTimeoutError

from core.exceptions import format_error_for_user, is_access_denied, is_not_found, is_throttling

from .types import ErrorCategory


def categorize_error_code(error_code: str) -> ErrorCategory:
    """에러 코드 문자열을 기반으로 ErrorCategory 분류

    Args:
        error_code: AWS 에러 코드 문자열 (예: "AccessDenied", "ThrottlingException")

    Returns:
        분류된 에러 카테고리. 매칭되는 키워드가 없으면 UNKNOWN 반환.
    """
    code = error_code.lower()

    if any(x in code for x in ["accessdenied", "unauthorized", "forbidden"]):
        return ErrorCategory.ACCESS_DENIED
    if any(x in code for x in ["notfound", "nosuch", "doesnotexist"]):
        return ErrorCategory.NOT_FOUND
    if any(x in code for x in ["throttl", "ratelimit", "toomanyrequests", "requestlimitexceeded"]):
        return ErrorCategory.THROTTLING
    if any(x in code for x in ["expiredtoken"]):
        return ErrorCategory.EXPIRED_TOKEN
    if any(x in code for x in ["timeout", "timedout"]):
        return ErrorCategory.TIMEOUT
    if any(x in code for x in ["invalid", "validation", "malformed"]):
        return ErrorCategory.INVALID_REQUEST
    if any(x in code for x in ["internal", "serviceunavailable", "serviceerror"]):
        return ErrorCategory.SERVICE_ERROR

    return ErrorCategory.UNKNOWN


def categorize_error(error: BaseException) -> ErrorCategory:
    """예외 객체를 분석하여 ErrorCategory로 분류

    Args:
        error: 분류할 예외

    Returns:
        에러 카테고리
    """
    if isinstance(error, Exception):
        if is_throttling(error):
            return ErrorCategory.THROTTLING
        if is_access_denied(error):
            return ErrorCategory.ACCESS_DENIED
        if is_not_found(error):
            return ErrorCategory.NOT_FOUND

    if isinstance(error, ClientError):
        return categorize_error_code(error.response.get("Error", {}).get("Code", ""))

    # botocore 타임아웃은 ConnectionError 계열이므로 먼저 확인
    if isinstance(error, (ConnectTimeoutError, ReadTimeoutError, TimeoutError)):
        return ErrorCategory.TIMEOUT
    if isinstance(error, (EndpointConnectionError, ConnectionError, OSError)):
        return ErrorCategory.NETWORK

    return ErrorCategory.UNKNOWN


def get_error_code(error: BaseException) -> str:
    """예외 객체에서 에러 코드 문자열 추출

    ClientError의 경우 response에서 Code를 추출하고,
    그 외에는 예외 클래스명을 반환합니다.
    """
    response = getattr(error, "response", None)
    if isinstance(response, dict):
        code: str = response.get("Error", {}).get("Code", "Unknown")
        return code
    error_code = getattr(error, "error_code", None)
    if error_code:
        return str(error_code)
    return error.__class__.__name__


def describe_task_error(error: BaseException) -> str:
    """작업 실패를 ResultSet.errors에 기록할 한 줄 메시지로 변환"""
    if isinstance(error, Exception):
        return format_error_for_user(error)
    return error.__class__.__name__
