"""
core/exceptions.py - 통합 예외 계층 구조

awss 전체에서 사용되는 예외 클래스들을 정의합니다.
검증/컴파일/인증 실패는 검색 시작 전에 발생하는 치명적 오류이고,
프로파일 x 리전 단위 작업의 실패는 ResultSet.errors로 기록됩니다.

예외 계층 구조:
    AwssError (베이스)
    ├── ConfigError (설정 파일/환경 변수)
    ├── ValidationError (입력 검증)
    │   ├── FilterError (필터 컴파일)
    │   └── SortFieldError (정렬 필드)
    ├── AuthError (인증)
    │   ├── ProbeError (사전 인증 프로브)
    │   └── SessionError (세션 생성)
    └── APICallError (AWS API 호출)

Usage:
    from core.exceptions import APICallError

    try:
        result = ec2.describe_instances()
    except ClientError as e:
        raise APICallError.from_client_error("ec2", "describe_instances", e) from e
"""

from __future__ import annotations

from typing import Any

# =============================================================================
# 베이스 예외
# =============================================================================


class AwssError(Exception):
    """awss 기본 예외 클래스

    모든 커스텀 예외의 베이스 클래스입니다.

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# 설정 관련 예외
# =============================================================================


class ConfigError(AwssError):
    """설정 관련 예외"""

    def __init__(
        self,
        key: str,
        message: str,
        cause: Exception | None = None,
    ):
        super().__init__(f"config error [{key}]: {message}", cause)
        self.config_key = key
        self.details["config_key"] = key


# =============================================================================
# 입력 검증 관련 예외
# =============================================================================


class ValidationError(AwssError):
    """입력 검증 오류

    field를 지정하면 details에 기록됩니다. 메시지는 그대로 사용자에게 표시됩니다.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        cause: Exception | None = None,
    ):
        super().__init__(message, cause)
        self.field = field
        self.value = value
        if field:
            self.details.update({"field": field, "value": str(value)})


class FilterError(ValidationError):
    """필터 컴파일 오류 (잘못된 태그, 가용 영역, IP 등)"""


class SortFieldError(ValidationError):
    """알 수 없는 정렬 필드

    Attributes:
        sort_field: 요청된 정렬 필드
        options: 허용되는 정렬 필드 (알파벳 순)
    """

    def __init__(self, sort_field: str, options: list[str]):
        message = f"invalid sort field: {sort_field}. The options are: {', '.join(options)}"
        super().__init__(message, field="sort", value=sort_field)
        self.sort_field = sort_field
        self.options = options


# =============================================================================
# 인증 관련 예외
# =============================================================================


class AuthError(AwssError):
    """인증 관련 예외"""


class ProbeError(AuthError):
    """사전 인증 프로브 실패

    첫 번째 (프로파일, 리전) 쌍의 자격 증명이 유효하지 않으면 발생합니다.
    """

    def __init__(self, profile: str, region: str, cause: Exception | None = None):
        super().__init__(f"authentication probe failed [{profile}/{region}]", cause)
        self.profile = profile
        self.region = region
        self.details.update({"profile": profile, "region": region})


class SessionError(AuthError):
    """세션 생성/관리 관련 예외"""

    def __init__(
        self,
        profile: str,
        region: str,
        message: str,
        cause: Exception | None = None,
    ):
        super().__init__(f"session error [{profile}/{region}]: {message}", cause)
        self.profile = profile
        self.region = region
        self.details.update({"profile": profile, "region": region})


# =============================================================================
# AWS API 호출 관련 예외
# =============================================================================


class APICallError(AwssError):
    """AWS API 호출 관련 예외

    boto3/botocore의 ClientError를 래핑하여 일관된 메시지를 제공합니다.
    """

    def __init__(
        self,
        service: str,
        operation: str,
        error_code: str | None = None,
        error_message: str | None = None,
        cause: Exception | None = None,
    ):
        message = f"{service}.{operation}"
        if error_code:
            message = f"{message} failed ({error_code})"
        else:
            message = f"{message} failed"
        if error_message:
            message = f"{message}: {error_message}"

        super().__init__(message, cause)
        self.service = service
        self.operation = operation
        self.error_code = error_code
        self.error_message = error_message
        self.details.update(
            {
                "service": service,
                "operation": operation,
                "error_code": error_code,
            }
        )

    def __str__(self) -> str:
        # ClientError 내용은 이미 message에 포함됨
        return self.message

    @classmethod
    def from_client_error(
        cls,
        service: str,
        operation: str,
        client_error: Exception,
    ) -> APICallError:
        """botocore.exceptions.ClientError로부터 생성

        Args:
            service: AWS 서비스 이름
            operation: API 작업 이름
            client_error: ClientError 예외

        Returns:
            APICallError 인스턴스
        """
        error_code = None
        error_message = None

        response = getattr(client_error, "response", None)
        if isinstance(response, dict):
            error_info = response.get("Error", {})
            error_code = error_info.get("Code")
            error_message = error_info.get("Message")

        return cls(
            service=service,
            operation=operation,
            error_code=error_code,
            error_message=error_message,
            cause=client_error,
        )


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================

_ACCESS_DENIED_CODES = {
    "AccessDenied",
    "AccessDeniedException",
    "UnauthorizedAccess",
    "UnauthorizedOperation",
}

_THROTTLING_CODES = {
    "Throttling",
    "ThrottlingException",
    "RequestLimitExceeded",
    "TooManyRequestsException",
    "RateExceeded",
}

_NOT_FOUND_CODES = {
    "InvalidInstanceID.NotFound",
    "InvalidInstanceID.Malformed",
    "InvalidNetworkInterfaceID.NotFound",
    "InvalidNetworkInterfaceID.Malformed",
}


def _error_code(error: Exception) -> str | None:
    if isinstance(error, APICallError):
        return error.error_code
    response = getattr(error, "response", None)
    if isinstance(response, dict):
        return response.get("Error", {}).get("Code", "")
    return None


def is_access_denied(error: Exception) -> bool:
    """액세스 거부 오류인지 확인

    Args:
        error: 확인할 예외

    Returns:
        액세스 거부 오류이면 True
    """
    return _error_code(error) in _ACCESS_DENIED_CODES


def is_throttling(error: Exception) -> bool:
    """스로틀링 오류인지 확인"""
    return _error_code(error) in _THROTTLING_CODES


def is_not_found(error: Exception) -> bool:
    """ID로 조회한 리소스가 없는 오류인지 확인"""
    return _error_code(error) in _NOT_FOUND_CODES


def format_error_for_user(error: Exception) -> str:
    """사용자에게 표시할 에러 메시지 포맷팅

    Args:
        error: 예외

    Returns:
        ResultSet.errors 또는 stderr에 기록할 한 줄 메시지
    """
    if isinstance(error, AwssError):
        return str(error)

    # boto3 ClientError
    response = getattr(error, "response", None)
    if isinstance(response, dict):
        error_info = response.get("Error", {})
        code = error_info.get("Code", "UnknownError")
        message = error_info.get("Message", str(error))
        operation = getattr(error, "operation_name", None)
        if operation:
            return f"{operation} failed ({code}): {message}"
        return f"{code}: {message}"

    return str(error) or error.__class__.__name__
