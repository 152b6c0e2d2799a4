"""
core/parallel/client.py - boto3 client 생성 헬퍼

타임아웃과 연결 풀이 설정된 boto3 client를 생성합니다.
검색 작업은 재시도하지 않으므로 기본 시도 횟수는 1회이며,
응답 없는 엔드포인트는 connect/read 타임아웃으로 끊어냅니다.

Example:
    from core.parallel.client import get_client

    ec2 = get_client(session, "ec2", region_name="ap-northeast-2")

    # 커스텀 설정
    ec2 = get_client(session, "ec2", read_timeout=60)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal, cast

from botocore.config import Config

from core.config import settings

if TYPE_CHECKING:
    import boto3

RetryMode = Literal["legacy", "standard", "adaptive"]

DEFAULT_MAX_ATTEMPTS = 1
DEFAULT_RETRY_MODE: RetryMode = "standard"
DEFAULT_MAX_POOL_CONNECTIONS = 10  # 세션 하나는 (프로파일, 리전) 작업 하나가 사용


def build_client_config(
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    retry_mode: RetryMode = DEFAULT_RETRY_MODE,
    connect_timeout: int | None = None,
    read_timeout: int | None = None,
    max_pool_connections: int = DEFAULT_MAX_POOL_CONNECTIONS,
) -> Config:
    """botocore Config 생성

    Args:
        max_attempts: 최대 시도 횟수 (기본: 1, 재시도 없음)
        retry_mode: 재시도 모드
        connect_timeout: 연결 타임아웃 (초, None이면 settings 기본값)
        read_timeout: 읽기 타임아웃 (초, None이면 settings 기본값)
        max_pool_connections: HTTP 연결 풀 크기

    Returns:
        botocore.config.Config
    """
    return Config(
        retries={"max_attempts": max_attempts, "mode": retry_mode},  # pyright: ignore[reportArgumentType]
        connect_timeout=connect_timeout if connect_timeout is not None else settings.API_CONNECT_TIMEOUT,
        read_timeout=read_timeout if read_timeout is not None else settings.API_READ_TIMEOUT,
        max_pool_connections=max_pool_connections,
    )


def get_client(
    session: boto3.Session,
    service_name: str,
    region_name: str | None = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    connect_timeout: int | None = None,
    read_timeout: int | None = None,
    **kwargs: Any,
) -> Any:
    """타임아웃이 적용된 boto3 client 생성

    Args:
        session: boto3 Session
        service_name: AWS 서비스 이름 (ec2, sts 등)
        region_name: 리전 (None이면 세션 기본값)
        max_attempts: 최대 시도 횟수
        connect_timeout: 연결 타임아웃 (초)
        read_timeout: 읽기 타임아웃 (초)
        **kwargs: session.client()에 전달할 추가 인자

    Returns:
        boto3 client
    """
    config = build_client_config(
        max_attempts=max_attempts,
        connect_timeout=connect_timeout,
        read_timeout=read_timeout,
    )

    # 기존 config가 있으면 병합
    if "config" in kwargs:
        existing = kwargs.pop("config")
        config = config.merge(existing)

    # cast to Any to bypass boto3-stubs Literal type requirements
    return session.client(  # pyright: ignore[reportCallIssue]
        cast(Any, service_name),
        region_name=region_name,
        config=config,
        **kwargs,
    )
