# core/auth/session.py
"""
(프로파일, 리전)별 boto3 세션과 인증 프로브

boto3.Session 생성은 스레드 세이프하지 않으므로 잠금 안에서 생성하고,
한 번의 실행 동안 (프로파일, 리전)별로 재사용합니다.
"""

from __future__ import annotations

import logging
import threading

import boto3
from botocore.exceptions import BotoCoreError, ProfileNotFound

from core.exceptions import SessionError
from core.parallel.client import get_client

logger = logging.getLogger(__name__)

_session_cache: dict[tuple[str, str], boto3.Session] = {}
_cache_lock = threading.Lock()


def get_session(profile: str, region: str) -> boto3.Session:
    """캐시된 boto3 세션 반환 (없으면 생성)

    Raises:
        SessionError: 프로파일을 찾을 수 없거나 세션 생성 실패
    """
    key = (profile, region)
    with _cache_lock:
        session = _session_cache.get(key)
        if session is not None:
            return session
        try:
            session = boto3.Session(profile_name=profile, region_name=region)
        except ProfileNotFound as e:
            raise SessionError(profile, region, f"profile {profile} not found", cause=e) from e
        except BotoCoreError as e:
            raise SessionError(profile, region, "cannot create session", cause=e) from e
        _session_cache[key] = session
        logger.debug(f"세션 생성 [{profile}/{region}]")
        return session


def who_am_i(session: boto3.Session) -> str:
    """STS GetCallerIdentity로 계정 ID 확인 (실패 시 예외 전파)"""
    sts = get_client(session, "sts", region_name=session.region_name)
    identity = sts.get_caller_identity()
    return str(identity["Account"])


def clear_cache() -> None:
    """세션 캐시 초기화"""
    with _cache_lock:
        _session_cache.clear()
