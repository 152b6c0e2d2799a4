# core/auth/__init__.py
"""
AWS 인증 모듈 (core/auth)

프로파일 목록 확인, (프로파일, 리전)별 boto3 세션 생성, 인증 프로브를 제공합니다.

사용 예시:
    from core.auth import get_session, resolve_profiles, who_am_i

    profiles = resolve_profiles(["all"])
    session = get_session(profiles[0], "us-east-1")
    account_id = who_am_i(session)

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
    실제 사용 시점에만 하위 모듈이 로드되어 CLI 시작 시간을 최적화합니다.
"""

__all__ = [
    # Profiles
    "Loader",
    "list_profiles",
    "resolve_profiles",
    # Session 헬퍼
    "get_session",
    "who_am_i",
    "clear_cache",
]

# Lazy import 매핑 테이블
_IMPORT_MAPPING = {
    "Loader": (".profiles", "Loader"),
    "list_profiles": (".profiles", "list_profiles"),
    "resolve_profiles": (".profiles", "resolve_profiles"),
    "get_session": (".session", "get_session"),
    "who_am_i": (".session", "who_am_i"),
    "clear_cache": (".session", "clear_cache"),
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드

    CLI 시작 시간 최적화를 위해 무거운 의존성(boto3 등)을
    실제 필요한 시점에만 로드합니다.
    """
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
