# core/region - 리전 데이터 및 확인
"""
리전 모듈

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
"""

__all__ = ["ALL_REGIONS", "DEFAULT_ENABLED_REGIONS", "DEFAULT_REGION", "get_available_regions", "resolve_regions"]

_IMPORT_MAPPING = {
    "ALL_REGIONS": (".data", "ALL_REGIONS"),
    "DEFAULT_ENABLED_REGIONS": (".data", "DEFAULT_ENABLED_REGIONS"),
    "DEFAULT_REGION": (".data", "DEFAULT_REGION"),
    "get_available_regions": (".availability", "get_available_regions"),
    "resolve_regions": (".availability", "resolve_regions"),
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
