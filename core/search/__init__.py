"""
core/search - 멀티 프로파일/리전 리소스 검색

주요 구성 요소:
- FilterSet / compile_filters: 사용자 필터 -> AWS API 조건
- RowSchema / Column: 리소스 종류별 행 선언
- sort_rows: 정렬 키 기반 안정 정렬
- ResultSet: (프로파일, 리전) 하나의 결과
- ResourceKind / ResourceRegistry: 리소스 종류 등록
- SearchCoordinator: 병렬 검색 실행
- ResultRenderer / RenderOptions: 테이블/JSON 출력

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
"""

__all__ = [
    "FilterSet",
    "FilterField",
    "CompiledQuery",
    "compile_filters",
    "Column",
    "RowSchema",
    "ValueKind",
    "sort_rows",
    "ResultSet",
    "ResourceKind",
    "ResourceRegistry",
    "get_registry",
    "SearchCoordinator",
    "RenderOptions",
    "ResultRenderer",
    "valid_outputs",
]

_IMPORT_MAPPING = {
    "FilterSet": (".filters", "FilterSet"),
    "FilterField": (".filters", "FilterField"),
    "CompiledQuery": (".filters", "CompiledQuery"),
    "compile_filters": (".filters", "compile_filters"),
    "Column": (".schema", "Column"),
    "RowSchema": (".schema", "RowSchema"),
    "ValueKind": (".schema", "ValueKind"),
    "sort_rows": (".sorting", "sort_rows"),
    "ResultSet": (".results", "ResultSet"),
    "ResourceKind": (".registry", "ResourceKind"),
    "ResourceRegistry": (".registry", "ResourceRegistry"),
    "get_registry": (".registry", "get_registry"),
    "SearchCoordinator": (".coordinator", "SearchCoordinator"),
    "RenderOptions": (".render", "RenderOptions"),
    "ResultRenderer": (".render", "ResultRenderer"),
    "valid_outputs": (".render", "valid_outputs"),
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
