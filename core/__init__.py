# core/__init__.py
"""
core - awss 인프라

검색 엔진과 그 주변 인프라를 포함하는 최상위 패키지입니다.

아키텍처:
    core/
    ├── auth/           # 프로파일 목록, 세션, 인증 프로브
    ├── parallel/       # 병렬 실행기, client 팩토리, 에러 분류
    ├── region/         # 리전 데이터 및 가용성
    ├── search/         # 필터 컴파일, 행 스키마, 정렬, 코디네이터, 출력
    ├── config.py       # 기본값, 설정 파일, 로깅
    └── exceptions.py   # 통합 예외 계층

Usage:
    from core.search import FilterSet, RenderOptions, SearchCoordinator

    SearchCoordinator().execute(
        "instances", ["default"], ["us-east-1"], FilterSet({"names": ["web"]}), "name", RenderOptions()
    )
"""
