"""
plugins - 검색 가능한 리소스 종류

각 하위 패키지는 CATEGORY와 RESOURCES를 정의하고,
RESOURCES의 각 모듈은 RESOURCE(ResourceKind 인스턴스)를 노출합니다.
"""
