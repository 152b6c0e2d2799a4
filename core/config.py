"""
core/config.py - 전역 설정 및 설정 파일 로딩

불변 기본값(Settings), 로깅 설정(LogConfig), 설정 파일 + 환경 변수를
병합한 실행 설정(AppConfig)을 제공합니다.

우선순위:
    CLI 플래그 > 환경 변수(AWSS_*) > 설정 파일(~/.awss/config.yaml) > 기본값

설정 파일 예시 (~/.awss/config.yaml):
    profiles: [dev, prod]
    regions: [ap-northeast-2, us-east-1]
    output: table
    show-empty: false
    show-tags: true
    max-workers: 20
    timeout: 300
    log-level: warning

Usage:
    from core.config import load_app_config, settings

    config = load_app_config(path=None)
    config = config.merge(output="json")
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields, replace
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as dist_version
from pathlib import Path
from typing import Any

import yaml

from core.exceptions import ConfigError

logger = logging.getLogger(__name__)

# =============================================================================
# 불변 기본값
# =============================================================================


@dataclass(frozen=True)
class Settings:
    """애플리케이션 기본값 (불변)"""

    DEFAULT_PROFILE: str = "default"
    DEFAULT_REGION: str = "us-east-1"
    DEFAULT_OUTPUT: str = "table"

    # 병렬 실행
    MAX_WORKERS: int = 20
    MAX_WORKERS_LIMIT: int = 100
    SEARCH_TIMEOUT: int = 300  # 초, 전체 검색 마감 시간

    # API 호출 타임아웃 (초)
    API_CONNECT_TIMEOUT: int = 10
    API_READ_TIMEOUT: int = 30

    # 설정 파일
    CONFIG_DIR_NAME: str = ".awss"
    CONFIG_FILE_NAME: str = "config.yaml"
    ENV_PREFIX: str = "AWSS_"


settings = Settings()


# =============================================================================
# 경로 / 버전
# =============================================================================


def get_project_root() -> Path:
    """프로젝트 루트 경로 (core/의 상위)"""
    return Path(__file__).resolve().parent.parent


def get_default_config_path() -> Path:
    """기본 설정 파일 경로 (~/.awss/config.yaml)"""
    return Path.home() / settings.CONFIG_DIR_NAME / settings.CONFIG_FILE_NAME


def get_version() -> str:
    """버전 문자열 반환

    version.txt를 우선 읽고 (pyproject.toml도 같은 파일을 사용),
    파일이 없으면 설치된 배포판 메타데이터를 사용합니다.
    """
    version_file = get_project_root() / "version.txt"
    try:
        return version_file.read_text(encoding="utf-8").strip()
    except OSError:
        pass

    try:
        return dist_version("awss")
    except PackageNotFoundError:
        return "0.0.0"


# =============================================================================
# 환경 변수 헬퍼
# =============================================================================

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


def get_env_bool(name: str, default: bool = False) -> bool:
    """환경 변수를 bool로 변환 (유효하지 않으면 기본값)"""
    value = os.environ.get(name)
    if value is None:
        return default
    value = value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default


def get_env_int(name: str, default: int) -> int:
    """환경 변수를 int로 변환 (유효하지 않으면 기본값)"""
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"환경 변수 {name}의 값이 정수가 아님: {value!r}")
        return default


def get_env_list(name: str) -> list[str] | None:
    """쉼표로 구분된 환경 변수를 리스트로 변환 (없거나 비어 있으면 None)"""
    value = os.environ.get(name)
    if value is None:
        return None
    items = [item.strip() for item in value.split(",") if item.strip()]
    return items or None


def split_values(values: list[str] | tuple[str, ...]) -> list[str]:
    """반복/쉼표 구분 값을 평탄화 (빈 항목 제거, 순서 유지)"""
    result: list[str] = []
    for value in values:
        result.extend(item.strip() for item in str(value).split(",") if item.strip())
    return result


# =============================================================================
# 로깅
# =============================================================================

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


@dataclass(frozen=True)
class LogConfig:
    """로깅 설정

    Attributes:
        level: 로그 레벨 이름
        format: 로그 포맷
        date_format: 날짜 포맷
    """

    level: str = "WARNING"
    format: str = "%(asctime)s - %(levelname)s - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def from_env(cls) -> LogConfig:
        """AWSS_LOG_LEVEL / AWSS_LOG_FORMAT 환경 변수에서 로드"""
        return cls(
            level=os.environ.get(f"{settings.ENV_PREFIX}LOG_LEVEL", cls.level).upper(),
            format=os.environ.get(f"{settings.ENV_PREFIX}LOG_FORMAT", cls.format),
        )


def setup_logging(level: str | None = None, config: LogConfig | None = None) -> None:
    """루트 로거 설정

    WARNING 레벨이 기본값이므로 INFO 로그가 테이블/JSON 출력에 섞이지 않습니다.

    Args:
        level: 로그 레벨 이름 (debug, info, ...). None이면 config 값 사용
        config: 로깅 설정 (None이면 기본값)
    """
    config = config or LogConfig()
    level_name = (level or config.level).upper()
    numeric = logging.getLevelName(level_name)
    if not isinstance(numeric, int):
        raise ConfigError("log-level", f"unknown log level: {level}")

    logging.basicConfig(
        level=numeric,
        format=config.format,
        datefmt=config.date_format,
        force=True,
    )
    # botocore 내부 로그는 debug에서도 과도하므로 한 단계 낮춤
    logging.getLogger("botocore").setLevel(max(numeric, logging.INFO))
    logging.getLogger("urllib3").setLevel(max(numeric, logging.INFO))


# =============================================================================
# 실행 설정 (설정 파일 + 환경 변수)
# =============================================================================


@dataclass(frozen=True)
class AppConfig:
    """병합된 실행 설정 (불변)

    Attributes:
        profiles: 검색할 AWS 프로파일 ("all" 포함 가능)
        regions: 검색할 리전 ("all" 포함 가능)
        output: 출력 형식 (table, json, json-pretty)
        show_empty: 결과가 없는 (프로파일, 리전)도 출력
        show_tags: 테이블에 태그 컬럼 표시
        max_workers: 동시 작업 수 상한
        timeout: 전체 검색 마감 시간 (초)
        log_level: 로그 레벨
        all_regions: 알려진 리전 목록 재정의 (None이면 내장 목록)
        source: 설정 파일 경로 (로드하지 않았으면 None)
    """

    profiles: tuple[str, ...] = (settings.DEFAULT_PROFILE,)
    regions: tuple[str, ...] = (settings.DEFAULT_REGION,)
    output: str = settings.DEFAULT_OUTPUT
    show_empty: bool = False
    show_tags: bool = False
    max_workers: int = settings.MAX_WORKERS
    timeout: int = settings.SEARCH_TIMEOUT
    log_level: str = "warning"
    all_regions: tuple[str, ...] | None = None
    source: str | None = field(default=None, compare=False)

    def merge(self, **overrides: Any) -> AppConfig:
        """None이 아닌 값만 덮어쓴 새 AppConfig 반환 (CLI 플래그용)"""
        known = {f.name for f in fields(self)}
        values: dict[str, Any] = {}
        for key, value in overrides.items():
            if key not in known:
                raise ConfigError(key, "unknown setting")
            if value is None:
                continue
            if isinstance(value, (list, tuple)):
                if not value:
                    continue
                value = tuple(value)
            values[key] = value
        return _validated(replace(self, **values))


# 설정 파일 키 -> AppConfig 필드
_FILE_KEYS: dict[str, str] = {
    "profiles": "profiles",
    "regions": "regions",
    "output": "output",
    "show-empty": "show_empty",
    "show-tags": "show_tags",
    "max-workers": "max_workers",
    "timeout": "timeout",
    "log-level": "log_level",
    "all-regions": "all_regions",
}

_LIST_FIELDS = {"profiles", "regions", "all_regions"}
_BOOL_FIELDS = {"show_empty", "show_tags"}
_INT_FIELDS = {"max_workers", "timeout"}


def _coerce(key: str, attr: str, value: Any) -> Any:
    """설정 파일 값을 AppConfig 필드 타입으로 변환"""
    if attr in _LIST_FIELDS:
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigError(key, "expected a list of strings")
        return tuple(split_values(value))
    if attr in _BOOL_FIELDS:
        if not isinstance(value, bool):
            raise ConfigError(key, "expected true or false")
        return value
    if attr in _INT_FIELDS:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(key, "expected an integer")
        return value
    if not isinstance(value, str):
        raise ConfigError(key, "expected a string")
    return value


def _validated(config: AppConfig) -> AppConfig:
    from core.search.render import valid_outputs

    if config.output not in valid_outputs():
        raise ConfigError("output", f"must be one of {', '.join(valid_outputs())}, got {config.output}")
    if config.max_workers < 1:
        raise ConfigError("max-workers", f"must be >= 1, got {config.max_workers}")
    if config.timeout < 1:
        raise ConfigError("timeout", f"must be >= 1, got {config.timeout}")
    if config.log_level.lower() not in LOG_LEVELS:
        raise ConfigError("log-level", f"must be one of {', '.join(LOG_LEVELS)}")
    return config


def read_config_file(path: Path) -> dict[str, Any]:
    """YAML 설정 파일을 읽어 AppConfig 필드 딕셔너리로 반환

    Raises:
        ConfigError: 파싱 실패, 매핑이 아님, 알 수 없는 키, 타입 불일치
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(str(path), "invalid YAML", cause=e) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(str(path), "top level must be a mapping")

    values: dict[str, Any] = {}
    for key, value in data.items():
        attr = _FILE_KEYS.get(str(key))
        if attr is None:
            raise ConfigError(str(key), f"unknown key (valid: {', '.join(sorted(_FILE_KEYS))})")
        values[attr] = _coerce(str(key), attr, value)
    return values


def read_env_overrides() -> dict[str, Any]:
    """AWSS_* 환경 변수에서 설정 값 읽기"""
    prefix = settings.ENV_PREFIX
    values: dict[str, Any] = {}

    for attr in ("profiles", "regions"):
        items = get_env_list(f"{prefix}{attr.upper()}")
        if items:
            values[attr] = tuple(items)

    output = os.environ.get(f"{prefix}OUTPUT")
    if output:
        values["output"] = output.strip()

    log_level = os.environ.get(f"{prefix}LOG_LEVEL")
    if log_level:
        values["log_level"] = log_level.strip().lower()

    for attr in _BOOL_FIELDS:
        name = f"{prefix}{attr.upper()}"
        if name in os.environ:
            values[attr] = get_env_bool(name)

    for attr in _INT_FIELDS:
        name = f"{prefix}{attr.upper()}"
        if name in os.environ:
            values[attr] = get_env_int(name, getattr(AppConfig, attr))

    return values


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """기본값 < 설정 파일 < 환경 변수 순으로 병합한 AppConfig 로드

    Args:
        path: 설정 파일 경로. None이면 ~/.awss/config.yaml (없으면 무시)

    Raises:
        ConfigError: 명시한 파일이 없거나 내용이 잘못된 경우
    """
    explicit = path is not None
    config_path = Path(path).expanduser() if explicit else get_default_config_path()

    values: dict[str, Any] = {}
    source: str | None = None
    if config_path.is_file():
        values.update(read_config_file(config_path))
        source = str(config_path)
        logger.debug(f"설정 파일 로드: {config_path}")
    elif explicit:
        raise ConfigError(str(config_path), "config file not found")

    values.update(read_env_overrides())
    return _validated(replace(AppConfig(), source=source, **values))
