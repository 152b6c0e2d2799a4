# core/auth/profiles.py
"""
AWS 프로파일 목록

~/.aws/config 와 ~/.aws/credentials 에서 프로파일 이름을 읽고,
CLI에서 받은 프로파일 목록("all" 포함)을 검증/확장합니다.

섹션 규칙:
    config      : [default], [profile <name>]  ([sso-session ...] 등은 무시)
    credentials : [<name>]

경로는 AWS_CONFIG_FILE / AWS_SHARED_CREDENTIALS_FILE 환경 변수를 따릅니다.
"""

from __future__ import annotations

import configparser
import logging
import os
from collections.abc import Sequence
from pathlib import Path

from core.exceptions import ConfigError, ValidationError

logger = logging.getLogger(__name__)

ALL_PROFILES = "all"


def _default_config_path() -> Path:
    return Path(os.environ.get("AWS_CONFIG_FILE", Path.home() / ".aws" / "config")).expanduser()


def _default_credentials_path() -> Path:
    return Path(os.environ.get("AWS_SHARED_CREDENTIALS_FILE", Path.home() / ".aws" / "credentials")).expanduser()


class Loader:
    """AWS 공유 설정 파일 로더

    Args:
        config_path: config 파일 경로 (None이면 기본 경로)
        credentials_path: credentials 파일 경로 (None이면 기본 경로)
    """

    def __init__(self, config_path: str | Path | None = None, credentials_path: str | Path | None = None):
        self.config_path = Path(config_path) if config_path else _default_config_path()
        self.credentials_path = Path(credentials_path) if credentials_path else _default_credentials_path()

    @staticmethod
    def _read(path: Path) -> configparser.RawConfigParser | None:
        if not path.is_file():
            return None
        parser = configparser.RawConfigParser(default_section="__none__")
        try:
            parser.read(path, encoding="utf-8")
        except configparser.Error as e:
            raise ConfigError(str(path), "cannot parse AWS shared config", cause=e) from e
        return parser

    def list_profiles(self) -> list[str]:
        """설정된 프로파일 이름 (config 순서 후 credentials 순서, 중복 제거)"""
        profiles: dict[str, None] = {}

        config = self._read(self.config_path)
        if config is not None:
            for section in config.sections():
                if section == "default":
                    profiles["default"] = None
                elif section.startswith("profile "):
                    name = section[len("profile ") :].strip()
                    if name:
                        profiles[name] = None

        credentials = self._read(self.credentials_path)
        if credentials is not None:
            for section in credentials.sections():
                profiles[section.strip()] = None

        logger.debug(f"프로파일 {len(profiles)}개 발견: {self.config_path}, {self.credentials_path}")
        return list(profiles)


def list_profiles() -> list[str]:
    """기본 경로의 프로파일 목록"""
    return Loader().list_profiles()


def resolve_profiles(requested: Sequence[str], loader: Loader | None = None) -> list[str]:
    """요청된 프로파일 목록 검증 및 "all" 확장

    Args:
        requested: CLI/설정에서 받은 프로파일 목록
        loader: 설정 파일 로더 (None이면 기본 경로)

    Returns:
        중복 없는 프로파일 목록 (요청 순서 유지)

    Raises:
        ValidationError: 설정에 없는 프로파일, 또는 "all"인데 프로파일이 하나도 없는 경우
    """
    available = (loader or Loader()).list_profiles()

    if ALL_PROFILES in requested:
        if not available:
            raise ValidationError("no profiles configured", field="profiles", value=ALL_PROFILES)
        return available

    resolved: dict[str, None] = {}
    for profile in requested:
        if profile not in available:
            raise ValidationError(f"profile {profile} not found", field="profiles", value=profile)
        resolved[profile] = None
    return list(resolved)
