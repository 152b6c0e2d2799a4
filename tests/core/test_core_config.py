"""
tests/core/test_core_config.py - core/config.py 테스트
"""

import logging

import pytest

from core.config import (
    AppConfig,
    LogConfig,
    get_env_bool,
    get_env_int,
    get_env_list,
    get_project_root,
    get_version,
    load_app_config,
    read_config_file,
    settings,
    setup_logging,
    split_values,
)
from core.exceptions import ConfigError


class TestSettings:
    """Settings 데이터클래스 테스트"""

    def test_settings_is_frozen(self):
        """설정이 불변인지 확인"""
        with pytest.raises(Exception):  # FrozenInstanceError
            settings.DEFAULT_REGION = "eu-west-1"

    def test_default_values(self):
        """기본값 확인"""
        assert settings.DEFAULT_PROFILE == "default"
        assert settings.DEFAULT_REGION == "us-east-1"
        assert settings.MAX_WORKERS == 20
        assert settings.SEARCH_TIMEOUT == 300

    def test_version(self):
        assert get_version()

    def test_version_from_version_file(self):
        """version.txt 값을 우선 사용"""
        version_file = get_project_root() / "version.txt"

        assert get_version() == version_file.read_text(encoding="utf-8").strip()


class TestEnvHelpers:
    """환경 변수 헬퍼 테스트"""

    @pytest.mark.parametrize("value,expected", [("true", True), ("1", True), ("off", False), ("maybe", False)])
    def test_get_env_bool(self, monkeypatch, value, expected):
        monkeypatch.setenv("AWSS_TEST_BOOL", value)

        assert get_env_bool("AWSS_TEST_BOOL") is expected

    def test_get_env_int_invalid(self, monkeypatch):
        """정수가 아니면 기본값"""
        monkeypatch.setenv("AWSS_TEST_INT", "abc")

        assert get_env_int("AWSS_TEST_INT", 7) == 7

    def test_get_env_list(self, monkeypatch):
        monkeypatch.setenv("AWSS_TEST_LIST", " dev, prod ,,")

        assert get_env_list("AWSS_TEST_LIST") == ["dev", "prod"]
        assert get_env_list("AWSS_TEST_MISSING") is None

    def test_split_values(self):
        """반복 옵션과 쉼표 구분 값 평탄화"""
        assert split_values(("a,b", "c", " ,d ")) == ["a", "b", "c", "d"]


class TestLogging:
    """로깅 설정 테스트"""

    def test_log_config_from_env(self, monkeypatch):
        monkeypatch.setenv("AWSS_LOG_LEVEL", "debug")

        assert LogConfig.from_env().level == "DEBUG"

    def test_log_format_from_env(self, monkeypatch):
        monkeypatch.setenv("AWSS_LOG_FORMAT", "%(levelname)s %(message)s")

        setup_logging("info", LogConfig.from_env())

        formats = [h.formatter._fmt for h in logging.getLogger().handlers if h.formatter]
        assert "%(levelname)s %(message)s" in formats

    def test_setup_logging_level(self):
        setup_logging("info")

        assert logging.getLogger().level == logging.INFO
        assert logging.getLogger("botocore").level == logging.INFO

    def test_setup_logging_debug_keeps_botocore_quiet(self):
        setup_logging("debug")

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("botocore").level == logging.INFO

    def test_setup_logging_unknown_level(self):
        with pytest.raises(ConfigError):
            setup_logging("verbose")


class TestAppConfig:
    """AppConfig 로딩/병합 테스트"""

    def test_defaults_without_file(self):
        """기본 설정 파일이 없으면 기본값"""
        config = load_app_config()

        assert config == AppConfig()
        assert config.profiles == ("default",)
        assert config.regions == ("us-east-1",)
        assert config.source is None

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError, match="config file not found"):
            load_app_config(tmp_path / "nope.yaml")

    def test_load_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "profiles: [dev, prod]\nregions: eu-west-1\noutput: json\nshow-tags: true\nmax-workers: 5\n",
            encoding="utf-8",
        )

        config = load_app_config(path)

        assert config.profiles == ("dev", "prod")
        assert config.regions == ("eu-west-1",)
        assert config.output == "json"
        assert config.show_tags is True
        assert config.max_workers == 5
        assert config.source == str(path)

    def test_default_file_location(self, tmp_path):
        """~/.awss/config.yaml 자동 로드"""
        config_dir = tmp_path / ".awss"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("timeout: 60\n", encoding="utf-8")

        assert load_app_config().timeout == 60

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        """환경 변수가 설정 파일보다 우선"""
        path = tmp_path / "config.yaml"
        path.write_text("output: json\nprofiles: [dev]\n", encoding="utf-8")
        monkeypatch.setenv("AWSS_OUTPUT", "table")
        monkeypatch.setenv("AWSS_PROFILES", "a,b")
        monkeypatch.setenv("AWSS_SHOW_EMPTY", "true")

        config = load_app_config(path)

        assert config.output == "table"
        assert config.profiles == ("a", "b")
        assert config.show_empty is True

    def test_merge_cli_overrides(self):
        """CLI 값은 None/빈 목록이 아닐 때만 덮어씀"""
        config = AppConfig(output="json", profiles=("dev",))

        merged = config.merge(output=None, profiles=[], regions=["eu-west-1"], timeout=10)

        assert merged.output == "json"
        assert merged.profiles == ("dev",)
        assert merged.regions == ("eu-west-1",)
        assert merged.timeout == 10

    def test_invalid_output_from_env(self, monkeypatch):
        """잘못된 출력 형식은 로드 시점에 거부"""
        monkeypatch.setenv("AWSS_OUTPUT", "xml")

        with pytest.raises(ConfigError, match=r"config error \[output\]"):
            load_app_config()

    def test_invalid_output_from_merge(self):
        with pytest.raises(ConfigError):
            AppConfig().merge(output="xml")

    def test_merge_unknown_key(self):
        with pytest.raises(ConfigError):
            AppConfig().merge(colour="red")

    @pytest.mark.parametrize(
        "content",
        [
            "unknown-key: 1\n",
            "max-workers: many\n",
            "show-empty: 'yes'\n",
            "max-workers: 0\n",
            "log-level: chatty\n",
            "output: xml\n",
            "- just\n- a list\n",
            "profiles: [dev\n",
        ],
    )
    def test_invalid_file(self, tmp_path, content):
        path = tmp_path / "config.yaml"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(ConfigError):
            load_app_config(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")

        assert read_config_file(path) == {}
