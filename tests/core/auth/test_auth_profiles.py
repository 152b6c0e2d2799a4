"""
tests/core/auth/test_auth_profiles.py - AWS 프로파일 목록 테스트
"""

import pytest

from core.auth.profiles import Loader, list_profiles, resolve_profiles
from core.exceptions import ConfigError, ValidationError


class TestLoader:
    """Loader 테스트"""

    def test_list_profiles(self, aws_shared_config):
        """config 순서 후 credentials 순서, 중복 제거 (sso-session 제외)"""
        assert list_profiles() == ["default", "dev", "prod"]

    def test_missing_files(self, tmp_path):
        loader = Loader(tmp_path / "none", tmp_path / "none2")

        assert loader.list_profiles() == []

    def test_explicit_paths(self, tmp_path):
        config = tmp_path / "custom_config"
        config.write_text("[profile ops]\nregion = eu-west-1\n", encoding="utf-8")

        assert Loader(config, tmp_path / "none").list_profiles() == ["ops"]

    def test_invalid_file(self, tmp_path):
        config = tmp_path / "broken"
        config.write_text("no section header\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            Loader(config, tmp_path / "none").list_profiles()


class TestResolveProfiles:
    """resolve_profiles 테스트"""

    def test_explicit(self, aws_shared_config):
        assert resolve_profiles(["prod", "dev", "prod"]) == ["prod", "dev"]

    def test_all(self, aws_shared_config):
        assert resolve_profiles(["all"]) == ["default", "dev", "prod"]

    def test_unknown_profile(self, aws_shared_config):
        with pytest.raises(ValidationError, match="profile staging not found"):
            resolve_profiles(["dev", "staging"])

    def test_all_without_profiles(self):
        with pytest.raises(ValidationError, match="no profiles configured"):
            resolve_profiles(["all"])
