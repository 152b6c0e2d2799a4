"""
tests/core/parallel/test_parallel_client.py - boto3 client 생성 헬퍼 테스트
"""

from unittest.mock import MagicMock

from botocore.config import Config

from core.config import settings
from core.parallel.client import build_client_config, get_client


class TestBuildClientConfig:
    """build_client_config 테스트"""

    def test_defaults(self):
        """기본값: 재시도 없음, settings 타임아웃"""
        config = build_client_config()

        assert config.retries == {"max_attempts": 1, "mode": "standard"}
        assert config.connect_timeout == settings.API_CONNECT_TIMEOUT
        assert config.read_timeout == settings.API_READ_TIMEOUT

    def test_custom_timeouts(self):
        config = build_client_config(connect_timeout=3, read_timeout=7)

        assert config.connect_timeout == 3
        assert config.read_timeout == 7


class TestGetClient:
    """get_client 테스트"""

    def test_passes_config(self):
        session = MagicMock()

        get_client(session, "ec2", region_name="eu-west-1")

        args, kwargs = session.client.call_args
        assert args == ("ec2",)
        assert kwargs["region_name"] == "eu-west-1"
        assert isinstance(kwargs["config"], Config)

    def test_merges_existing_config(self):
        session = MagicMock()

        get_client(session, "ec2", config=Config(user_agent_extra="awss"))

        config = session.client.call_args.kwargs["config"]
        assert config.user_agent_extra == "awss"
        assert config.read_timeout == settings.API_READ_TIMEOUT
