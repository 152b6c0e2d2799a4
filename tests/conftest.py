"""
tests/conftest.py - pytest 공통 픽스처

AWS API 모킹, 가짜 리소스 종류, 테스트 헬퍼를 제공합니다.

Usage:
    def test_something(mock_ec2_client, fake_registry):
        # mock_ec2_client: 페이지네이터가 설정된 EC2 클라이언트 모킹
        # fake_registry: 네트워크 호출 없는 리소스 종류 레지스트리
        pass
"""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock, patch

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """테스트 환경 설정

    실제 ~/.aws, ~/.awss 설정과 AWSS_* 환경 변수가 테스트에 섞이지 않도록 격리합니다.
    """
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "aws_config"))
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "aws_credentials"))
    monkeypatch.setenv("HOME", str(tmp_path))
    for name in list(os.environ):
        if name.startswith("AWSS_"):
            monkeypatch.delenv(name)

    yield

    from core.auth.session import clear_cache

    clear_cache()


@pytest.fixture
def aws_shared_config(tmp_path):
    """dev / prod 프로파일이 있는 AWS 공유 설정 파일 작성"""
    (tmp_path / "aws_config").write_text(
        "[default]\nregion = us-east-1\n\n[profile dev]\nregion = us-east-1\n\n[sso-session corp]\nsso_region = us-east-1\n",
        encoding="utf-8",
    )
    (tmp_path / "aws_credentials").write_text(
        "[dev]\naws_access_key_id = testing\naws_secret_access_key = testing\n\n"
        "[prod]\naws_access_key_id = testing\naws_secret_access_key = testing\n",
        encoding="utf-8",
    )
    return tmp_path


# =============================================================================
# AWS 모킹 픽스처
# =============================================================================


@pytest.fixture
def mock_boto3_session():
    """boto3.Session 모킹"""
    with patch("boto3.Session") as mock_session_class:
        mock_session = MagicMock()
        mock_session_class.return_value = mock_session

        mock_session.client.return_value = MagicMock()
        mock_session.region_name = "us-east-1"

        yield mock_session


@pytest.fixture
def mock_ec2_client():
    """EC2 클라이언트 모킹 (describe_instances / describe_network_interfaces 페이지네이터)"""
    mock_client = MagicMock()

    instances_page = {
        "Reservations": [
            {
                "Instances": [
                    {
                        "InstanceId": "i-1234567890abcdef0",
                        "InstanceType": "t3.micro",
                        "Placement": {"AvailabilityZone": "us-east-1a"},
                        "State": {"Name": "running"},
                        "PrivateIpAddress": "10.0.0.1",
                        "NetworkInterfaces": [{"NetworkInterfaceId": "eni-0000000000000001"}],
                        "Tags": [{"Key": "Name", "Value": "test-instance"}],
                    }
                ]
            }
        ]
    }
    interfaces_page = {
        "NetworkInterfaces": [
            {
                "NetworkInterfaceId": "eni-0000000000000001",
                "InterfaceType": "interface",
                "AvailabilityZone": "us-east-1a",
                "Status": "in-use",
                "SubnetId": "subnet-01",
                "Attachment": {"InstanceId": "i-1234567890abcdef0"},
                "PrivateIpAddresses": [
                    {"PrivateIpAddress": "10.0.0.1", "Association": {"PublicIp": "52.0.0.1"}},
                ],
                "TagSet": [{"Key": "Team", "Value": "net"}],
            }
        ]
    }

    paginators = {
        "describe_instances": MagicMock(),
        "describe_network_interfaces": MagicMock(),
    }
    paginators["describe_instances"].paginate.return_value = [instances_page]
    paginators["describe_network_interfaces"].paginate.return_value = [interfaces_page]
    mock_client.get_paginator.side_effect = lambda name: paginators[name]
    mock_client.paginators = paginators

    yield mock_client


@pytest.fixture
def mock_sts_client():
    """STS 클라이언트 모킹"""
    mock_client = MagicMock()

    mock_client.get_caller_identity.return_value = {
        "UserId": "AIDATEST123",
        "Account": "123456789012",
        "Arn": "arn:aws:iam::123456789012:user/test-user",
    }

    yield mock_client


# =============================================================================
# 가짜 리소스 종류
# =============================================================================


@dataclass
class FakeRow:
    """테스트용 행"""

    item_id: str = ""
    name: str = ""
    addresses: List[str] = field(default_factory=list)
    tags: Dict[str, str] = field(default_factory=dict)


def _build_fake_kind():
    from core.search.filters import FilterField, FilterKind, ValueType
    from core.search.registry import ResourceKind
    from core.search.schema import Column, RowSchema, ValueKind

    schema = RowSchema(
        FakeRow,
        [
            Column("ID", "item_id", sort_key="id"),
            Column("Name", "name", sort_key="name"),
            Column("Addresses", "addresses", ValueKind.LIST, sort_key="addresses"),
            Column("Tags", "tags", ValueKind.LABELS),
        ],
    )

    class FakeKind(ResourceKind):
        """레코드를 미리 정해 두고 호출을 기록하는 리소스 종류

        records: {(profile 또는 None, region): [레코드, ...]} 또는 예외
        """

        name = "fake"
        description = "Fake resources"
        ids_param = "FakeIds"
        filter_fields = (
            FilterField(key="ids", name="fake-id", kind=FilterKind.IDS, short="-i"),
            FilterField(key="names", name="tag:Name", kind=FilterKind.NAMES, short="-n"),
            FilterField(key="tags", name="tag", kind=FilterKind.TAGS, short="-t"),
            FilterField(key="availability-zones", name="availability-zone", kind=FilterKind.ZONES, short="-z"),
            FilterField(key="ips", name="address", value_type=ValueType.IP, short="-p"),
        )
        default_sort = "name"

        def __init__(self, records: Optional[Dict[Any, Any]] = None, delay: float = 0.0):
            self.schema = schema
            self.records = records or {}
            self.delay = delay
            self.calls: List[Any] = []

        def query(self, session, region, query):
            import time

            self.calls.append((session, region, query))
            if self.delay:
                time.sleep(self.delay)
            outcome = self.records.get((getattr(session, "profile_name", None), region), self.records.get(region, []))
            if isinstance(outcome, Exception):
                raise outcome
            return list(outcome)

        def to_row(self, record):
            return FakeRow(
                item_id=record.get("Id", ""),
                name=record.get("Name", ""),
                addresses=list(record.get("Addresses", [])),
                tags=dict(record.get("Tags", {})),
            )

    return FakeKind


@pytest.fixture
def fake_kind_class():
    """가짜 ResourceKind 클래스"""
    return _build_fake_kind()


@pytest.fixture
def fake_kind(fake_kind_class):
    """레코드가 없는 가짜 ResourceKind"""
    return fake_kind_class()


@pytest.fixture
def fake_registry(fake_kind):
    """가짜 종류 하나만 등록된 레지스트리"""
    from core.search.registry import ResourceRegistry

    return ResourceRegistry([fake_kind])


@pytest.fixture
def fake_session_factory():
    """(profile, region) -> profile_name/region_name만 가진 가짜 세션"""

    def factory(profile: str, region: str):
        session = MagicMock()
        session.profile_name = profile
        session.region_name = region
        return session

    return factory


# =============================================================================
# 유틸리티 함수
# =============================================================================


def create_mock_client_error(
    error_code: str,
    error_message: str = "Test error",
    operation_name: str = "TestOperation",
) -> Exception:
    """ClientError 생성 헬퍼"""
    from botocore.exceptions import ClientError

    return ClientError(
        {
            "Error": {
                "Code": error_code,
                "Message": error_message,
            }
        },
        operation_name,
    )


# =============================================================================
# moto 통합
# =============================================================================


@pytest.fixture
def aws_credentials(monkeypatch):
    """moto 사용 시 AWS 자격 증명 설정"""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def moto_ec2(aws_credentials):
    """moto를 사용한 EC2 모킹 (VPC + 서브넷)"""
    import boto3
    from moto import mock_aws

    with mock_aws():
        session = boto3.Session(region_name="us-east-1")
        ec2 = session.client("ec2", region_name="us-east-1")

        vpc = ec2.create_vpc(CidrBlock="10.0.0.0/16")
        vpc_id = vpc["Vpc"]["VpcId"]

        subnet = ec2.create_subnet(VpcId=vpc_id, CidrBlock="10.0.1.0/24", AvailabilityZone="us-east-1a")
        subnet_id = subnet["Subnet"]["SubnetId"]

        yield session, ec2, subnet_id


@pytest.fixture
def client_error():
    """ClientError 생성 함수 (create_mock_client_error)"""
    return create_mock_client_error
