"""
plugins/ec2/instances.py - EC2 인스턴스 검색

DescribeInstances 페이지네이터로 인스턴스를 조회하고 행으로 변환합니다.

컬럼:
    ID, Name, Type, AZ, State, Private IP, Public IP, ENIs, Tags
정렬 키:
    id, name, type, az, state, private-ip, public-ip, enis (기본: name)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from botocore.exceptions import ClientError

from core.exceptions import APICallError
from core.parallel.client import get_client
from core.search.filters import CompiledQuery, FilterField, FilterKind, ValueType
from core.search.registry import ResourceKind
from core.search.schema import Column, RowSchema, ValueKind

from .common import AVAILABILITY_ZONES_FIELD, NAMES_FIELD, TAGS_FIELD, TAGS_KEY_FIELD, tag_value, tags_to_map

if TYPE_CHECKING:
    import boto3


@dataclass
class InstanceRow:
    """EC2 인스턴스 행"""

    instance_id: str = ""
    instance_name: str = ""
    instance_type: str = ""
    availability_zone: str = ""
    instance_state: str = ""
    private_ip_address: str = ""
    public_ip_address: str = ""
    network_interfaces: list[str] = field(default_factory=list)
    tags: dict[str, str] = field(default_factory=dict)


INSTANCE_SCHEMA = RowSchema(
    InstanceRow,
    [
        Column("ID", "instance_id", sort_key="id"),
        Column("Name", "instance_name", sort_key="name"),
        Column("Type", "instance_type", sort_key="type"),
        Column("AZ", "availability_zone", sort_key="az"),
        Column("State", "instance_state", sort_key="state"),
        Column("Private IP", "private_ip_address", sort_key="private-ip"),
        Column("Public IP", "public_ip_address", sort_key="public-ip"),
        Column("ENIs", "network_interfaces", ValueKind.LIST, sort_key="enis"),
        Column("Tags", "tags", ValueKind.LABELS),
    ],
)

INSTANCE_FILTERS = (
    FilterField(
        key="ids",
        name="instance-id",
        kind=FilterKind.IDS,
        short="-i",
        help="Instance IDs, e.g. --ids i-0a1b2c3d,i-4e5f6a7b",
    ),
    NAMES_FIELD,
    TAGS_FIELD,
    TAGS_KEY_FIELD,
    FilterField(
        key="instance-types",
        name="instance-type",
        short="-T",
        help="Instance types, e.g. --instance-types t3.micro,m5.large",
    ),
    FilterField(
        key="instance-states",
        name="instance-state-name",
        short="-s",
        help="Instance states, e.g. --instance-states running,stopped",
    ),
    AVAILABILITY_ZONES_FIELD,
    FilterField(
        key="private-ips",
        name="network-interface.addresses.private-ip-address",
        value_type=ValueType.IP,
        short="-p",
        help="Private IPs, e.g. --private-ips 172.16.0.1,172.17.1.254",
    ),
    FilterField(
        key="public-ips",
        name="network-interface.addresses.association.public-ip",
        value_type=ValueType.IP,
        short="-P",
        help="Public IPs, e.g. --public-ips 52.28.19.20,52.30.31.32",
    ),
)


def describe_instances(ec2: Any, request: dict[str, Any]) -> list[dict[str, Any]]:
    """DescribeInstances 전체 페이지 조회 -> 인스턴스 레코드 목록

    Raises:
        APICallError: API 호출 실패
    """
    instances: list[dict[str, Any]] = []
    try:
        paginator = ec2.get_paginator("describe_instances")
        for page in paginator.paginate(**request):
            for reservation in page.get("Reservations", []):
                instances.extend(reservation.get("Instances", []))
    except ClientError as e:
        raise APICallError.from_client_error("ec2", "describe_instances", e) from e
    return instances


class InstanceKind(ResourceKind):
    """EC2 인스턴스 리소스 종류"""

    name = "instances"
    description = "Search EC2 instances by ID, name, tags, type, state, zone or IP."
    ids_param = "InstanceIds"
    filter_fields = INSTANCE_FILTERS
    schema = INSTANCE_SCHEMA
    default_sort = "name"

    def query(self, session: boto3.Session, region: str, query: CompiledQuery) -> list[dict[str, Any]]:
        ec2 = get_client(session, self.service, region_name=region)
        return describe_instances(ec2, query.to_request(self.ids_param))

    def to_row(self, record: dict[str, Any]) -> InstanceRow:
        return InstanceRow(
            instance_id=record.get("InstanceId", ""),
            instance_name=tag_value(record.get("Tags"), "Name"),
            instance_type=record.get("InstanceType", ""),
            availability_zone=record.get("Placement", {}).get("AvailabilityZone", ""),
            instance_state=record.get("State", {}).get("Name", ""),
            private_ip_address=record.get("PrivateIpAddress", ""),
            public_ip_address=record.get("PublicIpAddress", ""),
            network_interfaces=[
                eni["NetworkInterfaceId"] for eni in record.get("NetworkInterfaces", []) if "NetworkInterfaceId" in eni
            ],
            tags=tags_to_map(record.get("Tags")),
        )


RESOURCE = InstanceKind()
