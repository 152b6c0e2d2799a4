"""
plugins/ec2/network_interfaces.py - 네트워크 인터페이스(ENI) 검색

DescribeNetworkInterfaces 페이지네이터로 ENI를 조회하고 행으로 변환합니다.
연결된 인스턴스의 Name 태그는 instance-id 필터로 일괄 조회하며 (없는 ID는 건너뜀),
그 조회가 실패해도 ENI 행은 그대로 출력하고 오류만 ResultSet에 기록합니다.

컬럼:
    Interface Info (ID, Type, AZ, Status, Subnet, Instance, Instance Name),
    Private IPs, Public IPs, Tags
정렬 키:
    id, type, az, status, subnet, instance, instance-name, private-ips, public-ips (기본: id)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from botocore.exceptions import ClientError

from core.exceptions import APICallError, format_error_for_user
from core.parallel.client import get_client
from core.search.filters import CompiledQuery, FilterField, FilterKind, ValueType
from core.search.registry import ResourceKind
from core.search.schema import Column, RowSchema, ValueKind

from .common import AVAILABILITY_ZONES_FIELD, NAMES_FIELD, TAGS_FIELD, TAGS_KEY_FIELD, tag_value, tags_to_map
from .instances import describe_instances

if TYPE_CHECKING:
    import boto3

logger = logging.getLogger(__name__)

# instance-id 필터 값 최대 개수
INSTANCE_ID_BATCH = 200


@dataclass
class InterfaceInfo:
    """ENI 기본 정보 (Interface Info 컬럼)"""

    network_interface_id: str = ""
    interface_type: str = ""
    availability_zone: str = ""
    status: str = ""
    subnet_id: str = ""
    instance_id: str = ""
    instance_name: str = ""


@dataclass
class NetworkInterfaceRow:
    """ENI 행"""

    interface_info: InterfaceInfo = field(default_factory=InterfaceInfo)
    private_ip_addresses: list[str] = field(default_factory=list)
    public_ip_addresses: list[str] = field(default_factory=list)
    tags: dict[str, str] = field(default_factory=dict)


INTERFACE_INFO_SCHEMA = RowSchema(
    InterfaceInfo,
    [
        Column("ID", "network_interface_id", sort_key="id"),
        Column("Type", "interface_type", sort_key="type"),
        Column("AZ", "availability_zone", sort_key="az"),
        Column("Status", "status", sort_key="status"),
        Column("Subnet", "subnet_id", sort_key="subnet"),
        Column("Instance", "instance_id", sort_key="instance"),
        Column("Instance Name", "instance_name", sort_key="instance-name"),
    ],
)

NETWORK_INTERFACE_SCHEMA = RowSchema(
    NetworkInterfaceRow,
    [
        Column("Interface Info", "interface_info", ValueKind.RECORD, record=INTERFACE_INFO_SCHEMA),
        Column("Private IPs", "private_ip_addresses", ValueKind.LIST, sort_key="private-ips"),
        Column("Public IPs", "public_ip_addresses", ValueKind.LIST, sort_key="public-ips"),
        Column("Tags", "tags", ValueKind.LABELS),
    ],
)

NETWORK_INTERFACE_FILTERS = (
    FilterField(
        key="ids",
        name="network-interface-id",
        kind=FilterKind.IDS,
        short="-i",
        help="Network interface IDs, e.g. --ids eni-0a1b2c3d,eni-4e5f6a7b",
    ),
    NAMES_FIELD,
    TAGS_FIELD,
    TAGS_KEY_FIELD,
    AVAILABILITY_ZONES_FIELD,
    FilterField(
        key="private-ips",
        name="addresses.private-ip-address",
        value_type=ValueType.IP,
        short="-p",
        help="Private IPs, e.g. --private-ips 172.16.0.1,172.17.1.254",
    ),
    FilterField(
        key="public-ips",
        name="association.public-ip",
        value_type=ValueType.IP,
        short="-P",
        help="Public IPs, e.g. --public-ips 52.28.19.20,52.30.31.32",
    ),
)


class NetworkInterfaceKind(ResourceKind):
    """네트워크 인터페이스 리소스 종류"""

    name = "network-interfaces"
    description = "Search network interfaces (ENIs) by ID, name, tags, zone or IP."
    ids_param = "NetworkInterfaceIds"
    filter_fields = NETWORK_INTERFACE_FILTERS
    schema = NETWORK_INTERFACE_SCHEMA
    default_sort = "id"

    def query(self, session: boto3.Session, region: str, query: CompiledQuery) -> list[dict[str, Any]]:
        ec2 = get_client(session, self.service, region_name=region)
        interfaces: list[dict[str, Any]] = []
        try:
            paginator = ec2.get_paginator("describe_network_interfaces")
            for page in paginator.paginate(**query.to_request(self.ids_param)):
                interfaces.extend(page.get("NetworkInterfaces", []))
        except ClientError as e:
            raise APICallError.from_client_error("ec2", "describe_network_interfaces", e) from e
        return interfaces

    def to_row(self, record: dict[str, Any]) -> NetworkInterfaceRow:
        private_ips: list[str] = []
        public_ips: list[str] = []
        for address in record.get("PrivateIpAddresses", []):
            if address.get("PrivateIpAddress"):
                private_ips.append(address["PrivateIpAddress"])
            public_ip = address.get("Association", {}).get("PublicIp")
            if public_ip:
                public_ips.append(public_ip)

        attachment = record.get("Attachment") or {}
        return NetworkInterfaceRow(
            interface_info=InterfaceInfo(
                network_interface_id=record.get("NetworkInterfaceId", ""),
                interface_type=record.get("InterfaceType", ""),
                availability_zone=record.get("AvailabilityZone", ""),
                status=record.get("Status", ""),
                subnet_id=record.get("SubnetId", ""),
                instance_id=attachment.get("InstanceId", ""),
            ),
            private_ip_addresses=private_ips,
            public_ip_addresses=public_ips,
            tags=tags_to_map(record.get("TagSet")),
        )

    def enrich(self, rows: list[NetworkInterfaceRow], session: boto3.Session, region: str) -> list[str]:
        """연결된 인스턴스의 Name 태그 채우기

        InstanceIds 대신 instance-id 필터를 사용하므로 종료되었거나 다른 계정의
        인스턴스 ID가 섞여 있어도 나머지 인스턴스의 이름은 채워집니다.
        """
        instance_ids = list(dict.fromkeys(r.interface_info.instance_id for r in rows if r.interface_info.instance_id))
        if not instance_ids:
            return []

        ec2 = get_client(session, self.service, region_name=region)
        names: dict[str, str] = {}
        errors: list[str] = []
        for start in range(0, len(instance_ids), INSTANCE_ID_BATCH):
            batch = instance_ids[start : start + INSTANCE_ID_BATCH]
            try:
                for instance in describe_instances(ec2, {"Filters": [{"Name": "instance-id", "Values": batch}]}):
                    names[instance.get("InstanceId", "")] = tag_value(instance.get("Tags"), "Name")
            except APICallError as e:
                logger.warning(f"인스턴스 이름 조회 실패 [{region}]: {e}")
                errors.append(f"error searching instance names: {format_error_for_user(e)}")

        for row in rows:
            row.interface_info.instance_name = names.get(row.interface_info.instance_id, "")
        return errors


RESOURCE = NetworkInterfaceKind()
