"""
core/region/availability.py - 리전 가용성 확인

EC2.describe_regions(AllRegions=True)로 계정에서 활성화된 리전을 확인하고,
CLI에서 받은 리전 목록("all" 포함)을 검증/확장합니다.

Usage:
    from core.region.availability import get_available_regions, resolve_regions

    regions = get_available_regions(session)
    regions = resolve_regions(["all"], session_getter=lambda: get_session("dev", "us-east-1"))
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from core.exceptions import ValidationError
from core.parallel.client import get_client

from .data import ALL_REGIONS, DEFAULT_ENABLED_REGIONS, DEFAULT_REGION

if TYPE_CHECKING:
    import boto3

logger = logging.getLogger(__name__)

ALL = "all"


@dataclass
class RegionInfo:
    """리전 정보

    Attributes:
        region_name: 리전 코드 (예: "ap-northeast-2")
        endpoint: 리전 엔드포인트
        opt_in_status: 옵트인 상태 ("opt-in-not-required", "opted-in", "not-opted-in")
    """

    region_name: str
    endpoint: str = ""
    opt_in_status: str = "opt-in-not-required"

    @property
    def is_opted_in(self) -> bool:
        """옵트인 리전 여부 (활성화됨)"""
        return self.opt_in_status in ("opt-in-not-required", "opted-in")

    @property
    def requires_opt_in(self) -> bool:
        """옵트인이 필요한 리전인지"""
        return self.opt_in_status != "opt-in-not-required"

    def to_dict(self) -> dict[str, Any]:
        return {
            "region_name": self.region_name,
            "endpoint": self.endpoint,
            "opt_in_status": self.opt_in_status,
            "is_opted_in": self.is_opted_in,
        }


def get_all_regions_info(session: boto3.Session) -> list[RegionInfo]:
    """모든 리전 정보 조회 (옵트인 상태 포함, 실패 시 예외)"""
    ec2 = get_client(session, "ec2", region_name=DEFAULT_REGION)
    response = ec2.describe_regions(AllRegions=True)
    return [
        RegionInfo(
            region_name=region.get("RegionName", ""),
            endpoint=region.get("Endpoint", ""),
            opt_in_status=region.get("OptInStatus", "opt-in-not-required"),
        )
        for region in response.get("Regions", [])
    ]


def get_available_regions(session: boto3.Session, fallback: Sequence[str] | None = None) -> list[str]:
    """활성화된 리전 목록 (알파벳 순)

    조회에 실패하면 경고 후 fallback (None이면 기본 활성 리전)을 반환합니다.
    """
    try:
        regions = [r.region_name for r in get_all_regions_info(session) if r.is_opted_in]
    except Exception as e:
        logger.warning(f"리전 목록 조회 실패, 기본 목록 사용: {e}")
        regions = list(fallback or DEFAULT_ENABLED_REGIONS)
    return sorted(regions)


def resolve_regions(
    requested: Sequence[str],
    session_getter: Callable[[], boto3.Session] | None = None,
    known_regions: Sequence[str] | None = None,
) -> list[str]:
    """요청된 리전 목록 검증 및 "all" 확장

    Args:
        requested: CLI/설정에서 받은 리전 목록
        session_getter: "all" 확장용 세션 팩토리 (첫 번째 프로파일)
        known_regions: 알려진 리전 목록 재정의 (None이면 ALL_REGIONS)

    Returns:
        중복 없는 리전 목록 (요청 순서 유지)

    Raises:
        ValidationError: 알 수 없는 리전
    """
    known = list(known_regions) if known_regions else ALL_REGIONS

    if ALL in requested:
        if session_getter is None:
            return sorted(known_regions or DEFAULT_ENABLED_REGIONS)
        return get_available_regions(session_getter(), fallback=known_regions)

    resolved: dict[str, None] = {}
    for region in requested:
        if region not in known:
            raise ValidationError(f"region {region} not found", field="regions", value=region)
        resolved[region] = None
    return list(resolved)
