"""
plugins/ec2/common.py - EC2 리소스 공통 헬퍼

태그 변환과 리소스 종류들이 공유하는 필터 메타데이터를 제공합니다.
"""

from __future__ import annotations

from typing import Any

from core.search.filters import FilterField, FilterKind


def tags_to_map(tags: list[dict[str, Any]] | None) -> dict[str, str]:
    """[{"Key": k, "Value": v}, ...] -> {k: v}"""
    return {t["Key"]: t.get("Value", "") for t in tags or [] if "Key" in t}


def tag_value(tags: list[dict[str, Any]] | None, key: str) -> str:
    """태그 목록에서 key의 값 (없으면 "")"""
    for tag in tags or []:
        if tag.get("Key") == key:
            return str(tag.get("Value", ""))
    return ""


# =============================================================================
# 공통 필터 필드
# =============================================================================

NAMES_FIELD = FilterField(
    key="names",
    name="tag:Name",
    kind=FilterKind.NAMES,
    short="-n",
    help="Name tag values, e.g. --names web-1,web-2 (wildcards allowed)",
)

TAGS_FIELD = FilterField(
    key="tags",
    name="tag",
    kind=FilterKind.TAGS,
    short="-t",
    help="Tags as Key=Value1:Value2, e.g. --tags Env=prod,Team=a:b",
)

TAGS_KEY_FIELD = FilterField(
    key="tags-key",
    name="tag-key",
    short="-k",
    help="Tag keys that must be present, e.g. --tags-key Env,Team",
)

AVAILABILITY_ZONES_FIELD = FilterField(
    key="availability-zones",
    name="availability-zone",
    kind=FilterKind.ZONES,
    short="-z",
    help="Availability zone letters, e.g. --availability-zones a,b",
)
