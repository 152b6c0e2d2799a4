"""
tests/core/region/test_region_data.py - 리전 데이터 테스트
"""

import re

from core.region.data import ALL_REGIONS, DEFAULT_ENABLED_REGIONS, DEFAULT_REGION, OPT_IN_REGIONS


class TestRegionData:
    """리전 목록 테스트"""

    def test_all_regions_unique(self):
        """중복된 리전 코드가 없어야 함"""
        assert len(ALL_REGIONS) == len(set(ALL_REGIONS))

    def test_region_format(self):
        """모든 리전은 올바른 형식이어야 함 (예: us-east-1)"""
        pattern = re.compile(r"^[a-z]{2}-[a-z]+-[0-9]+$")

        for region in ALL_REGIONS:
            assert pattern.match(region), f"Invalid region format: {region}"

    def test_default_region_enabled(self):
        assert DEFAULT_REGION in DEFAULT_ENABLED_REGIONS

    def test_opt_in_disjoint(self):
        assert not set(OPT_IN_REGIONS) & set(DEFAULT_ENABLED_REGIONS)
