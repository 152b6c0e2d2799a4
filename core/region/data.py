# core/region/data.py
"""
리전 데이터

ALL_REGIONS: 이름 검증에 사용하는 알려진 EC2 리전 전체 (옵트인 리전 포함)
DEFAULT_ENABLED_REGIONS: 옵트인 없이 활성화되는 리전 ("all" 확장 폴백)
"""

DEFAULT_REGION = "us-east-1"

DEFAULT_ENABLED_REGIONS = [
    "eu-central-1",
    "eu-north-1",
    "eu-west-1",
    "eu-west-2",
    "eu-west-3",
    "us-east-1",
    "us-east-2",
    "us-west-1",
    "us-west-2",
    "ca-central-1",
    "sa-east-1",
    "ap-south-1",
    "ap-southeast-1",
    "ap-southeast-2",
    "ap-northeast-3",
    "ap-northeast-2",
    "ap-northeast-1",
]

# 옵트인이 필요한 리전
OPT_IN_REGIONS = [
    "af-south-1",
    "ap-east-1",
    "ap-south-2",
    "ap-southeast-3",
    "ap-southeast-4",
    "ap-southeast-5",
    "ap-southeast-7",
    "ca-west-1",
    "eu-central-2",
    "eu-south-1",
    "eu-south-2",
    "il-central-1",
    "me-central-1",
    "me-south-1",
    "mx-central-1",
]

ALL_REGIONS = DEFAULT_ENABLED_REGIONS + OPT_IN_REGIONS
