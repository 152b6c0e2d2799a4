"""
plugins/ec2 - EC2 Search

EC2 인스턴스와 네트워크 인터페이스 검색
"""

CATEGORY = {
    "name": "ec2",
    "display_name": "EC2",
    "description": "EC2 인스턴스 및 네트워크 인터페이스 검색",
    "description_en": "Search EC2 instances and network interfaces",
}

RESOURCES = [
    {
        "name": "instances",
        "description": "EC2 인스턴스 검색",
        "description_en": "Search EC2 instances",
        "module": "instances",
    },
    {
        "name": "network-interfaces",
        "description": "네트워크 인터페이스(ENI) 검색",
        "description_en": "Search network interfaces (ENIs)",
        "module": "network_interfaces",
    },
]
