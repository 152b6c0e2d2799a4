"""
core/search/results.py - 검색 결과 단위

(프로파일, 리전) 작업 하나의 결과입니다. 행과 함께 그 작업에서 발생한
오류 메시지를 담으며, 오류가 있어도 결과는 항상 하나씩 게시됩니다.

JSON 형식:
    {"profile": "dev", "region": "us-east-1", "errors": [...], "data": [...]}
    errors는 비어 있으면 생략됩니다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .schema import RowSchema


@dataclass
class ResultSet:
    """(프로파일, 리전) 하나의 검색 결과

    Attributes:
        profile: AWS 프로파일
        region: 리전
        errors: 작업 중 발생한 오류 메시지
        data: 행 목록 (정렬됨)
        sort_field: 적용된 정렬 키 (테이블 제목용)
    """

    profile: str
    region: str
    errors: list[str] = field(default_factory=list)
    data: list[Any] = field(default_factory=list)
    sort_field: str | None = None

    def __len__(self) -> int:
        return len(self.data)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def to_dict(self, schema: RowSchema) -> dict[str, Any]:
        """JSON 직렬화용 딕셔너리"""
        payload: dict[str, Any] = {"profile": self.profile, "region": self.region}
        if self.errors:
            payload["errors"] = list(self.errors)
        payload["data"] = [schema.to_dict(row) for row in self.data]
        return payload

    @classmethod
    def from_dict(cls, payload: dict[str, Any], schema: RowSchema) -> ResultSet:
        """to_dict의 역변환"""
        return cls(
            profile=payload.get("profile", ""),
            region=payload.get("region", ""),
            errors=list(payload.get("errors") or []),
            data=[schema.from_dict(row) for row in payload.get("data") or []],
        )
