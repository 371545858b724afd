import re
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, TypeAdapter, field_validator

# 2024-01-01T00:00:00Z, 2024-01-01T09:00:00.123+09:00
RFC3339_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})$")

class GuestbookEntry(BaseModel):
    # 백엔드가 빠뜨리거나 null로 보낸 필드는 빈 값으로 취급
    model_config = ConfigDict(extra="ignore", frozen=True)

    author: str = ""
    message: str = ""
    date: Optional[datetime] = None # 백엔드에서 부여

    @field_validator("author", "message", mode="before")
    @classmethod
    def _null_to_empty(cls, v):
        return "" if v is None else v

    @field_validator("date", mode="before")
    @classmethod
    def _rfc3339_only(cls, v):
        # 숫자 타임스탬프나 날짜만 있는 문자열은 거부
        if v is None or isinstance(v, datetime):
            return v
        if not isinstance(v, str) or not RFC3339_RE.match(v):
            raise ValueError("date must be an RFC 3339 timestamp string")
        return v

class GuestbookCreate(BaseModel):
    author: str
    message: str


# GET /messages 응답 본문 (null → 빈 목록, null 원소 → 빈 항목)
GuestbookEntryList = TypeAdapter(Optional[List[Optional[GuestbookEntry]]])

def decode_entries(raw: bytes) -> List[GuestbookEntry]:
    entries = GuestbookEntryList.validate_json(raw) or []
    return [e if e is not None else GuestbookEntry() for e in entries]
