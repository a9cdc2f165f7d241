# country_console/schemas/notices.py
from enum import Enum
from pydantic import BaseModel


class NoticeLevel(str, Enum):
    success = "success"
    danger = "danger"


class Notice(BaseModel):
    id: int
    message: str
    level: NoticeLevel
    created_at: float


class LookupResult(BaseModel):
    message: str
    level: NoticeLevel
