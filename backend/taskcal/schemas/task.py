from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Dict, Optional
from datetime import datetime, timezone

DAY_PATTERN = r"^\d{4}-\d{2}-\d{2}$"

class TaskUpsert(BaseModel):
    name: Optional[str] = None
    date: Optional[str] = Field(None, pattern=DAY_PATTERN)

class TaskDateUpdate(BaseModel):
    date: str = Field(..., pattern=DAY_PATTERN)

class TaskResponse(BaseModel):
    id: str
    user_id: str
    name: str
    date: Optional[str]
    bucket_id: Optional[str]
    complete: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "updated_at")
    @classmethod
    def as_utc(cls, value: datetime) -> datetime:
        # SQLite hands timestamps back naive; they are stored in UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

class CalendarStats(BaseModel):
    total: Dict[str, int]
    # completed counts per day, despite the name
    incomplete: Dict[str, int]
