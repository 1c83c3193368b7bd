from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_serializer, field_validator

from app.core.timeutils import isoformat_z, parse_timestamp
from app.schemas.clubs import ClubOut, blank_to_none


# ---------- Event ----------
class EventCreate(BaseModel):
    title: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    scheduled_date: datetime

    @field_validator("description", mode="before")
    @classmethod
    def description_blank(cls, value):
        return blank_to_none(value)

    class Config:
        str_strip_whitespace = True

    @field_validator("scheduled_date", mode="before")
    @classmethod
    def parse_scheduled_date(cls, value):
        if isinstance(value, str):
            return parse_timestamp(value)
        return value


class EventOut(BaseModel):
    id: int
    club_id: int
    title: str
    description: Optional[str] = None
    scheduled_date: datetime
    created_at: datetime

    class Config:
        from_attributes = True

    @field_serializer("scheduled_date", "created_at")
    def serialize_timestamps(self, value: datetime) -> str:
        return isoformat_z(value)


class ClubEventsOut(BaseModel):
    club: ClubOut
    events: list[EventOut]
