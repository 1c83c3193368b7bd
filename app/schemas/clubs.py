from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_serializer, field_validator

from app.core.timeutils import isoformat_z


def blank_to_none(value):
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return value


# ---------- Club ----------
class ClubCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)

    @field_validator("description", mode="before")
    @classmethod
    def description_blank(cls, value):
        return blank_to_none(value)

    class Config:
        str_strip_whitespace = True


class ClubOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        return isoformat_z(value)
