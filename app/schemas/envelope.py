from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, model_serializer

T = TypeVar("T")


class FieldError(BaseModel):
    location: str
    field: str
    message: str
    value: Any = None


class Envelope(BaseModel, Generic[T]):
    """Uniform wrapper for every response body; unset keys are left out."""

    success: bool
    message: Optional[str] = None
    data: Optional[T] = None
    errors: Optional[list[FieldError]] = None

    @model_serializer(mode="wrap")
    def drop_empty_keys(self, handler):
        payload = handler(self)
        return {key: value for key, value in payload.items() if value is not None}


def error_body(message: str, errors: Optional[list[FieldError]] = None) -> dict:
    return Envelope[Any](success=False, message=message, errors=errors).model_dump(mode="json")


class HealthOut(BaseModel):
    success: bool
    message: str
    timestamp: str
