"""
Request validation rules.

Every operation declares an ordered list of rules. A rule is a pure function
that looks at the raw request sources (``query``, ``params``, ``body``) and
returns a FieldError or None. All rules run; the first error becomes the
primary message of the 400 response and the full list goes under ``errors``.
"""
import re
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional

from app.core.timeutils import parse_timestamp
from app.schemas.envelope import FieldError

Sources = Mapping[str, Mapping[str, Any]]
Rule = Callable[[Sources], Optional[FieldError]]

_INT_PATTERN = re.compile(r"\+?0*([0-9]{1,19})")
_MAX_ID = 2**63 - 1

DATE_FORMAT_MESSAGE = "Invalid date format. Use ISO 8601 format (YYYY-MM-DDTHH:mm:ss)"


class RequestInvalid(Exception):
    def __init__(self, errors: list[FieldError]):
        super().__init__(errors[0].message)
        self.errors = errors

    @property
    def message(self) -> str:
        return self.errors[0].message


def _lookup(sources: Sources, location: str, field: str) -> Any:
    return sources.get(location, {}).get(field)


def required_text(field: str, location: str = "body", *, max_length: int, missing: str, length: str) -> Rule:
    def rule(sources: Sources) -> Optional[FieldError]:
        value = _lookup(sources, location, field)
        if not isinstance(value, str) or not value.strip():
            return FieldError(location=location, field=field, message=missing, value=value)
        if len(value.strip()) > max_length:
            return FieldError(location=location, field=field, message=length, value=value)
        return None

    return rule


def optional_text(
    field: str,
    location: str = "body",
    *,
    message: str,
    min_length: int = 0,
    max_length: Optional[int] = None,
) -> Rule:
    def rule(sources: Sources) -> Optional[FieldError]:
        value = _lookup(sources, location, field)
        if value is None:
            return None
        if not isinstance(value, str):
            return FieldError(location=location, field=field, message=message, value=value)
        size = len(value.strip())
        if size < min_length or (max_length is not None and size > max_length):
            return FieldError(location=location, field=field, message=message, value=value)
        return None

    return rule


def positive_int(field: str, location: str = "params", *, message: str) -> Rule:
    def rule(sources: Sources) -> Optional[FieldError]:
        value = _lookup(sources, location, field)
        if isinstance(value, int) and not isinstance(value, bool):
            number = value
        else:
            match = _INT_PATTERN.fullmatch(value) if isinstance(value, str) else None
            number = int(match.group(1)) if match else 0
        if not 1 <= number <= _MAX_ID:
            return FieldError(location=location, field=field, message=message, value=value)
        return None

    return rule


def future_timestamp(
    field: str,
    location: str = "body",
    *,
    message: str,
    clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
) -> Rule:
    """The value must be an ISO 8601 date/time strictly after ``clock()`` at check time."""

    def rule(sources: Sources) -> Optional[FieldError]:
        value = _lookup(sources, location, field)
        if not isinstance(value, str):
            return FieldError(location=location, field=field, message=DATE_FORMAT_MESSAGE, value=value)
        try:
            scheduled = parse_timestamp(value)
        except ValueError:
            return FieldError(location=location, field=field, message=DATE_FORMAT_MESSAGE, value=value)
        if scheduled <= clock():
            return FieldError(location=location, field=field, message=message, value=value)
        return None

    return rule


def run_rules(rules: list[Rule], sources: Sources) -> list[FieldError]:
    return [error for error in (rule(sources) for rule in rules) if error is not None]


def require_valid(rules: list[Rule], sources: Sources) -> None:
    errors = run_rules(rules, sources)
    if errors:
        raise RequestInvalid(errors)


SEARCH_CLUBS_QUERY: list[Rule] = [
    optional_text("search", "query", min_length=1, message="Search term must not be empty"),
]

CREATE_CLUB_BODY: list[Rule] = [
    required_text(
        "name",
        max_length=100,
        missing="Club name is required",
        length="Club name must be between 1 and 100 characters",
    ),
    optional_text("description", max_length=500, message="Club description must be 500 characters or less"),
]

CLUB_ID_PARAM: list[Rule] = [
    positive_int("id", message="Invalid club ID"),
]

CREATE_EVENT_BODY: list[Rule] = [
    required_text(
        "title",
        max_length=100,
        missing="Event title is required",
        length="Event title must be between 1 and 100 characters",
    ),
    optional_text("description", max_length=500, message="Event description must be 500 characters or less"),
    future_timestamp("scheduled_date", message="Event date must be in the future"),
]
