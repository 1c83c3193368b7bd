from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current time as a naive UTC datetime, the form timestamps are stored in."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO 8601 date or date-time into an aware UTC datetime.
    Values without an offset are read as UTC. Raises ValueError when malformed.
    """
    try:
        parsed = datetime.fromisoformat(value.strip())
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except OverflowError as e:
        raise ValueError(str(e)) from e


def to_storage(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def isoformat_z(value: datetime) -> str:
    # 2030-01-01T10:00:00.000Z
    return to_storage(value).isoformat(timespec="milliseconds") + "Z"
