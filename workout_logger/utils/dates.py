from datetime import datetime, timezone

START_FORMAT = "%Y-%m-%dT%H:%M"


def to_minute(dt: datetime) -> datetime:
    """
    Drop seconds and microseconds, workouts are tracked to the minute.
    """
    return dt.replace(second=0, microsecond=0)


def format_start(dt: datetime) -> str:
    """
    Render a start time in the exchange format, e.g. 2025-10-10T12:00
    """
    return dt.strftime(START_FORMAT)


def parse_start(value: str) -> datetime:
    """
    Parse a YYYY-MM-DDTHH:MM string into a naive datetime.
    Raises ValueError on anything else.
    """
    return datetime.strptime(value, START_FORMAT)


def now() -> datetime:
    return datetime.now(timezone.utc)
