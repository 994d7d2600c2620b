from datetime import datetime, timezone


def now_utc() -> datetime:
    """Return a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def iso_timestamp(dt: datetime = None) -> str:
    """Return an ISO-8601 UTC timestamp with milliseconds, e.g. 2024-05-01T10:00:00.000Z.

    Naive datetimes are assumed to already be in UTC.
    """
    dt = dt or now_utc()
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")
