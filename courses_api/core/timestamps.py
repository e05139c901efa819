from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Mapping

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

TIMESTAMP_FIELDS = ("created_at", "updated_at")


def utcnow() -> datetime:
    """Naive UTC now, the form timestamps are stored in."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_epoch_ms(value: datetime) -> int:
    """Convert a stored datetime to integer milliseconds since the Unix epoch.

    Naive values are taken to be UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - EPOCH) // timedelta(milliseconds=1)


def with_epoch_timestamps(row: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy a row, converting its created_at/updated_at to epoch milliseconds."""
    data = dict(row)
    for field in TIMESTAMP_FIELDS:
        if isinstance(data.get(field), datetime):
            data[field] = to_epoch_ms(data[field])
    return data
