from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime

# every timestamp column is stored timezone-aware
TIMESTAMP = DateTime(timezone=True)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize to aware UTC.

    Naive values are taken to already be UTC. SQLite hands stored
    timestamps back naive, so comparisons go through here too.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
