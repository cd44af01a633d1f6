"""Time helpers.

SQLite hands back naive datetimes even for ``DateTime(timezone=True)``
columns; everything the engine compares goes through ``ensure_utc`` first.
"""
from datetime import datetime
from typing import Optional

import pytz


def utcnow() -> datetime:
    return datetime.now(pytz.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Return ``value`` as an aware UTC datetime (naive values are assumed UTC)."""
    if value is None:
        return None
    if value.tzinfo is None:
        return pytz.utc.localize(value)
    return value.astimezone(pytz.utc)
