"""
Common utility functions used across multiple routes and services.
"""

import secrets
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how the DB columns store datetimes."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def iso_format(dt: datetime) -> str:
    """Format datetime as ISO string with Z suffix."""
    return dt.isoformat() + "Z"


def generate_code(digits: int = 6) -> str:
    """Random zero-padded numeric code (verification and reset codes)."""
    return str(secrets.randbelow(10**digits)).zfill(digits)


def lesson_sort_key(lesson_id: str) -> tuple[int, int, str]:
    """Order lesson ids numerically when they are numbers, lexically otherwise."""
    try:
        return (0, int(lesson_id), "")
    except (TypeError, ValueError):
        return (1, 0, str(lesson_id))
