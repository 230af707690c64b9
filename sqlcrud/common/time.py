"""
Time Utilities

Policy:
- Timestamps written by the library (e.g. soft-delete marks on SQLite) are naive UTC.
"""

from __future__ import annotations

from datetime import datetime, timezone

UTC = timezone.utc

# Matches the textual form MySQL returns for NOW()
SQL_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def utc_now() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(UTC)


def utc_now_naive() -> datetime:
    """Return current UTC time without tzinfo, for database storage."""
    return utc_now().replace(tzinfo=None)


def sql_now() -> str:
    """Current UTC time rendered as a SQL DATETIME literal."""
    return utc_now_naive().strftime(SQL_DATETIME_FORMAT)
