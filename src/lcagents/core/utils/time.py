from __future__ import annotations

"""Timezone-aware time helpers."""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Return the current timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def utc_timestamp(dt: Optional[datetime] = None) -> str:
    """Return an ISO 8601 UTC timestamp with millisecond precision and ``Z`` suffix."""
    dt = dt or utc_now()
    ts = dt.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return ts.replace("+00:00", "Z")


def filesystem_timestamp(dt: Optional[datetime] = None) -> str:
    """Return :func:`utc_timestamp` with ``:`` and ``.`` replaced by ``-``.

    Example:
        >>> filesystem_timestamp(datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc))
        '2024-01-02T03-04-05-678Z'
    """
    return utc_timestamp(dt).replace(":", "-").replace(".", "-")


__all__ = ["utc_now", "utc_timestamp", "filesystem_timestamp"]
