"""Listing filter conversion for upstream query strings.

The console accepts ``startDate``/``endDate`` as datetimes and a
human-readable attempt status. The upstream expects ISO 8601 UTC timestamps
and numeric status codes.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum


class AttemptStatus(StrEnum):
    """Attempt status filter accepted by the console."""

    SUCCESS = "success"
    FAILED = "failed"


# Numeric codes used by the upstream attempt listing
_UPSTREAM_ATTEMPT_STATUS = {
    AttemptStatus.SUCCESS: "0",
    AttemptStatus.FAILED: "2",
}


def to_upstream_timestamp(value: datetime) -> str:
    """Format a datetime as an ISO 8601 UTC timestamp with milliseconds.

    Naive datetimes are taken to be UTC.

    Example:
        >>> to_upstream_timestamp(datetime(2025, 1, 2, 3, 4, 5))
        '2025-01-02T03:04:05.000Z'
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def time_window(
    start: datetime | None,
    end: datetime | None,
    *,
    lower: str = "after",
    upper: str = "before",
) -> dict[str, str]:
    """Build upstream query parameters for an optional time window.

    Listings use ``after``/``before``; statistics and bulk resend use
    ``since``/``until``.
    """
    params: dict[str, str] = {}
    if start is not None:
        params[lower] = to_upstream_timestamp(start)
    if end is not None:
        params[upper] = to_upstream_timestamp(end)
    return params


def upstream_attempt_status(status: AttemptStatus | None) -> str | None:
    """Map a console attempt status to the upstream numeric code."""
    if status is None:
        return None
    return _UPSTREAM_ATTEMPT_STATUS[AttemptStatus(status)]


__all__ = [
    "AttemptStatus",
    "time_window",
    "to_upstream_timestamp",
    "upstream_attempt_status",
]
