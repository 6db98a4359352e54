"""Tests for listing filter conversion."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from webhook_console.core.validators import (
    AttemptStatus,
    time_window,
    to_upstream_timestamp,
    upstream_attempt_status,
)


def test_naive_datetime_is_treated_as_utc():
    assert to_upstream_timestamp(datetime(2025, 1, 2, 3, 4, 5)) == "2025-01-02T03:04:05.000Z"


def test_aware_datetime_is_converted_to_utc():
    value = datetime(2025, 1, 2, 5, 4, 5, 123000, tzinfo=timezone(timedelta(hours=2)))

    assert to_upstream_timestamp(value) == "2025-01-02T03:04:05.123Z"


def test_time_window_skips_missing_bounds():
    start = datetime(2025, 1, 1, tzinfo=UTC)

    assert time_window(None, None) == {}
    assert time_window(start, None) == {"after": "2025-01-01T00:00:00.000Z"}


def test_time_window_custom_names():
    start = datetime(2025, 1, 1, tzinfo=UTC)
    end = datetime(2025, 1, 2, tzinfo=UTC)

    assert time_window(start, end, lower="since", upper="until") == {
        "since": "2025-01-01T00:00:00.000Z",
        "until": "2025-01-02T00:00:00.000Z",
    }


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        (AttemptStatus.SUCCESS, "0"),
        (AttemptStatus.FAILED, "2"),
        ("failed", "2"),
        (None, None),
    ],
)
def test_attempt_status_codes(status, expected):
    assert upstream_attempt_status(status) == expected
