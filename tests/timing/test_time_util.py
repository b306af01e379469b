"""Tests for timing.util helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from timing.util import as_utc, display_duration, display_time, since_midnight, truncate_to_day, utc_now


def test_as_utc_naive_taken_as_utc():
    assert as_utc(datetime(2023, 10, 14, 15)) == datetime(2023, 10, 14, 15, tzinfo=timezone.utc)


def test_as_utc_converts_offsets():
    t = datetime(2023, 10, 14, 10, tzinfo=timezone(timedelta(hours=-5)))
    assert as_utc(t) == datetime(2023, 10, 14, 15, tzinfo=timezone.utc)
    assert as_utc(t).tzinfo == timezone.utc


def test_utc_now_is_aware_whole_seconds():
    now = utc_now()
    assert now.tzinfo == timezone.utc
    assert now.microsecond == 0


def test_truncate_to_day(fixed_now):
    assert truncate_to_day(fixed_now) == datetime(2023, 10, 14, tzinfo=timezone.utc)


def test_since_midnight(fixed_now):
    assert since_midnight(fixed_now) == timedelta(hours=15, minutes=17, seconds=30)


def test_display_time_ignores_subseconds():
    t = datetime(1970, 1, 1, 0, 0, 0, 999999, tzinfo=timezone.utc)
    assert display_time(t) == "1970-01-01 00:00:00"


@pytest.mark.parametrize("duration,expected", [
    (timedelta(0), "0 seconds"),
    (timedelta(seconds=1), "1 second"),
    (timedelta(seconds=62), "1 minute, 2 seconds"),
    (timedelta(minutes=10), "10 minutes, 0 seconds"),
    (timedelta(days=1, hours=2, minutes=3, seconds=4), "1 day, 2 hours, 3 minutes, 4 seconds"),
    (timedelta(days=5), "5 days, 0 seconds"),
    (timedelta(seconds=1.7), "1 second"),
])
def test_display_duration(duration, expected):
    assert display_duration(duration) == expected
