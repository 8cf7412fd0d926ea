import logging
from datetime import datetime, timedelta, timezone

import pytest

from mergestats.services.intervals import (
    Interval,
    OutputFormat,
    calculate_window,
    normalize_interval,
    normalize_output_format,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, Interval.LAST_WEEK),
        ("", Interval.LAST_WEEK),
        ("last_week", Interval.LAST_WEEK),
        ("last_month", Interval.LAST_MONTH),
        ("  LAST_MONTH ", Interval.LAST_MONTH),
    ],
)
def test_normalize_interval(value, expected):
    assert normalize_interval(value) == expected


def test_invalid_interval_falls_back_with_notice(caplog):
    """An unknown interval uses last_week and logs a notice instead of failing."""
    with caplog.at_level(logging.WARNING, logger="mergestats.services.intervals"):
        assert normalize_interval("foo") == Interval.LAST_WEEK

    assert "Invalid time interval 'foo'" in caplog.text


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, OutputFormat.CONSOLE),
        ("console", OutputFormat.CONSOLE),
        ("json", OutputFormat.JSON),
        ("CSV", OutputFormat.CSV),
    ],
)
def test_normalize_output_format(value, expected):
    assert normalize_output_format(value) == expected


def test_invalid_output_format_falls_back_with_notice(caplog):
    with caplog.at_level(logging.WARNING, logger="mergestats.services.intervals"):
        assert normalize_output_format("xml") == OutputFormat.CONSOLE

    assert "Invalid output format 'xml'" in caplog.text


def test_last_week_window(now):
    start, end = calculate_window(Interval.LAST_WEEK, now=now)
    assert end == now
    assert end - start == timedelta(days=7)


def test_last_month_window(now):
    start, end = calculate_window(Interval.LAST_MONTH, now=now)
    assert end == now
    assert start == datetime(2024, 5, 15, 12, 0, 0, tzinfo=timezone.utc)


def test_last_month_window_clamps_day():
    start, _ = calculate_window(Interval.LAST_MONTH, now=datetime(2024, 3, 31, tzinfo=timezone.utc))
    assert start == datetime(2024, 2, 29, tzinfo=timezone.utc)


def test_last_month_window_crosses_year():
    start, _ = calculate_window(Interval.LAST_MONTH, now=datetime(2024, 1, 10, tzinfo=timezone.utc))
    assert start == datetime(2023, 12, 10, tzinfo=timezone.utc)


def test_window_defaults_to_aware_now():
    start, end = calculate_window(Interval.LAST_WEEK)
    assert end.tzinfo is not None
    assert start < end


def test_naive_now_is_treated_as_utc():
    _, end = calculate_window(Interval.LAST_WEEK, now=datetime(2024, 6, 15, 12, 0, 0))
    assert end.tzinfo == timezone.utc
