"""Time window and output format selection."""

import calendar
from datetime import datetime, timedelta, timezone
from enum import Enum
from logging import getLogger

logger = getLogger(__name__)


class Interval(str, Enum):
    LAST_WEEK = "last_week"
    LAST_MONTH = "last_month"


class OutputFormat(str, Enum):
    CONSOLE = "console"
    JSON = "json"
    CSV = "csv"


DEFAULT_INTERVAL = Interval.LAST_WEEK
DEFAULT_OUTPUT_FORMAT = OutputFormat.CONSOLE


def normalize_interval(value: str | None) -> Interval:
    """Normalize a user supplied interval name.

    Unrecognized values fall back to ``last_week`` and log a notice.

    Args:
        value: Interval string (last_week, last_month, or None)

    Returns:
        Interval member
    """
    if not value or not value.strip():
        return DEFAULT_INTERVAL

    normalized = value.strip().lower()
    try:
        return Interval(normalized)
    except ValueError:
        logger.warning(f"Invalid time interval '{value}', defaulting to '{DEFAULT_INTERVAL.value}'")
        return DEFAULT_INTERVAL


def normalize_output_format(value: str | None) -> OutputFormat:
    """Normalize a user supplied output format, falling back to console."""
    if not value or not value.strip():
        return DEFAULT_OUTPUT_FORMAT

    normalized = value.strip().lower()
    try:
        return OutputFormat(normalized)
    except ValueError:
        logger.warning(f"Invalid output format '{value}', defaulting to '{DEFAULT_OUTPUT_FORMAT.value}'")
        return DEFAULT_OUTPUT_FORMAT


def _one_month_before(moment: datetime) -> datetime:
    year, month = (moment.year, moment.month - 1) if moment.month > 1 else (moment.year - 1, 12)
    # Clamp e.g. March 31st to the last day of February
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def calculate_window(interval: Interval, now: datetime | None = None) -> tuple[datetime, datetime]:
    """Calculate the (start, end) window for an interval.

    Args:
        interval: Selected interval
        now: End of the window (default: current UTC time)

    Returns:
        Tuple of (start, end) datetime objects (timezone-aware)
    """
    end = now or datetime.now(tz=timezone.utc)
    if end.tzinfo is None:
        end = end.replace(tzinfo=timezone.utc)

    if interval == Interval.LAST_MONTH:
        start = _one_month_before(end)
    else:
        start = end - timedelta(days=7)

    return start, end
