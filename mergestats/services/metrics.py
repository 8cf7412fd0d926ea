"""Merge latency and change size statistics per repository."""

import math
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from logging import getLogger
from typing import Any

from .github.models import PullRequestDetail, PullRequestSummary

logger = getLogger(__name__)

DetailFetcher = Callable[[int], Awaitable[PullRequestDetail]]


def time_to_merge_minutes(created_at: datetime, merged_at: datetime) -> float:
    """Elapsed minutes between creation and merge of a pull request."""
    return (merged_at - created_at).total_seconds() / 60


def filter_merged_since(
    pull_requests: Iterable[PullRequestSummary],
    window_start: datetime,
) -> list[PullRequestSummary]:
    """Keep pull requests merged at or after ``window_start``, preserving order.

    Entries without a merge timestamp are dropped.
    """
    kept = [pr for pr in pull_requests if pr.merged_at is not None and pr.merged_at >= window_start]
    return kept


@dataclass
class RunningStatistic:
    """Sum, minimum and maximum of a stream of values.

    Until a value is added the statistic has no data; ``minimum``, ``maximum``
    and ``average`` then report 0.
    """

    count: int = 0
    total: float = 0.0
    min_value: float | None = None
    max_value: float | None = None

    def add(self, value: float) -> None:
        self.count += 1
        self.total += value
        self.min_value = value if self.min_value is None else min(self.min_value, value)
        self.max_value = value if self.max_value is None else max(self.max_value, value)

    @property
    def has_data(self) -> bool:
        return self.count > 0

    @property
    def average(self) -> float:
        return self.total / self.count if self.count else 0.0

    @property
    def minimum(self) -> float:
        return self.min_value if self.min_value is not None else 0.0

    @property
    def maximum(self) -> float:
        return self.max_value if self.max_value is not None else 0.0


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class PullRequestMetrics:
    """Per pull request figures listed in a repository report."""

    number: int
    title: str
    time_to_merge_minutes: float
    lines_added: int
    lines_deleted: int

    @property
    def lines_changed(self) -> int:
        return self.lines_added + self.lines_deleted


@dataclass(frozen=True)
class RepositoryReport:
    """Aggregated merge statistics of one repository over a time window."""

    repository_name: str
    window_start: datetime
    window_end: datetime
    pull_requests: tuple[PullRequestMetrics, ...] = field(default_factory=tuple)
    average_time_to_merge: float = 0.0
    min_time_to_merge: float = 0.0
    max_time_to_merge: float = 0.0
    deviation_min_from_average: float = 0.0
    deviation_max_from_average: float = 0.0
    average_lines_changed: int = 0
    min_lines_changed: int = 0
    max_lines_changed: int = 0

    @property
    def number_of_prs(self) -> int:
        return len(self.pull_requests)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "repository_name": self.repository_name,
            "starttime": self.window_start.date().isoformat(),
            "endtime": self.window_end.date().isoformat(),
            "number_of_prs": self.number_of_prs,
            "pull_requests": [
                {
                    "number": pr.number,
                    "title": pr.title,
                    "time_to_merge_minutes": round(pr.time_to_merge_minutes, 2),
                    "lines_added": pr.lines_added,
                    "lines_deleted": pr.lines_deleted,
                }
                for pr in self.pull_requests
            ],
            "average_time_to_merge": self.average_time_to_merge,
            "min_time_to_merge": self.min_time_to_merge,
            "max_time_to_merge": self.max_time_to_merge,
            "deviation_min_from_average": self.deviation_min_from_average,
            "deviation_max_from_average": self.deviation_max_from_average,
            "average_lines_changed": self.average_lines_changed,
            "min_lines_changed": self.min_lines_changed,
            "max_lines_changed": self.max_lines_changed,
        }


async def build_repository_report(
    repository_name: str,
    pull_requests: Iterable[PullRequestSummary],
    window_start: datetime,
    window_end: datetime,
    fetch_detail: DetailFetcher,
) -> RepositoryReport:
    """Compute the report of one repository.

    Pull requests merged before ``window_start`` (or not merged at all) are
    skipped. ``fetch_detail`` is awaited once per remaining pull request, one
    at a time.

    Args:
        repository_name: Full repository name (owner/name)
        pull_requests: Merged pull requests of the repository
        window_start: Start of the time window
        window_end: End of the time window
        fetch_detail: Coroutine function returning the detail of a pull request number

    Returns:
        RepositoryReport with times rounded to 2 decimals and the average
        lines changed rounded to the nearest integer
    """
    qualifying = filter_merged_since(pull_requests, window_start)
    logger.debug(f"{len(qualifying)} pull requests of {repository_name} merged since {window_start.isoformat()}")

    merge_times = RunningStatistic()
    lines_changed = RunningStatistic()
    metrics: list[PullRequestMetrics] = []

    for pr in qualifying:
        if pr.merged_at is None:  # excluded by filter_merged_since
            continue
        minutes = time_to_merge_minutes(pr.created_at, pr.merged_at)
        detail = await fetch_detail(pr.number)

        merge_times.add(minutes)
        lines_changed.add(detail.lines_changed)
        metrics.append(
            PullRequestMetrics(
                number=pr.number,
                title=pr.title,
                time_to_merge_minutes=minutes,
                lines_added=detail.additions,
                lines_deleted=detail.deletions,
            )
        )

    if not merge_times.has_data:
        logger.info(f"No pull requests of {repository_name} merged since {window_start.isoformat()}")

    average = merge_times.average
    return RepositoryReport(
        repository_name=repository_name,
        window_start=window_start,
        window_end=window_end,
        pull_requests=tuple(metrics),
        average_time_to_merge=round(average, 2),
        min_time_to_merge=round(merge_times.minimum, 2),
        max_time_to_merge=round(merge_times.maximum, 2),
        deviation_min_from_average=max(0.0, round(average - merge_times.minimum, 2)),
        deviation_max_from_average=max(0.0, round(merge_times.maximum - average, 2)),
        average_lines_changed=round_half_up(lines_changed.average),
        min_lines_changed=int(lines_changed.minimum),
        max_lines_changed=int(lines_changed.maximum),
    )
