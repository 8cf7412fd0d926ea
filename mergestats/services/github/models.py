from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class PullRequestState(str, Enum):
    """Pull request states reported by the GraphQL API."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"
    MERGED = "MERGED"


def parse_github_datetime(value: str | None) -> datetime | None:
    """Parse a GitHub ISO-8601 timestamp (``2024-01-01T12:00:00Z``) into an aware datetime."""
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@dataclass(frozen=True)
class PullRequestSummary:
    """Pull request as returned by the paginated listing."""

    number: int
    title: str
    created_at: datetime
    merged_at: datetime | None
    state: PullRequestState

    @classmethod
    def from_node(cls, node: dict[str, Any]) -> "PullRequestSummary":
        """Build a summary from a GraphQL ``pullRequests`` node."""
        created_at = parse_github_datetime(node["createdAt"])
        if created_at is None:
            raise ValueError(f"Pull request #{node.get('number')} has no createdAt")
        return cls(
            number=int(node["number"]),
            title=node.get("title") or "",
            created_at=created_at,
            merged_at=parse_github_datetime(node.get("mergedAt")),
            state=PullRequestState(node.get("state", PullRequestState.MERGED.value)),
        )


@dataclass(frozen=True)
class PullRequestDetail:
    """Change-size counters of a single pull request."""

    additions: int
    deletions: int

    def __post_init__(self) -> None:
        if self.additions < 0 or self.deletions < 0:
            raise ValueError(f"additions and deletions must be non-negative, got +{self.additions} -{self.deletions}")

    @property
    def lines_changed(self) -> int:
        return self.additions + self.deletions
