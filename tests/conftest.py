import os

# Keep the developer's environment out of the test run
os.environ.pop("GITHUB_TOKEN", None)
os.environ.pop("REPOSITORIES", None)

from datetime import datetime, timezone

import pytest
from pydantic import SecretStr

from mergestats.services.github.client import GitHubAPIClient
from mergestats.services.github.models import PullRequestState, PullRequestSummary

NOW = datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def mock_client() -> GitHubAPIClient:
    """Create a test GitHub API client for mocking."""
    return GitHubAPIClient(token=SecretStr("test_token"))


@pytest.fixture
def now() -> datetime:
    return NOW


def make_summary(
    number: int,
    created_at: datetime,
    merged_at: datetime | None,
    title: str | None = None,
) -> PullRequestSummary:
    return PullRequestSummary(
        number=number,
        title=title or f"PR {number}",
        created_at=created_at,
        merged_at=merged_at,
        state=PullRequestState.MERGED if merged_at else PullRequestState.OPEN,
    )


def page_response(numbers: list[int], has_next_page: bool, end_cursor: str | None) -> dict:
    """Build the ``data`` object of a pull request listing page."""
    return {
        "repository": {
            "pullRequests": {
                "edges": [
                    {
                        "node": {
                            "number": number,
                            "title": f"PR {number}",
                            "createdAt": "2024-06-10T10:00:00Z",
                            "mergedAt": "2024-06-10T12:00:00Z",
                            "state": "MERGED",
                        }
                    }
                    for number in numbers
                ],
                "pageInfo": {"hasNextPage": has_next_page, "endCursor": end_cursor},
            }
        }
    }


@pytest.fixture
def summary_factory():
    """Factory for PullRequestSummary objects."""
    return make_summary


@pytest.fixture
def page_factory():
    """Factory for pull request listing pages."""
    return page_response
