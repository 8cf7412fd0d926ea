"""Fetch merged pull requests and their change sizes from GitHub."""

from logging import getLogger
from typing import Any

from .client import GitHubAPIClient
from .errors import PullRequestNotFoundError, RepositoryNotFoundError
from .models import PullRequestDetail, PullRequestSummary

logger = getLogger(__name__)

MERGED_PULL_REQUESTS_QUERY = """
query ($owner: String!, $repo: String!, $pageSize: Int!, $endCursor: String) {
  repository(owner: $owner, name: $repo) {
    pullRequests(first: $pageSize, after: $endCursor, states: MERGED) {
      edges {
        node {
          number
          title
          createdAt
          mergedAt
          state
        }
      }
      pageInfo {
        hasNextPage
        endCursor
      }
    }
  }
}
"""

PULL_REQUEST_DETAIL_QUERY = """
query ($owner: String!, $repo: String!, $number: Int!) {
  repository(owner: $owner, name: $repo) {
    pullRequest(number: $number) {
      additions
      deletions
    }
  }
}
"""


async def fetch_all_merged_pull_requests(
    client: GitHubAPIClient,
    owner: str,
    repo: str,
    page_size: int = 100,
) -> list[PullRequestSummary]:
    """Fetch every merged pull request of a repository.

    Pages are requested one after another, carrying the ``endCursor`` of the
    previous page, until the server reports ``hasNextPage = false``. Pull
    requests are returned in the order the server sent them.

    Args:
        client: GitHub API client
        owner: Repository owner
        repo: Repository name
        page_size: Pull requests per page (max 100)

    Returns:
        List of merged pull request summaries

    Raises:
        RepositoryNotFoundError: If the repository does not exist or is not visible
        httpx.HTTPError: If a request fails
        GraphQLError: If the API answers with GraphQL errors
    """
    pull_requests: list[PullRequestSummary] = []
    end_cursor: str | None = None
    has_next_page = True
    page = 0

    while has_next_page:
        page += 1
        variables: dict[str, Any] = {
            "owner": owner,
            "repo": repo,
            "pageSize": page_size,
            "endCursor": end_cursor,
        }
        data = await client.execute_graphql(MERGED_PULL_REQUESTS_QUERY, variables)

        repository = data.get("repository")
        if repository is None:
            raise RepositoryNotFoundError(owner, repo)

        connection = repository["pullRequests"]
        edges = connection.get("edges") or []
        pull_requests.extend(PullRequestSummary.from_node(edge["node"]) for edge in edges)

        page_info = connection["pageInfo"]
        has_next_page = bool(page_info.get("hasNextPage"))
        end_cursor = page_info.get("endCursor")
        logger.debug(f"Fetched page {page} of {owner}/{repo}: {len(edges)} pull requests (more: {has_next_page})")

    logger.info(f"Fetched {len(pull_requests)} merged pull requests for {owner}/{repo} in {page} page(s)")
    return pull_requests


async def fetch_pull_request_detail(
    client: GitHubAPIClient,
    owner: str,
    repo: str,
    number: int,
) -> PullRequestDetail:
    """Fetch additions and deletions for a single pull request.

    One request is made per call.

    Raises:
        RepositoryNotFoundError: If the repository does not exist
        PullRequestNotFoundError: If the pull request does not exist
        httpx.HTTPError: If the request fails
    """
    logger.debug(f"Fetching details for {owner}/{repo}#{number}")
    data = await client.execute_graphql(
        PULL_REQUEST_DETAIL_QUERY,
        {"owner": owner, "repo": repo, "number": number},
    )

    repository = data.get("repository")
    if repository is None:
        raise RepositoryNotFoundError(owner, repo)

    node = repository.get("pullRequest")
    if node is None:
        raise PullRequestNotFoundError(owner, repo, number)

    return PullRequestDetail(additions=int(node["additions"]), deletions=int(node["deletions"]))
