"""Exceptions raised while talking to the GitHub GraphQL API."""


class GitHubError(Exception):
    """Base class for GitHub API errors."""


class GraphQLError(GitHubError, ValueError):
    """The GraphQL response carried an ``errors`` block."""

    def __init__(self, messages: list[str]) -> None:
        self.messages = messages
        super().__init__(f"GraphQL errors: {'; '.join(messages)}")


class RepositoryNotFoundError(GitHubError):
    def __init__(self, owner: str, repo: str) -> None:
        self.owner = owner
        self.repo = repo
        super().__init__(f"Repository not found: {owner}/{repo}")


class PullRequestNotFoundError(GitHubError):
    def __init__(self, owner: str, repo: str, number: int) -> None:
        self.owner = owner
        self.repo = repo
        self.number = number
        super().__init__(f"Pull request not found: {owner}/{repo}#{number}")
