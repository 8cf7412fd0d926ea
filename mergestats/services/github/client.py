"""Async GitHub GraphQL client using httpx."""

from logging import getLogger
from typing import Any

import httpx
from pydantic import SecretStr

from .errors import GraphQLError

logger = getLogger(__name__)

DEFAULT_GRAPHQL_URL = "https://api.github.com/graphql"


class GitHubAPIClient:
    """Async GitHub API client for GraphQL queries.

    Every request is attempted exactly once. Transport and HTTP status errors
    propagate to the caller unchanged.
    """

    def __init__(
        self,
        token: SecretStr | None,
        graphql_url: str = DEFAULT_GRAPHQL_URL,
        timeout: float = 30.0,
    ) -> None:
        """Initialize GitHub API client.

        Args:
            token: GitHub Personal Access Token, or None to send unauthenticated requests
            graphql_url: GraphQL endpoint (default: https://api.github.com/graphql)
            timeout: Request timeout in seconds
        """
        self.token = token.get_secret_value() if token else None
        self.graphql_url = graphql_url
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        else:
            logger.warning("No GitHub token configured, sending unauthenticated requests")
        return headers

    async def __aenter__(self) -> "GitHubAPIClient":
        """Enter async context manager."""
        self._client = httpx.AsyncClient(
            headers=self._headers(),
            timeout=httpx.Timeout(self.timeout, connect=10.0),
        )
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Make a single HTTP request.

        Raises:
            RuntimeError: If the client is used outside ``async with``
            httpx.HTTPStatusError: If the server answers with an error status
            httpx.TransportError: If the request could not be completed
        """
        if not self._client:
            raise RuntimeError("Client not initialized - use async with context manager")

        response = await self._client.request(method, url, **kwargs)
        response.raise_for_status()
        return response

    async def execute_graphql(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Execute a GraphQL query against GitHub's GraphQL API.

        Args:
            query: GraphQL query string
            variables: Optional dictionary of GraphQL variables

        Returns:
            The ``data`` object of the GraphQL response

        Raises:
            httpx.HTTPStatusError: If the HTTP request fails
            GraphQLError: If GraphQL response contains errors
        """
        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        response = await self._request("POST", self.graphql_url, json=payload)
        result: dict[str, Any] = response.json()

        if result.get("errors"):
            error_messages = [error.get("message", str(error)) for error in result["errors"]]
            raise GraphQLError(error_messages)

        data: dict[str, Any] = result.get("data") or {}
        return data
