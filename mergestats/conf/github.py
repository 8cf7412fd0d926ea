from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings


class GitHubSettings(BaseSettings):
    """GitHub GraphQL API configuration settings."""

    # Personal Access Token, read from GITHUB_TOKEN
    github_token: SecretStr | None = Field(
        default=None,
        description="GitHub Personal Access Token for API authentication",
    )

    github_graphql_url: str = Field(
        default="https://api.github.com/graphql",
        description="GitHub GraphQL endpoint",
    )

    github_page_size: int = Field(
        default=100,
        description="Number of pull requests requested per page (GitHub caps this at 100)",
    )

    github_timeout: float = Field(
        default=30.0,
        description="HTTP timeout in seconds for a single GraphQL request",
    )

    @field_validator("github_page_size")
    @classmethod
    def validate_page_size(cls, v: int) -> int:
        """Validate page size is accepted by GitHub."""
        if not 1 <= v <= 100:
            raise ValueError("github_page_size must be between 1 and 100")
        return v
