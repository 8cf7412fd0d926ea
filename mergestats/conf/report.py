from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


def split_repository(full_name: str) -> tuple[str, str]:
    """Split an owner/name repository string.

    Raises:
        ValueError: If the string is not exactly owner/name
    """
    owner, _, name = full_name.partition("/")
    if not owner or not name or "/" in name:
        raise ValueError(f"Invalid repository '{full_name}', expected owner/name")
    return owner, name


class ReportSettings(BaseSettings):
    """Settings for which repositories are measured and where results go."""

    repositories: list[str] = Field(
        default=["SAP/terraform-exporter-btp", "SAP/terraform-provider-btp"],
        description="Repositories to measure, as owner/name",
    )

    default_interval: str = Field(
        default="last_week",
        description="Time interval used when none is given (last_week or last_month)",
    )
    default_output_format: str = Field(
        default="console",
        description="Output format used when none is given (console, json or csv)",
    )

    output_json_file: str = "output.json"
    output_csv_file: str = "output.csv"

    @field_validator("repositories")
    @classmethod
    def validate_repositories(cls, v: list[str]) -> list[str]:
        """Validate every repository is written as owner/name."""
        for full_name in v:
            split_repository(full_name)
        return v
