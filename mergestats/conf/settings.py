from pydantic_settings import SettingsConfigDict

from .github import GitHubSettings
from .report import ReportSettings


class Settings(GitHubSettings, ReportSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    project_name: str = "mergestats"
    debug: bool = False
