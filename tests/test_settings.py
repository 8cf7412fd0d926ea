"""Tests for settings configuration."""

import pytest
from pydantic import ValidationError

from mergestats.conf.github import GitHubSettings
from mergestats.conf.report import ReportSettings, split_repository
from mergestats.conf.settings import Settings
from mergestats.settings import settings


def test_settings_is_settings_class():
    assert isinstance(settings, Settings)


def test_settings_inherits_sections():
    assert issubclass(Settings, GitHubSettings)
    assert issubclass(Settings, ReportSettings)


def test_project_name():
    assert settings.project_name == "mergestats"


def test_defaults():
    test_settings = Settings()
    assert test_settings.github_token is None
    assert test_settings.github_graphql_url == "https://api.github.com/graphql"
    assert test_settings.github_page_size == 100
    assert test_settings.repositories == ["SAP/terraform-exporter-btp", "SAP/terraform-provider-btp"]
    assert test_settings.default_interval == "last_week"
    assert test_settings.default_output_format == "console"
    assert test_settings.output_json_file == "output.json"
    assert test_settings.output_csv_file == "output.csv"


def test_token_from_environment(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_example")
    test_settings = Settings()
    assert test_settings.github_token is not None
    assert test_settings.github_token.get_secret_value() == "ghp_example"
    assert "ghp_example" not in repr(test_settings)


def test_repositories_from_environment(monkeypatch):
    monkeypatch.setenv("REPOSITORIES", '["octo/one", "octo/two"]')
    assert Settings().repositories == ["octo/one", "octo/two"]


@pytest.mark.parametrize("page_size", [0, 101])
def test_page_size_validation(page_size):
    with pytest.raises(ValidationError):
        GitHubSettings(github_page_size=page_size)


@pytest.mark.parametrize("repository", ["no-slash", "/name", "owner/", "a/b/c"])
def test_repository_validation(repository):
    with pytest.raises(ValidationError):
        ReportSettings(repositories=[repository])


def test_split_repository():
    assert split_repository("octo/one") == ("octo", "one")


@pytest.mark.parametrize("repository", ["no-slash", "/name", "owner/", "a/b/c"])
def test_split_repository_rejects_malformed(repository):
    with pytest.raises(ValueError, match="expected owner/name"):
        split_repository(repository)
