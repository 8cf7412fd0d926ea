import asyncio
from collections.abc import Callable, Sequence
from datetime import datetime
from functools import partial, wraps
from logging import getLogger
from pathlib import Path
from typing import Any

import typer
from pydantic import SecretStr
from rich.console import Console

from .conf.report import split_repository
from .services.formatter import render, show_progress, write_results
from .services.github.client import GitHubAPIClient
from .services.github.pullrequests import fetch_all_merged_pull_requests, fetch_pull_request_detail
from .services.intervals import (
    OutputFormat,
    calculate_window,
    normalize_interval,
    normalize_output_format,
)
from .services.metrics import RepositoryReport, build_repository_report
from .settings import settings

app = typer.Typer()
logger = getLogger(__name__)
console = Console()


def syncify(f: Callable[..., Any]) -> Callable[..., Any]:
    """This simple decorator converts an async function into a sync function,
    allowing it to work with Typer.
    """

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return asyncio.run(f(*args, **kwargs))

    return wrapper


@app.command(help=f"Display the current installed version of {settings.project_name}.")
def version() -> None:
    from . import __version__

    typer.echo(f"{settings.project_name} - {__version__}")


async def collect_reports(
    client: GitHubAPIClient,
    repositories: Sequence[str],
    window_start: datetime,
    window_end: datetime,
    output_format: OutputFormat = OutputFormat.CONSOLE,
    page_size: int = 100,
    out: Console | None = None,
) -> list[RepositoryReport]:
    """Build a report for every repository, one repository at a time.

    A failure while processing a repository is logged and the remaining
    repositories are still processed.

    Args:
        client: Open GitHub API client
        repositories: Repositories as owner/name
        window_start: Only pull requests merged at or after this moment count
        window_end: End of the reporting window
        output_format: Console reports are printed as soon as they are built
        page_size: Pull requests per page when listing
        out: Console used for progress and console output

    Returns:
        Reports of the repositories that were processed successfully, in input order
    """
    out = out or console
    reports: list[RepositoryReport] = []

    for full_name in repositories:
        try:
            owner, repo = split_repository(full_name)
            with show_progress(f"Fetching pull requests for {full_name}..."):
                pull_requests = await fetch_all_merged_pull_requests(client, owner, repo, page_size=page_size)
                report = await build_repository_report(
                    repository_name=full_name,
                    pull_requests=pull_requests,
                    window_start=window_start,
                    window_end=window_end,
                    fetch_detail=partial(fetch_pull_request_detail, client, owner, repo),
                )
        except Exception as e:
            logger.exception(f"Error fetching pull requests for {full_name}")
            out.print(f"[red]Error fetching pull requests for {full_name}:[/red] {e}")
            continue

        reports.append(report)
        render(report, output_format, out)

    return reports


def _ask(value: str | None, question: str, default: str, no_prompt: bool) -> str:
    if value is not None:
        return value
    if no_prompt:
        return default
    answer: str = typer.prompt(question, default=default)
    return answer


@app.command(help="Report merge times and change sizes of recently merged pull requests.")
@syncify
async def report(
    interval: str | None = typer.Option(
        None,
        "--interval",
        help="Time interval: last_week or last_month (prompted when omitted)",
    ),
    output_format: str | None = typer.Option(
        None,
        "--format",
        help="Output format: console, json or csv (prompted when omitted)",
    ),
    repositories: list[str] | None = typer.Option(
        None,
        "--repo",
        help="Repository as owner/name. Can be specified multiple times (default: configured repositories)",
    ),
    token: str | None = typer.Option(
        None,
        "--token",
        help="GitHub Personal Access Token (overrides env var)",
    ),
    output_dir: Path = typer.Option(
        Path("."),
        "--output-dir",
        help="Directory for output.json / output.csv",
    ),
    no_prompt: bool = typer.Option(
        False,
        "--no-prompt",
        help="Use defaults instead of prompting for missing options",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show informational log messages",
    ),
) -> None:
    """Report merge times and change sizes of recently merged pull requests."""
    if verbose:
        import logging

        logging.getLogger("mergestats").setLevel(logging.INFO)

    selected_interval = normalize_interval(
        _ask(interval, "Time interval (last_week, last_month)", settings.default_interval, no_prompt)
    )
    selected_format = normalize_output_format(
        _ask(output_format, "Output format (console, json, csv)", settings.default_output_format, no_prompt)
    )

    repos = list(repositories) if repositories else list(settings.repositories)
    for full_name in repos:
        try:
            split_repository(full_name)
        except ValueError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(1)

    window_start, window_end = calculate_window(selected_interval)
    logger.info(
        f"Collecting merged pull requests for {len(repos)} repositories "
        f"since {window_start.isoformat()} ({selected_interval.value})"
    )

    api_token = SecretStr(token) if token else settings.github_token
    async with GitHubAPIClient(
        api_token,
        graphql_url=settings.github_graphql_url,
        timeout=settings.github_timeout,
    ) as client:
        reports = await collect_reports(
            client,
            repos,
            window_start,
            window_end,
            output_format=selected_format,
            page_size=settings.github_page_size,
        )

    written = write_results(
        reports,
        selected_format,
        output_dir,
        json_file=settings.output_json_file,
        csv_file=settings.output_csv_file,
    )
    if written:
        console.print(f"Results written to [bold]{written}[/bold]")


if __name__ == "__main__":
    app()
