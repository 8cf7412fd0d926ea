import json
from collections.abc import Sequence
from logging import getLogger
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from .intervals import OutputFormat
from .metrics import RepositoryReport

logger = getLogger(__name__)

CSV_HEADER = [
    "repository_name",
    "starttime",
    "endtime",
    "number_of_prs",
    "average_time_to_merge",
    "min_time_to_merge",
    "max_time_to_merge",
    "average_lines_changed",
    "min_lines_changed",
    "max_lines_Changed",
]


def render_console(report: RepositoryReport, console: Console | None = None) -> None:
    """Display a repository report using Rich.

    Args:
        report: Report to display
        console: Console to print to (default: a new stdout console)
    """
    console = console or Console()

    if not report.pull_requests:
        console.print(
            Panel(
                f"[yellow]No pull requests merged in the specified period for {report.repository_name}.[/yellow]",
                title=report.repository_name,
                border_style="yellow",
            )
        )
        return

    table = Table(
        title=f"Pull Requests for {report.repository_name}",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("PR #", style="cyan", no_wrap=True)
    table.add_column("Title", style="white")
    table.add_column("Time to merge (min)", justify="right", no_wrap=True)
    table.add_column("Lines changed", justify="right", no_wrap=True)
    table.add_column("Added", style="green", justify="right", no_wrap=True)
    table.add_column("Deleted", style="red", justify="right", no_wrap=True)

    for pr in report.pull_requests:
        table.add_row(
            str(pr.number),
            pr.title,
            f"{pr.time_to_merge_minutes:.2f}",
            str(pr.lines_changed),
            f"+{pr.lines_added}",
            f"-{pr.lines_deleted}",
        )

    console.print(table)
    _display_summary_statistics(report, console)


def _display_summary_statistics(report: RepositoryReport, console: Console) -> None:
    summary_lines = [
        f"[bold]Period:[/bold] {report.window_start.date().isoformat()} to {report.window_end.date().isoformat()}",
        f"[bold]Merged Pull Requests:[/bold] {report.number_of_prs}",
        "",
        "[bold]Time to merge:[/bold]",
        f"  Average: {report.average_time_to_merge:.2f} minutes ({_hours(report.average_time_to_merge)} hours)",
        f"  Minimum: {report.min_time_to_merge:.2f} minutes ({_hours(report.min_time_to_merge)} hours)",
        f"  Maximum: {report.max_time_to_merge:.2f} minutes ({_hours(report.max_time_to_merge)} hours)",
        f"  Average - minimum: {report.deviation_min_from_average:.2f} minutes",
        f"  Maximum - average: {report.deviation_max_from_average:.2f} minutes",
        "",
        "[bold]Lines changed:[/bold]",
        f"  Average: {report.average_lines_changed:,}",
        f"  Minimum: {report.min_lines_changed:,}",
        f"  Maximum: {report.max_lines_changed:,}",
    ]
    console.print(Panel("\n".join(summary_lines), title="Summary", border_style="cyan"))
    console.print()


def _hours(minutes: float) -> str:
    return f"{minutes / 60:.2f}"


def render(report: RepositoryReport, output_format: OutputFormat, console: Console | None = None) -> None:
    """Emit a single repository report.

    Only console output is printed per repository; file formats are written
    once for the whole run by ``write_results``.
    """
    if output_format == OutputFormat.CONSOLE:
        render_console(report, console)
    else:
        logger.debug(f"Collected report for {report.repository_name} for {output_format.value} output")


def format_csv(reports: Sequence[RepositoryReport]) -> str:
    """Format reports as CSV text, one row per repository.

    Fields are joined with commas without quoting.
    """
    lines = [",".join(CSV_HEADER)]
    for report in reports:
        row = [
            report.repository_name,
            report.window_start.date().isoformat(),
            report.window_end.date().isoformat(),
            report.number_of_prs,
            report.average_time_to_merge,
            report.min_time_to_merge,
            report.max_time_to_merge,
            report.average_lines_changed,
            report.min_lines_changed,
            report.max_lines_changed,
        ]
        lines.append(",".join(str(value) for value in row))
    return "\n".join(lines) + "\n"


def format_json(reports: Sequence[RepositoryReport]) -> str:
    """Format reports as a pretty-printed JSON array."""
    return json.dumps([report.to_dict() for report in reports], indent=2)


def write_csv(reports: Sequence[RepositoryReport], path: str | Path) -> Path:
    path = Path(path)
    path.write_text(format_csv(reports), encoding="utf-8")
    logger.info(f"Wrote {len(reports)} repository rows to {path}")
    return path


def write_json(reports: Sequence[RepositoryReport], path: str | Path) -> Path:
    path = Path(path)
    path.write_text(format_json(reports), encoding="utf-8")
    logger.info(f"Wrote {len(reports)} repository reports to {path}")
    return path


def write_results(
    reports: Sequence[RepositoryReport],
    output_format: OutputFormat,
    output_dir: str | Path,
    json_file: str = "output.json",
    csv_file: str = "output.csv",
) -> Path | None:
    """Write the collected reports for file based formats.

    Returns:
        Path of the written file, or None for console output

    Raises:
        OSError: If the file cannot be written
    """
    if output_format == OutputFormat.JSON:
        return write_json(reports, Path(output_dir) / json_file)
    if output_format == OutputFormat.CSV:
        return write_csv(reports, Path(output_dir) / csv_file)
    return None


def show_progress(message: str) -> Progress:
    """Create and return a progress spinner.

    Args:
        message: Message to display with spinner

    Returns:
        Progress context manager
    """
    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        transient=True,
    )
    progress.add_task(description=message, total=None)
    return progress
