"""Console and logging setup for CLI commands."""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..check import CheckSummary

console = Console()


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    # PyGitHub logs every request at DEBUG
    logging.getLogger("github").setLevel(logging.WARNING)


def print_summary(summary: CheckSummary) -> None:
    table = Table(title="Dependency check")
    table.add_column("Result")
    table.add_column("Count", justify="right")
    table.add_column("Issues")

    def numbers(items: list[int]) -> str:
        return ", ".join(f"#{n}" for n in items)

    table.add_row("Checked", str(len(summary.checked)), numbers(summary.checked))
    table.add_row("Blocked", str(len(summary.blocked)), numbers(summary.blocked))
    table.add_row("Skipped", str(len(summary.skipped)), numbers(summary.skipped))
    table.add_row(
        "Failed",
        str(len(summary.failed)),
        numbers([number for number, _ in summary.failed]),
    )
    console.print(table)

    for number, error in summary.failed:
        console.print(f"❌ [red]#{number}: {error}[/red]")
