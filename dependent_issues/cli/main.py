"""Main CLI entry point."""

import typer
from dotenv import load_dotenv

from .check import check, extract
from .output import console

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="dependent-issues",
    help="Track issue and pull request dependencies on GitHub",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


app.command(name="check", context_settings={"help_option_names": ["-h", "--help"]})(
    check
)
app.command(name="extract", context_settings={"help_option_names": ["-h", "--help"]})(
    extract
)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from dependent_issues import __version__

    console.print(f"Dependent Issues v{__version__}")


if __name__ == "__main__":
    app()
