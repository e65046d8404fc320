"""Standardized CLI option definitions shared by all commands."""

import typer

REPO_OPTION = typer.Option(
    None,
    "--repo",
    "-r",
    help="Repository as owner/repo (defaults to GITHUB_REPOSITORY env var)",
)

ISSUE_NUMBER_OPTION = typer.Option(
    None, "--issue-number", "-i", help="Check only this issue or pull request"
)

LABEL_OPTION = typer.Option(
    None, "--label", "-l", help="Label for blocked issues (overrides INPUT_LABEL)"
)

KEYWORDS_OPTION = typer.Option(
    None,
    "--keywords",
    "-k",
    help="Comma-separated dependency keywords (overrides INPUT_KEYWORDS)",
)

CHECK_ISSUES_OPTION = typer.Option(
    None,
    "--check-issues/--no-check-issues",
    help="Check open issues as well as pull requests",
)

TOKEN_OPTION = typer.Option(
    None, "--token", "-t", help="GitHub API token (defaults to GITHUB_TOKEN env var)"
)

VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable debug logging")
