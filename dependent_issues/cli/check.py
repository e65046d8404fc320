"""CLI commands for checking issue dependencies."""

import asyncio
import os

import typer
from rich.table import Table

from ..check import CheckSummary, check_issues, resolve_dependencies
from ..config import ActionConfig
from ..context import get_action_context, read_event_issue_number, resolve_repository
from ..dependencies import DependencyExtractor, DependencyResolver
from ..exceptions import ConfigurationError, DependentIssuesError
from ..github_client.client import GitHubClient
from ..github_client.models import Dependency, Repository, format_dependency
from .options import (
    CHECK_ISSUES_OPTION,
    ISSUE_NUMBER_OPTION,
    KEYWORDS_OPTION,
    LABEL_OPTION,
    REPO_OPTION,
    TOKEN_OPTION,
    VERBOSE_OPTION,
)
from .output import console, print_summary, setup_logging


def _build_clients(token: str | None) -> tuple[GitHubClient, GitHubClient]:
    """Return the write client and the client used to resolve dependencies."""
    client = GitHubClient(token=token)
    read_token = os.getenv("GITHUB_READ_TOKEN")
    read_only_client = GitHubClient(token=read_token) if read_token else client
    return client, read_only_client


async def _run_check(
    client: GitHubClient,
    read_only_client: GitHubClient,
    config: ActionConfig,
    repo: Repository,
    issue_number: int | None,
) -> CheckSummary:
    context = await get_action_context(
        client, config, repo, issue_number, read_only_client=read_only_client
    )
    return await check_issues(context)


def check(
    repo: str | None = REPO_OPTION,
    issue_number: int | None = ISSUE_NUMBER_OPTION,
    label: str | None = LABEL_OPTION,
    keywords: str | None = KEYWORDS_OPTION,
    check_issues_flag: bool | None = CHECK_ISSUES_OPTION,
    token: str | None = TOKEN_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Check open pull requests (and optionally issues) for open dependencies.

    Blocked items get a label, a comment listing their dependencies and, for
    pull requests, a failing commit status. Without --issue-number the issue
    from GITHUB_EVENT_PATH is checked, or every open item if there is none.

    Examples:
        # Check every open pull request
        dependent-issues check --repo myorg/myrepo

        # Check a single issue with custom keywords
        dependent-issues check --repo myorg/myrepo --issue-number 12 \
            --keywords "depends on, requires"
    """
    setup_logging(verbose)

    try:
        config = ActionConfig.from_env(
            label=label, keywords=keywords, check_issues=check_issues_flag
        )
        home = resolve_repository(repo)
        client, read_only_client = _build_clients(token)
        number = issue_number or read_event_issue_number()

        summary = asyncio.run(
            _run_check(client, read_only_client, config, home, number)
        )
    except ConfigurationError as e:
        console.print(f"❌ [red]Configuration error: {e}[/red]")
        raise typer.Exit(1)
    except (DependentIssuesError, ValueError) as e:
        console.print(f"❌ [red]Error: {e}[/red]")
        raise typer.Exit(1)

    print_summary(summary)
    if not summary.ok:
        raise typer.Exit(1)


async def _run_extract(
    client: GitHubClient, config: ActionConfig, repo: Repository, issue_number: int
) -> list[Dependency]:
    issue = await client.fetch_issue(repo.owner, repo.repo, issue_number)
    extractor = DependencyExtractor(repo, config.keywords)
    resolver = DependencyResolver(client, [issue], repo)
    return await resolve_dependencies(resolver, extractor.from_issue(issue))


def extract(
    issue_number: int = typer.Option(
        ...,
        "--issue-number",
        "-i",
        help="Issue or pull request to inspect",
    ),
    repo: str | None = REPO_OPTION,
    keywords: str | None = KEYWORDS_OPTION,
    token: str | None = TOKEN_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Show the dependencies of one issue without changing anything."""
    setup_logging(verbose)

    try:
        config = ActionConfig.from_env(keywords=keywords)
        home = resolve_repository(repo)
        client = GitHubClient(token=token)
        dependencies = asyncio.run(_run_extract(client, config, home, issue_number))
    except ConfigurationError as e:
        console.print(f"❌ [red]Configuration error: {e}[/red]")
        raise typer.Exit(1)
    except (DependentIssuesError, ValueError) as e:
        console.print(f"❌ [red]Error: {e}[/red]")
        raise typer.Exit(1)

    if not dependencies:
        console.print(f"✅ [green]#{issue_number} has no dependencies[/green]")
        return

    table = Table(title=f"Dependencies of {home}#{issue_number}")
    table.add_column("Reference")
    table.add_column("Status")
    for dep in dependencies:
        status = "[red]open[/red]" if dep.blocker else "[green]closed[/green]"
        table.add_row(format_dependency(dep, home), status)
    console.print(table)
