"""Build the context for a checker run: clients, config and issues."""

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .config import ActionConfig
from .exceptions import ConfigurationError
from .github_client.models import GitHubIssue, Repository
from .github_client.store import IssueStore

logger = logging.getLogger(__name__)


@dataclass
class ActionContext:
    """Everything a single run needs."""

    client: IssueStore
    read_only_client: IssueStore
    config: ActionConfig
    repo: Repository
    issues: list[GitHubIssue] = field(default_factory=list)


def resolve_repository(
    repo: str | None, environ: Mapping[str, str] | None = None
) -> Repository:
    """Use ``repo`` if given, else ``GITHUB_REPOSITORY``."""
    env = os.environ if environ is None else environ
    full_name = repo or env.get("GITHUB_REPOSITORY")
    if not full_name:
        raise ConfigurationError(
            "Repository is required. Pass --repo or set GITHUB_REPOSITORY."
        )
    try:
        return Repository.parse(full_name)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e


def read_event_issue_number(environ: Mapping[str, str] | None = None) -> int | None:
    """Return the issue or pull request number of the triggering event, if any."""
    env = os.environ if environ is None else environ
    event_path = env.get("GITHUB_EVENT_PATH")
    if not event_path or not Path(event_path).exists():
        return None

    with open(event_path) as f:
        payload = json.load(f)

    for key in ("issue", "pull_request"):
        item = payload.get(key)
        if isinstance(item, dict) and item.get("number"):
            return int(item["number"])
    number = payload.get("number")
    return int(number) if number else None


async def load_issues(
    client: IssueStore,
    repo: Repository,
    config: ActionConfig,
    issue_number: int | None = None,
) -> list[GitHubIssue]:
    """Load the issues to check.

    With ``issue_number`` only that issue is checked, and only while open.
    Otherwise every open pull request is checked, plus every open issue when
    ``config.check_issues`` is on.
    """
    if issue_number:
        logger.info("Payload issue: #%s", issue_number)
        issue = await client.fetch_issue(repo.owner, repo.repo, issue_number)
        if issue.state != "open":
            logger.info("Ignoring #%s: it is %s", issue_number, issue.state)
            return []
        return [issue]

    logger.info("Payload issue: None")
    issues = await client.list_open_issues(
        repo.owner, repo.repo, include_issues=config.check_issues
    )
    logger.info("No. of open issues: %d", len(issues))
    return issues


async def get_action_context(
    client: IssueStore,
    config: ActionConfig,
    repo: Repository,
    issue_number: int | None = None,
    read_only_client: IssueStore | None = None,
) -> ActionContext:
    issues = await load_issues(client, repo, config, issue_number)
    return ActionContext(
        client=client,
        read_only_client=read_only_client or client,
        config=config,
        repo=repo,
        issues=issues,
    )
