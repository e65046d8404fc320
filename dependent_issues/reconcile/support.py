"""Filters for issues the checker should leave alone."""

from ..config import ActionConfig
from ..github_client.models import GitHubIssue

DEPENDABOT_LOGIN = "dependabot[bot]"


def is_dependabot_pr(issue: GitHubIssue) -> bool:
    # Workflows triggered by Dependabot run with a read-only token.
    return issue.user is not None and issue.user.login == DEPENDABOT_LOGIN


def is_supported(config: ActionConfig, issue: GitHubIssue) -> bool:
    """Return False for Dependabot issues when they are configured to be ignored."""
    return not (config.ignore_dependabot and is_dependabot_pr(issue))
