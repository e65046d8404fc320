"""Test configuration and fixtures."""

from unittest.mock import AsyncMock

import pytest

from dependent_issues.config import ActionConfig
from dependent_issues.github_client.models import GitHubComment, GitHubIssue, Repository


@pytest.fixture
def repo() -> Repository:
    """Home repository used across tests."""
    return Repository(owner="owner", repo="repo")


@pytest.fixture
def config() -> ActionConfig:
    """Default configuration with a short signature."""
    return ActionConfig(
        action_name="my-action",
        label="my-label",
        comment_signature="<action-signature>",
        comment="This PR/issue depends on:\n\n{{ dependencies }}",
    )


@pytest.fixture
def store() -> AsyncMock:
    """Issue store with every operation mocked."""
    mock = AsyncMock()
    mock.list_comments.return_value = []
    mock.fetch_pull_request_head_sha.return_value = "<commit-sha>"
    mock.create_comment.return_value = GitHubComment(id=99, body="")
    return mock


@pytest.fixture
def make_issue():
    """Factory for issues with sensible defaults."""

    def factory(number: int, **fields) -> GitHubIssue:
        fields.setdefault("title", f"Issue {number}")
        return GitHubIssue(number=number, **fields)

    return factory
