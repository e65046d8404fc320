"""Test main CLI functionality."""

from collections.abc import Generator
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from dependent_issues.cli.main import app
from dependent_issues.exceptions import NotFoundError
from dependent_issues.github_client.models import GitHubComment, GitHubIssue

runner = CliRunner()

ENV = {
    "GITHUB_TOKEN": "fake-token",
    "GITHUB_REPOSITORY": "owner/repo",
    "GITHUB_EVENT_PATH": None,
    "GITHUB_READ_TOKEN": None,
}


@pytest.fixture
def mock_client() -> Generator[AsyncMock]:
    """Patch the GitHub client used by CLI commands."""
    with patch("dependent_issues.cli.check.GitHubClient") as mock_class:
        client = AsyncMock()
        client.list_comments.return_value = []
        client.create_comment.return_value = GitHubComment(id=1)
        client.fetch_pull_request_head_sha.return_value = "abc123"
        mock_class.return_value = client
        yield client


def test_version_command() -> None:
    """Test version command."""
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "Dependent Issues v" in result.stdout


def test_help_lists_commands() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "check" in result.stdout
    assert "extract" in result.stdout


class TestCheckCommand:
    """Test the check command."""

    def test_single_issue(self, mock_client: AsyncMock) -> None:
        mock_client.fetch_issue.return_value = GitHubIssue(
            number=1, is_pull_request=True
        )

        result = runner.invoke(app, ["check", "--issue-number", "1"], env=ENV)

        assert result.exit_code == 0, result.stdout
        assert "Dependency check" in result.stdout
        mock_client.fetch_issue.assert_awaited_once_with("owner", "repo", 1)
        mock_client.set_commit_status.assert_awaited_once_with(
            "owner", "repo", "abc123", "success", "No dependencies", "Dependent Issues"
        )

    def test_label_option_overrides_input(self, mock_client: AsyncMock) -> None:
        mock_client.list_open_issues.return_value = [
            GitHubIssue(number=1, body="depends on #2"),
            GitHubIssue(number=2),
        ]

        result = runner.invoke(
            app,
            ["check", "--label", "waiting", "--check-issues"],
            env={**ENV, "INPUT_LABEL": "blocked"},
        )

        assert result.exit_code == 0, result.stdout
        mock_client.list_open_issues.assert_awaited_once_with(
            "owner", "repo", include_issues=True
        )
        mock_client.add_label.assert_awaited_once_with("owner", "repo", 1, "waiting")

    def test_missing_repository(self, mock_client: AsyncMock) -> None:
        result = runner.invoke(app, ["check"], env={**ENV, "GITHUB_REPOSITORY": None})

        assert result.exit_code == 1
        assert "Configuration error" in result.stdout

    def test_fetch_error(self, mock_client: AsyncMock) -> None:
        mock_client.fetch_issue.side_effect = NotFoundError("not found", 404)

        result = runner.invoke(app, ["check", "-i", "5"], env=ENV)

        assert result.exit_code == 1
        assert "Error: not found" in result.stdout

    def test_failed_issue_exits_nonzero(self, mock_client: AsyncMock) -> None:
        mock_client.list_open_issues.return_value = [
            GitHubIssue(number=1, body="depends on other/repo#9")
        ]
        mock_client.fetch_issue.side_effect = NotFoundError("not found", 404)

        result = runner.invoke(app, ["check"], env=ENV)

        assert result.exit_code == 1
        assert "other/repo#9" in result.stdout


class TestExtractCommand:
    """Test the extract command."""

    def test_lists_dependencies(self, mock_client: AsyncMock) -> None:
        async def fetch_issue(owner: str, repo: str, number: int) -> GitHubIssue:
            if number == 1:
                return GitHubIssue(
                    number=1, body="depends on #2 and blocked by other/repo#3"
                )
            return GitHubIssue(number=number, state="closed" if number == 2 else "open")

        mock_client.fetch_issue.side_effect = fetch_issue

        result = runner.invoke(app, ["extract", "-i", "1"], env=ENV)

        assert result.exit_code == 0, result.stdout
        assert "#2" in result.stdout
        assert "other/repo#3" in result.stdout
        assert "closed" in result.stdout
        assert "open" in result.stdout
        mock_client.add_label.assert_not_called()
        mock_client.create_comment.assert_not_called()

    def test_no_dependencies(self, mock_client: AsyncMock) -> None:
        mock_client.fetch_issue.return_value = GitHubIssue(number=4, body="Hello")

        result = runner.invoke(app, ["extract", "-i", "4"], env=ENV)

        assert result.exit_code == 0
        assert "#4 has no dependencies" in result.stdout

    def test_issue_number_required(self, mock_client: AsyncMock) -> None:
        result = runner.invoke(app, ["extract"], env=ENV)
        assert result.exit_code != 0
