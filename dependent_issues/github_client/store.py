"""Issue store capability consumed by the dependency checker."""

from collections.abc import Sequence
from typing import Literal, Protocol

from .models import GitHubComment, GitHubIssue

CommitState = Literal["success", "failure", "pending", "error"]


class IssueStore(Protocol):
    """Async access to issues, comments, labels and commit statuses.

    Implementations raise ``StoreError`` subclasses on failure.
    """

    async def fetch_issue(self, owner: str, repo: str, number: int) -> GitHubIssue:
        ...

    async def list_open_issues(
        self, owner: str, repo: str, include_issues: bool = False
    ) -> list[GitHubIssue]:
        ...

    async def list_comments(
        self, owner: str, repo: str, issue_number: int
    ) -> Sequence[GitHubComment]:
        ...

    async def add_label(
        self, owner: str, repo: str, issue_number: int, label: str
    ) -> None:
        ...

    async def remove_label(
        self, owner: str, repo: str, issue_number: int, label: str
    ) -> None:
        ...

    async def create_comment(
        self, owner: str, repo: str, issue_number: int, body: str
    ) -> GitHubComment:
        ...

    async def update_comment(
        self, owner: str, repo: str, comment_id: int, body: str
    ) -> None:
        ...

    async def delete_comment(self, owner: str, repo: str, comment_id: int) -> None:
        ...

    async def fetch_pull_request_head_sha(
        self, owner: str, repo: str, number: int
    ) -> str:
        ...

    async def set_commit_status(
        self,
        owner: str,
        repo: str,
        sha: str,
        state: CommitState,
        description: str,
        context: str,
    ) -> None:
        ...
