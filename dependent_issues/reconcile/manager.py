"""Reflect dependency state back onto issues and pull requests.

The label is only touched when it is missing or stale. The signed comment
is only written when its text changes.
"""

import logging
from collections.abc import Sequence
from typing import Literal

from ..config import PLACEHOLDER_PATTERN, ActionConfig
from ..github_client.models import (
    Dependency,
    GitHubComment,
    GitHubIssue,
    Repository,
    format_dependency,
)
from ..github_client.store import IssueStore

logger = logging.getLogger(__name__)

CommentAction = Literal["unchanged", "created", "updated", "recreated"]


class IssueManager:
    """Applies the label, signed comment and commit status for one repository."""

    def __init__(self, store: IssueStore, repo: Repository, config: ActionConfig):
        self.store = store
        self.repo = repo
        self.config = config

    def has_label(self, issue: GitHubIssue) -> bool:
        return self.config.label in issue.labels

    async def add_label(self, issue: GitHubIssue) -> bool:
        """Add the label unless already present. Returns True if a call was made."""
        if self.has_label(issue):
            return False

        await self.store.add_label(
            self.repo.owner, self.repo.repo, issue.number, self.config.label
        )
        return True

    async def remove_label(self, issue: GitHubIssue) -> bool:
        """Remove the label if present. Returns True if a call was made."""
        if not self.has_label(issue):
            return False

        await self.store.remove_label(
            self.repo.owner, self.repo.repo, issue.number, self.config.label
        )
        return True

    def generate_comment(
        self,
        dependencies: Sequence[Dependency],
        blockers: Sequence[Dependency],
        config: ActionConfig | None = None,
    ) -> str:
        """Render the comment template with one line per dependency.

        Dependencies that no longer block are struck through.
        """
        config = config or self.config
        blocker_keys = {dep.key for dep in blockers}

        lines = []
        for dep in dependencies:
            reference = format_dependency(dep, self.repo)
            if dep.key not in blocker_keys:
                reference = f"~~{reference}~~"
            lines.append(f"* {reference}")

        dependency_list = "\n".join(lines)
        return PLACEHOLDER_PATTERN.sub(lambda _: dependency_list, config.comment)

    def _sign(self, text: str) -> str:
        return f"{text.strip()}\n{self.config.comment_signature}"

    def _is_signed(self, comment: GitHubComment) -> bool:
        return comment.body.strip().endswith(self.config.comment_signature)

    def _unsigned(self, comment: GitHubComment) -> str:
        body = comment.body.strip()
        return body[: -len(self.config.comment_signature)].strip()

    async def _signed_comments(self, issue: GitHubIssue) -> list[GitHubComment]:
        comments = await self.store.list_comments(
            self.repo.owner, self.repo.repo, issue.number
        )
        return [comment for comment in comments if self._is_signed(comment)]

    async def write_comment(
        self, issue: GitHubIssue, text: str, force_recreate: bool = False
    ) -> CommentAction:
        """Create or update the signed comment so it carries ``text``.

        Nothing is written when the existing signed comment already has the
        same text. With ``force_recreate`` a changed comment is deleted and
        posted again, which notifies subscribers. Stray duplicate signed
        comments are deleted so exactly one remains.
        """
        owner, repo = self.repo.owner, self.repo.repo
        body = self._sign(text)

        signed = await self._signed_comments(issue)
        existing, duplicates = (signed[0], signed[1:]) if signed else (None, [])

        for duplicate in duplicates:
            await self.store.delete_comment(owner, repo, duplicate.id)

        if existing is not None and self._unsigned(existing) == text.strip():
            logger.debug("Comment on #%s is up to date", issue.number)
            return "unchanged"

        if existing is not None and force_recreate:
            await self.store.delete_comment(owner, repo, existing.id)
            await self.store.create_comment(owner, repo, issue.number, body)
            return "recreated"

        if existing is not None:
            await self.store.update_comment(owner, repo, existing.id, body)
            return "updated"

        await self.store.create_comment(owner, repo, issue.number, body)
        return "created"

    async def remove_action_comments(self, issue: GitHubIssue) -> int:
        """Delete every signed comment. Returns the number deleted."""
        signed = await self._signed_comments(issue)
        for comment in signed:
            await self.store.delete_comment(
                self.repo.owner, self.repo.repo, comment.id
            )
        return len(signed)

    def status_description(self, dependencies: Sequence[Dependency]) -> str:
        blockers = [dep for dep in dependencies if dep.blocker]

        if not dependencies:
            return "No dependencies"
        if not blockers:
            return "All dependencies are resolved"

        first = format_dependency(blockers[0], self.repo)
        others = len(blockers) - 1
        if others == 0:
            return f"Blocked by {first}"
        return f"Blocked by {first} and {others} more issues"

    async def update_commit_status(
        self, issue: GitHubIssue, dependencies: Sequence[Dependency]
    ) -> bool:
        """Set the commit status on a pull request's head commit.

        Issues that are not pull requests are left alone. Returns True if a
        status was posted.
        """
        if not issue.is_pull_request:
            return False

        owner, repo = self.repo.owner, self.repo.repo
        sha = await self.store.fetch_pull_request_head_sha(owner, repo, issue.number)
        blocked = any(dep.blocker for dep in dependencies)

        await self.store.set_commit_status(
            owner,
            repo,
            sha,
            self.config.blocked_state if blocked else "success",
            self.status_description(dependencies),
            self.config.action_name,
        )
        return True

    async def reconcile(
        self, issue: GitHubIssue, dependencies: Sequence[Dependency]
    ) -> bool:
        """Apply label, comment and status for resolved ``dependencies``.

        Each dependency must carry its ``blocker`` flag. Returns whether the
        issue is blocked.
        """
        if not dependencies:
            await self.remove_label(issue)
            await self.remove_action_comments(issue)
            await self.update_commit_status(issue, [])
            return False

        blockers = [dep for dep in dependencies if dep.blocker]
        blocked = bool(blockers)

        if blocked:
            await self.add_label(issue)
        else:
            await self.remove_label(issue)

        comment = self.generate_comment(dependencies, blockers)
        await self.write_comment(issue, comment, force_recreate=not blocked)
        await self.update_commit_status(issue, dependencies)
        return blocked
