"""GitHub API client using PyGitHub."""

import asyncio
import logging
import os
import time
from collections.abc import Callable
from typing import Any, TypeVar

from github import Auth, Github
from github.GithubException import (
    BadCredentialsException,
    GithubException,
    RateLimitExceededException,
    UnknownObjectException,
)
from github.Issue import Issue
from github.IssueComment import IssueComment
from github.NamedUser import NamedUser
from github.PullRequest import PullRequest
from github.Repository import Repository
from requests.exceptions import RequestException

from ..exceptions import ForbiddenError, NotFoundError, RateLimitedError, StoreError
from .models import GitHubComment, GitHubIssue, GitHubUser
from .store import CommitState

logger = logging.getLogger(__name__)

T = TypeVar("T")


class GitHubClient:
    """GitHub API client implementing the issue store capability.

    PyGitHub is synchronous, so every API call runs on a worker thread.
    Rate limit hits are retried after ``retry_delay`` seconds, at most
    ``max_retries`` times.
    """

    def __init__(
        self,
        token: str | None = None,
        max_retries: int = 1,
        retry_delay: float = 60.0,
    ):
        """Initialize GitHub client with authentication.

        Args:
            token: GitHub personal access token. If None, reads from
                GITHUB_TOKEN env var.
            max_retries: Number of retries after a rate limit error
            retry_delay: Seconds to wait before retrying
        """
        self.token = token or os.getenv("GITHUB_TOKEN")
        if not self.token:
            raise ValueError(
                "GitHub token is required. Set GITHUB_TOKEN environment variable."
            )

        self.github = Github(auth=Auth.Token(self.token))
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._repositories: dict[str, Repository] = {}

    def check_rate_limit(self) -> None:
        """Check rate limit and sleep if necessary."""
        rate_limit = self.github.get_rate_limit()
        # PyGitHub 2.7+ returns an overview with the limits under ``resources``
        core = getattr(rate_limit, "resources", rate_limit).core
        remaining = core.remaining
        logger.info("GitHub API rate limit: %s requests remaining", remaining)

        if remaining < 10:
            reset_time = core.reset.timestamp()
            sleep_time = max(reset_time - time.time() + 1, 0)
            logger.warning("Rate limit low, sleeping for %.1f seconds...", sleep_time)
            time.sleep(sleep_time)

    async def _call(self, action: str, func: Callable[..., T], *args: Any) -> T:
        """Run a blocking PyGitHub call and translate its errors."""
        attempt = 0
        while True:
            try:
                return await asyncio.to_thread(func, *args)
            except RateLimitExceededException as e:
                if attempt >= self.max_retries:
                    raise RateLimitedError(
                        f"Rate limit exceeded while trying to {action}", e.status
                    ) from e
                attempt += 1
                logger.warning(
                    "Rate limit exceeded while trying to %s, waiting %.0fs...",
                    action,
                    self.retry_delay,
                )
                await asyncio.sleep(self.retry_delay)
            except UnknownObjectException as e:
                raise NotFoundError(f"Could not {action}: not found", e.status) from e
            except BadCredentialsException as e:
                raise ForbiddenError(
                    f"Could not {action}: bad credentials", e.status
                ) from e
            except GithubException as e:
                if e.status == 403:
                    raise ForbiddenError(
                        f"Could not {action}: forbidden", e.status
                    ) from e
                raise StoreError(f"Could not {action}: {e}", e.status) from e
            except RequestException as e:
                raise StoreError(f"Could not {action}: {e}") from e

    def _convert_user(self, github_user: NamedUser | None) -> GitHubUser | None:
        """Convert PyGitHub user to our model."""
        if github_user is None:
            return None
        return GitHubUser(login=github_user.login)

    def _convert_comment(self, github_comment: IssueComment) -> GitHubComment:
        """Convert PyGitHub comment to our model."""
        return GitHubComment(id=github_comment.id, body=github_comment.body)

    def _convert_issue(
        self, github_issue: Issue | PullRequest, is_pull_request: bool | None = None
    ) -> GitHubIssue:
        """Convert a PyGitHub issue or pull request to our model."""
        if is_pull_request is None:
            is_pull_request = github_issue.pull_request is not None

        return GitHubIssue(
            number=github_issue.number,
            state=github_issue.state,
            title=github_issue.title or "",
            body=github_issue.body,
            labels=github_issue.labels,
            is_pull_request=is_pull_request,
            user=self._convert_user(github_issue.user),
        )

    def get_repository(self, owner: str, repo: str) -> Repository:
        """Get repository object, cached per client."""
        full_name = f"{owner}/{repo}"
        if full_name not in self._repositories:
            self._repositories[full_name] = self.github.get_repo(full_name)
        return self._repositories[full_name]

    async def fetch_issue(self, owner: str, repo: str, number: int) -> GitHubIssue:
        """Get a single issue or pull request."""

        def fetch() -> GitHubIssue:
            repository = self.get_repository(owner, repo)
            return self._convert_issue(repository.get_issue(number))

        return await self._call(f"fetch {owner}/{repo}#{number}", fetch)

    async def list_open_issues(
        self, owner: str, repo: str, include_issues: bool = False
    ) -> list[GitHubIssue]:
        """List open pull requests, plus open issues when ``include_issues``."""

        def fetch() -> list[GitHubIssue]:
            self.check_rate_limit()
            repository = self.get_repository(owner, repo)
            if include_issues:
                return [
                    self._convert_issue(item)
                    for item in repository.get_issues(state="open")
                ]
            return [
                self._convert_issue(item, is_pull_request=True)
                for item in repository.get_pulls(state="open")
            ]

        kind = "issues" if include_issues else "pull requests"
        return await self._call(f"list open {kind} in {owner}/{repo}", fetch)

    async def list_comments(
        self, owner: str, repo: str, issue_number: int
    ) -> list[GitHubComment]:
        """List all comments on an issue, following pagination."""

        def fetch() -> list[GitHubComment]:
            github_issue = self.get_repository(owner, repo).get_issue(issue_number)
            return [self._convert_comment(c) for c in github_issue.get_comments()]

        return await self._call(
            f"list comments on {owner}/{repo}#{issue_number}", fetch
        )

    async def add_label(
        self, owner: str, repo: str, issue_number: int, label: str
    ) -> None:
        def apply() -> None:
            github_issue = self.get_repository(owner, repo).get_issue(issue_number)
            github_issue.add_to_labels(label)

        await self._call(f"add label '{label}' to {owner}/{repo}#{issue_number}", apply)
        logger.info("Added label '%s' to #%s", label, issue_number)

    async def remove_label(
        self, owner: str, repo: str, issue_number: int, label: str
    ) -> None:
        def apply() -> None:
            github_issue = self.get_repository(owner, repo).get_issue(issue_number)
            github_issue.remove_from_labels(label)

        await self._call(
            f"remove label '{label}' from {owner}/{repo}#{issue_number}", apply
        )
        logger.info("Removed label '%s' from #%s", label, issue_number)

    async def create_comment(
        self, owner: str, repo: str, issue_number: int, body: str
    ) -> GitHubComment:
        def apply() -> GitHubComment:
            github_issue = self.get_repository(owner, repo).get_issue(issue_number)
            return self._convert_comment(github_issue.create_comment(body))

        comment = await self._call(
            f"comment on {owner}/{repo}#{issue_number}", apply
        )
        logger.info("Added comment to #%s", issue_number)
        return comment

    async def update_comment(
        self, owner: str, repo: str, comment_id: int, body: str
    ) -> None:
        def apply() -> None:
            self.get_repository(owner, repo).get_issue_comment(comment_id).edit(body)

        await self._call(f"update comment {comment_id} in {owner}/{repo}", apply)
        logger.info("Updated comment %s", comment_id)

    async def delete_comment(self, owner: str, repo: str, comment_id: int) -> None:
        def apply() -> None:
            self.get_repository(owner, repo).get_issue_comment(comment_id).delete()

        await self._call(f"delete comment {comment_id} in {owner}/{repo}", apply)
        logger.info("Deleted comment %s", comment_id)

    async def fetch_pull_request_head_sha(
        self, owner: str, repo: str, number: int
    ) -> str:
        def fetch() -> str:
            return self.get_repository(owner, repo).get_pull(number).head.sha

        return await self._call(f"fetch pull request {owner}/{repo}#{number}", fetch)

    async def set_commit_status(
        self,
        owner: str,
        repo: str,
        sha: str,
        state: CommitState,
        description: str,
        context: str,
    ) -> None:
        def apply() -> None:
            commit = self.get_repository(owner, repo).get_commit(sha)
            commit.create_status(state, description=description, context=context)

        await self._call(f"set commit status on {sha[:7]}", apply)
        logger.info("Set commit status '%s' on %s: %s", state, sha[:7], description)
