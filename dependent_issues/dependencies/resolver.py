"""Resolve dependency references to live issues."""

import asyncio
import logging
from collections.abc import Iterable

from ..exceptions import ResolutionError, StoreError
from ..github_client.models import Dependency, GitHubIssue, Repository
from ..github_client.store import IssueStore

logger = logging.getLogger(__name__)


class DependencyResolver:
    """Looks up the issue behind each dependency, with a per-run cache.

    The cache is seeded with the issues already loaded for the run, so
    references between them cost no API calls. Concurrent lookups of the
    same reference share one fetch. Failed fetches are never cached.
    """

    def __init__(
        self, store: IssueStore, issues: Iterable[GitHubIssue], repo: Repository
    ):
        self.store = store
        self.repo = repo
        self._cache: dict[str, GitHubIssue] = {}
        self._pending: dict[str, asyncio.Task[GitHubIssue]] = {}

        for issue in issues:
            dep = Dependency(owner=repo.owner, repo=repo.repo, number=issue.number)
            self._cache[dep.key] = issue

    def cached(self, dep: Dependency) -> GitHubIssue | None:
        return self._cache.get(dep.key)

    async def get(self, dep: Dependency) -> GitHubIssue:
        """Return the issue ``dep`` points to.

        Raises:
            ResolutionError: If the issue could not be fetched
        """
        cached = self.cached(dep)
        if cached is not None:
            return cached

        task = self._pending.get(dep.key)
        if task is None:
            task = asyncio.create_task(self._fetch(dep))
            self._pending[dep.key] = task
            task.add_done_callback(lambda _: self._pending.pop(dep.key, None))

        return await asyncio.shield(task)

    async def _fetch(self, dep: Dependency) -> GitHubIssue:
        logger.debug("Fetching dependency %s", dep.reference)
        try:
            issue = await self.store.fetch_issue(dep.owner, dep.repo, dep.number)
        except StoreError as e:
            raise ResolutionError(dep, str(e)) from e

        return self._cache.setdefault(dep.key, issue)
