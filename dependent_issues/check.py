"""Check every issue in a run context and reconcile its dependency state."""

import asyncio
import logging
from dataclasses import dataclass, field

from .context import ActionContext
from .dependencies import DependencyExtractor, DependencyResolver
from .exceptions import DependentIssuesError
from .github_client.models import Dependency, GitHubIssue
from .reconcile import IssueManager, is_supported

logger = logging.getLogger(__name__)


@dataclass
class CheckSummary:
    """Outcome of a run."""

    checked: list[int] = field(default_factory=list)
    blocked: list[int] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)
    failed: list[tuple[int, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


async def resolve_dependencies(
    resolver: DependencyResolver, dependencies: list[Dependency]
) -> list[Dependency]:
    """Resolve all dependencies concurrently, annotating each with ``blocker``.

    Order follows ``dependencies``. Every lookup runs to completion before
    the first failure, if any, is raised.
    """
    results = await asyncio.gather(
        *(resolver.get(dep) for dep in dependencies), return_exceptions=True
    )

    resolved = []
    for dep, result in zip(dependencies, results):
        if isinstance(result, BaseException):
            raise result
        resolved.append(dep.with_blocker(result.state == "open"))
    return resolved


async def check_issue(
    issue: GitHubIssue,
    extractor: DependencyExtractor,
    resolver: DependencyResolver,
    manager: IssueManager,
) -> bool:
    """Reconcile a single issue. Returns whether it is blocked."""
    dependencies = extractor.from_issue(issue)
    resolved = await resolve_dependencies(resolver, dependencies)
    return await manager.reconcile(issue, resolved)


async def check_issues(context: ActionContext) -> CheckSummary:
    config, repo = context.config, context.repo

    extractor = DependencyExtractor(repo, config.keywords)
    resolver = DependencyResolver(context.read_only_client, context.issues, repo)
    manager = IssueManager(context.client, repo, config)
    summary = CheckSummary()

    for issue in context.issues:
        if not is_supported(config, issue):
            logger.info("Skipping #%s: opened by Dependabot", issue.number)
            summary.skipped.append(issue.number)
            continue

        logger.info("Checking #%s", issue.number)
        try:
            blocked = await check_issue(issue, extractor, resolver, manager)
        except DependentIssuesError as e:
            logger.error("Failed to check #%s: %s", issue.number, e)
            summary.failed.append((issue.number, str(e)))
            continue

        summary.checked.append(issue.number)
        if blocked:
            summary.blocked.append(issue.number)

    return summary
