"""Extract dependency references from issue bodies."""

import logging
from collections.abc import Iterable

from ..exceptions import ConfigurationError
from ..github_client.models import Dependency, GitHubIssue, Repository
from .grammar import QUALIFIED_REFERENCE, build_dependency_regex, normalize_reference

logger = logging.getLogger(__name__)


class DependencyExtractor:
    """Finds the issues an issue depends on.

    Bare ``#N`` references resolve against the home repository. The pattern
    is compiled once, so one extractor can serve every issue in a run.
    """

    def __init__(self, repo: Repository, keywords: Iterable[str]):
        keywords = [kw for kw in keywords if kw and kw.strip()]
        if not keywords:
            raise ConfigurationError("At least one dependency keyword is required")

        self.repo = repo
        self.keywords = keywords
        self.pattern = build_dependency_regex(keywords)

    def parse_reference(self, reference: str) -> Dependency:
        """Parse ``#N``, ``owner/repo#N`` or an issue URL."""
        reference = normalize_reference(reference)
        if reference.startswith("#"):
            return Dependency(
                owner=self.repo.owner, repo=self.repo.repo, number=int(reference[1:])
            )

        match = QUALIFIED_REFERENCE.fullmatch(reference)
        if not match:
            raise ValueError(f"Not an issue reference: '{reference}'")
        return Dependency(
            owner=match["owner"], repo=match["repo"], number=int(match["number"])
        )

    def references(self, text: str | None) -> list[str]:
        """Return the raw references in ``text``, keywords stripped."""
        return [match.group(1) for match in self.pattern.finditer(text or "")]

    def from_issue(self, issue: GitHubIssue) -> list[Dependency]:
        """Return the issue's dependencies, deduplicated in order of appearance.

        References to the issue itself are dropped.
        """
        seen: set[str] = set()
        dependencies: list[Dependency] = []

        for reference in self.references(issue.body):
            dependency = self.parse_reference(reference)

            is_self = (
                dependency.repository.key == self.repo.key
                and dependency.number == issue.number
            )
            if is_self or dependency.key in seen:
                continue

            seen.add(dependency.key)
            dependencies.append(dependency)

        logger.debug(
            "Found %d dependencies in #%s: %s",
            len(dependencies),
            issue.number,
            ", ".join(dep.reference for dep in dependencies) or "none",
        )
        return dependencies
