"""Exception hierarchy shared by the client, the core and the CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .github_client.models import Dependency


class DependentIssuesError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(DependentIssuesError):
    """Invalid or missing configuration. Fatal to the whole run."""


class StoreError(DependentIssuesError):
    """A call against the issue store failed."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class NotFoundError(StoreError):
    """The requested issue, pull request or repository does not exist."""


class ForbiddenError(StoreError):
    """The token is not allowed to read or mutate the resource."""


class RateLimitedError(StoreError):
    """The API rate limit is exhausted."""


class ResolutionError(DependentIssuesError):
    """A single dependency could not be resolved to an issue."""

    def __init__(self, dependency: Dependency, reason: str):
        super().__init__(f"Could not resolve {dependency.reference}: {reason}")
        self.dependency = dependency
