"""GitHub client package for API interaction."""

from .client import GitHubClient
from .models import (
    Dependency,
    GitHubComment,
    GitHubIssue,
    GitHubUser,
    Repository,
    format_dependency,
)
from .store import IssueStore

__all__ = [
    "GitHubClient",
    "IssueStore",
    "Repository",
    "Dependency",
    "GitHubUser",
    "GitHubComment",
    "GitHubIssue",
    "format_dependency",
]
