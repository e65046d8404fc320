"""Label, comment and commit status reconciliation."""

from .manager import IssueManager
from .support import is_supported

__all__ = ["IssueManager", "is_supported"]
