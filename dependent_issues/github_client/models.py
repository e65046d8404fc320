"""Pydantic models for GitHub data structures.

These models carry the subset of GitHub's REST API issue payloads that the
dependency checker reads, plus the dependency references extracted from
issue bodies.
API Reference: https://docs.github.com/en/rest/issues
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Repository(BaseModel):
    """A hosting repository, identified by owner and name."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(..., description="Repository owner (user or organization)")
    repo: str = Field(..., description="Repository name")

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def key(self) -> str:
        """Identity key. GitHub owner and repository names ignore case."""
        return self.full_name.lower()

    @classmethod
    def parse(cls, full_name: str) -> "Repository":
        """Parse an ``owner/repo`` string.

        Raises:
            ValueError: If the string is not exactly two non-empty segments
        """
        parts = full_name.strip().split("/")
        if len(parts) != 2 or not all(parts):
            raise ValueError(
                f"Invalid repository '{full_name}'. Expected format: owner/repo"
            )
        return cls(owner=parts[0], repo=parts[1])

    def __str__(self) -> str:
        return self.full_name


class Dependency(BaseModel):
    """A reference to another issue or pull request found in an issue body.

    ``blocker`` stays ``None`` until the referenced issue has been resolved,
    then records whether it is still open.
    """

    model_config = ConfigDict(frozen=True)

    owner: str = Field(..., description="Owner of the referenced repository")
    repo: str = Field(..., description="Name of the referenced repository")
    number: int = Field(..., gt=0, description="Referenced issue number")
    blocker: bool | None = Field(
        None, description="Whether the referenced issue is still open"
    )

    @property
    def reference(self) -> str:
        """``owner/repo#N`` as written in the issue body."""
        return f"{self.owner}/{self.repo}#{self.number}"

    @property
    def key(self) -> str:
        """Case-insensitive identity key, used for deduplication and caching."""
        return self.reference.lower()

    @property
    def repository(self) -> Repository:
        return Repository(owner=self.owner, repo=self.repo)

    def with_blocker(self, blocker: bool) -> "Dependency":
        return self.model_copy(update={"blocker": blocker})


def format_dependency(dep: Dependency, home: Repository | None = None) -> str:
    """Render a dependency as ``#N`` inside ``home``, ``owner/repo#N`` elsewhere."""
    if home is not None and dep.repository.key == home.key:
        return f"#{dep.number}"
    return dep.reference


class GitHubUser(BaseModel):
    """GitHub user model representing a user account.

    API Reference: https://docs.github.com/en/rest/users/users
    """

    login: str = Field(..., description="GitHub username/login (string)")


class GitHubComment(BaseModel):
    """GitHub comment model representing issue/PR comments.

    API Reference: https://docs.github.com/en/rest/issues/comments
    """

    id: int = Field(..., description="Unique comment identifier (integer)")
    body: str = Field("", description="Text content of the comment (string)")

    @field_validator("body", mode="before")
    @classmethod
    def none_body_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class GitHubIssue(BaseModel):
    """GitHub issue or pull request.

    Maps to the GitHub REST API Issue object. Pull requests are flagged with
    ``is_pull_request``; raw payloads carrying a ``pull_request`` key are
    recognised as pull requests.
    API Reference: https://docs.github.com/en/rest/issues/issues
    """

    number: int = Field(..., description="Issue number within the repository")
    state: Literal["open", "closed"] = Field(
        "open", description="Current state: 'open' or 'closed'"
    )
    title: str = Field("", description="Short description/title of the issue")
    body: str | None = Field(
        None, description="Detailed description of the issue in markdown"
    )
    labels: list[str] = Field(
        default_factory=list, description="Names of the labels on the issue"
    )
    is_pull_request: bool = Field(
        False, description="True when the issue is a pull request"
    )
    user: GitHubUser | None = Field(None, description="Author of the issue")

    @model_validator(mode="before")
    @classmethod
    def detect_pull_request(cls, data: Any) -> Any:
        if isinstance(data, dict) and "pull_request" in data:
            data = dict(data)
            marker = data.pop("pull_request")
            data.setdefault("is_pull_request", marker is not None)
        return data

    @field_validator("labels", mode="before")
    @classmethod
    def normalize_labels(cls, v: Any) -> list[str]:
        """Accept label names, ``{"name": ...}`` mappings or label objects."""
        if v is None:
            return []
        names = []
        for label in v:
            if isinstance(label, str):
                names.append(label)
            elif isinstance(label, dict):
                names.append(label["name"])
            else:
                names.append(label.name)
        return names
