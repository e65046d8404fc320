"""Run configuration for the dependency checker."""

import os
import re
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigurationError

DEFAULT_SIGNATURE = "<!-- By Dependent Issues (Action) - DO NOT REMOVE -->"
DEFAULT_COMMENT = (
    "This PR/issue depends on:\n\n{{ dependencies }}\n\n"
    "*Tracked automatically. This comment is updated as dependencies change.*"
)
PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*dependencies\s*\}\}", re.IGNORECASE)

_TRUE_VALUES = {"on", "true", "yes", "1"}
_FALSE_VALUES = {"off", "false", "no", "0", ""}

# Field name -> GitHub Actions input variable
ENV_INPUTS = {
    "label": "INPUT_LABEL",
    "keywords": "INPUT_KEYWORDS",
    "comment": "INPUT_COMMENT",
    "check_issues": "INPUT_CHECK_ISSUES",
    "ignore_dependabot": "INPUT_IGNORE_DEPENDABOT",
    "blocked_state": "INPUT_BLOCKED_STATE",
}


def parse_flag(value: str | bool) -> bool:
    """Parse an on/off style input value."""
    if isinstance(value, bool):
        return value
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid flag value '{value}'. Expected on/off or true/false")


def parse_keywords(value: str | list[str]) -> list[str]:
    """Split a comma-separated keyword list, dropping empty entries."""
    items = value.split(",") if isinstance(value, str) else value
    return [kw.strip() for kw in items if kw and kw.strip()]


class ActionConfig(BaseModel):
    """Configuration for a single checker run."""

    action_name: str = Field(
        "Dependent Issues", description="Commit status context name"
    )
    comment_signature: str = Field(
        DEFAULT_SIGNATURE, description="Marker identifying the bot's own comment"
    )
    label: str = Field("dependent", description="Label applied to blocked issues")
    comment: str = Field(
        DEFAULT_COMMENT,
        description="Comment template containing a {{ dependencies }} placeholder",
    )
    keywords: list[str] = Field(
        default_factory=lambda: ["depends on", "blocked by"],
        description="Phrases that introduce a dependency reference",
    )
    check_issues: bool = Field(
        False, description="Check issues as well as pull requests"
    )
    ignore_dependabot: bool = Field(
        False, description="Skip issues and pull requests opened by Dependabot"
    )
    blocked_state: Literal["failure", "pending"] = Field(
        "failure", description="Commit status state used while blocked"
    )

    @field_validator("keywords", mode="before")
    @classmethod
    def split_keywords(cls, v: Any) -> Any:
        if isinstance(v, (str, list)):
            return parse_keywords(v)
        return v

    @field_validator("keywords")
    @classmethod
    def require_keywords(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("at least one keyword is required")
        return v

    @field_validator("check_issues", "ignore_dependabot", mode="before")
    @classmethod
    def parse_flags(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_flag(v)
        return v

    @field_validator("blocked_state", mode="before")
    @classmethod
    def normalize_state(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("label", "comment_signature", "action_name")
    @classmethod
    def require_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("comment")
    @classmethod
    def require_placeholder(cls, v: str) -> str:
        if not PLACEHOLDER_PATTERN.search(v):
            raise ValueError("comment template must contain {{ dependencies }}")
        return v

    @classmethod
    def load(cls, **values: Any) -> "ActionConfig":
        """Build a config, reporting validation failures as ConfigurationError."""
        try:
            return cls(**values)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise ConfigurationError(f"Invalid configuration: {problems}") from e

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None, **overrides: Any
    ) -> "ActionConfig":
        """Read GitHub Actions ``INPUT_*`` variables.

        Unset or blank inputs fall back to the defaults. Explicit overrides
        that are not None take precedence over the environment.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for field, variable in ENV_INPUTS.items():
            raw = env.get(variable)
            if raw is not None and raw.strip():
                values[field] = raw
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.load(**values)
