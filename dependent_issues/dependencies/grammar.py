"""Regular expressions for dependency references in issue text.

A dependency reference is a keyword phrase ("depends on", "blocked by", ...)
followed by whitespace and an issue reference in one of three shapes:

- ``#123``
- ``owner/repo#123``
- ``https://github.com/owner/repo/issues/123`` or ``.../pull/123``
"""

import re
from collections.abc import Iterable

# Top-level route names that can never be a repository owner.
RESERVED_OWNERS = (
    "about",
    "api",
    "apps",
    "collections",
    "enterprise",
    "events",
    "explore",
    "features",
    "issues",
    "login",
    "logout",
    "marketplace",
    "new",
    "notifications",
    "orgs",
    "organizations",
    "pricing",
    "pulls",
    "search",
    "settings",
    "sponsors",
    "topics",
    "users",
)

_NOT_RESERVED = r"(?!(?:{})/)".format("|".join(RESERVED_OWNERS))
_OWNER = r"[A-Za-z0-9][\w.-]*"
_SLUG = r"[\w.][\w.-]*"
_NUMBER = r"[1-9]\d*(?!\w)"

BARE_SOURCE = r"(?<![\w/])#" + _NUMBER
QUALIFIED_SOURCE = (
    r"(?<![\w./-])" + _NOT_RESERVED + _OWNER + "/" + _SLUG + "#" + _NUMBER
)
URL_SOURCE = (
    r"https?://[\w.-]+(?::\d+)?/"
    + _NOT_RESERVED
    + _OWNER
    + "/"
    + _SLUG
    + r"/(?:issues|pull)/"
    + _NUMBER
)

ISSUE_REFERENCE_SOURCE = f"(?:{URL_SOURCE}|{QUALIFIED_SOURCE}|{BARE_SOURCE})"

URL_REFERENCE = re.compile(
    r"https?://[^/\s]+/(?P<owner>[^/\s]+)/(?P<repo>[^/\s]+)"
    r"/(?:issues|pull)/(?P<number>\d+)",
    re.IGNORECASE,
)
QUALIFIED_REFERENCE = re.compile(
    r"(?P<owner>[^/\s#]+)/(?P<repo>[^/\s#]+)#(?P<number>\d+)"
)


def keyword_source(keyword: str) -> str:
    """Escape a keyword phrase, letting any run of whitespace separate words."""
    return r"\s+".join(re.escape(word) for word in keyword.split())


def build_dependency_regex(keywords: Iterable[str]) -> re.Pattern[str]:
    """Build the case-insensitive dependency pattern for ``keywords``.

    The pattern has the shape ``(?:kw1|kw2|...)\\s+(<issue-reference>)``;
    group 1 holds the reference without the keyword. Blank keywords are
    ignored. Callers are expected to reject an empty keyword list.
    """
    alternatives = "|".join(
        keyword_source(kw) for kw in keywords if kw and kw.strip()
    )
    return re.compile(
        rf"(?:{alternatives})\s+({ISSUE_REFERENCE_SOURCE})", re.IGNORECASE
    )


def normalize_reference(reference: str) -> str:
    """Turn an issue URL into ``owner/repo#N``; other shapes pass through."""
    match = URL_REFERENCE.fullmatch(reference)
    if match:
        return f"{match['owner']}/{match['repo']}#{int(match['number'])}"
    return reference
