"""Restrict stored SQL to a read-only subset before it reaches the database.

This is an exclusion filter, not a parser. A statement passes when it contains
none of the denylisted keywords and no comment markers; whether what remains
is a well-formed SELECT is left to the database.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

FORBIDDEN_KEYWORDS: tuple[str, ...] = (
    "UPDATE",
    "DELETE",
    "CREATE",
    "TRUNCATE",
    "DROP",
    "INSERT",
    "ALTER",
    "EXEC",
    "MERGE",
    "CALL",
    "GRANT",
    "REVOKE",
    "SET",
)

_FORBIDDEN_RE = re.compile(r"\b(" + "|".join(FORBIDDEN_KEYWORDS) + r")\b", re.IGNORECASE)
_COMMENT_RE = re.compile(r"--|/\*|\*/")
_WHITESPACE_RE = re.compile(r"\s+")

QueryStatus = Literal["present", "absent", "rejected"]


@dataclass(slots=True, frozen=True)
class QueryCheck:
    """Outcome of inspecting a stored query."""

    status: QueryStatus
    sql: str | None = None
    reason: str | None = None

    @property
    def is_executable(self) -> bool:
        return self.status == "present"


def normalize_whitespace(sql: str) -> str:
    """Trim *sql* and collapse newlines and whitespace runs to single spaces."""

    return _WHITESPACE_RE.sub(" ", sql.strip())


def inspect_query(sql: str | None) -> QueryCheck:
    """Classify *sql* as executable, absent, or rejected."""

    if not sql:
        return QueryCheck(status="absent")

    normalized = normalize_whitespace(sql)
    if not normalized:
        return QueryCheck(status="absent")

    keyword = _FORBIDDEN_RE.search(normalized)
    if keyword:
        return QueryCheck(
            status="rejected",
            reason=f"forbidden keyword '{keyword.group(1).upper()}'",
        )

    marker = _COMMENT_RE.search(normalized)
    if marker:
        return QueryCheck(status="rejected", reason=f"comment marker '{marker.group(0)}'")

    if normalized.endswith(";"):
        normalized = normalized[:-1].strip()
    if not normalized:
        return QueryCheck(status="absent")
    return QueryCheck(status="present", sql=normalized)


def sanitize_sql(sql: str | None) -> str | None:
    """Return the normalized read-only statement, or None when absent or unsafe."""

    return inspect_query(sql).sql


__all__ = [
    "FORBIDDEN_KEYWORDS",
    "QueryCheck",
    "inspect_query",
    "normalize_whitespace",
    "sanitize_sql",
]
