"""Lightweight, in-memory SQL executor stub.

This executor does not parse SQL or connect to a live database. It returns
canned rows keyed by statement text, so tests and offline dashboards can
exercise the data path without a database. Set ``record_calls`` to keep a log of
every statement and its parameters.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class InMemorySQLExecutor:
    """Simple mapping-based executor that satisfies the `SQLExecutor` protocol."""

    canned_results: dict[str, list[dict[str, Any]]] = field(default_factory=dict)
    record_calls: bool = False
    calls: list[tuple[str, dict[str, Any]]] = field(default_factory=list)

    def run(self, statement: str, params: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        """Return the canned result for the supplied SQL statement."""

        if self.record_calls:
            self.calls.append((statement, dict(params or {})))
        return list(self.canned_results.get(statement, []))

    def prime(self, statement: str, rows: list[dict[str, Any]]) -> None:
        """Register a canned response for a future `run` call."""

        self.canned_results[statement] = list(rows)
