"""Chart definitions service composing the store, sanitizer, and defaults.

The service owns the policy the bare store does not: identifier assignment,
lookup by id-or-name, and the ``get_data`` composite that turns a stored chart
into rows from the database.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

from src.core.defaults import merge_params, resolve_defaults
from src.core.errors import NotFoundError
from src.core.observability import DataRequestSink
from src.core.record_store import Predicate, Record, RecordStore
from src.core.sanitizer import inspect_query

LOGGER = logging.getLogger(__name__)


class SQLExecutor(Protocol):
    """Database collaborator that runs a sanitized statement with parameters."""

    def run(self, statement: str, params: dict[str, Any] | None = None) -> list[dict[str, Any]]:  # pragma: no cover - interface
        """Execute *statement* and return row dictionaries."""


def match_id_or_name(key: str) -> Predicate:
    return lambda chart: chart.get("id") == key or chart.get("name") == key


def match_id(key: str) -> Predicate:
    return lambda chart: chart.get("id") == key


class ChartIdFactory:
    """Millisecond clock ids that never repeat within one process."""

    def __init__(self) -> None:
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            candidate = time.time_ns() // 1_000_000
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
        return str(candidate)


@dataclass
class ChartService:
    """Caller-facing chart operations."""

    store: RecordStore
    sql_executor: SQLExecutor | None = None
    audit_sink: DataRequestSink | None = None
    id_factory: Callable[[], str] = field(default_factory=ChartIdFactory)

    def create(self, data: Record) -> Record:
        chart = self._with_new_id(data)
        self.store.create(chart)
        LOGGER.info("Chart %s created name=%s", chart["id"], chart.get("name"))
        return chart

    def bulk_create(self, items: list[Record]) -> list[Record]:
        charts = [self._with_new_id(data) for data in items]
        self.store.bulk_create(charts)
        LOGGER.info("Created %s charts", len(charts))
        return charts

    def find_all(self) -> list[Record]:
        return self.store.select()

    def find_one(self, key: str) -> Record | None:
        return self.store.find_one(match_id_or_name(key))

    def update(self, key: str, data: Record) -> Record:
        fields = {name: value for name, value in data.items() if name != "id"}
        existing = self.find_one(key)
        if existing is None:
            raise NotFoundError(f"Chart '{key}' not found.")
        self.store.update(match_id_or_name(key), fields)
        LOGGER.info("Chart %s updated fields=%s", key, sorted(fields))
        return {**existing, **fields}

    def delete(self, chart_id: str) -> list[Record]:
        self.store.remove(match_id(chart_id))
        LOGGER.info("Chart %s deleted", chart_id)
        return self.store.select()

    def get_data(self, key: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Resolve *key*, run its query, and return ``{"data", "filters"}``."""

        chart = self.find_one(key)
        if chart is None:
            raise NotFoundError(f"Chart '{key}' not found.")

        filters = merge_params(resolve_defaults(chart.get("vars")), params)
        check = inspect_query(chart.get("query"))
        if check.status == "rejected":
            LOGGER.warning("Chart %s query rejected: %s", chart.get("id"), check.reason)
            self._log(chart, "query_rejected", {"reason": check.reason})
            return {"data": [], "filters": filters}
        if not check.is_executable or self.sql_executor is None:
            self._log(chart, "query_skipped", {"status": check.status})
            return {"data": [], "filters": filters}

        rows = self.sql_executor.run(check.sql, filters)
        self._log(chart, "query_executed", {"row_count": len(rows or [])})
        if not rows:
            return {"data": [], "filters": filters}
        return {"data": list(rows), "filters": filters}

    def _with_new_id(self, data: Record) -> Record:
        return {"id": self.id_factory(), **{key: value for key, value in data.items() if key != "id"}}

    def _log(self, chart: Record, event: str, payload: dict[str, Any]) -> None:
        if self.audit_sink is None:
            return
        chart_key = str(chart.get("id") or chart.get("name") or "chart")
        self.audit_sink.log_event(chart_key, event, {"chart_name": chart.get("name"), **payload})
