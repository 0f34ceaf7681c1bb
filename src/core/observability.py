"""JSONL-backed audit trail for chart data requests."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from src.core.logging_utils import resolve_log_path, utc_now_iso


class DataRequestSink(Protocol):
    """Records lifecycle events emitted while serving chart data."""

    def log_event(self, chart_key: str, event: str, payload: dict[str, Any]) -> None:  # pragma: no cover - interface
        ...


def _write_jsonl(base_dir: Path, chart_key: str, payload: dict[str, Any]) -> None:
    target = resolve_log_path(
        base_dir=base_dir,
        chart_key=chart_key,
        timestamp=payload.get("timestamp") if isinstance(payload, dict) else None,
    )
    with target.open("a", encoding="utf-8") as handle:
        json.dump(payload, handle, ensure_ascii=False, default=str)
        handle.write("\n")


def _build_event(event: str, payload: dict[str, Any]) -> dict[str, Any]:
    enriched = {key: value for key, value in payload.items() if value is not None}
    enriched.setdefault("event", event)
    enriched.setdefault("timestamp", utc_now_iso())
    return enriched


@dataclass(slots=True)
class JSONLDataRequestLogger(DataRequestSink):
    """Persists data request events under a dedicated logs directory."""

    base_dir: Path

    def log_event(self, chart_key: str, event: str, payload: dict[str, Any]) -> None:  # type: ignore[override]
        _write_jsonl(self.base_dir, chart_key, _build_event(event, payload))


@dataclass(slots=True)
class InMemoryDataRequestLogger(DataRequestSink):
    """Keeps events in a list; handy for tests and one-off scripts."""

    events: list[dict[str, Any]] = field(default_factory=list)

    def log_event(self, chart_key: str, event: str, payload: dict[str, Any]) -> None:  # type: ignore[override]
        entry = _build_event(event, payload)
        entry.setdefault("chart", chart_key)
        self.events.append(entry)
