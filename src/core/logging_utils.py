"""Shared helpers for timestamped JSONL logging."""

from __future__ import annotations

import logging
import re
from datetime import UTC, datetime
from pathlib import Path


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def configure_logging(debug: bool = False) -> None:
    """Install a basic root handler unless the host already configured one."""

    root_logger = logging.getLogger()
    if root_logger.handlers:
        if debug:
            root_logger.setLevel(logging.DEBUG)
        return
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO, format=LOG_FORMAT)


def make_timestamp_slug(raw: str | None = None) -> str:
    """Return a sortable timestamp slug (UTC) suitable for filenames."""

    candidate = (raw or "").strip()
    if candidate:
        sanitized = candidate[:-1] if candidate.endswith("Z") else candidate
        try:
            parsed = datetime.fromisoformat(sanitized)
        except ValueError:
            parsed = None
    else:
        parsed = None

    if parsed is None:
        parsed = datetime.now(UTC)

    return parsed.strftime("%Y%m%d")


def sanitize_chart_key(chart_key: str) -> str:
    """Sanitize *chart_key* so it can be embedded in filenames."""

    cleaned = re.sub(r"[^A-Za-z0-9_-]+", "-", chart_key.strip())
    return cleaned.strip("-") or "chart"


def resolve_log_path(base_dir: Path, chart_key: str, timestamp: str | None = None) -> Path:
    """Return the date-prefixed JSONL path for events about one chart."""

    slug = make_timestamp_slug(timestamp)
    safe_key = sanitize_chart_key(chart_key)
    target = base_dir.expanduser().resolve() / f"{slug}-{safe_key}.jsonl"
    target.parent.mkdir(parents=True, exist_ok=True)
    return target


def utc_now_iso() -> str:
    """Return the current UTC time in ISO-8601 with millisecond precision."""

    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
