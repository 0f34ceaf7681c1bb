"""Tests for JSONL log path helpers."""

from __future__ import annotations

import shutil
from pathlib import Path

from src.core import logging_utils
from src.core.logging_utils import resolve_log_path


def test_resolve_log_path_uses_event_date(tmp_path: Path) -> None:
    first = resolve_log_path(tmp_path, "42", "2024-01-31T23:59:59.000Z")
    second = resolve_log_path(tmp_path, "42", "2024-02-01T00:00:00.000Z")

    assert first.name == "20240131-42.jsonl"
    assert second.name == "20240201-42.jsonl"


def test_resolve_log_path_recreates_removed_directory(tmp_path: Path) -> None:
    base_dir = tmp_path / "logs"
    resolve_log_path(base_dir, "42", "2024-01-31T10:00:00.000Z")
    shutil.rmtree(base_dir)

    target = resolve_log_path(base_dir, "42", "2024-01-31T11:00:00.000Z")

    assert target.parent.is_dir()


def test_resolve_log_path_keeps_no_module_state(tmp_path: Path) -> None:
    for day in range(1, 29):
        resolve_log_path(tmp_path, f"chart-{day}", f"2024-02-{day:02d}T00:00:00.000Z")

    assert not any(
        isinstance(value, dict)
        for name, value in vars(logging_utils).items()
        if not name.startswith("__")
    )
