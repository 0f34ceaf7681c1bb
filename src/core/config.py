"""Utilities for loading application settings from YAML configuration files."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

DEFAULT_STORE_PATH = "config/charts.json"
DEFAULT_STORE_PATH_ENV = "CHARTS_FILE_PATH"
DEFAULT_DATABASE_URL_ENV = "DATABASE_URL"


@dataclass(slots=True)
class StoreSettings:
    path: str = DEFAULT_STORE_PATH
    path_env: str | None = DEFAULT_STORE_PATH_ENV

    def resolve_path(self) -> Path:
        """Return the charts file path, preferring the environment override."""

        value = os.getenv(self.path_env) if self.path_env else None
        return Path(value or self.path).expanduser()


@dataclass(slots=True)
class DatabaseSettings:
    url: str | None = None
    url_env: str | None = DEFAULT_DATABASE_URL_ENV

    def resolve_url(self) -> str | None:
        value = os.getenv(self.url_env) if self.url_env else None
        return value or self.url or None


@dataclass(slots=True)
class PathsSettings:
    audit_logs_dir: str | None = None


@dataclass(slots=True)
class Settings:
    store: StoreSettings
    database: DatabaseSettings
    paths: PathsSettings | None = None


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def load_settings(path: str | Path) -> Settings:
    """Read configuration from *path* and return structured settings."""

    config_path = Path(path)
    raw = _load_yaml(config_path)

    store_raw = raw.get("store") or {}
    store = StoreSettings(
        path=str(store_raw.get("path", DEFAULT_STORE_PATH)),
        path_env=store_raw.get("path_env", DEFAULT_STORE_PATH_ENV),
    )

    database_raw = raw.get("database") or {}
    url = database_raw.get("url")
    database = DatabaseSettings(
        url=str(url) if url else None,
        url_env=database_raw.get("url_env", DEFAULT_DATABASE_URL_ENV),
    )

    paths_raw: dict[str, Any] | None = raw.get("paths")
    paths = None
    if paths_raw:
        audit_logs_dir = paths_raw.get("audit_logs_dir")
        paths = PathsSettings(audit_logs_dir=str(audit_logs_dir) if audit_logs_dir else None)

    return Settings(store=store, database=database, paths=paths)


def default_settings() -> Settings:
    """Settings used when no configuration file is supplied."""

    return Settings(store=StoreSettings(), database=DatabaseSettings(), paths=None)
