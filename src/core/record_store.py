"""JSON-file backed record store addressed through predicates.

Every public operation reads the whole document from disk, works on an
in-memory copy, and (for mutations) writes the whole document back. Nothing is
cached between calls, and nothing serializes concurrent writers: two mutating
calls against the same file race and the last writer wins.
"""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from src.core.errors import (
    InvalidArgumentError,
    NotFoundError,
    StorageReadError,
    StorageWriteError,
)

LOGGER = logging.getLogger(__name__)

DEFAULT_STORE_PATH = Path("config/charts.json")
NEW_FILE_MODE = 0o644

Record = dict[str, Any]
Predicate = Callable[[Record], bool]


@dataclass(slots=True)
class RecordStore:
    """Predicate-addressed CRUD over a JSON array of records."""

    file_path: str | Path = DEFAULT_STORE_PATH

    @property
    def path(self) -> Path:
        return Path(self.file_path).expanduser()

    def exists(self) -> bool:
        return self.path.is_file()

    def initialize(self) -> bool:
        """Create an empty document if none exists. Returns True when created."""

        if self.exists():
            return False
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.write([])
        LOGGER.info("Initialised empty record store at %s", self.path)
        return True

    def read(self) -> list[Record]:
        """Load the full collection; never falls back to an empty list."""

        path = self.path
        try:
            with path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            LOGGER.error("Error reading record store %s: %s", path, exc)
            raise StorageReadError(f"Could not read records file '{path}'") from exc

        if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
            LOGGER.error("Record store %s does not contain a JSON array of objects", path)
            raise StorageReadError(f"Records file '{path}' must contain a JSON array of objects")
        return payload

    def write(self, records: Sequence[Record]) -> None:
        """Replace the backing document with *records*."""

        path = self.path
        temp_name: str | None = None
        try:
            handle = tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=path.parent,
                prefix=f".{path.name}.",
                suffix=".tmp",
                delete=False,
            )
            temp_name = handle.name
            with handle:
                json.dump(list(records), handle, indent=2, ensure_ascii=False)
                handle.write("\n")
            os.chmod(temp_name, _target_mode(path))
            os.replace(temp_name, path)
        except (OSError, TypeError, ValueError) as exc:
            LOGGER.error("Error writing record store %s: %s", path, exc)
            if temp_name is not None and os.path.exists(temp_name):
                os.unlink(temp_name)
            raise StorageWriteError(f"Could not write to records file '{path}'") from exc

    def create(self, record: Record) -> None:
        records = self.read()
        records.append(record)
        self.write(records)

    def bulk_create(self, new_records: Iterable[Record]) -> None:
        records = self.read()
        records.extend(new_records)
        self.write(records)

    def select(self, predicate: Predicate | None = None) -> list[Record]:
        """Return matching records in document order, or all when no predicate."""

        records = self.read()
        if predicate is None:
            return records
        return [record for record in records if predicate(record)]

    def find_one(self, predicate: Predicate | None = None) -> Record | None:
        """Return the first match. Without a predicate nothing matches."""

        records = self.read()
        if predicate is None:
            return None
        for record in records:
            if predicate(record):
                return record
        return None

    def update(self, predicate: Predicate | None, fields: Record) -> None:
        """Shallow-merge *fields* into every match; raise if nothing matched."""

        if predicate is None:
            raise InvalidArgumentError("A predicate must be provided for updates.")
        records = self.read()
        updated = False
        for index, record in enumerate(records):
            if predicate(record):
                records[index] = {**record, **fields}
                updated = True
        if not updated:
            raise NotFoundError("No matching records found for update.")
        self.write(records)

    def bulk_update(self, updates: Iterable[tuple[Predicate, Record]]) -> None:
        """Apply each (predicate, fields) pair in turn against one snapshot."""

        records = self.read()
        for predicate, fields in updates:
            for index, record in enumerate(records):
                if predicate(record):
                    records[index] = {**record, **fields}
        self.write(records)

    def remove(self, predicate: Predicate | None = None) -> None:
        """Delete every match. Without a predicate nothing is removed."""

        records = self.read()
        if predicate is None:
            remaining = records
        else:
            remaining = [record for record in records if not predicate(record)]
        if len(remaining) == len(records):
            raise NotFoundError("No matching records found for removal.")
        self.write(remaining)

    def bulk_remove(self, predicates: Iterable[Predicate]) -> None:
        records = self.read()
        for predicate in predicates:
            records = [record for record in records if not predicate(record)]
        self.write(records)


def _target_mode(path: Path) -> int:
    if path.exists():
        return stat.S_IMODE(path.stat().st_mode)
    return NEW_FILE_MODE


__all__ = ["DEFAULT_STORE_PATH", "Predicate", "Record", "RecordStore"]
