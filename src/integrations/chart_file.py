"""Utilities for inspecting the JSON file that holds chart definitions."""

from __future__ import annotations

import argparse
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from src.core.defaults import resolve_defaults
from src.core.models import proto_chart
from src.core.record_store import RecordStore
from src.core.sanitizer import inspect_query


@dataclass(slots=True)
class ChartFileInspector:
    """Summarises the charts stored in a backing document."""

    store: RecordStore

    def describe(self) -> dict[str, Any]:
        """Return a structured summary of every chart in the file."""

        charts = self.store.select()
        summaries = []
        for chart in charts:
            check = inspect_query(chart.get("query"))
            summaries.append(
                {
                    "id": chart.get("id"),
                    "name": chart.get("name"),
                    "query_status": check.status,
                    "rejection_reason": check.reason,
                    "defaults": resolve_defaults(chart.get("vars")),
                }
            )
        return {
            "path": str(self.store.path),
            "chart_count": len(charts),
            "charts": summaries,
        }


def _build_cli() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect or initialise a charts file")
    parser.add_argument("path", type=Path, help="Path to the charts JSON document")
    parser.add_argument(
        "--init",
        action="store_true",
        help="Create the file with an empty collection when it does not exist",
    )
    parser.add_argument(
        "--with-proto",
        action="store_true",
        help="When initialising, seed the file with the starter chart",
    )
    return parser


def main() -> None:
    parser = _build_cli()
    args = parser.parse_args()
    store = RecordStore(file_path=args.path)
    if args.init and store.initialize() and args.with_proto:
        store.create({"id": "1", "name": "orders", **proto_chart()})
    summary = ChartFileInspector(store=store).describe()
    print(json.dumps(summary, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
