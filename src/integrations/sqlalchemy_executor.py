"""SQLAlchemy-backed executor for sanitized chart queries.

Statements use named ``:param`` placeholders which are bound from the merged
parameter map through :func:`sqlalchemy.text`. Only the keys a statement
actually references are bound, so extra UI filters never reach the driver.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class SQLAlchemyExecutor:
    """Runs read-only statements against a database URL."""

    database_url: str
    engine_options: dict[str, Any] = field(default_factory=dict)
    _engine: Engine | None = field(init=False, default=None, repr=False)

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = create_engine(self.database_url, **self.engine_options)
            LOGGER.info("Database engine created for %s", self._engine.url.render_as_string())
        return self._engine

    def run(self, statement: str, params: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        clause = text(statement)
        wanted = set(clause.compile().params)
        bound = {key: value for key, value in (params or {}).items() if key in wanted}
        with self.engine.connect() as conn:
            result = conn.execute(clause, bound)
            if not result.returns_rows:
                return []
            rows = [dict(row._mapping) for row in result]
        LOGGER.debug("Query returned %s rows", len(rows))
        return rows

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
