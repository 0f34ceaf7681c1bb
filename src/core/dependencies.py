"""Factory helpers for constructing chart service dependencies from settings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from src.core.chart_service import ChartService, SQLExecutor
from src.core.config import Settings
from src.core.observability import DataRequestSink, JSONLDataRequestLogger
from src.core.record_store import RecordStore
from src.integrations.in_memory_sql_executor import InMemorySQLExecutor
from src.integrations.sqlalchemy_executor import SQLAlchemyExecutor

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class ServiceDependencies:
    """Collection of collaborators used by the chart service."""

    store: RecordStore
    sql_executor: SQLExecutor
    audit_sink: DataRequestSink | None = None

    def chart_service(self) -> ChartService:
        return ChartService(
            store=self.store,
            sql_executor=self.sql_executor,
            audit_sink=self.audit_sink,
        )


def build_dependencies(settings: Settings) -> ServiceDependencies:
    """Create dependency instances based on *settings*."""

    store_path = settings.store.resolve_path()
    store = RecordStore(file_path=store_path)
    LOGGER.info("Chart store resolved to %s", store_path)

    database_url = settings.database.resolve_url()
    executor: SQLExecutor
    if database_url:
        executor = SQLAlchemyExecutor(database_url=database_url)
    else:
        LOGGER.warning("No database URL configured; chart queries will return no rows")
        executor = InMemorySQLExecutor()

    audit_sink = None
    audit_dir = _resolve_audit_logs_dir(settings)
    if audit_dir is not None:
        audit_sink = JSONLDataRequestLogger(base_dir=audit_dir)

    return ServiceDependencies(store=store, sql_executor=executor, audit_sink=audit_sink)


def _resolve_audit_logs_dir(settings: Settings) -> Path | None:
    if not settings.paths or not settings.paths.audit_logs_dir:
        return None
    path = Path(settings.paths.audit_logs_dir).expanduser()
    path.mkdir(parents=True, exist_ok=True)
    return path
