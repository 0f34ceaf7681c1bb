"""Tests for the chart service composite operations."""

from __future__ import annotations

from pathlib import Path

import pytest

from src.core.chart_service import ChartIdFactory, ChartService
from src.core.errors import NotFoundError
from src.core.observability import InMemoryDataRequestLogger
from src.core.record_store import RecordStore
from src.integrations.in_memory_sql_executor import InMemorySQLExecutor

SALES_SQL = "SELECT month, total FROM sales WHERE year = :year"


@pytest.fixture()
def store(tmp_path: Path) -> RecordStore:
    store = RecordStore(file_path=tmp_path / "charts.json")
    store.initialize()
    store.bulk_create(
        [
            {
                "id": "100",
                "name": "sales",
                "query": SALES_SQL + ";\n",
                "vars": [
                    {"key": "year", "defaults": "2024", "component": "select"},
                    {"key": "region", "defaults": "EU"},
                ],
            },
            {"id": "200", "name": "unsafe", "query": "DELETE FROM sales"},
            {"id": "300", "name": "empty"},
        ]
    )
    return store


@pytest.fixture()
def executor() -> InMemorySQLExecutor:
    executor = InMemorySQLExecutor(record_calls=True)
    executor.prime(SALES_SQL, [{"month": "2024-01", "total": 10}])
    return executor


def _service(store: RecordStore, executor: InMemorySQLExecutor, sink=None) -> ChartService:
    ids = iter(["500", "501", "502"])
    return ChartService(
        store=store,
        sql_executor=executor,
        audit_sink=sink,
        id_factory=lambda: next(ids),
    )


def test_create_assigns_id(store: RecordStore, executor: InMemorySQLExecutor) -> None:
    service = _service(store, executor)

    chart = service.create({"id": "caller", "name": "profit", "xaxis": [], "yaxis": []})

    assert chart["id"] == "500"
    assert service.find_one("500") == chart


def test_find_one_matches_id_or_name(store: RecordStore, executor: InMemorySQLExecutor) -> None:
    service = _service(store, executor)

    assert service.find_one("100")["name"] == "sales"
    assert service.find_one("sales")["id"] == "100"
    assert service.find_one("missing") is None


def test_update_never_reassigns_id(store: RecordStore, executor: InMemorySQLExecutor) -> None:
    service = _service(store, executor)

    updated = service.update("sales", {"id": "999", "name": "revenue"})

    assert updated["id"] == "100"
    assert updated["name"] == "revenue"
    assert service.find_one("999") is None


def test_update_returns_stored_record(store: RecordStore, executor: InMemorySQLExecutor) -> None:
    service = _service(store, executor)

    updated = service.update("100", {"legend": False})

    assert updated == service.find_one("100")
    assert updated["vars"][0]["key"] == "year"
    assert updated["legend"] is False


def test_update_unknown_chart_raises(store: RecordStore, executor: InMemorySQLExecutor) -> None:
    service = _service(store, executor)

    with pytest.raises(NotFoundError):
        service.update("missing", {"name": "x"})


def test_delete_matches_id_only(store: RecordStore, executor: InMemorySQLExecutor) -> None:
    service = _service(store, executor)

    with pytest.raises(NotFoundError):
        service.delete("sales")

    remaining = service.delete("100")
    assert [chart["id"] for chart in remaining] == ["200", "300"]


def test_get_data_merges_defaults_and_overrides(
    store: RecordStore, executor: InMemorySQLExecutor
) -> None:
    sink = InMemoryDataRequestLogger()
    service = _service(store, executor, sink)

    result = service.get_data("sales", {"region": "US"})

    assert result == {
        "data": [{"month": "2024-01", "total": 10}],
        "filters": {"year": "2024", "region": "US"},
    }
    assert executor.calls == [(SALES_SQL, {"year": "2024", "region": "US"})]
    assert sink.events[-1]["event"] == "query_executed"
    assert sink.events[-1]["row_count"] == 1


def test_get_data_with_rejected_query_returns_empty(
    store: RecordStore, executor: InMemorySQLExecutor
) -> None:
    sink = InMemoryDataRequestLogger()
    service = _service(store, executor, sink)

    result = service.get_data("unsafe")

    assert result == {"data": [], "filters": {}}
    assert executor.calls == []
    assert sink.events[0]["event"] == "query_rejected"
    assert sink.events[0]["reason"] == "forbidden keyword 'DELETE'"


def test_get_data_without_query_returns_empty(
    store: RecordStore, executor: InMemorySQLExecutor
) -> None:
    service = _service(store, executor)

    assert service.get_data("300", {"year": "2020"}) == {"data": [], "filters": {"year": "2020"}}
    assert executor.calls == []


def test_get_data_with_no_rows_returns_empty(store: RecordStore) -> None:
    service = _service(store, InMemorySQLExecutor())

    assert service.get_data("100")["data"] == []


def test_get_data_unknown_chart_raises(store: RecordStore, executor: InMemorySQLExecutor) -> None:
    service = _service(store, executor)

    with pytest.raises(NotFoundError):
        service.get_data("missing")


def test_id_factory_is_strictly_increasing() -> None:
    factory = ChartIdFactory()

    ids = [int(factory()) for _ in range(50)]

    assert ids == sorted(set(ids))
