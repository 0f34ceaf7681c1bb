"""FastAPI routes exposing chart definitions and their data."""

from __future__ import annotations

import argparse
import logging
from typing import Any

from fastapi import Body, FastAPI, HTTPException, Request, status

from src.core.chart_service import ChartService
from src.core.config import Settings, default_settings, load_settings
from src.core.dependencies import ServiceDependencies, build_dependencies
from src.core.errors import (
    ChartStoreError,
    InvalidArgumentError,
    NotFoundError,
    StorageReadError,
    StorageWriteError,
)
from src.core.logging_utils import configure_logging
from src.core.models import ChartDataResponse, ChartPatch, ChartPayload, proto_chart


LOGGER = logging.getLogger(__name__)


def _to_http_error(exc: ChartStoreError) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, InvalidArgumentError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, (StorageReadError, StorageWriteError)):
        LOGGER.error("Chart storage failure: %s", exc)
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Chart store error")


def create_app(
    config_path: str | None = None,
    *,
    settings: Settings | None = None,
    dependencies: ServiceDependencies | None = None,
) -> FastAPI:
    LOGGER.info("Initialising web application with config '%s'", config_path)
    if settings is None:
        settings = load_settings(config_path) if config_path else default_settings()
    if dependencies is None:
        dependencies = build_dependencies(settings)
    service: ChartService = dependencies.chart_service()

    app = FastAPI(title="Chart Dashboard API", version="0.1.0")
    app.state.settings = settings
    app.state.chart_service = service

    @app.get("/api/health")
    def healthcheck() -> dict[str, str]:  # pragma: no cover - trivial
        return {"status": "ok"}

    @app.get("/api/charts")
    def list_charts() -> list[dict[str, Any]]:
        try:
            return service.find_all()
        except ChartStoreError as exc:
            raise _to_http_error(exc) from exc

    @app.get("/api/charts/proto")
    def chart_template() -> dict[str, Any]:
        return proto_chart()

    @app.post("/api/charts", status_code=status.HTTP_201_CREATED)
    def create_chart(payload: ChartPayload) -> dict[str, Any]:
        try:
            chart = service.create(payload.to_record())
        except ChartStoreError as exc:
            raise _to_http_error(exc) from exc
        return chart

    @app.get("/api/charts/{chart_id}")
    def get_chart(chart_id: str) -> dict[str, Any]:
        try:
            chart = service.find_one(chart_id)
        except ChartStoreError as exc:
            raise _to_http_error(exc) from exc
        if chart is None:
            LOGGER.debug("Chart %s requested but not found", chart_id)
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Chart not found")
        return chart

    @app.put("/api/charts/{chart_id}")
    def update_chart(chart_id: str, payload: ChartPatch) -> dict[str, Any]:
        fields = payload.to_fields()
        if not fields:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields supplied")
        try:
            return service.update(chart_id, fields)
        except ChartStoreError as exc:
            LOGGER.warning("Update of chart %s failed: %s", chart_id, exc)
            raise _to_http_error(exc) from exc

    @app.delete("/api/charts/{chart_id}")
    def delete_chart(chart_id: str) -> list[dict[str, Any]]:
        try:
            return service.delete(chart_id)
        except ChartStoreError as exc:
            LOGGER.warning("Delete of chart %s failed: %s", chart_id, exc)
            raise _to_http_error(exc) from exc

    @app.post("/api/charts/{chart_id}/data", response_model=ChartDataResponse)
    def chart_data(
        chart_id: str,
        params: dict[str, Any] | None = Body(default=None),
    ) -> ChartDataResponse:
        return _serve_data(service, chart_id, params)

    @app.get("/api/charts/{chart_id}/data", response_model=ChartDataResponse)
    def chart_data_query(chart_id: str, request: Request) -> ChartDataResponse:
        return _serve_data(service, chart_id, dict(request.query_params))

    return app


def _serve_data(service: ChartService, chart_id: str, params: dict[str, Any] | None) -> ChartDataResponse:
    LOGGER.debug("Data requested for chart %s params=%s", chart_id, params)
    try:
        result = service.get_data(chart_id, params)
    except ChartStoreError as exc:
        raise _to_http_error(exc) from exc
    return ChartDataResponse(**result)


def main() -> None:
    parser = argparse.ArgumentParser(description="Launch the chart dashboard API")
    parser.add_argument("--config", default="configs/dev.yaml", help="Path to configuration file")
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind the server")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind the server")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    configure_logging(debug=args.debug)
    app = create_app(config_path=args.config)

    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise SystemExit("uvicorn must be installed to run the web frontend") from exc

    LOGGER.info("Starting uvicorn on %s:%s", args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
