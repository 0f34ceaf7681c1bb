"""Pydantic shapes for chart records plus the starter chart template."""

from __future__ import annotations

import copy
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AxisPayload(BaseModel):
    model_config = ConfigDict(extra="allow")

    key: str
    stroke: str | None = None
    fill: str | None = None
    active: Any = None
    type: str | None = None
    barSize: int | None = None


class VarPayload(BaseModel):
    model_config = ConfigDict(extra="allow")

    key: str
    defaults: Any = None
    value: Any = None
    component: str | None = None


class ChartPayload(BaseModel):
    """Body accepted when creating a chart. Unknown keys are kept as-is."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1)
    label: str | None = None
    tooltip: bool | None = None
    legend: bool | None = None
    xaxis: list[AxisPayload] = Field(default_factory=list)
    yaxis: list[AxisPayload] = Field(default_factory=list)
    query: str | None = None
    vars: list[VarPayload] | None = None
    filters: dict[str, Any] | None = None

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class ChartPatch(BaseModel):
    """Partial update body; only the supplied keys are merged."""

    model_config = ConfigDict(extra="allow")

    name: str | None = None
    label: str | None = None
    tooltip: bool | None = None
    legend: bool | None = None
    xaxis: list[AxisPayload] | None = None
    yaxis: list[AxisPayload] | None = None
    query: str | None = None
    vars: list[VarPayload] | None = None
    filters: dict[str, Any] | None = None

    def to_fields(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class ChartDataResponse(BaseModel):
    data: list[dict[str, Any]]
    filters: dict[str, Any]


_PROTO_CHART: dict[str, Any] = {
    "tooltip": True,
    "legend": True,
    "xaxis": [{"key": "month"}],
    "yaxis": [
        {"type": "area", "key": "total_charged", "stroke": "#caca9d", "fill": "#caca9d"},
        {"type": "bar", "key": "total_cost_real", "stroke": "#8884d8", "fill": "#8884d8"},
        {
            "type": "line",
            "active": {"r": 8},
            "key": "total_profits",
            "stroke": "#82ca9d",
            "fill": "#82ca9d",
        },
    ],
    "label": "Order History ",
    "query": (
        "WITH monthly_totals AS (\n"
        "    SELECT\n"
        "        DATE_TRUNC('month', o.published_at) AS month,\n"
        "        COALESCE(SUM(o.charged),0) AS total_charged,\n"
        "        COALESCE(SUM(o.cost_real),0) AS total_cost_real,\n"
        "        COALESCE(SUM(o.profits),0) AS total_profits\n"
        "    FROM\n"
        "        public.orders AS o\n"
        "    INNER JOIN\n"
        "        public.orders_user_lnk AS ou\n"
        "        ON ou.order_id = o.id\n"
        "    INNER JOIN\n"
        "        public.up_users AS u\n"
        "        ON u.id = ou.user_id\n"
        "    WHERE\n"
        "        o.published_at IS NOT NULL\n"
        "        AND EXTRACT(YEAR FROM o.published_at) = :year\n"
        "    GROUP BY\n"
        "        DATE_TRUNC('month', o.published_at)\n"
        ")\n"
        "SELECT\n"
        "    TO_CHAR(month, 'YYYY-MM') AS month,\n"
        "    total_charged,\n"
        "    total_cost_real,\n"
        "    total_profits\n"
        "FROM\n"
        "    monthly_totals\n"
        "ORDER BY\n"
        "    month;"
    ),
    "vars": [
        {
            "key": "year",
            "defaults": "2024",
            "component": "select",
            "value": [{"key": str(year), "value": str(year)} for year in range(2023, 2030)],
        }
    ],
}


def proto_chart() -> dict[str, Any]:
    """Return a fresh copy of the starter chart used for new dashboards."""

    return copy.deepcopy(_PROTO_CHART)


__all__ = [
    "AxisPayload",
    "ChartDataResponse",
    "ChartPatch",
    "ChartPayload",
    "VarPayload",
    "proto_chart",
]
