"""Helpers for turning chart variable metadata into query parameters."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any


def resolve_defaults(variables: Iterable[Mapping[str, Any]] | None) -> dict[str, Any]:
    """Return ``{key: defaults}`` for every variable descriptor in *variables*."""

    if not variables:
        return {}

    defaults: dict[str, Any] = {}
    for variable in variables:
        key = variable.get("key")
        if key is None:
            continue
        defaults[str(key)] = variable.get("defaults")
    return defaults


def merge_params(
    defaults: Mapping[str, Any],
    overrides: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Layer *overrides* on top of *defaults*; overrides win on collision."""

    return {**defaults, **(overrides or {})}


__all__ = ["merge_params", "resolve_defaults"]
