"""Exception hierarchy shared by the chart store and its callers."""

from __future__ import annotations


class ChartStoreError(Exception):
    """Base class for every error raised by the chart store."""


class StorageReadError(ChartStoreError):
    """The backing document is missing, unreadable, or not a JSON array."""


class StorageWriteError(ChartStoreError):
    """The backing document could not be replaced; the mutation is not durable."""


class InvalidArgumentError(ChartStoreError, ValueError):
    """A mutating call was made without a required argument."""


class NotFoundError(ChartStoreError, LookupError):
    """A predicate-scoped update or removal matched no records."""


__all__ = [
    "ChartStoreError",
    "InvalidArgumentError",
    "NotFoundError",
    "StorageReadError",
    "StorageWriteError",
]
