# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
Abstract base class that every key-value storage backend must implement.

Values are JSON-compatible (dicts, lists, strings, numbers, booleans, None).
Implementations must return whole values atomically: a ``get`` never observes
a partially written ``set``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, NamedTuple


class KeyValueEntry(NamedTuple):
    """A single ``(key, value)`` pair returned by a prefix query."""

    key: str
    value: Any


class KeyValueStore(ABC):
    """
    Contract for decision-chain persistence backends.

    The DecisionLog only uses ``get`` and ``set``; ``query_by_prefix``
    serves aggregation callers such as ChainQuery.
    """

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the value stored under ``key``, or ``None`` if absent."""
        ...

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    @abstractmethod
    async def query_by_prefix(self, prefix: str) -> list[KeyValueEntry]:
        """Return every entry whose key starts with ``prefix``, ordered by key."""
        ...
