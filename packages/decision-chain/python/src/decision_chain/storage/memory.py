# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
Volatile in-memory storage backend.

Values are held in a plain dict.  Suitable for testing, short-lived processes,
and scenarios where persistence is not required.  Data is lost when the
process exits.
"""

from __future__ import annotations

import copy
from typing import Any

from decision_chain.storage.interface import KeyValueEntry, KeyValueStore


class MemoryStore(KeyValueStore):
    """
    In-memory, non-persistent KeyValueStore implementation.

    Values are deep-copied on the way in and out so callers can never mutate
    stored state through a reference they hold.
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    async def get(self, key: str) -> Any | None:
        return copy.deepcopy(self._values.get(key))

    async def set(self, key: str, value: Any) -> None:
        self._values[key] = copy.deepcopy(value)

    async def query_by_prefix(self, prefix: str) -> list[KeyValueEntry]:
        return [
            KeyValueEntry(key, copy.deepcopy(value))
            for key, value in sorted(self._values.items())
            if key.startswith(prefix)
        ]
