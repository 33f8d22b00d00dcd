# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
JSON document file storage backend.

All keys live in a single JSON object on disk.  Every ``set`` rewrites the
document to a temporary sibling file and then atomically replaces the
original, so readers only ever observe complete documents.  Callers relying
on tamper evidence should still restrict write access to the file with
OS-level permissions.

Reading always parses the entire file from disk so that the in-process view
stays consistent with anything written by other processes.  Writers in other
processes are not coordinated with; see the concurrency notes in DESIGN.md.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os

from decision_chain.storage.interface import KeyValueEntry, KeyValueStore

logger = logging.getLogger("logibrew.storage")


class FileStore(KeyValueStore):
    """
    Persistent KeyValueStore backed by one JSON document.

    Parameters
    ----------
    file_path:
        Path to the JSON document.  The file is created on the first ``set``.
    """

    def __init__(self, file_path: str | Path) -> None:
        self._file_path = Path(file_path)
        self._write_lock = asyncio.Lock()

    @property
    def file_path(self) -> Path:
        return self._file_path

    async def _load(self) -> dict[str, Any]:
        if not await aiofiles.os.path.exists(self._file_path):
            return {}
        async with aiofiles.open(self._file_path, mode="r", encoding="utf-8") as file_handle:
            raw = await file_handle.read()
        if not raw.strip():
            return {}
        document = json.loads(raw)
        if not isinstance(document, dict):
            raise ValueError(f"{self._file_path} does not contain a JSON object")
        return document

    async def get(self, key: str) -> Any | None:
        document = await self._load()
        return document.get(key)

    async def set(self, key: str, value: Any) -> None:
        async with self._write_lock:
            document = await self._load()
            document[key] = value
            serialised = json.dumps(document, ensure_ascii=False, indent=2, sort_keys=True)
            temp_path = self._file_path.with_name(self._file_path.name + ".tmp")
            async with aiofiles.open(temp_path, mode="w", encoding="utf-8") as file_handle:
                await file_handle.write(serialised)
            await aiofiles.os.replace(temp_path, self._file_path)
        logger.debug("Wrote key %s to %s", key, self._file_path)

    async def query_by_prefix(self, prefix: str) -> list[KeyValueEntry]:
        document = await self._load()
        return [
            KeyValueEntry(key, value)
            for key, value in sorted(document.items())
            if key.startswith(prefix)
        ]
