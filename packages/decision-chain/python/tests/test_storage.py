# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation
"""
Tests for the MemoryStore and FileStore key-value backends.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from decision_chain.logger import DecisionLog
from decision_chain.storage import FileStore, KeyValueEntry, MemoryStore


# ---------------------------------------------------------------------------
# TestMemoryStore
# ---------------------------------------------------------------------------


class TestMemoryStore:
    @pytest.mark.asyncio
    async def test_missing_key_returns_none(self) -> None:
        assert await MemoryStore().get("absent") is None

    @pytest.mark.asyncio
    async def test_set_then_get(self) -> None:
        store = MemoryStore()
        await store.set("subject-SHIP-001-chain", [{"hash": "abc"}])
        assert await store.get("subject-SHIP-001-chain") == [{"hash": "abc"}]

    @pytest.mark.asyncio
    async def test_values_are_copied_on_the_way_in_and_out(self) -> None:
        store = MemoryStore()
        value = [{"hash": "abc"}]
        await store.set("key", value)
        value[0]["hash"] = "mutated"
        fetched = await store.get("key")
        fetched[0]["hash"] = "mutated again"
        assert await store.get("key") == [{"hash": "abc"}]

    @pytest.mark.asyncio
    async def test_query_by_prefix_is_sorted_and_filtered(self) -> None:
        store = MemoryStore()
        await store.set("subject-B-chain", [2])
        await store.set("latest-decision-record", {"hash": "x"})
        await store.set("subject-A-chain", [1])
        entries = await store.query_by_prefix("subject-")
        assert entries == [KeyValueEntry("subject-A-chain", [1]), KeyValueEntry("subject-B-chain", [2])]


# ---------------------------------------------------------------------------
# TestFileStore
# ---------------------------------------------------------------------------


class TestFileStore:
    @pytest.mark.asyncio
    async def test_missing_file_reads_as_empty(self, tmp_path: Path) -> None:
        store = FileStore(tmp_path / "decisions.json")
        assert await store.get("anything") is None
        assert await store.query_by_prefix("") == []

    @pytest.mark.asyncio
    async def test_set_creates_json_document(self, tmp_path: Path) -> None:
        path = tmp_path / "decisions.json"
        store = FileStore(path)
        await store.set("subject-SHIP-001-chain", [{"hash": "abc", "payload": {"port": "Málaga"}}])
        document = json.loads(path.read_text(encoding="utf-8"))
        assert document == {"subject-SHIP-001-chain": [{"hash": "abc", "payload": {"port": "Málaga"}}]}
        assert not (tmp_path / "decisions.json.tmp").exists()

    @pytest.mark.asyncio
    async def test_values_survive_a_new_instance(self, tmp_path: Path) -> None:
        path = tmp_path / "decisions.json"
        await FileStore(path).set("a", 1)
        await FileStore(path).set("b", 2)
        reopened = FileStore(path)
        assert await reopened.get("a") == 1
        assert await reopened.get("b") == 2

    @pytest.mark.asyncio
    async def test_query_by_prefix(self, tmp_path: Path) -> None:
        store = FileStore(tmp_path / "decisions.json")
        await store.set("subject-B-chain", [2])
        await store.set("subject-A-chain", [1])
        await store.set("other", 0)
        entries = await store.query_by_prefix("subject-")
        assert [entry.key for entry in entries] == ["subject-A-chain", "subject-B-chain"]

    @pytest.mark.asyncio
    async def test_non_object_document_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "decisions.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        with pytest.raises(ValueError, match="does not contain a JSON object"):
            await FileStore(path).get("a")

    @pytest.mark.asyncio
    async def test_decision_log_round_trip_through_disk(self, tmp_path: Path) -> None:
        path = tmp_path / "decisions.json"
        first = await DecisionLog(storage=FileStore(path)).record(
            "SHIP-001", "compliance_check", {"status": "approved"}
        )
        reopened = DecisionLog(storage=FileStore(path))
        second = await reopened.record("SHIP-001", "route_change", {"status": "approved"})

        assert second.previous_hash == first.hash
        result = await reopened.verify("SHIP-001")
        assert result.valid is True
        assert result.record_count == 2
