# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation
"""Shared fixtures for decision-chain tests."""

from __future__ import annotations

import itertools
from collections.abc import Callable
from typing import Any

import pytest

from decision_chain.chain import HashChain
from decision_chain.config import ChainConfig
from decision_chain.logger import DecisionLog
from decision_chain.record import build_pending_record
from decision_chain.storage.interface import KeyValueEntry, KeyValueStore
from decision_chain.storage.memory import MemoryStore
from decision_chain.types import DecisionInput, DecisionRecord


class FailingStore(KeyValueStore):
    """KeyValueStore that raises on reads and/or writes of selected keys."""

    def __init__(
        self,
        fail_get: bool = False,
        fail_set_keys: frozenset[str] = frozenset(),
    ) -> None:
        self.inner = MemoryStore()
        self.fail_get = fail_get
        self.fail_set_keys = fail_set_keys

    async def get(self, key: str) -> Any | None:
        if self.fail_get:
            raise OSError("disk unavailable")
        return await self.inner.get(key)

    async def set(self, key: str, value: Any) -> None:
        if key in self.fail_set_keys:
            raise OSError("disk full")
        await self.inner.set(key, value)

    async def query_by_prefix(self, prefix: str) -> list[KeyValueEntry]:
        return await self.inner.query_by_prefix(prefix)


@pytest.fixture
def clock() -> Callable[[], int]:
    """Deterministic clock returning 1_700_000_000_000, +1000 ms per call."""
    ticks = itertools.count(1_700_000_000_000, 1000)
    return lambda: next(ticks)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def decision_log(store: MemoryStore, clock: Callable[[], int]) -> DecisionLog:
    """A DecisionLog over a fresh MemoryStore with a deterministic clock."""
    return DecisionLog(storage=store, clock=clock)


@pytest.fixture
def chain_config() -> ChainConfig:
    return ChainConfig()


def _build_chain(length: int, subject_id: str = "SHIP-001") -> list[DecisionRecord]:
    """Build a correctly linked chain of ``length`` records."""
    chain = HashChain()
    records: list[DecisionRecord] = []
    for index in range(length):
        pending = build_pending_record(
            DecisionInput(
                subject_id=subject_id,
                action="compliance_check" if index % 2 == 0 else "route_change",
                actor_id="planner-7",
                payload={"status": "approved", "step": index, "notes": {"b": 2, "a": 1}},
            ),
            previous_hash=chain.last_hash(),
            timestamp=1_700_000_000_000 + index * 1000,
        )
        records.append(chain.append(pending))
    return records


@pytest.fixture
def three_record_chain() -> list[DecisionRecord]:
    return _build_chain(3)


@pytest.fixture
def make_chain() -> Callable[..., list[DecisionRecord]]:
    """Factory fixture: ``make_chain(length, subject_id="SHIP-001")``."""
    return _build_chain


@pytest.fixture
def failing_store() -> Callable[..., FailingStore]:
    """Factory fixture building a FailingStore with the given failure switches."""
    return FailingStore
