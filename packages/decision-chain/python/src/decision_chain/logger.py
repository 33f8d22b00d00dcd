# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
DecisionLog — primary entry point for recording and verifying decisions.

DecisionLog coordinates three concerns:

1. Record construction — building a well-typed DecisionRecord from caller input.
2. Hash chain maintenance — linking each record to the subject's last record.
3. Storage delegation — persisting chains through a pluggable key-value store.

Chains are strictly per subject: the first record of every subject starts at
the genesis sentinel.  The ``latest`` key is updated on every append so
callers can see the most recent activity across all subjects, but it is never
used to link records.

Usage::

    from decision_chain import DecisionLog, DecisionInput

    log = DecisionLog()
    record = await log.append(
        DecisionInput(subject_id="SHIP-001", action="compliance_check",
                      payload={"status": "approved"})
    )
    result = await log.verify("SHIP-001")
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any

from pydantic import ValidationError

from decision_chain.chain import HashChain
from decision_chain.config import ChainConfig
from decision_chain.errors import ChainDecodeError, StorageError
from decision_chain.record import build_pending_record, current_timestamp_ms
from decision_chain.storage.interface import KeyValueStore
from decision_chain.storage.memory import MemoryStore
from decision_chain.types import ChainVerificationResult, DecisionInput, DecisionRecord

logger = logging.getLogger("logibrew.chain")


class DecisionLog:
    """
    Append-only, per-subject decision log.

    Appends to the same subject made through one DecisionLog instance are
    serialised with a per-subject ``asyncio.Lock``.  Separate instances or
    processes sharing a store are not coordinated.

    Parameters
    ----------
    storage:
        Pluggable key-value backend.  Defaults to in-memory storage.
    config:
        Key layout, genesis sentinel and verification mode.
    clock:
        Returns the current time in epoch milliseconds.  Override in tests.
    """

    def __init__(
        self,
        storage: KeyValueStore | None = None,
        config: ChainConfig | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._storage: KeyValueStore = storage or MemoryStore()
        self._config = config or ChainConfig()
        self._clock = clock or current_timestamp_ms
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: dict[str, int] = {}

    @property
    def storage(self) -> KeyValueStore:
        return self._storage

    @property
    def config(self) -> ChainConfig:
        return self._config

    @asynccontextmanager
    async def _subject_lock(self, subject_id: str) -> AsyncIterator[None]:
        # A subject's lock is dropped once no append holds or awaits it.
        lock = self._locks.get(subject_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[subject_id] = lock
        self._lock_users[subject_id] = self._lock_users.get(subject_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            remaining = self._lock_users[subject_id] - 1
            if remaining:
                self._lock_users[subject_id] = remaining
            else:
                del self._lock_users[subject_id]
                del self._locks[subject_id]

    def active_subjects(self) -> list[str]:
        """Return the subjects with an append in progress or waiting."""
        return list(self._locks)

    async def _read(self, key: str) -> Any | None:
        try:
            return await self._storage.get(key)
        except Exception as exc:
            logger.exception("Failed to read %s", key)
            raise StorageError(key, "read", str(exc)) from exc

    async def _write(self, key: str, value: Any) -> None:
        try:
            await self._storage.set(key, value)
        except Exception as exc:
            logger.exception("Failed to write %s", key)
            raise StorageError(key, "write", str(exc)) from exc

    async def append(self, decision: DecisionInput) -> DecisionRecord:
        """
        Record a decision about ``decision.subject_id``.

        Reads the subject's chain, links a new record to its last hash (or
        the genesis sentinel), writes the extended chain back and then
        updates the latest pointer.

        Raises
        ------
        StorageError
            If any storage read or write fails.  Nothing is retried.
        ChainDecodeError
            If the stored chain is not a list.  Nothing is written.
        ValueError
            If the payload contains NaN or infinite floats.  Nothing is
            written.
        """
        key = self._config.chain_key(decision.subject_id)
        async with self._subject_lock(decision.subject_id):
            stored = await self._read(key)
            if stored is not None and not isinstance(stored, list):
                raise ChainDecodeError(key, "expected a list")
            chain_values: list[Any] = list(stored) if stored is not None else []
            tip = self._tip_of(chain_values)

            pending = build_pending_record(
                decision,
                previous_hash=tip,
                timestamp=self._clock(),
                default_actor_id=self._config.default_actor_id,
            )
            record = HashChain(initial_hash=tip).append(pending)
            wire = record.to_wire()

            await self._write(key, [*chain_values, wire])
            await self._write(self._config.latest_key, wire)

        logger.debug(
            "Logged %s for %s with hash %s...",
            record.action,
            record.subject_id,
            record.hash[:16],
        )
        return record

    async def record(
        self,
        subject_id: str,
        action: str,
        payload: Any = None,
        actor_id: str | None = None,
    ) -> DecisionRecord:
        """Keyword convenience wrapper around :meth:`append`."""
        return await self.append(
            DecisionInput(
                subject_id=subject_id,
                action=action,
                actor_id=actor_id,
                payload={} if payload is None else payload,
            )
        )

    def _tip_of(self, chain_values: list[Any]) -> str:
        if not chain_values:
            return self._config.genesis_hash
        last = chain_values[-1]
        if isinstance(last, dict) and last.get("hash"):
            return str(last["hash"])
        return self._config.genesis_hash

    async def raw_chain(self, subject_id: str) -> list[Any]:
        """Return the subject's chain exactly as stored (empty list when absent)."""
        stored = await self._read(self._config.chain_key(subject_id))
        if stored is None:
            return []
        if not isinstance(stored, list):
            raise ChainDecodeError(self._config.chain_key(subject_id), "expected a list")
        return stored

    async def chain(self, subject_id: str) -> list[DecisionRecord]:
        """
        Return the subject's chain as validated records, oldest first.

        Raises
        ------
        ChainDecodeError
            If the stored value is not a list of records.
        """
        key = self._config.chain_key(subject_id)
        try:
            return [DecisionRecord.model_validate(item) for item in await self.raw_chain(subject_id)]
        except ValidationError as exc:
            raise ChainDecodeError(key, str(exc)) from exc

    async def verify(self, subject_id: str) -> ChainVerificationResult:
        """
        Verify the integrity of the subject's stored chain.

        Reads the raw stored values so that records which no longer validate
        are reported as a failure rather than raised.

        Raises
        ------
        StorageError
            If the storage read fails.
        """
        stored = await self._read(self._config.chain_key(subject_id))
        chain = HashChain(
            initial_hash=self._config.genesis_hash,
            strict_genesis=self._config.strict_genesis,
        )
        return chain.verify([] if stored is None else stored)

    async def latest(self) -> DecisionRecord | None:
        """Return the most recent record appended for any subject."""
        stored = await self._read(self._config.latest_key)
        if stored is None:
            return None
        return DecisionRecord.model_validate(stored)

    async def count(self, subject_id: str) -> int:
        """Return the number of records in the subject's chain."""
        return len(await self.raw_chain(subject_id))
