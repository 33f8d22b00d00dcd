# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
Read-only query facade over a KeyValueStore holding decision chains.

ChainQuery lists subjects through the store's prefix query and produces
verification summaries for them.  Callers can use it independently of
DecisionLog when they only need read access to an existing store.
"""

from __future__ import annotations

from typing import Any

from decision_chain.chain import HashChain
from decision_chain.config import ChainConfig
from decision_chain.storage.interface import KeyValueStore
from decision_chain.types import (
    ChainEntry,
    ChainSummary,
    ChainVerificationFailure,
    DecisionRecord,
)

SHORT_HASH_LENGTH = 16


class ChainQuery:
    """
    Read-only query interface over decision chains.

    Parameters
    ----------
    storage:
        The key-value backend to query.
    config:
        Must match the configuration the chains were written with.
    """

    def __init__(self, storage: KeyValueStore, config: ChainConfig | None = None) -> None:
        self._storage = storage
        self._config = config or ChainConfig()

    async def subjects(self) -> list[str]:
        """Return every subject id that has a stored chain, sorted."""
        entries = await self._storage.query_by_prefix(self._config.chain_key_prefix)
        subjects = (self._config.subject_from_key(entry.key) for entry in entries)
        return sorted(subject for subject in subjects if subject is not None)

    async def chain(self, subject_id: str) -> list[DecisionRecord]:
        """Return the subject's chain as records, oldest first."""
        stored = await self._storage.get(self._config.chain_key(subject_id))
        return [DecisionRecord.model_validate(item) for item in stored or []]

    async def latest(self) -> DecisionRecord | None:
        """Return the most recent record appended for any subject."""
        stored = await self._storage.get(self._config.latest_key)
        return None if stored is None else DecisionRecord.model_validate(stored)

    async def summary(self, subject_id: str) -> ChainSummary:
        """Verify one subject's chain and list its entries."""
        stored = await self._storage.get(self._config.chain_key(subject_id))
        return summarise_chain(subject_id, [] if stored is None else stored, self._config)

    async def summaries(self) -> list[ChainSummary]:
        """Return a summary for every stored subject chain."""
        entries = await self._storage.query_by_prefix(self._config.chain_key_prefix)
        summaries: list[ChainSummary] = []
        for entry in entries:
            subject_id = self._config.subject_from_key(entry.key)
            if subject_id is not None:
                summaries.append(summarise_chain(subject_id, entry.value, self._config))
        return summaries


def summarise_chain(
    subject_id: str,
    stored: Any,
    config: ChainConfig | None = None,
) -> ChainSummary:
    """
    Build a ChainSummary from a stored chain value.

    Entries are listed only when the chain is a well-formed list of records;
    a malformed value is reported as tampered with no entries.
    """
    config = config or ChainConfig()
    result = HashChain(strict_genesis=config.strict_genesis).verify(stored)
    broken_at = result.broken_at if isinstance(result, ChainVerificationFailure) else None

    if result.record_count == 0 and result.valid:
        return ChainSummary(subject_id=subject_id, record_count=0, valid=True, status="empty")

    entries: list[ChainEntry] = []
    records: list[DecisionRecord] = []
    if isinstance(stored, list):
        for index, item in enumerate(stored):
            if isinstance(item, DecisionRecord):
                record = item
            elif isinstance(item, dict):
                try:
                    record = DecisionRecord.model_validate(item)
                except ValueError:
                    break
            else:
                break
            records.append(record)
            entries.append(
                ChainEntry(
                    index=index,
                    action=record.action,
                    timestamp=record.timestamp,
                    short_hash=record.hash[:SHORT_HASH_LENGTH],
                )
            )

    latest = records[-1] if records else None
    return ChainSummary(
        subject_id=subject_id,
        record_count=result.record_count,
        valid=result.valid,
        status="verified" if result.valid else "tampered",
        latest_hash=latest.hash if latest else None,
        latest_timestamp=latest.timestamp if latest else None,
        broken_at=broken_at,
        entries=entries,
    )


def format_summary(summary: ChainSummary) -> str:
    """
    Render a ChainSummary as a human-readable text block.

    Timestamps are printed as epoch milliseconds; rendering them in a
    locale is left to the presentation layer.
    """
    if summary.status == "empty":
        return f"No decision logs found for subject: {summary.subject_id}"

    status = "VERIFIED" if summary.valid else "TAMPERED"
    lines = [
        f"Subject: {summary.subject_id} | Chain Status: {status} | Entries: {summary.record_count}"
    ]
    if summary.broken_at is not None:
        lines.append(f"First broken record: index {summary.broken_at}")
    for entry in summary.entries:
        lines.append(
            f"{entry.index + 1}. {entry.action} | {entry.timestamp} | Hash: {entry.short_hash}..."
        )
    return "\n".join(lines)
