# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
SHA-256 hash chain for tamper-evident decision record linkage.

Each record is linked to its predecessor in the same subject chain via a
SHA-256 digest, making retrospective tampering detectable: any modification
to a record changes its hash and breaks the link held by its successor.
"""

from __future__ import annotations

import hashlib
import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from decision_chain.record import finalise_record
from decision_chain.types import (
    ChainVerificationFailure,
    ChainVerificationResult,
    ChainVerificationSuccess,
    DecisionRecord,
)

logger = logging.getLogger("logibrew.chain")

# previousHash of the first record in every subject chain.
GENESIS_HASH: str = "0"

# (wire name, attribute name) in the order they are written to the hash input.
_CANONICAL_FIELDS: tuple[tuple[str, str], ...] = (
    ("timestamp", "timestamp"),
    ("action", "action"),
    ("actorId", "actor_id"),
    ("subjectId", "subject_id"),
    ("payload", "payload"),
    ("previousHash", "previous_hash"),
)


def _dumps(value: Any) -> str:
    return json.dumps(value, sort_keys=True, ensure_ascii=False, allow_nan=False, separators=(",", ":"))


def canonicalise(content: Mapping[str, Any]) -> str:
    """
    Produce the canonical JSON string hashed for a record.

    Top-level members are written in the fixed ``_CANONICAL_FIELDS`` order
    rather than dict iteration order.  Objects nested inside ``payload`` are
    written with sorted keys, so two logically identical payloads always
    serialise identically.  A blank or missing ``previous_hash`` is written
    as the genesis sentinel.

    Raises ``TypeError`` if the payload is not JSON-serialisable and
    ``ValueError`` if it contains NaN or infinite floats.
    """
    members: list[str] = []
    for wire_name, attribute in _CANONICAL_FIELDS:
        value = content.get(attribute)
        if attribute == "previous_hash" and not value:
            value = GENESIS_HASH
        members.append(f"{_dumps(wire_name)}:{_dumps(value)}")
    return "{" + ",".join(members) + "}"


def compute_hash(content: Mapping[str, Any]) -> str:
    """
    Return the 64-character lowercase hex SHA-256 digest of a record's
    canonical serialisation.

    ``content`` holds the six content fields under their snake_case names;
    any ``hash`` key present is ignored.
    """
    return hashlib.sha256(canonicalise(content).encode("utf-8")).hexdigest()


def compute_record_hash(record: DecisionRecord) -> str:
    """Recompute the digest of a stored record from its current field values."""
    return compute_hash(record.model_dump(mode="json", exclude={"hash"}))


def _coerce_record(item: Any) -> DecisionRecord:
    if isinstance(item, DecisionRecord):
        return item
    if isinstance(item, Mapping):
        return DecisionRecord.model_validate(item)
    raise TypeError(f"expected a DecisionRecord or mapping, got {type(item).__name__}")


class HashChain:
    """
    Maintains the running tip of one subject's append-only chain.

    Thread safety: this class is not thread-safe.  In concurrent environments
    callers must serialise calls to ``append`` for the same subject.

    Parameters
    ----------
    initial_hash:
        Seed the chain at a known tip.  Pass the stored last hash when
        restoring chain state from durable storage.  Defaults to the genesis
        sentinel.
    strict_genesis:
        Whether ``verify`` also checks the content hash of the first record.
    """

    def __init__(self, initial_hash: str | None = None, strict_genesis: bool = True) -> None:
        self._last_record_hash: str = initial_hash or GENESIS_HASH
        self._strict_genesis = strict_genesis

    def append(self, pending: dict[str, Any]) -> DecisionRecord:
        """
        Link a pending record dict into the chain.

        The pending dict's ``previous_hash`` is set to the current tip, its
        digest is computed, the tip advances, and the completed immutable
        ``DecisionRecord`` is returned.
        """
        linked = {**pending, "previous_hash": self._last_record_hash}
        record_hash = compute_hash(linked)
        self._last_record_hash = record_hash
        return finalise_record(linked, record_hash)

    def verify(self, records: Sequence[DecisionRecord | Mapping[str, Any]]) -> ChainVerificationResult:
        """
        Walk ``records`` in order and check link and content integrity.

        For every record after the first, ``previous_hash`` must equal the
        predecessor's ``hash`` and the recomputed digest must equal the
        stored ``hash``.  The first record's link is never checked; its
        content hash is checked only in strict mode.

        Malformed input never raises; it is reported as a failure.

        Returns
        -------
        ChainVerificationSuccess
            When every record is intact.
        ChainVerificationFailure
            At the first detected discrepancy, with index and reason.
        """
        if isinstance(records, (str, bytes, Mapping)) or not isinstance(records, Sequence):
            return self._fail(
                record_count=0,
                broken_at=0,
                reason=f"Expected a sequence of records, got {type(records).__name__}.",
            )

        record_count = len(records)
        if record_count == 0 or (record_count == 1 and not self._strict_genesis):
            return ChainVerificationSuccess(record_count=record_count)

        previous: DecisionRecord | None = None
        for index, item in enumerate(records):
            try:
                record = _coerce_record(item)
            except (TypeError, ValidationError) as exc:
                return self._fail(
                    record_count=record_count,
                    broken_at=index,
                    reason=f"Record at index {index} is malformed: {exc}",
                )

            if previous is not None and record.previous_hash != previous.hash:
                return self._fail(
                    record_count=record_count,
                    broken_at=index,
                    reason=(
                        f"Record at index {index} has previous_hash "
                        f'"{record.previous_hash}" but the preceding record hash is '
                        f'"{previous.hash}".'
                    ),
                    record_hash=record.hash,
                    expected_hash=previous.hash,
                )

            if previous is not None or self._strict_genesis:
                expected_hash = compute_record_hash(record)
                if record.hash != expected_hash:
                    return self._fail(
                        record_count=record_count,
                        broken_at=index,
                        reason=(
                            f'Record at index {index} has hash "{record.hash}" but '
                            f'recomputed hash is "{expected_hash}". '
                            f"Record content may have been altered."
                        ),
                        record_hash=record.hash,
                        expected_hash=expected_hash,
                    )

            previous = record

        return ChainVerificationSuccess(record_count=record_count)

    def last_hash(self) -> str:
        """
        Return the hash of the most recently appended record, or the genesis
        sentinel when no records have been appended yet.
        """
        return self._last_record_hash

    @staticmethod
    def _fail(**fields: Any) -> ChainVerificationFailure:
        failure = ChainVerificationFailure(**fields)
        logger.warning("Chain verification failed at index %d: %s", failure.broken_at, failure.reason)
        return failure


def verify_chain(
    records: Sequence[DecisionRecord | Mapping[str, Any]],
    strict_genesis: bool = True,
) -> bool:
    """
    Return True when ``records`` form an intact chain.

    Empty chains are valid.  With ``strict_genesis=False`` a single record is
    accepted without recomputing its hash.
    """
    return HashChain(strict_genesis=strict_genesis).verify(records).valid
