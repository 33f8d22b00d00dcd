# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
Helpers for constructing DecisionRecord instances.

The creation pipeline is split into two stages:

1. ``build_pending_record`` — assemble every field except ``hash``.
2. ``finalise_record`` — attach the hash computed by the HashChain.

This keeps the hashing logic fully inside ``chain.py`` while record
construction remains testable without a live chain.
"""

from __future__ import annotations

import time
from typing import Any

from decision_chain.types import DecisionInput, DecisionRecord


def current_timestamp_ms() -> int:
    """Return the current time as integer milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


def build_pending_record(
    decision: DecisionInput,
    previous_hash: str,
    timestamp: int | None = None,
    default_actor_id: str = "system",
) -> dict[str, Any]:
    """
    Construct the pending record dictionary that the hash chain will sign.

    Returns a plain ``dict`` keyed by the snake_case field names because the
    ``hash`` field is absent at this stage.

    Parameters
    ----------
    decision:
        Caller-supplied decision data.
    previous_hash:
        Hash of the subject's last record, or the genesis sentinel for the
        first record of a chain.
    timestamp:
        Override the current time (useful in tests for determinism).
    default_actor_id:
        Actor recorded when ``decision.actor_id`` is empty.
    """
    return {
        "timestamp": current_timestamp_ms() if timestamp is None else timestamp,
        "action": decision.action,
        "actor_id": decision.actor_id or default_actor_id,
        "subject_id": decision.subject_id,
        "payload": decision.payload,
        "previous_hash": previous_hash,
    }


def finalise_record(pending: dict[str, Any], record_hash: str) -> DecisionRecord:
    """
    Attach the computed hash to a pending record dict and validate it into an
    immutable ``DecisionRecord``.
    """
    return DecisionRecord.model_validate({**pending, "hash": record_hash})
