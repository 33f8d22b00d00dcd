# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
Shared type definitions for the decision-chain package.

All record models are frozen Pydantic v2 models; fields cannot be reassigned
after construction, which mirrors the immutability guarantee of the hash chain.
Attributes are snake_case in Python and camelCase on the wire (``actorId``,
``previousHash`` …); both spellings are accepted on input.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_WIRE_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class DecisionRecord(BaseModel):
    """
    An immutable, hash-chained record of a single decision about a subject.

    ``hash`` is the SHA-256 digest of the canonical serialisation of every
    other field.  Any change to any of them will cause chain verification
    to fail.
    """

    model_config = _WIRE_CONFIG

    timestamp: int
    action: str
    actor_id: str
    subject_id: str
    payload: Any = None
    previous_hash: str
    hash: str

    def to_wire(self) -> dict[str, Any]:
        """Return the camelCase, JSON-compatible form used for storage."""
        return self.model_dump(mode="json", by_alias=True)


class DecisionInput(BaseModel):
    """
    Caller-supplied input for a single decision log entry.

    Hash, timestamp and link fields are absent; the DecisionLog fills them
    in on append.
    """

    model_config = _WIRE_CONFIG

    subject_id: str
    action: str
    actor_id: str | None = None
    payload: Any = Field(default_factory=dict)

    @field_validator("subject_id", "action")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must be a non-empty string")
        return value


class ChainVerificationSuccess(BaseModel):
    """Returned by HashChain.verify when every record is intact."""

    model_config = _WIRE_CONFIG

    valid: Literal[True] = True
    record_count: int


class ChainVerificationFailure(BaseModel):
    """Returned by HashChain.verify at the first broken record."""

    model_config = _WIRE_CONFIG

    valid: Literal[False] = False
    record_count: int
    broken_at: int
    reason: str
    record_hash: str | None = None
    expected_hash: str | None = None


ChainVerificationResult = ChainVerificationSuccess | ChainVerificationFailure


class ChainEntry(BaseModel):
    """One line of a chain summary."""

    model_config = _WIRE_CONFIG

    index: int
    action: str
    timestamp: int
    short_hash: str


class ChainSummary(BaseModel):
    """Verification status and entry list for one subject chain."""

    model_config = _WIRE_CONFIG

    subject_id: str
    record_count: int
    valid: bool
    status: Literal["verified", "tampered", "empty"]
    latest_hash: str | None = None
    latest_timestamp: int | None = None
    broken_at: int | None = None
    entries: list[ChainEntry] = Field(default_factory=list)
