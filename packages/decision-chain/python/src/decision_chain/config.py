# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field


class ChainConfig(BaseModel, frozen=True):
    """
    Configuration for the DecisionLog and HashChain.

    Attributes:
        genesis_hash: ``previousHash`` value of the first record in every
            subject chain.
        strict_genesis: When True, verification also recomputes the hash of
            the record at index 0. When False, a chain of length 0 or 1 is
            accepted without inspection.
        chain_key_prefix: Prefix of the storage key holding a subject chain.
        chain_key_suffix: Suffix of the storage key holding a subject chain.
        latest_key: Storage key of the most recent record across all subjects.
        default_actor_id: Actor recorded when the caller supplies none.
    """

    genesis_hash: Annotated[str, Field(min_length=1)] = "0"
    strict_genesis: bool = True
    chain_key_prefix: Annotated[str, Field(min_length=1)] = "subject-"
    chain_key_suffix: str = "-chain"
    latest_key: Annotated[str, Field(min_length=1)] = "latest-decision-record"
    default_actor_id: Annotated[str, Field(min_length=1)] = "system"

    def chain_key(self, subject_id: str) -> str:
        """Return the storage key of ``subject_id``'s chain."""
        return f"{self.chain_key_prefix}{subject_id}{self.chain_key_suffix}"

    def subject_from_key(self, key: str) -> str | None:
        """Inverse of :meth:`chain_key`; ``None`` for keys that are not chains."""
        if not key.startswith(self.chain_key_prefix):
            return None
        if self.chain_key_suffix and not key.endswith(self.chain_key_suffix):
            return None
        end = len(key) - len(self.chain_key_suffix)
        subject_id = key[len(self.chain_key_prefix) : end]
        return subject_id or None
