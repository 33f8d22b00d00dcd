# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
decision-chain — Tamper-evident, hash-chained decision logging per subject.

Public API surface:

    Classes:
        DecisionLog    — Primary log: append(), record(), chain(), verify(), latest()
        HashChain      — Low-level hash-chain management (append + verify)
        ChainQuery     — Read-only subject listing and chain summaries
        MemoryStore    — Volatile in-memory key-value storage (default)
        FileStore      — JSON document key-value storage on disk

    Functions:
        compute_hash    — Canonical SHA-256 of a record's content fields
        verify_chain    — Boolean chain integrity check
        export_json     — Serialise records to JSON
        export_csv      — Serialise records to CSV
        export_records  — Format-dispatching export helper
        format_summary  — Human-readable chain summary

    Types:
        DecisionRecord, DecisionInput, ChainVerificationResult,
        ChainVerificationSuccess, ChainVerificationFailure, ChainSummary,
        ChainEntry, KeyValueStore, KeyValueEntry, ChainConfig
"""

from decision_chain.chain import GENESIS_HASH, HashChain, canonicalise, compute_hash, verify_chain
from decision_chain.config import ChainConfig
from decision_chain.errors import ChainDecodeError, DecisionChainError, StorageError
from decision_chain.export_formats import export_csv, export_json, export_records
from decision_chain.logger import DecisionLog
from decision_chain.query import ChainQuery, format_summary, summarise_chain
from decision_chain.record import build_pending_record, finalise_record
from decision_chain.storage.file import FileStore
from decision_chain.storage.interface import KeyValueEntry, KeyValueStore
from decision_chain.storage.memory import MemoryStore
from decision_chain.types import (
    ChainEntry,
    ChainSummary,
    ChainVerificationFailure,
    ChainVerificationResult,
    ChainVerificationSuccess,
    DecisionInput,
    DecisionRecord,
)

__all__ = [
    # Core classes
    "DecisionLog",
    "HashChain",
    "ChainQuery",
    "ChainConfig",
    # Hashing
    "GENESIS_HASH",
    "canonicalise",
    "compute_hash",
    "verify_chain",
    # Storage
    "MemoryStore",
    "FileStore",
    "KeyValueStore",
    "KeyValueEntry",
    # Record helpers
    "build_pending_record",
    "finalise_record",
    # Export and summary helpers
    "export_json",
    "export_csv",
    "export_records",
    "format_summary",
    "summarise_chain",
    # Errors
    "DecisionChainError",
    "StorageError",
    "ChainDecodeError",
    # Types
    "DecisionRecord",
    "DecisionInput",
    "ChainVerificationResult",
    "ChainVerificationSuccess",
    "ChainVerificationFailure",
    "ChainSummary",
    "ChainEntry",
]
