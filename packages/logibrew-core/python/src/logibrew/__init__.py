# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
logibrew — shipment compliance evaluation with a tamper-evident decision log.

One install gives you the decision chain, the compliance rules engine and the
glue that records shipment assessments in a subject's chain.  The rules
document is static and versioned; decision records are append-only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

# Re-export the decision chain
from decision_chain import (
    ChainConfig,
    ChainQuery,
    ChainVerificationResult,
    DecisionInput,
    DecisionLog,
    DecisionRecord,
    FileStore,
    KeyValueStore,
    MemoryStore,
    format_summary,
    verify_chain,
)

# Re-export the rules engine
from compliance_rules import (
    ComplianceRuleSet,
    RulesEngineConfig,
    ValidationResult,
    calculate_emissions,
    default_rule_set,
    evaluate_compliance,
    load_rule_set,
)

from logibrew.assessment import ShipmentAssessment, ShipmentAuditor, assess_shipment

__all__ = [
    # Decision chain
    "ChainConfig",
    "ChainQuery",
    "ChainVerificationResult",
    "DecisionInput",
    "DecisionLog",
    "DecisionRecord",
    "FileStore",
    "KeyValueStore",
    "MemoryStore",
    "format_summary",
    "verify_chain",
    # Rules engine
    "ComplianceRuleSet",
    "RulesEngineConfig",
    "ValidationResult",
    "calculate_emissions",
    "default_rule_set",
    "evaluate_compliance",
    "load_rule_set",
    # Assessment
    "ShipmentAssessment",
    "ShipmentAuditor",
    "assess_shipment",
    # Convenience factory
    "CoreConfig",
    "LogiBrewCore",
    "create_core",
]


@dataclass(frozen=True)
class CoreConfig:
    """Configuration for the assembled LogiBrew core."""

    chain: ChainConfig = field(default_factory=ChainConfig)
    """Key layout, genesis sentinel and verification mode of the decision log."""

    rules: RulesEngineConfig = field(default_factory=RulesEngineConfig)
    """Weight bounds and estimate constants of the rules engine."""

    rules_path: str | Path | None = None
    """Rules document to load instead of the packaged one."""

    storage_path: str | Path | None = None
    """JSON file backing the decision log.  In-memory storage when unset."""


@dataclass(frozen=True)
class LogiBrewCore:
    """
    The assembled core.

    ``log`` and ``query`` share one storage backend; ``auditor`` writes
    through ``log`` using ``rule_set``.
    """

    storage: KeyValueStore
    log: DecisionLog
    query: ChainQuery
    rule_set: ComplianceRuleSet
    auditor: ShipmentAuditor


def create_core(config: CoreConfig | None = None) -> LogiBrewCore:
    """
    Create a fully-configured core in a single call.

    Example::

        core = create_core(CoreConfig(storage_path="decisions.json"))

        assessment, record = await core.auditor.assess_and_record(
            "SHIP-001",
            {"origin": "Hamburg", "destination": "Shanghai",
             "transportMode": "sea", "cargoType": "general", "weight": 5000},
        )
        result = await core.log.verify("SHIP-001")

    Raises
    ------
    RuleDocumentError
        If ``rules_path`` points at an unreadable or invalid document.
    """
    config = config or CoreConfig()
    storage: KeyValueStore = (
        FileStore(config.storage_path) if config.storage_path is not None else MemoryStore()
    )
    rule_set = load_rule_set(config.rules_path) if config.rules_path is not None else default_rule_set()
    log = DecisionLog(storage=storage, config=config.chain)
    return LogiBrewCore(
        storage=storage,
        log=log,
        query=ChainQuery(storage, config.chain),
        rule_set=rule_set,
        auditor=ShipmentAuditor(log, rule_set, config.rules),
    )
