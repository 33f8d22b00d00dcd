# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
compliance-rules — Shipment compliance checks and carbon emission estimates
driven by a versioned rules document.

Public API surface:

    Functions:
        evaluate_compliance  — Validate a shipment (UN code, mode, cargo, weight)
        calculate_emissions  — CO2 total, breakdown and threshold classification
        estimate_distance_km — Placeholder route distance estimate
        load_rule_set        — Read and validate a rules document from disk
        parse_rule_set       — Validate an already-decoded rules document
        default_rule_set     — The packaged rules document, cached

    Types:
        ComplianceRuleSet, ValidationResult, Issue, IssueType,
        ShipmentInput, EmissionResult, EmissionFailure, EmissionBreakdown,
        ThresholdCheck, RulesEngineConfig
"""

from compliance_rules.compliance import evaluate_compliance
from compliance_rules.config import RulesEngineConfig
from compliance_rules.document import (
    ComplianceRuleSet,
    ModeRestriction,
    PerishableProfile,
    UnCodeRule,
    default_rule_set,
    load_rule_set,
    parse_rule_set,
)
from compliance_rules.emissions import calculate_emissions, estimate_distance_km
from compliance_rules.errors import ComplianceRulesError, RuleDocumentError
from compliance_rules.types import (
    CargoType,
    EmissionBreakdown,
    EmissionFailure,
    EmissionOutcome,
    EmissionResult,
    Issue,
    IssueType,
    ShipmentInput,
    ThresholdCheck,
    TransportMode,
    ValidationResult,
)

__all__ = [
    # Evaluation
    "evaluate_compliance",
    "calculate_emissions",
    "estimate_distance_km",
    # Rules document
    "ComplianceRuleSet",
    "ModeRestriction",
    "PerishableProfile",
    "UnCodeRule",
    "default_rule_set",
    "load_rule_set",
    "parse_rule_set",
    # Config
    "RulesEngineConfig",
    # Errors
    "ComplianceRulesError",
    "RuleDocumentError",
    # Types
    "CargoType",
    "TransportMode",
    "Issue",
    "IssueType",
    "ShipmentInput",
    "ValidationResult",
    "EmissionBreakdown",
    "EmissionFailure",
    "EmissionOutcome",
    "EmissionResult",
    "ThresholdCheck",
]
