# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
Shipment assessment: run the rules engine on a shipment and record the
outcome as a decision in the subject's hash chain.

The rules engine and the decision log stay independent of each other; this
module is the only place that feeds evaluation results into the log.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from compliance_rules import (
    ComplianceRuleSet,
    EmissionOutcome,
    RulesEngineConfig,
    ValidationResult,
    calculate_emissions,
    evaluate_compliance,
)
from decision_chain import ChainVerificationResult, DecisionLog, DecisionRecord

logger = logging.getLogger("logibrew.assessment")

COMPLIANCE_CHECK_ACTION = "compliance_check"


class ShipmentAssessment(BaseModel):
    """Compliance validation and emission calculation for one shipment."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    validation: ValidationResult
    emissions: EmissionOutcome

    @property
    def approved(self) -> bool:
        return self.validation.is_valid

    def to_payload(self) -> dict[str, Any]:
        """Return the camelCase JSON form stored as a decision payload."""
        return self.model_dump(mode="json", by_alias=True)


def assess_shipment(
    shipment: Any,
    rules: ComplianceRuleSet | None = None,
    config: RulesEngineConfig | None = None,
) -> ShipmentAssessment:
    """Run compliance and emission evaluation on one shipment mapping."""
    return ShipmentAssessment(
        validation=evaluate_compliance(shipment, rules, config),
        emissions=calculate_emissions(shipment, rules, config),
    )


class ShipmentAuditor:
    """
    Records shipment assessments and manual decisions in a DecisionLog.

    Parameters
    ----------
    log:
        The decision log records are appended to.
    rules:
        Rules document used for assessments.  Defaults to the packaged one.
    config:
        Rules engine configuration.
    """

    def __init__(
        self,
        log: DecisionLog,
        rules: ComplianceRuleSet | None = None,
        config: RulesEngineConfig | None = None,
    ) -> None:
        self._log = log
        self._rules = rules
        self._config = config

    @property
    def log(self) -> DecisionLog:
        return self._log

    async def assess_and_record(
        self,
        subject_id: str,
        shipment: Any,
        actor_id: str | None = None,
    ) -> tuple[ShipmentAssessment, DecisionRecord]:
        """
        Assess ``shipment`` and append a ``compliance_check`` record for
        ``subject_id`` carrying the assessment as its payload.

        Raises
        ------
        StorageError
            If the append fails.  The assessment itself never raises.
        """
        assessment = assess_shipment(shipment, self._rules, self._config)
        record = await self._log.record(
            subject_id,
            COMPLIANCE_CHECK_ACTION,
            payload=assessment.to_payload(),
            actor_id=actor_id,
        )
        logger.info(
            "Assessed %s: valid=%s issues=%d",
            subject_id,
            assessment.validation.is_valid,
            len(assessment.validation.issues),
        )
        return assessment, record

    async def record_decision(
        self,
        subject_id: str,
        action: str,
        outcome: str,
        notes: str = "",
        actor_id: str | None = None,
    ) -> DecisionRecord:
        """Append a free-form decision with payload ``{status, notes}``."""
        return await self._log.record(
            subject_id,
            action,
            payload={"status": outcome, "notes": notes},
            actor_id=actor_id,
        )

    async def verify(self, subject_id: str) -> ChainVerificationResult:
        return await self._log.verify(subject_id)
