# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
Shipment compliance evaluation against the rules document.

Input problems are reported as values, never raised.  Independent structural
checks (UN code format, transport mode, cargo type, weight) all run, and every
failure is reported.  Checks that depend on rule lookups are skipped only when
the input they need failed: a hazmat lookup needs a well-formed UN code and a
valid mode, the quantity limit also needs a valid weight, and perishable
transit limits need a valid mode.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from compliance_rules.config import RulesEngineConfig
from compliance_rules.document import UN_CODE_PATTERN, ComplianceRuleSet, default_rule_set
from compliance_rules.types import (
    CARGO_TYPE_VALUES,
    TRANSPORT_MODE_VALUES,
    Issue,
    IssueType,
    ShipmentInput,
    ValidationResult,
)

logger = logging.getLogger("logibrew.rules")

PROCEED_RECOMMENDATION = "Shipment meets all compliance requirements. Proceed with booking."
REVIEW_RECOMMENDATION = (
    "Shipment is compliant but has warnings. Review special handling requirements."
)
_MODE_LIST = "air, sea, road, or rail"
_CARGO_LIST = "general, hazmat, perishable, or temperature-controlled"


def shipment_field(shipment: Mapping[str, Any], camel: str, snake: str) -> Any:
    """Read a field by its camelCase name, falling back to snake_case."""
    if camel in shipment:
        return shipment[camel]
    return shipment.get(snake)


def normalise_choice(value: Any, allowed: frozenset[str]) -> str | None:
    """Lower-case a string and return it when it is one of ``allowed``."""
    if not isinstance(value, str):
        return None
    candidate = value.strip().lower()
    return candidate if candidate in allowed else None


def normalise_weight(value: Any, config: RulesEngineConfig) -> float | None:
    """Return the weight in kilograms when it is a finite number in range."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value) or not config.weight_in_range(value):
        return None
    return float(value)


def _error(issue_type: str, message: str, recommendation: str | None = None) -> Issue:
    return Issue(type=issue_type, severity="error", message=message, recommendation=recommendation)


def _warning(issue_type: str, message: str, recommendation: str | None = None) -> Issue:
    return Issue(type=issue_type, severity="warning", message=message, recommendation=recommendation)


def _finish(
    issues: list[Issue],
    warnings: list[Issue],
    details: dict[str, Any],
) -> ValidationResult:
    recommendations: list[str] = []
    if not issues:
        recommendations.append(REVIEW_RECOMMENDATION if warnings else PROCEED_RECOMMENDATION)
    return ValidationResult(
        is_valid=not issues,
        issues=issues,
        warnings=warnings,
        recommendations=recommendations,
        details=details,
    )


def evaluate_compliance(
    shipment: Any,
    rules: ComplianceRuleSet | None = None,
    config: RulesEngineConfig | None = None,
) -> ValidationResult:
    """
    Validate a shipment against the compliance rules.

    ``shipment`` is a ``ShipmentInput`` or a mapping with ``unCode`` (optional), ``transportMode``,
    ``cargoType`` and ``weight`` (kg); snake_case keys are accepted too.
    Anything that is not a mapping yields a single ``INVALID_PAYLOAD`` issue.

    Never raises: an unexpected internal failure is logged and reported as a
    ``VALIDATION_ERROR`` issue.
    """
    if isinstance(shipment, ShipmentInput):
        shipment = shipment.to_mapping()
    if not isinstance(shipment, Mapping):
        return _finish(
            [
                _error(
                    IssueType.INVALID_PAYLOAD,
                    "Invalid payload: expected an object with transportMode, cargoType and weight.",
                    "Provide shipment details as a JSON object.",
                )
            ],
            [],
            {},
        )

    try:
        return _evaluate(shipment, rules or default_rule_set(), config or RulesEngineConfig())
    except Exception as exc:
        logger.exception("Compliance evaluation failed")
        return _finish(
            [
                _error(
                    IssueType.VALIDATION_ERROR,
                    f"Internal validation error: {exc}",
                    "Contact support if issue persists.",
                )
            ],
            [],
            {},
        )


def _evaluate(
    shipment: Mapping[str, Any],
    rules: ComplianceRuleSet,
    config: RulesEngineConfig,
) -> ValidationResult:
    issues: list[Issue] = []
    warnings: list[Issue] = []
    details: dict[str, Any] = {}

    raw_code = shipment_field(shipment, "unCode", "un_code")
    raw_mode = shipment_field(shipment, "transportMode", "transport_mode")
    raw_cargo = shipment_field(shipment, "cargoType", "cargo_type")
    raw_weight = shipment.get("weight")
    required = {route_check.check for route_check in rules.route_checks}

    # -- structural checks ---------------------------------------------------
    # A blank field with a matching route check is reported once, as MISSING_*.

    un_code: str | None = None
    if raw_code not in (None, ""):
        candidate = raw_code.strip().upper() if isinstance(raw_code, str) else ""
        if UN_CODE_PATTERN.match(candidate):
            un_code = candidate
        else:
            issues.append(
                _error(
                    IssueType.INVALID_UN_CODE_FORMAT,
                    f"Invalid UN code format: {raw_code!r}. Expected 'UN' followed by 4 digits.",
                    "Use the format UN1234, e.g. UN1203 for gasoline.",
                )
            )

    mode = normalise_choice(raw_mode, TRANSPORT_MODE_VALUES)
    if mode is None and not (_blank(raw_mode) and "transport_mode_required" in required):
        issues.append(
            _error(
                IssueType.INVALID_TRANSPORT_MODE,
                f"Invalid transport mode: {raw_mode!r}.",
                f"Specify transport mode: {_MODE_LIST}.",
            )
        )

    cargo_type = normalise_choice(raw_cargo, CARGO_TYPE_VALUES)
    if cargo_type is None and not (_blank(raw_cargo) and "cargo_type_required" in required):
        issues.append(
            _error(
                IssueType.INVALID_CARGO_TYPE,
                f"Invalid cargo type: {raw_cargo!r}.",
                f"Specify cargo type: {_CARGO_LIST}.",
            )
        )

    weight = normalise_weight(raw_weight, config)
    if weight is None and not (raw_weight is None and "weight_required" in required):
        issues.append(
            _error(
                IssueType.INVALID_WEIGHT,
                f"Invalid weight: {raw_weight!r}. Weight must be greater than "
                f"{config.min_weight_kg:g} kg and at most {config.max_weight_kg:,.0f} kg.",
                "Provide the gross cargo weight in kilograms.",
            )
        )

    # -- hazardous materials -------------------------------------------------

    if cargo_type == "hazmat":
        if raw_code in (None, ""):
            warnings.append(
                _warning(
                    IssueType.MISSING_UN_CODE,
                    "Hazmat cargo declared without a UN code.",
                    "Add the UN number before booking so handling restrictions can be checked.",
                )
            )
        elif un_code is not None and mode is not None:
            _check_un_code(un_code, mode, weight, rules, issues, warnings, details)

    # -- perishables ---------------------------------------------------------

    if cargo_type is not None and mode is not None:
        match = rules.perishable_profile(cargo_type)
        if match is not None:
            category, profile = match
            temperature = profile.temperature_range
            transit_days = profile.max_transit_days_by_mode.get(mode)
            warnings.append(
                _warning(
                    IssueType.PERISHABLE_REQUIREMENTS,
                    f"Temperature-controlled cargo requires {temperature.min:g}°C to "
                    f"{temperature.max:g}°C.",
                    f"Max transit time for {mode}: {transit_days} days. {profile.notes}".strip(),
                )
            )
            details["perishable"] = {
                "category": category,
                "temperatureRange": {"min": temperature.min, "max": temperature.max},
                "maxTransitDays": transit_days,
                "notes": profile.notes,
            }

    # -- route checks --------------------------------------------------------

    for route_check in rules.route_checks:
        if route_check.check == "transport_mode_required" and _blank(raw_mode):
            issues.append(
                _error(
                    IssueType.MISSING_TRANSPORT_MODE,
                    route_check.message,
                    f"Specify transport mode: {_MODE_LIST}.",
                )
            )
        elif route_check.check == "cargo_type_required" and _blank(raw_cargo):
            issues.append(
                _error(
                    IssueType.MISSING_CARGO_TYPE,
                    route_check.message,
                    f"Specify cargo type: {_CARGO_LIST}.",
                )
            )
        elif route_check.check == "weight_required" and raw_weight is None:
            issues.append(
                _error(
                    IssueType.MISSING_WEIGHT,
                    route_check.message,
                    "Provide the gross cargo weight in kilograms.",
                )
            )

    result = _finish(issues, warnings, details)
    logger.debug(
        "Compliance evaluated: valid=%s issues=%s warnings=%s",
        result.is_valid,
        result.issue_types(),
        result.warning_types(),
    )
    return result


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _check_un_code(
    un_code: str,
    mode: str,
    weight: float | None,
    rules: ComplianceRuleSet,
    issues: list[Issue],
    warnings: list[Issue],
    details: dict[str, Any],
) -> None:
    rule = rules.un_code(un_code)
    if rule is None:
        issues.append(
            _error(
                IssueType.INVALID_UN_CODE,
                f"UN code {un_code} not found in compliance database. Please verify the code.",
                "Check IATA DGR or IMO IMDG Code for correct UN classification.",
            )
        )
        return

    restriction = rule.per_mode_restrictions.get(mode)
    if restriction is None or not restriction.allowed:
        alternatives = ", ".join(rule.allowed_modes()) or "none"
        issues.append(
            _error(
                IssueType.TRANSPORT_MODE_FORBIDDEN,
                f"{rule.name} ({un_code}) is forbidden for {mode} transport.",
                f"Consider alternate transport modes: {alternatives}",
            )
        )
        return

    limit = restriction.max_quantity_limit
    if limit is not None and weight is not None and weight > limit:
        issues.append(
            _error(
                IssueType.WEIGHT_LIMIT_EXCEEDED,
                f"Cargo weight {weight:g}kg exceeds {mode} limit of {restriction.max_quantity}.",
                "Split shipment or use different transport mode.",
            )
        )

    if mode == "air" and not restriction.passenger_aircraft_allowed:
        warnings.append(
            _warning(
                IssueType.PASSENGER_AIRCRAFT_RESTRICTION,
                f"{rule.name} forbidden on passenger aircraft. Cargo aircraft only.",
                "Ensure booking specifies cargo aircraft routing.",
            )
        )

    details["unCode"] = {
        "code": un_code,
        "name": rule.name,
        "hazardClass": rule.hazard_class,
        "packingGroup": rule.packing_group,
        "restrictions": restriction.model_dump(mode="json", by_alias=True, exclude_none=True),
        "specialProvisions": list(restriction.special_provisions),
    }
