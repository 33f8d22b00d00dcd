# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
Carbon emission calculation and threshold classification for a shipment.

    ton_km       = weight_kg / 1000 * distance_km
    total_kg_co2 = round(ton_km * emission_factor[mode], 2)

The total is compared against the reporting threshold and the offset
threshold from the rules document.  When no distance is supplied, a
deterministic placeholder estimate derived from the origin and destination
names is used; it stands in for a real routing service and is not accurate.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from compliance_rules.compliance import normalise_choice, normalise_weight, shipment_field
from compliance_rules.config import RulesEngineConfig
from compliance_rules.document import ComplianceRuleSet, default_rule_set
from compliance_rules.types import (
    TRANSPORT_MODE_VALUES,
    EmissionBreakdown,
    EmissionFailure,
    EmissionOutcome,
    EmissionResult,
    ShipmentInput,
    ThresholdCheck,
)

logger = logging.getLogger("logibrew.rules")

REPORTING_RECOMMENDATION = "EU ETS compliance reporting required for this shipment."
MODE_SHIFT_RECOMMENDATION = "Consider sea or rail transport to reduce emissions by up to 98%."


def estimate_distance_km(origin: str, destination: str, config: RulesEngineConfig | None = None) -> float:
    """
    Placeholder route distance: a base distance plus a fixed amount per
    character of ``origin + destination``.
    """
    config = config or RulesEngineConfig()
    return config.estimate_base_km + config.estimate_km_per_char * len(origin + destination)


def _failure(error: str, recommendation: str) -> EmissionFailure:
    return EmissionFailure(error=error, recommendation=recommendation)


def calculate_emissions(
    shipment: Any,
    rules: ComplianceRuleSet | None = None,
    config: RulesEngineConfig | None = None,
) -> EmissionOutcome:
    """
    Compute CO2 emissions for a shipment and classify them.

    ``shipment`` is a ``ShipmentInput`` or a mapping with ``origin``,
    ``destination``, ``transportMode``, ``weight`` (kg) and optionally
    ``distance`` (km).

    Never raises: invalid input and unexpected failures are returned as an
    ``EmissionFailure``.
    """
    if isinstance(shipment, ShipmentInput):
        shipment = shipment.to_mapping()
    if not isinstance(shipment, Mapping):
        return _failure(
            "Invalid payload: expected an object with origin, destination, transportMode and weight.",
            "Provide shipment details as a JSON object.",
        )
    try:
        return _calculate(shipment, rules or default_rule_set(), config or RulesEngineConfig())
    except Exception as exc:
        logger.exception("Emission calculation failed")
        return _failure(
            str(exc),
            "Verify input parameters (origin, destination, transport mode, weight).",
        )


def _calculate(
    shipment: Mapping[str, Any],
    rules: ComplianceRuleSet,
    config: RulesEngineConfig,
) -> EmissionOutcome:
    origin = shipment.get("origin")
    destination = shipment.get("destination")
    raw_mode = shipment_field(shipment, "transportMode", "transport_mode")
    raw_weight = shipment.get("weight")
    raw_distance = shipment.get("distance")

    if not (isinstance(origin, str) and origin.strip() and isinstance(destination, str) and destination.strip()):
        return _failure(
            "Origin and destination are required.",
            "Provide both origin and destination locations.",
        )

    weight = normalise_weight(raw_weight, config)
    if weight is None:
        return _failure(
            f"Invalid weight: {raw_weight!r}. Weight must be greater than "
            f"{config.min_weight_kg:g} kg and at most {config.max_weight_kg:,.0f} kg.",
            "Provide the gross cargo weight in kilograms.",
        )

    mode = normalise_choice(raw_mode, TRANSPORT_MODE_VALUES)
    if mode is None:
        return _failure(
            f"Invalid transport mode: {raw_mode!r}",
            "Use: air, sea, road, or rail",
        )

    distance_estimated = raw_distance is None
    if distance_estimated:
        distance = estimate_distance_km(origin, destination, config)
        logger.debug("Estimated distance %s -> %s: %gkm", origin, destination, distance)
    elif (
        isinstance(raw_distance, bool)
        or not isinstance(raw_distance, (int, float))
        or not math.isfinite(raw_distance)
        or raw_distance <= 0
    ):
        return _failure(
            f"Invalid distance: {raw_distance!r}. Distance must be a positive number of kilometres.",
            "Omit distance to use an estimate, or provide the route length in km.",
        )
    else:
        distance = float(raw_distance)

    factor = rules.emission_factors[mode]
    ton_km = (weight / 1000) * distance
    total = round(ton_km * factor, 2)

    reporting_rule = rules.emission_thresholds.reporting
    offset_rule = rules.emission_thresholds.offset
    exceeds_reporting = total > reporting_rule.threshold
    offset_recommended = total > offset_rule.threshold

    recommendations: list[str] = []
    if exceeds_reporting:
        recommendations.append(REPORTING_RECOMMENDATION)
    if offset_recommended:
        recommendations.append(f"Consider purchasing carbon offsets ({math.floor(total + 0.5)}kg CO2).")
    if mode == "air" and total > config.mode_shift_floor_kg_co2:
        recommendations.append(MODE_SHIFT_RECOMMENDATION)

    result = EmissionResult(
        total_kg_co2=total,
        breakdown=EmissionBreakdown(
            weight_kg=weight,
            distance_km=distance,
            ton_km=ton_km,
            mode=mode,
            factor=factor,
            distance_estimated=distance_estimated,
        ),
        exceeds_reporting_threshold=exceeds_reporting,
        offset_recommended=offset_recommended,
        reporting=ThresholdCheck(
            regulation=reporting_rule.regulation,
            threshold=reporting_rule.threshold,
            exceeded=exceeds_reporting,
            notes=reporting_rule.notes if exceeds_reporting else "Below reporting threshold - no reporting required",
        ),
        offset=ThresholdCheck(
            regulation=offset_rule.regulation,
            threshold=offset_rule.threshold,
            exceeded=offset_recommended,
            notes=offset_rule.notes if offset_recommended else "Carbon offset optional",
        ),
        recommendations=recommendations,
    )
    logger.debug("Emissions for %s shipment: %.2f kg CO2", mode, total)
    return result
