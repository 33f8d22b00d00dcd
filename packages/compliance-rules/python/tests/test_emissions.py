# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation
"""
Tests for calculate_emissions — totals, thresholds, recommendations and
input failures.
"""

from __future__ import annotations

from typing import Any

import pytest

from compliance_rules.config import RulesEngineConfig
from compliance_rules.emissions import (
    MODE_SHIFT_RECOMMENDATION,
    REPORTING_RECOMMENDATION,
    calculate_emissions,
    estimate_distance_km,
)
from compliance_rules.types import EmissionFailure, EmissionResult, ShipmentInput


def _emissions(shipment: dict[str, Any], **overrides: Any) -> EmissionResult:
    result = calculate_emissions({**shipment, **overrides})
    assert isinstance(result, EmissionResult), result
    return result


# ---------------------------------------------------------------------------
# TestTotals
# ---------------------------------------------------------------------------


class TestTotals:
    def test_air_threshold_example(self, general_shipment: dict[str, Any]) -> None:
        result = _emissions(general_shipment, transportMode="air")
        assert result.breakdown.ton_km == 50_000
        assert result.total_kg_co2 == 25_000.0
        assert result.exceeds_reporting_threshold is True
        assert result.offset_recommended is True

    def test_air_exceeds_sea(self, general_shipment: dict[str, Any]) -> None:
        air = _emissions(general_shipment, transportMode="air")
        sea = _emissions(general_shipment, transportMode="sea")
        assert air.total_kg_co2 > sea.total_kg_co2
        assert sea.total_kg_co2 == 500.0
        assert air.total_kg_co2 / sea.total_kg_co2 == pytest.approx(50)

    @pytest.mark.parametrize("mode, total", [("road", 5000.0), ("rail", 2500.0)])
    def test_land_modes(self, general_shipment: dict[str, Any], mode: str, total: float) -> None:
        assert _emissions(general_shipment, transportMode=mode).total_kg_co2 == total

    def test_total_rounded_to_two_decimals(self) -> None:
        result = _emissions(
            {"origin": "A", "destination": "B", "transportMode": "road", "weight": 1, "distance": 1234}
        )
        assert result.total_kg_co2 == 0.12

    def test_breakdown(self, general_shipment: dict[str, Any]) -> None:
        breakdown = _emissions(general_shipment, transportMode="Rail").breakdown
        assert breakdown.weight_kg == 5000
        assert breakdown.distance_km == 10_000
        assert breakdown.mode == "rail"
        assert breakdown.factor == 0.05
        assert breakdown.factor_unit == "kg_co2_per_ton_km"
        assert breakdown.distance_estimated is False

    def test_result_serialises_to_camel_case(self, general_shipment: dict[str, Any]) -> None:
        dumped = _emissions(general_shipment).model_dump(mode="json", by_alias=True)
        assert dumped["success"] is True
        assert dumped["totalKgCo2"] == 500.0
        assert dumped["breakdown"]["distanceEstimated"] is False
        assert "exceedsReportingThreshold" in dumped


# ---------------------------------------------------------------------------
# TestDistanceEstimate
# ---------------------------------------------------------------------------


class TestDistanceEstimate:
    def test_placeholder_formula(self) -> None:
        assert estimate_distance_km("Hamburg", "Shanghai") == 1000 + 100 * 15

    def test_custom_estimate_constants(self) -> None:
        config = RulesEngineConfig(estimate_base_km=500, estimate_km_per_char=10)
        assert estimate_distance_km("AB", "CD", config) == 540

    def test_missing_distance_is_estimated(self, general_shipment: dict[str, Any]) -> None:
        del general_shipment["distance"]
        result = _emissions(general_shipment)
        assert result.breakdown.distance_estimated is True
        assert result.breakdown.distance_km == 2500
        assert result.total_kg_co2 == 125.0

    @pytest.mark.parametrize("distance", [0, -10, "far", float("nan"), True])
    def test_invalid_distance(self, general_shipment: dict[str, Any], distance: Any) -> None:
        result = calculate_emissions({**general_shipment, "distance": distance})
        assert isinstance(result, EmissionFailure)
        assert result.error.startswith("Invalid distance")


# ---------------------------------------------------------------------------
# TestThresholds
# ---------------------------------------------------------------------------


class TestThresholds:
    def test_below_both_thresholds(self) -> None:
        result = _emissions(
            {"origin": "A", "destination": "B", "transportMode": "sea", "weight": 1000, "distance": 1000}
        )
        assert result.total_kg_co2 == 10.0
        assert result.exceeds_reporting_threshold is False
        assert result.offset_recommended is False
        assert result.recommendations == []
        assert result.reporting.notes == "Below reporting threshold - no reporting required"
        assert result.offset.notes == "Carbon offset optional"

    def test_threshold_is_exclusive(self, general_shipment: dict[str, Any]) -> None:
        result = _emissions(general_shipment)
        assert result.total_kg_co2 == 500.0
        assert result.exceeds_reporting_threshold is False

    def test_reporting_only(self, general_shipment: dict[str, Any]) -> None:
        result = _emissions(general_shipment, transportMode="rail", weight=1500)
        assert result.total_kg_co2 == 750.0
        assert result.exceeds_reporting_threshold is True
        assert result.offset_recommended is False
        assert result.recommendations == [REPORTING_RECOMMENDATION]
        assert result.reporting.regulation == "EU_ETS"
        assert result.reporting.exceeded is True

    def test_reporting_and_offset(self, general_shipment: dict[str, Any]) -> None:
        result = _emissions(general_shipment, transportMode="road")
        assert result.recommendations == [
            REPORTING_RECOMMENDATION,
            "Consider purchasing carbon offsets (5000kg CO2).",
        ]
        assert result.offset.regulation == "GENERAL_CARBON_OFFSET"
        assert result.offset.threshold == 1000

    def test_offset_amount_rounds_half_up(self, general_shipment: dict[str, Any]) -> None:
        result = _emissions(general_shipment, transportMode="road", weight=1002.5)
        assert result.total_kg_co2 == 1002.5
        assert result.recommendations[-1] == "Consider purchasing carbon offsets (1003kg CO2)."

    def test_air_above_floor_suggests_mode_shift(self, general_shipment: dict[str, Any]) -> None:
        result = _emissions(general_shipment, transportMode="air")
        assert result.recommendations[-1] == MODE_SHIFT_RECOMMENDATION
        assert len(result.recommendations) == 3

    def test_small_air_shipment_has_no_mode_shift(self) -> None:
        result = _emissions(
            {"origin": "A", "destination": "B", "transportMode": "air", "weight": 100, "distance": 1000}
        )
        assert result.total_kg_co2 == 50.0
        assert result.recommendations == []


# ---------------------------------------------------------------------------
# TestFailures
# ---------------------------------------------------------------------------


class TestFailures:
    @pytest.mark.parametrize("payload", [None, "shipment", 7, []])
    def test_non_mapping_payload(self, payload: Any) -> None:
        result = calculate_emissions(payload)
        assert isinstance(result, EmissionFailure)
        assert result.success is False
        assert result.error.startswith("Invalid payload")

    @pytest.mark.parametrize("field", ["origin", "destination"])
    def test_missing_endpoint(self, general_shipment: dict[str, Any], field: str) -> None:
        general_shipment[field] = " "
        result = calculate_emissions(general_shipment)
        assert isinstance(result, EmissionFailure)
        assert result.error == "Origin and destination are required."

    def test_invalid_transport_mode_returns_failure(self, general_shipment: dict[str, Any]) -> None:
        result = calculate_emissions({**general_shipment, "transportMode": "rocket"})
        assert isinstance(result, EmissionFailure)
        assert "Invalid transport mode" in result.error
        assert "rocket" in result.error
        assert result.recommendation == "Use: air, sea, road, or rail"

    @pytest.mark.parametrize(
        "weight, valid",
        [(0, False), (1_000_001, False), (1_000_000, True), (-1, False), (None, False)],
    )
    def test_weight_boundary(self, general_shipment: dict[str, Any], weight: Any, valid: bool) -> None:
        result = calculate_emissions({**general_shipment, "weight": weight})
        assert result.success is valid
        if not valid:
            assert "Invalid weight" in result.error

    def test_checks_run_in_order(self) -> None:
        result = calculate_emissions({"transportMode": "rocket", "weight": 0})
        assert isinstance(result, EmissionFailure)
        assert result.error == "Origin and destination are required."

    def test_serialised_failure(self) -> None:
        dumped = calculate_emissions(None).model_dump(mode="json", by_alias=True)
        assert set(dumped) == {"success", "error", "recommendation"}

    def test_shipment_input_model(self) -> None:
        result = calculate_emissions(
            ShipmentInput(origin="Hamburg", destination="Shanghai", transport_mode="sea", weight=5000, distance=10000)
        )
        assert isinstance(result, EmissionResult)
        assert result.total_kg_co2 == 500.0
