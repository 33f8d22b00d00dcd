# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
Result types produced by the compliance evaluator and emission calculator.

Results are plain frozen Pydantic models with no framework dependency.
``model_dump(mode="json", by_alias=True)`` yields the camelCase JSON shape
(``isValid``, ``totalKgCo2`` …) expected by UI and automation callers.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

TransportMode = Literal["air", "sea", "road", "rail"]
CargoType = Literal["general", "hazmat", "perishable", "temperature-controlled"]

TRANSPORT_MODE_VALUES: frozenset[str] = frozenset({"air", "sea", "road", "rail"})
CARGO_TYPE_VALUES: frozenset[str] = frozenset(
    {"general", "hazmat", "perishable", "temperature-controlled"}
)

_RESULT_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class IssueType(str):
    """Well-known ``Issue.type`` values."""

    INVALID_PAYLOAD = "INVALID_PAYLOAD"
    INVALID_UN_CODE_FORMAT = "INVALID_UN_CODE_FORMAT"
    INVALID_TRANSPORT_MODE = "INVALID_TRANSPORT_MODE"
    INVALID_CARGO_TYPE = "INVALID_CARGO_TYPE"
    INVALID_WEIGHT = "INVALID_WEIGHT"
    INVALID_UN_CODE = "INVALID_UN_CODE"
    MISSING_UN_CODE = "MISSING_UN_CODE"
    TRANSPORT_MODE_FORBIDDEN = "TRANSPORT_MODE_FORBIDDEN"
    WEIGHT_LIMIT_EXCEEDED = "WEIGHT_LIMIT_EXCEEDED"
    PASSENGER_AIRCRAFT_RESTRICTION = "PASSENGER_AIRCRAFT_RESTRICTION"
    PERISHABLE_REQUIREMENTS = "PERISHABLE_REQUIREMENTS"
    MISSING_TRANSPORT_MODE = "MISSING_TRANSPORT_MODE"
    MISSING_CARGO_TYPE = "MISSING_CARGO_TYPE"
    MISSING_WEIGHT = "MISSING_WEIGHT"
    VALIDATION_ERROR = "VALIDATION_ERROR"


class ShipmentInput(BaseModel):
    """
    Typed shipment description accepted wherever a shipment mapping is.

    Every field is optional here; the evaluators report missing or invalid
    values as issues rather than rejecting the model.
    """

    model_config = _RESULT_CONFIG

    origin: str | None = None
    destination: str | None = None
    un_code: str | None = None
    transport_mode: str | None = None
    cargo_type: str | None = None
    weight: float | None = None
    distance: float | None = None

    def to_mapping(self) -> dict[str, Any]:
        """Return the camelCase mapping form, omitting unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Issue(BaseModel):
    """A single compliance problem (``severity="error"``) or warning."""

    model_config = _RESULT_CONFIG

    type: str
    severity: Literal["error", "warning"]
    message: str
    recommendation: str | None = None


class ValidationResult(BaseModel):
    """
    Outcome of a compliance evaluation.

    ``is_valid`` is False exactly when ``issues`` is non-empty; warnings never
    affect validity.
    """

    model_config = _RESULT_CONFIG

    is_valid: bool
    issues: list[Issue] = Field(default_factory=list)
    warnings: list[Issue] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    details: dict[str, Any] = Field(default_factory=dict)

    def issue_types(self) -> list[str]:
        return [issue.type for issue in self.issues]

    def warning_types(self) -> list[str]:
        return [warning.type for warning in self.warnings]


class EmissionBreakdown(BaseModel):
    """Inputs and factor behind an emission total."""

    model_config = _RESULT_CONFIG

    weight_kg: float
    distance_km: float
    ton_km: float
    mode: TransportMode
    factor: float
    factor_unit: Literal["kg_co2_per_ton_km"] = "kg_co2_per_ton_km"
    distance_estimated: bool = False


class ThresholdCheck(BaseModel):
    """Comparison of an emission total against one named threshold."""

    model_config = _RESULT_CONFIG

    regulation: str
    threshold: float
    exceeded: bool
    notes: str


class EmissionResult(BaseModel):
    """Successful emission calculation."""

    model_config = _RESULT_CONFIG

    success: Literal[True] = True
    total_kg_co2: float
    breakdown: EmissionBreakdown
    exceeds_reporting_threshold: bool
    offset_recommended: bool
    reporting: ThresholdCheck
    offset: ThresholdCheck
    recommendations: list[str] = Field(default_factory=list)


class EmissionFailure(BaseModel):
    """Emission calculation rejected because of invalid input."""

    model_config = _RESULT_CONFIG

    success: Literal[False] = False
    error: str
    recommendation: str


EmissionOutcome = EmissionResult | EmissionFailure
