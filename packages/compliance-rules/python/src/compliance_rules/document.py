# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
Typed model and loader for the versioned compliance rules document.

The document is validated once, at load time, against the models below.
A malformed document (unknown keys, a transport mode without an emission
factor, an unparseable quantity limit …) raises ``RuleDocumentError``
immediately instead of surfacing as a missing value during evaluation.
The loaded ComplianceRuleSet is immutable for the life of the process.
"""

from __future__ import annotations

import json
import re
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from compliance_rules.errors import RuleDocumentError
from compliance_rules.types import TRANSPORT_MODE_VALUES, TransportMode

UN_CODE_PATTERN = re.compile(r"^UN\d{4}$")
_QUANTITY_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([A-Za-z]*)\s*$")
UNLIMITED = "unlimited"

# Cargo type → perishable profile category.
PERISHABLE_CATEGORIES: dict[str, str] = {
    "perishable": "refrigerated",
    "temperature-controlled": "temperature_controlled",
}

_DOCUMENT_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
    extra="forbid",
)


class ModeRestriction(BaseModel):
    """Per-transport-mode handling rule for one UN code."""

    model_config = _DOCUMENT_CONFIG

    allowed: bool
    max_quantity: str | None = None
    passenger_aircraft_allowed: bool | None = None
    special_provisions: list[str] = Field(default_factory=list)

    @field_validator("max_quantity")
    @classmethod
    def _check_quantity(cls, value: str | None) -> str | None:
        if value is None or value.strip().lower() == UNLIMITED:
            return value
        if not _QUANTITY_PATTERN.match(value):
            raise ValueError(f"maxQuantity must be 'unlimited' or '<number><unit>', got {value!r}")
        return value

    @property
    def max_quantity_limit(self) -> float | None:
        """Numeric part of ``max_quantity``; None when unlimited or unset."""
        if self.max_quantity is None or self.max_quantity.strip().lower() == UNLIMITED:
            return None
        match = _QUANTITY_PATTERN.match(self.max_quantity)
        return float(match.group(1)) if match else None


class UnCodeRule(BaseModel):
    """Classification and restrictions for one hazardous-material code."""

    model_config = _DOCUMENT_CONFIG

    name: str
    hazard_class: str
    packing_group: str
    per_mode_restrictions: dict[TransportMode, ModeRestriction]

    def allowed_modes(self) -> list[str]:
        return [mode for mode, rule in self.per_mode_restrictions.items() if rule.allowed]


class ThresholdRule(BaseModel):
    model_config = _DOCUMENT_CONFIG

    regulation: str
    threshold: float = Field(ge=0)
    notes: str = ""


class EmissionThresholds(BaseModel):
    """The regulatory reporting threshold and the offset-recommendation threshold."""

    model_config = _DOCUMENT_CONFIG

    reporting: ThresholdRule
    offset: ThresholdRule


class TemperatureRange(BaseModel):
    model_config = _DOCUMENT_CONFIG

    min: float
    max: float

    @model_validator(mode="after")
    def _ordered(self) -> "TemperatureRange":
        if self.min > self.max:
            raise ValueError("temperatureRange.min must not exceed temperatureRange.max")
        return self


class PerishableProfile(BaseModel):
    model_config = _DOCUMENT_CONFIG

    temperature_range: TemperatureRange
    max_transit_days_by_mode: dict[TransportMode, int]
    notes: str = ""


class RouteCheck(BaseModel):
    """A structural check applied to every shipment."""

    model_config = _DOCUMENT_CONFIG

    check: Literal["transport_mode_required", "cargo_type_required", "weight_required"]
    message: str


class ComplianceRuleSet(BaseModel):
    """
    The complete, validated rules document.

    Attributes:
        version: Document version label.
        effective_date: Date from which the rules apply.
        source: Regulatory sources the rules were compiled from.
        un_codes: UN code (``UNnnnn``) → classification and restrictions.
        emission_factors: Transport mode → kg CO2 per ton-km; every mode
            must be present.
        emission_thresholds: Reporting and offset thresholds in kg CO2.
        perishable_profiles: Perishable category → handling profile.
        route_checks: Structural checks applied to every shipment.
    """

    model_config = _DOCUMENT_CONFIG

    version: str
    effective_date: str | None = None
    source: str | None = None
    un_codes: dict[str, UnCodeRule]
    emission_factors: dict[TransportMode, float]
    emission_thresholds: EmissionThresholds
    perishable_profiles: dict[str, PerishableProfile]
    route_checks: list[RouteCheck] = Field(default_factory=list)

    @field_validator("un_codes")
    @classmethod
    def _normalise_codes(cls, value: dict[str, UnCodeRule]) -> dict[str, UnCodeRule]:
        normalised: dict[str, UnCodeRule] = {}
        for code, rule in value.items():
            upper = code.strip().upper()
            if not UN_CODE_PATTERN.match(upper):
                raise ValueError(f"UN code keys must look like 'UN1234', got {code!r}")
            normalised[upper] = rule
        return normalised

    @field_validator("emission_factors")
    @classmethod
    def _complete_factors(cls, value: dict[str, float]) -> dict[str, float]:
        missing = TRANSPORT_MODE_VALUES - set(value)
        if missing:
            raise ValueError(f"missing emission factors for: {sorted(missing)}")
        for mode, factor in value.items():
            if factor <= 0:
                raise ValueError(f"emission factor for {mode!r} must be positive")
        return value

    @field_validator("perishable_profiles")
    @classmethod
    def _required_profiles(cls, value: dict[str, PerishableProfile]) -> dict[str, PerishableProfile]:
        missing = set(PERISHABLE_CATEGORIES.values()) - set(value)
        if missing:
            raise ValueError(f"missing perishable profiles: {sorted(missing)}")
        return value

    def un_code(self, code: str) -> UnCodeRule | None:
        """Look up a UN code case-insensitively."""
        return self.un_codes.get(code.strip().upper())

    def perishable_profile(self, cargo_type: str) -> tuple[str, PerishableProfile] | None:
        """Return ``(category, profile)`` for a perishable cargo type."""
        category = PERISHABLE_CATEGORIES.get(cargo_type)
        if category is None:
            return None
        profile = self.perishable_profiles.get(category)
        return None if profile is None else (category, profile)


def parse_rule_set(data: Any, source: str = "<memory>") -> ComplianceRuleSet:
    """
    Validate an already-decoded rules document.

    Raises
    ------
    RuleDocumentError
        If the document does not match the ComplianceRuleSet schema.
    """
    try:
        return ComplianceRuleSet.model_validate(data)
    except ValidationError as exc:
        raise RuleDocumentError(source, str(exc)) from exc


def load_rule_set(path: str | Path | None = None) -> ComplianceRuleSet:
    """
    Read and validate a rules document from disk.

    ``path=None`` loads the document packaged with this library.

    Raises
    ------
    RuleDocumentError
        If the file cannot be read, is not JSON, or fails validation.
    """
    if path is None:
        source = "compliance_rules/data/rules.json"
        try:
            raw = resources.files("compliance_rules").joinpath("data/rules.json").read_text("utf-8")
        except OSError as exc:
            raise RuleDocumentError(source, str(exc)) from exc
    else:
        source = str(path)
        try:
            raw = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise RuleDocumentError(source, str(exc)) from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise RuleDocumentError(source, f"not valid JSON: {exc}") from exc
    return parse_rule_set(data, source)


@lru_cache(maxsize=1)
def default_rule_set() -> ComplianceRuleSet:
    """Return the packaged rules document, loaded once per process."""
    return load_rule_set()
