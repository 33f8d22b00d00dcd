# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field, model_validator


class RulesEngineConfig(BaseModel, frozen=True):
    """
    Configuration for compliance evaluation and emission calculation.

    Attributes:
        min_weight_kg: Exclusive lower bound for cargo weight.
        max_weight_kg: Inclusive upper bound for cargo weight.
        mode_shift_floor_kg_co2: Air shipments above this total are advised
            to consider sea or rail.
        estimate_base_km: Base distance of the placeholder route estimate.
        estimate_km_per_char: Kilometres added per character of
            ``origin + destination`` in the placeholder estimate.
    """

    min_weight_kg: Annotated[float, Field(ge=0)] = 0
    max_weight_kg: Annotated[float, Field(gt=0)] = 1_000_000
    mode_shift_floor_kg_co2: Annotated[float, Field(ge=0)] = 100
    estimate_base_km: Annotated[float, Field(gt=0)] = 1000
    estimate_km_per_char: Annotated[float, Field(ge=0)] = 100

    @model_validator(mode="after")
    def _check_weight_bounds(self) -> "RulesEngineConfig":
        if self.max_weight_kg <= self.min_weight_kg:
            raise ValueError("max_weight_kg must be greater than min_weight_kg")
        return self

    def weight_in_range(self, weight: float) -> bool:
        return self.min_weight_kg < weight <= self.max_weight_kg
