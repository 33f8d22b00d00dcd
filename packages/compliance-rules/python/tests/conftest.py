# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation
"""Shared fixtures for compliance-rules tests."""

from __future__ import annotations

import copy
import json
from importlib import resources
from typing import Any

import pytest

from compliance_rules.document import ComplianceRuleSet, default_rule_set


@pytest.fixture
def rule_set() -> ComplianceRuleSet:
    """The packaged rules document."""
    return default_rule_set()


@pytest.fixture
def rules_document() -> dict[str, Any]:
    """A mutable deep copy of the packaged rules document as decoded JSON."""
    raw = resources.files("compliance_rules").joinpath("data/rules.json").read_text("utf-8")
    return copy.deepcopy(json.loads(raw))


@pytest.fixture
def general_shipment() -> dict[str, Any]:
    """A compliant general-cargo sea shipment with every field populated."""
    return {
        "origin": "Hamburg",
        "destination": "Shanghai",
        "transportMode": "sea",
        "cargoType": "general",
        "weight": 5000,
        "distance": 10000,
    }
