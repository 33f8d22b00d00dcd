# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation
"""Shared fixtures for logibrew core tests."""

from __future__ import annotations

from typing import Any

import pytest

from logibrew import LogiBrewCore, create_core


@pytest.fixture
def core() -> LogiBrewCore:
    """A core over in-memory storage and the packaged rules document."""
    return create_core()


@pytest.fixture
def hazmat_air_shipment() -> dict[str, Any]:
    return {
        "origin": "Frankfurt",
        "destination": "Chicago",
        "unCode": "UN1203",
        "transportMode": "air",
        "cargoType": "hazmat",
        "weight": 50,
        "distance": 7000,
    }
