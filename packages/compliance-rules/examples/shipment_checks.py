# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
shipment_checks.py — Demonstrates compliance evaluation and emission
calculation against the packaged rules document.

Run: python examples/shipment_checks.py
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

# Allow running directly from the examples directory.
sys.path.insert(0, str(Path(__file__).parent.parent / "python" / "src"))

from compliance_rules import calculate_emissions, default_rule_set, evaluate_compliance

SHIPMENTS = [
    {
        "origin": "Frankfurt",
        "destination": "Chicago",
        "unCode": "UN1203",
        "transportMode": "air",
        "cargoType": "hazmat",
        "weight": 50,
        "distance": 7000,
    },
    {
        "origin": "Valencia",
        "destination": "Oslo",
        "transportMode": "road",
        "cargoType": "perishable",
        "weight": 12000,
    },
    {
        "origin": "Hamburg",
        "destination": "Shanghai",
        "unCode": "UN1001",
        "transportMode": "air",
        "cargoType": "hazmat",
        "weight": 0,
    },
]


def main() -> None:
    rules = default_rule_set()
    print(f"=== Rules document {rules.version} (effective {rules.effective_date}) ===\n")

    for shipment in SHIPMENTS:
        print(f"--- {shipment['origin']} -> {shipment['destination']} ({shipment['transportMode']}) ---")

        validation = evaluate_compliance(shipment, rules)
        print(f"  compliant: {validation.is_valid}")
        for issue in validation.issues:
            print(f"  [ERROR]   {issue.type}: {issue.message}")
        for warning in validation.warnings:
            print(f"  [WARNING] {warning.type}: {warning.message}")
        for recommendation in validation.recommendations:
            print(f"  -> {recommendation}")

        emissions = calculate_emissions(shipment, rules)
        if emissions.success:
            estimated = " (estimated distance)" if emissions.breakdown.distance_estimated else ""
            print(f"  CO2: {emissions.total_kg_co2} kg{estimated}")
            for recommendation in emissions.recommendations:
                print(f"  -> {recommendation}")
        else:
            print(f"  emissions unavailable: {emissions.error}")
        print()

    print("--- First result as JSON ---")
    print(json.dumps(evaluate_compliance(SHIPMENTS[0], rules).model_dump(mode="json", by_alias=True), indent=2))


if __name__ == "__main__":
    main()
