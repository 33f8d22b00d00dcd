# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
basic_logging.py — Demonstrates core DecisionLog usage.

Shows how to:
- Create a log (defaults to in-memory storage)
- Record decisions for two shipments
- Verify each shipment's chain
- Detect a tampered record
- Print chain summaries and export a chain as CSV

Run: python examples/basic_logging.py
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

# Allow running directly from the examples directory.
sys.path.insert(0, str(Path(__file__).parent.parent / "python" / "src"))

from decision_chain import ChainQuery, DecisionInput, DecisionLog, export_csv, format_summary


async def main() -> None:
    log = DecisionLog()

    print("=== LogiBrew Decision Chain — Basic Logging Example ===\n")

    decisions = [
        DecisionInput(
            subject_id="SHIP-001",
            action="compliance_check",
            payload={"status": "approved", "notes": "General cargo, sea freight"},
        ),
        DecisionInput(
            subject_id="SHIP-002",
            action="compliance_check",
            actor_id="planner-7",
            payload={"status": "rejected", "notes": "UN1001 forbidden for air"},
        ),
        DecisionInput(
            subject_id="SHIP-001",
            action="route_change",
            actor_id="planner-7",
            payload={"status": "approved", "notes": "Reroute via Rotterdam"},
        ),
        DecisionInput(
            subject_id="SHIP-001",
            action="booking_confirmed",
            payload={"status": "approved", "carrier": "Hapag-Lloyd"},
        ),
    ]

    print("Recording decisions...")
    for decision in decisions:
        record = await log.append(decision)
        print(
            f"  {record.subject_id} -> {record.action}"
            f" | prev: {record.previous_hash[:16]:<16} | hash: {record.hash[:16]}..."
        )

    query = ChainQuery(log.storage)
    print("\n--- Chain summaries ---")
    for summary in await query.summaries():
        print(format_summary(summary))
        print()

    # Edit a stored payload behind the log's back.
    key = log.config.chain_key("SHIP-001")
    stored = await log.storage.get(key)
    stored[1]["payload"]["notes"] = "Reroute via Antwerp"
    await log.storage.set(key, stored)

    print("--- After editing SHIP-001 record 2 ---")
    result = await log.verify("SHIP-001")
    print(f"  valid={result.valid}")
    if not result.valid:
        print(f"  broken at index {result.broken_at}: {result.reason}")

    print("\n--- SHIP-002 as CSV ---")
    print(export_csv(await log.chain("SHIP-002")))


if __name__ == "__main__":
    asyncio.run(main())
