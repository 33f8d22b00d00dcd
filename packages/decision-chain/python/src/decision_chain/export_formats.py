# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
Export helpers — serialise DecisionRecord lists to JSON and CSV.

- JSON: JSON array of wire-form (camelCase) records with 2-space indentation.
- CSV:  RFC 4180 CSV with a header row; the payload column holds compact JSON.
"""

from __future__ import annotations

import csv
import io
import json

from decision_chain.types import DecisionRecord

# ---------------------------------------------------------------------------
# JSON export
# ---------------------------------------------------------------------------


def export_json(records: list[DecisionRecord]) -> str:
    """Serialise records to a JSON array string with 2-space indentation."""
    return json.dumps(
        [record.to_wire() for record in records],
        indent=2,
        ensure_ascii=False,
    )


# ---------------------------------------------------------------------------
# CSV export
# ---------------------------------------------------------------------------

CSV_COLUMNS: list[str] = [
    "timestamp",
    "action",
    "actorId",
    "subjectId",
    "payload",
    "previousHash",
    "hash",
]


def _record_to_csv_row(record: DecisionRecord) -> list[str]:
    raw = record.to_wire()
    row: list[str] = []
    for column in CSV_COLUMNS:
        value = raw.get(column)
        if column == "payload":
            row.append(json.dumps(value, sort_keys=True, ensure_ascii=False, separators=(",", ":")))
        elif value is None:
            row.append("")
        else:
            row.append(str(value))
    return row


def export_csv(records: list[DecisionRecord]) -> str:
    """
    Serialise records to CSV format.

    The first row contains column headers.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for record in records:
        writer.writerow(_record_to_csv_row(record))
    return buffer.getvalue()


# ---------------------------------------------------------------------------
# Unified dispatcher
# ---------------------------------------------------------------------------


def export_records(records: list[DecisionRecord], export_format: str) -> str:
    """
    Route export to the appropriate format handler.

    Parameters
    ----------
    records:
        The records to export.
    export_format:
        ``"json"`` or ``"csv"``.

    Raises
    ------
    ValueError
        When an unsupported format string is supplied.
    """
    if export_format == "json":
        return export_json(records)
    if export_format == "csv":
        return export_csv(records)
    raise ValueError(f"Unsupported export format: {export_format!r}")
