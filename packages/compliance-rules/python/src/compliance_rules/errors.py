# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations


class ComplianceRulesError(Exception):
    """Base class for all compliance-rules errors."""

    def __init__(self, message: str, code: str = "COMPLIANCE_RULES_ERROR") -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class RuleDocumentError(ComplianceRulesError):
    """
    Raised when a rules document cannot be read or fails schema validation.

    Attributes:
        source: Path or label of the offending document.
    """

    def __init__(self, source: str, detail: str) -> None:
        super().__init__(
            f"Rules document '{source}' is invalid: {detail}",
            code="RULE_DOCUMENT_INVALID",
        )
        self.source = source
