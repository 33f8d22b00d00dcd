# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations


class DecisionChainError(Exception):
    """Base class for all decision-chain errors."""

    def __init__(self, message: str, code: str = "DECISION_CHAIN_ERROR") -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class StorageError(DecisionChainError):
    """
    Raised when the key-value backend fails while a record is being appended.

    The original backend exception is always available as ``__cause__``.

    Attributes:
        key: The storage key that was being read or written.
        operation: ``"read"`` or ``"write"``.
    """

    def __init__(self, key: str, operation: str, detail: str) -> None:
        super().__init__(
            f"Storage {operation} failed for key '{key}': {detail}",
            code="STORAGE_ERROR",
        )
        self.key = key
        self.operation = operation


class ChainDecodeError(DecisionChainError):
    """Raised when a stored chain value cannot be decoded into records."""

    def __init__(self, key: str, detail: str) -> None:
        super().__init__(
            f"Value stored under '{key}' is not a decision chain: {detail}",
            code="CHAIN_DECODE_ERROR",
        )
        self.key = key
