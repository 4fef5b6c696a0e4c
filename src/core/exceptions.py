"""
Error hierarchy. Every failure is scoped to a single call and surfaced to the caller.
"""

from __future__ import annotations


class BlockLedgerError(Exception):
    """Base exception for blockledger."""


class PayloadEncodeError(BlockLedgerError):
    """Payload could not be serialized when constructing a block."""


class IntegrityCheckError(BlockLedgerError):
    """Block digest could not be computed during validation."""


class PayloadDecodeError(BlockLedgerError):
    """Block body could not be decoded back into a payload."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class LedgerError(BlockLedgerError):
    """Ledger misuse, or malformed persisted ledger data."""


class ConfigError(BlockLedgerError):
    """Simulator configuration is invalid."""
