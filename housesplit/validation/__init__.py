"""Ledger validation package."""

from housesplit.validation.validator import (
    DuplicateMemberError,
    InvalidReferenceError,
    LedgerValidationError,
    LedgerValidator,
)

__all__ = [
    "DuplicateMemberError",
    "InvalidReferenceError",
    "LedgerValidationError",
    "LedgerValidator",
]
