"""
Data Models Package

This package contains all Pydantic models used by housesplit.
Everything passed into or returned from the core conforms to these schemas.
"""

from housesplit.models.ledger import (
    Expense,
    HouseholdSummary,
    Member,
    MemberBalance,
    SettlementReport,
    SettlementTransaction,
    ValidationIssue,
    ValidationResult,
)
from housesplit.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "Expense",
    "HouseholdSummary",
    "Member",
    "MemberBalance",
    "SettlementReport",
    "SettlementTransaction",
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
