"""
Audit Models for housesplit

Every settlement run leaves a trail of events:
1. What input was validated and what was wrong with it
2. Which balances were computed
3. Which transactions were proposed
4. What could not be settled

DESIGN DECISION: Events describe amounts and member ids only.
Names and descriptions stay with the caller.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Validation
    LEDGER_VALIDATED = "ledger_validated"
    LEDGER_VALIDATION_FAILED = "ledger_validation_failed"
    DEGENERATE_EXPENSE_FOUND = "degenerate_expense_found"

    # Computation
    BALANCES_COMPUTED = "balances_computed"
    SETTLEMENT_PLANNED = "settlement_planned"
    RESIDUAL_UNSETTLED = "residual_unsettled"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of the audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'member', 'ledger')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate the events of one settlement run"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.balances_computed(balances, correlation_id)
        event = AuditEventBuilder.settlement_planned(transactions, correlation_id)
    """

    @staticmethod
    def ledger_validated(
        member_count: int,
        expense_count: int,
        warning_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_VALIDATED,
            entity_type="ledger",
            correlation_id=correlation_id,
            description=(
                f"Validated {expense_count} expense(s) for "
                f"{member_count} member(s)"
            ),
            details={
                "member_count": member_count,
                "expense_count": expense_count,
                "warning_count": warning_count,
            },
        )

    @staticmethod
    def ledger_validation_failed(
        issues: list[dict],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_VALIDATION_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="ledger",
            correlation_id=correlation_id,
            description=f"Ledger validation failed with {len(issues)} issue(s)",
            details={
                "issues": issues,
            },
        )

    @staticmethod
    def degenerate_expense_found(
        expense_id: UUID,
        paid_by: str,
        amount: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DEGENERATE_EXPENSE_FOUND,
            severity=AuditSeverity.WARNING,
            entity_type="expense",
            entity_id=str(expense_id),
            correlation_id=correlation_id,
            description="Expense has no beneficiaries; only the payer is credited",
            details={
                "paid_by": paid_by,
                "amount": amount,
            },
        )

    @staticmethod
    def balances_computed(
        balances: dict[str, int],
        rounding_unit: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BALANCES_COMPUTED,
            entity_type="ledger",
            correlation_id=correlation_id,
            description=f"Computed balances for {len(balances)} member(s)",
            details={
                "balances": dict(balances),
                "rounding_unit": rounding_unit,
                "drift": sum(balances.values()),
            },
        )

    @staticmethod
    def settlement_planned(
        transactions: list[dict],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SETTLEMENT_PLANNED,
            entity_type="ledger",
            correlation_id=correlation_id,
            description=f"Planned {len(transactions)} settlement transaction(s)",
            details={
                "transactions": transactions,
                "total_transferred": sum(t["amount"] for t in transactions),
            },
        )

    @staticmethod
    def residual_unsettled(
        unsettled: dict[str, int],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RESIDUAL_UNSETTLED,
            severity=AuditSeverity.WARNING,
            entity_type="ledger",
            correlation_id=correlation_id,
            description=(
                f"{len(unsettled)} member(s) left with an unsettled balance"
            ),
            details={
                "unsettled": dict(unsettled),
            },
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"System error: {error_type}",
            details=details or {},
            error_code=error_type,
            error_message=error_message,
        )
