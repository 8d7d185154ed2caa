"""
Audit Logger

DESIGN DECISION: Every settlement run is logged.
This provides:
1. Traceability from expenses to proposed payments
2. Debugging capability when balances look wrong
3. Visibility into rounding drift and unsettled residuals

The audit logger:
- Always logs locally through structlog
- Optionally forwards events to a caller-supplied sink
- Never lets a failing sink break a settlement run
- Supports correlation IDs to trace the events of one run
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID, uuid4

import structlog

from housesplit.config import get_settings
from housesplit.models.audit import AuditEvent, AuditEventBuilder


def configure_logging(level: Optional[str] = None) -> None:
    """
    Install the JSON structlog pipeline and route housesplit logs to
    stderr at the given level.

    Defaults to the configured app log level. Importing housesplit never
    touches logging configuration; applications that configure structlog
    themselves should not call this.
    """
    if level is None:
        level = get_settings().app.log_level

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s")
    logging.getLogger("housesplit").setLevel(level.upper())


class AuditSinkInterface(ABC):
    """
    Where audit events go besides the local log.

    Persistence is the caller's concern; implement this to keep events.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Store one event.

        Returns:
            True if the event was stored
        """
        pass


class InMemoryAuditSink(AuditSinkInterface):
    """Keeps events in a list, in the order they were logged."""

    def __init__(self):
        self.events: list[AuditEvent] = []

    def append_event(self, event: AuditEvent) -> bool:
        self.events.append(event)
        return True


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An optional sink (for persistence owned by the caller)
    """

    def __init__(
        self,
        sink: Optional[AuditSinkInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            sink: Destination for events beyond the local log.
                  If None, only logs locally.
        """
        self._sink = sink
        self._logger = structlog.get_logger("housesplit.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Forwards to the sink if one is configured.

        Returns True if the sink accepted the event (or no sink is configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._sink:
            try:
                return self._sink.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_sink_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_ledger_validated(
        self,
        member_count: int,
        expense_count: int,
        warning_count: int,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.ledger_validated(
            member_count=member_count,
            expense_count=expense_count,
            warning_count=warning_count,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_validation_failed(
        self,
        issues: list[dict],
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.ledger_validation_failed(
            issues=issues,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_degenerate_expense(
        self,
        expense_id: UUID,
        paid_by: str,
        amount: int,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.degenerate_expense_found(
            expense_id=expense_id,
            paid_by=paid_by,
            amount=amount,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_balances_computed(
        self,
        balances: dict[str, int],
        rounding_unit: int,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.balances_computed(
            balances=balances,
            rounding_unit=rounding_unit,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_settlement_planned(
        self,
        transactions: list[dict],
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.settlement_planned(
            transactions=transactions,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_residual_unsettled(
        self,
        unsettled: dict[str, int],
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.residual_unsettled(
            unsettled=unsettled,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        )
        self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use one per settlement run and pass it to every audit call.
    """
    return uuid4()
