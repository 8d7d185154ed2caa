"""
Main Orchestrator for housesplit

Ties the components together into one settlement run:
members + expenses → validation → balances → settlement → summary

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing is computed from malformed input
- Rounding drift is measured and reported, never hidden
- Every step is audited

The functions it calls stay pure; configuration and auditing live here.
"""

from typing import Iterable, Optional
from uuid import UUID

from housesplit.audit import AuditLogger, create_correlation_id
from housesplit.config import LedgerSettings, get_settings
from housesplit.models.ledger import (
    Expense,
    Member,
    SettlementReport,
    ValidationResult,
)
from housesplit.settlement import (
    apply_transactions,
    compute_balances,
    plan_settlement,
    summarize_household,
)
from housesplit.validation import LedgerValidationError, LedgerValidator


class SettlementFlow:
    """
    Orchestrates one settlement run.

    Flow:
    1. Validate → fail fast on unknown or duplicate members
    2. Balances → net balance per member at the configured rounding unit
    3. Settle → greedy transactions between debtors and creditors
    4. Residuals → apply the transactions, report what is left
    5. Summarize → household view at the display rounding unit

    Holds no state between runs.
    """

    def __init__(
        self,
        settings: Optional[LedgerSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
        validator: Optional[LedgerValidator] = None,
    ):
        self._settings = settings or get_settings().ledger
        self._audit_logger = audit_logger
        self._validator = validator or LedgerValidator()

    def run(
        self,
        members: list[Member],
        expenses: Iterable[Expense],
        correlation_id: Optional[UUID] = None,
    ) -> SettlementReport:
        """
        Compute balances and a settlement plan.

        Raises:
            LedgerValidationError: If the input references unknown or
                duplicate members (audited before being re-raised)
            Exception: Any failure after validation is audited as a
                system error and re-raised
        """
        correlation_id = correlation_id or create_correlation_id()
        expenses = list(expenses)

        # Step 1: Validate
        validation = self._validator.validate(members, expenses)
        try:
            self._validator.raise_for_errors(validation)
        except LedgerValidationError:
            if self._audit_logger:
                self._audit_logger.log_validation_failed(
                    issues=[
                        issue.model_dump(mode="json")
                        for issue in validation.issues
                        if issue.severity == "error"
                    ],
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            self._audit_logger.log_ledger_validated(
                member_count=validation.member_count,
                expense_count=validation.expense_count,
                warning_count=len(validation.warnings),
                correlation_id=correlation_id,
            )
            for expense in expenses:
                if expense.is_degenerate:
                    self._audit_logger.log_degenerate_expense(
                        expense_id=expense.id,
                        paid_by=expense.paid_by,
                        amount=expense.amount,
                        correlation_id=correlation_id,
                    )

        try:
            return self._settle(members, expenses, validation, correlation_id)
        except Exception as e:
            if self._audit_logger:
                self._audit_logger.log_error(
                    error_type=type(e).__name__,
                    error_message=str(e),
                    details={
                        "member_count": validation.member_count,
                        "expense_count": validation.expense_count,
                    },
                    correlation_id=correlation_id,
                )
            raise

    def _settle(
        self,
        members: list[Member],
        expenses: list[Expense],
        validation: ValidationResult,
        correlation_id: UUID,
    ) -> SettlementReport:
        """Steps 2 to 5 on a ledger that passed validation."""
        rounding_unit = self._settings.rounding_unit

        # Step 2: Balances
        balances = compute_balances(
            members,
            expenses,
            rounding_unit,
            validator=self._validator,
            validation=validation,
        )
        if self._audit_logger:
            self._audit_logger.log_balances_computed(
                balances=balances,
                rounding_unit=rounding_unit,
                correlation_id=correlation_id,
            )

        # Step 3: Settle
        transactions = plan_settlement(members, balances, rounding_unit)
        if self._audit_logger:
            self._audit_logger.log_settlement_planned(
                transactions=[t.to_dict() for t in transactions],
                correlation_id=correlation_id,
            )

        # Step 4: Residuals
        remaining = apply_transactions(balances, transactions)
        unsettled = {
            member_id: amount
            for member_id, amount in remaining.items()
            if amount != 0
        }
        if unsettled and self._audit_logger:
            self._audit_logger.log_residual_unsettled(
                unsettled=unsettled,
                correlation_id=correlation_id,
            )

        # Step 5: Summarize
        summary = summarize_household(
            members,
            expenses,
            balances,
            display_unit=self._settings.display_rounding_unit,
        )

        return SettlementReport(
            correlation_id=correlation_id,
            rounding_unit=rounding_unit,
            balances=balances,
            transactions=transactions,
            unsettled=unsettled,
            validation=validation,
            summary=summary,
        )
