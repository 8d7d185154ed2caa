"""
Ledger Validation

DESIGN DECISION: Validation reports every problem it finds,
then fails fast on the first error when asked to.

ERRORS (computation cannot run):
- Duplicate member ids
- Payer not in the member list
- Beneficiary not in the member list

WARNINGS (computation runs, result may surprise the caller):
- Expense with no beneficiaries (only the payer is credited)
- Expense with amount zero

INFO:
- Payer does not share the expense

IMPORTANT: Validation NEVER fixes input.
Defaulting empty beneficiaries is the caller's job (see housesplit.settlement.sharing).
"""

from typing import Iterable, Optional
from uuid import UUID

from housesplit.models.ledger import (
    Expense,
    Member,
    ValidationIssue,
    ValidationResult,
)


class LedgerValidationError(ValueError):
    """Base exception for malformed ledger input."""

    def __init__(
        self,
        message: str,
        field: str,
        member_id: Optional[str] = None,
        expense_id: Optional[UUID] = None,
    ):
        super().__init__(message)
        self.message = message
        self.field = field
        self.member_id = member_id
        self.expense_id = expense_id


class InvalidReferenceError(LedgerValidationError):
    """A member id is referenced but absent from the member list."""
    pass


class DuplicateMemberError(LedgerValidationError):
    """The same member id appears twice in the member list."""
    pass


_ERRORS_BY_ISSUE = {
    "duplicate_member": DuplicateMemberError,
    "unknown_payer": InvalidReferenceError,
    "unknown_beneficiary": InvalidReferenceError,
}


class LedgerValidator:
    """
    Validates members and expenses before balances are computed.

    Stateless; one instance can be shared freely.
    """

    def _validate_members(
        self,
        members: list[Member],
    ) -> tuple[set[str], list[ValidationIssue]]:
        issues = []
        seen: set[str] = set()

        for member in members:
            if member.id in seen:
                issues.append(ValidationIssue(
                    field="members",
                    issue_type="duplicate_member",
                    message=f"Member '{member.id}' appears more than once",
                    severity="error",
                    member_id=member.id,
                    suggested_fix="Pass each household member exactly once",
                ))
            seen.add(member.id)

        return seen, issues

    def _validate_expense(
        self,
        expense: Expense,
        member_ids: set[str],
    ) -> list[ValidationIssue]:
        issues = []

        if expense.paid_by not in member_ids:
            issues.append(ValidationIssue(
                field="paid_by",
                issue_type="unknown_payer",
                message=f"Payer '{expense.paid_by}' is not a household member",
                severity="error",
                member_id=expense.paid_by,
                expense_id=expense.id,
            ))

        for member_id in expense.shared_with:
            if member_id not in member_ids:
                issues.append(ValidationIssue(
                    field="shared_with",
                    issue_type="unknown_beneficiary",
                    message=f"Beneficiary '{member_id}' is not a household member",
                    severity="error",
                    member_id=member_id,
                    expense_id=expense.id,
                ))

        if expense.is_degenerate:
            issues.append(ValidationIssue(
                field="shared_with",
                issue_type="degenerate_expense",
                message=(
                    f"Expense {expense.id} has no beneficiaries; "
                    "only the payer will be credited"
                ),
                severity="warning",
                expense_id=expense.id,
                suggested_fix="Default beneficiaries to the payer's room",
            ))
        elif expense.paid_by not in expense.shared_with:
            issues.append(ValidationIssue(
                field="shared_with",
                issue_type="payer_not_sharing",
                message=f"Payer '{expense.paid_by}' does not share expense {expense.id}",
                severity="info",
                member_id=expense.paid_by,
                expense_id=expense.id,
            ))

        if expense.amount == 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="zero_amount",
                message=f"Expense {expense.id} has amount zero",
                severity="warning",
                expense_id=expense.id,
            ))

        return issues

    def validate(
        self,
        members: list[Member],
        expenses: Iterable[Expense],
    ) -> ValidationResult:
        """
        Check members and expenses together.

        Returns:
            ValidationResult with all issues found, in input order
        """
        expenses = list(expenses)
        member_ids, all_issues = self._validate_members(members)

        for expense in expenses:
            all_issues.extend(self._validate_expense(expense, member_ids))

        return ValidationResult(
            member_count=len(members),
            expense_count=len(expenses),
            is_valid=not any(i.severity == "error" for i in all_issues),
            issues=all_issues,
        )

    def ensure_valid(
        self,
        members: list[Member],
        expenses: Iterable[Expense],
    ) -> ValidationResult:
        """
        Validate and raise on the first error-level issue.

        Raises:
            DuplicateMemberError: If a member id is repeated
            InvalidReferenceError: If an expense references an unknown member
        """
        result = self.validate(members, expenses)
        self.raise_for_errors(result)
        return result

    def raise_for_errors(self, result: ValidationResult) -> None:
        """Raise the typed error for the first error-level issue in result."""
        for issue in result.issues:
            if issue.severity == "error":
                raise _ERRORS_BY_ISSUE[issue.issue_type](
                    issue.message,
                    field=issue.field,
                    member_id=issue.member_id,
                    expense_id=issue.expense_id,
                )

    def get_user_friendly_summary(
        self,
        result: ValidationResult,
    ) -> str:
        """Short report suitable for showing to household members."""
        if result.is_valid and not result.warnings:
            return "All expenses look good."

        lines = []

        if result.has_errors:
            lines.append("Some expenses could not be processed:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   - {issue.message}")
                    if issue.suggested_fix:
                        lines.append(f"     ({issue.suggested_fix})")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("Please check the following:")
            for warning in result.warnings:
                lines.append(f"   - {warning}")

        return "\n".join(lines)
