"""
Balance Calculator

Reduces a list of expenses into one net balance per member.

GUARANTEES:
- Every member appears in the result, even with no expenses
- Shares are exact fractions until the final rounding step
- With non-empty beneficiary sets the exact balances sum to zero
- Unknown member ids fail fast; nothing partial is returned
"""

from fractions import Fraction
from typing import Iterable, Optional

from housesplit.models.ledger import Expense, Member, ValidationResult
from housesplit.settlement.rounding import round_to_unit
from housesplit.validation import LedgerValidator


_validator = LedgerValidator()


def compute_exact_balances(
    members: list[Member],
    expenses: Iterable[Expense],
    validator: Optional[LedgerValidator] = None,
    validation: Optional[ValidationResult] = None,
) -> dict[str, Fraction]:
    """
    Unrounded balance per member id, in member order.

    The payer is credited the full amount; each beneficiary is debited
    amount / k. An expense nobody shares only credits the payer.

    Args:
        members: Household members
        expenses: Expenses to reduce
        validator: Validator to check the input with
        validation: Result of validating these same members and expenses.
            When given, errors are raised from it and the input is not
            validated again.

    Raises:
        InvalidReferenceError: If an expense references an unknown member
        DuplicateMemberError: If a member id is repeated
    """
    expenses = list(expenses)
    validator = validator or _validator
    if validation is None:
        validation = validator.validate(members, expenses)
    validator.raise_for_errors(validation)

    balances = {member.id: Fraction(0) for member in members}

    for expense in expenses:
        balances[expense.paid_by] += expense.amount

        if expense.is_degenerate:
            continue

        share = Fraction(expense.amount, len(expense.shared_with))
        for member_id in expense.shared_with:
            balances[member_id] -= share

    return balances


def compute_balances(
    members: list[Member],
    expenses: Iterable[Expense],
    rounding_unit: int = 1,
    validator: Optional[LedgerValidator] = None,
    validation: Optional[ValidationResult] = None,
) -> dict[str, int]:
    """
    Net balance per member id, rounded to rounding_unit.

    Positive means others owe this member; negative means this member owes.
    Rounding is half away from zero, so the rounded balances may miss
    zero by at most rounding_unit * len(members).
    """
    exact = compute_exact_balances(
        members, expenses, validator=validator, validation=validation
    )
    return {
        member_id: round_to_unit(balance, rounding_unit)
        for member_id, balance in exact.items()
    }
