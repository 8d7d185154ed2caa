"""
Household Summary

Deterministic roll-up of balances for display: how much was spent,
who is owed, who owes, and the totals on each side.

DESIGN DECISION: The summary is rounded to its own display unit
(thousands by default) with the same half-away-from-zero policy as the
core. It is a view of the balances and is never fed back into settlement.
"""

from typing import Iterable, Mapping

from housesplit.models.ledger import (
    Expense,
    HouseholdSummary,
    Member,
    MemberBalance,
)
from housesplit.settlement.rounding import Amount, round_to_unit


def summarize_household(
    members: list[Member],
    expenses: Iterable[Expense],
    balances: Mapping[str, Amount],
    display_unit: int = 1000,
) -> HouseholdSummary:
    """
    Build the summary view from already computed balances.

    Members absent from balances count as zero and are left out of both lists.
    """
    total_expenses = sum(expense.amount for expense in expenses)

    rows = [
        MemberBalance(
            member_id=member.id,
            name=member.name,
            room=member.room,
            balance=round_to_unit(balances.get(member.id, 0), display_unit),
        )
        for member in members
    ]

    creditors = sorted(
        (row for row in rows if row.balance > 0),
        key=lambda row: row.balance,
        reverse=True,
    )
    debtors = sorted(
        (row for row in rows if row.balance < 0),
        key=lambda row: row.balance,
    )

    return HouseholdSummary(
        display_unit=display_unit,
        total_expenses=round_to_unit(total_expenses, display_unit),
        creditors=creditors,
        debtors=debtors,
        total_owed=sum(row.balance for row in creditors),
        total_owing=sum(-row.balance for row in debtors),
    )
