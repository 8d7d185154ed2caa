"""
Settlement Planner

Turns balances into a short list of payments using the standard greedy
largest-match heuristic:

1. Split members into debtors (balance < 0) and creditors (balance > 0)
2. Most negative debtor first, most positive creditor first
3. Match the current pair for the smaller of the two amounts
4. Move on from whoever is within one rounding unit of zero

Not provably minimal, but deterministic: the same members in the same
order with the same balances always give the same transactions.
"""

from dataclasses import dataclass
from fractions import Fraction
from typing import Iterable, Mapping

from housesplit.models.ledger import Member, SettlementTransaction
from housesplit.settlement.rounding import Amount, round_to_unit, to_fraction
from housesplit.validation import InvalidReferenceError


@dataclass
class _Position:
    """Running balance of one member during the walk."""
    member_id: str
    balance: Fraction


def _positions(
    members: list[Member],
    balances: Mapping[str, Amount],
) -> list[_Position]:
    member_ids = {member.id for member in members}
    for member_id in balances:
        if member_id not in member_ids:
            raise InvalidReferenceError(
                f"Balance given for '{member_id}', who is not a household member",
                field="balances",
                member_id=member_id,
            )

    return [
        _Position(member.id, to_fraction(balances.get(member.id, 0)))
        for member in members
    ]


def plan_settlement(
    members: list[Member],
    balances: Mapping[str, Amount],
    rounding_unit: int = 1,
) -> list[SettlementTransaction]:
    """
    Payments that bring every balance to within one rounding unit of zero.

    Members missing from balances count as zero. Whatever cannot be matched
    (a creditor with no debtors left, or rounding drift) stays unsettled.

    Raises:
        InvalidReferenceError: If balances names someone who is not a member
    """
    positions = _positions(members, balances)

    # sorted() is stable, so equal balances keep member order
    debtors = sorted(
        (p for p in positions if p.balance < 0),
        key=lambda p: p.balance,
    )
    creditors = sorted(
        (p for p in positions if p.balance > 0),
        key=lambda p: p.balance,
        reverse=True,
    )

    transactions = []
    i = 0
    j = 0

    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]

        amount = min(abs(debtor.balance), creditor.balance)

        rounded = round_to_unit(amount, rounding_unit)
        if rounded > 0:
            transactions.append(SettlementTransaction(
                from_member=debtor.member_id,
                to_member=creditor.member_id,
                amount=rounded,
            ))

        debtor.balance += amount
        creditor.balance -= amount

        if abs(debtor.balance) < rounding_unit:
            i += 1
        if abs(creditor.balance) < rounding_unit:
            j += 1

    return transactions


def apply_transactions(
    balances: Mapping[str, int],
    transactions: Iterable[SettlementTransaction],
) -> dict[str, int]:
    """
    Balances after every transaction has been paid.

    The payer's balance rises by the amount and the receiver's falls by it.
    """
    result = dict(balances)
    for transaction in transactions:
        result[transaction.from_member] = result.get(transaction.from_member, 0) + transaction.amount
        result[transaction.to_member] = result.get(transaction.to_member, 0) - transaction.amount
    return result
