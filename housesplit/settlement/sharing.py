"""
Beneficiary defaults.

When nobody is selected to share an expense, the household convention is
that everyone in the payer's room shares it. The balance calculator never
applies this itself; callers resolve expenses before handing them over.
"""

from housesplit.models.ledger import Expense, Member
from housesplit.validation import InvalidReferenceError


def default_shared_with(members: list[Member], payer_id: str) -> list[str]:
    """Ids of every member in the payer's room, in member order."""
    payer = next((m for m in members if m.id == payer_id), None)
    if payer is None:
        raise InvalidReferenceError(
            f"Payer '{payer_id}' is not a household member",
            field="paid_by",
            member_id=payer_id,
        )
    return [m.id for m in members if m.room == payer.room]


def resolve_shared_with(members: list[Member], expense: Expense) -> Expense:
    """Copy of expense with the room default applied if it has no beneficiaries."""
    if not expense.is_degenerate:
        return expense
    return expense.model_copy(
        update={"shared_with": default_shared_with(members, expense.paid_by)}
    )
