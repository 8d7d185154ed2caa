"""Balance computation and debt settlement package."""

from housesplit.settlement.balances import compute_balances, compute_exact_balances
from housesplit.settlement.planner import apply_transactions, plan_settlement
from housesplit.settlement.rounding import round_to_unit
from housesplit.settlement.sharing import default_shared_with, resolve_shared_with
from housesplit.settlement.summary import summarize_household

__all__ = [
    "apply_transactions",
    "compute_balances",
    "compute_exact_balances",
    "default_shared_with",
    "plan_settlement",
    "resolve_shared_with",
    "round_to_unit",
    "summarize_household",
]
