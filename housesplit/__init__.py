"""
housesplit - Shared Household Expense Settlement

Computes each household member's net balance from shared expenses
and proposes a short list of payments that settles every debt.

DESIGN PRINCIPLES:
1. Pure functions: no I/O, no storage, no state between calls
2. Fail early, fail visibly on malformed input
3. One rounding policy, applied explicitly
4. Every settlement run can be audited
5. Persistence, authorization and formatting belong to the caller
"""

from housesplit.models import (
    Expense,
    HouseholdSummary,
    Member,
    MemberBalance,
    SettlementReport,
    SettlementTransaction,
    ValidationIssue,
    ValidationResult,
)
from housesplit.orchestrator import SettlementFlow
from housesplit.settlement import (
    apply_transactions,
    compute_balances,
    compute_exact_balances,
    default_shared_with,
    plan_settlement,
    resolve_shared_with,
    round_to_unit,
    summarize_household,
)
from housesplit.validation import (
    DuplicateMemberError,
    InvalidReferenceError,
    LedgerValidationError,
    LedgerValidator,
)

__version__ = "1.0.0"

__all__ = [
    # Core
    "compute_balances",
    "compute_exact_balances",
    "plan_settlement",
    "apply_transactions",
    "round_to_unit",
    "default_shared_with",
    "resolve_shared_with",
    "summarize_household",
    "SettlementFlow",
    # Models
    "Expense",
    "HouseholdSummary",
    "Member",
    "MemberBalance",
    "SettlementReport",
    "SettlementTransaction",
    "ValidationIssue",
    "ValidationResult",
    # Validation
    "DuplicateMemberError",
    "InvalidReferenceError",
    "LedgerValidationError",
    "LedgerValidator",
]
