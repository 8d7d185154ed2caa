"""
Core Data Models for housesplit

These models define the strict schemas for everything the balance and
settlement core consumes or produces. They are designed to:
1. Enforce type safety at the boundary
2. Provide clear validation error messages
3. Be serializable for the caller's API or UI layer

DESIGN DECISION: Amounts are integers in the smallest currency unit.
A float amount with a fractional part is rejected rather than rounded,
so the caller decides how to get to whole units.
"""

from datetime import date
from typing import Optional
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


# =============================================================================
# HOUSEHOLD MODELS
# =============================================================================

class Member(BaseModel):
    """
    A household member.

    Immutable for the core. Everything else refers to a member by id only.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque member identifier"
    )
    name: str = Field(
        default="",
        max_length=200,
        description="Display name"
    )
    room: Optional[str] = Field(
        default=None,
        max_length=100,
        description="Room the member belongs to"
    )


class Expense(BaseModel):
    """
    A shared expense.

    The cost is split evenly between the members in `shared_with`.
    An empty `shared_with` is a degenerate expense: it only credits the payer.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique expense ID"
    )
    amount: int = Field(
        ...,
        ge=0,
        description="Amount in the smallest currency unit"
    )
    paid_by: str = Field(
        ...,
        min_length=1,
        description="Member id of the payer"
    )
    shared_with: list[str] = Field(
        default_factory=list,
        description="Member ids the cost is divided between"
    )

    # Not used in computation
    description: str = Field(
        default="",
        max_length=500,
    )
    expense_date: Optional[date] = None

    @field_validator('shared_with')
    @classmethod
    def dedupe_shared_with(cls, v: list[str]) -> list[str]:
        """Beneficiaries are a set; keep the first occurrence of each id."""
        seen = set()
        unique = []
        for member_id in v:
            if member_id not in seen:
                seen.add(member_id)
                unique.append(member_id)
        return unique

    @property
    def is_degenerate(self) -> bool:
        """True when nobody shares the cost."""
        return not self.shared_with


# =============================================================================
# SETTLEMENT MODELS
# =============================================================================

class SettlementTransaction(BaseModel):
    """
    A proposed payment from a debtor to a creditor.

    Serializes as {"from": ..., "to": ..., "amount": ...}.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    from_member: str = Field(
        ...,
        alias="from",
        description="Member id of the debtor"
    )
    to_member: str = Field(
        ...,
        alias="to",
        description="Member id of the creditor"
    )
    amount: int = Field(
        ...,
        gt=0,
        description="Amount to transfer"
    )

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class MemberBalance(BaseModel):
    """One row of the household summary."""

    member_id: str
    name: str
    room: Optional[str] = None
    balance: int


class HouseholdSummary(BaseModel):
    """
    Summary of a household's spending.

    All amounts are rounded to `display_unit`.
    """

    display_unit: int = Field(ge=1)
    total_expenses: int = Field(ge=0)
    creditors: list[MemberBalance] = Field(
        default_factory=list,
        description="Members owed money, largest first"
    )
    debtors: list[MemberBalance] = Field(
        default_factory=list,
        description="Members owing money, most negative first"
    )
    total_owed: int = Field(
        ge=0,
        description="Sum of positive balances"
    )
    total_owing: int = Field(
        ge=0,
        description="Sum of absolute negative balances"
    )


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single problem found in the ledger input."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'unknown_payer', 'degenerate_expense')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    member_id: Optional[str] = None
    expense_id: Optional[UUID] = None
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """Result of validating members and expenses together."""

    member_count: int = Field(ge=0)
    expense_count: int = Field(ge=0)
    is_valid: bool = Field(
        ...,
        description="No error-level issues were found"
    )
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> list[str]:
        return [i.message for i in self.issues if i.severity == "warning"]


# =============================================================================
# FLOW OUTPUT
# =============================================================================

class SettlementReport(BaseModel):
    """Everything the settlement flow produces for one run."""

    correlation_id: UUID
    rounding_unit: int = Field(ge=1)
    balances: dict[str, int]
    transactions: list[SettlementTransaction] = Field(default_factory=list)
    unsettled: dict[str, int] = Field(
        default_factory=dict,
        description="Members left with a non-zero balance after settlement"
    )
    validation: ValidationResult
    summary: HouseholdSummary

    @property
    def is_fully_settled(self) -> bool:
        return not self.unsettled
