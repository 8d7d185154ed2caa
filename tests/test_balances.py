"""Tests for rounding and the balance calculator."""

import pytest
from decimal import Decimal
from fractions import Fraction

from housesplit.models.ledger import Expense, Member
from housesplit.settlement import (
    compute_balances,
    compute_exact_balances,
    round_to_unit,
)
from housesplit.validation import (
    DuplicateMemberError,
    InvalidReferenceError,
    LedgerValidator,
)


def household(*ids, room="X"):
    return [Member(id=member_id, name=member_id, room=room) for member_id in ids]


class TestRoundToUnit:
    """Tests for the half-away-from-zero rounding policy."""

    def test_halves_round_away_from_zero(self):
        """Test both signs of an exact half."""
        assert round_to_unit(Fraction(5, 2)) == 3
        assert round_to_unit(Fraction(-5, 2)) == -3
        assert round_to_unit(Fraction(1, 2)) == 1
        assert round_to_unit(Fraction(-1, 2)) == -1

    def test_rounds_to_nearest(self):
        """Test values off the half point."""
        assert round_to_unit(Fraction(200, 3)) == 67
        assert round_to_unit(Fraction(-100, 3)) == -33

    def test_accepts_ints_and_decimals(self):
        """Test the accepted amount types."""
        assert round_to_unit(42) == 42
        assert round_to_unit(Decimal("12.5")) == 13
        assert round_to_unit(Decimal("-12.49")) == -12

    def test_rounds_to_larger_units(self):
        """Test rounding to thousands."""
        assert round_to_unit(1499, 1000) == 1000
        assert round_to_unit(1500, 1000) == 2000
        assert round_to_unit(-1500, 1000) == -2000
        assert round_to_unit(499, 1000) == 0

    def test_rejects_non_positive_unit(self):
        """Test that the unit must be positive."""
        with pytest.raises(ValueError):
            round_to_unit(10, 0)


class TestComputeBalances:
    """Tests for compute_balances."""

    def test_no_expenses_gives_zero_for_everyone(self):
        """Test that every member appears with zero balance."""
        balances = compute_balances(household("A", "B", "C"), [])
        assert balances == {"A": 0, "B": 0, "C": 0}

    def test_no_members_no_expenses(self):
        """Test the empty household."""
        assert compute_balances([], []) == {}

    def test_even_split_between_three(self):
        """Test A pays 300 shared by A, B and C."""
        expenses = [Expense(amount=300, paid_by="A", shared_with=["A", "B", "C"])]
        balances = compute_balances(household("A", "B", "C"), expenses)
        assert balances == {"A": 200, "B": -100, "C": -100}

    def test_degenerate_expense_only_credits_payer(self):
        """Test an expense with no beneficiaries."""
        expenses = [Expense(amount=100, paid_by="A", shared_with=[])]
        balances = compute_balances(household("A", "B", "C"), expenses)
        assert balances == {"A": 100, "B": 0, "C": 0}

    def test_opposite_expenses_cancel(self):
        """Test A and B paying 50 for each other."""
        expenses = [
            Expense(amount=50, paid_by="A", shared_with=["B"]),
            Expense(amount=50, paid_by="B", shared_with=["A"]),
        ]
        balances = compute_balances(household("A", "B"), expenses)
        assert balances == {"A": 0, "B": 0}

    def test_payer_outside_beneficiaries(self):
        """Test a payer who does not share the cost."""
        expenses = [Expense(amount=90, paid_by="A", shared_with=["B", "C"])]
        balances = compute_balances(household("A", "B", "C"), expenses)
        assert balances == {"A": 90, "B": -45, "C": -45}

    def test_result_follows_member_order(self):
        """Test that keys come out in member order."""
        expenses = [Expense(amount=30, paid_by="C", shared_with=["A", "B", "C"])]
        balances = compute_balances(household("C", "A", "B"), expenses)
        assert list(balances) == ["C", "A", "B"]

    def test_rounding_happens_after_accumulation(self):
        """Test that thirds accumulate exactly before rounding."""
        expenses = [
            Expense(amount=100, paid_by="A", shared_with=["A", "B", "C"]),
            Expense(amount=100, paid_by="A", shared_with=["A", "B", "C"]),
            Expense(amount=100, paid_by="A", shared_with=["A", "B", "C"]),
        ]
        balances = compute_balances(household("A", "B", "C"), expenses)
        assert balances == {"A": 200, "B": -100, "C": -100}

    def test_rounded_drift_is_bounded(self):
        """Test that thirds leave at most one unit per member of drift."""
        members = household("A", "B", "C")
        expenses = [Expense(amount=100, paid_by="A", shared_with=["A", "B", "C"])]
        balances = compute_balances(members, expenses)
        assert balances == {"A": 67, "B": -33, "C": -33}
        assert abs(sum(balances.values())) <= len(members)

    def test_half_shares_round_away_from_zero(self):
        """Test a one-unit expense shared by two."""
        expenses = [Expense(amount=1, paid_by="A", shared_with=["A", "B"])]
        balances = compute_balances(household("A", "B"), expenses)
        assert balances == {"A": 1, "B": -1}

    def test_custom_rounding_unit(self):
        """Test balances rounded to tens."""
        expenses = [Expense(amount=100, paid_by="A", shared_with=["A", "B", "C"])]
        balances = compute_balances(household("A", "B", "C"), expenses, rounding_unit=10)
        assert balances == {"A": 70, "B": -30, "C": -30}

    def test_unknown_payer_fails_fast(self):
        """Test that a payer outside the household is rejected."""
        expenses = [Expense(amount=100, paid_by="Z", shared_with=["A"])]
        with pytest.raises(InvalidReferenceError) as exc_info:
            compute_balances(household("A", "B"), expenses)
        assert exc_info.value.member_id == "Z"
        assert exc_info.value.field == "paid_by"

    def test_unknown_beneficiary_fails_fast(self):
        """Test that a beneficiary outside the household is rejected."""
        expense = Expense(amount=100, paid_by="A", shared_with=["A", "Z"])
        with pytest.raises(InvalidReferenceError) as exc_info:
            compute_balances(household("A", "B"), [expense])
        assert exc_info.value.member_id == "Z"
        assert exc_info.value.expense_id == expense.id

    def test_duplicate_member_fails_fast(self):
        """Test that member ids must be unique."""
        with pytest.raises(DuplicateMemberError):
            compute_balances(household("A", "A"), [])

    def test_accepts_any_iterable_of_expenses(self):
        """Test that a generator of expenses works."""
        expenses = (
            Expense(amount=amount, paid_by="A", shared_with=["A", "B"])
            for amount in (10, 20)
        )
        assert compute_balances(household("A", "B"), expenses) == {"A": 15, "B": -15}


class TestComputeExactBalances:
    """Tests for the unrounded balances."""

    def test_shares_are_exact_fractions(self):
        """Test that thirds are not truncated."""
        expenses = [Expense(amount=100, paid_by="A", shared_with=["A", "B", "C"])]
        balances = compute_exact_balances(household("A", "B", "C"), expenses)
        assert balances == {
            "A": Fraction(200, 3),
            "B": Fraction(-100, 3),
            "C": Fraction(-100, 3),
        }

    def test_conservation(self):
        """Test that exact balances sum to zero for shared expenses."""
        expenses = [
            Expense(amount=997, paid_by="A", shared_with=["A", "B", "C"]),
            Expense(amount=13, paid_by="B", shared_with=["C", "D"]),
            Expense(amount=1001, paid_by="D", shared_with=["A", "B", "C", "D"]),
            Expense(amount=7, paid_by="C", shared_with=["A", "B", "C", "D"]),
        ]
        balances = compute_exact_balances(household("A", "B", "C", "D"), expenses)
        assert sum(balances.values()) == 0

    def test_degenerate_expense_breaks_conservation_by_its_amount(self):
        """Test that an unshared expense shows up as a surplus."""
        expenses = [
            Expense(amount=300, paid_by="A", shared_with=["A", "B", "C"]),
            Expense(amount=100, paid_by="B"),
        ]
        balances = compute_exact_balances(household("A", "B", "C"), expenses)
        assert sum(balances.values()) == 100


class CountingValidator(LedgerValidator):
    def __init__(self):
        super().__init__()
        self.validate_calls = 0

    def validate(self, members, expenses):
        self.validate_calls += 1
        return super().validate(members, expenses)


class TestValidationHooks:
    """Tests for the validator and validation arguments."""

    def test_uses_injected_validator(self):
        """Test that the given validator checks the input."""
        validator = CountingValidator()
        expenses = [Expense(amount=10, paid_by="A", shared_with=["B"])]
        compute_balances(household("A", "B"), expenses, validator=validator)
        assert validator.validate_calls == 1

    def test_given_result_is_not_recomputed(self):
        """Test that an existing validation result is reused."""
        validator = CountingValidator()
        members = household("A", "B")
        expenses = [Expense(amount=10, paid_by="A", shared_with=["B"])]
        validation = validator.validate(members, expenses)

        balances = compute_balances(
            members, expenses, validator=validator, validation=validation
        )

        assert balances == {"A": 10, "B": -10}
        assert validator.validate_calls == 1

    def test_given_result_with_errors_raises(self):
        """Test that errors in a supplied result still fail fast."""
        members = household("A", "B")
        expenses = [Expense(amount=10, paid_by="Z", shared_with=["B"])]
        validation = LedgerValidator().validate(members, expenses)
        with pytest.raises(InvalidReferenceError):
            compute_exact_balances(members, expenses, validation=validation)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
