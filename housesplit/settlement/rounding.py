"""
Rounding policy.

Every rounding step in housesplit goes through round_to_unit:
half away from zero, to the nearest multiple of a positive integer unit.
"""

from decimal import ROUND_HALF_UP, Decimal, localcontext
from fractions import Fraction
from typing import Union

Amount = Union[int, Fraction, Decimal]

# Enough digits that no realistic amount loses precision before quantizing
_PRECISION = 60


def to_fraction(value: Amount) -> Fraction:
    """Exact rational value of an amount."""
    return Fraction(value)


def round_to_unit(value: Amount, unit: int = 1) -> int:
    """
    Round value to the nearest multiple of unit, halves away from zero.

    >>> round_to_unit(Fraction(5, 2))
    3
    >>> round_to_unit(Fraction(-5, 2))
    -3
    >>> round_to_unit(1499, 1000)
    1000
    """
    if unit < 1:
        raise ValueError(f"Rounding unit must be a positive integer, got {unit}")

    quotient = to_fraction(value) / unit
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        exact = Decimal(quotient.numerator) / Decimal(quotient.denominator)
        whole = exact.quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return int(whole) * unit
