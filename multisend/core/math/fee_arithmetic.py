"""
Fee Arithmetic — Exact Rational Fee Primitives

All fee math runs on fractions.Fraction, never on floats:
- Exact conversion of rates (int, str, Decimal, Fraction, float via str)
- Rounding of fractional fee amounts to whole units of a denom
- Proportional apportionment of an aggregate fee across senders
- Parameter validation

CRITICAL INVARIANTS:
1. No floating-point value takes part in a fee computation
2. Fees are rounded away from zero to a whole unit, never truncated
   (FeeRounding.CEILING) unless HALF_UP is chosen explicitly
3. Apportionment over an empty base (whole == 0) yields 0
4. All operations are deterministic and reproducible across platforms

FORMULA:
    share = round(base * rate * part / whole)
"""

import math
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Final, Union

RateLike = Union[int, str, Decimal, Fraction, float]

# =============================================================================
# CONSTANTS
# =============================================================================

# Rate bounds (rates are fractions of the transferred amount)
RATE_MIN: Final[Fraction] = Fraction(0)
RATE_MAX: Final[Fraction] = Fraction(1)


# =============================================================================
# ROUNDING
# =============================================================================


class FeeRounding(str, Enum):
    """Rounding applied to fractional fee amounts."""

    CEILING = "ceiling"  # any remainder rounds up
    HALF_UP = "half_up"  # floor(x + 1/2)


def to_fraction(value: RateLike) -> Fraction:
    """
    Exact conversion of a rate or amount to Fraction.

    Args:
        value: int, str, Decimal, Fraction or float

    Returns:
        Fraction equal to the decimal value the caller wrote

    Raises:
        ValueError: If the value is NaN/Inf or not a number

    Examples:
        >>> to_fraction("0.08")
        Fraction(2, 25)
        >>> to_fraction(0.1)
        Fraction(1, 10)
        >>> to_fraction(Decimal("0.125"))
        Fraction(1, 8)
    """
    if isinstance(value, bool):
        raise ValueError(f"expected a number, got {value!r}")

    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"value must be finite, got {value}")
        # shortest repr, not the binary expansion
        return Fraction(str(value))

    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"value must be finite, got {value}")
        return Fraction(value)

    if isinstance(value, (int, Fraction)):
        return Fraction(value)

    if isinstance(value, str):
        try:
            return Fraction(value.strip())
        except ValueError:
            raise ValueError(f"not a number: {value!r}") from None

    raise ValueError(f"expected a number, got {type(value).__name__}")


def round_fee(value: Fraction, mode: FeeRounding = FeeRounding.CEILING) -> int:
    """
    Round a non-negative fractional fee to whole units.

    Args:
        value: Exact fee amount (>= 0)
        mode: CEILING (default) or HALF_UP

    Returns:
        Fee in whole units

    Raises:
        ValueError: If value is negative

    Examples:
        >>> round_fee(Fraction(9, 2))
        5
        >>> round_fee(Fraction(31, 10))
        4
        >>> round_fee(Fraction(31, 10), FeeRounding.HALF_UP)
        3
    """
    if value < 0:
        raise ValueError(f"fee must be non-negative, got {value}")

    if mode is FeeRounding.CEILING:
        return math.ceil(value)
    if mode is FeeRounding.HALF_UP:
        return math.floor(value + Fraction(1, 2))

    raise ValueError(f"unsupported rounding mode: {mode!r}")


# =============================================================================
# APPORTIONMENT
# =============================================================================


def proportional_share(
    base: int,
    rate: Fraction,
    part: int,
    whole: int,
    mode: FeeRounding = FeeRounding.CEILING,
) -> int:
    """
    Share of an aggregate fee owed by one contributor.

    The aggregate fee is base * rate; each contributor pays in proportion
    to part / whole and the result is rounded per contributor. Because of
    that rounding the shares may sum to slightly more than base * rate.

    Args:
        base: Amount the fee is charged on (e.g. total burn base of a denom)
        rate: Fee rate in [0, 1]
        part: Contribution of this sender
        whole: Sum of all contributions (0 means nobody contributes)

    Returns:
        Rounded share in whole units

    Examples:
        >>> proportional_share(75, Fraction(1, 10), 60, 150)
        3
        >>> proportional_share(75, Fraction(1, 10), 90, 150)
        5
    """
    validate_non_negative_amount(base, "base")
    validate_non_negative_amount(part, "part")
    validate_non_negative_amount(whole, "whole")
    validate_rate(rate, "rate")

    if whole == 0 or base == 0 or rate == 0:
        return 0

    if part > whole:
        raise ValueError(f"part {part} exceeds whole {whole}")

    return round_fee(Fraction(base) * rate * part / whole, mode)


# =============================================================================
# VALIDATION
# =============================================================================


def validate_rate(value: Fraction, name: str) -> None:
    """
    Validate that a rate lies in [0, 1].

    Raises:
        ValueError: If value < 0 or value > 1
    """
    if value < RATE_MIN or value > RATE_MAX:
        raise ValueError(f"{name} must be in [0, 1], got {value}")


def validate_non_negative_amount(value: int, name: str) -> None:
    """
    Validate that an amount is a non-negative integer.

    Raises:
        ValueError: If value is not an int or is negative
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {type(value).__name__}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
