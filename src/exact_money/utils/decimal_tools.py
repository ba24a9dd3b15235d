from __future__ import annotations

from decimal import (
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    Overflow,
    ROUND_05UP,
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
)
from fractions import Fraction

from exact_money.domain.monetary.errors import InexactDivisionError

ROUNDING_MODES = frozenset(
    {
        ROUND_05UP,
        ROUND_CEILING,
        ROUND_DOWN,
        ROUND_FLOOR,
        ROUND_HALF_DOWN,
        ROUND_HALF_EVEN,
        ROUND_HALF_UP,
        ROUND_UP,
    },
)

# Precision large enough that add, subtract, multiply and quantize never round
UNBOUNDED_CONTEXT = Context(
    prec=MAX_PREC,
    Emax=MAX_EMAX,
    Emin=MIN_EMIN,
    traps=[InvalidOperation, DivisionByZero, Overflow],
)


def validate_rounding(rounding: str) -> str:
    """Checks that $rounding names one of the `decimal` rounding modes.

    Args:
        rounding: A rounding mode such as `decimal.ROUND_HALF_UP`.

    Returns:
        The same rounding mode.

    Raises:
        ValueError: If $rounding is not a known rounding mode.
    """
    if rounding not in ROUNDING_MODES:
        raise ValueError(f"$rounding must be one of {sorted(ROUNDING_MODES)}, but provided value is: {rounding!r}")
    return rounding


def decimal_places(value: Decimal) -> int:
    """Number of digits after the decimal point in the representation of $value.

    `Decimal("1.50")` has 2 places, `Decimal("15")` has 0 and `Decimal("1.5E+2")` has -1.
    """
    return -value.as_tuple().exponent


def exact_add(left: Decimal, right: Decimal) -> Decimal:
    return UNBOUNDED_CONTEXT.add(left, right)


def exact_subtract(left: Decimal, right: Decimal) -> Decimal:
    return UNBOUNDED_CONTEXT.subtract(left, right)


def exact_multiply(left: Decimal, right: Decimal) -> Decimal:
    return UNBOUNDED_CONTEXT.multiply(left, right)


def rescale(value: Decimal, scale: int, rounding: str) -> Decimal:
    """Returns $value with exactly $scale digits after the decimal point.

    Digits are added when $value is shorter and removed using $rounding when it is longer.

    Args:
        value: Value to rescale.
        scale: Non-negative number of decimal places.
        rounding: Rounding mode applied when digits are dropped.

    Returns:
        Rescaled value.
    """
    return value.quantize(Decimal(1).scaleb(-scale), rounding=rounding, context=UNBOUNDED_CONTEXT)


def divide_rounded(dividend: Decimal, divisor: Decimal, scale: int, rounding: str) -> Decimal:
    """Divides and rounds the true quotient once, directly to $scale decimal places.

    The quotient is first computed with two guard digits beyond $scale using `ROUND_05UP`, which
    keeps enough information for the final rounding to match rounding of the exact quotient.

    Args:
        dividend: Number to divide.
        divisor: Non-zero number to divide by.
        scale: Non-negative number of decimal places of the result.
        rounding: Rounding mode for the result.

    Returns:
        The correctly rounded quotient with exactly $scale decimal places.

    Raises:
        ZeroDivisionError: If $divisor is zero.
    """
    # Raise: division by zero has no result
    if divisor.is_zero():
        raise ZeroDivisionError(f"Cannot call `divide_rounded` because $divisor ({divisor}) is zero")

    precision = max(dividend.adjusted() - divisor.adjusted() + scale + 3, 1)
    guard_context = Context(prec=precision, rounding=ROUND_05UP, Emax=MAX_EMAX, Emin=MIN_EMIN)
    quotient = guard_context.divide(dividend, divisor)
    return rescale(quotient, scale, rounding)


def divide_exact(dividend: Decimal, divisor: Decimal) -> Decimal:
    """Divides without any rounding.

    The result keeps at least as many decimal places as `dividend` has beyond `divisor`, and as
    many more as the exact quotient needs.

    Args:
        dividend: Number to divide.
        divisor: Non-zero number to divide by.

    Returns:
        The exact quotient.

    Raises:
        ZeroDivisionError: If $divisor is zero.
        InexactDivisionError: If the quotient has no finite decimal representation.
    """
    # Raise: division by zero has no result
    if divisor.is_zero():
        raise ZeroDivisionError(f"Cannot call `divide_exact` because $divisor ({divisor}) is zero")

    quotient = Fraction(dividend) / Fraction(divisor)

    # A fraction terminates in base 10 iff its reduced denominator has no prime factors besides 2 and 5
    denominator = quotient.denominator
    twos = fives = 0
    while denominator % 2 == 0:
        denominator //= 2
        twos += 1
    while denominator % 5 == 0:
        denominator //= 5
        fives += 1

    # Raise: e.g. 1 / 3 never terminates
    if denominator != 1:
        raise InexactDivisionError(dividend, divisor)

    places = max(twos, fives)
    coefficient = quotient.numerator * 10**places // quotient.denominator
    result = Decimal(coefficient).scaleb(-places, context=UNBOUNDED_CONTEXT)

    preferred_exponent = dividend.as_tuple().exponent - divisor.as_tuple().exponent
    if result.as_tuple().exponent > preferred_exponent:
        result = result.quantize(Decimal(1).scaleb(preferred_exponent), context=UNBOUNDED_CONTEXT)

    return result
