"""Exceptions raised by monetary types, values, calculations and splitters."""

from __future__ import annotations

from decimal import Decimal
from typing import Any


class IncompatibleCurrencyError(ValueError):
    """Raised when two monetary types specify different currencies."""

    def __init__(self, first: Any, second: Any):
        self.first = first
        self.second = second
        super().__init__(f"Incompatible currencies: {first} and {second}")


class IncompatibleLocaleError(ValueError):
    """Raised when two monetary types specify different locales that are not prefix related."""

    def __init__(self, first: Any, second: Any):
        self.first = first
        self.second = second
        super().__init__(f"Incompatible locales: {first} and {second}")


class NoScaleSetError(ValueError):
    """Raised when an operation needs a fixed scale but the calculation has none."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cannot call `{operation}` because the calculation has no scale set")


class AllProportionsZeroError(ValueError):
    """Raised when a proportioned split is requested but every proportion is zero."""

    def __init__(self, parts: int):
        self.parts = parts
        super().__init__(f"Cannot call `split` because all proportions of $parts ({parts}) are zero")


class InexactDivisionError(ArithmeticError):
    """Raised when an unscaled division does not terminate in finitely many decimal digits."""

    def __init__(self, dividend: Decimal, divisor: Decimal):
        self.dividend = dividend
        self.divisor = divisor
        super().__init__(f"Division of {dividend} by {divisor} has no exact decimal representation")


class MoneyParseError(ValueError):
    """Raised when text does not match the currency format of a monetary type."""

    def __init__(self, text: str, locale: Any, reason: str | None = None):
        self.text = text
        self.locale = locale
        self.reason = reason

        message = f"Cannot parse '{text}' as money for locale {locale}"
        if reason:
            message += f" - {reason}"

        super().__init__(message)
