from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import TYPE_CHECKING

from exact_money.domain.monetary.errors import IncompatibleCurrencyError
from exact_money.domain.monetary.money_type import MoneyType
from exact_money.utils.decimal_tools import rescale, validate_rounding
from exact_money.utils.numeric_tools import DecimalLike, as_decimal

if TYPE_CHECKING:
    from exact_money.domain.monetary.money_calc import MoneyCalc


class Money:
    """Represents a monetary amount of a `MoneyType`.

    Amounts are stored as `Decimal` values at arbitrary precision; only formatting and
    `rounded_amount` reduce them to the number of decimal places of the type. Instances are
    immutable and safe to share between threads.
    """

    DEFAULT_ROUNDING = ROUND_HALF_UP

    __slots__ = ("_money_type", "_amount", "_rounded_amount")

    def __init__(self, money_type: MoneyType, amount: DecimalLike):
        """Initialize Money with type and amount.

        Args:
            money_type (MoneyType): Type of the money.
            amount: Amount in large denominations (e.g. dollars), as a Decimal-like scalar.

        Raises:
            TypeError: If $money_type is not a MoneyType instance.
            ValueError: If $amount cannot be converted to Decimal.
        """
        # Raise: money_type must be an instance of MoneyType
        if not isinstance(money_type, MoneyType):
            raise TypeError(f"$money_type must be a MoneyType instance, but provided value is: {money_type!r}")

        self._money_type = money_type
        self._amount = as_decimal(amount)
        self._rounded_amount: Decimal | None = None

    @property
    def money_type(self) -> MoneyType:
        """Get the type of this money."""
        return self._money_type

    @property
    def amount(self) -> Decimal:
        """Get the amount at full precision."""
        return self._amount

    def rounded_amount(self, rounding: str | None = None) -> Decimal:
        """The amount rounded to the number of decimal places of the money type.

        Args:
            rounding: Rounding mode to apply; None for `DEFAULT_ROUNDING`.

        Returns:
            Decimal: The amount rounded to the nearest small denomination.
        """
        if rounding is None or rounding == self.DEFAULT_ROUNDING:
            if self._rounded_amount is None:
                self._rounded_amount = rescale(self._amount, self._money_type.places, self.DEFAULT_ROUNDING)
            return self._rounded_amount

        return rescale(self._amount, self._money_type.places, validate_rounding(rounding))

    @property
    def is_zero(self) -> bool:
        """True iff the amount is zero."""
        return self._amount.is_zero()

    @property
    def sign(self) -> int:
        """-1 if the amount is negative, 1 if it is positive and 0 if it is zero."""
        if self._amount.is_zero():
            return 0
        return -1 if self._amount.is_signed() else 1

    def money(self) -> Money:
        """Money is its own money source."""
        return self

    def calc(self, scale: int | None = None, rounding: str | None = None) -> MoneyCalc:
        """Open a calculation whose initial type and amount match this money.

        Args:
            scale: Number of decimal places kept after each step; None or negative for
                arbitrary precision.
            rounding: Rounding mode used when $scale is set; None for `ROUND_HALF_UP`.

        Returns:
            MoneyCalc: A new calculation.
        """
        from exact_money.domain.monetary.money_calc import MoneyCalc

        return MoneyCalc(self._money_type, self._amount, scale, rounding)

    def compare(self, other: Money) -> int:
        """Compare amounts numerically, ignoring their representation (1.0 equals 1.00).

        Args:
            other: Money to compare with.

        Returns:
            int: Negative, zero or positive as this amount is less than, equal to or greater
            than the amount of $other.

        Raises:
            IncompatibleCurrencyError: If both types specify different currencies.
        """
        if not isinstance(other, Money):
            raise TypeError(f"$other must be a Money instance, but provided value is: {other!r}")

        currency = self._money_type.currency
        other_currency = other._money_type.currency
        if currency is not None and other_currency is not None and currency != other_currency:
            raise IncompatibleCurrencyError(currency, other_currency)

        if self._amount < other._amount:
            return -1
        if self._amount > other._amount:
            return 1
        return 0

    # Comparison operators (compatible currencies required)
    def __lt__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.compare(other) >= 0

    def __eq__(self, other) -> bool:
        """Equal iff types are equal and amounts are numerically equal."""
        if self is other:
            return True
        if not isinstance(other, Money):
            return False
        return self._money_type == other._money_type and self._amount == other._amount

    def __hash__(self) -> int:
        """Hash based on type and numeric amount."""
        return hash((self._money_type, self._amount))

    def __str__(self) -> str:
        """Return text formatted for the locale of the type, like '$1,000.50'."""
        return self._money_type.format(self)

    def __repr__(self) -> str:
        """Return string like 'Money(1000.50, en_US USD)'."""
        return f"{self.__class__.__name__}({self._amount}, {self._money_type})"
