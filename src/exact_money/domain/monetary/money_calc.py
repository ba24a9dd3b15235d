from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

from exact_money.domain.monetary.errors import NoScaleSetError
from exact_money.domain.monetary.money import Money
from exact_money.domain.monetary.money_source import MoneySource
from exact_money.domain.monetary.money_splitter import MoneySplitter
from exact_money.domain.monetary.money_type import MoneyType
from exact_money.utils.decimal_tools import (
    decimal_places,
    divide_exact,
    divide_rounded,
    exact_add,
    exact_multiply,
    exact_subtract,
    rescale,
    validate_rounding,
)
from exact_money.utils.numeric_tools import DecimalLike, as_decimal


class MoneyCalc:
    """Accumulates interim values of a calculation on monetary amounts.

    Operations mutate the calculation and return it, so that calls can be chained:

        ```python
        total = price.calc(2).multiply(3).add(shipping).subtract(discount).money()
        ```

    Each operation that consumes another monetary amount reconciles its type with the type of the
    calculation (see `MoneyType.combine`); adding dollars to pounds sterling raises.

    When a $scale is set, the amount carries exactly that many decimal places after every
    operation, rounded with $rounding. The one exception is `multiply` by a factor that has
    fractional digits, which keeps the exact product for that step. Without a scale, the
    calculation is exact at arbitrary precision.

    NOTE: Instances are mutable and not safe for concurrent use; confine each calculation to one
    thread or guard it externally.
    """

    DEFAULT_ROUNDING = ROUND_HALF_UP

    __slots__ = ("_money_type", "_amount", "_scale", "_rounding")

    def __init__(
        self,
        money_type: MoneyType,
        amount: DecimalLike,
        scale: int | None = None,
        rounding: str | None = None,
    ) -> None:
        """Initialize a calculation.

        Usually obtained via `Money.calc` or `MoneyType.calc` instead.

        Args:
            money_type: Initial type of the calculation.
            amount: Initial amount; rescaled immediately when $scale is set.
            scale: Number of decimal places kept after each step; None or negative for
                arbitrary precision.
            rounding: Rounding mode used when $scale is set; None for `ROUND_HALF_UP`.

        Raises:
            TypeError: If $money_type is not a MoneyType or $scale is not an int.
            ValueError: If $amount is None or $rounding is unknown.
        """
        # Raise: money_type must be an instance of MoneyType
        if not isinstance(money_type, MoneyType):
            raise TypeError(f"$money_type must be a MoneyType instance, but provided value is: {money_type!r}")

        # Raise: amount is required
        if amount is None:
            raise ValueError("Cannot create `MoneyCalc` because $amount is None")

        # Raise: scale must be an int (or None)
        if scale is not None and (isinstance(scale, bool) or not isinstance(scale, int)):
            raise TypeError(f"$scale must be an int or None, but provided value is: {scale!r}")

        self._money_type = money_type
        self._scale = scale if scale is not None and scale >= 0 else None
        self._rounding = self.DEFAULT_ROUNDING if rounding is None else validate_rounding(rounding)
        self._amount = self._scaled(as_decimal(amount))

    # region Properties

    @property
    def money_type(self) -> MoneyType:
        """Get the current type of the calculation."""
        return self._money_type

    @money_type.setter
    def money_type(self, money_type: MoneyType) -> None:
        """Directly change the type of the calculation."""
        if not isinstance(money_type, MoneyType):
            raise TypeError(f"$money_type must be a MoneyType instance, but provided value is: {money_type!r}")
        self._money_type = money_type

    @property
    def amount(self) -> Decimal:
        """Get the amount computed so far."""
        return self._amount

    @amount.setter
    def amount(self, amount: DecimalLike) -> None:
        """Directly change the amount of the calculation; rescaled when a scale is set."""
        if amount is None:
            raise ValueError("Cannot set $amount because it is None")
        self._amount = self._scaled(as_decimal(amount))

    @property
    def scale(self) -> int | None:
        """Number of decimal places kept after each step, or None for arbitrary precision."""
        return self._scale

    @property
    def rounding(self) -> str:
        return self._rounding

    # endregion

    # region Results

    def money(self) -> Money:
        """The current value of the calculation as immutable money.

        The calculation may continue to be used afterwards; each call returns the value at the
        time of the call.
        """
        return Money(self._money_type, self._amount)

    def calc(self, scale: int | None = None, rounding: str | None = None) -> MoneyCalc:
        """Open a new, independent calculation starting from the current type and amount."""
        return MoneyCalc(self._money_type, self._amount, scale, rounding)

    def clone(self) -> MoneyCalc:
        """Independent copy with the same type, amount, scale and rounding."""
        return MoneyCalc(self._money_type, self._amount, self._scale, self._rounding)

    def splitter(self) -> MoneySplitter:
        """Obtain a splitter that distributes the amount of this calculation into parts.

        Raises:
            NoScaleSetError: If the calculation has no scale.
        """
        if self._scale is None:
            raise NoScaleSetError("splitter")
        return MoneySplitter(self)

    # endregion

    # region Operations

    def add(self, *sources: MoneySource) -> MoneyCalc:
        """Add monetary amounts to this calculation.

        Either all amounts are added or, if any type cannot be reconciled, none is.

        Args:
            *sources: Money, calculations or types (zero) to add.

        Returns:
            MoneyCalc: This calculation.

        Raises:
            IncompatibleCurrencyError: If a currency cannot be reconciled.
            IncompatibleLocaleError: If a locale cannot be reconciled.
        """
        money_type, amount = self._money_type, self._amount
        for money in self._monies_of(sources, "add"):
            money_type = money_type.combine(money.money_type)
            amount = exact_add(amount, self._scaled(money.amount))

        self._money_type, self._amount = money_type, amount
        return self

    def subtract(self, *sources: MoneySource) -> MoneyCalc:
        """Subtract monetary amounts from this calculation.

        Either all amounts are subtracted or, if any type cannot be reconciled, none is.

        Args:
            *sources: Money, calculations or types (zero) to subtract.

        Returns:
            MoneyCalc: This calculation.

        Raises:
            IncompatibleCurrencyError: If a currency cannot be reconciled.
            IncompatibleLocaleError: If a locale cannot be reconciled.
        """
        money_type, amount = self._money_type, self._amount
        for money in self._monies_of(sources, "subtract"):
            money_type = money_type.combine(money.money_type)
            amount = exact_subtract(amount, self._scaled(money.amount))

        self._money_type, self._amount = money_type, amount
        return self

    def max(self, source: MoneySource) -> MoneyCalc:
        """Keep the greater of the current amount and the amount of $source."""
        (money,) = self._monies_of((source,), "max")
        money_type = self._money_type.combine(money.money_type)
        other = self._scaled(money.amount)

        self._money_type = money_type
        if other > self._amount:
            self._amount = other
        return self

    def min(self, source: MoneySource) -> MoneyCalc:
        """Keep the lesser of the current amount and the amount of $source."""
        (money,) = self._monies_of((source,), "min")
        money_type = self._money_type.combine(money.money_type)
        other = self._scaled(money.amount)

        self._money_type = money_type
        if other < self._amount:
            self._amount = other
        return self

    def multiply(self, factor: DecimalLike) -> MoneyCalc:
        """Multiply the current amount by $factor.

        The scale is re-applied only when $factor has no fractional digits; for other factors the
        exact product is kept for this step.
        """
        factor = as_decimal(factor)
        product = exact_multiply(self._amount, factor)
        self._amount = self._scaled(product) if decimal_places(factor) <= 0 else product
        return self

    def divide(self, divisor: DecimalLike) -> MoneyCalc:
        """Divide the current amount by $divisor.

        Raises:
            ZeroDivisionError: If $divisor is zero.
            InexactDivisionError: If no scale is set and the quotient does not terminate.
        """
        divisor = as_decimal(divisor)
        if self._scale is None:
            self._amount = divide_exact(self._amount, divisor)
        else:
            self._amount = divide_rounded(self._amount, divisor, self._scale, self._rounding)
        return self

    def abs(self) -> MoneyCalc:
        """Replace the current amount with its absolute value."""
        self._amount = self._amount.copy_abs()
        return self

    def negate(self) -> MoneyCalc:
        """Negate the current amount."""
        self._amount = self._amount.copy_negate()
        return self

    def zero(self) -> MoneyCalc:
        """Reset the amount to zero at the current scale, keeping the type."""
        self._amount = self._scaled(Decimal(0))
        return self

    # endregion

    # region Utilities

    def _scaled(self, value: Decimal) -> Decimal:
        if self._scale is None:
            return value
        return rescale(value, self._scale, self._rounding)

    @staticmethod
    def _monies_of(sources: tuple[MoneySource, ...], operation: str) -> list[Money]:
        monies = []
        for source in sources:
            # Raise: only money sources can take part in a calculation
            if not isinstance(source, MoneySource):
                raise TypeError(f"Cannot call `{operation}` because $source ({source!r}) is not a MoneySource")
            monies.append(source.money())
        return monies

    # endregion

    def __eq__(self, other) -> bool:
        if self is other:
            return True
        if not isinstance(other, MoneyCalc):
            return False
        return (
            self._money_type == other._money_type
            and self._amount == other._amount
            and self._scale == other._scale
            and self._rounding == other._rounding
        )

    __hash__ = None

    def __str__(self) -> str:
        """Return the current value formatted for the locale of the type."""
        return str(self.money())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._amount}, {self._money_type}, scale={self._scale}, rounding={self._rounding})"
