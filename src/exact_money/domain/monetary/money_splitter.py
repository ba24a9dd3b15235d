from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from exact_money.domain.monetary.errors import AllProportionsZeroError, NoScaleSetError
from exact_money.domain.monetary.money import Money
from exact_money.utils.decimal_tools import divide_rounded, exact_add, exact_multiply, exact_subtract, rescale
from exact_money.utils.numeric_tools import DecimalLike, as_decimal, as_decimal_list

if TYPE_CHECKING:
    from exact_money.domain.monetary.money_calc import MoneyCalc

logger = logging.getLogger(__name__)

_ZERO = Decimal(0)


class MoneySplitter:
    """Splits the amount of a calculation into parts that sum exactly to that amount.

    Without proportions the amount is split evenly. With proportions (relative weights; parts
    without a proportion weigh zero) the amount is split by weight. Every part is rounded to the
    scale of the calculation, and the part at index 0 absorbs all rounding residue.

    A successful split zeroes the calculation: the money has been distributed.

    Example:
        ```python
        parts = bill.calc(2).splitter().set_proportions(1, 2, 2).split()
        ```
    """

    __slots__ = ("_calc", "_proportions", "_parts")

    def __init__(self, calc: MoneyCalc):
        """Initialize a splitter for $calc; usually obtained via `MoneyCalc.splitter`.

        Raises:
            NoScaleSetError: If $calc has no scale.
        """
        if calc.scale is None:
            raise NoScaleSetError("splitter")

        self._calc = calc
        self._proportions: list[Decimal | None] = []
        self._parts = 0

    # region Configuration

    @property
    def parts(self) -> int:
        """Number of parts into which the amount will be split."""
        return self._parts

    @property
    def proportions(self) -> list[Decimal | None]:
        """Proportion of each part (None where unspecified), for the current number of parts."""
        return [self._proportion_at(index) for index in range(self._parts)]

    def set_parts(self, parts: int) -> MoneySplitter:
        """Set the number of parts into which the amount will be split.

        Args:
            parts: Non-negative number of parts.

        Returns:
            MoneySplitter: This splitter.

        Raises:
            ValueError: If $parts is negative.
        """
        if isinstance(parts, bool) or not isinstance(parts, int):
            raise TypeError(f"$parts must be an int, but provided value is: {parts!r}")
        if parts < 0:
            raise ValueError(f"Cannot call `set_parts` because $parts ({parts}) is negative")

        self._parts = parts
        return self

    def set_proportions(self, *proportions: DecimalLike) -> MoneySplitter:
        """Set the relative proportions of the first parts.

        If more proportions are given than there are parts, the number of parts grows to match.

        Args:
            *proportions: Non-negative Decimal-like weights.

        Returns:
            MoneySplitter: This splitter.

        Raises:
            ValueError: If any proportion is None or negative.
        """
        for index, proportion in enumerate(proportions):
            # Raise: use `set_proportion` to clear a single proportion
            if proportion is None:
                raise ValueError(f"Cannot call `set_proportions` because proportion at $index {index} is None")

        values = as_decimal_list(proportions)
        for value in values:
            self._check_non_negative(value, "set_proportions")

        for index, value in enumerate(values):
            self._store_proportion(index, value)
        return self._grow_parts(len(values))

    def set_proportion(self, index: int, proportion: DecimalLike | None) -> MoneySplitter:
        """Set the proportion of a single part; None leaves it unspecified.

        If $index is beyond the current number of parts, the number of parts grows to include it.

        Args:
            index: Non-negative index of the part.
            proportion: Non-negative Decimal-like weight, or None.

        Returns:
            MoneySplitter: This splitter.

        Raises:
            ValueError: If $index or $proportion is negative.
        """
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"$index must be an int, but provided value is: {index!r}")
        if index < 0:
            raise ValueError(f"Cannot call `set_proportion` because $index ({index}) is negative")

        value = None if proportion is None else self._check_non_negative(as_decimal(proportion), "set_proportion")
        self._store_proportion(index, value)
        return self._grow_parts(index + 1)

    # endregion

    # region Splitting

    def split(self) -> list[Money]:
        """Split the amount of the calculation into parts.

        With zero parts nothing changes and an empty list is returned. Otherwise the amount of the
        calculation is zeroed and distributed over the parts.

        Returns:
            list[Money]: One money per part; the parts sum exactly to the original amount.

        Raises:
            AllProportionsZeroError: If proportions are set but all of them are zero.
        """
        if self._parts == 0:
            return []

        if self._is_proportioned():
            monies = self._split_proportioned()
            mode = "proportioned"
        else:
            monies = self._split_free()
            mode = "free"

        logger.debug(f"Split {self._calc.amount} {self._calc.money_type} into {self._parts} {mode} part(s) at $scale {self._calc.scale}")
        self._calc.zero()
        return monies

    def _split_free(self) -> list[Money]:
        calc = self._calc
        monies: list[Money | None] = [None] * self._parts

        # Each step shares the remainder evenly among the parts not yet assigned
        remainder = calc.amount
        for index in range(self._parts - 1, 0, -1):
            share = divide_rounded(remainder, Decimal(index + 1), calc.scale, calc.rounding)
            monies[index] = Money(calc.money_type, share)
            remainder = exact_subtract(remainder, share)

        monies[0] = Money(calc.money_type, remainder)
        return monies

    def _split_proportioned(self) -> list[Money]:
        calc = self._calc

        # trivial case
        if self._parts == 1:
            if self._effective_proportion(0).is_zero():
                raise AllProportionsZeroError(self._parts)
            return [calc.money()]

        # denominators[i] is the total weight of parts 0..i
        denominators: list[Decimal] = []
        total = _ZERO
        for index in range(self._parts):
            total = exact_add(total, self._effective_proportion(index))
            denominators.append(total)

        # Raise: there is no weight to distribute by
        if total.is_zero():
            raise AllProportionsZeroError(self._parts)

        monies: list[Money | None] = [None] * self._parts
        remainder = calc.amount
        none: Money | None = None
        for index in range(self._parts - 1, 0, -1):
            proportion = self._effective_proportion(index)
            if proportion.is_zero():
                if none is None:
                    none = Money(calc.money_type, rescale(_ZERO, calc.scale, calc.rounding))
                monies[index] = none
                continue

            share = divide_rounded(exact_multiply(remainder, proportion), denominators[index], calc.scale, calc.rounding)
            monies[index] = Money(calc.money_type, share)
            remainder = exact_subtract(remainder, share)

        monies[0] = Money(calc.money_type, remainder)
        return monies

    # endregion

    # region Utilities

    def _is_proportioned(self) -> bool:
        return any(proportion is not None for proportion in self._proportions[: self._parts])

    def _proportion_at(self, index: int) -> Decimal | None:
        if index < len(self._proportions):
            return self._proportions[index]
        return None

    def _effective_proportion(self, index: int) -> Decimal:
        proportion = self._proportion_at(index)
        return _ZERO if proportion is None else proportion

    def _store_proportion(self, index: int, proportion: Decimal | None) -> None:
        while len(self._proportions) <= index:
            self._proportions.append(None)
        self._proportions[index] = proportion

    def _grow_parts(self, size: int) -> MoneySplitter:
        if size > self._parts:
            self._parts = size
        return self

    @staticmethod
    def _check_non_negative(proportion: Decimal, operation: str) -> Decimal:
        # Raise: weights cannot be negative
        if proportion.is_signed() and not proportion.is_zero():
            raise ValueError(f"Cannot call `{operation}` because $proportion ({proportion}) is negative")
        return proportion

    # endregion
