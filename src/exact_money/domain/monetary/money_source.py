from __future__ import annotations

from typing import Protocol, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    from exact_money.domain.monetary.money import Money


# region Interface


@runtime_checkable
class MoneySource(Protocol):
    """Anything that can supply a monetary amount to a calculation.

    Implemented by `Money` (the money itself), `MoneyCalc` (a snapshot of the current value) and
    `MoneyType` (zero of that type).
    """

    def money(self) -> Money:
        """Returns the monetary amount supplied by this source."""
        ...


# endregion
