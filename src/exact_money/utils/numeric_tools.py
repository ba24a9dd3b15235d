from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal, InvalidOperation
from typing import TypeAlias

# Use where optimal type is `Decimal`, but other types are also acceptable (and will be converted to `Decimal`)
DecimalLike: TypeAlias = Decimal | int | str | float


def as_decimal(value: DecimalLike) -> Decimal:
    """Converts input to `Decimal` safely.

    Ensures floats are converted via string to avoid precision noise, so that `1.05` becomes
    `Decimal("1.05")` and not its binary expansion.

    Args:
        value: Input value as `DecimalLike`.

    Returns:
        Value converted to `Decimal`.

    Raises:
        TypeError: If $value is a bool or of an unsupported type.
        ValueError: If $value cannot be converted or is not a finite number.
    """
    # Raise: bool is an int subclass, but never a meaningful amount
    if isinstance(value, bool) or not isinstance(value, (Decimal, int, str, float)):
        raise TypeError(f"$value must be Decimal, int, str or float, but provided value is: {value!r}")

    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise ValueError(f"Cannot convert $value ({value!r}) to Decimal") from e

    # Raise: NaN and infinities have no monetary meaning
    if not result.is_finite():
        raise ValueError(f"$value must be a finite number, but provided value is: {value!r}")

    return result


def as_decimal_list(values: Iterable[DecimalLike | None]) -> list[Decimal | None]:
    """Converts each item with `as_decimal`, keeping None entries as None.

    Args:
        values: Decimal-like scalars, possibly interleaved with None.

    Returns:
        New list with the converted values in the same order.
    """
    return [None if value is None else as_decimal(value) for value in values]
