from __future__ import annotations

import logging
import threading
from decimal import Decimal
from typing import TYPE_CHECKING

from babel import Locale, UnknownLocaleError
from babel.numbers import get_currency_precision

from exact_money.config import FALLBACK_LOCALE, get_settings
from exact_money.domain.monetary import currency_registry  # noqa: F401 - registers predefined currencies
from exact_money.domain.monetary.currency import Currency
from exact_money.domain.monetary.errors import IncompatibleCurrencyError, IncompatibleLocaleError
from exact_money.domain.monetary.money_format import NO_CURRENCY_CODE, format_amount, parse_amount
from exact_money.domain.monetary.money_locale import MoneyLocale
from exact_money.utils.decimal_tools import UNBOUNDED_CONTEXT
from exact_money.utils.numeric_tools import DecimalLike, as_decimal

if TYPE_CHECKING:
    from exact_money.domain.monetary.money import Money
    from exact_money.domain.monetary.money_calc import MoneyCalc

logger = logging.getLogger(__name__)


def _default_babel_locale() -> Locale:
    identifier = get_settings().default_locale
    try:
        return Locale.parse(identifier)
    except (UnknownLocaleError, ValueError):
        logger.debug(f"Default locale '{identifier}' has no CLDR data, using '{FALLBACK_LOCALE}'")
        return Locale.parse(FALLBACK_LOCALE)


def _as_currency(currency: Currency | str) -> Currency:
    if isinstance(currency, Currency):
        return currency
    if isinstance(currency, str):
        return Currency.from_str(currency)
    raise TypeError(f"$currency must be a Currency or currency code, but provided value is: {currency!r}")


class MoneyType:
    """Combines an optional currency with an optional locale.

    The type gives monetary amounts their meaning (currency) and their display format (locale).
    Instances are immutable. Money of a type without a locale is formatted using the default
    locale from `exact_money.config`.

    Attributes:
        currency (Currency | None): Currency of the type, None if unspecified.
        locale (MoneyLocale | None): Locale of the type, None if unspecified.
        places (int): Number of decimal places used to display and round amounts. They are the
            precision of the display currency: an explicit currency decides them regardless of
            the locale, so `MoneyType("en_US", "JPY")` has 0 places although US dollar amounts
            are shown with 2.
    """

    __slots__ = ("_currency", "_locale", "_display_currency_code", "_places", "_zero_money", "_format_lock")

    def __init__(self, locale: MoneyLocale | str | Locale | None = None, currency: Currency | str | None = None):
        """Initialize a MoneyType with an explicit locale and currency, either of which may be None.

        To infer the currency from a locale use `MoneyType.for_locale`.

        Args:
            locale: Locale of the type, or None to leave it unspecified.
            currency: Currency (or its code) of the type, or None to leave it unspecified.

        Raises:
            ValueError: If $locale is not a locale identifier or $currency is not a known code.
            TypeError: If $locale or $currency has an unsupported type.
        """
        self._locale = None if locale is None else MoneyLocale.parse(locale)
        self._currency = None if currency is None else _as_currency(currency)

        display_currency = self._currency
        if display_currency is None:
            territory = self._locale.territory if self._locale is not None else _default_babel_locale().territory
            display_currency = Currency.for_territory(territory or "")

        if display_currency is None:
            self._display_currency_code = NO_CURRENCY_CODE
            self._places = get_currency_precision(NO_CURRENCY_CODE)
        else:
            self._display_currency_code = display_currency.code
            self._places = display_currency.precision

        self._format_lock = threading.Lock()

        from exact_money.domain.monetary.money import Money

        self._zero_money = Money(self, Decimal(0))

    @classmethod
    def for_locale(cls, locale: MoneyLocale | str | Locale) -> MoneyType:
        """Create a type for $locale whose currency is the one in use in the locale's territory.

        Args:
            locale: Locale of the type.

        Returns:
            MoneyType: New type; its currency is None when the locale names no territory.
        """
        money_locale = MoneyLocale.parse(locale)
        return cls(money_locale, Currency.for_territory(money_locale.territory))

    @classmethod
    def for_currency(cls, currency: Currency | str) -> MoneyType:
        """Create a type with a currency but no specific locale."""
        return cls(None, currency)

    # region Properties

    @property
    def currency(self) -> Currency | None:
        return self._currency

    @property
    def locale(self) -> MoneyLocale | None:
        return self._locale

    @property
    def places(self) -> int:
        return self._places

    # endregion

    # region Money creation

    def money(self, value: DecimalLike | None = None) -> Money:
        """Create money of this type.

        Args:
            value: None for zero; an `int` in small denominations (e.g. cents, shifted left by
                $places); a `Decimal`, `str` or `float` in large denominations (e.g. dollars).

        Returns:
            Money: The monetary amount.
        """
        from exact_money.domain.monetary.money import Money

        if value is None:
            return self._zero_money

        # Raise: bool is an int subclass, but never a meaningful amount
        if isinstance(value, bool):
            raise TypeError(f"$value must be an int, Decimal, str or float, but provided value is: {value!r}")

        if isinstance(value, int):
            return Money(self, Decimal(value).scaleb(-self._places, context=UNBOUNDED_CONTEXT))

        return Money(self, as_decimal(value))

    def calc(self, scale: int | None = None, rounding: str | None = None) -> MoneyCalc:
        """Open a new calculation of this type with an initial amount of zero.

        Args:
            scale: Number of decimal places kept after each step; None or negative for
                arbitrary precision.
            rounding: Rounding mode used when $scale is set; None for `ROUND_HALF_UP`.

        Returns:
            MoneyCalc: A new calculation.
        """
        from exact_money.domain.monetary.money_calc import MoneyCalc

        return MoneyCalc(self, Decimal(0), scale, rounding)

    # endregion

    # region Formatting

    def format(self, money: Money) -> str:
        """Render $money rounded to $places with the currency pattern of this type's locale."""
        with self._format_lock:
            return format_amount(money.rounded_amount(), self._display_currency_code, self._display_locale())

    def parse(self, text: str) -> Money:
        """Parse text formatted with the currency pattern of this type's locale.

        Args:
            text: Formatted currency amount, e.g. "$1.00".

        Returns:
            Money: The amount, of this type.

        Raises:
            MoneyParseError: If $text does not match the currency format.
        """
        from exact_money.domain.monetary.money import Money

        if not isinstance(text, str):
            raise TypeError(f"$text must be a string, but provided value is: {text!r}")

        with self._format_lock:
            amount = parse_amount(text, self._display_currency_code, self._display_locale())
        return Money(self, amount)

    def _display_locale(self) -> Locale:
        if self._locale is None:
            return _default_babel_locale()
        return self._locale.babel_locale

    # endregion

    # region Reconciliation

    def combine(self, other: MoneyType) -> MoneyType:
        """Merge this type with $other into a single consistent type.

        Currencies merge when equal or when one is unspecified. Locales merge when equal, when one
        is unspecified, or when the "<territory>_<language>" key of one is a prefix of the other's
        (the more specific locale wins, e.g. "_CA" and "fr_CA" merge into "fr_CA").

        Args:
            other: Type to merge with.

        Returns:
            MoneyType: `self` or $other when one of them already is the merged type, otherwise a
            new type.

        Raises:
            IncompatibleCurrencyError: If both types specify different currencies.
            IncompatibleLocaleError: If both types specify unrelated locales.
        """
        if not isinstance(other, MoneyType):
            raise TypeError(f"$other must be a MoneyType, but provided value is: {other!r}")

        if other is self:
            return self

        # Raise: two different specified currencies never mix
        if self._currency is not None and other._currency is not None and self._currency != other._currency:
            raise IncompatibleCurrencyError(self._currency, other._currency)
        currency = self._currency if self._currency is not None else other._currency

        locale = self._combine_locale(other)

        if currency == self._currency and locale == self._locale:
            return self
        if currency == other._currency and locale == other._locale:
            return other

        merged = MoneyType(locale, currency)
        logger.debug(f"Combined {self!r} and {other!r} into new {merged!r}")
        return merged

    def _combine_locale(self, other: MoneyType) -> MoneyLocale | None:
        if self._locale is None:
            return other._locale
        if other._locale is None or self._locale == other._locale:
            return self._locale

        self_key = self._locale.prefix_key
        other_key = other._locale.prefix_key
        if self_key.startswith(other_key):
            return self._locale
        if other_key.startswith(self_key):
            return other._locale

        raise IncompatibleLocaleError(self._locale, other._locale)

    # endregion

    def __eq__(self, other) -> bool:
        if self is other:
            return True
        if not isinstance(other, MoneyType):
            return False
        return self._currency == other._currency and self._locale == other._locale

    def __hash__(self) -> int:
        return hash((self._currency, self._locale))

    def __str__(self) -> str:
        """Return string like 'en_US USD', with '-' for unspecified parts."""
        return f"{self._locale or '-'} {self._currency or '-'}"

    def __repr__(self) -> str:
        locale = f"'{self._locale}'" if self._locale is not None else None
        currency = f"'{self._currency}'" if self._currency is not None else None
        return f"{self.__class__.__name__}({locale}, {currency})"
