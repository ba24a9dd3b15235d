"""Locale-specific rendering and parsing of currency amounts, backed by CLDR data via babel."""

from __future__ import annotations

from decimal import Decimal

from babel import Locale
from babel.numbers import NumberFormatError, format_currency, get_currency_symbol, get_minus_sign_symbol, parse_decimal

from exact_money.domain.monetary.errors import MoneyParseError

# ISO 4217 code for transactions where no currency is involved
NO_CURRENCY_CODE = "XXX"

_MINUS_SIGNS = ("-", "\u2212")


def format_amount(amount: Decimal, currency_code: str, locale: Locale) -> str:
    """Renders $amount with the currency pattern of $locale, e.g. "$1.10" or "1,00 €".

    Args:
        amount: Amount already rounded to the currency's decimal places.
        currency_code: ISO 4217 code of the currency symbol to show.
        locale: Locale whose currency pattern is used.

    Returns:
        The formatted text.
    """
    # A rounded tiny negative amount is "-0.00" and must display as plain zero
    if amount.is_zero():
        amount = amount.copy_abs()
    return format_currency(amount, currency_code, locale=locale)


def parse_amount(text: str, currency_code: str, locale: Locale) -> Decimal:
    """Parses text produced by `format_amount` (or typed the same way) back into an amount.

    The currency symbol of $currency_code for $locale must be present. A leading or trailing
    minus sign and accounting-style parentheses mark negative amounts. Whitespace (including
    non-breaking spaces used by many locales) is ignored.

    Args:
        text: Text to parse, e.g. "$1,234.50" or "-1.234,50 €".
        currency_code: ISO 4217 code whose symbol is expected.
        locale: Locale whose number symbols are used.

    Returns:
        The parsed amount.

    Raises:
        MoneyParseError: If $text does not match the currency format of $locale.
    """
    symbol = get_currency_symbol(currency_code, locale=locale)
    stripped = text.strip()

    # Raise: text for another currency or without any currency symbol
    if symbol not in stripped:
        raise MoneyParseError(text, locale, f"missing currency symbol '{symbol}'")

    body = "".join(stripped.replace(symbol, "", 1).split())

    negative = False
    if body.startswith("(") and body.endswith(")"):
        negative = True
        body = body[1:-1]

    minus_signs = (get_minus_sign_symbol(locale),) + _MINUS_SIGNS
    for minus in minus_signs:
        if body.startswith(minus):
            negative = not negative
            body = body[len(minus) :]
            break
        if body.endswith(minus):
            negative = not negative
            body = body[: -len(minus)]
            break

    # Raise: only a symbol, or a sign in a position the pattern does not allow
    if not body or not body[0].isdigit() or not body[-1].isdigit():
        raise MoneyParseError(text, locale, "no amount found")

    try:
        amount = parse_decimal(body, locale=locale)
    except NumberFormatError as e:
        raise MoneyParseError(text, locale, str(e)) from e

    return amount.copy_negate() if negative else amount
