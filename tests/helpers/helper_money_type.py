from __future__ import annotations

from exact_money.domain.monetary.money_locale import GERMANY, JAPAN, UK, US
from exact_money.domain.monetary.money_type import MoneyType


def create_usd_type() -> MoneyType:
    """Create a US locale type with US dollars (2 decimal places)."""
    return MoneyType.for_locale(US)


def create_gbp_type() -> MoneyType:
    """Create a UK locale type with pounds sterling."""
    return MoneyType.for_locale(UK)


def create_eur_germany_type() -> MoneyType:
    """Create a German locale type with euros, formatted like '1.234,56 €'."""
    return MoneyType(GERMANY, "EUR")


def create_jpy_type() -> MoneyType:
    """Create a Japanese locale type with yen (no decimal places)."""
    return MoneyType.for_locale(JAPAN)
