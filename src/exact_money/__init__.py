__version__ = "0.0.1"

from exact_money.domain.monetary.currency import Currency
from exact_money.domain.monetary.errors import (
    AllProportionsZeroError,
    IncompatibleCurrencyError,
    IncompatibleLocaleError,
    InexactDivisionError,
    MoneyParseError,
    NoScaleSetError,
)
from exact_money.domain.monetary.money import Money
from exact_money.domain.monetary.money_calc import MoneyCalc
from exact_money.domain.monetary.money_locale import MoneyLocale
from exact_money.domain.monetary.money_source import MoneySource
from exact_money.domain.monetary.money_splitter import MoneySplitter
from exact_money.domain.monetary.money_type import MoneyType

__all__ = [
    "AllProportionsZeroError",
    "Currency",
    "IncompatibleCurrencyError",
    "IncompatibleLocaleError",
    "InexactDivisionError",
    "Money",
    "MoneyCalc",
    "MoneyLocale",
    "MoneyParseError",
    "MoneySource",
    "MoneySplitter",
    "MoneyType",
    "NoScaleSetError",
]
