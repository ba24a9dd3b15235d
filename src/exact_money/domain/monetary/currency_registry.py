"""Currencies registered on import, with names and precisions fixed independently of CLDR updates."""

from exact_money.domain.monetary.currency import Currency

USD = Currency("USD", 2, "US Dollar")
EUR = Currency("EUR", 2, "Euro")
GBP = Currency("GBP", 2, "British Pound")
CAD = Currency("CAD", 2, "Canadian Dollar")
CHF = Currency("CHF", 2, "Swiss Franc")
# no minor unit
JPY = Currency("JPY", 0, "Japanese Yen")
# fils, 1/1000 of a dinar
KWD = Currency("KWD", 3, "Kuwaiti Dinar")

for _currency in (USD, EUR, GBP, CAD, CHF, JPY, KWD):
    Currency.register(_currency, overwrite=True)
