"""Monetary domain package.

This package contains classes for exact, currency-aware arithmetic on monetary amounts:
Currency and MoneyLocale identities, MoneyType (currency + locale), immutable Money values,
mutable MoneyCalc calculations and the MoneySplitter that distributes an amount into parts
summing exactly to the original.
"""
