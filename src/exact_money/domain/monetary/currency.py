from __future__ import annotations

import logging

from babel.numbers import UnknownCurrencyError, get_currency_name, get_currency_precision, get_territory_currencies, is_currency

logger = logging.getLogger(__name__)

# Upper bound of $precision
MAX_PRECISION = 18


class Currency:
    """A currency identified by its code, e.g. ISO 4217 "USD".

    Currencies are looked up by code through a process-wide registry. Codes that were never
    registered but are known to CLDR are created on first lookup.

    Attributes:
        code (str): Uppercase currency code (e.g. "USD", "JPY").
        precision (int): Decimal places of the smallest denomination (2 for cents, 0 for yen).
        name (str): English name of the currency.
    """

    _registry: dict[str, Currency] = {}

    __slots__ = ("_code", "_precision", "_name")

    def __init__(self, code: str, precision: int, name: str):
        """Initialize a Currency; prefer `Currency.from_str` for well-known codes.

        Raises:
            ValueError: If $code or $name is blank, or $precision is not an int in 0..18.
        """
        # Raise: a currency without code or name cannot be displayed
        if not isinstance(code, str) or not code.strip():
            raise ValueError(f"$code must be a non-empty string, but provided value is: {code!r}")
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"$name must be a non-empty string, but provided value is: {name!r}")

        # Raise: bool passes the int check, so reject it explicitly
        if isinstance(precision, bool) or not isinstance(precision, int) or not 0 <= precision <= MAX_PRECISION:
            raise ValueError(f"$precision must be an int between 0 and {MAX_PRECISION}, but provided value is: {precision!r}")

        self._code = code.strip().upper()
        self._precision = precision
        self._name = name.strip()

    # region Properties

    @property
    def code(self) -> str:
        return self._code

    @property
    def precision(self) -> int:
        return self._precision

    @property
    def name(self) -> str:
        return self._name

    # endregion

    # region Registry

    @classmethod
    def register(cls, currency: Currency, overwrite: bool = False) -> None:
        """Make $currency available to `from_str`.

        Args:
            currency: Currency to register under its code.
            overwrite: Replace a currency already registered under the same code.

        Raises:
            TypeError: If $currency is not a Currency.
            ValueError: If the code is taken and $overwrite is False.
        """
        if not isinstance(currency, Currency):
            raise TypeError(f"$currency must be a Currency, but provided value is: {currency!r}")

        # Raise: code already taken
        if currency.code in cls._registry and not overwrite:
            raise ValueError(f"Cannot call `register` because currency '{currency.code}' is already registered (use overwrite=True)")

        cls._registry[currency.code] = currency

    @classmethod
    def from_str(cls, code: str) -> Currency:
        """Look up a currency by code (case-insensitive).

        Args:
            code: Currency code such as "usd" or "EUR".

        Returns:
            Currency: The registered currency, or a new one built from CLDR data for ISO 4217
            codes not registered yet.

        Raises:
            TypeError: If $code is not a string.
            ValueError: If $code is neither registered nor an ISO 4217 code known to CLDR.
        """
        if not isinstance(code, str):
            raise TypeError(f"$code must be a string, but provided value is: {code!r}")

        key = code.strip().upper()
        currency = cls._registry.get(key)
        if currency is None:
            currency = cls._from_cldr(key)
            cls.register(currency)
        return currency

    @classmethod
    def for_territory(cls, territory: str) -> Currency | None:
        """Currency in use today in $territory (ISO 3166 code, e.g. "CA").

        Returns:
            Currency | None: The first legal tender of the territory; None for an empty or
            unknown territory.
        """
        if not territory:
            return None

        codes = get_territory_currencies(territory.upper())
        return cls.from_str(codes[0]) if codes else None

    @classmethod
    def _from_cldr(cls, code: str) -> Currency:
        # Raise: not an ISO 4217 code
        if not is_currency(code):
            raise ValueError(f"Unknown currency code '{code}', registered codes are: {sorted(cls._registry)}")

        try:
            currency = cls(code, get_currency_precision(code), get_currency_name(code, locale="en"))
        except UnknownCurrencyError as e:
            raise ValueError(f"Currency '{code}' has no CLDR data") from e

        logger.debug(f"Created Currency '{code}' from CLDR data with $precision {currency.precision}")
        return currency

    # endregion

    def __eq__(self, other) -> bool:
        if not isinstance(other, Currency):
            return False
        return self._code == other._code

    def __hash__(self) -> int:
        return hash(self._code)

    def __str__(self) -> str:
        return self._code

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}('{self._code}', {self._precision}, '{self._name}')"
