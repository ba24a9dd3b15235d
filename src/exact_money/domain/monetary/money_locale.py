from __future__ import annotations

import re

from babel import Locale, UnknownLocaleError

# language and territory separated by "_" or "-"; either side may be empty, but not both
_LOCALE_PATTERN = re.compile(r"^(?P<language>[A-Za-z]{2,3})?(?:[_-](?P<territory>[A-Za-z]{2}|\d{3}))?$")
_TERRITORY_ONLY_PATTERN = re.compile(r"^[_-](?P<territory>[A-Za-z]{2}|\d{3})$")


class MoneyLocale:
    """Identity of a locale as used by monetary types.

    Unlike a babel `Locale`, a MoneyLocale can name a territory without a language (e.g. "_CA"),
    which makes it compatible with every more specific locale of that territory.

    Attributes:
        language (str): Lowercase ISO 639 language code, or "" when unspecified.
        territory (str): Uppercase ISO 3166 territory code, or "" when unspecified.
    """

    __slots__ = ("_language", "_territory", "_babel_locale")

    def __init__(self, language: str = "", territory: str = ""):
        """Initialize a MoneyLocale.

        Args:
            language: ISO 639 language code (e.g. "en"), may be empty.
            territory: ISO 3166 territory code (e.g. "US"), may be empty.

        Raises:
            ValueError: If both $language and $territory are empty.
        """
        if not isinstance(language, str) or not isinstance(territory, str):
            raise TypeError(f"$language and $territory must be strings, but provided values are: {language!r}, {territory!r}")

        # Raise: a locale must specify at least something
        if not language.strip() and not territory.strip():
            raise ValueError("Cannot create `MoneyLocale` because both $language and $territory are empty")

        self._language = language.strip().lower()
        self._territory = territory.strip().upper()
        self._babel_locale: Locale | None = None

    @classmethod
    def parse(cls, value: "str | Locale | MoneyLocale") -> "MoneyLocale":
        """Create a MoneyLocale from an identifier, a babel Locale or another MoneyLocale.

        Accepted identifiers: "en_US", "en-US", "fr", "_CA" (territory only).

        Args:
            value: Locale to convert.

        Returns:
            MoneyLocale: The parsed locale.

        Raises:
            ValueError: If $value is a string that is not a locale identifier.
            TypeError: If $value has an unsupported type.
        """
        if isinstance(value, MoneyLocale):
            return value

        if isinstance(value, Locale):
            return cls(value.language, value.territory or "")

        if not isinstance(value, str):
            raise TypeError(f"$value must be a str, babel Locale or MoneyLocale, but provided value is: {value!r}")

        text = value.strip()
        match = _TERRITORY_ONLY_PATTERN.match(text)
        if match:
            return cls("", match.group("territory"))

        match = _LOCALE_PATTERN.match(text)
        if not match or not text:
            raise ValueError(f"$value must be a locale identifier like 'en_US', 'fr' or '_CA', but provided value is: '{value}'")

        return cls(match.group("language") or "", match.group("territory") or "")

    @property
    def language(self) -> str:
        return self._language

    @property
    def territory(self) -> str:
        return self._territory

    @property
    def prefix_key(self) -> str:
        """Territory followed by language, e.g. "CA_fr" or "CA_" for a territory-only locale.

        One locale is considered compatible with another when either key is a prefix of the other.
        """
        return f"{self._territory}_{self._language}"

    @property
    def babel_locale(self) -> Locale:
        """The babel Locale used for formatting and parsing.

        Territory-only locales resolve to the likely language of the territory (e.g. "_CA" to
        "en_CA").

        Raises:
            ValueError: If CLDR has no data for this locale.
        """
        if self._babel_locale is None:
            language = self._language or "und"
            identifier = f"{language}_{self._territory}" if self._territory else language
            try:
                self._babel_locale = Locale.parse(identifier)
            except (UnknownLocaleError, ValueError) as e:
                raise ValueError(f"Locale '{self}' has no CLDR data") from e
        return self._babel_locale

    def __eq__(self, other) -> bool:
        if not isinstance(other, MoneyLocale):
            return False
        return self._language == other._language and self._territory == other._territory

    def __hash__(self) -> int:
        return hash((self._language, self._territory))

    def __str__(self) -> str:
        """Return identifier like 'en_US', 'fr' or '_CA'."""
        if not self._territory:
            return self._language
        return f"{self._language}_{self._territory}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}('{self._language}', '{self._territory}')"


US = MoneyLocale("en", "US")
UK = MoneyLocale("en", "GB")
GERMANY = MoneyLocale("de", "DE")
FRANCE = MoneyLocale("fr", "FR")
JAPAN = MoneyLocale("ja", "JP")
CANADA = MoneyLocale("en", "CA")
CANADA_FRENCH = MoneyLocale("fr", "CA")
