"""Library settings read from the environment (and an optional `.env` file)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from babel import default_locale
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_LOCALE_ENV = "EXACT_MONEY_DEFAULT_LOCALE"
FALLBACK_LOCALE = "en_US"


@dataclass(frozen=True)
class MoneySettings:
    """Settings shared by all monetary types.

    Attributes:
        default_locale (str): Locale identifier used to format and parse money of types that do
            not specify a locale (e.g. "en_US").
    """

    default_locale: str = FALLBACK_LOCALE


@lru_cache(maxsize=1)
def get_settings() -> MoneySettings:
    """Loads settings once and returns the cached instance.

    Values are taken from environment variables; a `.env` file in the working directory is loaded
    first without overriding variables that are already set.

    Returns:
        MoneySettings: The active settings.
    """
    load_dotenv(override=False)

    locale = os.environ.get(DEFAULT_LOCALE_ENV) or default_locale("LC_NUMERIC") or FALLBACK_LOCALE
    settings = MoneySettings(default_locale=locale)
    logger.debug(f"Loaded MoneySettings with $default_locale '{settings.default_locale}'")
    return settings


def reset_settings() -> None:
    """Drops cached settings so that the next `get_settings` call reads the environment again."""
    get_settings.cache_clear()
