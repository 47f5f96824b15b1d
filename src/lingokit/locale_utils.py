"""Locale utilities for BCP-47 to POSIX conversion.

Centralizes locale format normalization used throughout the codebase.
Provides canonical locale handling to ensure consistent cache keys, plural
rule lookups and analytics keys.

Python 3.13+.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

from babel.core import parse_locale

from lingokit.constants import MAX_LOCALE_CACHE_SIZE

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "canonicalize_locale",
    "get_babel_locale",
    "get_language",
    "locale_key",
    "normalize_locale",
]


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).

    Args:
        locale_code: BCP-47 locale code (e.g., "en-US", "pt-BR")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")  # Already normalized
        'en'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def canonicalize_locale(locale_code: str) -> str:
    """Return the canonical POSIX form of a locale tag.

    Lowercases the language, title-cases the script and uppercases the
    territory, so "PT-br", "pt_BR" and "pt-BR" share one cache/analytics key.
    Encoding and modifier suffixes ("de_DE.UTF-8") are dropped.

    Args:
        locale_code: Locale code in BCP-47 or POSIX format

    Returns:
        Canonical locale code (e.g., "pt_BR", "zh_Hant_TW")

    Raises:
        ValueError: If the tag is empty or its language subtag is not alphabetic

    Example:
        >>> canonicalize_locale("PT-br")
        'pt_BR'
    """
    # parse_locale appends a fifth "modifier" element for tags like "de_DE@euro"
    language, territory, script, variant = parse_locale(normalize_locale(locale_code))[:4]
    return "_".join(part for part in (language, script, territory, variant) if part)


def get_language(locale_code: str) -> str:
    """Return the language subtag of a locale tag.

    Args:
        locale_code: Locale code in BCP-47 or POSIX format

    Returns:
        Lowercase language subtag ("pt" for "pt-BR")

    Raises:
        ValueError: If the tag cannot be parsed
    """
    return canonicalize_locale(locale_code).split("_", 1)[0]


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Parses the locale code once and caches the result. Thread-safe via
    lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid

    Example:
        >>> locale = get_babel_locale("en-US")
        >>> locale.language
        'en'
        >>> locale.territory
        'US'
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def locale_key(locale_code: str) -> str:
    """Return the canonical form of a tag, or its POSIX form if unparseable.

    Used wherever a locale names a store or a cache/analytics entry, so an
    unusual tag still works as an opaque identifier.

    Example:
        >>> locale_key("pt-br")
        'pt_BR'
        >>> locale_key("123-x")
        '123_x'
    """
    try:
        return canonicalize_locale(locale_code)
    except ValueError:
        return normalize_locale(locale_code)
