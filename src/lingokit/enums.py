"""Enumerations for lingokit type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so they can be used directly as
variant map keys and compared against plain strings from content stores.

Python 3.13+.
"""

from enum import StrEnum


class PluralCategory(StrEnum):
    """CLDR plural category.

    StrEnum provides automatic string conversion: str(PluralCategory.ONE) == "one"
    """

    ZERO = "zero"
    ONE = "one"
    TWO = "two"
    FEW = "few"
    MANY = "many"
    OTHER = "other"


class SelectionSource(StrEnum):
    """Which step of the contextual precedence chain produced a string."""

    SCALAR = "scalar"
    """Raw value was already a plain string"""

    PLURAL = "plural"
    """Matched the plural category selected for ``count``"""

    GENDER = "gender"
    """Matched the ``gender`` option"""

    FORMALITY = "formality"
    """Matched the ``formality`` option"""

    CONTEXT = "context"
    """Matched the ``context`` option"""

    DEFAULT = "default"
    """Matched the ``default`` entry"""

    FIRST = "first"
    """First entry of the variant map, in definition order"""

    COERCED = "coerced"
    """String-coerced raw value (empty variant map)"""


class ResolutionTier(StrEnum):
    """Tier of the fallback chain that produced a raw value."""

    ACTIVE = "active"
    """Key found in the active locale's store"""

    FALLBACK_OPTION = "fallback_option"
    """Key missing; caller-supplied ``fallback`` text returned"""

    DEFAULT_LOCALE = "default_locale"
    """Key found in the default locale's store"""

    LITERAL_KEY = "literal_key"
    """Key missing everywhere; the key itself is returned"""


__all__ = [
    "PluralCategory",
    "ResolutionTier",
    "SelectionSource",
]
