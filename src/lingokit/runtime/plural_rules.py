"""Plural category selection for marketplace locales.

Provides plural category selection through a registry of per-language rule
functions. Each rule maps a non-negative integer count to one of the six
CLDR categories (zero, one, two, few, many, other).

The table covers the languages the marketplace ships content for. Some
bands intentionally differ from full CLDR data (e.g. Russian selects "other"
instead of "many" for 5-20) so that content authored with one/few/other
variant maps keeps resolving; the rules are the contract content authors
write against.

Python 3.13+. Depends on Babel for locale tag parsing.

Reference: https://www.unicode.org/cldr/charts/47/supplemental/language_plural_rules.html
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping
from decimal import Decimal
from types import MappingProxyType

from lingokit.enums import PluralCategory
from lingokit.locale_utils import canonicalize_locale, get_language

__all__ = [
    "DEFAULT_PLURAL_RULES",
    "PluralRule",
    "PluralRuleRegistry",
    "select_plural_category",
]

logger = logging.getLogger(__name__)

type PluralRule = Callable[[int], PluralCategory]
"""Rule function: non-negative integer count -> plural category."""

ZERO = PluralCategory.ZERO
ONE = PluralCategory.ONE
TWO = PluralCategory.TWO
FEW = PluralCategory.FEW
MANY = PluralCategory.MANY
OTHER = PluralCategory.OTHER


def _one_other(n: int) -> PluralCategory:
    """Germanic/Romance/Indic: 1 is singular, everything else plural."""
    return ONE if n == 1 else OTHER


def _zero_one_other(n: int) -> PluralCategory:
    """French, Filipino: 0 and 1 are both singular."""
    return ONE if n <= 1 else OTHER


def _other_only(_n: int) -> PluralCategory:
    """Languages without grammatical number."""
    return OTHER


def _arabic(n: int) -> PluralCategory:
    """Arabic six-way bands.

    0 -> zero, 1 -> one, 2 -> two, n%100 in 3..10 -> few,
    n%100 in 11..99 -> many, everything else (100, 101, 102, ...) -> other.
    """
    if n == 0:
        return ZERO
    if n == 1:
        return ONE
    if n == 2:
        return TWO
    mod100 = n % 100
    if 3 <= mod100 <= 10:
        return FEW
    if 11 <= mod100 <= 99:
        return MANY
    return OTHER


def _hebrew(n: int) -> PluralCategory:
    if n == 1:
        return ONE
    if n == 2:
        return TWO
    return OTHER


def _east_slavic(n: int) -> PluralCategory:
    """Russian, Ukrainian, Belarusian, Serbo-Croatian: one/few/other.

    Numbers ending in 1 (except 11) are singular; ending in 2-4 (except 12-14)
    take the paucal form.
    """
    mod10 = n % 10
    mod100 = n % 100
    if mod10 == 1 and mod100 != 11:
        return ONE
    if 2 <= mod10 <= 4 and not 12 <= mod100 <= 14:
        return FEW
    return OTHER


def _slovenian(n: int) -> PluralCategory:
    """Slovenian four-way on the last two digits."""
    mod100 = n % 100
    if mod100 == 1:
        return ONE
    if mod100 == 2:
        return TWO
    if mod100 in (3, 4):
        return FEW
    return OTHER


def _polish(n: int) -> PluralCategory:
    """Polish: only exactly 1 is singular (21 is not)."""
    if n == 1:
        return ONE
    mod10 = n % 10
    mod100 = n % 100
    if 2 <= mod10 <= 4 and not 12 <= mod100 <= 14:
        return FEW
    return OTHER


def _west_slavic(n: int) -> PluralCategory:
    """Czech, Slovak: 2-4 exactly take the paucal form."""
    if n == 1:
        return ONE
    if 2 <= n <= 4:
        return FEW
    return OTHER


def _romanian(n: int) -> PluralCategory:
    """Romanian: 0 and numbers ending in 01-19 use the "few" form."""
    if n == 1:
        return ONE
    if n == 0 or 1 <= n % 100 <= 19:
        return FEW
    return OTHER


_RULES: dict[str, PluralRule] = {
    **dict.fromkeys(
        (
            "en", "es", "de", "it", "pt", "nl", "el", "hu", "fi", "da",
            "no", "nb", "sv", "sw", "hi", "bn", "pa", "ur",
        ),
        _one_other,
    ),
    **dict.fromkeys(("fr", "tl", "fil"), _zero_one_other),
    **dict.fromkeys(
        ("zh", "zh_TW", "ja", "ko", "tr", "th", "fa", "vi", "id", "ms"),
        _other_only,
    ),
    "ar": _arabic,
    "he": _hebrew,
    **dict.fromkeys(("ru", "uk", "be", "sr", "hr", "bs"), _east_slavic),
    "sl": _slovenian,
    "pl": _polish,
    **dict.fromkeys(("cs", "sk"), _west_slavic),
    "ro": _romanian,
}

DEFAULT_PLURAL_RULES: Mapping[str, PluralRule] = MappingProxyType(_RULES)
"""Built-in rules keyed by canonical locale or language subtag (read-only)."""


class PluralRuleRegistry:
    """Plural rules keyed by locale, with language-subtag fallback.

    Starts from the built-in table. Rules registered on an instance never leak
    into other instances or into the module-level default.

    Example:
        >>> registry = PluralRuleRegistry()
        >>> def latvian(n: int) -> PluralCategory:
        ...     return PluralCategory.ZERO if n % 10 == 0 else PluralCategory.OTHER
        >>> registry.register("lv", latvian)
        >>> registry.select(20, "lv-LV")
        <PluralCategory.ZERO: 'zero'>
    """

    __slots__ = ("_rules",)

    def __init__(self, rules: Mapping[str, PluralRule] | None = None) -> None:
        """Initialize registry.

        Args:
            rules: Initial rule table (default: built-in marketplace rules)
        """
        source = DEFAULT_PLURAL_RULES if rules is None else rules
        self._rules: dict[str, PluralRule] = {
            canonicalize_locale(locale): rule for locale, rule in source.items()
        }

    def register(self, locale: str, rule: PluralRule) -> None:
        """Register or replace the rule for a locale.

        Args:
            locale: Locale tag or bare language subtag
            rule: Rule function

        Raises:
            ValueError: If the locale tag cannot be parsed
        """
        self._rules[canonicalize_locale(locale)] = rule

    def get_rule(self, locale: str) -> PluralRule | None:
        """Find the rule for a locale.

        Tries the full canonical tag first ("zh_TW"), then the language
        subtag ("pt" for "pt_BR").

        Returns:
            Rule function, or None when no rule is registered or the tag is
            malformed
        """
        try:
            canonical = canonicalize_locale(locale)
        except ValueError:
            return None
        rule = self._rules.get(canonical)
        if rule is None:
            rule = self._rules.get(get_language(canonical))
        return rule

    def is_registered(self, locale: str) -> bool:
        """Check whether a locale (or its language) has a rule."""
        return self.get_rule(locale) is not None

    def select(self, n: int | float | Decimal, locale: str) -> PluralCategory:
        """Select plural category using this registry.

        See select_plural_category() for semantics.
        """
        match n:
            case Decimal() if not n.is_finite():
                return OTHER
            case float() if not math.isfinite(n):
                return OTHER

        if n < 0:
            msg = f"Plural count must be non-negative, got {n}"
            raise ValueError(msg)

        rule = self.get_rule(locale)
        if rule is None:
            return OTHER

        integral = int(n)
        if integral != n:
            return OTHER

        category = rule(integral)
        try:
            return PluralCategory(category)
        except ValueError:
            logger.warning(
                "Plural rule for '%s' returned %r, not a plural category; using 'other'",
                locale,
                category,
            )
            return OTHER

    @property
    def locales(self) -> frozenset[str]:
        """Locales and languages with a registered rule."""
        return frozenset(self._rules)

    def __len__(self) -> int:
        return len(self._rules)


_DEFAULT_REGISTRY = PluralRuleRegistry()


def select_plural_category(
    n: int | float | Decimal,
    locale: str,
    registry: PluralRuleRegistry | None = None,
) -> PluralCategory:
    """Select plural category for a count.

    Args:
        n: Non-negative count. Callers normalize negative counts (the
            translation engine uses the absolute value).
        locale: Locale code (e.g., "ar", "pt-BR", "zh_TW")
        registry: Rule registry (default: built-in marketplace rules)

    Returns:
        Plural category. Locales without a registered rule, malformed locale
        tags and non-integral counts always select "other".

    Raises:
        ValueError: If n is negative

    Examples:
        >>> select_plural_category(1, "en")
        <PluralCategory.ONE: 'one'>
        >>> select_plural_category(11, "ar")
        <PluralCategory.MANY: 'many'>
        >>> select_plural_category(3, "ru_RU")
        <PluralCategory.FEW: 'few'>
        >>> select_plural_category(1, "am")
        <PluralCategory.OTHER: 'other'>
    """
    if registry is None:
        registry = _DEFAULT_REGISTRY
    return registry.select(n, locale)
