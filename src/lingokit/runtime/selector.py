"""Contextual variant selection.

Resolves the tagged value produced by key resolution into one template
string. A Scalar passes through unchanged. A VariantMap is resolved by a
fixed precedence chain, first match wins:

    1. plural category for ``count`` (when count is given)
    2. ``gender``
    3. ``formality``
    4. ``context``
    5. ``default`` entry
    6. first entry in definition order
    7. string-coerced raw value

Plural agreement outranks tone: when both count and gender are supplied and
the map has the plural category, the plural variant wins.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from numbers import Real

from lingokit.constants import DEFAULT_VARIANT_KEY
from lingokit.enums import PluralCategory, SelectionSource
from lingokit.runtime.options import TranslationOptions
from lingokit.runtime.plural_rules import PluralRuleRegistry, select_plural_category
from lingokit.runtime.value_types import RawValue, Scalar, VariantMap

__all__ = ["Selection", "select_variant"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Selection:
    """Outcome of contextual selection.

    Attributes:
        text: Selected template (not yet interpolated)
        source: Precedence step that produced the text
        plural_category: Category selected for count, None without count
        plural_miss: True when count was given but the map lacks its category
    """

    text: str
    source: SelectionSource
    plural_category: PluralCategory | None = None
    plural_miss: bool = False

    @property
    def degraded(self) -> bool:
        """True when selection fell back past every meaningful variant.

        A missing plural category, a first-entry pick, or string coercion all
        mean the content author did not provide the variant this call needed.
        """
        return self.plural_miss or self.source in (
            SelectionSource.FIRST,
            SelectionSource.COERCED,
        )


def _plural_category(
    count: object,
    locale: str,
    plural_rules: PluralRuleRegistry | None,
) -> PluralCategory | None:
    """Plural category for a count, normalizing negatives to their magnitude."""
    if isinstance(count, bool) or not isinstance(count, Real | Decimal):
        logger.debug("Ignoring non-numeric count %r", count)
        return None
    return select_plural_category(abs(count), locale, plural_rules)


def select_variant(
    raw: RawValue,
    options: TranslationOptions,
    locale: str,
    plural_rules: PluralRuleRegistry | None = None,
) -> Selection:
    """Resolve a raw value to a single template.

    Args:
        raw: Tagged value from key resolution
        options: Translation options supplying the dimensions
        locale: Locale whose plural rules apply
        plural_rules: Rule registry (default: built-in rules)

    Returns:
        Selection describing the chosen template and how it was found

    Example:
        >>> raw = VariantMap({"one": "Hello friend", "other": "Hello {count} friends"})
        >>> select_variant(raw, TranslationOptions(count=5), "en").text
        'Hello {count} friends'
    """
    match raw:
        case Scalar(text=text):
            return Selection(text, SelectionSource.SCALAR)
        case VariantMap():
            return _select_from_map(raw, options, locale, plural_rules)


def _select_from_map(
    variants: VariantMap,
    options: TranslationOptions,
    locale: str,
    plural_rules: PluralRuleRegistry | None,
) -> Selection:
    category: PluralCategory | None = None
    plural_miss = False

    if options.count is not None:
        category = _plural_category(options.count, locale, plural_rules)
        text = variants.get(category)
        if text is not None:
            return Selection(text, SelectionSource.PLURAL, category)
        plural_miss = True

    for source, dimension in (
        (SelectionSource.GENDER, options.gender),
        (SelectionSource.FORMALITY, options.formality),
        (SelectionSource.CONTEXT, options.context),
        (SelectionSource.DEFAULT, DEFAULT_VARIANT_KEY),
    ):
        text = variants.get(dimension)
        if text is not None:
            return Selection(text, source, category, plural_miss)

    first = variants.first()
    if first is not None:
        return Selection(first, SelectionSource.FIRST, category, plural_miss)

    return Selection(str(variants), SelectionSource.COERCED, category, plural_miss)
