"""Translation runtime package.

Provides plural rules, key resolution, contextual selection, interpolation,
the template cache and locale-aware formatting. Has no knowledge of engines
or loaders.

Python 3.13+.
"""

from .cache import CacheEntry, TranslationCache
from .cache_config import CacheConfig
from .formatting import format_currency, format_date, format_number, format_relative
from .interpolation import find_placeholders, interpolate
from .options import TranslationOptions
from .plural_rules import PluralRuleRegistry, select_plural_category
from .resolver import KeyResolution, resolve_key
from .selector import Selection, select_variant
from .value_types import RawValue, Scalar, TranslationStore, VariantMap, classify_leaf

__all__ = [
    "CacheConfig",
    "CacheEntry",
    "KeyResolution",
    "PluralRuleRegistry",
    "RawValue",
    "Scalar",
    "Selection",
    "TranslationCache",
    "TranslationOptions",
    "TranslationStore",
    "VariantMap",
    "classify_leaf",
    "find_placeholders",
    "format_currency",
    "format_date",
    "format_number",
    "format_relative",
    "interpolate",
    "resolve_key",
    "select_plural_category",
    "select_variant",
]
