"""lingokit - Translation resolution and text experimentation.

Renders localized, pluralized, contextually correct UI strings for a
multi-locale marketplace, with deterministic A/B tests on copy and
per-key usage telemetry.

Public API:
    TranslationEngine - Translate facade (cache, analytics, experiments)
    TranslationOptions - Per-call count/gender/formality/context/fallback
    MappingContentLoader - In-memory ContentLoader
    CacheConfig - Template cache configuration
    select_plural_category - CLDR-style plural category for a count

Exceptions:
    LingokitError - Base exception class
    ContentLoadError - Default locale content missing
    ExperimentConfigError - Invalid A/B test registration
    FormattingError - Locale-aware formatting failed

Submodules:
    lingokit.runtime - Plural rules, key resolution, selection, cache, formatting
    lingokit.analytics - Usage and degradation telemetry
    lingokit.experiments - A/B test bucketing and results
    lingokit.localization - Engine, content loading, locale profiles
    lingokit.diagnostics - Degradation codes and exceptions
"""

# Essential Public API - Minimal exports for clean namespace
from .diagnostics import (
    ContentLoadError,
    ExperimentConfigError,
    FormattingError,
    LingokitError,
)
from .enums import PluralCategory
from .localization import MappingContentLoader, TranslationEngine
from .runtime import CacheConfig, TranslationOptions, select_plural_category

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("lingokit")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CacheConfig",
    "ContentLoadError",
    "ExperimentConfigError",
    "FormattingError",
    "LingokitError",
    "MappingContentLoader",
    "PluralCategory",
    "TranslationEngine",
    "TranslationOptions",
    "__version__",
    "select_plural_category",
]
