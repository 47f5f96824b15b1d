"""Translation facade with caching, analytics, experiments and formatting.

TranslationEngine owns everything a rendering layer needs for one process:
the active and default content stores, the template cache, usage analytics
and the A/B test manager, plus locale-aware number, currency and date
formatting for the active locale. There is no module-level state; two
engines never share counters or cache entries.

Call pipeline for translate():

    cache lookup -> key resolution -> contextual selection -> cache write
        -> interpolation -> usage record -> degradation records

Key architectural decisions:
- Content problems never raise. A missing key renders as caller fallback
  text, default-locale text or the key itself, and is recorded as a
  Degradation.
- Templates are cached before interpolation, together with the degradations
  that produced them, so a cached broken key is still counted on every call.
- Protocol-based ContentLoader (dependency inversion); each locale's store is
  loaded once per activation.

Python 3.13+.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from threading import RLock
from typing import Any, Literal

from lingokit.analytics.usage import UsageAnalytics
from lingokit.constants import DEFAULT_LOCALE
from lingokit.diagnostics import ContentLoadError, Degradation, DiagnosticCode, FormattingError
from lingokit.enums import ResolutionTier, SelectionSource
from lingokit.experiments.ab_testing import ABTest, ABTestManager, VariantResult
from lingokit.locale_utils import locale_key
from lingokit.localization.loading import ContentLoader, FallbackInfo
from lingokit.localization.profiles import LocaleProfile, resolve_profile
from lingokit.localization.types import LocaleCode, TranslationKey, TranslationStore
from lingokit.runtime.cache import TranslationCache
from lingokit.runtime.cache_config import CacheConfig
from lingokit.runtime.formatting import (
    format_currency,
    format_date,
    format_number,
    format_relative,
)
from lingokit.runtime.interpolation import interpolate
from lingokit.runtime.options import TranslationOptions
from lingokit.runtime.plural_rules import PluralRuleRegistry
from lingokit.runtime.resolver import KeyResolution, find_leaf, resolve_key
from lingokit.runtime.selector import Selection, select_variant
from lingokit.runtime.value_types import Scalar, VariantMap

__all__ = ["TranslationEngine"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _CachedTemplate:
    """Pre-interpolation template plus the degradations that produced it."""

    text: str
    degradations: tuple[Degradation, ...] = ()


class TranslationEngine:
    """Localized string rendering for one active locale.

    Example - In-memory content:
        >>> loader = MappingContentLoader({
        ...     "en": {"greet": {"hello": {"one": "Hello friend",
        ...                                "other": "Hello {count} friends"}}},
        ... })
        >>> engine = TranslationEngine(loader)
        >>> engine.translate("greet.hello", count=5)
        'Hello 5 friends'

    Example - Text experiment:
        >>> _ = engine.register_test("cta.button", {"A": "Book now", "B": "Reserve today"})
        >>> engine.translate("cta.button", ab_test="cta.button", user_id="user-42")
        # Returns the user's variant; the same user always gets the same text

    Attributes:
        locale: Active locale code (canonical POSIX form)
        default_locale: Locale consulted when the active locale lacks a key
    """

    __slots__ = (
        "_active_store",
        "_analytics",
        "_cache",
        "_cache_config",
        "_clock",
        "_default_locale",
        "_default_store",
        "_experiments",
        "_loader",
        "_locale",
        "_lock",
        "_on_fallback",
        "_plural_rules",
        "_profiles",
    )

    def __init__(
        self,
        loader: ContentLoader,
        locale: LocaleCode | None = None,
        *,
        default_locale: LocaleCode = DEFAULT_LOCALE,
        cache: CacheConfig | None = None,
        analytics: UsageAnalytics | None = None,
        experiments: ABTestManager | None = None,
        plural_rules: PluralRuleRegistry | None = None,
        profiles: Mapping[str, LocaleProfile] | None = None,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        """Initialize the engine and load content.

        Args:
            loader: Source of TranslationStores
            locale: Active locale (default: default_locale)
            default_locale: Locale consulted on a miss (default: "en")
            cache: Cache configuration (default: CacheConfig())
            analytics: Usage collector (default: a new UsageAnalytics)
            experiments: A/B test manager (default: a new ABTestManager)
            plural_rules: Plural rule registry (default: built-in rules)
            profiles: Host overrides for locale profiles, keyed by locale code
            on_fallback: Optional callback invoked when a key is served from
                        the default locale instead of the active locale.
                        Useful for monitoring missing translations.
            clock: Seconds source used to time translate() calls

        Raises:
            ContentLoadError: If the default locale's content cannot be loaded
        """
        self._loader = loader
        self._default_locale = locale_key(default_locale)
        self._cache_config = cache if cache is not None else CacheConfig()
        self._cache = TranslationCache(self._cache_config)
        self._analytics = analytics if analytics is not None else UsageAnalytics()
        self._experiments = experiments if experiments is not None else ABTestManager()
        self._plural_rules = plural_rules
        self._profiles = (
            {locale_key(code): profile for code, profile in profiles.items()}
            if profiles is not None
            else None
        )
        self._on_fallback = on_fallback
        self._clock = clock
        self._lock = RLock()

        # The default locale is the last content tier, so it must load
        try:
            self._default_store: TranslationStore = loader.load(self._default_locale)
        except LookupError as e:
            msg = f"Content for default locale '{self._default_locale}' could not be loaded"
            raise ContentLoadError(msg) from e

        self._locale = self._default_locale
        self._active_store: TranslationStore | None = self._default_store
        if locale is not None:
            self.set_locale(locale)

    def _load(self, locale: LocaleCode) -> TranslationStore | None:
        """Load a store, reporting unknown locales instead of raising."""
        if locale == self._default_locale:
            return self._default_store
        try:
            return self._loader.load(locale)
        except LookupError:
            logger.warning(
                "No content for locale '%s'; keys will resolve from '%s'",
                locale,
                self._default_locale,
            )
            return None

    # ------------------------------------------------------------------
    # Locale state
    # ------------------------------------------------------------------

    def set_locale(self, locale: LocaleCode) -> None:
        """Activate a locale.

        Loads the locale's content once and clears the template cache. The
        default locale reuses the store loaded at construction. A locale with
        no content stays active and every key resolves from the default
        locale.

        Args:
            locale: Locale code in BCP-47 or POSIX format
        """
        code = locale_key(locale)
        store = self._load(code)
        with self._lock:
            self._locale = code
            self._active_store = store
            self._cache.clear()
        logger.info("Activated locale '%s'", code)

    @property
    def locale(self) -> LocaleCode:
        """Active locale code."""
        with self._lock:
            return self._locale

    @property
    def default_locale(self) -> LocaleCode:
        """Locale consulted when the active locale lacks a key."""
        return self._default_locale

    @property
    def profile(self) -> LocaleProfile:
        """Presentation profile of the active locale."""
        return resolve_profile(self.locale, self._profiles)

    @property
    def cache(self) -> TranslationCache:
        """Template cache; a host scheduler calls ``cache.cleanup()``."""
        return self._cache

    @property
    def cache_config(self) -> CacheConfig:
        """Cache configuration in effect."""
        return self._cache_config

    @property
    def analytics(self) -> UsageAnalytics:
        """Usage collector."""
        return self._analytics

    @property
    def experiments(self) -> ABTestManager:
        """A/B test manager."""
        return self._experiments

    def __repr__(self) -> str:
        """Return string representation for debugging.

        Example:
            >>> repr(TranslationEngine(loader, "de"))
            "TranslationEngine(locale='de', default_locale='en', cached=0)"
        """
        return (
            f"TranslationEngine(locale={self.locale!r}, "
            f"default_locale={self._default_locale!r}, cached={len(self._cache)})"
        )

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def translate(
        self,
        key: TranslationKey,
        options: TranslationOptions | Mapping[str, Any] | None = None,
        /,
        *,
        ab_test: str | None = None,
        user_id: str | None = None,
        **kwargs: Any,
    ) -> str:
        """Render a key for the active locale.

        Never raises for content problems: a missing key renders as the
        caller's ``fallback``, the default locale's text, or the key itself.

        Args:
            key: Dotted translation key
            options: TranslationOptions, or a flat mapping where unknown names
                are interpolation variables
            ab_test: Test key; when registered and user_id is given, the
                user's variant text is rendered instead of content
            user_id: Stable user identifier for experiment bucketing
            **kwargs: Option fields (count, gender, formality, context,
                fallback, region) or interpolation variables

        Returns:
            Rendered string
        """
        started = self._clock()
        opts = (
            options
            if isinstance(options, TranslationOptions)
            else TranslationOptions.from_mapping(options)
        )
        if kwargs:
            opts = opts.merged(**kwargs)

        with self._lock:
            locale = self._locale
            active = self._active_store

        if ab_test is not None and user_id is not None:
            variant = self._experiments.get_variant(ab_test, user_id)
            if variant is not None:
                text = interpolate(variant, opts.interpolation_values())
                self._record(key, locale, started, ())
                return text

        template, from_cache = self._template_for(key, opts, locale, active)
        text = interpolate(template.text, opts.interpolation_values())
        self._record(key, locale, started, template.degradations, replayed=from_cache)
        return text

    def _template_for(
        self,
        key: TranslationKey,
        opts: TranslationOptions,
        locale: LocaleCode,
        active: TranslationStore | None,
    ) -> tuple[_CachedTemplate, bool]:
        """Template for a call and whether it came from the cache."""
        if not self._cache_config.enabled:
            return self._resolve(key, opts, locale, active), False

        cache_key = TranslationCache.make_key(locale, key, opts)
        cached = self._cache.get(cache_key)
        if isinstance(cached, _CachedTemplate):
            logger.debug("Cache hit for '%s'", cache_key)
            return cached, True

        template = self._resolve(key, opts, locale, active)
        self._cache.set(cache_key, template)
        return template, False

    def _resolve(
        self,
        key: TranslationKey,
        opts: TranslationOptions,
        locale: LocaleCode,
        active: TranslationStore | None,
    ) -> _CachedTemplate:
        resolution = resolve_key(
            key,
            active,
            self._default_store,
            opts,
            active_locale=locale,
            default_locale=self._default_locale,
        )
        # Plural rules follow the locale whose content was served
        served_by = (
            self._default_locale if resolution.tier is ResolutionTier.DEFAULT_LOCALE else locale
        )
        selection = select_variant(resolution.value, opts, served_by, self._plural_rules)
        degradations = self._degradations(key, locale, opts, resolution, selection)
        return _CachedTemplate(selection.text, degradations)

    def _degradations(
        self,
        key: TranslationKey,
        locale: LocaleCode,
        opts: TranslationOptions,
        resolution: KeyResolution,
        selection: Selection,
    ) -> tuple[Degradation, ...]:
        found: list[Degradation] = []

        match resolution.code:
            case None:
                pass
            case DiagnosticCode.DEFAULT_LOCALE_USED:
                message = f"'{key}' not found in '{locale}'; served from '{self._default_locale}'"
                found.append(Degradation(resolution.code, message, locale, key))
            case DiagnosticCode.FALLBACK_OPTION_USED:
                message = f"'{key}' not found in '{locale}'; caller fallback used"
                found.append(Degradation(resolution.code, message, locale, key))
            case DiagnosticCode.KEY_NOT_LEAF:
                message = f"'{key}' names a group of keys, not a translation"
                found.append(Degradation(resolution.code, message, locale, key))
            case _:
                searched = (
                    f"'{locale}' or '{self._default_locale}'"
                    if resolution.lookups > 1
                    else f"'{locale}'"
                )
                message = f"'{key}' not found in {searched}"
                found.append(Degradation(resolution.code, message, locale, key))

        if selection.plural_miss:
            message = (
                f"'{key}' has no '{selection.plural_category}' variant for count {opts.count!r}"
            )
            found.append(Degradation(DiagnosticCode.PLURAL_CATEGORY_MISS, message, locale, key))

        if selection.source in (SelectionSource.FIRST, SelectionSource.COERCED):
            message = f"'{key}' has no variant for the requested options; used {selection.source}"
            found.append(Degradation(DiagnosticCode.VARIANT_UNRESOLVED, message, locale, key))

        return tuple(found)

    def _record(
        self,
        key: TranslationKey,
        locale: LocaleCode,
        started: float,
        degradations: tuple[Degradation, ...],
        *,
        replayed: bool = False,
    ) -> None:
        """Record usage first, then each degradation, then notify observers."""
        elapsed_ms = (self._clock() - started) * 1000
        self._analytics.track_translation(key, locale, elapsed_ms)
        for degradation in degradations:
            self._analytics.track_error(degradation, replayed=replayed)
            if degradation.code is DiagnosticCode.DEFAULT_LOCALE_USED and self._on_fallback:
                self._on_fallback(FallbackInfo(locale, self._default_locale, key))

    def has_key(self, key: TranslationKey) -> bool:
        """True when the active locale can serve the key without fallback."""
        with self._lock:
            active = self._active_store
        return isinstance(find_leaf(active, key), Scalar | VariantMap)

    # ------------------------------------------------------------------
    # Cache
    # ------------------------------------------------------------------

    def clear_cache(self) -> None:
        """Drop every cached template (e.g. after a content redeploy)."""
        self._cache.clear()

    def get_cache_stats(self) -> dict[str, int | float | bool]:
        """Cache metrics plus whether caching is enabled.

        Returns:
            TranslationCache.get_stats() keys and ``enabled`` (bool)
        """
        return {**self._cache.get_stats(), "enabled": self._cache_config.enabled}

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    def _formatted(self, render: Callable[[], str]) -> str:
        """Run a formatter, falling back to its unformatted value on failure."""
        try:
            return render()
        except FormattingError as e:
            logger.warning("%s", e)
            return e.fallback_value

    def format_number(
        self,
        value: int | float | Decimal,
        *,
        minimum_fraction_digits: int = 0,
        maximum_fraction_digits: int = 3,
        use_grouping: bool = True,
        native_digits: bool = False,
    ) -> str:
        """Format a number for the active locale.

        Never raises for unformattable values; the plain value is returned
        and a warning logged. See lingokit.runtime.formatting.format_number().

        Example:
            >>> TranslationEngine(loader, "de").format_number(1234.5)
            '1.234,5'
        """
        return self._formatted(
            lambda: format_number(
                value,
                self.locale,
                minimum_fraction_digits=minimum_fraction_digits,
                maximum_fraction_digits=maximum_fraction_digits,
                use_grouping=use_grouping,
                native_digits=native_digits,
            )
        )

    def format_currency(
        self,
        value: int | float | Decimal,
        currency: str,
        *,
        currency_display: Literal["symbol", "name"] = "symbol",
    ) -> str:
        """Format a monetary amount for the active locale."""
        return self._formatted(
            lambda: format_currency(
                value, self.locale, currency, currency_display=currency_display
            )
        )

    def format_date(
        self,
        value: datetime | date | str,
        *,
        date_style: Literal["short", "medium", "long", "full"] = "medium",
        time_style: Literal["short", "medium", "long", "full"] | None = None,
    ) -> str:
        """Format a date (and optionally its time) for the active locale."""
        return self._formatted(
            lambda: format_date(value, self.locale, date_style=date_style, time_style=time_style)
        )

    def format_relative(self, value: datetime, *, now: datetime | None = None) -> str:
        """Describe a moment relative to now in the active locale."""
        return self._formatted(lambda: format_relative(value, self.locale, now=now))

    # ------------------------------------------------------------------
    # Experiments
    # ------------------------------------------------------------------

    def register_test(
        self,
        key: str,
        variant_texts: Mapping[str, str],
        distribution: Mapping[str, float] | None = None,
    ) -> ABTest:
        """Register a text experiment. See ABTestManager.register_test()."""
        return self._experiments.register_test(key, variant_texts, distribution)

    def get_variant(self, key: str, user_id: str) -> str | None:
        """Serve and count the user's variant. See ABTestManager.get_variant()."""
        return self._experiments.get_variant(key, user_id)

    def record_conversion(self, key: str, user_id: str) -> None:
        """Attribute a conversion. See ABTestManager.record_conversion()."""
        self._experiments.record_conversion(key, user_id)

    def get_results(self, key: str) -> dict[str, VariantResult] | None:
        """Per-variant results. See ABTestManager.get_results()."""
        return self._experiments.get_results(key)
