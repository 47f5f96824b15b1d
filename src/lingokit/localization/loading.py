"""Content loading infrastructure for TranslationEngine.

Provides the protocol for content loaders, an in-memory implementation, and
the record handed to fallback observers.

Components:
    ContentLoader - Protocol for loading one locale's TranslationStore
    MappingContentLoader - Loader over an in-memory mapping of stores
    FallbackInfo - Immutable record of a default-locale fallback event

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Protocol

from lingokit.locale_utils import locale_key
from lingokit.localization.types import LocaleCode, TranslationKey, TranslationStore

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "ContentLoader",
    # Concrete loader
    "MappingContentLoader",
    # Fallback observability
    "FallbackInfo",
]


class ContentLoader(Protocol):
    """Protocol for loading a locale's content tree.

    This is a Protocol (structural typing) rather than ABC to allow
    maximum flexibility for users implementing custom loaders, such as
    a loader reading bundled JSON or a deployment's content service.

    Example:
        >>> class JsonLoader:
        ...     def load(self, locale: str) -> Mapping[str, object]:
        ...         path = Path(f"messages/{locale}.json")
        ...         return json.loads(path.read_text(encoding="utf-8"))
        ...
        >>> engine = TranslationEngine(JsonLoader(), "fr")
    """

    def load(self, locale: LocaleCode) -> TranslationStore:
        """Load the content tree for a locale.

        Called once per locale activation; the engine treats the returned
        store as immutable for the rest of the session.

        Args:
            locale: Normalized locale code (e.g., 'en', 'pt_BR')

        Returns:
            The locale's TranslationStore

        Raises:
            LookupError: If no content exists for this locale
        """


@dataclass(frozen=True, slots=True)
class MappingContentLoader:
    """Loader over in-memory stores keyed by locale.

    Keys are normalized on construction, so "pt-BR" and "pt_BR" name the
    same store.

    Example:
        >>> loader = MappingContentLoader({"en": {"cta": {"book": "Book now"}}})
        >>> loader.load("en")["cta"]["book"]
        'Book now'

    Attributes:
        stores: Locale code -> TranslationStore
    """

    stores: Mapping[LocaleCode, TranslationStore] = field(default_factory=dict)

    def __post_init__(self) -> None:
        normalized = {locale_key(locale): store for locale, store in self.stores.items()}
        object.__setattr__(self, "stores", MappingProxyType(normalized))

    def load(self, locale: LocaleCode) -> TranslationStore:
        """Return the store for a locale.

        Raises:
            KeyError: If the locale has no store
        """
        return self.stores[locale_key(locale)]

    @property
    def locales(self) -> tuple[LocaleCode, ...]:
        """Locales with content, in definition order."""
        return tuple(self.stores)


@dataclass(frozen=True, slots=True)
class FallbackInfo:
    """Information about a locale fallback event.

    Provided to the on_fallback callback when TranslationEngine resolves a
    key from the default locale because the active locale lacks it.

    Attributes:
        requested_locale: The active locale
        resolved_locale: The locale that actually contained the key
        key: The translation key that was resolved

    Example:
        >>> def log_fallback(info: FallbackInfo) -> None:
        ...     print(f"Fallback: {info.key} resolved from "
        ...           f"{info.resolved_locale} (requested {info.requested_locale})")
        >>> engine = TranslationEngine(loader, "de", on_fallback=log_fallback)
    """

    requested_locale: LocaleCode
    resolved_locale: LocaleCode
    key: TranslationKey
