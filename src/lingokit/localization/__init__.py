"""Localization package for TranslationEngine.

Provides the translate facade, content loading infrastructure and locale
presentation profiles.

Submodules:
    types      - PEP 695 type aliases (LocaleCode, TranslationKey, TranslationStore)
    loading    - ContentLoader protocol, MappingContentLoader, FallbackInfo
    profiles   - LocaleProfile and resolve_profile
    engine     - TranslationEngine (translate facade)

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from lingokit.localization.engine import TranslationEngine
from lingokit.localization.loading import ContentLoader, FallbackInfo, MappingContentLoader
from lingokit.localization.profiles import LocaleProfile, resolve_profile
from lingokit.localization.types import LocaleCode, TranslationKey, TranslationStore

__all__ = [
    # Facade
    "TranslationEngine",
    # Loader protocol and implementations
    "ContentLoader",
    "MappingContentLoader",
    # Fallback observability
    "FallbackInfo",
    # Locale presentation
    "LocaleProfile",
    "resolve_profile",
    # Type aliases for user code type annotations
    "LocaleCode",
    "TranslationKey",
    "TranslationStore",
]
