"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the localization package
and by user code when annotating TranslationEngine call sites.

Python 3.13+. Zero external dependencies.
"""

from lingokit.runtime.value_types import TranslationStore

__all__ = [
    "LocaleCode",
    "TranslationKey",
    "TranslationStore",
]

type TranslationKey = str
"""Dotted translation key (e.g., 'booking.confirm.title')."""

type LocaleCode = str
"""Locale code in BCP-47 or POSIX form (e.g., 'en', 'pt-BR', 'zh_TW')."""
