"""Locale presentation profiles.

A LocaleProfile describes how a locale is presented: its text direction,
native display name and default register. Profiles are resolved on demand
from Babel's CLDR data, optionally overridden per locale by the host. No
shared table is filled in at import time.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal

from babel.core import UnknownLocaleError

from lingokit.constants import MAX_LOCALE_CACHE_SIZE
from lingokit.locale_utils import get_babel_locale, locale_key

__all__ = ["LocaleProfile", "resolve_profile"]

logger = logging.getLogger(__name__)

type TextDirection = Literal["ltr", "rtl"]


@dataclass(frozen=True, slots=True)
class LocaleProfile:
    """Presentation facts for one locale.

    Attributes:
        code: Canonical locale code
        language: Language subtag
        text_direction: "ltr" or "rtl"
        display_name: Locale name in its own language
        formality: Default register used by product copy
    """

    code: str
    language: str
    text_direction: TextDirection
    display_name: str
    formality: str = "neutral"

    @property
    def is_rtl(self) -> bool:
        """True for right-to-left scripts."""
        return self.text_direction == "rtl"


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def _profile_from_cldr(code: str) -> LocaleProfile:
    language = code.split("_", 1)[0]
    try:
        babel_locale = get_babel_locale(code)
    except (UnknownLocaleError, ValueError):
        logger.debug("No CLDR data for '%s'; using default profile", code)
        return LocaleProfile(code, language, "ltr", code)

    direction: TextDirection = "rtl" if babel_locale.text_direction == "rtl" else "ltr"
    display_name = babel_locale.get_display_name() or code
    return LocaleProfile(code, babel_locale.language, direction, display_name)


def resolve_profile(
    locale: str,
    overrides: Mapping[str, LocaleProfile] | None = None,
) -> LocaleProfile:
    """Return the profile for a locale.

    Args:
        locale: Locale code in BCP-47 or POSIX format
        overrides: Host-supplied profiles keyed by canonical locale code

    Returns:
        The override when present, otherwise a profile computed from CLDR.
        Locales unknown to CLDR get a left-to-right profile named by code.

    Example:
        >>> resolve_profile("ar").text_direction
        'rtl'
        >>> resolve_profile("pt-BR").code
        'pt_BR'
    """
    code = locale_key(locale)
    if overrides is not None and code in overrides:
        return overrides[code]
    return _profile_from_cldr(code)
