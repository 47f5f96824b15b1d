"""Key resolution through a bounded fallback chain.

Walks a dotted key ("booking.confirm.title") through a locale's content tree
and returns a tagged raw value. The fallback chain has a fixed length:

    active locale -> caller fallback text | default locale -> literal key

so resolution always terminates after at most two store lookups and never
raises. Missing content degrades to visible text.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from lingokit.diagnostics import DiagnosticCode
from lingokit.enums import ResolutionTier
from lingokit.runtime.options import TranslationOptions
from lingokit.runtime.value_types import RawValue, Scalar, TranslationStore, classify_leaf

__all__ = ["KeyResolution", "find_leaf", "resolve_key"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class KeyResolution:
    """Outcome of resolving a key through the fallback chain.

    Attributes:
        value: Tagged raw value (always present)
        tier: Fallback tier that produced the value
        lookups: Number of content stores consulted (1 or 2)
        code: Degradation code when the active locale could not serve the key,
            None on a clean hit
    """

    value: RawValue
    tier: ResolutionTier
    lookups: int
    code: DiagnosticCode | None = None

    @property
    def degraded(self) -> bool:
        """True when the active locale could not serve the key."""
        return self.code is not None


class _Subtree:
    """Marker: the path ended on a nested mapping rather than a leaf."""


_SUBTREE = _Subtree()


def _walk(node: object, segments: tuple[str, ...]) -> object | None:
    """Descend through node along segments.

    At each level the longest dotted run of remaining segments that exists as
    a literal member wins, so flat stores ({"greet.hello": ...}) and nested
    stores ({"greet": {"hello": ...}}) resolve the same key. Shorter runs are
    tried when a longer match dead-ends.
    """
    if not segments:
        return node
    if not isinstance(node, Mapping):
        return None
    for split in range(len(segments), 0, -1):
        head = ".".join(segments[:split])
        if head in node:
            found = _walk(node[head], segments[split:])
            if found is not None:
                return found
    return None


def find_leaf(store: TranslationStore | None, key: str) -> RawValue | _Subtree | None:
    """Look up a dotted key in one content store.

    Args:
        store: Locale content tree, or None when the locale is not loaded
        key: Dotted key path

    Returns:
        Tagged raw value, _SUBTREE when the path ends on a nested mapping,
        None when any segment is missing
    """
    if not store or not key:
        return None
    node = _walk(store, tuple(key.split(".")))
    if node is None:
        return None
    leaf = classify_leaf(node)
    return _SUBTREE if leaf is None else leaf


def resolve_key(
    key: str,
    active: TranslationStore | None,
    default: TranslationStore | None,
    options: TranslationOptions,
    *,
    active_locale: str,
    default_locale: str,
) -> KeyResolution:
    """Resolve a key through the fallback chain.

    On a miss in the active locale: caller fallback text wins if provided;
    otherwise the default locale is tried when it differs from the active
    locale; otherwise the literal key is returned.

    Args:
        key: Dotted key path
        active: Active locale's store
        default: Default locale's store
        options: Translation options (only ``fallback`` is consulted)
        active_locale: Active locale code
        default_locale: Default locale code

    Returns:
        KeyResolution; never raises

    Example:
        >>> store = {"cta": {"book": "Book now"}}
        >>> resolve_key("cta.book", store, store, TranslationOptions(),
        ...             active_locale="en", default_locale="en").value
        Scalar(text='Book now')
    """
    found = find_leaf(active, key)
    if found is not None and found is not _SUBTREE:
        return KeyResolution(found, ResolutionTier.ACTIVE, lookups=1)

    code = DiagnosticCode.KEY_NOT_LEAF if found is _SUBTREE else DiagnosticCode.MISSING_KEY

    if options.fallback is not None:
        logger.debug("Key '%s' missing in '%s'; using caller fallback", key, active_locale)
        return KeyResolution(
            Scalar(str(options.fallback)),
            ResolutionTier.FALLBACK_OPTION,
            lookups=1,
            code=DiagnosticCode.FALLBACK_OPTION_USED,
        )

    if active_locale != default_locale:
        found = find_leaf(default, key)
        if found is not None and found is not _SUBTREE:
            logger.debug("Key '%s' resolved from default locale '%s'", key, default_locale)
            return KeyResolution(
                found,
                ResolutionTier.DEFAULT_LOCALE,
                lookups=2,
                code=DiagnosticCode.DEFAULT_LOCALE_USED,
            )
        if found is _SUBTREE:
            code = DiagnosticCode.KEY_NOT_LEAF
        return KeyResolution(Scalar(key), ResolutionTier.LITERAL_KEY, lookups=2, code=code)

    return KeyResolution(Scalar(key), ResolutionTier.LITERAL_KEY, lookups=1, code=code)
