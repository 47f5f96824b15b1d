"""Per-call translation options.

TranslationOptions carries the disambiguation dimensions used by the
contextual selector (count, gender, formality, context), the caller's
fallback text, and free interpolation variables.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from decimal import Decimal
from types import MappingProxyType
from typing import Any

__all__ = ["TranslationOptions"]


@dataclass(frozen=True, slots=True)
class TranslationOptions:
    """Immutable options for one translate() call.

    All fields are optional. Named fields are also available to interpolation,
    so a template can render {count} or {gender} directly.

    Attributes:
        count: Quantity selecting the plural category. Negative counts select
            by magnitude.
        context: Named context variant (e.g. "button", "title")
        fallback: Text returned when the key is missing from the active locale
        gender: Gender variant (e.g. "male", "female", "neutral")
        formality: Formality variant (e.g. "formal", "informal")
        region: Region hint, available to interpolation only
        variables: Free interpolation variables

    Example:
        >>> opts = TranslationOptions.from_mapping({"count": 3, "city": "Lagos"})
        >>> opts.count
        3
        >>> dict(opts.variables)
        {'city': 'Lagos'}
    """

    count: int | float | Decimal | None = None
    context: str | None = None
    fallback: str | None = None
    gender: str | None = None
    formality: str | None = None
    region: str | None = None
    variables: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "variables", MappingProxyType(dict(self.variables)))

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None) -> TranslationOptions:
        """Build options from a flat mapping.

        Recognized names fill the matching fields; every other entry becomes an
        interpolation variable.

        Args:
            options: Flat options mapping, or None

        Returns:
            New TranslationOptions
        """
        if not options:
            return cls()
        named = _NAMED_FIELDS
        return cls(
            **{name: value for name, value in options.items() if name in named},
            variables={name: value for name, value in options.items() if name not in named},
        )

    def merged(self, **overrides: Any) -> TranslationOptions:
        """Return a copy with named fields and variables updated.

        Unknown keyword names are added to the interpolation variables.
        """
        named = {name: value for name, value in overrides.items() if name in _NAMED_FIELDS}
        extra = {name: value for name, value in overrides.items() if name not in _NAMED_FIELDS}
        current = {name: getattr(self, name) for name in _NAMED_FIELDS}
        return TranslationOptions(
            **(current | named),
            variables=dict(self.variables) | extra,
        )

    def interpolation_values(self) -> dict[str, Any]:
        """All values available to {name} placeholders.

        Named fields that are set take precedence over same-named variables.
        """
        values = dict(self.variables)
        for name in _NAMED_FIELDS:
            value = getattr(self, name)
            if value is not None:
                values[name] = value
        return values

    def selection_key(self) -> tuple[tuple[str, str], ...]:
        """Stable serialization of the fields that shape the template.

        Used as part of the cache key. Interpolation variables are excluded:
        templates are cached before interpolation.
        """
        return tuple(
            (name, repr(value))
            for name in ("count", "gender", "formality", "context", "fallback")
            if (value := getattr(self, name)) is not None
        )


_NAMED_FIELDS: frozenset[str] = frozenset(
    f.name for f in fields(TranslationOptions) if f.name != "variables"
)
