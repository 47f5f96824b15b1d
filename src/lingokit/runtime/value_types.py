"""Core value types for the translation runtime.

Defines the tagged union produced by key resolution:
    - Scalar: A plain translation string
    - VariantMap: Alternatives keyed by plural/gender/formality/context
    - RawValue: Scalar | VariantMap

Content stores are untyped nested mappings. classify_leaf() converts a store
leaf into the tagged union once, so selection dispatches on the tag instead of
sniffing the runtime shape of the value.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

__all__ = [
    "RawValue",
    "Scalar",
    "TranslationStore",
    "TranslationValue",
    "VariantMap",
    "classify_leaf",
]

type TranslationValue = str | int | float | bool | Mapping[str, "TranslationValue"]
"""Value found in a content store (JSON-compatible)."""


@dataclass(frozen=True, slots=True)
class Scalar:
    """A single translation string.

    Attributes:
        text: Template text, possibly containing {name} placeholders
    """

    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class VariantMap:
    """Alternatives for one key, keyed by a dimension value.

    Keys are plural categories, genders, formality levels, named contexts or
    "default". Values are always strings; variant maps never nest.

    Attributes:
        variants: Read-only mapping preserving the content author's order
    """

    variants: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "variants", MappingProxyType(dict(self.variants)))

    def get(self, dimension: str | None) -> str | None:
        """Return the variant for a dimension value, or None."""
        if dimension is None:
            return None
        return self.variants.get(str(dimension))

    def first(self) -> str | None:
        """Return the first variant in definition order, or None when empty."""
        return next(iter(self.variants.values()), None)

    def __len__(self) -> int:
        return len(self.variants)

    def __str__(self) -> str:
        return str(dict(self.variants))


type RawValue = Scalar | VariantMap

type TranslationStore = Mapping[str, TranslationValue]
"""One locale's content tree: dotted key segments to scalars or variant maps."""


def classify_leaf(value: object) -> RawValue | None:
    """Convert a content store value into the tagged union.

    Args:
        value: Value found at the end of a key path

    Returns:
        Scalar for strings and other JSON scalars, VariantMap for a mapping
        whose values are all scalars, None for a subtree (a mapping that
        contains another mapping) or an unsupported type.

    Example:
        >>> classify_leaf("Book now")
        Scalar(text='Book now')
        >>> classify_leaf({"one": "1 booking", "other": "{count} bookings"})
        VariantMap(variants=mappingproxy({'one': '1 booking', 'other': '{count} bookings'}))
        >>> classify_leaf({"title": {"one": "x"}}) is None
        True
    """
    match value:
        case str():
            return Scalar(value)
        case bool() | int() | float():
            return Scalar(str(value))
        case Mapping():
            variants: dict[str, str] = {}
            for dimension, text in value.items():
                match text:
                    case str():
                        variants[str(dimension)] = text
                    case bool() | int() | float():
                        variants[str(dimension)] = str(text)
                    case _:
                        return None
            return VariantMap(variants)
        case _:
            return None
