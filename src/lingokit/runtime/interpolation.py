"""Variable interpolation for resolved translation strings.

Replaces {name} placeholders with string-coerced values. Placeholders with no
matching value stay in the output verbatim so missing variables remain visible
while debugging a screen.

Python 3.13+. Zero external dependencies.
"""

import re
from collections.abc import Mapping

__all__ = ["PLACEHOLDER_PATTERN", "find_placeholders", "interpolate"]

PLACEHOLDER_PATTERN: re.Pattern[str] = re.compile(r"\{(\w+)\}")
"""Matches {name} where name is one or more word characters."""


def interpolate(template: str, values: Mapping[str, object] | None = None) -> str:
    """Substitute {name} placeholders in a template.

    Args:
        template: Scalar translation string
        values: Placeholder values; None values count as missing

    Returns:
        Template with every known placeholder replaced by str(value)

    Example:
        >>> interpolate("Hello {count} friends", {"count": 5})
        'Hello 5 friends'
        >>> interpolate("Hi {name}, {missing}", {"name": "Ana"})
        'Hi Ana, {missing}'
    """
    if not values or "{" not in template:
        return template

    def _substitute(match: re.Match[str]) -> str:
        value = values.get(match.group(1))
        return match.group(0) if value is None else str(value)

    return PLACEHOLDER_PATTERN.sub(_substitute, template)


def find_placeholders(template: str) -> frozenset[str]:
    """Return the placeholder names used in a template.

    Example:
        >>> sorted(find_placeholders("{count} jobs near {city}"))
        ['city', 'count']
    """
    return frozenset(PLACEHOLDER_PATTERN.findall(template))
