"""Locale-aware number, currency and date formatting.

Thin functions over Babel's CLDR formatters. Interpolation stays a plain
string substitution; callers format values with these functions (or the
engine's format_* methods) before passing them as variables.

Locales without CLDR data format with the default locale's conventions.
Formatting failures raise FormattingError carrying an unformatted fallback.

Python 3.13+. Depends on Babel.
"""

from __future__ import annotations

import logging
import math
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Literal

from babel import dates as babel_dates
from babel import numbers as babel_numbers
from babel.core import UnknownLocaleError

from lingokit.constants import DEFAULT_LOCALE, NATIVE_NUMBERING_SYSTEMS
from lingokit.diagnostics import FormattingError
from lingokit.locale_utils import get_babel_locale

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "format_currency",
    "format_date",
    "format_number",
    "format_relative",
]

logger = logging.getLogger(__name__)

type Number = int | float | Decimal
type FormatStyle = Literal["short", "medium", "long", "full"]

# First code point of each native digit block; digits are contiguous.
_DIGIT_ZERO: dict[str, int] = {
    "arab": 0x0660,
    "arabext": 0x06F0,
    "deva": 0x0966,
    "beng": 0x09E6,
    "thai": 0x0E50,
}

# Relative time units, largest first, with their length in seconds.
_RELATIVE_UNITS: tuple[tuple[str, float], ...] = (
    ("day", 86400.0),
    ("hour", 3600.0),
    ("minute", 60.0),
)


def _locale(locale: str) -> Locale:
    """Babel locale for a tag, or the default locale's when CLDR lacks it."""
    try:
        return get_babel_locale(locale)
    except (UnknownLocaleError, ValueError):
        logger.debug("No CLDR data for '%s'; formatting with '%s'", locale, DEFAULT_LOCALE)
        return get_babel_locale(DEFAULT_LOCALE)


def _to_native_digits(text: str, system: str) -> str:
    zero = _DIGIT_ZERO[system]
    return text.translate({ord("0") + i: zero + i for i in range(10)})


def _number_pattern(minimum: int, maximum: int, grouping: bool) -> str:
    integer_part = "#,##0" if grouping else "0"
    if maximum == 0:
        return integer_part
    required = "0" * minimum
    optional = "#" * (maximum - minimum)
    return f"{integer_part}.{required}{optional}"


def format_number(
    value: Number,
    locale: str,
    *,
    minimum_fraction_digits: int = 0,
    maximum_fraction_digits: int = 3,
    use_grouping: bool = True,
    native_digits: bool = False,
) -> str:
    """Format a number with locale-specific separators.

    Args:
        value: Number to format
        locale: Locale code in BCP-47 or POSIX format
        minimum_fraction_digits: Minimum decimal places (default: 0)
        maximum_fraction_digits: Maximum decimal places (default: 3)
        use_grouping: Use the locale's group separator (default: True)
        native_digits: Render Arabic, Persian, Hindi, Bengali and Thai numbers
            in their native digits (default: False)

    Returns:
        Formatted number

    Raises:
        FormattingError: If the value cannot be formatted

    Examples:
        >>> format_number(1234.5, "en")
        '1,234.5'
        >>> format_number(1234.5, "de")
        '1.234,5'
        >>> format_number(3, "en", minimum_fraction_digits=2, maximum_fraction_digits=2)
        '3.00'
    """
    if minimum_fraction_digits > maximum_fraction_digits:
        msg = "minimum_fraction_digits must not exceed maximum_fraction_digits"
        raise ValueError(msg)

    babel_locale = _locale(locale)
    pattern = _number_pattern(minimum_fraction_digits, maximum_fraction_digits, use_grouping)
    system = NATIVE_NUMBERING_SYSTEMS.get(babel_locale.language) if native_digits else None

    try:
        if system is None:
            return str(babel_numbers.format_decimal(value, format=pattern, locale=babel_locale))
        try:
            text = babel_numbers.format_decimal(
                value, format=pattern, locale=babel_locale, numbering_system=system
            )
        except babel_numbers.UnsupportedNumberingSystemError:
            # Locale has no separators for the native system; keep Latin ones
            text = babel_numbers.format_decimal(value, format=pattern, locale=babel_locale)
        return _to_native_digits(str(text), system)
    except (ValueError, TypeError, InvalidOperation, AttributeError, KeyError) as e:
        msg = f"Number formatting failed for '{value}': {e}"
        raise FormattingError(msg, fallback_value=str(value)) from e


def format_currency(
    value: Number,
    locale: str,
    currency: str,
    *,
    currency_display: Literal["symbol", "name"] = "symbol",
) -> str:
    """Format a monetary amount.

    Currency-specific decimal places (JPY 0, BHD 3, most others 2) come from
    CLDR.

    Args:
        value: Monetary amount
        locale: Locale code in BCP-47 or POSIX format
        currency: ISO 4217 code (EUR, USD, NGN, ...)
        currency_display: "symbol" (default) or "name" ("US dollars")

    Returns:
        Formatted amount

    Raises:
        FormattingError: If the value or currency cannot be formatted

    Examples:
        >>> format_currency(123.45, "en", "EUR")
        '€123.45'
    """
    format_type: Literal["name", "standard"] = "name" if currency_display == "name" else "standard"
    try:
        return str(
            babel_numbers.format_currency(
                value,
                currency,
                locale=_locale(locale),
                currency_digits=True,
                format_type=format_type,
            )
        )
    except (ValueError, TypeError, InvalidOperation, AttributeError, KeyError) as e:
        msg = f"Currency formatting failed for '{currency} {value}': {e}"
        raise FormattingError(msg, fallback_value=f"{currency} {value}") from e


def _as_datetime(value: datetime | date | str) -> datetime | date:
    if not isinstance(value, str):
        return value
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        msg = f"Invalid datetime string '{value}': not ISO 8601 format"
        raise FormattingError(msg, fallback_value=value) from e


def format_date(
    value: datetime | date | str,
    locale: str,
    *,
    date_style: FormatStyle = "medium",
    time_style: FormatStyle | None = None,
) -> str:
    """Format a date, optionally with its time.

    Args:
        value: datetime, date or ISO 8601 string
        locale: Locale code in BCP-47 or POSIX format
        date_style: CLDR date style (default: "medium")
        time_style: CLDR time style; None formats the date only

    Returns:
        Formatted date

    Raises:
        FormattingError: If a string is not ISO 8601 or formatting fails

    Examples:
        >>> format_date(datetime(2025, 10, 27, 14, 30, tzinfo=UTC), "en", date_style="short")
        '10/27/25'
        >>> format_date("2025-10-27", "de", date_style="short")
        '27.10.25'
    """
    moment = _as_datetime(value)
    babel_locale = _locale(locale)
    try:
        date_text = babel_dates.format_date(moment, format=date_style, locale=babel_locale)
        if time_style is None or not isinstance(moment, datetime):
            return str(date_text)
        time_text = babel_dates.format_time(moment, format=time_style, locale=babel_locale)
        # CLDR combining pattern: {0} is the time, {1} the date; quotes mark literals
        combining = str(babel_dates.get_datetime_format(date_style, locale=babel_locale))
        return combining.replace("'", "").replace("{0}", time_text).replace("{1}", date_text)
    except (ValueError, OverflowError, AttributeError, KeyError) as e:
        msg = f"Date formatting failed for '{moment}': {e}"
        raise FormattingError(msg, fallback_value=moment.isoformat()) from e


def format_relative(
    value: datetime,
    locale: str,
    *,
    now: datetime | None = None,
    style: Literal["long", "short", "narrow"] = "long",
) -> str:
    """Describe a moment relative to now ("in 3 days", "vor 2 Stunden").

    The unit is days when the distance is at least one day, then hours,
    then minutes, then seconds; the amount is rounded in that unit.

    Args:
        value: Moment to describe (aware datetimes compare in UTC)
        locale: Locale code in BCP-47 or POSIX format
        now: Reference moment (default: current UTC time)
        style: CLDR unit style (default: "long")

    Returns:
        Relative time phrase

    Raises:
        FormattingError: If formatting fails

    Example:
        >>> start = datetime(2026, 1, 10, tzinfo=UTC)
        >>> format_relative(start - timedelta(days=3), "en", now=start)
        '3 days ago'
    """
    reference = now if now is not None else datetime.now(UTC)
    delta: timedelta = value - reference
    seconds = delta.total_seconds()
    unit = next(
        (name for name, length in _RELATIVE_UNITS if abs(seconds) >= length),
        "second",
    )
    try:
        # Infinite threshold: Babel renders in exactly the chosen unit
        return str(
            babel_dates.format_timedelta(
                delta,
                granularity=unit,
                threshold=math.inf,
                add_direction=True,
                format=style,
                locale=_locale(locale),
            )
        )
    except (ValueError, TypeError, AttributeError, KeyError) as e:
        msg = f"Relative time formatting failed for '{value}': {e}"
        raise FormattingError(msg, fallback_value=value.isoformat()) from e
