"""Tests for locale-aware number, currency and date formatting."""

from datetime import UTC, date, datetime, timedelta
from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lingokit.diagnostics import DiagnosticCode, FormattingError
from lingokit.runtime.formatting import (
    format_currency,
    format_date,
    format_number,
    format_relative,
)

MOMENT = datetime(2025, 10, 27, 14, 30, tzinfo=UTC)
NOW = datetime(2026, 1, 10, 12, 0, tzinfo=UTC)

_ASCII_DIGITS = set("0123456789")


class TestFormatNumber:
    """Separators, fraction digits and digit systems."""

    @pytest.mark.parametrize(
        ("locale", "expected"),
        [("en", "1,234.5"), ("en-US", "1,234.5"), ("de", "1.234,5"), ("de_DE", "1.234,5")],
    )
    def test_locale_separators(self, locale: str, expected: str) -> None:
        """Group and decimal separators follow the locale."""
        assert format_number(1234.5, locale) == expected

    def test_fixed_fraction_digits(self) -> None:
        """Minimum digits pad with zeros."""
        result = format_number(
            1234.5, "en", minimum_fraction_digits=2, maximum_fraction_digits=2
        )
        assert result == "1,234.50"

    def test_maximum_fraction_digits_rounds(self) -> None:
        """Extra digits are rounded away."""
        assert format_number(Decimal("2.71828"), "en", maximum_fraction_digits=2) == "2.72"

    def test_integer_only(self) -> None:
        """Zero fraction digits drops the decimal part."""
        assert format_number(12500, "en", maximum_fraction_digits=0) == "12,500"

    def test_without_grouping(self) -> None:
        """Grouping can be turned off."""
        assert format_number(1234.5, "en", use_grouping=False) == "1234.5"

    def test_minimum_above_maximum_rejected(self) -> None:
        """Inconsistent digit bounds are a caller error."""
        with pytest.raises(ValueError, match="must not exceed"):
            format_number(1, "en", minimum_fraction_digits=3, maximum_fraction_digits=1)

    @pytest.mark.parametrize(
        ("locale", "one"),
        [("ar", "١"), ("fa", "۱"), ("hi", "१"), ("bn", "১"), ("th", "๑")],
    )
    def test_native_digits(self, locale: str, one: str) -> None:
        """Native digit scripts replace Latin digits."""
        result = format_number(1234.5, locale, native_digits=True)
        assert result.startswith(one)
        assert not _ASCII_DIGITS & set(result)

    def test_native_digits_for_latin_locale(self) -> None:
        """Locales without a native script keep Latin digits."""
        assert format_number(1234.5, "en", native_digits=True) == "1,234.5"

    def test_latin_digits_by_default(self) -> None:
        """Arabic uses Latin digits unless native digits are requested."""
        result = format_number(1234.5, "ar")
        assert "1" in result
        assert "١" not in result

    def test_unknown_locale_uses_default(self) -> None:
        """Locales without CLDR data format with the default locale's rules."""
        assert format_number(1234.5, "xx") == "1,234.5"

    def test_unparseable_value(self) -> None:
        """A value that is not a number fails with its text as the fallback."""
        with pytest.raises(FormattingError) as exc_info:
            format_number("abc", "en")  # type: ignore[arg-type]
        assert exc_info.value.fallback_value == "abc"
        assert exc_info.value.code is DiagnosticCode.FORMATTING_FAILED

    @given(st.integers(min_value=-(10**12), max_value=10**12))
    def test_integers_round_trip_without_grouping(self, value: int) -> None:
        """Ungrouped integers print exactly as Python does."""
        assert format_number(value, "en", use_grouping=False) == str(value)


class TestFormatCurrency:
    """Monetary amounts."""

    def test_symbol_before_amount(self) -> None:
        """English puts the symbol first."""
        assert format_currency(123.45, "en", "EUR") == "€123.45"

    def test_symbol_after_amount(self) -> None:
        """German puts the symbol last with locale separators."""
        result = format_currency(1234.5, "de", "EUR")
        assert result.startswith("1.234,50")
        assert result.endswith("€")

    def test_currency_decimal_places(self) -> None:
        """Yen has no minor unit."""
        assert format_currency(1235, "en", "JPY") == "¥1,235"

    def test_name_display(self) -> None:
        """Currency names replace the symbol."""
        assert "US dollars" in format_currency(2, "en", "USD", currency_display="name")

    def test_unparseable_amount(self) -> None:
        """The fallback keeps the currency code and raw amount."""
        with pytest.raises(FormattingError) as exc_info:
            format_currency("abc", "en", "USD")  # type: ignore[arg-type]
        assert exc_info.value.fallback_value == "USD abc"


class TestFormatDate:
    """Date and date-time styles."""

    @pytest.mark.parametrize(
        ("locale", "expected"),
        [("en", "10/27/25"), ("de", "27.10.25")],
    )
    def test_short_style(self, locale: str, expected: str) -> None:
        """Short dates follow the locale's field order."""
        assert format_date(MOMENT, locale, date_style="short") == expected

    def test_long_style(self) -> None:
        """Long dates spell out the month."""
        assert format_date(MOMENT, "en", date_style="long") == "October 27, 2025"

    def test_plain_date(self) -> None:
        """date objects are accepted."""
        assert format_date(date(2025, 10, 27), "en", date_style="long") == "October 27, 2025"

    def test_iso_string(self) -> None:
        """ISO 8601 strings are parsed first."""
        assert format_date("2025-10-27T09:00:00", "de", date_style="short") == "27.10.25"

    def test_with_time(self) -> None:
        """A time style appends the time with the locale's combining pattern."""
        result = format_date(MOMENT, "en", date_style="medium", time_style="short")
        assert result.startswith("Oct 27, 2025")
        assert "2:30" in result

    def test_time_style_ignored_for_plain_date(self) -> None:
        """Dates without a time render the date only."""
        result = format_date(date(2025, 10, 27), "en", date_style="short", time_style="short")
        assert result == "10/27/25"

    def test_invalid_string(self) -> None:
        """A non-ISO string fails with the original text as the fallback."""
        with pytest.raises(FormattingError, match="not ISO 8601") as exc_info:
            format_date("next tuesday", "en")
        assert exc_info.value.fallback_value == "next tuesday"


class TestFormatRelative:
    """Relative time phrases."""

    @pytest.mark.parametrize(
        ("offset", "expected"),
        [
            (timedelta(days=-3), "3 days ago"),
            (timedelta(days=1), "in 1 day"),
            (timedelta(hours=2), "in 2 hours"),
            (timedelta(minutes=-5), "5 minutes ago"),
            (timedelta(seconds=30), "in 30 seconds"),
        ],
    )
    def test_unit_selection(self, offset: timedelta, expected: str) -> None:
        """The largest unit not exceeding the distance is used."""
        assert format_relative(NOW + offset, "en", now=NOW) == expected

    def test_rounds_within_unit(self) -> None:
        """Partial days round to the nearest day."""
        assert format_relative(NOW - timedelta(days=2, hours=20), "en", now=NOW) == "3 days ago"

    def test_german(self) -> None:
        """Phrases are localized."""
        assert format_relative(NOW - timedelta(days=3), "de", now=NOW) == "vor 3 Tagen"

    def test_defaults_to_current_time(self) -> None:
        """Without a reference moment the current time is used."""
        assert format_relative(datetime.now(UTC) - timedelta(days=3), "en") == "3 days ago"
