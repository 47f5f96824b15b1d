"""Tests for locale tag normalization."""

import pytest
from babel.core import UnknownLocaleError
from hypothesis import given
from hypothesis import strategies as st

from lingokit.locale_utils import (
    canonicalize_locale,
    get_babel_locale,
    get_language,
    locale_key,
    normalize_locale,
)


class TestNormalizeLocale:
    """BCP-47 to POSIX separator conversion."""

    @pytest.mark.parametrize(
        ("tag", "expected"),
        [("en-US", "en_US"), ("pt-BR", "pt_BR"), ("en", "en"), ("zh-Hant-TW", "zh_Hant_TW")],
    )
    def test_hyphens_replaced(self, tag: str, expected: str) -> None:
        """Hyphens become underscores; nothing else changes."""
        assert normalize_locale(tag) == expected


class TestCanonicalizeLocale:
    """Canonical casing."""

    @pytest.mark.parametrize("tag", ["pt-BR", "pt_BR", "PT-br", "pt-br"])
    def test_spellings_share_one_key(self, tag: str) -> None:
        """Every spelling of a tag canonicalizes identically."""
        assert canonicalize_locale(tag) == "pt_BR"

    def test_script_subtag(self) -> None:
        """Script is title-cased and placed before the territory."""
        assert canonicalize_locale("zh-hant-tw") == "zh_Hant_TW"

    def test_encoding_dropped(self) -> None:
        """POSIX encoding suffixes are not part of the key."""
        assert canonicalize_locale("de_DE.UTF-8") == "de_DE"

    @pytest.mark.parametrize("tag", ["", "123"])
    def test_invalid_language(self, tag: str) -> None:
        """Empty or non-alphabetic languages raise ValueError."""
        with pytest.raises(ValueError):
            canonicalize_locale(tag)


class TestGetLanguage:
    """Language subtag extraction."""

    def test_language(self) -> None:
        """Territory and script are stripped."""
        assert get_language("pt-BR") == "pt"
        assert get_language("zh_Hant_TW") == "zh"


class TestGetBabelLocale:
    """Cached Babel locales."""

    def test_parses_bcp47(self) -> None:
        """BCP-47 tags parse to Babel locales."""
        locale = get_babel_locale("en-US")
        assert locale.language == "en"
        assert locale.territory == "US"

    def test_cached(self) -> None:
        """Repeated lookups return the same object."""
        assert get_babel_locale("de") is get_babel_locale("de")

    def test_unknown(self) -> None:
        """Locales without CLDR data raise UnknownLocaleError."""
        with pytest.raises(UnknownLocaleError):
            get_babel_locale("xx")


class TestLocaleKey:
    """Store and analytics keys."""

    def test_canonical_when_parseable(self) -> None:
        """Parseable tags use the canonical form."""
        assert locale_key("pt-br") == "pt_BR"

    def test_opaque_when_unparseable(self) -> None:
        """Unparseable tags still produce a usable key."""
        assert locale_key("123-x") == "123_x"

    @given(st.text(max_size=20))
    def test_never_raises(self, tag: str) -> None:
        """Any text yields a key without raising."""
        assert isinstance(locale_key(tag), str)
