"""Tests for TranslationOptions construction and serialization."""

import pytest

from lingokit.runtime.options import TranslationOptions


class TestFromMapping:
    """Flat mapping form."""

    def test_named_fields_and_variables(self) -> None:
        """Known names fill fields; the rest become variables."""
        opts = TranslationOptions.from_mapping({"count": 3, "gender": "female", "city": "Lagos"})
        assert opts.count == 3
        assert opts.gender == "female"
        assert dict(opts.variables) == {"city": "Lagos"}

    def test_none(self) -> None:
        """None builds empty options."""
        assert TranslationOptions.from_mapping(None) == TranslationOptions()

    def test_variables_read_only(self) -> None:
        """Variables cannot be mutated after construction."""
        opts = TranslationOptions(variables={"a": 1})
        with pytest.raises(TypeError):
            opts.variables["b"] = 2  # type: ignore[index]


class TestMerged:
    """Keyword overrides."""

    def test_overrides_and_adds(self) -> None:
        """Named overrides replace fields; unknown names add variables."""
        base = TranslationOptions(count=1, variables={"city": "Lagos"})
        opts = base.merged(count=5, name="Ana")
        assert opts.count == 5
        assert dict(opts.variables) == {"city": "Lagos", "name": "Ana"}
        assert base.count == 1


class TestInterpolationValues:
    """Values visible to placeholders."""

    def test_named_fields_included(self) -> None:
        """Set named fields are available, so {count} renders."""
        opts = TranslationOptions(count=5, variables={"city": "Lagos"})
        assert opts.interpolation_values() == {"count": 5, "city": "Lagos"}

    def test_named_field_wins_over_variable(self) -> None:
        """A named field shadows a same-named variable."""
        opts = TranslationOptions(count=2, variables={"count": 9})
        assert opts.interpolation_values()["count"] == 2


class TestSelectionKey:
    """Cache key serialization."""

    def test_only_template_shaping_fields(self) -> None:
        """Variables and region do not take part."""
        opts = TranslationOptions(count=1, region="BR", variables={"x": 1})
        assert opts.selection_key() == (("count", "1"),)

    def test_stable_field_order(self) -> None:
        """Fields appear in a fixed order regardless of construction order."""
        a = TranslationOptions.from_mapping({"gender": "male", "count": 2})
        b = TranslationOptions.from_mapping({"count": 2, "gender": "male"})
        assert a.selection_key() == b.selection_key()

    def test_fallback_included(self) -> None:
        """Different fallback texts produce different keys."""
        assert (
            TranslationOptions(fallback="a").selection_key()
            != TranslationOptions(fallback="b").selection_key()
        )
