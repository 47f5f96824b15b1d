"""Tests for {name} placeholder interpolation."""

from hypothesis import given
from hypothesis import strategies as st

from lingokit.runtime.interpolation import find_placeholders, interpolate


class TestInterpolate:
    """Substitution behavior."""

    def test_replaces_known_placeholders(self) -> None:
        """Known names are replaced with str(value)."""
        assert interpolate("Hello {count} friends", {"count": 5}) == "Hello 5 friends"

    def test_missing_placeholder_left_verbatim(self) -> None:
        """Names without a value stay in the output."""
        assert interpolate("Hi {name}, {missing}", {"name": "Ana"}) == "Hi Ana, {missing}"

    def test_none_value_counts_as_missing(self) -> None:
        """A None value leaves the placeholder visible."""
        assert interpolate("Hi {name}", {"name": None}) == "Hi {name}"

    def test_repeated_placeholder(self) -> None:
        """Every occurrence is replaced."""
        assert interpolate("{x} and {x}", {"x": "a"}) == "a and a"

    def test_no_values(self) -> None:
        """Without values the template is returned unchanged."""
        assert interpolate("Hello {name}") == "Hello {name}"
        assert interpolate("Hello {name}", {}) == "Hello {name}"

    def test_non_word_braces_untouched(self) -> None:
        """Braces around non-word text are not placeholders."""
        assert interpolate("{not a token} {a-b}", {"a": 1}) == "{not a token} {a-b}"

    def test_values_are_not_reinterpolated(self) -> None:
        """A value containing {name} is inserted literally."""
        assert interpolate("{a}{b}", {"a": "{b}", "b": "x"}) == "{b}x"


class TestFindPlaceholders:
    """Placeholder discovery."""

    def test_finds_names(self) -> None:
        """Returns the distinct names."""
        assert find_placeholders("{count} jobs near {city}, {city}") == {"count", "city"}

    def test_none(self) -> None:
        """Plain text has no placeholders."""
        assert find_placeholders("Book now") == frozenset()


class TestInterpolationProperties:
    """Property-based checks."""

    @given(st.text(alphabet=st.characters(blacklist_characters="{}")))
    def test_text_without_braces_is_identity(self, text: str) -> None:
        """Templates without braces are never changed."""
        assert interpolate(text, {"x": 1}) == text

    @given(
        name=st.from_regex(r"[a-z_][a-z0-9_]{0,10}", fullmatch=True),
        value=st.integers(),
    )
    def test_single_placeholder(self, name: str, value: int) -> None:
        """A lone placeholder renders as str(value)."""
        assert interpolate("{" + name + "}", {name: value}) == str(value)
