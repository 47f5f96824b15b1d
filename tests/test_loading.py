"""Tests for content loaders."""

import pytest

from lingokit.localization import ContentLoader, MappingContentLoader


class TestMappingContentLoader:
    """In-memory loader."""

    def test_load(self) -> None:
        """Stores are returned as given."""
        store = {"cta": {"book": "Book now"}}
        loader = MappingContentLoader({"en": store})
        assert loader.load("en") is store

    def test_locale_spellings(self) -> None:
        """Store keys and lookups are normalized alike."""
        loader = MappingContentLoader({"pt-BR": {"cta.book": "Reservar"}})
        assert loader.locales == ("pt_BR",)
        assert loader.load("pt_br")["cta.book"] == "Reservar"

    def test_unknown_locale(self) -> None:
        """Unknown locales raise KeyError, a LookupError."""
        loader = MappingContentLoader({"en": {}})
        with pytest.raises(LookupError):
            loader.load("fr")

    def test_stores_read_only(self) -> None:
        """The loader's store table cannot be modified."""
        loader = MappingContentLoader({"en": {}})
        with pytest.raises(TypeError):
            loader.stores["fr"] = {}  # type: ignore[index]

    def test_satisfies_protocol(self) -> None:
        """MappingContentLoader is a ContentLoader."""
        loader: ContentLoader = MappingContentLoader()
        assert loader.load.__name__ == "load"
