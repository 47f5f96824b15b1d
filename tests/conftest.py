"""Pytest configuration for the lingokit test suite.

Single Source of Truth for Hypothesis max_examples:
- dev: Local development with 500 examples (thorough property testing)
- ci: GitHub Actions with 50 examples (fast CI feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- CI=true environment variable -> "ci" profile (GitHub Actions sets this)
- HYPOTHESIS_PROFILE env var -> explicit override
- Otherwise -> "dev" profile (local development)

Override manually: HYPOTHESIS_PROFILE=verbose pytest tests/
"""

import os
from collections.abc import Callable

import pytest
from hypothesis import Phase, Verbosity, settings

from lingokit import MappingContentLoader, TranslationEngine
from tests.fakes import FakeClock

# =============================================================================
# HYPOTHESIS PROFILES - SINGLE SOURCE OF TRUTH
# =============================================================================

# Development profile: thorough local testing (500 examples, silent)
settings.register_profile(
    "dev",
    max_examples=500,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

# CI profile: fast feedback for GitHub Actions (50 examples)
settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

# Verbose profile: debug mode with progress visibility (100 examples)
settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


# =============================================================================
# AUTO-DETECT EXECUTION CONTEXT
# =============================================================================


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context.

    Priority:
    1. HYPOTHESIS_PROFILE env var (explicit override)
    2. CI=true env var (GitHub Actions auto-detection)
    3. Default to "dev" (local development)
    """
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit

    if os.environ.get("CI") == "true":
        return "ci"

    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# SHARED FIXTURES
# =============================================================================


@pytest.fixture
def clock() -> FakeClock:
    """Deterministic clock starting at t=1000s."""
    return FakeClock()


@pytest.fixture
def marketplace_stores() -> dict[str, dict[str, object]]:
    """Content for three locales, mixing flat and nested keys."""
    return {
        "en": {
            "greet.hello": {"one": "Hello friend", "other": "Hello {count} friends"},
            "booking": {
                "confirm": {"title": "Booking confirmed"},
                "total": "Total: {amount}",
                "items": {"one": "{count} booking", "other": "{count} bookings"},
                "welcome": {
                    "male": "Welcome, sir",
                    "female": "Welcome, madam",
                    "default": "Welcome",
                },
            },
            "cta": {"book": "Book now"},
            "search": {"results": "{count} providers near {city}"},
        },
        "de": {
            "cta": {"book": "Jetzt buchen"},
            "booking": {
                "greeting": {"formal": "Guten Tag, {name}", "informal": "Hallo {name}"},
            },
        },
        "ru": {
            "booking": {
                "items": {
                    "one": "{count} бронирование",
                    "few": "{count} бронирования",
                    "other": "{count} бронирований",
                },
            },
        },
    }


@pytest.fixture
def loader(marketplace_stores: dict[str, dict[str, object]]) -> MappingContentLoader:
    """In-memory loader over the marketplace stores."""
    return MappingContentLoader(marketplace_stores)


@pytest.fixture
def make_engine(
    loader: MappingContentLoader, clock: FakeClock
) -> Callable[..., TranslationEngine]:
    """Factory building engines over the marketplace loader."""

    def _make(locale: str | None = None, **kwargs: object) -> TranslationEngine:
        return TranslationEngine(loader, locale, clock=clock, **kwargs)  # type: ignore[arg-type]

    return _make
