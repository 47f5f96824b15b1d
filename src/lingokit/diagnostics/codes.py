"""Diagnostic codes and data structures.

Defines degradation codes and the immutable records the translation path
produces instead of raising.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum, StrEnum

__all__ = [
    "Degradation",
    "DiagnosticCode",
    "ErrorCategory",
]


class ErrorCategory(StrEnum):
    """Error categorization for degradations.

    Categories:
        RESOLUTION: Key could not be resolved to a leaf in any content tier
        SELECTION: Variant map could not be resolved by the requested dimensions
        EXPERIMENT: A/B test configuration problem
        FORMATTING: Locale-aware number, currency or date formatting failed
    """

    RESOLUTION = "resolution"
    SELECTION = "selection"
    EXPERIMENT = "experiment"
    FORMATTING = "formatting"


class DiagnosticCode(Enum):
    """Degradation codes with unique identifiers.

    Organized by category:
        1000-1999: Resolution (key lookup through the fallback chain)
        2000-2999: Selection (variant map disambiguation)
        3000-3999: Experiment configuration
        4000-4999: Formatting
    """

    # Resolution (1000-1999)
    MISSING_KEY = 1001
    FALLBACK_OPTION_USED = 1002
    KEY_NOT_LEAF = 1003
    DEFAULT_LOCALE_USED = 1004

    # Selection (2000-2999)
    PLURAL_CATEGORY_MISS = 2001
    VARIANT_UNRESOLVED = 2002

    # Experiment configuration (3000-3999)
    DUPLICATE_TEST = 3001
    EMPTY_VARIANT_SET = 3002
    INVALID_DISTRIBUTION = 3003

    # Formatting (4000-4999)
    FORMATTING_FAILED = 4001

    @property
    def category(self) -> ErrorCategory:
        """Category derived from the code range."""
        match self.value // 1000:
            case 1:
                return ErrorCategory.RESOLUTION
            case 2:
                return ErrorCategory.SELECTION
            case 3:
                return ErrorCategory.EXPERIMENT
            case _:
                return ErrorCategory.FORMATTING


@dataclass(frozen=True, slots=True)
class Degradation:
    """A recovered problem on the translation path.

    The translation path never raises for content gaps; each gap is described
    by one Degradation and handed to UsageAnalytics.

    Attributes:
        code: Degradation code
        message: Human-readable description
        locale: Locale that was active when the problem occurred
        key: Translation key being resolved
    """

    code: DiagnosticCode
    message: str
    locale: str
    key: str

    def __str__(self) -> str:
        """Return human-readable description."""
        return self.message

    def format_error(self) -> str:
        """Format as a single log line.

        Example output:
            MISSING_KEY: 'cta.book' not found in 'de' or 'en' (de:cta.book)
        """
        return f"{self.code.name}: {self.message} ({self.locale}:{self.key})"
