"""lingokit exception hierarchy.

Only configuration mistakes raise. Content gaps on the translation path are
reported as Degradation records and never cross the public boundary.

Python 3.13+. Zero external dependencies.
"""

from .codes import DiagnosticCode


class LingokitError(Exception):
    """Base exception for all lingokit errors.

    Attributes:
        code: Diagnostic code (optional)
    """

    def __init__(self, message: str, code: DiagnosticCode | None = None) -> None:
        """Initialize LingokitError.

        Args:
            message: Error message
            code: Diagnostic code identifying the failure
        """
        super().__init__(message)
        self.code = code


class ContentLoadError(LingokitError):
    """The default locale's TranslationStore could not be loaded.

    The default locale is the last content tier of the fallback chain, so an
    engine cannot be constructed without it.
    """


class FormattingError(LingokitError):
    """Locale-aware formatting failed.

    Carries a plain rendering of the input so callers that must not fail
    (the engine's format_* methods) can still show a value.

    Attributes:
        fallback_value: Unformatted rendering of the input
    """

    def __init__(self, message: str, fallback_value: str) -> None:
        super().__init__(message, DiagnosticCode.FORMATTING_FAILED)
        self.fallback_value = fallback_value


class ExperimentConfigError(LingokitError, ValueError):
    """Invalid A/B test registration.

    Subclasses ValueError so callers validating setup input can catch the
    standard exception type.
    """


class DuplicateTestError(ExperimentConfigError):
    """A test with this key is already registered."""

    def __init__(self, test_key: str) -> None:
        super().__init__(
            f"A/B test '{test_key}' is already registered",
            DiagnosticCode.DUPLICATE_TEST,
        )
        self.test_key = test_key


class EmptyVariantSetError(ExperimentConfigError):
    """A test was registered without any variants."""

    def __init__(self, test_key: str) -> None:
        super().__init__(
            f"A/B test '{test_key}' needs at least one variant",
            DiagnosticCode.EMPTY_VARIANT_SET,
        )
        self.test_key = test_key


class InvalidDistributionError(ExperimentConfigError):
    """Distribution weights do not describe the registered variants."""

    def __init__(self, test_key: str, reason: str) -> None:
        super().__init__(
            f"A/B test '{test_key}' has an invalid distribution: {reason}",
            DiagnosticCode.INVALID_DISTRIBUTION,
        )
        self.test_key = test_key
        self.reason = reason
