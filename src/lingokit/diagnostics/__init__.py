"""Diagnostic system for lingokit.

Provides degradation codes, immutable degradation records and the
exception hierarchy for configuration errors.

Python 3.13+. Zero external dependencies.
"""

from .codes import Degradation, DiagnosticCode, ErrorCategory
from .errors import (
    ContentLoadError,
    DuplicateTestError,
    EmptyVariantSetError,
    ExperimentConfigError,
    FormattingError,
    InvalidDistributionError,
    LingokitError,
)

__all__ = [
    "ContentLoadError",
    "Degradation",
    "DiagnosticCode",
    "DuplicateTestError",
    "EmptyVariantSetError",
    "ErrorCategory",
    "ExperimentConfigError",
    "FormattingError",
    "InvalidDistributionError",
    "LingokitError",
]
