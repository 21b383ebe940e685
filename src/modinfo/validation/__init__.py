"""Lint validation for ModInfo descriptors."""

from modinfo.validation.errors import (
    ErrorCodes,
    ValidationIssue,
    ValidationLocation,
    ValidationResult,
    ValidationSeverity,
)
from modinfo.validation.validator import (
    ModinfoValidationError,
    ModinfoValidator,
)

__all__ = [
    "ErrorCodes",
    "ModinfoValidationError",
    "ModinfoValidator",
    "ValidationIssue",
    "ValidationLocation",
    "ValidationResult",
    "ValidationSeverity",
]
