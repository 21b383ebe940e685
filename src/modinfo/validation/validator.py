"""Main validator combining all lint rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modinfo.errors import ModinfoError
from modinfo.models.fields import Generation
from modinfo.validation.base import CompositeValidator
from modinfo.validation.consistency_validators import (
    DependencyValidator,
    GenerationCompatibilityValidator,
    VersionValidator,
)
from modinfo.validation.errors import ValidationResult, ValidationSeverity
from modinfo.validation.field_validators import (
    RecommendedFieldsValidator,
    RequiredFieldsValidator,
    WebsiteValidator,
)

if TYPE_CHECKING:
    from modinfo.models.modinfo import Modinfo


class ModinfoValidator:
    """Main validator for ModInfo descriptors.

    Runs field validators (presence and format checks) and consistency
    validators (dependencies, version metadata, and optionally the target
    generation).
    """

    def __init__(self, strict: bool = False, target: Generation | None = None) -> None:
        """Initialize validator.

        Args:
        ----
            strict: If True, treat warnings as errors.
            target: Generation the descriptor will be written as; enables
                the lost-field check when given.

        """
        self.strict = strict
        self._validator = CompositeValidator(
            [
                # Field validators
                RequiredFieldsValidator(),
                RecommendedFieldsValidator(),
                WebsiteValidator(),
                # Consistency validators
                DependencyValidator(),
                VersionValidator(),
            ]
        )
        if target is not None:
            self._validator.add(GenerationCompatibilityValidator(target))

    def validate(self, modinfo: Modinfo) -> ValidationResult:
        """Validate a descriptor.

        Args:
        ----
            modinfo: The descriptor to validate.

        Returns:
        -------
            ValidationResult with all issues found.

        """
        result = ValidationResult()
        self._validator.validate(modinfo, result)
        return result

    def validate_and_raise(self, modinfo: Modinfo) -> None:
        """Validate and raise exception if invalid.

        Args:
        ----
            modinfo: The descriptor to validate.

        Raises:
        ------
            ModinfoValidationError: If validation fails.

        """
        result = self.validate(modinfo)

        if not result.is_valid:
            raise ModinfoValidationError(result)

        if self.strict and result.warnings:
            raise ModinfoValidationError(result)


class ModinfoValidationError(ModinfoError):
    """Raised when lint validation fails."""

    def __init__(self, result: ValidationResult) -> None:
        """Initialize with validation result.

        Args:
        ----
            result: The validation result containing issues.

        """
        self.result = result
        error_count = len(result.errors)
        warning_count = len(result.warnings)

        parts = []
        if error_count:
            parts.append(f"{error_count} error(s)")
        if warning_count:
            parts.append(f"{warning_count} warning(s)")

        message = f"Validation failed: {', '.join(parts)}"
        super().__init__(message)

    def format_issues(self) -> str:
        """Format errors and warnings as a string.

        Returns
        -------
            Formatted string with all issues.

        """
        lines = []

        for issue in self.result.errors:
            lines.append(f"ERROR: {issue}")

        for issue in self.result.warnings:
            lines.append(f"WARNING: {issue}")

        return "\n".join(lines)

    @property
    def errors_only(self) -> list[str]:
        """Get only error messages."""
        return [
            str(issue) for issue in self.result.issues if issue.severity == ValidationSeverity.ERROR
        ]
