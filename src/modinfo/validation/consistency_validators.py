"""Validators for cross-field consistency checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modinfo.converters.writer import dropped_fields
from modinfo.models.fields import Generation
from modinfo.validation.base import BaseValidator
from modinfo.validation.errors import ErrorCodes, ValidationResult

if TYPE_CHECKING:
    from modinfo.models.modinfo import Modinfo


class DependencyValidator(BaseValidator):
    """Validates the dependency list against the mod itself and for repeats."""

    def validate(
        self,
        modinfo: Modinfo,
        result: ValidationResult,
    ) -> None:
        """Check for self and duplicate dependencies."""
        seen: dict[str, int] = {}

        for index, dependency in enumerate(modinfo.dependencies):
            mod_id = dependency.mod_id
            path = f"dependencies.{index}.mod_id"

            if modinfo.name is not None and mod_id == modinfo.name:
                result.add_error(
                    code=ErrorCodes.E100_SELF_DEPENDENCY,
                    message=f"Mod '{mod_id}' depends on itself",
                    path=path,
                    suggestion="Remove the dependency on this mod's own name",
                )

            if mod_id in seen:
                result.add_warning(
                    code=ErrorCodes.W101_DUPLICATE_DEPENDENCY,
                    message=(
                        f"Dependency '{mod_id}' is listed more than once, "
                        f"first at index {seen[mod_id]}"
                    ),
                    path=path,
                    suggestion="Keep a single entry per dependency",
                )
            else:
                seen[mod_id] = index


class VersionValidator(BaseValidator):
    """Reports pre-release versions and a missing game compat tag."""

    def validate(
        self,
        modinfo: Modinfo,
        result: ValidationResult,
    ) -> None:
        """Check version metadata."""
        if modinfo.version.is_prerelease:
            result.add_info(
                code=ErrorCodes.I001_PRERELEASE_VERSION,
                message=f"Version {modinfo.version} is a pre-release",
                path="version",
            )

        if modinfo.compat is None:
            result.add_warning(
                code=ErrorCodes.W004_MISSING_COMPAT,
                message="Version has no game compat tag",
                path="version.compat",
                suggestion="Add compat=\"A21\" (or the game build you tested with)",
            )


class GenerationCompatibilityValidator(BaseValidator):
    """Warns about fields the target generation cannot represent."""

    def __init__(self, target: Generation) -> None:
        """Initialize with the generation the descriptor will be written as.

        Args:
        ----
            target: Output generation.

        """
        self.target = Generation(target)

    def validate(
        self,
        modinfo: Modinfo,
        result: ValidationResult,
    ) -> None:
        """Check for fields dropped by the target generation."""
        for key in dropped_fields(modinfo, self.target):
            result.add_warning(
                code=ErrorCodes.W200_FIELDS_LOST,
                message=f"Field '{key}' is not written in {self.target.value} descriptors",
                path=key,
                suggestion="Write a v2 descriptor to keep this field",
                target=self.target.value,
            )
