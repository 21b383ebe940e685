"""Validators for individual descriptor fields."""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import urlparse

from modinfo.validation.base import BaseValidator
from modinfo.validation.errors import ErrorCodes, ValidationResult

if TYPE_CHECKING:
    from modinfo.models.modinfo import Modinfo


class RequiredFieldsValidator(BaseValidator):
    """Validates that the internal name is set."""

    def validate(
        self,
        modinfo: Modinfo,
        result: ValidationResult,
    ) -> None:
        """Check that the name is present."""
        if modinfo.name is None:
            result.add_error(
                code=ErrorCodes.E001_MISSING_NAME,
                message="Mod name is not set",
                path="name",
                suggestion="Set a unique internal name, e.g. 'MyMod'",
            )


class RecommendedFieldsValidator(BaseValidator):
    """Warns about empty description and author.

    Both are mandatory elements in v1 files, so an empty value is written
    as ``value=""`` there.
    """

    def validate(
        self,
        modinfo: Modinfo,
        result: ValidationResult,
    ) -> None:
        """Check description and author."""
        for key in ("description", "author"):
            if getattr(modinfo, key) is None:
                result.add_warning(
                    code=ErrorCodes.W003_MISSING_RECOMMENDED,
                    message=f"Mod {key} is empty",
                    path=key,
                    suggestion=f"Add a {key} so players can identify the mod",
                )


class WebsiteValidator(BaseValidator):
    """Validates that the website looks like an http(s) URL."""

    def validate(
        self,
        modinfo: Modinfo,
        result: ValidationResult,
    ) -> None:
        """Check the website scheme and host."""
        if modinfo.website is None:
            return

        parsed = urlparse(modinfo.website.strip())
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            result.add_warning(
                code=ErrorCodes.W002_INVALID_WEBSITE,
                message=f"Website '{modinfo.website}' is not an http(s) URL",
                path="website",
                suggestion="Use a full URL such as 'https://example.org/my-mod'",
            )
