"""Canonical, generation-agnostic ModInfo model."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Annotated, Any, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from modinfo.errors import InvalidError
from modinfo.models import fields
from modinfo.models.common import OptionalText, VersionField, title_case
from modinfo.models.fields import Generation
from modinfo.models.version import Version, parse_version
from modinfo.pydantic_errors import translate_pydantic_error

# Invariant identifiers reported by InvalidError, keyed by field.
INVARIANTS: dict[str, str] = {
    fields.NAME: "non_empty_name",
    fields.VERSION: "parseable_version",
    fields.DEPENDENCIES: "non_empty_dependency_id",
}

DEFAULT_VERSION = Version(0, 1, 0)


def invalid_from_validation_error(error: ValidationError) -> InvalidError:
    """Convert the first error of a pydantic ValidationError to InvalidError.

    Args:
    ----
        error: Error raised while building or updating a canonical model.

    Returns:
    -------
        InvalidError naming the field and invariant that failed.

    """
    details = error.errors()[0]
    loc = details["loc"]
    field = str(loc[0]) if loc else "modinfo"
    if field == "mod_id":
        field = fields.DEPENDENCIES
    invariant = INVARIANTS.get(field, details["type"])
    return InvalidError(translate_pydantic_error(details), field=field, invariant=invariant)


class Dependency(BaseModel):
    """A declared dependency on another modlet.

    Example:
    -------
        >>> Dependency(mod_id="OtherMod", required=True)
        Dependency(mod_id='OtherMod', required=True)

    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    mod_id: Annotated[
        str,
        Field(description="Internal name of the required modlet"),
    ]
    required: Annotated[
        bool | None,
        Field(default=None, description="Whether the dependency must be loaded"),
    ]

    @field_validator("mod_id")
    @classmethod
    def validate_mod_id(cls, v: str) -> str:
        """Reject empty dependency identifiers."""
        if not v.strip():
            raise ValueError("Dependency identifier must not be empty")
        return v


class Modinfo(BaseModel):
    """Unified in-memory representation of a ModInfo.xml descriptor.

    Holds the superset of v1 and v2 fields and has no memory of which
    generation it was read from; every conversion is computed from the
    current field values.

    Example:
    -------
        >>> modinfo = Modinfo(name="SomeMod", version="1.2")
        >>> modinfo.display_name
        'Some Mod'
        >>> str(modinfo.version)
        '1.2.0'

    """

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
    )

    name: Annotated[
        str | None,
        Field(default=None, description="Internal mod name (unique identifier)"),
    ]
    display_name: Annotated[
        OptionalText,
        Field(default=None, description="Human-readable mod name (v2 only)"),
    ]
    version: Annotated[
        VersionField,
        Field(default=DEFAULT_VERSION, description="Mod version"),
    ]
    compat: Annotated[
        OptionalText,
        Field(default=None, description="Game compatibility tag (e.g. 'A21')"),
    ]
    description: Annotated[
        OptionalText,
        Field(default=None, description="Mod description"),
    ]
    author: Annotated[
        OptionalText,
        Field(default=None, description="Mod author"),
    ]
    website: Annotated[
        OptionalText,
        Field(default=None, description="Mod homepage (v2 only)"),
    ]
    dependencies: Annotated[
        list[Dependency],
        Field(default_factory=list, description="Declared dependencies (v2 only)"),
    ]

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        """Reject names that are empty after trimming."""
        if v is not None and not v.strip():
            raise ValueError("Name must not be empty")
        return v

    @model_validator(mode="after")
    def derive_display_name(self) -> Self:
        """Fill a missing display name from the internal name."""
        if self.display_name is None and self.name:
            derived = title_case(self.name)
            if derived.strip():
                self.display_name = derived
        return self

    @classmethod
    def from_markup(cls, markup: str) -> Modinfo:
        """Parse ModInfo.xml text of either generation."""
        from modinfo.converters.reader import parse

        return parse(markup)

    def to_markup(self, generation: Generation = Generation.V2) -> str:
        """Serialize to ModInfo.xml text of the given generation."""
        from modinfo.converters.writer import to_markup

        return to_markup(self, generation)

    def ensure_valid(self) -> Self:
        """Check the invariants that construct-empty leaves open.

        Returns:
        -------
            This model, for chaining.

        Raises:
        ------
            InvalidError: If the name has not been set.

        """
        if self.name is None:
            raise InvalidError(
                "Name is required", field=fields.NAME, invariant=INVARIANTS[fields.NAME]
            )
        return self

    def get_value_for(self, field: str) -> str | None:
        """Return a text field by canonical key or tag spelling.

        Matching is case-insensitive. ``version`` is returned in its
        canonical text form; unknown fields and ``dependencies`` give None.

        Example:
        -------
            >>> Modinfo(name="SomeMod", author="Joe").get_value_for("Author")
            'Joe'

        """
        key = fields.normalize_key(field)
        if key is None or key == fields.DEPENDENCIES:
            return None
        if key == fields.VERSION:
            return str(self.version)
        return getattr(self, key)

    def set_value_for(self, field: str, value: str | None) -> None:
        """Set a text field by canonical key or tag spelling.

        Args:
        ----
            field: Field name, case-insensitive.
            value: New value; blank clears optional fields.

        Raises:
        ------
            KeyError: If the field is unknown or is not a text field.
            InvalidError: If the value violates a model invariant.
            InvalidVersionError: If a version value cannot be parsed.

        """
        key = fields.normalize_key(field)
        if key is None:
            raise KeyError(f"Unknown field: {field}")
        if key == fields.DEPENDENCIES:
            raise KeyError("Use set_dependencies() to change dependencies")
        if key == fields.VERSION:
            if value is None:
                raise InvalidError(
                    "Version is required", field=key, invariant=INVARIANTS[key]
                )
            self.set_version(value)
            return

        try:
            setattr(self, key, value)
        except ValidationError as e:
            raise invalid_from_validation_error(e) from e

    def set_version(self, version: str | Version) -> None:
        """Set the mod version, parsing strings leniently."""
        self.version = version if isinstance(version, Version) else parse_version(version)

    def bump_version_major(self) -> None:
        """Increase the major version, resetting minor, patch, pre and build."""
        self.version = self.version.bump_major()

    def bump_version_minor(self) -> None:
        """Increase the minor version, resetting patch, pre and build."""
        self.version = self.version.bump_minor()

    def bump_version_patch(self) -> None:
        """Increase the patch version, dropping pre and build."""
        self.version = self.version.bump_patch()

    def add_version_pre(self, pre: str) -> None:
        """Attach pre-release identifiers to the version."""
        self.version = self.version.with_prerelease(pre)

    def add_version_build(self, build: str) -> None:
        """Attach build metadata to the version."""
        self.version = self.version.with_build(build)

    def set_dependencies(self, dependencies: Iterable[Dependency | str]) -> None:
        """Replace the dependency list, preserving order and duplicates.

        Raises
        ------
            InvalidError: If any dependency identifier is empty.

        """
        try:
            self.dependencies = [
                dep if isinstance(dep, Dependency) else Dependency(mod_id=dep)
                for dep in dependencies
            ]
        except ValidationError as e:
            raise invalid_from_validation_error(e) from e

    def add_dependency(self, mod_id: str, required: bool | None = None) -> None:
        """Append a dependency entry."""
        try:
            dependency = Dependency(mod_id=mod_id, required=required)
        except ValidationError as e:
            raise invalid_from_validation_error(e) from e
        self.dependencies = [*self.dependencies, dependency]


def canonical_from_fields(data: dict[str, Any]) -> Modinfo:
    """Build a canonical model from raw field values, enforcing invariants.

    Args:
    ----
        data: Canonical keys mapped to raw values lifted from a variant.

    Returns:
    -------
        Validated Modinfo.

    Raises:
    ------
        InvalidError: If a value violates a model invariant.

    """
    if data.get(fields.VERSION) is None:
        raise InvalidError(
            "Version is required", field=fields.VERSION, invariant=INVARIANTS[fields.VERSION]
        )
    try:
        return Modinfo.model_validate(data)
    except ValidationError as e:
        raise invalid_from_validation_error(e) from e
