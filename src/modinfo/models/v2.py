"""Transport model for v2 ModInfo.xml descriptors."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Annotated, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from modinfo.errors import MalformedError
from modinfo.models import fields
from modinfo.models.common import DependencyElement, ValueElement, VersionElement, title_case
from modinfo.models.fields import Generation
from modinfo.models.markup import (
    append_dependencies,
    append_value_element,
    collect_fields,
    parse_root,
    render,
    validate_variant,
)
from modinfo.models.modinfo import Modinfo, canonical_from_fields


def _v2_alias(key: str) -> str:
    return fields.spelling_for(Generation.V2, key)


def _value(element: ValueElement | None) -> str | None:
    return element.value if element is not None else None


class ModinfoV2(BaseModel):
    """Literal mirror of a v2 descriptor.

    Only ``Name`` and ``Version`` are mandatory in v2 markup. Dependencies
    are nested under a ``Dependencies`` element.

    Example:
    -------
        ```xml
        <?xml version="1.0" encoding="UTF-8"?>
        <xml>
          <Name value="SomeMod" />
          <DisplayName value="Official Mod Name" />
          <Version value="0.1.0" compat="A99" />
          <Description value="Mod to show format of ModInfo v2" />
          <Author value="Name" />
          <Website value="https://example.org" />
          <Dependencies>
            <Dependency name="OtherMod" required="true" />
          </Dependencies>
        </xml>
        ```

    """

    model_config = ConfigDict(
        alias_generator=_v2_alias,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    generation: ClassVar[Generation] = Generation.V2

    name: Annotated[ValueElement, Field(description="Internal mod name")]
    display_name: Annotated[
        ValueElement | None,
        Field(default=None, description="Human-readable mod name"),
    ]
    version: Annotated[VersionElement, Field(description="Mod version and compat tag")]
    description: Annotated[
        ValueElement | None,
        Field(default=None, description="Mod description"),
    ]
    author: Annotated[
        ValueElement | None,
        Field(default=None, description="Mod author"),
    ]
    website: Annotated[
        ValueElement | None,
        Field(default=None, description="Mod homepage"),
    ]
    dependencies: Annotated[
        list[DependencyElement],
        Field(default_factory=list, description="Declared dependencies"),
    ]

    @classmethod
    def from_markup(cls, markup: str) -> ModinfoV2:
        """Deserialize v2 descriptor text.

        Raises
        ------
            MalformedError: If the text is not a structurally valid v2 document.

        """
        root = parse_root(markup, Generation.V2)

        if root.tag != fields.V2_ROOT:
            raise MalformedError(
                f"Wrong root element <{root.tag}>, expected <{fields.V2_ROOT}>",
                generation=Generation.V2,
                location=root.tag,
            )
        if root.find(fields.V1_ROOT) is not None:
            raise MalformedError(
                f"<{fields.V1_ROOT}> envelope is not allowed in v2 documents",
                generation=Generation.V2,
                location=f"{root.tag}.{fields.V1_ROOT}",
            )

        return validate_variant(cls, collect_fields(root, Generation.V2), Generation.V2)

    def to_markup(self, indent: int = 2) -> str:
        """Serialize to v2 descriptor text."""
        root = ET.Element(fields.V2_ROOT)
        for key in fields.fields_for(Generation.V2):
            if key == fields.DEPENDENCIES:
                append_dependencies(root, _v2_alias(key), self.dependencies)
            else:
                append_value_element(root, _v2_alias(key), getattr(self, key))
        return render(root, declaration=True, indent=indent)

    def to_canonical(self) -> Modinfo:
        """Lift to the canonical model.

        Raises
        ------
            InvalidError: If the name is empty, the version cannot be parsed or
                a dependency has an empty name.

        """
        return canonical_from_fields(
            {
                fields.NAME: self.name.value,
                fields.DISPLAY_NAME: _value(self.display_name),
                fields.VERSION: self.version.value,
                fields.COMPAT: self.version.compat,
                fields.DESCRIPTION: _value(self.description),
                fields.AUTHOR: _value(self.author),
                fields.WEBSITE: _value(self.website),
                fields.DEPENDENCIES: [
                    {"mod_id": entry.name, "required": entry.required}
                    for entry in self.dependencies
                ],
            }
        )

    @classmethod
    def from_canonical(cls, modinfo: Modinfo) -> ModinfoV2:
        """Project a canonical model onto v2, filling v2-only defaults."""
        display_name = modinfo.display_name
        if display_name is None and modinfo.name:
            display_name = title_case(modinfo.name)

        return cls(
            name=ValueElement(value=modinfo.name or ""),
            display_name=ValueElement(value=display_name or ""),
            version=VersionElement(value=str(modinfo.version), compat=modinfo.compat),
            description=ValueElement(value=modinfo.description or ""),
            author=ValueElement(value=modinfo.author or ""),
            website=ValueElement(value=modinfo.website or ""),
            dependencies=[
                DependencyElement(name=dep.mod_id, required=dep.required)
                for dep in modinfo.dependencies
            ],
        )
