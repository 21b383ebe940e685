"""Transport model for v1 (legacy) ModInfo.xml descriptors."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Annotated, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from modinfo.errors import MalformedError
from modinfo.models import fields
from modinfo.models.common import ValueElement, VersionElement
from modinfo.models.fields import Generation
from modinfo.models.markup import (
    append_value_element,
    collect_fields,
    parse_root,
    render,
    validate_variant,
)
from modinfo.models.modinfo import Modinfo, canonical_from_fields


def _v1_alias(key: str) -> str:
    return fields.spelling_for(Generation.V1, key)


class ModinfoV1(BaseModel):
    """Literal mirror of a v1 descriptor.

    All four elements are mandatory in v1 markup; their values may be empty
    and are judged when lifting to the canonical model.

    Example:
    -------
        ```xml
        <ModInfo>
          <Name value="SomeMod" />
          <Version value="0.1.0" compat="A99" />
          <Description value="Mod to show format of ModInfo v1" />
          <Author value="Name" />
        </ModInfo>
        ```

    The legacy ``<xml><ModInfo>...</ModInfo></xml>`` envelope is read too.

    """

    model_config = ConfigDict(
        alias_generator=_v1_alias,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    generation: ClassVar[Generation] = Generation.V1

    name: Annotated[ValueElement, Field(description="Internal mod name")]
    version: Annotated[VersionElement, Field(description="Mod version and compat tag")]
    description: Annotated[ValueElement, Field(description="Mod description")]
    author: Annotated[ValueElement, Field(description="Mod author")]

    @classmethod
    def from_markup(cls, markup: str) -> ModinfoV1:
        """Deserialize v1 descriptor text.

        Raises
        ------
            MalformedError: If the text is not a structurally valid v1 document.

        """
        root = parse_root(markup, Generation.V1)

        if root.tag == fields.V1_ROOT:
            container = root
        elif root.tag == fields.V2_ROOT:
            found = root.find(fields.V1_ROOT)
            if found is None:
                raise MalformedError(
                    f"Expected <{fields.V1_ROOT}> inside <{fields.V2_ROOT}>",
                    generation=Generation.V1,
                    location=root.tag,
                )
            container = found
        else:
            raise MalformedError(
                f"Wrong root element <{root.tag}>, expected <{fields.V1_ROOT}>",
                generation=Generation.V1,
                location=root.tag,
            )

        return validate_variant(cls, collect_fields(container, Generation.V1), Generation.V1)

    def to_markup(self, indent: int = 2) -> str:
        """Serialize to v1 descriptor text."""
        root = ET.Element(fields.V1_ROOT)
        for key in fields.fields_for(Generation.V1):
            append_value_element(root, _v1_alias(key), getattr(self, key))
        return render(root, declaration=False, indent=indent)

    def to_canonical(self) -> Modinfo:
        """Lift to the canonical model.

        Raises
        ------
            InvalidError: If the name is empty or the version cannot be parsed.

        """
        return canonical_from_fields(
            {
                fields.NAME: self.name.value,
                fields.VERSION: self.version.value,
                fields.COMPAT: self.version.compat,
                fields.DESCRIPTION: self.description.value,
                fields.AUTHOR: self.author.value,
            }
        )

    @classmethod
    def from_canonical(cls, modinfo: Modinfo) -> ModinfoV1:
        """Project a canonical model onto v1, dropping v2-only fields."""
        return cls(
            name=ValueElement(value=modinfo.name or ""),
            version=VersionElement(value=str(modinfo.version), compat=modinfo.compat),
            description=ValueElement(value=modinfo.description or ""),
            author=ValueElement(value=modinfo.author or ""),
        )
