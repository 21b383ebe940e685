"""XML helpers shared by the v1 and v2 variant models."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Any, TypeVar
from xml.parsers.expat import ErrorString

from pydantic import BaseModel, ValidationError

from modinfo.errors import MalformedError
from modinfo.models import fields
from modinfo.models.common import DependencyElement, ValueElement, VersionElement
from modinfo.models.fields import Generation
from modinfo.pydantic_errors import format_pydantic_location, translate_pydantic_error

logger = logging.getLogger(__name__)

VariantT = TypeVar("VariantT", bound=BaseModel)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


def prepare_markup(markup: str) -> str:
    """Drop a byte-order mark and whitespace preceding the XML declaration."""
    return markup.lstrip("\ufeff").lstrip()


def parse_root(markup: str, generation: Generation) -> ET.Element:
    """Parse descriptor text into an element tree.

    Args:
    ----
        markup: Raw descriptor text.
        generation: Generation the text is being read as (for error context).

    Returns:
    -------
        Root element.

    Raises:
    ------
        MalformedError: If the text is not well-formed XML.

    """
    try:
        return ET.fromstring(prepare_markup(markup))
    except ET.ParseError as e:
        line, column = e.position
        raise MalformedError(
            f"XML syntax error: {ErrorString(e.code)}",
            generation=generation,
            line=line,
            column=column + 1,
        ) from e


def element_attributes(element: ET.Element) -> dict[str, str]:
    """Return an element's attributes with lower-cased names."""
    return {key.lower(): value for key, value in element.attrib.items()}


def collect_fields(container: ET.Element, generation: Generation) -> dict[str, Any]:
    """Gather the known field elements of a container into alias-keyed data.

    Unknown elements are skipped so that newer descriptors still load. When a
    field appears more than once, the last occurrence wins.

    Args:
    ----
        container: Element whose children are the descriptor fields.
        generation: Generation whose tag set applies.

    Returns:
    -------
        Dictionary ready for ``model_validate`` on the variant model.

    """
    data: dict[str, Any] = {}

    for child in container:
        key = fields.canonical_key(generation, child.tag)
        if key is None:
            logger.debug("Ignoring unknown %s element <%s>", generation.value, child.tag)
            continue
        if child.tag in data:
            logger.debug("Duplicate <%s> element, keeping the last one", child.tag)

        if key == fields.DEPENDENCIES:
            entries = []
            for entry in child:
                if entry.tag != fields.V2_DEPENDENCY:
                    logger.debug("Ignoring unknown element <%s> in <%s>", entry.tag, child.tag)
                    continue
                entries.append(element_attributes(entry))
            data[child.tag] = entries
        else:
            data[child.tag] = element_attributes(child)

    return data


def validate_variant(
    model: type[VariantT], data: dict[str, Any], generation: Generation
) -> VariantT:
    """Validate collected data against a variant model.

    Raises
    ------
        MalformedError: If a mandatory element or attribute is missing or a
            typed attribute has the wrong type.

    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        details = e.errors()[0]
        raise MalformedError(
            translate_pydantic_error(details),
            generation=generation,
            location=format_pydantic_location(details["loc"]),
        ) from e


def append_value_element(parent: ET.Element, tag: str, element: ValueElement | None) -> None:
    """Append ``<tag value="..."/>``, writing an empty value for unset fields."""
    node = ET.SubElement(parent, tag)
    node.set(fields.VALUE_ATTR, element.value if element is not None else "")
    if isinstance(element, VersionElement) and element.compat is not None:
        node.set(fields.COMPAT_ATTR, element.compat)


def append_dependencies(parent: ET.Element, tag: str, entries: list[DependencyElement]) -> None:
    """Append the nested dependency list; nothing is written when it is empty."""
    if not entries:
        return
    container = ET.SubElement(parent, tag)
    for entry in entries:
        node = ET.SubElement(container, fields.V2_DEPENDENCY)
        node.set(fields.DEPENDENCY_NAME_ATTR, entry.name)
        if entry.required is not None:
            node.set(fields.DEPENDENCY_REQUIRED_ATTR, "true" if entry.required else "false")


def render(root: ET.Element, declaration: bool, indent: int = 2) -> str:
    """Serialize an element tree to indented text.

    Args:
    ----
        root: Root element.
        declaration: Whether to prepend the XML declaration.
        indent: Spaces per nesting level.

    Returns:
    -------
        Descriptor text ending with a newline.

    """
    ET.indent(root, space=" " * indent)
    body = ET.tostring(root, encoding="unicode")
    if declaration:
        return f"{XML_DECLARATION}\n{body}\n"
    return f"{body}\n"
