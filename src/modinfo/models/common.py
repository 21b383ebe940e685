"""Common element shapes, field types and validators for descriptor models."""

from __future__ import annotations

import re
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    PlainSerializer,
    PlainValidator,
    WithJsonSchema,
)

from modinfo.models.version import Version, coerce_version

# Runs of letters and digits in any script.
_TOKEN = re.compile(r"[^\W_]+")


def blank_to_none(value: Any) -> Any:
    """Treat empty or whitespace-only strings as unset.

    Args:
    ----
        value: Raw field value.

    Returns:
    -------
        None for blank strings, the value unchanged otherwise.

    Examples:
    --------
        >>> blank_to_none("  ") is None
        True
        >>> blank_to_none("Name")
        'Name'

    """
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _split_camel(token: str) -> list[str]:
    """Split a run of letters and digits at case and digit boundaries."""
    words: list[str] = []
    start = 0
    for i in range(1, len(token)):
        prev, cur = token[i - 1], token[i]
        following = token[i + 1] if i + 1 < len(token) else ""
        if (
            prev.isdigit() != cur.isdigit()
            or (prev.islower() and cur.isupper())
            or (prev.isupper() and cur.isupper() and following.islower())
        ):
            words.append(token[start:i])
            start = i
    words.append(token[start:])
    return words


def title_case(name: str) -> str:
    """Derive a display name from an internal mod name.

    Splits on case changes, digits, underscores, hyphens and spaces, then
    capitalizes each word. Letters outside ASCII are kept. A name with no
    letters or digits is returned stripped but otherwise unchanged.

    Examples:
    --------
        >>> title_case("SomeInternalName")
        'Some Internal Name'
        >>> title_case("my_cool-mod")
        'My Cool Mod'
        >>> title_case("XMLTweaks2")
        'Xml Tweaks 2'
        >>> title_case("überMod")
        'Über Mod'
        >>> title_case("__")
        '__'

    """
    words = [word for token in _TOKEN.findall(name) for word in _split_camel(token)]
    if not words:
        return name.strip()
    return " ".join(word.capitalize() for word in words)


def parse_xml_bool(value: Any) -> Any:
    """Read an XML boolean attribute, accepting only true and false.

    Matching is case-insensitive. Booleans and None pass through unchanged.

    Raises:
    ------
        ValueError: For any other text, such as 'yes' or '1'.

    """
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise ValueError(f"Must be 'true' or 'false', got {value!r}")


# Optional free text; blank input is stored as None.
OptionalText = Annotated[str | None, BeforeValidator(blank_to_none)]

# Optional XML boolean attribute.
XmlBool = Annotated[bool | None, BeforeValidator(parse_xml_bool)]

# Version accepting lenient strings and dumping as canonical text.
VersionField = Annotated[
    Version,
    PlainValidator(coerce_version),
    PlainSerializer(str, return_type=str),
    WithJsonSchema({"type": "string", "examples": ["1.2.3", "2.0.0-beta.1"]}),
]


class ValueElement(BaseModel):
    """An empty element carrying its payload in a ``value`` attribute.

    Example:
    -------
        ```xml
        <Name value="SomeMod" />
        ```

    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    value: str


class VersionElement(ValueElement):
    """The ``Version`` element with its optional game ``compat`` tag.

    Example:
    -------
        ```xml
        <Version value="1.2.3" compat="A99" />
        ```

    """

    compat: str | None = None


class DependencyElement(BaseModel):
    """A ``Dependency`` entry nested under ``Dependencies`` (v2 only).

    Example:
    -------
        ```xml
        <Dependency name="OtherMod" required="true" />
        ```

    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str
    required: XmlBool = None
