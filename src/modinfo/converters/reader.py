"""Read ModInfo.xml text of either generation into the canonical model.

Reading happens in three steps:

1. ``sniff_generation`` looks only at the root element and, for an ``<xml>``
   root, its direct children, to decide between v1 and v2.
2. The matching variant model deserializes the full document.
3. The variant lifts itself into the canonical ``Modinfo``.
"""

from __future__ import annotations

import io
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from xml.parsers.expat import ErrorString

from modinfo.errors import MalformedError, UnknownFormatError
from modinfo.models import fields
from modinfo.models.fields import Generation
from modinfo.models.markup import prepare_markup
from modinfo.models.modinfo import Modinfo
from modinfo.models.variants import VARIANTS, Variant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReadResult:
    """A parsed descriptor together with the generation it was read as."""

    generation: Generation
    """Generation detected in the source text."""

    modinfo: Modinfo
    """Canonical model; it keeps no reference to the source generation."""


def sniff_generation(markup: str) -> Generation:
    """Detect the descriptor generation without deserializing the document.

    Rules:
        - root ``<ModInfo>`` is v1;
        - root ``<xml>`` with a direct ``<ModInfo>`` child is v1 (legacy envelope);
        - any other ``<xml>`` root is v2;
        - anything else is an unknown format.

    Args:
    ----
        markup: Raw descriptor text.

    Returns:
    -------
        Detected generation.

    Raises:
    ------
        UnknownFormatError: If the text has no readable root or a foreign root.
        MalformedError: If the text breaks off before the generation is decided.

    """
    depth = 0
    root_tag: str | None = None
    source = io.StringIO(prepare_markup(markup))

    try:
        for event, element in ET.iterparse(source, events=("start", "end")):
            if event == "end":
                depth -= 1
                if depth == 0:
                    break
                continue

            depth += 1
            if depth == 1:
                root_tag = element.tag
                if root_tag == fields.V1_ROOT:
                    return Generation.V1
                if root_tag != fields.V2_ROOT:
                    raise UnknownFormatError(
                        f"Unknown root element <{root_tag}>; expected "
                        f"<{fields.V1_ROOT}> (v1) or <{fields.V2_ROOT}> (v2)",
                        root=root_tag,
                    )
            elif depth == 2:
                if element.tag == fields.V1_ROOT:
                    return Generation.V1
                if fields.is_known_tag(Generation.V2, element.tag):
                    return Generation.V2
    except ET.ParseError as e:
        if root_tag is None:
            raise UnknownFormatError(
                f"Not a ModInfo.xml document: {ErrorString(e.code)}"
            ) from e
        line, column = e.position
        raise MalformedError(
            f"XML syntax error: {ErrorString(e.code)}",
            location=root_tag,
            line=line,
            column=column + 1,
        ) from e

    if root_tag is None:
        raise UnknownFormatError("Not a ModInfo.xml document: no root element")
    return Generation.V2


def read_variant(markup: str) -> Variant:
    """Sniff the generation and deserialize into the matching variant model.

    Raises
    ------
        UnknownFormatError: If no generation matches.
        MalformedError: If the document violates its generation's structure.

    """
    generation = sniff_generation(markup)
    logger.debug("Detected %s descriptor", generation.value)
    return VARIANTS[generation].from_markup(markup)


def read(markup: str) -> ReadResult:
    """Parse descriptor text, keeping the detected generation.

    Raises
    ------
        UnknownFormatError: If no generation matches.
        MalformedError: If the document violates its generation's structure.
        InvalidError: If the document breaks a canonical model invariant.

    """
    variant = read_variant(markup)
    return ReadResult(generation=variant.generation, modinfo=variant.to_canonical())


def parse(markup: str) -> Modinfo:
    """Parse descriptor text of either generation into a canonical model.

    Example:
    -------
        >>> modinfo = parse('<ModInfo><Name value="A" /><Version value="1" />'
        ...                 '<Description value="" /><Author value="" /></ModInfo>')
        >>> str(modinfo.version)
        '1.0.0'

    """
    return read(markup).modinfo
