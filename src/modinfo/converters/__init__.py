"""Converters between ModInfo.xml text and the canonical model.

Primary Entry Points:
    parse(markup): Sniff the generation and build a canonical Modinfo
    sniff_generation(markup): Detect v1/v2 from the root element only
    to_markup(modinfo, generation): Emit descriptor text
    convert(markup, generation): Re-emit text as another generation

Example:
-------
    >>> from modinfo.converters import convert
    >>> from modinfo.models.fields import Generation
    >>> v2_text = convert(v1_text, Generation.V2)

"""

from modinfo.converters.reader import (
    ReadResult,
    parse,
    read,
    read_variant,
    sniff_generation,
)
from modinfo.converters.writer import ModinfoWriter, convert, dropped_fields, to_markup

__all__ = [
    "ModinfoWriter",
    "ReadResult",
    "convert",
    "dropped_fields",
    "parse",
    "read",
    "read_variant",
    "sniff_generation",
    "to_markup",
]
