"""Project the canonical model onto a generation and emit ModInfo.xml text.

Upgrading (to v2) fills v2-only structure with defaults: the display name is
derived from the internal name and the dependency list is empty. Downgrading
(to v1) drops display name, website and dependencies. Neither direction can
fail.
"""

from __future__ import annotations

import logging

from modinfo.converters.reader import parse
from modinfo.models import fields
from modinfo.models.common import title_case
from modinfo.models.fields import Generation
from modinfo.models.modinfo import Modinfo
from modinfo.models.variants import VARIANTS, Variant

logger = logging.getLogger(__name__)


def dropped_fields(modinfo: Modinfo, generation: Generation) -> list[str]:
    """List populated fields that a generation cannot represent.

    A display name equal to the one derived from the internal name is not
    reported, since it comes back unchanged after an upgrade.

    Args:
    ----
        modinfo: Canonical model.
        generation: Target generation.

    Returns:
    -------
        Canonical keys of fields that would be lost.

    """
    if generation is not Generation.V1:
        return []

    lost: list[str] = []
    for key in fields.v2_only_fields():
        value = getattr(modinfo, key)
        if key == fields.DISPLAY_NAME and modinfo.name and value == title_case(modinfo.name):
            continue
        if value:
            lost.append(key)
    return lost


class ModinfoWriter:
    """Emit canonical models as ModInfo.xml text.

    Usage:
        writer = ModinfoWriter(Generation.V1)
        text = writer.write_text(modinfo)
    """

    def __init__(self, generation: Generation = Generation.V2, indent: int = 2) -> None:
        """Initialize the writer.

        Args:
        ----
            generation: Generation to emit.
            indent: Spaces per nesting level in the output.

        """
        self.generation = Generation(generation)
        self.indent = indent

    def project(self, modinfo: Modinfo) -> Variant:
        """Project a canonical model onto this writer's variant model."""
        lost = dropped_fields(modinfo, self.generation)
        if lost:
            logger.debug(
                "Dropping fields not representable in %s: %s",
                self.generation.value,
                ", ".join(lost),
            )
        return VARIANTS[self.generation].from_canonical(modinfo)

    def write_text(self, modinfo: Modinfo) -> str:
        """Serialize a canonical model to descriptor text."""
        return self.project(modinfo).to_markup(indent=self.indent)


def to_markup(modinfo: Modinfo, generation: Generation = Generation.V2, indent: int = 2) -> str:
    """Serialize a canonical model to the requested generation.

    Args:
    ----
        modinfo: Canonical model.
        generation: Target generation.
        indent: Spaces per nesting level.

    Returns:
    -------
        Descriptor text.

    """
    return ModinfoWriter(generation, indent=indent).write_text(modinfo)


def convert(markup: str, generation: Generation, indent: int = 2) -> str:
    """Re-emit descriptor text of either generation as the target generation.

    Raises
    ------
        UnknownFormatError: If the input matches no generation.
        MalformedError: If the input violates its generation's structure.
        InvalidError: If the input breaks a canonical model invariant.

    """
    return to_markup(parse(markup), generation, indent=indent)
