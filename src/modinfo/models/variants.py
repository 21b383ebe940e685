"""Registry of schema variant models by generation."""

from __future__ import annotations

from typing import TypeAlias

from modinfo.models.fields import Generation
from modinfo.models.v1 import ModinfoV1
from modinfo.models.v2 import ModinfoV2

Variant: TypeAlias = ModinfoV1 | ModinfoV2

VARIANTS: dict[Generation, type[ModinfoV1] | type[ModinfoV2]] = {
    Generation.V1: ModinfoV1,
    Generation.V2: ModinfoV2,
}


def variant_for(generation: Generation | str) -> type[ModinfoV1] | type[ModinfoV2]:
    """Return the variant model class for a generation.

    Args:
    ----
        generation: Generation enum or its string value ('v1' / 'v2').

    Raises:
    ------
        ValueError: If the generation is unknown.

    """
    return VARIANTS[Generation(generation)]
