"""Static field spelling tables for both descriptor generations.

Canonical field keys are snake_case; each generation spells them as XML tag
names. The tables are the single source of truth for that mapping and also
drive the pydantic aliases of the variant models.
"""

from __future__ import annotations

from enum import Enum


class Generation(str, Enum):
    """Descriptor schema generation."""

    V1 = "v1"
    V2 = "v2"


# Canonical field keys, in the order they are emitted.
NAME = "name"
DISPLAY_NAME = "display_name"
VERSION = "version"
DESCRIPTION = "description"
AUTHOR = "author"
WEBSITE = "website"
DEPENDENCIES = "dependencies"

# Attribute-level keys.
COMPAT = "compat"

CANONICAL_FIELDS: tuple[str, ...] = (
    NAME,
    DISPLAY_NAME,
    VERSION,
    DESCRIPTION,
    AUTHOR,
    WEBSITE,
    DEPENDENCIES,
)

_SPELLINGS: dict[Generation, dict[str, str]] = {
    Generation.V1: {
        NAME: "Name",
        VERSION: "Version",
        DESCRIPTION: "Description",
        AUTHOR: "Author",
    },
    Generation.V2: {
        NAME: "Name",
        DISPLAY_NAME: "DisplayName",
        VERSION: "Version",
        DESCRIPTION: "Description",
        AUTHOR: "Author",
        WEBSITE: "Website",
        DEPENDENCIES: "Dependencies",
    },
}

_CANONICAL_KEYS: dict[Generation, dict[str, str]] = {
    generation: {tag: key for key, tag in table.items()}
    for generation, table in _SPELLINGS.items()
}

# Root and container element names.
V1_ROOT = "ModInfo"
V2_ROOT = "xml"
V2_DEPENDENCY = "Dependency"

# Attribute names shared by both generations.
VALUE_ATTR = "value"
COMPAT_ATTR = "compat"
DEPENDENCY_NAME_ATTR = "name"
DEPENDENCY_REQUIRED_ATTR = "required"

# Extra spellings accepted by normalize_key but never emitted.
_KEY_ALIASES: dict[str, str] = {
    "displayname": DISPLAY_NAME,
    COMPAT: COMPAT,
}


def fields_for(generation: Generation) -> tuple[str, ...]:
    """Return the canonical keys a generation can represent, in emit order."""
    table = _SPELLINGS[generation]
    return tuple(key for key in CANONICAL_FIELDS if key in table)


def spelling_for(generation: Generation, key: str) -> str:
    """Return the tag spelling of a canonical key in a generation.

    Args:
    ----
        generation: Target generation.
        key: Canonical field key.

    Returns:
    -------
        XML tag name.

    Raises:
    ------
        KeyError: If the generation has no representation for the key.

    """
    try:
        return _SPELLINGS[generation][key]
    except KeyError:
        raise KeyError(f"Field '{key}' has no {generation.value} spelling") from None


def canonical_key(generation: Generation, tag: str) -> str | None:
    """Return the canonical key for a tag, or None for unknown tags."""
    return _CANONICAL_KEYS[generation].get(tag)


def is_known_tag(generation: Generation, tag: str) -> bool:
    """Whether a tag is part of a generation's field set."""
    return tag in _CANONICAL_KEYS[generation]


def v2_only_fields() -> tuple[str, ...]:
    """Return canonical keys that v1 cannot represent."""
    v1 = _SPELLINGS[Generation.V1]
    return tuple(key for key in fields_for(Generation.V2) if key not in v1)


def normalize_key(text: str) -> str | None:
    """Map a canonical key or any tag spelling to the canonical key.

    Matching is case-insensitive, so ``"Author"``, ``"author"``,
    ``"DisplayName"`` and ``"display_name"`` all resolve.

    Args:
    ----
        text: Field name as supplied by a caller.

    Returns:
    -------
        Canonical key, or None if the name is unknown.

    """
    lowered = text.strip().lower()
    if lowered in CANONICAL_FIELDS:
        return lowered
    if lowered in _KEY_ALIASES:
        return _KEY_ALIASES[lowered]
    for table in _CANONICAL_KEYS.values():
        for tag, key in table.items():
            if tag.lower() == lowered:
                return key
    return None
