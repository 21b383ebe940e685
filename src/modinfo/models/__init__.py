"""Pydantic models for 7 Days to Die ModInfo.xml descriptors.

Two schema generations exist. v1 wraps four elements in ``<ModInfo>``; v2
uses an ``<xml>`` root and adds a display name, a website and dependencies.
Each generation has a literal transport model, and both lift into the
canonical ``Modinfo`` model, which is what callers edit.

Primary Entry Points:
    load_modinfo(path): Load a ModInfo.xml file or mod folder
    write_modinfo(modinfo, path, generation): Write a descriptor file
    validate_modinfo_file(path): Validate and return list of errors
    Modinfo: Canonical, generation-agnostic model
    Version: Leniently parsed, totally ordered version

Example:
-------
    >>> from pathlib import Path
    >>> from modinfo.models import load_modinfo
    >>> modinfo = load_modinfo(Path("Mods/SomeMod"))
    >>> print(f"{modinfo.display_name} {modinfo.version}")

Model Hierarchy:
    Modinfo (canonical)
    ├── Version - semantic version with pre-release and build
    └── Dependency - required/optional modlet reference (v2 only)

    ModinfoV1 / ModinfoV2 (transport)
    ├── ValueElement - <Tag value="..."/>
    ├── VersionElement - <Version value="..." compat="..."/>
    └── DependencyElement - <Dependency name="..." required="..."/>
"""

from modinfo.models.common import (
    DependencyElement,
    OptionalText,
    ValueElement,
    VersionElement,
    VersionField,
    title_case,
)
from modinfo.models.fields import Generation
from modinfo.models.modinfo import DEFAULT_VERSION, Dependency, Modinfo
from modinfo.models.v1 import ModinfoV1
from modinfo.models.v2 import ModinfoV2
from modinfo.models.variants import VARIANTS, Variant, variant_for
from modinfo.models.version import Version, parse_version
from modinfo.models.loader import (  # noqa: I001
    dump_modinfo_data,
    find_modinfo_file,
    load_modinfo,
    load_modinfo_data,
    load_modinfo_detailed,
    load_yaml_file,
    modinfo_from_data,
    validate_modinfo_file,
    write_modinfo,
)

__all__ = [
    "DEFAULT_VERSION",
    "Dependency",
    "DependencyElement",
    "Generation",
    "Modinfo",
    "ModinfoV1",
    "ModinfoV2",
    "OptionalText",
    "VARIANTS",
    "ValueElement",
    "Variant",
    "Version",
    "VersionElement",
    "VersionField",
    "dump_modinfo_data",
    "find_modinfo_file",
    "load_modinfo",
    "load_modinfo_data",
    "load_modinfo_detailed",
    "load_yaml_file",
    "modinfo_from_data",
    "parse_version",
    "title_case",
    "validate_modinfo_file",
    "variant_for",
    "write_modinfo",
]
