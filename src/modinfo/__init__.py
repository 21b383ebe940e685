"""modinfo: Reader, writer and converter for 7 Days to Die ModInfo.xml descriptors.

This package provides tools for:
- Detecting and parsing both descriptor generations (v1 and v2)
- Editing descriptors through one generation-agnostic model
- Writing descriptors back out as either generation
- Linting descriptors beyond structural validity

Quick Start:
    >>> from pathlib import Path
    >>> from modinfo.models import load_modinfo, write_modinfo
    >>> from modinfo.models.fields import Generation
    >>>
    >>> modinfo = load_modinfo(Path("Mods/SomeMod"))
    >>> modinfo.bump_version_minor()
    >>> write_modinfo(modinfo, Path("Mods/SomeMod/ModInfo.xml"), Generation.V2)

Modules:
    models: Version type, field tables, canonical and variant models, file loader
    converters: Generation sniffing, parsing and serialization
    validation: Lint rules beyond model invariants
    cli: Command-line interface helpers
"""

__version__ = "0.2.0"
