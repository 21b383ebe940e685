"""Descriptor file loading and saving utilities.

ModInfo.xml files are read and written here; the parsing itself lives in
``modinfo.converters``. YAML/JSON authoring files use canonical field keys
(tag spellings are accepted too) and can be turned into descriptors.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from modinfo.errors import InvalidError, LoaderError, MalformedError, UnknownFormatError
from modinfo.models import fields
from modinfo.models.fields import Generation
from modinfo.models.modinfo import DEFAULT_VERSION, Modinfo, canonical_from_fields

if TYPE_CHECKING:
    from modinfo.converters.reader import ReadResult

logger = logging.getLogger(__name__)

MODINFO_FILENAME = "ModInfo.xml"

DATA_SUFFIXES = {".yaml", ".yml", ".json"}


def find_modinfo_file(path: Path) -> Path:
    """Resolve a descriptor path, accepting a mod folder as well.

    Inside a folder the descriptor file name is matched case-insensitively,
    so ``modinfo.xml`` and ``MODINFO.XML`` are found too.

    Args:
    ----
        path: Path to a ModInfo.xml file or to the folder containing it.

    Returns:
    -------
        Path to the descriptor file.

    Raises:
    ------
        LoaderError: If no descriptor file exists at the path.

    """
    if not path.exists():
        raise LoaderError(f"File not found: {path}", path)

    if path.is_dir():
        for candidate in sorted(path.iterdir()):
            if candidate.is_file() and candidate.name.lower() == MODINFO_FILENAME.lower():
                return candidate
        raise LoaderError(f"No {MODINFO_FILENAME} in folder", path)

    if not path.is_file():
        raise LoaderError(f"Not a file: {path}", path)

    return path


def read_modinfo_text(path: Path) -> str:
    """Read descriptor text from a file or mod folder.

    Raises
    ------
        LoaderError: If the file cannot be found, read or decoded.

    """
    file_path = find_modinfo_file(path)
    try:
        # utf-8-sig drops a byte-order mark written by Windows editors
        return file_path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise LoaderError(f"File is not valid UTF-8: {e}", file_path) from e
    except OSError as e:
        raise LoaderError(f"File read error: {e}", file_path) from e


def load_modinfo_detailed(path: Path) -> ReadResult:
    """Load a descriptor file, keeping the generation it was written in.

    Raises
    ------
        LoaderError: If the file cannot be read.
        UnknownFormatError: If the text matches no generation.
        MalformedError: If the text violates its generation's structure.
        InvalidError: If the text breaks a model invariant.

    """
    from modinfo.converters.reader import read

    text = read_modinfo_text(path)
    result = read(text)
    logger.info("Loaded %s descriptor for %r", result.generation.value, result.modinfo.name)
    return result


def load_modinfo(path: Path) -> Modinfo:
    """Load and validate a ModInfo.xml file of either generation.

    Args:
    ----
        path: Path to a ModInfo.xml file or to the mod folder containing it.

    Returns:
    -------
        Canonical Modinfo model.

    Raises:
    ------
        LoaderError: If the file cannot be read.
        UnknownFormatError: If the text matches no generation.
        MalformedError: If the text violates its generation's structure.
        InvalidError: If the text breaks a model invariant.

    """
    return load_modinfo_detailed(path).modinfo


def write_modinfo(
    modinfo: Modinfo,
    path: Path,
    generation: Generation = Generation.V2,
    overwrite: bool = True,
) -> Path:
    """Write a canonical model to a ModInfo.xml file.

    Args:
    ----
        modinfo: Model to write.
        path: Target file, or a folder to write ModInfo.xml into. A path
            without an .xml suffix is taken as a folder and created.
        generation: Generation to emit.
        overwrite: Whether an existing file may be replaced.

    Returns:
    -------
        Path of the written file.

    Raises:
    ------
        LoaderError: If the file exists and overwrite is False, or writing fails.

    """
    is_folder = path.is_dir() or path.suffix.lower() != ".xml"
    target = path / MODINFO_FILENAME if is_folder else path
    if target.exists() and not overwrite:
        raise LoaderError("File already exists (use --force to overwrite)", target)

    from modinfo.converters.writer import to_markup

    text = to_markup(modinfo, generation)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    except OSError as e:
        raise LoaderError(f"File write error: {e}", target) from e

    logger.info("Wrote %s descriptor to %s", Generation(generation).value, target)
    return target


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML or JSON file and return the raw dictionary.

    Args:
    ----
        path: Path to the YAML or JSON file.

    Returns:
    -------
        Parsed dictionary from the file.

    Raises:
    ------
        LoaderError: If the file cannot be loaded or parsed.

    """
    if not path.exists():
        raise LoaderError(f"File not found: {path}", path)

    if not path.is_file():
        raise LoaderError(f"Not a file: {path}", path)

    suffix = path.suffix.lower()
    if suffix not in DATA_SUFFIXES:
        raise LoaderError(
            f"Unsupported file extension: {suffix}. Use .yaml, .yml, or .json",
            path,
        )

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise LoaderError(f"YAML parsing error: {e}", path) from e
    except OSError as e:
        raise LoaderError(f"File read error: {e}", path) from e

    if data is None:
        raise LoaderError("File is empty", path)

    if not isinstance(data, dict):
        raise LoaderError(
            f"Expected dictionary at root level, got {type(data).__name__}",
            path,
        )

    return data


def _normalize_dependency(entry: Any) -> Any:
    if isinstance(entry, str):
        return {"mod_id": entry}
    if isinstance(entry, dict):
        normalized = {str(k).lower(): v for k, v in entry.items()}
        if "mod_id" not in normalized and "name" in normalized:
            normalized["mod_id"] = normalized.pop("name")
        return normalized
    return entry


def modinfo_from_data(data: dict[str, Any]) -> Modinfo:
    """Build a canonical model from authoring data.

    Keys may be canonical (``display_name``) or tag spellings
    (``DisplayName``), in any case. Dependencies may be plain identifiers
    or mappings with ``mod_id``/``name`` and ``required``. A missing
    version defaults to 0.1.0. YAML reads an unquoted ``1.10`` as the float
    1.1, so versions should be quoted.

    Raises
    ------
        InvalidError: If a key is unknown, the name is missing, or a value
            breaks a model invariant.

    """
    normalized: dict[str, Any] = {}
    for raw_key, value in data.items():
        key = fields.normalize_key(str(raw_key))
        if key is None:
            raise InvalidError(
                f"Unknown field '{raw_key}'", field=str(raw_key), invariant="known_field"
            )
        normalized[key] = value

    if not normalized.get(fields.NAME):
        raise InvalidError("Name is required", field=fields.NAME, invariant="non_empty_name")

    if fields.VERSION in normalized and normalized[fields.VERSION] is not None:
        normalized[fields.VERSION] = str(normalized[fields.VERSION])
    else:
        normalized[fields.VERSION] = str(DEFAULT_VERSION)

    dependencies = normalized.get(fields.DEPENDENCIES)
    if dependencies is not None:
        if not isinstance(dependencies, list):
            raise InvalidError(
                "Dependencies must be a list",
                field=fields.DEPENDENCIES,
                invariant="dependency_list",
            )
        normalized[fields.DEPENDENCIES] = [_normalize_dependency(dep) for dep in dependencies]

    return canonical_from_fields(normalized)


def load_modinfo_data(path: Path) -> Modinfo:
    """Load a YAML/JSON authoring file into a canonical model.

    Raises
    ------
        LoaderError: If the file cannot be loaded.
        InvalidError: If the content is not a valid descriptor.

    """
    return modinfo_from_data(load_yaml_file(path))


def modinfo_to_data(modinfo: Modinfo) -> dict[str, Any]:
    """Return the canonical model as plain data, omitting unset fields."""
    return modinfo.model_dump(mode="json", exclude_none=True)


def dump_modinfo_data(modinfo: Modinfo, fmt: str = "yaml") -> str:
    """Serialize a canonical model as YAML or JSON authoring text.

    Args:
    ----
        modinfo: Model to dump.
        fmt: 'yaml' or 'json'.

    Returns:
    -------
        Serialized text ending with a newline.

    Raises:
    ------
        ValueError: If the format is not supported.

    """
    data = modinfo_to_data(modinfo)
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    if fmt == "json":
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    raise ValueError(f"Unsupported format: {fmt}. Use 'yaml' or 'json'")


def validate_modinfo_file(path: Path) -> list[str]:
    """Validate a descriptor file and return a list of errors.

    This is a non-throwing version of load_modinfo, useful for validation
    CLI commands.

    Args:
    ----
        path: Path to the ModInfo.xml file or mod folder.

    Returns:
    -------
        List of error messages (empty if valid).

    """
    try:
        load_modinfo(path)
    except (LoaderError, UnknownFormatError, MalformedError, InvalidError) as e:
        return [str(e)]
    return []
