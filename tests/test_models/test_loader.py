"""Tests for descriptor file loading and saving."""

import json
from pathlib import Path

import pytest
import yaml
from modinfo.errors import InvalidError, LoaderError, MalformedError, UnknownFormatError
from modinfo.models.fields import Generation
from modinfo.models.loader import (
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
from modinfo.models.modinfo import Modinfo

from tests.fixtures.sample_modinfos import XML_V1


class TestFindModinfoFile:
    """Tests for find_modinfo_file."""

    def test_file_path(self, v1_file: Path) -> None:
        """Should return a file path unchanged."""
        assert find_modinfo_file(v1_file) == v1_file

    def test_folder(self, v1_file: Path) -> None:
        """Should find ModInfo.xml inside a mod folder."""
        assert find_modinfo_file(v1_file.parent) == v1_file

    def test_folder_case_insensitive(self, tmp_path: Path) -> None:
        """Should match the file name in any case."""
        path = tmp_path / "modinfo.XML"
        path.write_text(XML_V1)
        assert find_modinfo_file(tmp_path) == path

    def test_folder_without_descriptor(self, tmp_path: Path) -> None:
        """Should raise LoaderError for a folder with no descriptor."""
        with pytest.raises(LoaderError, match="No ModInfo.xml"):
            find_modinfo_file(tmp_path)

    def test_missing(self, tmp_path: Path) -> None:
        """Should raise LoaderError for a missing path."""
        with pytest.raises(LoaderError, match="File not found"):
            find_modinfo_file(tmp_path / "nope.xml")


class TestLoadModinfo:
    """Tests for load_modinfo."""

    def test_load_v1(self, v1_file: Path) -> None:
        """Should load a v1 file."""
        modinfo = load_modinfo(v1_file)
        assert modinfo.name == "SomeInternalName"
        assert str(modinfo.version) == "1.2.3"

    def test_load_detailed_reports_generation(self, v2_file: Path) -> None:
        """Should report the generation the file was written in."""
        result = load_modinfo_detailed(v2_file.parent)
        assert result.generation is Generation.V2
        assert result.modinfo.display_name == "Official Mod Name"

    def test_byte_order_mark(self, tmp_path: Path) -> None:
        """Should read files starting with a byte-order mark."""
        path = tmp_path / "ModInfo.xml"
        path.write_bytes(b"\xef\xbb\xbf" + XML_V1.strip().encode("utf-8"))
        assert load_modinfo(path).author == "Name"

    def test_not_utf8(self, tmp_path: Path) -> None:
        """Should raise LoaderError for undecodable files."""
        path = tmp_path / "ModInfo.xml"
        path.write_bytes(b"<ModInfo>\xff\xfe</ModInfo>")
        with pytest.raises(LoaderError, match="UTF-8"):
            load_modinfo(path)

    def test_unknown_format(self, tmp_path: Path) -> None:
        """Should propagate UnknownFormatError."""
        path = tmp_path / "ModInfo.xml"
        path.write_text("<Config />")
        with pytest.raises(UnknownFormatError):
            load_modinfo(path)


class TestWriteModinfo:
    """Tests for write_modinfo."""

    def test_write_into_folder(self, tmp_path: Path) -> None:
        """Should write ModInfo.xml into a folder."""
        written = write_modinfo(Modinfo(name="A"), tmp_path, Generation.V1)
        assert written == tmp_path / "ModInfo.xml"
        assert written.read_text(encoding="utf-8").startswith("<ModInfo>")

    def test_path_without_suffix_is_folder(self, tmp_path: Path) -> None:
        """Should treat a new path without .xml suffix as a mod folder."""
        written = write_modinfo(Modinfo(name="A"), tmp_path / "Mods" / "A")
        assert written == tmp_path / "Mods" / "A" / "ModInfo.xml"

    def test_creates_parents(self, tmp_path: Path) -> None:
        """Should create missing parent folders."""
        target = tmp_path / "Mods" / "A" / "ModInfo.xml"
        write_modinfo(Modinfo(name="A"), target)
        assert load_modinfo(target).name == "A"

    def test_refuses_overwrite(self, v1_file: Path) -> None:
        """Should not replace an existing file unless allowed."""
        with pytest.raises(LoaderError, match="already exists"):
            write_modinfo(Modinfo(name="A"), v1_file, overwrite=False)


class TestLoadYamlFile:
    """Tests for load_yaml_file function."""

    def test_load_valid_yaml(self, tmp_path: Path) -> None:
        """Should load valid YAML file."""
        yaml_file = tmp_path / "test.yaml"
        yaml_file.write_text("name: A\nversion: '1.0'")

        assert load_yaml_file(yaml_file) == {"name": "A", "version": "1.0"}

    def test_unsupported_extension(self, tmp_path: Path) -> None:
        """Should raise LoaderError for unsupported extension."""
        txt_file = tmp_path / "test.txt"
        txt_file.write_text("content")

        with pytest.raises(LoaderError, match="Unsupported file extension"):
            load_yaml_file(txt_file)

    def test_empty_file(self, tmp_path: Path) -> None:
        """Should raise LoaderError for empty file."""
        empty_file = tmp_path / "empty.yaml"
        empty_file.write_text("")

        with pytest.raises(LoaderError, match="File is empty"):
            load_yaml_file(empty_file)

    def test_invalid_yaml_syntax(self, tmp_path: Path) -> None:
        """Should raise LoaderError for invalid YAML."""
        invalid_file = tmp_path / "invalid.yaml"
        invalid_file.write_text("key: [unclosed bracket")

        with pytest.raises(LoaderError, match="YAML parsing error"):
            load_yaml_file(invalid_file)

    def test_non_dict_root(self, tmp_path: Path) -> None:
        """Should raise LoaderError when root is not a mapping."""
        list_file = tmp_path / "list.yaml"
        list_file.write_text("- a\n- b")

        with pytest.raises(LoaderError, match="Expected dictionary"):
            load_yaml_file(list_file)


class TestAuthoringData:
    """Tests for YAML/JSON authoring files."""

    def test_modinfo_from_data(self) -> None:
        """Should accept canonical keys and tag spellings."""
        modinfo = modinfo_from_data(
            {
                "Name": "SomeMod",
                "DisplayName": "Some Mod!",
                "version": "1.2",
                "compat": "A21",
                "dependencies": ["Other", {"name": "Third", "required": False}],
            }
        )
        assert modinfo.display_name == "Some Mod!"
        assert str(modinfo.version) == "1.2.0"
        assert [dep.mod_id for dep in modinfo.dependencies] == ["Other", "Third"]
        assert modinfo.dependencies[1].required is False

    def test_default_version(self) -> None:
        """Should default the version when omitted."""
        assert str(modinfo_from_data({"name": "A"}).version) == "0.1.0"

    def test_non_ascii_name(self) -> None:
        """Should build a model whose name has no ASCII letters."""
        modinfo = modinfo_from_data({"name": "模组", "version": "1"})
        assert modinfo.display_name == "模组"

    def test_missing_name(self) -> None:
        """Should require a name."""
        with pytest.raises(InvalidError, match="Name is required"):
            modinfo_from_data({"version": "1"})

    def test_unknown_key(self) -> None:
        """Should reject unknown keys."""
        with pytest.raises(InvalidError, match="Unknown field"):
            modinfo_from_data({"name": "A", "flavor": "x"})

    def test_load_json(self, tmp_path: Path) -> None:
        """Should load JSON authoring files."""
        path = tmp_path / "modinfo.json"
        path.write_text(json.dumps({"name": "A", "author": "Me"}))
        assert load_modinfo_data(path).author == "Me"

    def test_dump_yaml(self, full_modinfo: Modinfo) -> None:
        """Should dump loadable YAML that rebuilds the same model."""
        text = dump_modinfo_data(full_modinfo, "yaml")
        assert modinfo_from_data(yaml.safe_load(text)) == full_modinfo

    def test_dump_json_omits_unset(self) -> None:
        """Should leave out unset fields."""
        data = json.loads(dump_modinfo_data(Modinfo(name="A"), "json"))
        assert data == {
            "name": "A",
            "display_name": "A",
            "version": "0.1.0",
            "dependencies": [],
        }

    def test_dump_unknown_format(self) -> None:
        """Should reject unknown formats."""
        with pytest.raises(ValueError, match="Unsupported format"):
            dump_modinfo_data(Modinfo(name="A"), "toml")


class TestValidateModinfoFile:
    """Tests for validate_modinfo_file."""

    def test_valid(self, v1_file: Path) -> None:
        """Should return no errors for a valid file."""
        assert validate_modinfo_file(v1_file) == []

    def test_malformed(self, tmp_path: Path) -> None:
        """Should return the error message instead of raising."""
        path = tmp_path / "ModInfo.xml"
        path.write_text("<ModInfo><Name value='A' /></ModInfo>")
        errors = validate_modinfo_file(path)
        assert len(errors) == 1
        assert "Version" in errors[0]

    def test_missing(self, tmp_path: Path) -> None:
        """Should report missing files."""
        assert "File not found" in validate_modinfo_file(tmp_path / "x.xml")[0]

    def test_malformed_is_error_type(self, tmp_path: Path) -> None:
        """Should raise MalformedError through load_modinfo."""
        path = tmp_path / "ModInfo.xml"
        path.write_text("<ModInfo><Name value='A' /></ModInfo>")
        with pytest.raises(MalformedError):
            load_modinfo(path)
