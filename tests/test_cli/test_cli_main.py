"""Tests for the CLI module."""

from __future__ import annotations

import json
from pathlib import Path

import yaml
from modinfo import __version__
from modinfo.cli_main import app
from modinfo.converters.reader import read
from modinfo.models.fields import Generation
from modinfo.models.loader import load_modinfo
from typer.testing import CliRunner

from tests.fixtures.sample_modinfos import XML_V2_MINIMAL

runner = CliRunner()


class TestVersion:
    """Tests for version option."""

    def test_version_long(self) -> None:
        """Should print the package version."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_version_short(self) -> None:
        """Should accept -v."""
        result = runner.invoke(app, ["-v"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_version_with_command_still_shows_version(self) -> None:
        """Should take precedence over a command."""
        result = runner.invoke(app, ["--version", "validate", "missing.xml"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestNoArgs:
    """Tests for no arguments behavior."""

    def test_no_args_shows_help(self) -> None:
        """Should list the commands."""
        result = runner.invoke(app)
        assert "validate" in result.output
        assert "convert" in result.output
        assert "bump" in result.output


class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid_v1(self, v1_file: Path) -> None:
        """Should report a clean v1 descriptor as valid."""
        result = runner.invoke(app, ["validate", str(v1_file)])
        assert result.exit_code == 0
        assert "is valid" in result.output

    def test_folder_argument(self, v1_file: Path) -> None:
        """Should accept the mod folder."""
        result = runner.invoke(app, ["validate", str(v1_file.parent)])
        assert result.exit_code == 0

    def test_warnings_pass(self, v2_file: Path) -> None:
        """Should pass with warnings for a non-URL website."""
        result = runner.invoke(app, ["validate", str(v2_file)])
        assert result.exit_code == 0
        assert "W002" in result.output
        assert "with warnings" in result.output

    def test_strict_fails_on_warnings(self, v2_file: Path) -> None:
        """Should fail on warnings in strict mode."""
        result = runner.invoke(app, ["validate", str(v2_file), "--strict"])
        assert result.exit_code == 1

    def test_target_reports_lost_fields(self, v2_dependencies_file: Path) -> None:
        """Should warn about fields v1 cannot hold."""
        result = runner.invoke(app, ["validate", str(v2_dependencies_file), "--to", "v1"])
        assert result.exit_code == 0
        assert "W200" in result.output

    def test_table_format(self, v2_file: Path) -> None:
        """Should print issues as a table."""
        result = runner.invoke(app, ["validate", str(v2_file), "--format", "table"])
        assert result.exit_code == 0
        assert "Validation Issues" in result.output

    def test_tree_format(self, v2_file: Path) -> None:
        """Should print issues as a tree."""
        result = runner.invoke(app, ["validate", str(v2_file), "-f", "tree"])
        assert result.exit_code == 0
        assert "website" in result.output

    def test_summary(self, v1_file: Path) -> None:
        """Should print a descriptor summary."""
        result = runner.invoke(app, ["validate", str(v1_file), "--summary"])
        assert result.exit_code == 0
        assert "Descriptor Summary" in result.output
        assert "SomeInternalName" in result.output

    def test_quiet(self, v1_file: Path) -> None:
        """Should print nothing for a valid file."""
        result = runner.invoke(app, ["validate", str(v1_file), "-q"])
        assert result.exit_code == 0
        assert "is valid" not in result.output

    def test_nonexistent_file(self) -> None:
        """Should fail for a missing file."""
        result = runner.invoke(app, ["validate", "nonexistent.xml"])
        assert result.exit_code != 0

    def test_malformed(self, tmp_path: Path) -> None:
        """Should report a structural error with exit code 1."""
        path = tmp_path / "ModInfo.xml"
        path.write_text("<ModInfo><Name value='A' /></ModInfo>", encoding="utf-8")
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1
        assert "Malformed v1 Descriptor" in result.output

    def test_unknown_format(self, tmp_path: Path) -> None:
        """Should report a foreign document."""
        path = tmp_path / "ModInfo.xml"
        path.write_text("<Config />", encoding="utf-8")
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1
        assert "Unknown Format" in result.output

    def test_invalid_version(self, tmp_path: Path) -> None:
        """Should report an unparseable version."""
        path = tmp_path / "ModInfo.xml"
        path.write_text(
            "<xml><Name value='A' /><Version value='banana' /></xml>", encoding="utf-8"
        )
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1


class TestInfoCommand:
    """Tests for the info command."""

    def test_shows_generation(self, v1_file: Path) -> None:
        """Should show the detected generation."""
        result = runner.invoke(app, ["info", str(v1_file)])
        assert result.exit_code == 0
        assert "ModInfo v1 Descriptor" in result.output

    def test_shows_dependencies(self, v2_dependencies_file: Path) -> None:
        """Should list dependencies with their required flag."""
        result = runner.invoke(app, ["info", str(v2_dependencies_file)])
        assert result.exit_code == 0
        assert "0_TFP_Harmony (required)" in result.output
        assert "SMXui (optional)" in result.output
        assert "ExtraSounds (unspecified)" in result.output


class TestConvertCommand:
    """Tests for the convert command."""

    def test_convert_to_stdout(self, v1_file: Path) -> None:
        """Should print converted text when no output is given."""
        result = runner.invoke(app, ["convert", str(v1_file), "--to", "v2"])
        assert result.exit_code == 0
        assert "<DisplayName" in result.output
        assert "Some Internal Name" in result.output

    def test_convert_to_file(self, v2_dependencies_file: Path, tmp_path: Path) -> None:
        """Should write the downgraded descriptor and warn about lost fields."""
        output = tmp_path / "out" / "ModInfo.xml"
        result = runner.invoke(
            app, ["convert", str(v2_dependencies_file), "-t", "v1", "-o", str(output)]
        )
        assert result.exit_code == 0
        assert "Not representable in v1" in result.output
        converted = read(output.read_text(encoding="utf-8"))
        assert converted.generation is Generation.V1
        assert converted.modinfo.dependencies == []

    def test_existing_output_requires_force(self, v1_file: Path) -> None:
        """Should refuse to overwrite without --force."""
        result = runner.invoke(app, ["convert", str(v1_file), "-t", "v2", "-o", str(v1_file)])
        assert result.exit_code == 1
        assert read(v1_file.read_text(encoding="utf-8")).generation is Generation.V1

    def test_force_overwrites(self, v1_file: Path) -> None:
        """Should overwrite in place with --force."""
        result = runner.invoke(
            app, ["convert", str(v1_file), "-t", "v2", "-o", str(v1_file), "--force"]
        )
        assert result.exit_code == 0
        assert read(v1_file.read_text(encoding="utf-8")).generation is Generation.V2

    def test_dry_run(self, v1_file: Path, tmp_path: Path) -> None:
        """Should not write anything with --dry-run."""
        output = tmp_path / "dry" / "ModInfo.xml"
        result = runner.invoke(
            app, ["convert", str(v1_file), "-t", "v2", "-o", str(output), "--dry-run"]
        )
        assert result.exit_code == 0
        assert "Would write" in result.output
        assert not output.exists()


class TestBumpCommand:
    """Tests for the bump command."""

    def test_bump_patch_keeps_generation(self, v1_file: Path) -> None:
        """Should bump in place, keeping the file's generation."""
        result = runner.invoke(app, ["bump", str(v1_file), "patch"])
        assert result.exit_code == 0
        assert "1.2.3 → 1.2.4" in result.output
        loaded = read(v1_file.read_text(encoding="utf-8"))
        assert loaded.generation is Generation.V1
        assert str(loaded.modinfo.version) == "1.2.4"

    def test_bump_minor_with_pre(self, v1_file: Path) -> None:
        """Should attach pre-release identifiers."""
        result = runner.invoke(app, ["bump", str(v1_file.parent), "minor", "--pre", "beta.1"])
        assert result.exit_code == 0
        assert str(load_modinfo(v1_file).version) == "1.3.0-beta.1"

    def test_bump_major_to_v2(self, v1_file: Path) -> None:
        """Should rewrite as another generation with --to."""
        result = runner.invoke(app, ["bump", str(v1_file), "major", "--to", "v2"])
        assert result.exit_code == 0
        loaded = read(v1_file.read_text(encoding="utf-8"))
        assert loaded.generation is Generation.V2
        assert str(loaded.modinfo.version) == "2.0.0"

    def test_invalid_part(self, v1_file: Path) -> None:
        """Should reject unknown version parts."""
        result = runner.invoke(app, ["bump", str(v1_file), "huge"])
        assert result.exit_code != 0


class TestNewCommand:
    """Tests for the new command."""

    def test_new_into_folder(self, tmp_path: Path) -> None:
        """Should create ModInfo.xml inside a new mod folder."""
        folder = tmp_path / "Mods" / "MyMod"
        result = runner.invoke(
            app,
            [
                "new",
                str(folder),
                "--name",
                "MyMod",
                "--author",
                "Me",
                "--compat",
                "A21",
                "-d",
                "0_TFP_Harmony",
                "-d",
                "SMXui",
            ],
        )
        assert result.exit_code == 0
        modinfo = load_modinfo(folder)
        assert modinfo.display_name == "My Mod"
        assert str(modinfo.version) == "0.1.0"
        assert [dep.mod_id for dep in modinfo.dependencies] == ["0_TFP_Harmony", "SMXui"]

    def test_new_v1(self, tmp_path: Path) -> None:
        """Should write a v1 descriptor with --to v1."""
        output = tmp_path / "ModInfo.xml"
        result = runner.invoke(app, ["new", str(output), "-n", "Old", "--to", "v1"])
        assert result.exit_code == 0
        assert read(output.read_text(encoding="utf-8")).generation is Generation.V1

    def test_name_required(self, tmp_path: Path) -> None:
        """Should fail without --name."""
        result = runner.invoke(app, ["new", str(tmp_path / "ModInfo.xml")])
        assert result.exit_code == 1
        assert "--name is required" in result.output

    def test_invalid_version(self, tmp_path: Path) -> None:
        """Should fail for an unparseable version."""
        result = runner.invoke(
            app, ["new", str(tmp_path / "ModInfo.xml"), "-n", "A", "--version", "x.y"]
        )
        assert result.exit_code == 1
        assert "Invalid Version" in result.output

    def test_refuses_overwrite(self, v1_file: Path) -> None:
        """Should not replace an existing descriptor without --force."""
        result = runner.invoke(app, ["new", str(v1_file), "-n", "Other"])
        assert result.exit_code == 1
        assert load_modinfo(v1_file).name == "SomeInternalName"

    def test_from_yaml(self, tmp_path: Path) -> None:
        """Should build the descriptor from an authoring file."""
        source = tmp_path / "modinfo.yaml"
        source.write_text(
            yaml.safe_dump(
                {
                    "Name": "FromYaml",
                    "version": "1.10",
                    "website": "https://example.org",
                    "dependencies": ["A", {"name": "B", "required": False}],
                }
            ),
            encoding="utf-8",
        )
        output = tmp_path / "FromYaml"
        result = runner.invoke(app, ["new", str(output), "--from-yaml", str(source)])
        assert result.exit_code == 0
        modinfo = load_modinfo(output)
        assert str(modinfo.version) == "1.10.0"
        assert modinfo.dependencies[1].required is False


class TestExportCommand:
    """Tests for the export command."""

    def test_export_yaml(self, v2_dependencies_file: Path) -> None:
        """Should print canonical YAML."""
        result = runner.invoke(app, ["export", str(v2_dependencies_file)])
        assert result.exit_code == 0
        data = yaml.safe_load(result.output)
        assert data["name"] == "BetterZombies"
        assert data["version"] == "3.0.0-beta.2"
        assert data["dependencies"][0] == {"mod_id": "0_TFP_Harmony", "required": True}

    def test_export_json_to_file(self, tmp_path: Path) -> None:
        """Should write JSON to the output file."""
        source = tmp_path / "ModInfo.xml"
        source.write_text(XML_V2_MINIMAL, encoding="utf-8")
        output = tmp_path / "modinfo.json"
        result = runner.invoke(app, ["export", str(source), "-f", "json", "-o", str(output)])
        assert result.exit_code == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["name"] == "TinyMod"
        assert data["display_name"] == "Tiny Mod"

    def test_export_then_new(self, v2_dependencies_file: Path, tmp_path: Path) -> None:
        """Should recreate an equal descriptor from its export."""
        exported = tmp_path / "export.yaml"
        runner.invoke(app, ["export", str(v2_dependencies_file), "-o", str(exported)])
        result = runner.invoke(app, ["new", str(tmp_path / "Copy"), "--from-yaml", str(exported)])
        assert result.exit_code == 0
        assert load_modinfo(tmp_path / "Copy") == load_modinfo(v2_dependencies_file)
