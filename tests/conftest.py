"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest
from modinfo.models.modinfo import Dependency, Modinfo

from tests.fixtures.sample_modinfos import XML_V1, XML_V2, XML_V2_DEPENDENCIES


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def v1_file(tmp_path: Path) -> Path:
    """Write the v1 sample into a mod folder and return the file path."""
    path = tmp_path / "SomeMod" / "ModInfo.xml"
    path.parent.mkdir()
    path.write_text(XML_V1, encoding="utf-8")
    return path


@pytest.fixture
def v2_file(tmp_path: Path) -> Path:
    """Write the v2 sample into a mod folder and return the file path."""
    path = tmp_path / "SomeMod" / "ModInfo.xml"
    path.parent.mkdir()
    path.write_text(XML_V2, encoding="utf-8")
    return path


@pytest.fixture
def v2_dependencies_file(tmp_path: Path) -> Path:
    """Write the v2 sample with dependencies and return the file path."""
    path = tmp_path / "BetterZombies" / "ModInfo.xml"
    path.parent.mkdir()
    path.write_text(XML_V2_DEPENDENCIES, encoding="utf-8")
    return path


@pytest.fixture
def full_modinfo() -> Modinfo:
    """Return a canonical model with every field populated."""
    return Modinfo(
        name="BetterZombies",
        display_name="Better Zombies",
        version="3.0.0-beta.2",
        compat="A21",
        description="Smarter zombies",
        author="Modder",
        website="https://example.org/better-zombies",
        dependencies=[
            Dependency(mod_id="0_TFP_Harmony", required=True),
            Dependency(mod_id="SMXui", required=False),
        ],
    )
