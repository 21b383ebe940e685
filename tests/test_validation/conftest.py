"""Shared fixtures for validation tests."""

import pytest
from modinfo.models.modinfo import Modinfo


@pytest.fixture
def clean_modinfo() -> Modinfo:
    """Return a descriptor that passes every lint rule."""
    return Modinfo(
        name="CleanMod",
        version="1.0.0",
        compat="A21",
        description="A clean mod",
        author="Me",
        website="https://example.org/clean",
    )
