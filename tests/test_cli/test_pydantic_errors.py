"""Tests for pydantic error translation."""

from modinfo.errors import InvalidVersionError
from modinfo.pydantic_errors import (
    format_pydantic_location,
    get_suggestion_for_error,
    translate_pydantic_error,
)


class TestTranslatePydanticError:
    """Tests for translate_pydantic_error."""

    def test_missing_field_translation(self) -> None:
        """Should translate missing field error."""
        error = {"type": "missing", "msg": "Field required", "loc": ("Name",)}

        result = translate_pydantic_error(error)  # type: ignore[arg-type]

        assert "required" in result.lower()

    def test_extra_field_translation(self) -> None:
        """Should translate extra forbidden field error."""
        error = {"type": "extra_forbidden", "msg": "Extra inputs not allowed", "loc": ("x",)}

        result = translate_pydantic_error(error)  # type: ignore[arg-type]

        assert "not allowed" in result.lower()

    def test_value_error_keeps_cause(self) -> None:
        """Should show the validator's own explanation."""
        error = {
            "type": "value_error",
            "msg": "Value error, Name must not be empty",
            "loc": ("name",),
            "ctx": {"error": ValueError("Name must not be empty")},
        }

        result = translate_pydantic_error(error)  # type: ignore[arg-type]

        assert result == "Name must not be empty"

    def test_value_error_without_context(self) -> None:
        """Should strip pydantic's prefix from the message."""
        error = {"type": "value_error", "msg": "Value error, bad", "loc": ("name",)}

        result = translate_pydantic_error(error)  # type: ignore[arg-type]

        assert result == "bad"

    def test_invalid_version_cause(self) -> None:
        """Should surface the reason a version was rejected."""
        error = {
            "type": "value_error",
            "msg": "Value error, Invalid version 'x': must start with a number",
            "loc": ("version",),
            "ctx": {"error": InvalidVersionError("x", "must start with a number")},
        }

        result = translate_pydantic_error(error)  # type: ignore[arg-type]

        assert result == "Invalid version 'x': must start with a number"

    def test_unknown_type_uses_message(self) -> None:
        """Should fall back to pydantic's message."""
        error = {"type": "made_up", "msg": "Original message", "loc": ()}

        assert translate_pydantic_error(error) == "Original message"  # type: ignore[arg-type]


class TestFormatPydanticLocation:
    """Tests for format_pydantic_location."""

    def test_simple_path(self) -> None:
        """Should format a single key."""
        assert format_pydantic_location(("Name",)) == "Name"

    def test_nested_path(self) -> None:
        """Should join keys with dots."""
        assert format_pydantic_location(("Version", "compat")) == "Version.compat"

    def test_path_with_index(self) -> None:
        """Should format indices in brackets."""
        assert (
            format_pydantic_location(("Dependencies", 0, "name")) == "Dependencies[0].name"
        )


class TestGetSuggestionForError:
    """Tests for get_suggestion_for_error."""

    def test_missing_suggestion(self) -> None:
        """Should suggest adding the element."""
        error = {"type": "missing", "msg": "", "loc": ()}
        suggestion = get_suggestion_for_error(error)  # type: ignore[arg-type]
        assert suggestion is not None
        assert "ModInfo.xml" in suggestion

    def test_bool_suggestion(self) -> None:
        """Should suggest true or false."""
        error = {"type": "bool_parsing", "msg": "", "loc": ()}
        assert get_suggestion_for_error(error) == "Use 'true' or 'false'"  # type: ignore[arg-type]

    def test_no_suggestion(self) -> None:
        """Should return None for other types."""
        error = {"type": "int_type", "msg": "", "loc": ()}
        assert get_suggestion_for_error(error) is None  # type: ignore[arg-type]
