"""Translate Pydantic errors to user-friendly messages."""

from __future__ import annotations

from pydantic_core import ErrorDetails

# Translation map for Pydantic error types
ERROR_TRANSLATIONS: dict[str, str] = {
    "missing": "This element or attribute is required but was not provided",
    "extra_forbidden": "This field is not allowed in this context",
    "string_type": "Must be a string",
    "int_type": "Must be an integer",
    "bool_type": "Must be true or false",
    "bool_parsing": "Must be true or false",
    "list_type": "Must be a list",
    "dict_type": "Must be an element with attributes",
    "model_type": "Must be an element with attributes",
}


def translate_pydantic_error(error: ErrorDetails) -> str:
    """Translate a Pydantic error to a message about the descriptor markup.

    ``value_error`` keeps the explanation raised by our own validators (for
    example why a version or a ``required`` flag was rejected). Other types
    use ``ERROR_TRANSLATIONS`` and fall back to pydantic's message.

    Args:
    ----
        error: The Pydantic error details.

    Returns:
    -------
        User-friendly error message.

    """
    if error["type"] == "value_error":
        cause = (error.get("ctx") or {}).get("error")
        return str(cause) if cause else error["msg"].removeprefix("Value error, ")
    return ERROR_TRANSLATIONS.get(error["type"], error["msg"])


def format_pydantic_location(loc: tuple[str | int, ...]) -> str:
    """Format Pydantic location tuple to readable path.

    Args:
    ----
        loc: Location tuple from Pydantic error.

    Returns:
    -------
        Formatted path string.

    """
    parts: list[str] = []
    for part in loc:
        if isinstance(part, int):
            parts.append(f"[{part}]")
        else:
            if parts:
                parts.append(".")
            parts.append(str(part))

    return "".join(parts)


def get_suggestion_for_error(error: ErrorDetails) -> str | None:
    """Get a suggestion for how to fix the error.

    Args:
    ----
        error: The Pydantic error details.

    Returns:
    -------
        Suggestion string or None.

    """
    error_type = error["type"]

    suggestions: dict[str, str] = {
        "missing": "Add the required element or attribute to your ModInfo.xml",
        "bool_parsing": "Use 'true' or 'false'",
        "bool_type": "Use 'true' or 'false'",
    }

    return suggestions.get(error_type)
