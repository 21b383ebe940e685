"""Error kinds raised by the modinfo library."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from modinfo.models.fields import Generation


class ModinfoError(Exception):
    """Base class for every error raised by this package."""


class UnknownFormatError(ModinfoError):
    """Markup matches neither the v1 nor the v2 descriptor shape."""

    def __init__(self, message: str, root: str | None = None) -> None:
        """Initialize UnknownFormatError.

        Args:
        ----
            message: Description of what was found instead.
            root: Root element name, if one could be read.

        """
        self.root = root
        super().__init__(message)


class MalformedError(ModinfoError):
    """Markup claims a generation but violates its structure."""

    def __init__(
        self,
        message: str,
        generation: Generation | None = None,
        location: str | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize MalformedError.

        Args:
        ----
            message: Human-readable description of the problem.
            generation: Generation the markup was read as.
            location: Offending element/attribute path (e.g. 'Version.value').
            line: Line number in the source text, if known.
            column: Column number in the source text, if known.

        """
        self.message = message
        self.generation = generation
        self.location = location
        self.line = line
        self.column = column
        super().__init__(self._format())

    def _format(self) -> str:
        parts = []
        if self.generation is not None:
            parts.append(f"[{self.generation.value}]")
        if self.location:
            parts.append(f"{self.location}:")
        parts.append(self.message)
        if self.line is not None:
            if self.column is not None:
                parts.append(f"(line {self.line}, col {self.column})")
            else:
                parts.append(f"(line {self.line})")
        return " ".join(parts)


class InvalidError(ModinfoError):
    """A structurally valid document violates a model invariant."""

    def __init__(self, message: str, field: str, invariant: str) -> None:
        """Initialize InvalidError.

        Args:
        ----
            message: Human-readable description of the failure.
            field: Canonical field key that failed (e.g. 'name').
            invariant: Short identifier of the broken rule (e.g. 'non_empty').

        """
        self.field = field
        self.invariant = invariant
        super().__init__(f"{field}: {message}")


class InvalidVersionError(ModinfoError, ValueError):
    """A version string cannot be parsed, even leniently."""

    def __init__(self, text: str, reason: str) -> None:
        """Initialize InvalidVersionError.

        Args:
        ----
            text: The rejected input.
            reason: Why it was rejected.

        """
        self.text = text
        self.reason = reason
        super().__init__(f"Invalid version '{text}': {reason}")


class LoaderError(ModinfoError):
    """Error while reading or writing a descriptor file."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        """Initialize LoaderError.

        Args:
        ----
            message: Error message describing what went wrong.
            path: Optional path to the file that caused the error.

        """
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)
