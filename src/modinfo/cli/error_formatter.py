"""Error message formatting with Rich."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

if TYPE_CHECKING:
    from modinfo.errors import MalformedError
    from modinfo.validation.errors import ValidationIssue, ValidationResult

SEVERITY_COLORS = {
    "error": "red",
    "warning": "yellow",
    "info": "blue",
}


def severity_color(issue: ValidationIssue) -> str:
    """Return the Rich color used for an issue's severity."""
    return SEVERITY_COLORS.get(issue.severity.value, "white")


def source_context(
    source: str,
    line: int | None,
    max_context_lines: int = 3,
) -> Syntax | None:
    """Build a highlighted snippet of descriptor text around a line.

    Args:
    ----
        source: Full descriptor text.
        line: 1-based line to highlight.
        max_context_lines: Lines shown before and after.

    Returns:
    -------
        Syntax renderable, or None if the line is unknown or out of range.

    """
    if line is None:
        return None

    lines = source.splitlines()
    line_no = line - 1

    if line_no < 0 or line_no >= len(lines):
        return None

    start = max(0, line_no - max_context_lines)
    end = min(len(lines), line_no + max_context_lines + 1)

    return Syntax(
        "\n".join(lines[start:end]),
        "xml",
        line_numbers=True,
        start_line=start + 1,
        highlight_lines={line},
        theme="monokai",
    )


class ErrorFormatter:
    """Formats validation issues and parse errors for terminal display."""

    def __init__(
        self,
        console: Console | None = None,
        show_context: bool = True,
        max_context_lines: int = 3,
    ) -> None:
        """Initialize formatter.

        Args:
        ----
            console: Rich Console for output.
            show_context: Whether to show source context.
            max_context_lines: Max lines of context to show.

        """
        self.console = console or Console(stderr=True)
        self.show_context = show_context
        self.max_context_lines = max_context_lines

    def format_validation_result(
        self,
        result: ValidationResult,
        source_path: Path | None = None,
    ) -> None:
        """Format and print a lint result.

        Args:
        ----
            result: The validation result to format.
            source_path: Path to source file (for display).

        """
        if result.is_valid and not result.warnings:
            self._print_success("Validation passed")
            for issue in result.infos:
                self._print_issue(issue)
            return

        error_count = len(result.errors)
        warning_count = len(result.warnings)

        self.console.print(self._build_summary(error_count, warning_count, source_path))
        self.console.print()

        for issue in [*result.errors, *result.warnings, *result.infos]:
            self._print_issue(issue)

        self.console.print()
        if error_count > 0:
            self.console.print(f"[red bold]✗ {error_count} error(s)[/red bold]", end="")
        if warning_count > 0:
            if error_count > 0:
                self.console.print(", ", end="")
            self.console.print(f"[yellow]{warning_count} warning(s)[/yellow]", end="")
        self.console.print()

    def format_malformed(
        self,
        error: MalformedError,
        source_path: Path | None = None,
        source_content: str | None = None,
    ) -> None:
        """Print a structural error, with a source snippet when the line is known.

        Args:
        ----
            error: The error to display.
            source_path: Path to source file (for display).
            source_content: Descriptor text for the snippet.

        """
        title = "Malformed Descriptor"
        if error.generation is not None:
            title = f"Malformed {error.generation.value} Descriptor"

        content = Text()
        if source_path:
            content.append(f"File: {source_path}\n", style="dim")
        if error.location:
            content.append(f"{error.location}: ", style="cyan")
        content.append(error.message, style="red")
        if error.line is not None:
            content.append(f"\nLine {error.line}", style="dim")
            if error.column is not None:
                content.append(f", column {error.column}", style="dim")

        self.console.print(Panel(content, title=title, border_style="red"))

        if self.show_context and source_content:
            context = source_context(source_content, error.line, self.max_context_lines)
            if context:
                self.console.print(context)

    def _build_summary(
        self,
        errors: int,
        warnings: int,
        source_path: Path | None,
    ) -> Panel:
        """Build summary panel."""
        title = "Validation Failed" if errors > 0 else "Validation Warnings"
        style = "red" if errors > 0 else "yellow"

        content = Text()
        if source_path:
            content.append(f"File: {source_path}\n", style="dim")

        if errors > 0:
            content.append(f"Errors: {errors}", style="red bold")
        if warnings > 0:
            if errors > 0:
                content.append("  ")
            content.append(f"Warnings: {warnings}", style="yellow")

        return Panel(content, title=title, border_style=style)

    def _print_issue(self, issue: ValidationIssue) -> None:
        """Print a single issue."""
        color = severity_color(issue)
        severity = issue.severity.value.upper()
        self.console.print(
            f"[{color} bold]{severity}[/{color} bold] "
            f"[{color}]\\[{issue.code}][/{color}] "
            f"{escape(issue.message)}"
        )

        if issue.location:
            self.console.print(f"  [dim]at {escape(str(issue.location))}[/dim]")

        if issue.suggestion:
            self.console.print(f"  [green]💡 {escape(issue.suggestion)}[/green]")

        self.console.print()

    def _print_success(self, message: str) -> None:
        """Print success message."""
        self.console.print(f"[green]✓ {message}[/green]")


class ErrorTree:
    """Display issues as a tree grouped by field."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize error tree formatter.

        Args:
        ----
            console: Rich Console for output.

        """
        self.console = console or Console(stderr=True)

    def print_result(self, result: ValidationResult) -> None:
        """Print validation result as tree."""
        tree = Tree("[bold]Validation Issues[/bold]")

        by_field: dict[str, list[ValidationIssue]] = {}

        for issue in result.issues:
            field = issue.location.path.split(".")[0] if issue.location else "general"
            by_field.setdefault(field, []).append(issue)

        for field, issues in sorted(by_field.items()):
            field_node = tree.add(f"[cyan]{escape(field)}[/cyan] ({len(issues)} issues)")

            for issue in issues:
                color = severity_color(issue)
                field_node.add(f"[{color}]{issue.code}[/{color}] {escape(issue.message)}")

        self.console.print(tree)


class ErrorTable:
    """Display issues as a table."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize error table formatter.

        Args:
        ----
            console: Rich Console for output.

        """
        self.console = console or Console(stderr=True)

    def print_result(self, result: ValidationResult) -> None:
        """Print validation result as table."""
        table = Table(title="Validation Issues")

        table.add_column("Code", style="cyan", width=6)
        table.add_column("Severity", width=8)
        table.add_column("Location", style="dim")
        table.add_column("Message")

        for issue in result.issues:
            color = severity_color(issue)
            severity = f"[{color}]{issue.severity.value.upper()}[/{color}]"
            location = str(issue.location) if issue.location else "-"

            table.add_row(issue.code, severity, escape(location), escape(issue.message))

        self.console.print(table)
