"""CLI exception handling."""

from __future__ import annotations

import logging
import traceback
from collections.abc import Callable
from functools import wraps
from typing import TypeVar

import typer
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from modinfo.errors import (
    InvalidError,
    InvalidVersionError,
    LoaderError,
    MalformedError,
    UnknownFormatError,
)
from modinfo.validation.validator import ModinfoValidationError

T = TypeVar("T")

console = Console(stderr=True)


def _verbose_logging() -> bool:
    return logging.getLogger("modinfo").isEnabledFor(logging.DEBUG)


def handle_exceptions(
    verbose: bool | None = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Handle exceptions in CLI commands with formatted output.

    Args:
    ----
        verbose: Whether to show full tracebacks. Defaults to whether the
            ``modinfo`` logger is at DEBUG level (set by ``--verbose``).

    Returns:
    -------
        Decorator function.

    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: object, **kwargs: object) -> T:
            show_details = _verbose_logging() if verbose is None else verbose
            try:
                return func(*args, **kwargs)
            except typer.Exit:
                raise
            except ModinfoValidationError as e:
                _handle_validation_error(e, show_details)
                raise typer.Exit(1) from None
            except MalformedError as e:
                _handle_malformed_error(e, show_details)
                raise typer.Exit(1) from None
            except (UnknownFormatError, InvalidError, InvalidVersionError) as e:
                _handle_descriptor_error(e, show_details)
                raise typer.Exit(1) from None
            except LoaderError as e:
                _handle_loader_error(e, show_details)
                raise typer.Exit(1) from None
            except PydanticValidationError as e:
                _handle_pydantic_error(e, show_details)
                raise typer.Exit(1) from None
            except FileNotFoundError as e:
                _handle_file_error(e, show_details)
                raise typer.Exit(1) from None
            except PermissionError as e:
                _handle_permission_error(e, show_details)
                raise typer.Exit(1) from None
            except Exception as e:
                _handle_generic_error(e, show_details)
                raise typer.Exit(1) from None

        return wrapper

    return decorator


def _handle_validation_error(error: ModinfoValidationError, verbose: bool) -> None:
    """Handle lint validation errors."""
    from modinfo.cli.error_formatter import ErrorFormatter

    formatter = ErrorFormatter(console)
    formatter.format_validation_result(error.result)


def _handle_malformed_error(error: MalformedError, verbose: bool) -> None:
    """Handle structural descriptor errors."""
    from modinfo.cli.error_formatter import ErrorFormatter

    ErrorFormatter(console).format_malformed(error)
    if verbose and error.__cause__ is not None:
        console.print(f"[dim]Caused by: {escape(str(error.__cause__))}[/dim]")


def _handle_descriptor_error(
    error: UnknownFormatError | InvalidError | InvalidVersionError,
    verbose: bool,
) -> None:
    """Handle unknown-format and invariant errors."""
    if isinstance(error, UnknownFormatError):
        title = "Unknown Format"
        hint = "Expected a <ModInfo> (v1) or <xml> (v2) root element."
    elif isinstance(error, InvalidError):
        title = "Invalid Descriptor"
        hint = f"Rule: {error.invariant}"
    else:
        title = "Invalid Version"
        hint = "Use a version like 1.2.3, 1.2.3-beta.1 or v1.2."

    console.print(
        Panel(
            f"[red]{escape(str(error))}[/red]\n\n[dim]{escape(hint)}[/dim]",
            title=title,
            border_style="red",
        )
    )
    if verbose and error.__cause__ is not None:
        console.print(f"[dim]Caused by: {escape(str(error.__cause__))}[/dim]")


def _handle_loader_error(error: LoaderError, verbose: bool) -> None:
    """Handle file loading and saving errors."""
    console.print(Panel(f"[red]{escape(str(error))}[/red]", title="Error", border_style="red"))


def _handle_pydantic_error(error: PydanticValidationError, verbose: bool) -> None:
    """Handle Pydantic validation errors."""
    from modinfo.pydantic_errors import (
        format_pydantic_location,
        get_suggestion_for_error,
        translate_pydantic_error,
    )

    console.print("[red bold]Schema Validation Failed[/red bold]")
    console.print()

    for err in error.errors():
        location = format_pydantic_location(err["loc"])
        msg = translate_pydantic_error(err)
        suggestion = get_suggestion_for_error(err)

        console.print(f"[red]✗[/red] {escape(location)}")
        console.print(f"  {escape(msg)}")
        console.print(f"  [dim]({err['type']})[/dim]")

        if suggestion:
            console.print(f"  [green]💡 {escape(suggestion)}[/green]")

        console.print()

    if verbose:
        console.print("[dim]Full error:[/dim]")
        console.print(str(error), markup=False)


def _handle_file_error(error: FileNotFoundError, verbose: bool) -> None:
    """Handle file not found errors."""
    filename = error.filename or "unknown"
    console.print(
        Panel(
            f"[red]File not found: {filename}[/red]\n\n"
            "Please check that the file path is correct.",
            title="Error",
            border_style="red",
        )
    )


def _handle_permission_error(error: PermissionError, verbose: bool) -> None:
    """Handle permission errors."""
    filename = error.filename or "unknown"
    console.print(
        Panel(
            f"[red]Permission denied: {filename}[/red]\n\nCheck file permissions and try again.",
            title="Error",
            border_style="red",
        )
    )


def _handle_generic_error(error: Exception, verbose: bool) -> None:
    """Handle unexpected errors."""
    console.print(
        Panel(
            f"[red]An unexpected error occurred:[/red]\n{escape(str(error))}",
            title="Error",
            border_style="red",
        )
    )

    if verbose:
        console.print("\n[dim]Traceback:[/dim]")
        console.print(traceback.format_exc(), markup=False)
    else:
        console.print("\n[dim]Use --verbose for full traceback[/dim]")
