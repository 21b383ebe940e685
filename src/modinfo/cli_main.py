"""Command-line interface for ModInfo.xml descriptors."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from modinfo import __version__
from modinfo.cli.exception_handler import handle_exceptions
from modinfo.errors import MalformedError
from modinfo.models import (
    Generation,
    Modinfo,
    dump_modinfo_data,
    load_modinfo,
    load_modinfo_data,
    load_modinfo_detailed,
    write_modinfo,
)
from modinfo.models.loader import read_modinfo_text

# Create Typer app
app = typer.Typer(
    name="modinfo",
    help="Read, validate and convert 7 Days to Die ModInfo.xml descriptors.",
    add_completion=True,
    no_args_is_help=True,
)

# Rich consoles for output
console = Console()
error_console = Console(stderr=True, style="bold red")


class BumpPart(str, Enum):
    """Version component to increase."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


class OutputFormat(str, Enum):
    """Lint report layout."""

    TEXT = "text"
    TABLE = "table"
    TREE = "tree"


class DataFormat(str, Enum):
    """Authoring data format."""

    YAML = "yaml"
    JSON = "json"


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"modinfo version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route the package's log records through Rich.

    Args:
    ----
        verbose: Log DEBUG records when True, only WARNING and above otherwise.

    """
    logger = logging.getLogger("modinfo")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            help="Show debug logging and full tracebacks.",
        ),
    ] = False,
) -> None:
    """Read, validate and convert 7 Days to Die ModInfo.xml descriptors.

    Both descriptor generations are supported: v1 (<ModInfo> root) and
    v2 (<xml> root with display name, website and dependencies).
    """
    configure_logging(verbose)


@app.command()
@handle_exceptions()
def validate(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="ModInfo.xml file or mod folder to validate.",
            exists=True,
            file_okay=True,
            dir_okay=True,
            readable=True,
            resolve_path=True,
        ),
    ],
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only output errors, no success messages.",
        ),
    ] = False,
    show_summary: Annotated[
        bool,
        typer.Option(
            "--summary",
            "-s",
            help="Show summary of descriptor contents.",
        ),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format for validation results.",
        ),
    ] = OutputFormat.TEXT,
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Treat warnings as errors.",
        ),
    ] = False,
    target: Annotated[
        Generation | None,
        typer.Option(
            "--to",
            help="Also report fields the given generation cannot hold.",
        ),
    ] = None,
) -> None:
    """Validate a ModInfo.xml descriptor.

    Parses the file as whichever generation it is written in, then runs
    lint checks (missing author, self dependency, malformed website, ...).

    Examples
    --------
        modinfo validate Mods/SomeMod
        modinfo validate ModInfo.xml --summary
        modinfo validate ModInfo.xml --format table
        modinfo validate ModInfo.xml --strict --to v1

    """
    from modinfo.cli.error_formatter import ErrorFormatter, ErrorTable, ErrorTree
    from modinfo.validation.validator import ModinfoValidator

    try:
        loaded = load_modinfo_detailed(input_file)
    except MalformedError as e:
        error_console.print(f"\n[bold red]✗ Validation failed for {input_file.name}[/bold red]\n")
        ErrorFormatter(error_console).format_malformed(
            e, input_file, read_modinfo_text(input_file)
        )
        raise typer.Exit(code=1) from None

    validator = ModinfoValidator(strict=strict, target=target)
    result = validator.validate(loaded.modinfo)

    if not result.is_valid or result.warnings:
        if output_format is OutputFormat.TABLE:
            ErrorTable(error_console).print_result(result)
        elif output_format is OutputFormat.TREE:
            ErrorTree(error_console).print_result(result)
        else:
            ErrorFormatter(error_console).format_validation_result(result, input_file)

        if not result.is_valid or (strict and result.warnings):
            raise typer.Exit(code=1)

    if not quiet:
        if result.is_valid and not result.warnings:
            console.print(f"\n[bold green]✓ {input_file.name} is valid[/bold green]\n")
        else:
            console.print(
                f"\n[bold yellow]⚠ {input_file.name} is valid with warnings[/bold yellow]\n"
            )

        if show_summary:
            _print_summary(loaded.modinfo, loaded.generation)


def _print_summary(modinfo: Modinfo, generation: Generation | None = None) -> None:
    """Print a summary of the descriptor."""
    table = Table(title="Descriptor Summary", show_header=False, box=None)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    if generation is not None:
        table.add_row("Format", generation.value)
    table.add_row("Name", escape(modinfo.name or "-"))
    table.add_row("Display Name", escape(modinfo.display_name or "-"))
    table.add_row("Version", str(modinfo.version))
    table.add_row("Compat", escape(modinfo.compat or "-"))
    table.add_row("Author", escape(modinfo.author or "-"))

    description = modinfo.description or "-"
    if len(description) > 60:
        description = description[:60] + "..."
    table.add_row("Description", escape(description))
    table.add_row("Website", escape(modinfo.website or "-"))

    table.add_row("", "")  # Spacer
    table.add_row("Dependencies", str(len(modinfo.dependencies)))
    for dependency in modinfo.dependencies:
        required = {True: "required", False: "optional", None: "unspecified"}[dependency.required]
        table.add_row("", f"{escape(dependency.mod_id)} ({required})")

    console.print(table)


@app.command()
@handle_exceptions()
def info(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="ModInfo.xml file or mod folder to inspect.",
            exists=True,
            file_okay=True,
            dir_okay=True,
            readable=True,
            resolve_path=True,
        ),
    ],
) -> None:
    """Display information about a descriptor, including its generation.

    Examples
    --------
        modinfo info Mods/SomeMod
        modinfo info ModInfo.xml

    """
    loaded = load_modinfo_detailed(input_file)

    console.print(
        Panel.fit(
            f"[bold]ModInfo {loaded.generation.value} Descriptor[/bold]\nFile: {input_file}",
            title="File Info",
        )
    )

    _print_summary(loaded.modinfo, loaded.generation)


def _write_or_print(
    modinfo: Modinfo,
    generation: Generation,
    output: Path | None,
    force: bool,
    dry_run: bool,
) -> None:
    """Emit a descriptor to a file, or to stdout when no output is given."""
    from modinfo.converters.writer import dropped_fields, to_markup

    lost = dropped_fields(modinfo, generation)
    if lost:
        error_console.print(
            f"[yellow]⚠ Not representable in {generation.value}: {', '.join(lost)}[/yellow]"
        )

    text = to_markup(modinfo, generation)

    if output is None:
        typer.echo(text, nl=False)
        return

    if dry_run:
        size = len(text.encode("utf-8"))
        console.print(f"\n[bold green]✓ Would write {size:,} bytes to {output}[/bold green]\n")
        return

    written = write_modinfo(modinfo, output, generation, overwrite=force)
    console.print(
        f"\n[bold green]✓ Wrote {generation.value} descriptor to {written}[/bold green]\n"
    )


@app.command()
@handle_exceptions()
def convert(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="ModInfo.xml file or mod folder to convert.",
            exists=True,
            file_okay=True,
            dir_okay=True,
            readable=True,
            resolve_path=True,
        ),
    ],
    target: Annotated[
        Generation,
        typer.Option(
            "--to",
            "-t",
            help="Generation to write.",
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output file or folder. Prints to stdout when omitted.",
            resolve_path=True,
        ),
    ] = None,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite output file if it exists.",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Convert without writing the output file.",
        ),
    ] = False,
) -> None:
    """Convert a descriptor to another generation.

    Upgrading to v2 derives the display name from the internal name.
    Downgrading to v1 drops display name, website and dependencies.

    Examples
    --------
        modinfo convert ModInfo.xml --to v2
        modinfo convert ModInfo.xml --to v1 -o old/ModInfo.xml
        modinfo convert Mods/SomeMod --to v2 -o Mods/SomeMod --force

    """
    modinfo = load_modinfo(input_file)
    _write_or_print(modinfo, target, output, force, dry_run)


@app.command()
@handle_exceptions()
def bump(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="ModInfo.xml file or mod folder to update.",
            exists=True,
            file_okay=True,
            dir_okay=True,
            readable=True,
            resolve_path=True,
        ),
    ],
    part: Annotated[
        BumpPart,
        typer.Argument(help="Version component to increase."),
    ],
    pre: Annotated[
        str | None,
        typer.Option(
            "--pre",
            help="Pre-release identifiers to attach (e.g. 'beta.1').",
        ),
    ] = None,
    build: Annotated[
        str | None,
        typer.Option(
            "--build",
            help="Build metadata to attach (e.g. 'a21').",
        ),
    ] = None,
    target: Annotated[
        Generation | None,
        typer.Option(
            "--to",
            help="Generation to write. Defaults to the file's own generation.",
        ),
    ] = None,
) -> None:
    """Increase the version of a descriptor in place.

    Examples
    --------
        modinfo bump Mods/SomeMod patch
        modinfo bump ModInfo.xml minor --pre beta.1
        modinfo bump ModInfo.xml major --to v2

    """
    from modinfo.models.loader import find_modinfo_file

    path = find_modinfo_file(input_file)
    loaded = load_modinfo_detailed(path)
    modinfo = loaded.modinfo
    previous = modinfo.version

    if part is BumpPart.MAJOR:
        modinfo.bump_version_major()
    elif part is BumpPart.MINOR:
        modinfo.bump_version_minor()
    else:
        modinfo.bump_version_patch()

    if pre:
        modinfo.add_version_pre(pre)
    if build:
        modinfo.add_version_build(build)

    generation = target or loaded.generation
    write_modinfo(modinfo, path, generation)
    console.print(
        f"[bold green]✓ {escape(modinfo.name or path.name)}: "
        f"{previous} → {modinfo.version}[/bold green]"
    )


@app.command()
@handle_exceptions()
def new(
    output: Annotated[
        Path,
        typer.Argument(
            help="Output ModInfo.xml file or mod folder.",
            resolve_path=True,
        ),
    ],
    name: Annotated[
        str | None,
        typer.Option("--name", "-n", help="Internal mod name."),
    ] = None,
    display_name: Annotated[
        str | None,
        typer.Option("--display-name", help="Human-readable name (v2 only)."),
    ] = None,
    version: Annotated[
        str,
        typer.Option("--version", help="Initial version."),
    ] = "0.1.0",
    compat: Annotated[
        str | None,
        typer.Option("--compat", help="Game compatibility tag (e.g. 'A21')."),
    ] = None,
    author: Annotated[
        str | None,
        typer.Option("--author", help="Mod author."),
    ] = None,
    description: Annotated[
        str | None,
        typer.Option("--description", help="Mod description."),
    ] = None,
    website: Annotated[
        str | None,
        typer.Option("--website", help="Mod homepage (v2 only)."),
    ] = None,
    dependencies: Annotated[
        list[str] | None,
        typer.Option("--dependency", "-d", help="Required mod name (repeatable, v2 only)."),
    ] = None,
    from_yaml: Annotated[
        Path | None,
        typer.Option(
            "--from-yaml",
            help="Read fields from a YAML/JSON authoring file instead.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ] = None,
    target: Annotated[
        Generation,
        typer.Option("--to", "-t", help="Generation to write."),
    ] = Generation.V2,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite output file if it exists."),
    ] = False,
) -> None:
    """Create a new descriptor.

    Examples
    --------
        modinfo new Mods/SomeMod --name SomeMod --author Me --compat A21
        modinfo new ModInfo.xml --name SomeMod --to v1
        modinfo new Mods/SomeMod --from-yaml modinfo.yaml

    """
    if from_yaml is not None:
        modinfo = load_modinfo_data(from_yaml)
    else:
        if not name:
            error_console.print(
                "\n[bold red]✗ --name is required without --from-yaml[/bold red]\n"
            )
            raise typer.Exit(code=1)
        modinfo = Modinfo(name=name)
        modinfo.set_version(version)
        for key, value in (
            ("display_name", display_name),
            ("compat", compat),
            ("author", author),
            ("description", description),
            ("website", website),
        ):
            if value is not None:
                modinfo.set_value_for(key, value)
        if dependencies:
            modinfo.set_dependencies(dependencies)

    written = write_modinfo(modinfo.ensure_valid(), output, target, overwrite=force)
    console.print(
        f"\n[bold green]✓ Created {target.value} descriptor {written}[/bold green]\n"
    )


@app.command()
@handle_exceptions()
def export(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="ModInfo.xml file or mod folder to export.",
            exists=True,
            file_okay=True,
            dir_okay=True,
            readable=True,
            resolve_path=True,
        ),
    ],
    data_format: Annotated[
        DataFormat,
        typer.Option("--format", "-f", help="Output data format."),
    ] = DataFormat.YAML,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output file. Prints to stdout when omitted.",
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
) -> None:
    """Export a descriptor as a YAML/JSON authoring file.

    The result can be edited and turned back into a descriptor with
    ``modinfo new OUT --from-yaml FILE``.

    Examples
    --------
        modinfo export Mods/SomeMod
        modinfo export ModInfo.xml --format json -o modinfo.json

    """
    text = dump_modinfo_data(load_modinfo(input_file), data_format.value)

    if output is None:
        typer.echo(text, nl=False)
        return

    output.write_text(text, encoding="utf-8")
    console.print(f"\n[bold green]✓ Wrote {output}[/bold green]\n")


if __name__ == "__main__":
    app()
