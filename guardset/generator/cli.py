"""Command-line interface for guard schemas and settings buffers."""

from __future__ import annotations

import json
import logging
import sys
from types import ModuleType
from typing import TYPE_CHECKING, Any

import click
from rich.console import Console
from rich.table import Table

from guardset.generator import calculate_sizes, parse, python
from guardset.generator.parser import ValidationError
from guardset.proto import (
    DEFAULT_PROGRAM,
    GuardsClient,
    SerializationError,
    UnregisteredGuardError,
    UnregisteredProgramError,
)

if TYPE_CHECKING:
    from guardset.generator.sizes import SchemaSizeInfo
    from guardset.generator.types import ProgramDef

CODEC_ERRORS = (
    SerializationError,
    UnregisteredGuardError,
    UnregisteredProgramError,
    ValidationError,
    ValueError,
)

schema_option = click.option(
    "--input", "-i", "input_file", default=None, help="Guard schema (default guards if omitted)"
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug output")
def cli(verbose: bool) -> None:
    """Guard schema tools and settings codec."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


def _read_schema(input_file: str | None) -> str:
    if input_file is None:
        from guardset.guards import schema_text

        return schema_text()

    with open(input_file, encoding="utf-8") as f:
        return f.read()


def _load_client(input_file: str | None) -> tuple[GuardsClient, ModuleType]:
    """Build a client holding every guard and program of a schema."""
    if input_file is None:
        from guardset.guards import default as module
    else:
        module = python.load(_read_schema(input_file), "guardset_cli_schema")

    client = GuardsClient()
    client.programs.register(*module.PROGRAMS)
    client.register(*module.GUARDS)
    return client, module


@cli.command()
@click.option("--input", "-i", "input_file", required=True, help="Input guard schema")
@click.option("--output", "-o", "output_file", required=True, help="Output file")
@click.option(
    "--runtime-import",
    "runtime_import",
    default="guardset.proto",
    help="Module the generated code imports the runtime from",
)
def gen(input_file: str, output_file: str, runtime_import: str) -> None:
    """Generate Python settings classes from a guard schema."""
    with open(input_file, encoding="utf-8") as f:
        schema = f.read()

    try:
        generated_file = python.render(*parse(schema), runtime_import=runtime_import)
    except ValidationError as exc:
        print(f"Invalid schema: {exc}")
        sys.exit(1)

    with open(output_file, "w", encoding="utf-8") as f:
        f.write(generated_file)


@cli.command()
@schema_option
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def info(input_file: str | None, output_json: bool) -> None:
    """Display guard settings sizes and program guard order."""
    try:
        enums, guards, programs = parse(_read_schema(input_file))
    except ValidationError as exc:
        print(f"Invalid schema: {exc}")
        sys.exit(1)

    size_info = calculate_sizes(enums, guards, programs)

    if output_json:
        _output_json(size_info, programs)
    else:
        _output_plain(size_info, programs)


@cli.command()
@schema_option
@click.option("--program", "-p", default=DEFAULT_PROGRAM, help="Program name or address")
@click.argument("data")
def decode(input_file: str | None, program: str, data: str) -> None:
    """Decode hex encoded guard settings to JSON."""
    try:
        client, _ = _load_client(input_file)
        guards, groups = client.deserialize_settings(bytes.fromhex(data), program)
    except CODEC_ERRORS as exc:
        print(f"Cannot decode settings: {exc}")
        sys.exit(1)

    output = {
        "guards": _settings_to_json(guards),
        "groups": [_settings_to_json(group) for group in groups],
    }
    print(json.dumps(output, indent=2))


@cli.command()
@schema_option
@click.option("--program", "-p", default=DEFAULT_PROGRAM, help="Program name or address")
@click.argument("settings_file", type=click.File("r"))
def encode(input_file: str | None, program: str, settings_file: Any) -> None:
    """Encode guard settings from a JSON file ("-" for stdin) to hex.

    The file holds {"guards": {name: settings or null}, "groups": [...]}.
    """
    try:
        document = json.load(settings_file)
        client, module = _load_client(input_file)
        guards = _settings_from_json(module, document.get("guards", {}))
        groups = [_settings_from_json(module, group) for group in document.get("groups", [])]
        encoded = client.serialize_settings(guards, groups, program)
    except (*CODEC_ERRORS, KeyError) as exc:
        print(f"Cannot encode settings: {exc}")
        sys.exit(1)

    print(encoded.hex())


def _settings_to_json(settings: dict[str, Any]) -> dict[str, Any]:
    return {
        name: None if value is None else json.loads(value.to_json())
        for name, value in settings.items()
    }


def _settings_from_json(module: ModuleType, settings: dict[str, Any]) -> dict[str, Any]:
    types = module.SETTINGS_TYPES
    return {
        name: None if value is None else types[name].from_dict(value)
        for name, value in settings.items()
    }


def _format_bytes(size: int) -> str:
    return f"{size} byte{'s' if size != 1 else ''}"


def _output_json(size_info: SchemaSizeInfo, programs: list[ProgramDef]) -> None:
    """Output schema info as JSON."""
    data: dict = {"guards": {}, "programs": {}}

    for name, guard_info in size_info.guards.items():
        data["guards"][name] = {
            "min_size": guard_info.size.min_size,
            "max_size": guard_info.size.max_size,
            "kind": guard_info.size.kind.value,
        }

    for program in programs:
        program_info = size_info.programs[program.name]
        data["programs"][program.name] = {
            "address": program.option("address"),
            "presence": program_info.presence.value,
            "guards": list(program.guards),
            "min_record_size": program_info.min_record_size,
            "max_record_size": program_info.max_record_size,
        }

    print(json.dumps(data, indent=2))


def _output_plain(size_info: SchemaSizeInfo, programs: list[ProgramDef]) -> None:
    """Output schema info using rich text formatting."""
    console = Console()

    console.print("[bold cyan]Guards[/bold cyan]")
    guard_table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    guard_table.add_column("Name", style="white")
    guard_table.add_column("Settings", style="yellow", justify="right")
    guard_table.add_column("Kind", style="dim")

    for name, guard_info in size_info.guards.items():
        min_size = guard_info.size.min_size
        max_size = guard_info.size.max_size

        if min_size == max_size:
            size_str = f"{min_size} bytes"
        else:
            size_str = f"{min_size}-{max_size} bytes"

        guard_table.add_row(name, size_str, guard_info.size.kind.value)

    console.print(guard_table)

    for program in programs:
        program_info = size_info.programs[program.name]
        console.print()
        console.print(f"[bold cyan]Program {program.name}[/bold cyan]")

        program_table = Table(show_header=False, box=None, padding=(0, 2, 0, 2))
        program_table.add_column("Label", style="dim")
        program_table.add_column("Value", style="white")

        program_table.add_row("Address", program.option("address") or "-")
        program_table.add_row("Presence", program_info.presence.value)
        program_table.add_row("Guards", ", ".join(program.guards) or "-")
        program_table.add_row(
            "Record",
            f"{_format_bytes(program_info.min_record_size)} min, "
            f"{_format_bytes(program_info.max_record_size)} max",
        )

        console.print(program_table)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
