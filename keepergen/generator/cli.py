"""Command-line interface for keeper code generation."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

import click
from google.protobuf import descriptor_pb2
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from keepergen.generator import plugin
from keepergen.generator.config import GeneratorConfig
from keepergen.generator.errors import KeeperGenError
from keepergen.generator.keeper import generate, iter_indexed_messages, store_key_prefix

_verbose_option = click.option(
    "--verbose", "-v", is_flag=True, default=False, help="Log debug output to stderr"
)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _fail(prog: str, error: KeeperGenError) -> NoReturn:
    click.echo(f"{prog}: {error}", err=True)
    sys.exit(1)


def _read_descriptor_set(input_file: str) -> descriptor_pb2.FileDescriptorSet:
    with open(input_file, "rb") as f:
        return plugin.decode_descriptor_set(f.read())


@click.command(name="protoc-gen-keeper")
@_verbose_option
def plugin_command(verbose: bool) -> None:
    """protoc plugin: read a CodeGeneratorRequest on stdin, write the response on stdout."""
    _setup_logging(verbose)
    try:
        plugin.main(sys.stdin.buffer, sys.stdout.buffer)
    except KeeperGenError as e:
        _fail("protoc-gen-keeper", e)


@click.group()
def cli() -> None:
    """Keeper store accessor generator."""


@cli.command()
@click.option(
    "--input",
    "-i",
    "input_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Serialized FileDescriptorSet",
)
@click.option("--output", "-o", "output_path", default=".", help="Output directory")
@click.option("--repo", default=None, help="Repository owner in the types import path")
@click.option("--project", default=None, help="Project name in the types import path")
@click.option("--module", default=None, help="Module name in the types import path")
@click.option(
    "--parameter",
    default="",
    help="protoc-style parameter string (repo=...,project=...,module=...)",
)
@_verbose_option
def gen(
    input_file: str,
    output_path: str,
    repo: str | None,
    project: str | None,
    module: str | None,
    parameter: str,
    verbose: bool,
) -> None:
    """Generate keeper.pb.go from a descriptor set."""
    _setup_logging(verbose)
    try:
        config = GeneratorConfig.from_parameter(
            parameter, {"repo": repo, "project": project, "module": module}
        )
        descriptor_set = _read_descriptor_set(input_file)
        artifact = generate(descriptor_set.file, config)
    except KeeperGenError as e:
        _fail("keepergen", e)

    output_dir = Path(output_path)
    output_dir.mkdir(parents=True, exist_ok=True)
    (output_dir / artifact.name).write_text(artifact.content, encoding="utf-8")
    print(f"Generated {output_dir / artifact.name}")


@cli.command()
@click.option(
    "--input",
    "-i",
    "input_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Serialized FileDescriptorSet",
)
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@_verbose_option
def info(input_file: str, output_json: bool, verbose: bool) -> None:
    """List the indexed messages in a descriptor set."""
    _setup_logging(verbose)
    try:
        descriptor_set = _read_descriptor_set(input_file)
        messages = list(iter_indexed_messages(descriptor_set.file))
    except KeeperGenError as e:
        _fail("keepergen", e)

    if output_json:
        print(json.dumps([message.to_dict() for message in messages], indent=2))
        return

    console = Console()
    console.print("[bold cyan]Indexed messages[/bold cyan]")

    table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    table.add_column("Message", style="white")
    table.add_column("Index field", style="yellow")
    table.add_column("Store key prefix", style="dim")

    for message in messages:
        table.add_row(
            message.type_name, message.index_field, store_key_prefix(message.type_name)
        )

    console.print(table)


def plugin_main() -> None:
    """Entry point for protoc-gen-keeper."""
    plugin_command()


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
