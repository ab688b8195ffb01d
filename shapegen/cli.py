"""
Command-line interface for shapegen.

    shapegen generate SERVICE_JSON [-o OUT] [--url URL] [--config FILE]
                      [--no-tests] [--no-comments] [--stdout] [--verbose]
    shapegen protocols

Exit status is 0 on success, 1 when input or output files cannot be read or
written, and 2 when the service description cannot be translated.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .codegen import (
    GenerationResult,
    GeneratorConfig,
    GeneratorError,
    Service,
    generate_code,
    generate_source,
    load_config,
)
from .codegen.core.config import ConfigError
from .codegen.registry import create_registry
from .logging_config import get_logger, setup_logging
from .utils import ServiceLoaderError, load_service_json

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_FATAL = 2

# Initialize rich console
console = Console()


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shapegen",
        description="Generate typed Python service clients from botocore service descriptions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  shapegen generate dynamodb-2012-08-10.json -o dynamodb.py
  shapegen generate --url https://example.com/sqs.json --stdout
  shapegen protocols
        """.strip(),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    generate = subparsers.add_parser(
        "generate", help="Generate a client module from a service description"
    )

    # Input options (mutually exclusive)
    input_group = generate.add_mutually_exclusive_group(required=True)
    input_group.add_argument("file", nargs="?", help="Service description JSON file")
    input_group.add_argument("--url", help="URL to fetch the service description from")

    generate.add_argument("--output", "-o", metavar="FILE", help="Output module path")
    generate.add_argument("--config", metavar="FILE", help="JSON configuration file")
    generate.add_argument(
        "--no-tests", action="store_true", help="Don't append the generated test section"
    )
    generate.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't emit documentation from the service description",
    )
    generate.add_argument(
        "--stdout",
        action="store_true",
        help="Write the plain module source to standard output",
    )
    generate.add_argument(
        "--verbose", "-v", action="store_true", help="Show generation metadata and debug logs"
    )
    generate.set_defaults(func=_handle_generate)

    protocols = subparsers.add_parser("protocols", help="List supported protocols")
    protocols.set_defaults(func=_handle_protocols)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "func", None):
        parser.print_help()
        return EXIT_OK

    setup_logging(logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING)
    return args.func(args)


def _handle_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    try:
        config = _build_config(args)
        source, data = load_service_json(file_path=args.file, url=args.url)
    except (ConfigError, ServiceLoaderError, OSError) as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return EXIT_IO_ERROR

    try:
        service = Service.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        console.print(f"[red]✗ Malformed service description {source}:[/red] {e}")
        return EXIT_FATAL

    try:
        if args.output:
            result = generate_source(service, args.output, config)
            console.print(
                f"[green]✓[/green] Generated {result.metadata['client']} "
                f"saved to [cyan]{args.output}[/cyan]"
            )
        else:
            result = generate_code(service, config)
            _print_code(result, plain=args.stdout)
    except GeneratorError as e:
        logger.debug("Generation aborted", exc_info=True)
        console.print(f"[red]✗ Generation failed:[/red] {e}")
        return EXIT_FATAL
    except OSError as e:
        console.print(f"[red]✗ Failed to write {args.output}:[/red] {e}")
        return EXIT_IO_ERROR

    if args.verbose:
        _print_metadata(result)
    _print_warnings(result)
    return EXIT_OK


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from the config file and CLI overrides."""
    overrides = {}
    if args.no_comments:
        overrides["add_comments"] = False
    if args.no_tests:
        overrides["generate_tests"] = False
    if args.output:
        overrides["output_file"] = str(Path(args.output))

    return load_config(custom_config=overrides, config_file=args.config)


def _print_code(result: GenerationResult, plain: bool) -> None:
    if plain:
        sys.stdout.write(result.code)
        return

    top_border = "═" * 30
    console.print(f"[green]{top_border} Generated {result.metadata['client']} {top_border}[/green]\n")
    console.print(Syntax(result.code, "python", theme="monokai"))
    console.print(f"\n[green]{top_border * 3}[/green]")


def _print_metadata(result: GenerationResult) -> None:
    metadata_table = Table(
        title="Generation Metadata",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    metadata_table.add_column("Property", style="bold")
    metadata_table.add_column("Value", style="green")

    for key, value in result.metadata.items():
        metadata_table.add_row(key.replace("_", " ").title(), str(value))

    console.print()
    console.print(metadata_table)


def _print_warnings(result: GenerationResult) -> None:
    if result.warnings:
        console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]•[/yellow] {warning}")
        console.print()


def _handle_protocols(args: argparse.Namespace) -> int:
    """List supported protocols with their generators."""
    registry = create_registry()

    table = Table(title="Supported Protocols", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Protocol", style="bold green", no_wrap=True)
    table.add_column("Generator", style="cyan")
    table.add_column("Error Types", style="dim")
    table.add_column("Aliases", style="blue")

    for protocol in registry.list_protocols():
        pair = registry.get_pair(protocol)
        aliases = registry.get_aliases(protocol)
        table.add_row(
            protocol,
            pair.protocol.__name__,
            pair.error_types.__name__,
            ", ".join(aliases) if aliases else "[dim]none[/dim]",
        )

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "[bold]Usage:[/bold] shapegen generate [dim]service.json[/dim] -o [cyan]client.py[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return EXIT_OK
