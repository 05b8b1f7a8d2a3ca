"""CLI entry point for handoff-validate.

Usage:
    handoff-validate component <id>     # Validate one remote component
    handoff-validate all                # Validate every remote component
    handoff-validate file <path.json>   # Validate a component file on disk

Exit codes:
    0 - Validation passed (warnings allowed unless --strict)
    1 - Validation failed
    2 - Component could not be fetched or read
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console

from handoff.formatting import print_report
from handoff.log import configure_logging
from handoff.services.component_cache import create_cache
from handoff.services.component_client import ComponentClient, ComponentFetchError
from handoff.services.validation_service import validate_all_components, validate_remote_component
from handoff.validators import ValidationReport, validation_engine

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_FETCH_FAILED = 2

console = Console()


def _emit(report: ValidationReport, args: argparse.Namespace, title: Optional[str] = None) -> None:
    if args.json:
        console.print_json(report.model_dump_json())
    else:
        print_report(console, report, title=title, strict=args.strict)


def _client(args: argparse.Namespace) -> ComponentClient:
    return ComponentClient(base_url=args.url, token=args.token, cache=create_cache())


# =============================================================================
# Commands
# =============================================================================


async def cmd_component(args: argparse.Namespace) -> int:
    """Validate a single remote component."""
    async with _client(args) as client:
        try:
            report = await validate_remote_component(client, args.component_id)
        except ComponentFetchError as e:
            console.print(f"[red]Could not fetch component {args.component_id}: {e}[/red]")
            return EXIT_FETCH_FAILED

    _emit(report, args, title=args.component_id)
    return EXIT_INVALID if report.failed(args.strict) else EXIT_OK


async def cmd_all(args: argparse.Namespace) -> int:
    """Validate every component listed by the Handoff API."""
    async with _client(args) as client:
        try:
            results = await validate_all_components(client, concurrency=args.concurrency)
        except ComponentFetchError as e:
            console.print(f"[red]Could not fetch component list: {e}[/red]")
            return EXIT_FETCH_FAILED

    if args.json:
        console.print_json(json.dumps([r.model_dump(mode="json") for r in results]))

    exit_code = EXIT_OK
    for result in results:
        title = result.title or result.id
        if result.fetch_error:
            if not args.json:
                console.print(f"\n[red]Could not fetch {title}: {result.fetch_error}[/red]")
            exit_code = max(exit_code, EXIT_FETCH_FAILED)
            continue
        if not args.json:
            console.print()
            print_report(console, result.report, title=title, strict=args.strict)
        if result.report.failed(args.strict):
            exit_code = max(exit_code, EXIT_INVALID)
    return exit_code


def cmd_file(args: argparse.Namespace) -> int:
    """Validate a component stored as JSON on disk."""
    path = Path(args.path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Could not read {path}: {e}[/red]")
        return EXIT_FETCH_FAILED

    data = json.loads(text) if text.strip() else None
    # Accept both a bare component and the API wrapper
    if isinstance(data, dict) and isinstance(data.get("latest"), dict):
        data = data["latest"]

    report = validation_engine.validate(data, name=path.stem)
    _emit(report, args, title=path.name)
    return EXIT_INVALID if report.failed(args.strict) else EXIT_OK


# =============================================================================
# Argument Parsing
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="handoff-validate",
        description="Validate Handoff component property definitions",
    )
    parser.add_argument("--url", default=None, help="Handoff API base URL (default: HANDOFF_API_URL)")
    parser.add_argument("--token", default=None, help="Handoff API token (default: HANDOFF_API_TOKEN)")
    parser.add_argument("--strict", action="store_true", help="Treat warnings as failures")
    parser.add_argument("--json", action="store_true", help="Print reports as JSON")
    parser.add_argument("--debug", action="store_true", help="Human-readable debug logging")
    parser.add_argument("--log-level", default=None, help="Log level (default: LOG_LEVEL)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    component = subparsers.add_parser("component", help="Validate one remote component")
    component.add_argument("component_id", help="Component id, e.g. 'hero'")

    all_components = subparsers.add_parser("all", help="Validate every remote component")
    all_components.add_argument(
        "--concurrency",
        type=int,
        default=None,
        help="Concurrent fetches (default: FETCH_CONCURRENCY)",
    )

    file_cmd = subparsers.add_parser("file", help="Validate a component JSON file")
    file_cmd.add_argument("path", help="Path to the component JSON")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(debug=args.debug or None, level=args.log_level)

    if args.command == "component":
        return asyncio.run(cmd_component(args))
    if args.command == "all":
        return asyncio.run(cmd_all(args))
    if args.command == "file":
        try:
            return cmd_file(args)
        except json.JSONDecodeError as e:
            console.print(f"[red]Invalid JSON in {args.path}: {e}[/red]")
            return EXIT_FETCH_FAILED
    return EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
