"""Terminal lookup client.

Example:
    infofinder-lookup mobile 9876543210 --chain --show-map
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from rich.console import Console
from rich.table import Table

from infofinder.lookup import (
    CategoryId,
    InputValidationError,
    LookupService,
    LookupServiceError,
    Section,
    definition_for,
    list_categories,
)
from infofinder.lookup.location import approximate_location
from infofinder.observability import configure_logging

EXIT_LOOKUP_FAILED = 1
EXIT_INVALID_INPUT = 2


def _section_table(section: Section) -> Table:
    table = Table(title=section.heading, show_header=False, title_justify="left")
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")
    for item in section.items:
        table.add_row(item.label, item.value or "-")
    return table


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Look up an identifier across InfoFinder services.")
    parser.add_argument(
        "category",
        choices=[definition.id.value for definition in list_categories()],
        help="Identifier category to search.",
    )
    parser.add_argument("value", help="Identifier value, e.g. 9876543210 for a mobile number.")
    parser.add_argument(
        "--chain",
        action="store_true",
        help="Follow the linked Aadhaar lookup when a mobile search exposes one.",
    )
    parser.add_argument(
        "--show-map",
        action="store_true",
        help="Print an approximate (non-geocoded) map pin for the address.",
    )
    return parser


def run(argv: Sequence[str] | None = None, *, service: LookupService | None = None, console: Console | None = None) -> int:
    """Execute the CLI and return the process exit code."""

    args = build_parser().parse_args(argv)
    out = console or Console()
    if service is not None:
        return _lookup(args, service, out)
    with LookupService() as owned:
        return _lookup(args, owned, out)


def _lookup(args: argparse.Namespace, lookup: LookupService, out: Console) -> int:
    session = lookup.new_session()
    definition = definition_for(args.category)

    try:
        model = lookup.search(session, args.value, category=definition.id)
    except InputValidationError as exc:
        out.print(f"[yellow]{exc}[/yellow]")
        out.print(f"[dim]{definition.hint}[/dim]")
        return EXIT_INVALID_INPUT
    except LookupServiceError as exc:
        out.print(f"[red]❌ {exc.user_message}[/red]")
        return EXIT_LOOKUP_FAILED

    out.print(f"[bold green]{definition.icon} {definition.display_name} results[/bold green]\n")
    for section in model.sections:
        out.print(_section_table(section))

    if session.chained_id:
        if args.chain:
            try:
                out.print(_section_table(lookup.fetch_chained(session)))
            except LookupServiceError as exc:
                out.print(f"[red]Failed to fetch Aadhaar details: {exc}[/red]")
                return EXIT_LOOKUP_FAILED
        else:
            out.print(
                f"[cyan]Linked Aadhaar number found. Re-run with --chain or search "
                f"{CategoryId.NATIONAL_ID.value} {session.chained_id}.[/cyan]"
            )

    if args.show_map and session.location_hint:
        pin = approximate_location(session.location_hint)
        out.print(f"📍 Approximate location ({pin.latitude:.4f}, {pin.longitude:.4f}): {pin.label}")
    return 0


def main() -> None:
    configure_logging()
    sys.exit(run())


if __name__ == "__main__":
    main()
