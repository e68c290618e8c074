"""Output formatting for parsed Navitas options."""

import csv
import io
import json
from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from .models import NavitasOption, ParseResult

console = Console()


def format_fare(total_fare: Optional[float], currency: Optional[str] = None) -> str:
    """Format a fare as "USD 5,790.81"."""
    if total_fare is None:
        return "–"
    amount = f"{total_fare:,.2f}"
    return f"{currency} {amount}" if currency else amount


def _option_title(index: int, option: NavitasOption) -> str:
    parts = [f"Option {index}", option.passenger or "[dim]no passenger[/dim]"]
    if option.total_fare is not None:
        parts.append(format_fare(option.total_fare, option.currency))
    if option.reference:
        parts.append(f"Ref {option.reference}")
    return "  |  ".join(parts)


def print_option(index: int, option: NavitasOption) -> None:
    """Print one option as a rich table followed by its soft errors."""
    console.print(f"\n[bold blue]✈  {_option_title(index, option)}[/bold blue]")

    table = Table(
        box=box.ROUNDED,
        show_header=True,
        header_style="bold cyan",
        show_lines=False,
        pad_edge=True,
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Flight", style="white", no_wrap=True)
    table.add_column("Date", no_wrap=True)
    table.add_column("Route", no_wrap=True)
    table.add_column("Departs", justify="right", no_wrap=True)
    table.add_column("Arrives", justify="right", no_wrap=True)

    for n, segment in enumerate(option.segments, start=1):
        arrives = Text(segment.arr_time_raw)
        if segment.day_offset:
            arrives.append(f" +{segment.day_offset}", style="yellow")
        table.add_row(
            str(n),
            f"{segment.airline} {segment.flight_number}",
            segment.date_raw,
            f"{segment.origin} → {segment.destination}",
            segment.dep_time_raw,
            arrives,
        )

    console.print(table)

    for err in option.errors:
        console.print(f"[yellow]⚠ {escape(err)}[/yellow]")


def print_result(result: ParseResult) -> None:
    """Print every option of a parse result, then block-level errors."""
    if not result.options and not result.errors:
        console.print("[dim]Nothing to show.[/dim]")
        return

    for i, option in enumerate(result.options, start=1):
        print_option(i, option)

    for err in result.errors:
        console.print(f"[red]✗ {escape(err)}[/red]")

    total = len(result.options)
    console.print(
        f"[dim]{total} option{'s' if total != 1 else ''} parsed.[/dim]\n"
    )


def result_to_json(result: ParseResult) -> str:
    return json.dumps(result.to_dict(), indent=2)


def result_to_csv(result: ParseResult) -> str:
    """Convert a parse result to CSV, one row per segment."""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow([
        "option", "passenger", "reference", "currency", "total_fare",
        "segment", "airline", "flight_number", "date", "origin", "destination",
        "departs", "arrives", "day_offset",
    ])

    for i, option in enumerate(result.options, start=1):
        for n, segment in enumerate(option.segments, start=1):
            writer.writerow([
                i,
                option.passenger or "",
                option.reference or "",
                option.currency or "",
                "" if option.total_fare is None else f"{option.total_fare:.2f}",
                n,
                segment.airline,
                segment.flight_number,
                segment.date_raw,
                segment.origin,
                segment.destination,
                segment.dep_time_raw,
                segment.arr_time_raw,
                segment.day_offset,
            ])

    return output.getvalue()
