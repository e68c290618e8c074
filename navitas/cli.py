"""Navitas CLI - parse pasted flight options from the terminal."""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich import box
from rich.markup import escape
from rich.table import Table

from . import history
from .components import DEFAULT_CURRENCY, build_component_records, build_option_record
from .formatter import console, print_result, result_to_csv, result_to_json
from .parser import parse_navitas_text

app = typer.Typer(
    name="navitas",
    help="✈ Parse Navitas flight text into structured flight options",
    rich_markup_mode="rich",
)

history_app = typer.Typer(help="Parsed-paste history commands")
app.add_typer(history_app, name="history")

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)


def _read_input(path: Optional[str]) -> str:
    """Read the paste from a file, or from stdin when path is None or "-"."""
    from_stdin = path is None or path == "-"
    source = "stdin" if from_stdin else path
    try:
        if from_stdin:
            return sys.stdin.read()
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Cannot read {escape(source)}: {escape(str(e))}[/red]")
        raise typer.Exit(1)


@app.command()
def parse(
    path: Annotated[Optional[str], typer.Argument(help="File with pasted Navitas text (default: stdin)")] = None,
    json_out: Annotated[bool, typer.Option("--json", help="Print JSON instead of tables")] = False,
    output: Annotated[Optional[str], typer.Option("--output", "-o", help="Write results to FILE (.csv or JSON)")] = None,
    strict: Annotated[bool, typer.Option("--strict", help="Exit 1 if any line or block could not be parsed")] = False,
    force: Annotated[bool, typer.Option("--force", "-f", help="Parse even if this paste was parsed before")] = False,
    no_history: Annotated[bool, typer.Option("--no-history", help="Do not check or record paste history")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Verbose logging")] = False,
):
    """
    📋 Parse a Navitas paste and show the flight options it contains.

    Examples:

      navitas parse itinerary.txt

      pbpaste | navitas parse --json

      navitas parse itinerary.txt -o options.csv
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    text = _read_input(path)
    use_history = not no_history

    if use_history and not force and history.seen(text):
        console.print("[yellow]This paste has already been parsed. Use --force to parse it again.[/yellow]")
        raise typer.Exit(1)

    result = parse_navitas_text(text)

    if output:
        if output.endswith(".csv"):
            content = result_to_csv(result)
            fmt = "CSV"
        else:
            content = result_to_json(result)
            fmt = "JSON"
        with open(output, "w", encoding="utf-8") as fp:
            fp.write(content)
        # stdout carries only the JSON document when --json is set
        if not json_out:
            console.print(f"[green]Results saved to {escape(output)} ({fmt})[/green]")

    if json_out:
        print(result_to_json(result))
    elif not output:
        print_result(result)

    if not result.options:
        raise typer.Exit(1)

    if use_history:
        history.record(text, result)

    if strict and (result.errors or result.warnings):
        raise typer.Exit(1)


@app.command()
def components(
    path: Annotated[Optional[str], typer.Argument(help="File with pasted Navitas text (default: stdin)")] = None,
    currency: Annotated[str, typer.Option("--currency", "-c", help="Currency for options without a fare line")] = DEFAULT_CURRENCY,
    name: Annotated[Optional[str], typer.Option("--name", "-n", help="Option name when no passenger line is present")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Verbose logging")] = False,
):
    """
    🧩 Print the option and component records a paste would be stored as.

    Fares are converted to integer cents.

    Examples:

      navitas components itinerary.txt --currency EUR
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    result = parse_navitas_text(_read_input(path))
    if not result.options:
        for err in result.errors:
            console.print(f"[red]✗ {escape(err)}[/red]")
        raise typer.Exit(1)

    for warning in result.warnings:
        logger.warning(warning)

    records = [
        {
            "option": build_option_record(option, default_currency=currency.upper(), fallback_name=name),
            "components": build_component_records(option),
        }
        for option in result.options
    ]
    print(json.dumps(records, indent=2))


@history_app.command("list")
def history_list(
    limit: Annotated[int, typer.Option("--limit", "-l", help="Number of entries to show")] = 20,
):
    """List recently parsed pastes."""
    entries = history.list_entries(limit)
    if not entries:
        console.print("[dim]No pastes recorded yet.[/dim]")
        return

    table = Table(box=box.ROUNDED, header_style="bold cyan")
    table.add_column("Parsed", no_wrap=True)
    table.add_column("First line")
    table.add_column("Options", justify="right")
    table.add_column("Errors", justify="right")
    for entry in entries:
        table.add_row(
            datetime.fromtimestamp(entry.parsed_at).strftime("%Y-%m-%d %H:%M"),
            escape(entry.preview),
            str(entry.option_count),
            str(entry.error_count) if entry.error_count else "–",
        )
    console.print(table)


@history_app.command("clear")
def history_clear():
    """Forget every recorded paste."""
    count = history.clear_all()
    console.print(f"[green]Removed {count} entr{'y' if count == 1 else 'ies'}.[/green]")


def main():
    app()


if __name__ == "__main__":
    main()
