"""Komenda: bsql translations — listowanie przekładów zaimportowanych do bazy."""

from __future__ import annotations

import argparse

import psycopg2
from rich import box
from rich.console import Console
from rich.table import Table

from bsql._ui import connect_or_exit, require_config
from sqlgen import summarize_translations

console = Console()


def run(args: argparse.Namespace) -> None:
    config = require_config()
    conn   = connect_or_exit(config)

    try:
        with conn, conn.cursor() as cur:
            rows = summarize_translations(cur)
    except psycopg2.Error as e:
        console.print(f"[red]Błąd bazy danych:[/red] {e}")
        raise SystemExit(1)
    finally:
        conn.close()

    if args.language:
        rows = [r for r in rows if r.language == args.language]

    if not rows:
        console.print("[yellow]Brak przekładów w bazie.[/yellow]")
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("KOD",      style="bold cyan", no_wrap=True)
    table.add_column("JĘZYK",    no_wrap=True)
    table.add_column("KSIĘGI",   justify="right", no_wrap=True)
    table.add_column("ROZDZ.",   justify="right", no_wrap=True)
    table.add_column("WERSETY",  justify="right", no_wrap=True)
    table.add_column("NAZWA",    no_wrap=False, max_width=60)

    for r in rows:
        table.add_row(
            r.code,
            r.language or "-",
            str(r.books),
            str(r.chapters),
            f"{r.verses:,}",
            r.name,
        )

    console.print()
    console.print(table)
    console.print(f"  [dim]{len(rows)} przekład(ów)[/dim]\n")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "translations",
        help="Listuje przekłady w bazie (z liczbą ksiąg / rozdziałów / wersetów).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Listuje przekłady zaimportowane do bazy.

Przykłady:
  bsql translations
  bsql translations --language en
        """,
    )
    p.add_argument("--language", "-l", metavar="JĘZYK", help="Filtruj po języku.")
    p.set_defaults(func=run)
