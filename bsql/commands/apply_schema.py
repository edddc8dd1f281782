"""Komenda: bsql apply-schema — tworzy tabele i indeksy (idempotentne)."""

from __future__ import annotations

import argparse

from rich.console import Console

from bsql._ui import connect_or_exit, require_config
from sqlgen import CORPUS_SCHEMA, CROSS_REFERENCE_SCHEMA, BibleSqlError, ImportTransaction, apply_schema

console = Console()

_TARGETS: dict[str, tuple[str, ...]] = {
    "corpus":     CORPUS_SCHEMA,
    "cross-refs": CROSS_REFERENCE_SCHEMA,
    "all":        CORPUS_SCHEMA + CROSS_REFERENCE_SCHEMA,
}


def run(args: argparse.Namespace) -> None:
    statements = _TARGETS[args.target]

    if args.print:
        for stmt in statements:
            console.print(f"{stmt};\n", markup=False, highlight=False)
        return

    config = require_config()
    conn   = connect_or_exit(config)

    try:
        with ImportTransaction(conn) as cur:
            n = apply_schema(cur, statements)
    except BibleSqlError as e:
        console.print(f"[red]Błąd wykonania schematu:[/red] {e}")
        raise SystemExit(1)

    console.print(f"[green]Schemat zastosowany:[/green] {args.target} ({n} instrukcji)")
    console.print("[dim]Gotowe.[/dim]")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "apply-schema",
        help="Tworzy tabele i indeksy w bazie (idempotentne).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wykonuje DDL schematu przeciwko skonfigurowanej bazie PostgreSQL.

Wszystkie instrukcje używają IF NOT EXISTS — bezpieczne do wielokrotnego uruchomienia.
Import (generate / cross-refs --execute) stosuje schemat sam; ta komenda służy
do przygotowania pustej bazy.

Przykłady:
  bsql apply-schema
  bsql apply-schema --target cross-refs
  bsql apply-schema --print
        """,
    )
    p.add_argument(
        "--target",
        choices=sorted(_TARGETS),
        default="all",
        help="Które tabele: corpus | cross-refs | all (domyślnie: all).",
    )
    p.add_argument(
        "--print",
        action="store_true",
        help="Tylko wypisz instrukcje, bez łączenia z bazą.",
    )
    p.set_defaults(func=run)
