"""Komenda: bsql delete — usuwa przekłady z bazy (kaskadowo z treścią)."""

from __future__ import annotations

import argparse

import psycopg2
from rich.console import Console
from rich.prompt import Confirm, Prompt

from bsql._ui import connect_or_exit, parse_selection, require_config
from sqlgen import delete_translation, list_translations

console = Console()


def _delete_one(conn, code: str) -> bool:
    with conn, conn.cursor() as cur:
        name = delete_translation(cur, code)
    if name is None:
        console.print(f"[red]Nie znaleziono przekładu[/red] '{code}' w bazie.")
        return False
    console.print(
        f"[green]Usunięto[/green] [bold]{code}[/bold] ({name}) — "
        "księgi, rozdziały i wersety usunięte kaskadowo."
    )
    return True


def _interactive_codes(conn) -> list[str]:
    with conn, conn.cursor() as cur:
        translations = list_translations(cur)

    if not translations:
        console.print("[yellow]Brak przekładów w bazie.[/yellow]")
        return []

    console.print("Przekłady w bazie:\n")
    for i, (code, name, language) in enumerate(translations, 1):
        console.print(f"  {i}. [cyan]{code}[/cyan] - {name} [dim]({language or '-'})[/dim]")

    console.print("\n[dim]Podaj numery po przecinku (np. 1,3,5) albo 'q' aby wyjść.[/dim]")
    answer = Prompt.ask("Wybór", console=console)
    if answer.strip().lower() == "q":
        console.print("Anulowano.")
        return []

    picked = parse_selection(answer, len(translations))
    if not picked:
        console.print("[red]Brak poprawnych numerów.[/red]")
        return []

    chosen = [translations[i] for i in picked]
    console.print("\n[yellow]Do usunięcia:[/yellow]")
    for code, name, _ in chosen:
        console.print(f"  - {code}: {name}")

    if not Confirm.ask("\nPotwierdzasz usunięcie?", default=False, console=console):
        console.print("Anulowano.")
        return []
    return [code for code, _, _ in chosen]


def run(args: argparse.Namespace) -> None:
    config = require_config()
    conn   = connect_or_exit(config)

    try:
        codes = args.codes or _interactive_codes(conn)
        missing = 0
        for code in codes:
            if not _delete_one(conn, code):
                missing += 1
    except psycopg2.Error as e:
        console.print(f"[red]Błąd bazy danych:[/red] {e}")
        raise SystemExit(1)
    finally:
        conn.close()

    # Pojedynczy cel z linii poleceń, którego nie ma → błąd.
    if len(args.codes) == 1 and missing:
        raise SystemExit(1)
    console.print("[dim]Gotowe.[/dim]")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "delete",
        help="Usuwa przekłady z bazy (kaskadowo).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Usuwa wiersze translation o podanych kodach; księgi, rozdziały i wersety
znikają kaskadowo (ON DELETE CASCADE). Bez argumentów — interaktywny wybór
z listy przekładów i potwierdzenie.

Przykłady:
  bsql delete KJV
  bsql delete KJV ASV YLT
  bsql delete
        """,
    )
    p.add_argument("codes", nargs="*", metavar="KOD", help="Kody przekładów do usunięcia.")
    p.set_defaults(func=run)
