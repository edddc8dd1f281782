"""Komenda: bsql cleanup — usuwa wygenerowane pliki przekładów nieanglojęzycznych."""

from __future__ import annotations

import argparse
import pathlib

from rich.console import Console
from rich.prompt import Confirm

from bsql._db import ROOT

console = Console()

DEFAULT_FORMATS_DIR = ROOT / "formats"

# Kody przekładów angielskich (sources/en/).
ENGLISH_TRANSLATIONS: frozenset[str] = frozenset({
    "ACV", "AKJV", "Anderson", "ASV", "BBE", "BSB", "CPDV", "Darby", "DRC",
    "Geneva1599", "Haweis", "JPS", "Jubilee2000", "KJV", "KJVA", "KJVPCE",
    "LEB", "LITV", "MKJV", "NHEB", "NHEBJE", "NHEBME", "Noyes", "OEB",
    "OEBcth", "RLT", "RNKJV", "Rotherham", "RWebster", "Twenty", "Tyndale",
    "UKJV", "Webster", "YLT", "Wycliffe",
})


def is_english_file(path: pathlib.Path) -> bool:
    return path.stem in ENGLISH_TRANSLATIONS


def find_non_english_files(directory: pathlib.Path) -> list[pathlib.Path]:
    """Rekurencyjnie: pliki, których nazwa (bez rozszerzenia) nie jest kodem angielskim."""
    return sorted(p for p in directory.rglob("*") if p.is_file() and not is_english_file(p))


def run(args: argparse.Namespace) -> None:
    target = pathlib.Path(args.directory)
    if not target.is_dir():
        console.print(f"[red]Brak katalogu:[/red] {target}")
        raise SystemExit(1)

    mode = "DRY RUN" if args.dry_run else "LIVE"
    console.print(f"Skanuję: [bold]{target}[/bold]")
    console.print(f"Tryb: [bold]{mode}[/bold]{' (FORCE)' if args.force else ''}\n")

    deleted = skipped = 0
    for path in find_non_english_files(target):
        if args.dry_run:
            console.print(f"[dim][DRY RUN] Usunąłbym:[/dim] {path}")
            continue
        if not args.force and not Confirm.ask(f"Usunąć {path}?", default=False, console=console):
            console.print(f"[dim]Pominięto:[/dim] {path}")
            skipped += 1
            continue
        try:
            path.unlink()
        except OSError as e:
            console.print(f"[red]Błąd usuwania {path}:[/red] {e}")
            continue
        console.print(f"[green]Usunięto:[/green] {path}")
        deleted += 1

    if not args.dry_run:
        console.print(f"\n[dim]Usunięto {deleted}, pominięto {skipped}.[/dim]")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "cleanup",
        help="Usuwa wygenerowane pliki przekładów innych niż angielskie.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Przegląda rekurencyjnie katalog formatów i usuwa pliki, których nazwa
(bez rozszerzenia) nie jest kodem przekładu angielskiego.

Bez --force pyta o potwierdzenie każdego pliku.

Przykłady:
  bsql cleanup --dry-run
  bsql cleanup formats/psql --force
        """,
    )
    p.add_argument(
        "directory",
        nargs="?",
        default=str(DEFAULT_FORMATS_DIR),
        metavar="KATALOG",
        help="Katalog do przejrzenia (domyślnie: formats/).",
    )
    p.add_argument("--dry-run", "-d", action="store_true", help="Tylko wypisz pliki do usunięcia.")
    p.add_argument("--force", "-f", action="store_true", help="Usuwaj bez pytania.")
    p.set_defaults(func=run)
