"""Komenda: bsql cross-refs — odnośniki JSON → skrypt .sql lub import do bazy."""

from __future__ import annotations

import argparse
import pathlib

from rich.console import Console

from bsql._db import ROOT, DbConfig, get_connection
from bsql._ui import make_progress, require_config
from corpus import EXTRAS_DIR, find_cross_reference_files, load_cross_references
from data_model import CrossReference
from sqlgen import (
    DEFAULT_BATCH_SIZE,
    BibleSqlError,
    NotFoundError,
    count_cross_reference_rows,
    generate_cross_reference_script,
    import_cross_references,
)

console = Console()

DEFAULT_SOURCE_DIR = ROOT / "sources"
DEFAULT_OUT_DIR    = ROOT / "formats"


def _write_script(
    refs:      list[CrossReference],
    json_path: pathlib.Path,
    out_dir:   pathlib.Path,
    dry_run:   bool,
) -> None:
    script   = generate_cross_reference_script(refs, json_path.name)
    sql_path = out_dir / "psql" / EXTRAS_DIR / json_path.with_suffix(".sql").name

    if dry_run:
        console.print(
            f"[dim](--dry-run) {sql_path} — {len(script.splitlines())} linii, nie zapisano[/dim]"
        )
        return

    sql_path.parent.mkdir(parents=True, exist_ok=True)
    sql_path.write_text(script, encoding="utf-8")
    console.print(f"[green]SQL:[/green] {sql_path}")


def _import(
    refs:       list[CrossReference],
    json_path:  pathlib.Path,
    config:     DbConfig,
    batch_size: int,
    dry_run:    bool,
) -> int:
    if dry_run:
        console.print("[dim](--dry-run: pomijam zapis do bazy)[/dim]")
        return 0

    conn = get_connection(config)
    with make_progress() as progress:
        task = progress.add_task(json_path.name, total=count_cross_reference_rows(refs))
        inserted = import_cross_references(
            conn,
            refs,
            batch_size=batch_size,
            on_progress=lambda n: progress.update(task, completed=n),
        )
    console.print(f"[green]Wstawiono[/green] {inserted} odnośników z {json_path.name}")
    return inserted


def _resolve_files(args: argparse.Namespace) -> list[pathlib.Path]:
    if args.files:
        files = [pathlib.Path(f) for f in args.files]
        missing = [f for f in files if not f.is_file()]
        if missing:
            raise NotFoundError("Brak plików: " + ", ".join(str(f) for f in missing))
        return files
    return find_cross_reference_files(pathlib.Path(args.source_dir) / EXTRAS_DIR)


def run(args: argparse.Namespace) -> None:
    if args.batch_size < 1:
        console.print(f"[red]--batch-size musi być >= 1[/red] (podano {args.batch_size})")
        raise SystemExit(1)

    config = require_config() if args.execute else None
    if args.dry_run:
        console.print("[yellow]Tryb DRY RUN — nic nie zostanie zapisane.[/yellow]\n")

    try:
        files = _resolve_files(args)
    except NotFoundError as e:
        console.print(f"[red]Nie znaleziono:[/red] {e}")
        raise SystemExit(1)

    console.print(f"Znaleziono [bold]{len(files)}[/bold] plik(ów) odnośników.\n")
    batch_mode = len(files) > 1

    ok = failed = total = 0
    for path in files:
        console.print(f"Przetwarzam [bold]{path.name}[/bold] …")
        try:
            refs = load_cross_references(path)
            if config is not None:
                total += _import(refs, path, config, args.batch_size, args.dry_run)
            else:
                _write_script(refs, path, pathlib.Path(args.out_dir), args.dry_run)
        except (BibleSqlError, OSError) as e:
            failed += 1
            console.print(f"[red]Błąd przetwarzania {path.name}:[/red] {e}")
            if not batch_mode:
                raise SystemExit(1)
        else:
            ok += 1

    status = "[green]Gotowe[/green]" if failed == 0 else f"[yellow]Gotowe z {failed} błędami[/yellow]"
    summary = f"{status} — przetworzono {ok}/{len(files)} plików"
    if config is not None and not args.dry_run:
        summary += f", łącznie {total:,} odnośników"
    console.print(summary + ".")

    if config is None and not args.dry_run:
        console.print("[dim]Wskazówka: --execute (-e) wstawia odnośniki bezpośrednio do bazy.[/dim]")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "cross-refs",
        help="Odnośniki JSON → skrypt PostgreSQL lub import bezpośredni.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Przetwarza pliki cross_references*.json (domyślnie wszystkie z sources/extras/).

Bez --execute zapisuje formats/psql/extras/<plik>.sql.
Z --execute wstawia wiersze do tabeli cross_references paczkami po --batch-size,
jedna transakcja na plik. Przy kilku plikach błąd jednego nie przerywa reszty.

Przykłady:
  bsql cross-refs
  bsql cross-refs --execute
  bsql cross-refs sources/extras/cross_references_0.json -e
        """,
    )
    p.add_argument(
        "files",
        nargs="*",
        metavar="PLIK.json",
        help="Pliki odnośników (domyślnie: wszystkie z sources/extras/).",
    )
    p.add_argument("--execute", "-e", action="store_true", help="Import bezpośrednio do bazy.")
    p.add_argument("--dry-run", "-d", action="store_true", help="Wczytaj, ale niczego nie zapisuj.")
    p.add_argument(
        "--batch-size",
        type=int,
        default=DEFAULT_BATCH_SIZE,
        metavar="N",
        help=f"Wierszy na jedno INSERT (domyślnie: {DEFAULT_BATCH_SIZE}).",
    )
    p.add_argument(
        "--source-dir",
        default=str(DEFAULT_SOURCE_DIR),
        metavar="KATALOG",
        help="Katalog źródeł (domyślnie: sources/).",
    )
    p.add_argument(
        "--out-dir",
        default=str(DEFAULT_OUT_DIR),
        metavar="KATALOG",
        help="Katalog wyjściowy skryptów (domyślnie: formats/).",
    )
    p.set_defaults(func=run)
