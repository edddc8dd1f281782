"""Komenda: bsql generate — przekład JSON → skrypt .sql lub import do bazy."""

from __future__ import annotations

import argparse
import pathlib

from rich.console import Console

from bsql._db import ROOT, DbConfig, get_connection
from bsql._ui import choose_one, make_progress, require_config
from corpus import list_languages, list_translations, load_translation
from data_model import Translation
from sqlgen import (
    DEFAULT_BATCH_SIZE,
    BibleSqlError,
    NotFoundError,
    count_verses,
    generate_translation_script,
    import_translation,
)

console = Console()

DEFAULT_SOURCE_DIR = ROOT / "sources"
DEFAULT_OUT_DIR    = ROOT / "formats"


# ---------------------------------------------------------------------------
# Wybór języka i przekładów
# ---------------------------------------------------------------------------

def _pick_language(args: argparse.Namespace, source_dir: pathlib.Path) -> str:
    languages = list_languages(source_dir)
    if not languages:
        raise NotFoundError(f"Brak katalogów językowych w {source_dir}")

    if args.language:
        if args.language not in languages:
            raise NotFoundError(f"Brak języka '{args.language}' w {source_dir}")
        console.print(f"Język z linii poleceń: [cyan]{args.language}[/cyan]")
        return args.language

    console.print("Wybierz język:")
    language = choose_one(languages, "język")
    console.print(f"Wybrany język: [cyan]{language}[/cyan]\n")
    return language


def _pick_translations(
    args:       argparse.Namespace,
    source_dir: pathlib.Path,
    language:   str,
) -> list[str]:
    translations = list_translations(source_dir, language)
    if not translations:
        raise NotFoundError(f"Brak przekładów dla języka '{language}'")

    if args.all:
        console.print(f"Przetwarzam WSZYSTKIE przekłady: [bold]{len(translations)}[/bold]\n")
        return translations

    if args.translation:
        if args.translation not in translations:
            raise NotFoundError(f"Brak przekładu '{args.translation}' dla języka '{language}'")
        console.print(f"Przekład z linii poleceń: [cyan]{args.translation}[/cyan]")
        return [args.translation]

    console.print(f"Wybierz przekład ({language}):")
    code = choose_one(translations, "przekład")
    console.print(f"Wybrany przekład: [cyan]{code}[/cyan]")
    return [code]


# ---------------------------------------------------------------------------
# Zapis: skrypt / baza
# ---------------------------------------------------------------------------

def _write_script(translation: Translation, out_dir: pathlib.Path, dry_run: bool) -> None:
    script   = generate_translation_script(translation)
    sql_path = out_dir / "psql" / f"{translation.code}.sql"

    if dry_run:
        console.print(
            f"[dim](--dry-run) {sql_path} — {len(script.splitlines())} linii, nie zapisano[/dim]"
        )
        return

    sql_path.parent.mkdir(parents=True, exist_ok=True)
    sql_path.write_text(script, encoding="utf-8")
    console.print(f"[green]SQL:[/green] {sql_path}")


def _import(translation: Translation, config: DbConfig, batch_size: int, dry_run: bool) -> None:
    if dry_run:
        console.print("[dim](--dry-run: pomijam zapis do bazy)[/dim]")
        return

    conn  = get_connection(config)
    total = count_verses(translation)
    with make_progress() as progress:
        task = progress.add_task(f"{translation.code}: wersety", total=total)
        inserted = import_translation(
            conn,
            translation,
            batch_size=batch_size,
            on_progress=lambda n: progress.update(task, completed=n),
        )
    console.print(
        f"[green]Zaimportowano[/green] [bold]{translation.info.name}[/bold] — {inserted} wersetów"
    )


def _process(
    args:       argparse.Namespace,
    config:     DbConfig | None,
    source_dir: pathlib.Path,
    language:   str,
    code:       str,
) -> None:
    translation = load_translation(source_dir, language, code)
    console.print(
        f"Wczytano [bold]{translation.info.name}[/bold] ([cyan]{code}[/cyan]): "
        f"{len(translation.books)} ksiąg, {count_verses(translation)} wersetów"
        f"  [dim]licencja: {translation.info.license}[/dim]"
    )

    if config is not None:
        _import(translation, config, args.batch_size, args.dry_run)
    else:
        _write_script(translation, pathlib.Path(args.out_dir), args.dry_run)


# ---------------------------------------------------------------------------
# Główna logika
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    if args.batch_size < 1:
        console.print(f"[red]--batch-size musi być >= 1[/red] (podano {args.batch_size})")
        raise SystemExit(1)

    config = require_config() if args.execute else None
    if args.dry_run:
        console.print("[yellow]Tryb DRY RUN — nic nie zostanie zapisane.[/yellow]\n")

    source_dir = pathlib.Path(args.source_dir)
    try:
        language = _pick_language(args, source_dir)
        codes    = _pick_translations(args, source_dir, language)
    except NotFoundError as e:
        console.print(f"[red]Nie znaleziono:[/red] {e}")
        raise SystemExit(1)

    ok = failed = 0
    for code in codes:
        console.rule(f"[bold]{code}[/bold]")
        try:
            _process(args, config, source_dir, language, code)
        except (BibleSqlError, OSError) as e:
            failed += 1
            console.print(f"[red]Błąd przetwarzania {code}:[/red] {e}")
            if not args.all:
                raise SystemExit(1)
        else:
            ok += 1

    console.rule()
    status = "[green]Gotowe[/green]" if failed == 0 else f"[yellow]Gotowe z {failed} błędami[/yellow]"
    console.print(f"{status} — przetworzono {ok}/{len(codes)} przekładów.")

    if not args.execute and not args.dry_run and ok:
        console.print(
            "[dim]Dalej: createdb bible_db && psql bible_db < "
            f"{pathlib.Path(args.out_dir) / 'psql' / '<KOD>.sql'}[/dim]"
        )


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "generate",
        help="Przekład JSON → skrypt PostgreSQL lub import bezpośredni.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wczytuje przekład z sources/<język>/<kod>/ i zapisuje go:
  - domyślnie jako skrypt formats/psql/<kod>.sql (literały, jedno INSERT na wiersz),
  - z --execute bezpośrednio do bazy (jedna transakcja na przekład,
    wersety wstawiane paczkami po --batch-size).

Brak --language / --translation → interaktywny wybór z listy.
Z --all błąd jednego przekładu nie przerywa pozostałych.

Przykłady:
  bsql generate -l en -t KJV
  bsql generate -l en --all --execute
  bsql generate -l en -t KJV --execute --dry-run
        """,
    )
    p.add_argument("--language", "-l", metavar="JĘZYK", help="Katalog języka (np. en).")
    p.add_argument("--translation", "-t", metavar="KOD", help="Kod przekładu (np. KJV).")
    p.add_argument(
        "--all", "-a",
        action="store_true",
        help="Przetwórz wszystkie przekłady języka.",
    )
    p.add_argument(
        "--dry-run", "-d",
        action="store_true",
        help="Wczytaj i policz, ale niczego nie zapisuj.",
    )
    p.add_argument(
        "--execute", "-e",
        action="store_true",
        help="Import bezpośrednio do bazy zamiast generowania skryptu.",
    )
    p.add_argument(
        "--batch-size",
        type=int,
        default=DEFAULT_BATCH_SIZE,
        metavar="N",
        help=f"Wierszy na jedno INSERT w trybie --execute (domyślnie: {DEFAULT_BATCH_SIZE}).",
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
