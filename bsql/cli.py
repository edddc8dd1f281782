"""
bsql — narzędzie CLI importera przekładów Biblii do PostgreSQL.

Użycie:
  bsql <komenda> [opcje]

Komendy:
  generate      Przekład JSON → skrypt .sql albo import bezpośredni (--execute).
  cross-refs    Odnośniki JSON → skrypt .sql albo import bezpośredni (--execute).
  delete        Usuwa przekłady z bazy (kaskadowo z księgami / rozdziałami / wersetami).
  translations  Listuje przekłady zaimportowane do bazy.
  apply-schema  Tworzy tabele i indeksy (idempotentne).
  cleanup       Usuwa wygenerowane pliki przekładów nieanglojęzycznych.

Konfiguracja bazy: zmienne DB_HOST, DB_PORT, DB_NAME, DB_USER, DB_PASSWORD,
DB_SSLMODE (lub plik .env w katalogu głównym projektu).
"""

from __future__ import annotations

import argparse
import sys

# Windows: terminal może używać cp1252, wymuszamy UTF-8, żeby polskie znaki
# w tekstach pomocy argparse były wypisywane poprawnie.
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from bsql.commands import generate as cmd_generate
from bsql.commands import cross_refs as cmd_cross_refs
from bsql.commands import delete as cmd_delete
from bsql.commands import translations as cmd_translations
from bsql.commands import apply_schema as cmd_apply_schema
from bsql.commands import cleanup as cmd_cleanup


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bsql",
        description="bible-sql — przekłady JSON → PostgreSQL.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version="bsql 0.1.0"
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_generate.add_parser(subparsers)
    cmd_cross_refs.add_parser(subparsers)
    cmd_delete.add_parser(subparsers)
    cmd_translations.add_parser(subparsers)
    cmd_apply_schema.add_parser(subparsers)
    cmd_cleanup.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
