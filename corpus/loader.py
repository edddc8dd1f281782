"""
corpus/loader.py — wczytywanie przekładów z katalogu sources/.

Układ katalogów::

    sources/
      <język>/
        <kod>/
          <kod>.json     księgi → rozdziały → wersety
          README.md      1. linia = tytuł, "**License:** ..." = licencja
      extras/            odnośniki (pomijane przy listowaniu języków)

Publiczne API:
  list_languages(source_dir)                       -> list[str]
  list_translations(source_dir, language)          -> list[str]
  load_translation(source_dir, language, code)     -> Translation
  read_readme_title(readme_path)                   -> str
  read_license(readme_path)                        -> str
"""

from __future__ import annotations

import json
import pathlib
from typing import Any

from data_model import Book, Chapter, Translation, TranslationInfo, Verse
from sqlgen.errors import NotFoundError, SourceParseError

EXTRAS_DIR      = "extras"
LICENSE_PREFIX  = "**License:**"
UNKNOWN_LICENSE = "Unknown"


# ---------------------------------------------------------------------------
# Listowanie katalogów
# ---------------------------------------------------------------------------

def _subdirs(path: pathlib.Path) -> list[str]:
    if not path.is_dir():
        raise NotFoundError(f"Brak katalogu: {path}")
    return sorted(p.name for p in path.iterdir() if p.is_dir())


def list_languages(source_dir: pathlib.Path) -> list[str]:
    return [d for d in _subdirs(source_dir) if d != EXTRAS_DIR]


def list_translations(source_dir: pathlib.Path, language: str) -> list[str]:
    return _subdirs(source_dir / language)


# ---------------------------------------------------------------------------
# README.md
# ---------------------------------------------------------------------------

def _read_text(path: pathlib.Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise NotFoundError(f"Brak pliku: {path}") from e


def read_readme_title(readme_path: pathlib.Path) -> str:
    return _read_text(readme_path).split("\n")[0].strip()


def read_license(readme_path: pathlib.Path) -> str:
    for line in _read_text(readme_path).split("\n"):
        if line.startswith(LICENSE_PREFIX):
            return line[len(LICENSE_PREFIX):].strip()
    return UNKNOWN_LICENSE


# ---------------------------------------------------------------------------
# JSON → Translation
# ---------------------------------------------------------------------------

def read_json(path: pathlib.Path) -> Any:
    """Wczytuje JSON; brak pliku → NotFoundError, błędna składnia → SourceParseError."""
    raw = _read_text(path)
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise SourceParseError(f"{path.name}: niepoprawny JSON ({e})") from e


def _parse_books(data: Any) -> list[Book]:
    # Dopuszczamy {"books": [...]} oraz gołą tablicę ksiąg.
    books_raw = data.get("books") if isinstance(data, dict) else data
    if not isinstance(books_raw, list):
        raise ValueError("oczekiwano tablicy 'books'")

    books: list[Book] = []
    for b in books_raw:
        chapters = [
            Chapter(
                number=int(c["chapter"]),
                verses=[
                    Verse(number=int(v["verse"]), text=v.get("text") or "")
                    for v in c.get("verses") or []
                ],
            )
            for c in b.get("chapters") or []
        ]
        books.append(Book(name=str(b["name"]), chapters=chapters))
    return books


def load_translation(source_dir: pathlib.Path, language: str, code: str) -> Translation:
    """
    Wczytuje przekład `code` z katalogu `source_dir/language/code/`.

    Raises:
        NotFoundError:    brak katalogu, pliku JSON lub README.md
        SourceParseError: JSON niepoprawny lub o nieoczekiwanej strukturze
    """
    base = source_dir / language / code
    if not base.is_dir():
        raise NotFoundError(f"Brak przekładu {language}/{code} w {source_dir}")

    json_path   = base / f"{code}.json"
    readme_path = base / "README.md"

    data = read_json(json_path)
    try:
        books = _parse_books(data)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise SourceParseError(f"{json_path.name}: nieoczekiwana struktura ({e!r})") from e

    info = TranslationInfo(
        code     = code,
        name     = read_readme_title(readme_path),
        language = language,
        license  = read_license(readme_path),
    )
    return Translation(info=info, books=books)
