"""
sqlgen/schema.py — stały, idempotentny schemat bazy (bez wersjonowania).

Wszystkie instrukcje używają IF NOT EXISTS — bezpieczne do wielokrotnego
uruchomienia, zarówno w skrypcie .sql jak i w imporcie bezpośrednim.

Nazwy i typy kolumn są kontraktem dla innych narzędzi — nie zmieniać.

Publiczne API:
  CORPUS_SCHEMA, CROSS_REFERENCE_SCHEMA    krotki instrukcji DDL
  apply_schema(cur, statements)            -> int (liczba instrukcji)
  render_schema(statements)                -> str (tekst do skryptu)
"""

from __future__ import annotations

from collections.abc import Iterable

import psycopg2

from .errors import translate_db_error

# ---------------------------------------------------------------------------
# Przekłady: translation → book → chapter → verse
# ---------------------------------------------------------------------------

_TRANSLATION_TABLE = """
CREATE TABLE IF NOT EXISTS translation (
    id SERIAL PRIMARY KEY,
    code VARCHAR(50) UNIQUE NOT NULL,
    name VARCHAR(255) NOT NULL,
    language VARCHAR(50),
    license TEXT
)"""

_BOOK_TABLE = """
CREATE TABLE IF NOT EXISTS book (
    id SERIAL PRIMARY KEY,
    translation_id INTEGER NOT NULL,
    name VARCHAR(255) NOT NULL,
    book_number INTEGER NOT NULL,
    FOREIGN KEY (translation_id) REFERENCES translation(id) ON DELETE CASCADE
)"""

_CHAPTER_TABLE = """
CREATE TABLE IF NOT EXISTS chapter (
    id SERIAL PRIMARY KEY,
    book_id INTEGER NOT NULL,
    chapter_number INTEGER NOT NULL,
    FOREIGN KEY (book_id) REFERENCES book(id) ON DELETE CASCADE
)"""

_VERSE_TABLE = """
CREATE TABLE IF NOT EXISTS verse (
    id SERIAL PRIMARY KEY,
    chapter_id INTEGER NOT NULL,
    verse_number INTEGER NOT NULL,
    text TEXT NOT NULL,
    FOREIGN KEY (chapter_id) REFERENCES chapter(id) ON DELETE CASCADE
)"""

CORPUS_SCHEMA: tuple[str, ...] = (
    _TRANSLATION_TABLE.strip(),
    _BOOK_TABLE.strip(),
    _CHAPTER_TABLE.strip(),
    _VERSE_TABLE.strip(),
    "CREATE INDEX IF NOT EXISTS idx_book_translation ON book(translation_id)",
    "CREATE INDEX IF NOT EXISTS idx_chapter_book ON chapter(book_id)",
    "CREATE INDEX IF NOT EXISTS idx_verse_chapter ON verse(chapter_id)",
)

# Kolumny wstawiane wsadowo przez BatchInsertWriter.
VERSE_COLUMNS: tuple[str, ...] = ("chapter_id", "verse_number", "text")


# ---------------------------------------------------------------------------
# Odnośniki: cross_references (płaska tabela, bez kluczy obcych)
# ---------------------------------------------------------------------------

_CROSS_REFERENCES_TABLE = """
CREATE TABLE IF NOT EXISTS cross_references (
    id SERIAL PRIMARY KEY,
    from_book VARCHAR(255),
    from_chapter INTEGER,
    from_verse INTEGER,
    to_book VARCHAR(255),
    to_chapter INTEGER,
    to_verse_start INTEGER,
    to_verse_end INTEGER,
    votes INTEGER
)"""

CROSS_REFERENCE_SCHEMA: tuple[str, ...] = (
    _CROSS_REFERENCES_TABLE.strip(),
    "CREATE INDEX IF NOT EXISTS idx_cross_references_from_book ON cross_references(from_book)",
    "CREATE INDEX IF NOT EXISTS idx_cross_references_to_book ON cross_references(to_book)",
    "CREATE INDEX IF NOT EXISTS idx_cross_references_from"
    " ON cross_references(from_book, from_chapter, from_verse)",
    "CREATE INDEX IF NOT EXISTS idx_cross_references_to"
    " ON cross_references(to_book, to_chapter, to_verse_start)",
)


# ---------------------------------------------------------------------------
# Wykonanie / renderowanie
# ---------------------------------------------------------------------------

def apply_schema(cur, statements: Iterable[str]) -> int:
    """
    Wykonuje instrukcje DDL jedna po drugiej. Zwraca ich liczbę.

    Błąd psycopg2 jest tłumaczony na błąd z sqlgen.errors (kontekst "schemat").
    """
    n = 0
    for stmt in statements:
        try:
            cur.execute(stmt)
        except psycopg2.Error as e:
            raise translate_db_error(e, "schemat") from e
        n += 1
    return n


def render_schema(statements: Iterable[str]) -> str:
    return "".join(f"{stmt};\n\n" for stmt in statements)
