"""
sqlgen/script.py — generowanie skryptów .sql z literałami (bez parametrów).

Każda instrukcja to osobna linia tekstu; brak semantyki transakcyjnej
i brak paczkowania (jedno INSERT na księgę / rozdział / werset / odnośnik).

Escapowanie ogranicza się do podwojenia apostrofów — backslashe, znaki
sterujące i kodowanie nie są obsługiwane (tekst przechodzi wcześniej przez
normalize_text()).

Wiersze potomne wskazują rodzica przez currval() sekwencji tabeli nadrzędnej,
więc skrypt musi być wykonywany sekwencyjnie w jednej sesji (np. psql -f).
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone

from data_model import CROSS_REFERENCE_COLUMNS, TranslationInfo

from .rows import CrossReferenceRow
from .schema import CORPUS_SCHEMA, CROSS_REFERENCE_SCHEMA, VERSE_COLUMNS, render_schema


def sql_literal(value: object) -> str:
    """None → NULL, liczby bez zmian, tekst w apostrofach z podwojonym '."""
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, int):
        return str(value)
    return "'" + str(value).replace("'", "''") + "'"


def _currval(table: str) -> str:
    return f"currval(pg_get_serial_sequence('{table}', 'id'))"


def _timestamp(generated_at: datetime | None) -> str:
    return (generated_at or datetime.now(timezone.utc)).isoformat()


def _insert(table: str, columns: Iterable[str], values: Iterable[str]) -> str:
    return f"INSERT INTO {table} ({', '.join(columns)})\nVALUES ({', '.join(values)});\n"


# ---------------------------------------------------------------------------
# Przekład
# ---------------------------------------------------------------------------

class ScriptBuilder:
    """
    Ujście tekstowe dla write_translation() — ten sam interfejs co DatabaseSink.

    Referencje zwracane przez add_book()/add_chapter() to numery ze źródła;
    w SQL rodzic jest wskazywany przez currval() ostatnio wstawionego wiersza.
    """

    def __init__(self, generated_at: datetime | None = None) -> None:
        self._parts: list[str] = []
        self._generated_at = generated_at
        self._translation_ref = ""
        self.verses = 0

    def begin_translation(self, info: TranslationInfo) -> None:
        self._translation_ref = f"(SELECT id FROM translation WHERE code = {sql_literal(info.code)})"

        self._parts.append(
            f"-- SQL Dump for {info.name} ({info.code})\n"
            f"-- License: {info.license}\n"
            f"-- Generated: {_timestamp(self._generated_at)}\n\n"
        )
        self._parts.append(render_schema(CORPUS_SCHEMA))
        self._parts.append(
            "INSERT INTO translation (code, name, language, license)\n"
            f"VALUES ({sql_literal(info.code)}, {sql_literal(info.name)}, "
            f"{sql_literal(info.language)}, {sql_literal(info.license)})\n"
            "ON CONFLICT (code) DO UPDATE SET\n"
            "    name     = EXCLUDED.name,\n"
            "    language = EXCLUDED.language,\n"
            "    license  = EXCLUDED.license;\n\n"
        )
        # Ponowny import zastępuje treść (kaskada usuwa rozdziały i wersety).
        self._parts.append(f"DELETE FROM book WHERE translation_id = {self._translation_ref};\n\n")

    def add_book(self, book_number: int, name: str) -> int:
        self._parts.append(f"-- Book: {name}\n")
        self._parts.append(_insert(
            "book",
            ("translation_id", "name", "book_number"),
            (self._translation_ref, sql_literal(name), sql_literal(book_number)),
        ) + "\n")
        return book_number

    def add_chapter(self, book_ref: int, chapter_number: int) -> int:
        self._parts.append(_insert(
            "chapter",
            ("book_id", "chapter_number"),
            (_currval("book"), sql_literal(chapter_number)),
        ))
        return chapter_number

    def add_verse(self, chapter_ref: int, verse_number: int, text: str) -> None:
        self._parts.append(_insert(
            "verse",
            VERSE_COLUMNS,
            (_currval("chapter"), sql_literal(verse_number), sql_literal(text)),
        ))
        self.verses += 1

    def finish(self) -> int:
        return self.verses

    def render(self) -> str:
        return "".join(self._parts)


# ---------------------------------------------------------------------------
# Odnośniki
# ---------------------------------------------------------------------------

def build_cross_reference_script(
    rows:         Iterable[CrossReferenceRow],
    source_name:  str,
    generated_at: datetime | None = None,
) -> str:
    parts = [
        "-- SQL Dump for Cross References\n",
        f"-- Source: {source_name}\n",
        f"-- Generated: {_timestamp(generated_at)}\n\n",
        render_schema(CROSS_REFERENCE_SCHEMA),
    ]
    for row in rows:
        parts.append(_insert("cross_references", CROSS_REFERENCE_COLUMNS, map(sql_literal, row)))
    return "".join(parts)
