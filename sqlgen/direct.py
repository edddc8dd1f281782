"""
sqlgen/direct.py — ujście bazodanowe dla write_translation().

Wiersze nadrzędne (translation, book, chapter) są wstawiane pojedynczo
z RETURNING id — wygenerowany identyfikator jest przekazywany jawnie do
wierszy potomnych. Wersety trafiają do jednego BatchInsertWriter na cały
przekład (każdy wiersz niesie swoje chapter_id).

DatabaseSink nie otwiera ani nie zamyka transakcji — robi to ImportTransaction.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import psycopg2

from data_model import TranslationInfo

from .batch import DEFAULT_BATCH_SIZE, BatchInsertWriter
from .errors import translate_db_error
from .schema import CORPUS_SCHEMA, VERSE_COLUMNS, apply_schema

_UPSERT_TRANSLATION = """
    INSERT INTO translation (code, name, language, license)
    VALUES (%s, %s, %s, %s)
    ON CONFLICT (code) DO UPDATE SET
        name     = EXCLUDED.name,
        language = EXCLUDED.language,
        license  = EXCLUDED.license
    RETURNING id
"""

_DELETE_BOOKS = "DELETE FROM book WHERE translation_id = %s"

_INSERT_BOOK = (
    "INSERT INTO book (translation_id, name, book_number) VALUES (%s, %s, %s) RETURNING id"
)

_INSERT_CHAPTER = (
    "INSERT INTO chapter (book_id, chapter_number) VALUES (%s, %s) RETURNING id"
)


def _returning_id(cur, sql: str, params: tuple[Any, ...], context: str) -> int:
    try:
        cur.execute(sql, params)
        row = cur.fetchone()
    except psycopg2.Error as e:
        raise translate_db_error(e, context) from e
    return row[0]


class DatabaseSink:
    def __init__(
        self,
        cur,
        batch_size:  int = DEFAULT_BATCH_SIZE,
        on_progress: Callable[[int], None] | None = None,
    ) -> None:
        self._cur         = cur
        self._batch_size  = batch_size
        self._on_progress = on_progress
        self._verses: BatchInsertWriter | None = None
        self.translation_id: int | None = None

    def begin_translation(self, info: TranslationInfo) -> None:
        apply_schema(self._cur, CORPUS_SCHEMA)

        self.translation_id = _returning_id(
            self._cur,
            _UPSERT_TRANSLATION,
            (info.code, info.name, info.language, info.license),
            f"translation {info.code}",
        )

        # Ponowny import zastępuje treść; kaskada usuwa rozdziały i wersety.
        try:
            self._cur.execute(_DELETE_BOOKS, (self.translation_id,))
        except psycopg2.Error as e:
            raise translate_db_error(e, f"DELETE book ({info.code})") from e

        self._verses = BatchInsertWriter(
            self._cur,
            "verse",
            VERSE_COLUMNS,
            batch_size=self._batch_size,
            on_flush=self._on_progress,
        )

    def add_book(self, book_number: int, name: str) -> int:
        return _returning_id(
            self._cur, _INSERT_BOOK, (self.translation_id, name, book_number), f"book {name}"
        )

    def add_chapter(self, book_ref: int, chapter_number: int) -> int:
        return _returning_id(
            self._cur, _INSERT_CHAPTER, (book_ref, chapter_number), f"chapter {chapter_number}"
        )

    def add_verse(self, chapter_ref: int, verse_number: int, text: str) -> None:
        if self._verses is None:
            raise RuntimeError("add_verse() przed begin_translation()")
        self._verses.add((chapter_ref, verse_number, text))

    def finish(self) -> int:
        if self._verses is None:
            return 0
        return self._verses.close()

    @property
    def flushes(self) -> int:
        return self._verses.flushes if self._verses is not None else 0
