"""
sqlgen/importer.py — spięcie producenta wierszy z ujściami.

Publiczne API:
  write_translation(translation, sink)                               -> int
  import_translation(conn, translation, batch_size, on_progress)     -> int
  generate_translation_script(translation, generated_at)             -> str
  import_cross_references(conn, refs, batch_size, on_progress)       -> int
  generate_cross_reference_script(refs, source_name, generated_at)   -> str

import_* przejmują połączenie: jedna transakcja na wywołanie, połączenie
jest zamykane na końcu (sukces czy błąd).
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any, Protocol

from data_model import CROSS_REFERENCE_COLUMNS, CrossReference, Translation, TranslationInfo

from .batch import DEFAULT_BATCH_SIZE, BatchInsertWriter
from .direct import DatabaseSink
from .rows import BookRow, ChapterRow, VerseRow, iter_cross_reference_rows, iter_translation_rows
from .schema import CROSS_REFERENCE_SCHEMA, apply_schema
from .script import ScriptBuilder, build_cross_reference_script
from .transaction import ImportTransaction


class TranslationSink(Protocol):
    """Wspólny interfejs ScriptBuilder i DatabaseSink."""

    def begin_translation(self, info: TranslationInfo) -> None: ...
    def add_book(self, book_number: int, name: str) -> Any: ...
    def add_chapter(self, book_ref: Any, chapter_number: int) -> Any: ...
    def add_verse(self, chapter_ref: Any, verse_number: int, text: str) -> None: ...
    def finish(self) -> int: ...


# ---------------------------------------------------------------------------
# Przekłady
# ---------------------------------------------------------------------------

def write_translation(translation: Translation, sink: TranslationSink) -> int:
    """
    Przechodzi strumień wierszy przekładu i przekazuje go do ujścia.

    Referencja zwrócona przez add_book() trafia do add_chapter(),
    a referencja rozdziału do add_verse(). Zwraca liczbę wersetów.
    """
    sink.begin_translation(translation.info)

    book_ref    = None
    chapter_ref = None
    for row in iter_translation_rows(translation):
        if isinstance(row, BookRow):
            book_ref = sink.add_book(row.book_number, row.name)
        elif isinstance(row, ChapterRow):
            chapter_ref = sink.add_chapter(book_ref, row.chapter_number)
        elif isinstance(row, VerseRow):
            sink.add_verse(chapter_ref, row.verse_number, row.text)

    return sink.finish()


def import_translation(
    conn,
    translation: Translation,
    batch_size:  int = DEFAULT_BATCH_SIZE,
    on_progress: Callable[[int], None] | None = None,
) -> int:
    """Import bezpośredni w jednej transakcji. Zwraca liczbę wstawionych wersetów."""
    with ImportTransaction(conn) as cur:
        sink = DatabaseSink(cur, batch_size=batch_size, on_progress=on_progress)
        return write_translation(translation, sink)


def generate_translation_script(
    translation:  Translation,
    generated_at: datetime | None = None,
) -> str:
    builder = ScriptBuilder(generated_at=generated_at)
    write_translation(translation, builder)
    return builder.render()


# ---------------------------------------------------------------------------
# Odnośniki
# ---------------------------------------------------------------------------

def import_cross_references(
    conn,
    refs:        list[CrossReference],
    batch_size:  int = DEFAULT_BATCH_SIZE,
    on_progress: Callable[[int], None] | None = None,
) -> int:
    """Import bezpośredni jednego pliku odnośników w jednej transakcji."""
    with ImportTransaction(conn) as cur:
        apply_schema(cur, CROSS_REFERENCE_SCHEMA)

        with BatchInsertWriter(
            cur,
            "cross_references",
            CROSS_REFERENCE_COLUMNS,
            batch_size=batch_size,
            on_flush=on_progress,
        ) as writer:
            writer.extend(iter_cross_reference_rows(refs))
        return writer.total


def generate_cross_reference_script(
    refs:         list[CrossReference],
    source_name:  str,
    generated_at: datetime | None = None,
) -> str:
    return build_cross_reference_script(
        iter_cross_reference_rows(refs), source_name, generated_at=generated_at
    )
