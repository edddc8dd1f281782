"""
sqlgen/rows.py — wspólny producent wierszy dla skryptu i importu bezpośredniego.

Czyste funkcje nad modelem źródłowym: bez I/O, bez identyfikatorów z bazy.
Oba tryby wyjścia (ScriptBuilder, DatabaseSink) konsumują ten sam strumień,
więc normalizacja tekstu i kolejność wierszy są zdefiniowane tylko tutaj.

Strumień przekładu to płaska sekwencja zdarzeń w kolejności źródła:
  BookRow    — nowa księga (kolejne ChapterRow należą do niej)
  ChapterRow — nowy rozdział (kolejne VerseRow należą do niego)
  VerseRow   — werset z tekstem po normalize_text()
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TypeAlias

from corpus.normalizer import normalize_text
from data_model import CrossReference, Translation


@dataclass(slots=True, frozen=True)
class BookRow:
    book_number: int     # 1-based pozycja w tablicy ksiąg
    name: str


@dataclass(slots=True, frozen=True)
class ChapterRow:
    chapter_number: int


@dataclass(slots=True, frozen=True)
class VerseRow:
    verse_number: int
    text: str


TranslationRow: TypeAlias = BookRow | ChapterRow | VerseRow

# (from_book, from_chapter, from_verse, to_book, to_chapter, to_verse_start, to_verse_end, votes)
CrossReferenceRow: TypeAlias = tuple[str, int, int, str, int, int, int, int | None]


def iter_translation_rows(translation: Translation) -> Iterator[TranslationRow]:
    for book_number, book in enumerate(translation.books, 1):
        yield BookRow(book_number=book_number, name=book.name)
        for chapter in book.chapters:
            yield ChapterRow(chapter_number=chapter.number)
            for verse in chapter.verses:
                yield VerseRow(verse_number=verse.number, text=normalize_text(verse.text))


def iter_cross_reference_rows(refs: Iterable[CrossReference]) -> Iterator[CrossReferenceRow]:
    """Jeden wiersz na każdy zakres docelowy odnośnika."""
    for ref in refs:
        src = ref.from_verse
        for dst in ref.to_verses:
            yield (
                src.book, src.chapter, src.verse,
                dst.book, dst.chapter, dst.verse_start, dst.verse_end,
                ref.votes,
            )


def count_verses(translation: Translation) -> int:
    return sum(len(c.verses) for b in translation.books for c in b.chapters)


def count_cross_reference_rows(refs: Iterable[CrossReference]) -> int:
    return sum(len(r.to_verses) for r in refs)
