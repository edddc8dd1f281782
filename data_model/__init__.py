"""
data_model — struktury danych importera bible-sql.

Użycie:
  from data_model import Translation, Book, Chapter, Verse, CrossReference, ...

Moduły:
  corpus           — TranslationInfo, Translation, Book, Chapter, Verse
  cross_references — VerseLocation, VerseRange, CrossReference,
                     CROSS_REFERENCE_COLUMNS

Mapowanie na schemat SQL:
  Translation    → translation + book + chapter + verse
  CrossReference → cross_references (jeden wiersz na każdy zakres to_verses)
"""

from .corpus import (
    Verse,
    Chapter,
    Book,
    TranslationInfo,
    Translation,
)
from .cross_references import (
    VerseLocation,
    VerseRange,
    CrossReference,
    CROSS_REFERENCE_COLUMNS,
)

__all__ = [
    # corpus
    "Verse",
    "Chapter",
    "Book",
    "TranslationInfo",
    "Translation",
    # cross_references
    "VerseLocation",
    "VerseRange",
    "CrossReference",
    "CROSS_REFERENCE_COLUMNS",
]
