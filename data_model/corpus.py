"""
data_model/corpus.py — model przekładu: księgi → rozdziały → wersety.

Translation odpowiada jednemu plikowi sources/<język>/<kod>/<kod>.json
razem z metadanymi z README.md (tytuł, licencja).

Mapowanie na schemat SQL:
  Translation → translation (code, name, language, license)
  Book        → book        (translation_id, name, book_number)
  Chapter     → chapter     (book_id, chapter_number)
  Verse       → verse       (chapter_id, verse_number, text)
"""

from __future__ import annotations

from dataclasses import dataclass, field


# ---------------------------------------------------------------------------
# Drzewo treści
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Verse:
    number: int          # numer wersetu ze źródła (bez walidacji luk / duplikatów)
    text: str            # surowy tekst; normalizacja dopiero przy generowaniu wierszy


@dataclass(slots=True)
class Chapter:
    number: int
    verses: list[Verse] = field(default_factory=list)


@dataclass(slots=True)
class Book:
    name: str
    chapters: list[Chapter] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Przekład
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class TranslationInfo:
    """Metadane przekładu — jeden wiersz tabeli translation."""
    code: str            # klucz naturalny, unikalny globalnie (np. "KJV")
    name: str            # pierwsza linia README.md
    language: str        # kategoria = katalog języka (np. "en")
    license: str         # "**License:** ..." z README.md albo "Unknown"


@dataclass(slots=True)
class Translation:
    info: TranslationInfo
    books: list[Book] = field(default_factory=list)

    @property
    def code(self) -> str:
        return self.info.code
