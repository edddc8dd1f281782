"""
data_model/cross_references.py — odnośniki między wersetami.

Odnośnik wskazuje z jednego wersetu na zakres wersetów (być może w innej księdze).
Lokalizacje to krotki etykiet (księga, rozdział, werset) — bez kluczy obcych
do tabel przekładu; odnośniki do nieistniejących wersetów są akceptowane.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class VerseLocation:
    book: str
    chapter: int
    verse: int


@dataclass(slots=True, frozen=True)
class VerseRange:
    book: str
    chapter: int
    verse_start: int
    verse_end: int


@dataclass(slots=True)
class CrossReference:
    from_verse: VerseLocation
    to_verses: list[VerseRange] = field(default_factory=list)
    votes: int | None = None     # liczba głosów w źródle; brak → NULL


# Kolejność kolumn tabeli cross_references, wspólna dla skryptu i importu.
CROSS_REFERENCE_COLUMNS: tuple[str, ...] = (
    "from_book",
    "from_chapter",
    "from_verse",
    "to_book",
    "to_chapter",
    "to_verse_start",
    "to_verse_end",
    "votes",
)
