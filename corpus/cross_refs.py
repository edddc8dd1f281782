"""
corpus/cross_refs.py — wczytywanie plików odnośników (sources/extras/).

Format rekordu::

    {
        "from_verse": {"book": "Genesis", "chapter": 1, "verse": 1},
        "to_verse":   [{"book": "John", "chapter": 1, "verse_start": 1, "verse_end": 3}],
        "votes":      51
    }

Plik to {"cross_references": [...]} albo goła tablica rekordów.
"""

from __future__ import annotations

import pathlib
from typing import Any

from data_model import CrossReference, VerseLocation, VerseRange
from sqlgen.errors import NotFoundError, SourceParseError

from .loader import read_json

FILE_PREFIX = "cross_references"


def find_cross_reference_files(extras_dir: pathlib.Path) -> list[pathlib.Path]:
    if not extras_dir.is_dir():
        raise NotFoundError(f"Brak katalogu odnośników: {extras_dir}")
    return sorted(
        p for p in extras_dir.iterdir()
        if p.is_file() and p.name.startswith(FILE_PREFIX) and p.suffix == ".json"
    )


def _optional_int(value: Any) -> int | None:
    return None if value is None else int(value)


def _parse_record(rec: dict[str, Any]) -> CrossReference:
    src = rec["from_verse"]
    return CrossReference(
        from_verse=VerseLocation(
            book=str(src["book"]),
            chapter=int(src["chapter"]),
            verse=int(src["verse"]),
        ),
        to_verses=[
            VerseRange(
                book=str(t["book"]),
                chapter=int(t["chapter"]),
                verse_start=int(t["verse_start"]),
                verse_end=int(t["verse_end"]),
            )
            for t in rec.get("to_verse") or []
        ],
        votes=_optional_int(rec.get("votes")),
    )


def load_cross_references(path: pathlib.Path) -> list[CrossReference]:
    data = read_json(path)
    records = data.get("cross_references") if isinstance(data, dict) else data
    if not isinstance(records, list):
        raise SourceParseError(f"{path.name}: oczekiwano tablicy 'cross_references'")
    try:
        return [_parse_record(r) for r in records]
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise SourceParseError(f"{path.name}: nieoczekiwana struktura ({e!r})") from e
