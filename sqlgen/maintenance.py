"""
sqlgen/maintenance.py — odczyt i usuwanie zaimportowanych przekładów.

Usunięcie wiersza translation kaskadowo usuwa księgi, rozdziały i wersety
(ON DELETE CASCADE w schemacie) — importer nie kasuje dzieci sam.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class TranslationSummary:
    code: str
    name: str
    language: str | None
    books: int
    chapters: int
    verses: int


def table_exists(cur, table: str) -> bool:
    cur.execute(
        """
        SELECT 1 FROM information_schema.tables
        WHERE table_schema = current_schema() AND table_name = %s
        """,
        (table,),
    )
    return cur.fetchone() is not None


def list_translations(cur) -> list[tuple[str, str, str | None]]:
    """(code, name, language) posortowane po kodzie; pusta lista gdy brak tabeli."""
    if not table_exists(cur, "translation"):
        return []
    cur.execute("SELECT code, name, language FROM translation ORDER BY code")
    return [(r[0], r[1], r[2]) for r in cur.fetchall()]


def summarize_translations(cur) -> list[TranslationSummary]:
    if not table_exists(cur, "translation"):
        return []
    cur.execute(
        """
        SELECT
            t.code,
            t.name,
            t.language,
            COUNT(DISTINCT b.id),
            COUNT(DISTINCT c.id),
            COUNT(v.id)
        FROM translation t
        LEFT JOIN book    b ON b.translation_id = t.id
        LEFT JOIN chapter c ON c.book_id = b.id
        LEFT JOIN verse   v ON v.chapter_id = c.id
        GROUP BY t.id, t.code, t.name, t.language
        ORDER BY t.code
        """
    )
    return [TranslationSummary(*row) for row in cur.fetchall()]


def delete_translation(cur, code: str) -> str | None:
    """
    Usuwa przekład `code`. Zwraca jego nazwę albo None, gdy nie istnieje
    (również gdy w bazie nie ma jeszcze tabeli translation).
    """
    if not table_exists(cur, "translation"):
        return None
    cur.execute("SELECT id, name FROM translation WHERE code = %s", (code,))
    row = cur.fetchone()
    if row is None:
        return None
    cur.execute("DELETE FROM translation WHERE code = %s", (code,))
    return row[1]
