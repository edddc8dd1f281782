from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from data_model import Book, Chapter, Translation, TranslationInfo, Verse


class FakeCursor:
    """Kursor psycopg2 zapisujący instrukcje do wspólnego logu połączenia."""

    def __init__(self, conn: FakeConnection) -> None:
        self.conn = conn
        self.closed = False
        self.rowcount = -1
        self._rows: list[tuple[Any, ...]] = []

    def execute(self, sql: str, params: Any = None) -> None:
        if self.conn.closed:
            raise self.conn.psycopg2.InterfaceError("connection already closed")
        self.conn.log.append((sql, params))
        if self.conn.fail_when is not None and self.conn.fail_when(sql, params):
            raise self.conn.error
        if "RETURNING id" in sql:
            self.conn.next_id += 1
            self._rows = [(self.conn.next_id,)]
            self.rowcount = 1
            return
        self._rows = []
        for needle, rows in self.conn.responses.items():
            if needle in sql:
                self._rows = list(rows)
                break
        self.rowcount = len(self._rows)

    def fetchone(self) -> tuple[Any, ...] | None:
        return self._rows[0] if self._rows else None

    def fetchall(self) -> list[tuple[Any, ...]]:
        return list(self._rows)

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> FakeCursor:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()


class FakeConnection:
    def __init__(self) -> None:
        import psycopg2

        self.psycopg2 = psycopg2
        self.log: list[tuple[str, Any]] = []
        self.autocommit = False
        self.closed = False
        self.close_error: Exception | None = None
        self.fail_when: Callable[[str, Any], bool] | None = None
        self.error: Exception = psycopg2.IntegrityError("duplicate key value")
        self.responses: dict[str, list[tuple[Any, ...]]] = {}
        self.next_id = 0
        self.commits = 0
        self.rollbacks = 0

    def cursor(self) -> FakeCursor:
        return FakeCursor(self)

    def close(self) -> None:
        if self.close_error is not None:
            raise self.close_error
        self.closed = True

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1

    def __enter__(self) -> FakeConnection:
        return self

    def __exit__(self, exc_type: Any, *exc: Any) -> None:
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    # -- pomocnicze dla asercji ---------------------------------------------

    def statements(self, prefix: str = "") -> list[tuple[str, Any]]:
        return [(sql, p) for sql, p in self.log if sql.strip().startswith(prefix)]

    def commands(self) -> list[str]:
        return [sql.strip() for sql, _ in self.log if sql.strip() in ("BEGIN", "COMMIT", "ROLLBACK")]


@pytest.fixture
def fake_conn() -> FakeConnection:
    return FakeConnection()


def make_translation(
    books: int = 2,
    chapters: int = 1,
    verses: int = 3,
    code: str = "KJV",
) -> Translation:
    return Translation(
        info=TranslationInfo(code=code, name="King James Version", language="en", license="Public Domain"),
        books=[
            Book(
                name=f"Book {b}",
                chapters=[
                    Chapter(
                        number=c,
                        verses=[Verse(number=v, text=f"b{b} c{c} v{v}") for v in range(1, verses + 1)],
                    )
                    for c in range(1, chapters + 1)
                ],
            )
            for b in range(1, books + 1)
        ],
    )


@pytest.fixture
def small_translation() -> Translation:
    return make_translation()


def write_translation_source(
    source_dir: Path,
    language: str,
    code: str,
    payload: Any,
    readme: str = "Test Bible\n\n**License:** Public Domain\n",
) -> Path:
    base = source_dir / language / code
    base.mkdir(parents=True, exist_ok=True)
    if isinstance(payload, str):
        (base / f"{code}.json").write_text(payload, encoding="utf-8")
    else:
        (base / f"{code}.json").write_text(json.dumps(payload), encoding="utf-8")
    (base / "README.md").write_text(readme, encoding="utf-8")
    return base


SAMPLE_BOOKS = {
    "books": [
        {
            "name": "Genesis",
            "chapters": [
                {
                    "chapter": 1,
                    "verses": [
                        {"verse": 1, "text": "In the beginning God created the heaven and the earth."},
                        {"verse": 2, "text": "And the earth was without form, and void."},
                    ],
                }
            ],
        },
        {
            "name": "Exodus",
            "chapters": [
                {"chapter": 1, "verses": [{"verse": 1, "text": "Now these are the names"}]},
            ],
        },
    ]
}


SAMPLE_CROSS_REFERENCES = {
    "cross_references": [
        {
            "from_verse": {"book": "Genesis", "chapter": 1, "verse": 1},
            "to_verse": [
                {"book": "John", "chapter": 1, "verse_start": 1, "verse_end": 3},
                {"book": "Hebrews", "chapter": 11, "verse_start": 3, "verse_end": 3},
            ],
            "votes": 51,
        },
        {
            "from_verse": {"book": "Genesis", "chapter": 1, "verse": 2},
            "to_verse": [{"book": "Psalms", "chapter": 104, "verse_start": 30, "verse_end": 30}],
            "votes": 12,
        },
    ]
}
