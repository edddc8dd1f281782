"""
sqlgen/batch.py — wsadowy zapis wierszy potomnych (wersety, odnośniki).

BatchInsertWriter zbiera krotki o stałej arności i co `batch_size` wierszy
wysyła jedno parametryzowane INSERT z N grupami VALUES i N*arność parametrów.
Po wyczerpaniu źródła close() wysyła ostatnią, niepełną paczkę.

Parametry są nazwane p1..pK (%(pN)s w składni psycopg2); numeracja zaczyna
się od 1 w każdej wysłanej instrukcji.

Writer nie zarządza transakcją — błąd flush() przerywa zapis (oczekujące
wiersze przepadają), a ROLLBACK należy do wywołującego (ImportTransaction).

Publiczne API:
  build_insert(table, columns, rows)   -> (sql, params)
  BatchInsertWriter(cur, table, columns, batch_size, on_flush)
  DEFAULT_BATCH_SIZE
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any

import psycopg2

from .errors import translate_db_error

DEFAULT_BATCH_SIZE = 100


def build_insert(
    table:   str,
    columns: Sequence[str],
    rows:    Sequence[Sequence[Any]],
) -> tuple[str, dict[str, Any]]:
    """
    Buduje wielowierszowe INSERT dla jednej paczki.

    Zwraca (sql, params), gdzie params to słownik {"p1": ..., "p2": ...}
    w kolejności wierszy i kolumn.
    """
    groups: list[str] = []
    params: dict[str, Any] = {}
    index = 1

    for row in rows:
        placeholders: list[str] = []
        for value in row:
            key = f"p{index}"
            placeholders.append(f"%({key})s")
            params[key] = value
            index += 1
        groups.append("(" + ", ".join(placeholders) + ")")

    sql = f"INSERT INTO {table} ({', '.join(columns)}) VALUES {', '.join(groups)}"
    return sql, params


class BatchInsertWriter:
    """
    Akumulator wierszy z opróżnianiem co `batch_size`.

    Liczniki:
      total    — wierszy faktycznie wysłanych do bazy
      flushes  — wysłanych instrukcji (round tripów)

    on_flush(total) jest wołane po każdej udanej paczce (postęp).

    Użycie jako context manager: wyjście bez wyjątku wysyła resztę,
    wyjście z wyjątkiem niczego nie wysyła.
    """

    def __init__(
        self,
        cur,
        table:      str,
        columns:    Sequence[str],
        batch_size: int = DEFAULT_BATCH_SIZE,
        on_flush:   Callable[[int], None] | None = None,
    ) -> None:
        if batch_size < 1:
            raise ValueError(f"batch_size musi być >= 1, otrzymano {batch_size}")
        if not columns:
            raise ValueError("Brak kolumn do wstawienia")

        self._cur        = cur
        self.table       = table
        self.columns     = tuple(columns)
        self.batch_size  = batch_size
        self._on_flush   = on_flush
        self._pending:   list[tuple[Any, ...]] = []
        self.total       = 0
        self.flushes     = 0

    @property
    def pending(self) -> int:
        return len(self._pending)

    def add(self, row: Sequence[Any]) -> None:
        if len(row) != len(self.columns):
            raise ValueError(
                f"{self.table}: wiersz ma {len(row)} wartości, oczekiwano {len(self.columns)}"
            )
        self._pending.append(tuple(row))
        if len(self._pending) >= self.batch_size:
            self.flush()

    def extend(self, rows: Iterable[Sequence[Any]]) -> None:
        for row in rows:
            self.add(row)

    def flush(self) -> int:
        """Wysyła oczekujące wiersze jedną instrukcją. Zwraca ich liczbę."""
        if not self._pending:
            return 0

        batch, self._pending = self._pending, []
        sql, params = build_insert(self.table, self.columns, batch)
        try:
            self._cur.execute(sql, params)
        except psycopg2.Error as e:
            raise translate_db_error(e, f"INSERT INTO {self.table}") from e

        self.total   += len(batch)
        self.flushes += 1
        if self._on_flush is not None:
            self._on_flush(self.total)
        return len(batch)

    def close(self) -> int:
        """Wysyła ostatnią niepełną paczkę. Zwraca łączną liczbę wierszy."""
        self.flush()
        return self.total

    def __enter__(self) -> BatchInsertWriter:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
        else:
            self._pending = []
