"""
sqlgen/transaction.py — jedna transakcja na import jednego przekładu lub pliku odnośników.

Stany: IDLE → STARTED (BEGIN) → COMMITTED | ROLLED_BACK

  - wyjście bez wyjątku    → COMMIT
  - wyjście z wyjątkiem    → ROLLBACK i ponowne zgłoszenie oryginalnego wyjątku;
                             błąd samego ROLLBACK (np. zamknięte połączenie) jest
                             połykany — wywołujący widzi błąd pierwotny
  - zawsze na końcu        → zamknięcie kursora i połączenia; błąd zamknięcia
                             jest tylko wypisywany (ostrzeżenie)

Połączenie przechodzi w tryb autocommit, a BEGIN/COMMIT/ROLLBACK są wysyłane
jawnie — stan transakcji odpowiada dokładnie wysłanym instrukcjom.

Przykład::

    with ImportTransaction(get_connection(config)) as cur:
        cur.execute(...)
"""

from __future__ import annotations

from enum import StrEnum

import psycopg2
from rich.console import Console

from .errors import translate_db_error

console = Console(stderr=True)


class TxState(StrEnum):
    IDLE        = "idle"
    STARTED     = "started"
    COMMITTED   = "committed"
    ROLLED_BACK = "rolled_back"


class ImportTransaction:
    def __init__(self, conn) -> None:
        self.conn   = conn
        self.state  = TxState.IDLE
        self.cursor = None

    # -- wejście ------------------------------------------------------------

    def __enter__(self):
        if self.state is not TxState.IDLE:
            raise RuntimeError(f"Transakcja już użyta (stan: {self.state})")
        try:
            self.conn.autocommit = True
            self.cursor = self.conn.cursor()
            self.cursor.execute("BEGIN")
        except psycopg2.Error as e:
            self._release()
            raise translate_db_error(e, "BEGIN") from e
        self.state = TxState.STARTED
        return self.cursor

    # -- wyjście ------------------------------------------------------------

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            if exc_type is None:
                self._commit()
            else:
                self._rollback()
        finally:
            self._release()
        return False

    def _commit(self) -> None:
        try:
            self.cursor.execute("COMMIT")
        except psycopg2.Error as e:
            self._rollback()
            raise translate_db_error(e, "COMMIT") from e
        self.state = TxState.COMMITTED

    def _rollback(self) -> None:
        try:
            self.cursor.execute("ROLLBACK")
        except psycopg2.Error:
            pass  # połączenie mogło już zostać zerwane
        self.state = TxState.ROLLED_BACK

    def _release(self) -> None:
        for resource in (self.cursor, self.conn):
            if resource is None:
                continue
            try:
                resource.close()
            except psycopg2.Error as e:
                console.print(f"[yellow]Ostrzeżenie: nie udało się zamknąć połączenia:[/yellow] {e}")
