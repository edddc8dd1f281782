"""
sqlgen/errors.py — taksonomia błędów importu.

  ConfigError            brak poświadczeń do bazy — fatalny, sprawdzany przed pracą
  NotFoundError          brak języka / przekładu / pliku źródłowego
  SourceParseError       źródło nie jest poprawnym JSON-em lub ma złą strukturę
  ConstraintError        naruszenie ograniczenia w bazie (IntegrityError)
  BackendConnectionError utracone / nieudane połączenie z bazą
  WriteError             pozostałe błędy psycopg2 przy zapisie

Błędy bazy (trzy ostatnie) przerywają import przekładu i wywołują ROLLBACK.
"""

from __future__ import annotations

import psycopg2


class BibleSqlError(Exception):
    """Bazowy błąd importera."""


class ConfigError(BibleSqlError):
    pass


class NotFoundError(BibleSqlError):
    pass


class SourceParseError(BibleSqlError):
    pass


class ConstraintError(BibleSqlError):
    pass


class BackendConnectionError(BibleSqlError):
    pass


class WriteError(BibleSqlError):
    pass


def translate_db_error(exc: psycopg2.Error, context: str = "") -> BibleSqlError:
    """
    Mapuje wyjątek psycopg2 na błąd z taksonomii.

    Komunikat zawiera kontekst (np. nazwę tabeli) i pierwszą linię
    komunikatu serwera. Wywołujący robi `raise ... from exc`.
    """
    message = (str(exc).strip().splitlines() or [type(exc).__name__])[0]
    if context:
        message = f"{context}: {message}"

    if isinstance(exc, psycopg2.IntegrityError):
        return ConstraintError(message)
    if isinstance(exc, (psycopg2.OperationalError, psycopg2.InterfaceError)):
        return BackendConnectionError(message)
    return WriteError(message)
