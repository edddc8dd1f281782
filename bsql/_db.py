"""
Połączenie z bazą PostgreSQL — konfiguracja przez zmienne środowiskowe.

Zmienne (opcjonalnie z pliku .env w katalogu głównym projektu):
  DB_HOST      localhost
  DB_PORT      5432
  DB_NAME      bible_db
  DB_USER      (wymagane)
  DB_PASSWORD  (wymagane)
  DB_SSLMODE   prefer   (sslmode libpq; "require" wymusza TLS)
"""

from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass

import psycopg2
from dotenv import load_dotenv

from sqlgen.errors import BackendConnectionError, ConfigError

ROOT = pathlib.Path(__file__).resolve().parent.parent

_TLS_MODES = frozenset({"require", "verify-ca", "verify-full"})


@dataclass(slots=True, frozen=True)
class DbConfig:
    host: str
    port: int
    dbname: str
    user: str
    password: str
    sslmode: str

    @property
    def ssl(self) -> bool:
        return self.sslmode in _TLS_MODES

    def describe(self) -> str:
        return f"{self.user}@{self.host}:{self.port}/{self.dbname}"


def load_config(env_file: pathlib.Path | None = ROOT / ".env") -> DbConfig:
    """
    Czyta konfigurację ze środowiska. Brak DB_USER / DB_PASSWORD → ConfigError.

    Zmienne już ustawione w środowisku mają pierwszeństwo przed plikiem .env.
    """
    if env_file is not None:
        load_dotenv(env_file, override=False)

    user     = os.getenv("DB_USER")
    password = os.getenv("DB_PASSWORD")
    if not user or not password:
        raise ConfigError("Brak poświadczeń do bazy. Ustaw DB_USER i DB_PASSWORD (np. w pliku .env).")

    port_raw = os.getenv("DB_PORT", "5432")
    try:
        port = int(port_raw)
    except ValueError as e:
        raise ConfigError(f"Niepoprawny DB_PORT: {port_raw!r}") from e

    return DbConfig(
        host     = os.getenv("DB_HOST",    "localhost"),
        port     = port,
        dbname   = os.getenv("DB_NAME",    "bible_db"),
        user     = user,
        password = password,
        sslmode  = os.getenv("DB_SSLMODE", "prefer"),
    )


def get_connection(config: DbConfig) -> psycopg2.extensions.connection:
    try:
        return psycopg2.connect(
            host     = config.host,
            port     = config.port,
            dbname   = config.dbname,
            user     = config.user,
            password = config.password,
            sslmode  = config.sslmode,
        )
    except psycopg2.Error as e:
        raise BackendConnectionError(f"Nie można połączyć z {config.describe()}: {e}".strip()) from e
