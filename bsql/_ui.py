"""Wspólne elementy komend: wybór z listy, nagłówek połączenia, prekondycje."""

from __future__ import annotations

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.prompt import Prompt

from bsql._db import DbConfig, get_connection, load_config
from sqlgen.errors import BackendConnectionError, ConfigError

console = Console()


def choose_one(options: list[str], label: str) -> str:
    """Wypisuje ponumerowaną listę i pyta o numer (powtarza przy złym wyborze)."""
    for i, option in enumerate(options, 1):
        console.print(f"  {i}. {option}")
    answer = Prompt.ask(
        f"\nPodaj numer ({label})",
        choices=[str(i) for i in range(1, len(options) + 1)],
        show_choices=False,
        console=console,
    )
    return options[int(answer) - 1]


def parse_selection(answer: str, count: int) -> list[int]:
    """
    "1,3,5" → [0, 2, 4]. Numery spoza zakresu i śmieci są pomijane,
    duplikaty usuwane z zachowaniem kolejności.
    """
    picked: list[int] = []
    for part in answer.split(","):
        part = part.strip()
        if not part.isdigit():
            continue
        i = int(part) - 1
        if 0 <= i < count and i not in picked:
            picked.append(i)
    return picked


def require_config() -> DbConfig:
    """Prekondycja trybu bazodanowego: brak poświadczeń → exit 1."""
    try:
        config = load_config()
    except ConfigError as e:
        console.print(f"[red]Błąd konfiguracji:[/red] {e}")
        raise SystemExit(1)

    console.print(f"Baza: [bold]{config.host}:{config.port}/{config.dbname}[/bold]")
    console.print(f"Użytkownik: [bold]{config.user}[/bold]")
    console.print(f"SSL: {'[green]włączony[/green]' if config.ssl else '[dim]wyłączony[/dim]'}\n")
    return config


def connect_or_exit(config: DbConfig):
    try:
        return get_connection(config)
    except BackendConnectionError as e:
        console.print(f"[red]Błąd połączenia z bazą:[/red] {e}")
        raise SystemExit(1)


def make_progress() -> Progress:
    """Pasek postępu liczony w wierszach (aktualizowany po każdej paczce)."""
    return Progress(
        SpinnerColumn(),
        TextColumn("{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TextColumn("[dim]{task.completed}/{task.total} wierszy[/dim]"),
        console=console,
    )
