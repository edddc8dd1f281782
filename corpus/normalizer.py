"""corpus/normalizer.py — normalizacja tekstu wersetów przed zapisem."""

from __future__ import annotations

import unicodedata

# Znaki błędnie zakodowane w części źródeł → zamiennik.
_SUBSTITUTIONS: dict[str, str] = {
    "Æ": "'",
}


def normalize_text(text: str | None) -> str:
    """Stałe podstawienia znaków + dekompozycja NFKD. None / "" → ""."""
    if not text:
        return ""
    for src, dst in _SUBSTITUTIONS.items():
        text = text.replace(src, dst)
    return unicodedata.normalize("NFKD", text)
