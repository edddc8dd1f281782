"""
corpus — wczytywanie źródeł JSON (przekłady, odnośniki) i normalizacja tekstu.

Publiczne API:
  list_languages(source_dir)                    -> list[str]
  list_translations(source_dir, language)       -> list[str]
  load_translation(source_dir, language, code)  -> Translation
  find_cross_reference_files(extras_dir)        -> list[Path]
  load_cross_references(path)                   -> list[CrossReference]
  normalize_text(text)                          -> str
"""

from .normalizer import normalize_text
from .loader import (
    EXTRAS_DIR,
    list_languages,
    list_translations,
    load_translation,
    read_license,
    read_readme_title,
)
from .cross_refs import find_cross_reference_files, load_cross_references

__all__ = [
    "normalize_text",
    "EXTRAS_DIR",
    "list_languages",
    "list_translations",
    "load_translation",
    "read_license",
    "read_readme_title",
    "find_cross_reference_files",
    "load_cross_references",
]
