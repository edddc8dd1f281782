from __future__ import annotations

import json
import unicodedata

import pytest

from conftest import SAMPLE_BOOKS, SAMPLE_CROSS_REFERENCES, write_translation_source
from corpus import (
    find_cross_reference_files,
    list_languages,
    list_translations,
    load_cross_references,
    load_translation,
    normalize_text,
    read_license,
    read_readme_title,
)
from sqlgen.errors import NotFoundError, SourceParseError


# ---------------------------------------------------------------------------
# normalize_text
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, ""),
        ("", ""),
        ("plain text", "plain text"),
        ("LORDÆs", "LORD's"),
        ("ÆÆ", "''"),
    ],
)
def test_normalize_text(raw, expected: str) -> None:
    assert normalize_text(raw) == expected


def test_normalize_text_decomposes_compatibility_forms() -> None:
    out = normalize_text("ﬁat café")
    assert out.startswith("fiat")
    assert out == unicodedata.normalize("NFKD", out)
    assert len(out) == len("fiat cafe") + 1


# ---------------------------------------------------------------------------
# Katalogi
# ---------------------------------------------------------------------------

def test_list_languages_skips_extras(tmp_path) -> None:
    for name in ("pl", "en", "extras"):
        (tmp_path / name).mkdir()
    (tmp_path / "notes.txt").write_text("x", encoding="utf-8")
    assert list_languages(tmp_path) == ["en", "pl"]


def test_list_translations(tmp_path) -> None:
    write_translation_source(tmp_path, "en", "KJV", SAMPLE_BOOKS)
    write_translation_source(tmp_path, "en", "ASV", SAMPLE_BOOKS)
    assert list_translations(tmp_path, "en") == ["ASV", "KJV"]


def test_missing_language_directory(tmp_path) -> None:
    with pytest.raises(NotFoundError):
        list_translations(tmp_path, "xx")


# ---------------------------------------------------------------------------
# README.md
# ---------------------------------------------------------------------------

def test_readme_title_is_first_line(tmp_path) -> None:
    readme = tmp_path / "README.md"
    readme.write_text("  King James Version  \nsecond line\n", encoding="utf-8")
    assert read_readme_title(readme) == "King James Version"


def test_license_line_is_found(tmp_path) -> None:
    readme = tmp_path / "README.md"
    readme.write_text("Title\n\nSome text\n**License:**  Public Domain \n", encoding="utf-8")
    assert read_license(readme) == "Public Domain"


def test_license_defaults_to_unknown(tmp_path) -> None:
    readme = tmp_path / "README.md"
    readme.write_text("Title\n", encoding="utf-8")
    assert read_license(readme) == "Unknown"


def test_missing_readme(tmp_path) -> None:
    with pytest.raises(NotFoundError):
        read_readme_title(tmp_path / "README.md")


# ---------------------------------------------------------------------------
# load_translation
# ---------------------------------------------------------------------------

def test_load_translation(tmp_path) -> None:
    write_translation_source(tmp_path, "en", "KJV", SAMPLE_BOOKS, readme="King James Version\n")
    t = load_translation(tmp_path, "en", "KJV")

    assert t.code == "KJV"
    assert t.info.name == "King James Version"
    assert t.info.language == "en"
    assert t.info.license == "Unknown"
    assert [b.name for b in t.books] == ["Genesis", "Exodus"]
    assert [v.number for v in t.books[0].chapters[0].verses] == [1, 2]


def test_load_translation_accepts_bare_array(tmp_path) -> None:
    write_translation_source(tmp_path, "en", "KJV", SAMPLE_BOOKS["books"])
    assert len(load_translation(tmp_path, "en", "KJV").books) == 2


def test_missing_verse_text_becomes_empty(tmp_path) -> None:
    payload = {"books": [{"name": "Jude", "chapters": [{"chapter": 1, "verses": [{"verse": 1}]}]}]}
    write_translation_source(tmp_path, "en", "KJV", payload)
    assert load_translation(tmp_path, "en", "KJV").books[0].chapters[0].verses[0].text == ""


def test_unknown_translation(tmp_path) -> None:
    (tmp_path / "en").mkdir()
    with pytest.raises(NotFoundError):
        load_translation(tmp_path, "en", "NOPE")


def test_invalid_json(tmp_path) -> None:
    write_translation_source(tmp_path, "en", "KJV", "{ not json")
    with pytest.raises(SourceParseError, match="KJV.json"):
        load_translation(tmp_path, "en", "KJV")


def test_unexpected_structure(tmp_path) -> None:
    write_translation_source(tmp_path, "en", "KJV", {"books": [{"chapters": []}]})
    with pytest.raises(SourceParseError):
        load_translation(tmp_path, "en", "KJV")


# ---------------------------------------------------------------------------
# Odnośniki
# ---------------------------------------------------------------------------

def test_find_cross_reference_files(tmp_path) -> None:
    for name in ("cross_references_1.json", "cross_references_0.json", "other.json", "cross_references.txt"):
        (tmp_path / name).write_text("[]", encoding="utf-8")
    assert [p.name for p in find_cross_reference_files(tmp_path)] == [
        "cross_references_0.json",
        "cross_references_1.json",
    ]


def test_find_cross_reference_files_missing_dir(tmp_path) -> None:
    with pytest.raises(NotFoundError):
        find_cross_reference_files(tmp_path / "extras")


def test_load_cross_references(tmp_path) -> None:
    path = tmp_path / "cross_references_0.json"
    path.write_text(json.dumps(SAMPLE_CROSS_REFERENCES), encoding="utf-8")
    refs = load_cross_references(path)

    assert len(refs) == 2
    assert refs[0].from_verse.book == "Genesis"
    assert [r.book for r in refs[0].to_verses] == ["John", "Hebrews"]
    assert refs[0].votes == 51


def test_load_cross_references_bare_array(tmp_path) -> None:
    path = tmp_path / "cross_references_0.json"
    path.write_text(json.dumps(SAMPLE_CROSS_REFERENCES["cross_references"]), encoding="utf-8")
    assert len(load_cross_references(path)) == 2


def test_load_cross_references_bad_record(tmp_path) -> None:
    path = tmp_path / "cross_references_0.json"
    path.write_text(json.dumps([{"to_verse": []}]), encoding="utf-8")
    with pytest.raises(SourceParseError):
        load_cross_references(path)


def test_missing_votes_stay_unknown(tmp_path) -> None:
    record = {
        "from_verse": {"book": "Ruth", "chapter": 1, "verse": 16},
        "to_verse": [{"book": "Ruth", "chapter": 2, "verse_start": 11, "verse_end": 12}],
    }
    path = tmp_path / "cross_references_0.json"
    path.write_text(json.dumps([record]), encoding="utf-8")
    assert load_cross_references(path)[0].votes is None
