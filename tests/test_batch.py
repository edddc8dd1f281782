from __future__ import annotations

import math

import psycopg2
import pytest

from sqlgen.batch import BatchInsertWriter, build_insert
from sqlgen.errors import BackendConnectionError, ConstraintError


def _rows(n: int) -> list[tuple[int, int, str]]:
    return [(1, i, f"text {i}") for i in range(1, n + 1)]


def test_build_insert_numbers_parameters_from_one() -> None:
    sql, params = build_insert("verse", ("chapter_id", "verse_number", "text"), _rows(2))
    assert sql == (
        "INSERT INTO verse (chapter_id, verse_number, text) VALUES "
        "(%(p1)s, %(p2)s, %(p3)s), (%(p4)s, %(p5)s, %(p6)s)"
    )
    assert params == {"p1": 1, "p2": 1, "p3": "text 1", "p4": 1, "p5": 2, "p6": "text 2"}


@pytest.mark.parametrize(
    ("length", "batch_size"),
    [(1, 100), (99, 100), (100, 100), (101, 100), (250, 100), (7, 3), (6, 2)],
)
def test_flush_count_and_sizes(fake_conn, length: int, batch_size: int) -> None:
    cur = fake_conn.cursor()
    writer = BatchInsertWriter(cur, "verse", ("chapter_id", "verse_number", "text"), batch_size)
    writer.extend(_rows(length))
    assert writer.close() == length

    inserts = fake_conn.statements("INSERT INTO verse")
    assert len(inserts) == math.ceil(length / batch_size) == writer.flushes

    sizes = [len(params) // 3 for _, params in inserts]
    expected_last = length % batch_size or batch_size
    assert sizes[-1] == expected_last
    assert all(s == batch_size for s in sizes[:-1])
    assert sum(len(params) for _, params in inserts) == length * 3


def test_parameter_numbering_restarts_every_batch(fake_conn) -> None:
    writer = BatchInsertWriter(fake_conn.cursor(), "verse", ("chapter_id", "verse_number", "text"), 2)
    writer.extend(_rows(5))
    writer.close()

    for sql, params in fake_conn.statements("INSERT INTO verse"):
        assert "%(p1)s" in sql
        assert list(params) == [f"p{i}" for i in range(1, len(params) + 1)]


def test_empty_sequence_issues_no_statement(fake_conn) -> None:
    writer = BatchInsertWriter(fake_conn.cursor(), "verse", ("a",), 10)
    assert writer.close() == 0
    assert fake_conn.log == []


def test_remainder_is_flushed_on_close(fake_conn) -> None:
    writer = BatchInsertWriter(fake_conn.cursor(), "verse", ("chapter_id", "verse_number", "text"), 100)
    writer.extend(_rows(3))
    assert writer.pending == 3
    assert fake_conn.log == []

    writer.close()
    assert writer.pending == 0
    assert writer.total == 3


def test_progress_callback_sees_running_total(fake_conn) -> None:
    seen: list[int] = []
    writer = BatchInsertWriter(
        fake_conn.cursor(), "verse", ("chapter_id", "verse_number", "text"), 4, on_flush=seen.append
    )
    writer.extend(_rows(10))
    writer.close()
    assert seen == [4, 8, 10]


def test_rows_keep_source_order(fake_conn) -> None:
    writer = BatchInsertWriter(fake_conn.cursor(), "verse", ("chapter_id", "verse_number", "text"), 3)
    writer.extend(_rows(7))
    writer.close()

    numbers = []
    for _, params in fake_conn.statements("INSERT INTO verse"):
        values = [params[f"p{i}"] for i in range(1, len(params) + 1)]
        numbers.extend(values[1::3])
    assert numbers == list(range(1, 8))


def test_wrong_arity_is_rejected(fake_conn) -> None:
    writer = BatchInsertWriter(fake_conn.cursor(), "verse", ("chapter_id", "verse_number", "text"))
    with pytest.raises(ValueError):
        writer.add((1, 2))


def test_batch_size_must_be_positive(fake_conn) -> None:
    with pytest.raises(ValueError):
        BatchInsertWriter(fake_conn.cursor(), "verse", ("a",), batch_size=0)


def test_constraint_violation_propagates_and_drops_pending(fake_conn) -> None:
    calls = {"n": 0}

    def second_insert(sql: str, params) -> bool:
        if sql.startswith("INSERT INTO verse"):
            calls["n"] += 1
            return calls["n"] == 2
        return False

    fake_conn.fail_when = second_insert
    writer = BatchInsertWriter(fake_conn.cursor(), "verse", ("chapter_id", "verse_number", "text"), 2)

    with pytest.raises(ConstraintError) as info:
        writer.extend(_rows(5))
    assert isinstance(info.value.__cause__, psycopg2.IntegrityError)
    assert writer.total == 2
    assert writer.pending == 0


def test_connection_loss_maps_to_backend_error(fake_conn) -> None:
    fake_conn.fail_when = lambda sql, params: True
    fake_conn.error = psycopg2.OperationalError("server closed the connection unexpectedly")
    writer = BatchInsertWriter(fake_conn.cursor(), "verse", ("a",), 1)
    with pytest.raises(BackendConnectionError, match="server closed"):
        writer.add((1,))


def test_context_manager_flushes_only_on_success(fake_conn) -> None:
    with BatchInsertWriter(fake_conn.cursor(), "verse", ("a",), 10) as writer:
        writer.extend([(1,), (2,)])
    assert writer.total == 2

    other = BatchInsertWriter(fake_conn.cursor(), "verse", ("a",), 10)
    with pytest.raises(RuntimeError):
        with other:
            other.add((3,))
            raise RuntimeError("boom")
    assert other.total == 0
    assert len(fake_conn.statements("INSERT INTO verse")) == 1
