from __future__ import annotations

import pytest

from bytemask.core.batch import (
    DEFAULT_MAX_ENTRIES,
    BatchEntry,
    CapacityError,
    FieldBatch,
    decode_batch,
)
from bytemask.core.mask import InvalidEndianness, MissingDash
from bytemask.core.rows import Row


def test_rows_are_contiguous_windows() -> None:
    rows = [
        Row("a:0-0,b:1-1", b"\x01\x02"),
        Row(None, b"\x01"),
        Row("c:0-1", b"\x00\x05"),
    ]
    batch = decode_batch(rows)
    assert len(batch) == 3
    assert batch.entries == [BatchEntry(0, 2), BatchEntry(2, 0), BatchEntry(2, 1)]
    assert batch.valid == [True, False, True]
    assert batch.keys == ["a", "b", "c"]
    assert batch.values == [1, 2, 5]
    assert batch.rows() == [[("a", 1), ("b", 2)], None, [("c", 5)]]


def test_null_rows_do_not_affect_others() -> None:
    batch = decode_batch([Row("a:0-0", None), Row("a:0-0", b"\x07")])
    assert batch.row(0) is None
    assert batch.row(1) == [("a", 7)]


def test_default_endian_applies_to_rows_without_one() -> None:
    rows = [Row("v:0-1", b"\x01\x02"), Row("v:0-1", b"\x01\x02", "big")]
    batch = decode_batch(rows, default_endian="little")
    assert batch.values == [0x0201, 0x0102]


def test_first_error_aborts_by_default() -> None:
    rows = [Row("a:0-0", b"\x01"), Row("a:0", b"\x01"), Row("a:0-0", b"\x02")]
    with pytest.raises(MissingDash):
        decode_batch(rows)


def test_on_error_null_keeps_going() -> None:
    rows = [Row("a:0-0", b"\x01"), Row("a:0-0", b"\x01", "BIG"), Row("a:0-0", b"\x02")]
    batch = decode_batch(rows, on_error="null")
    assert batch.rows() == [[("a", 1)], None, [("a", 2)]]
    assert list(batch.errors) == [1]
    assert isinstance(batch.errors[1], InvalidEndianness)


def test_capacity_exceeded_raises() -> None:
    rows = [Row("a:0-0,b:1-1", b"\x01\x02")] * 3
    with pytest.raises(CapacityError) as ei:
        decode_batch(rows, max_entries=5)
    assert ei.value.needed == 6
    assert ei.value.max_entries == 5


def test_capacity_exact_fit() -> None:
    rows = [Row("a:0-0,b:1-1", b"\x01\x02")] * 3
    batch = decode_batch(rows, max_entries=6)
    assert batch.total_entries == 6


def test_capacity_is_fatal_even_with_null_policy() -> None:
    rows = [Row("a:0-0,b:1-1,c:2-2", b"\x01")] * 2
    with pytest.raises(CapacityError):
        decode_batch(rows, max_entries=4, on_error="null")


def test_default_cap() -> None:
    assert DEFAULT_MAX_ENTRIES == 2048
    mask = ",".join(f"f{i}:0-0" for i in range(1024))
    decode_batch([Row(mask, b"\x01")] * 2)
    with pytest.raises(CapacityError):
        decode_batch([Row(mask, b"\x01")] * 3)


def test_invalid_parameters() -> None:
    with pytest.raises(ValueError):
        FieldBatch(max_entries=0)
    with pytest.raises(ValueError):
        decode_batch([], on_error="skip")  # type: ignore[arg-type]


def test_empty_batch() -> None:
    batch = decode_batch([])
    assert len(batch) == 0 and batch.total_entries == 0 and batch.rows() == []


def test_invalid_default_endian_rejected_up_front() -> None:
    rows = [Row("v:0-1", b"\x01\x02")]
    with pytest.raises(InvalidEndianness):
        decode_batch(rows, default_endian="BIG")  # type: ignore[arg-type]
    with pytest.raises(InvalidEndianness):
        decode_batch(rows, default_endian="BIG", on_error="null")  # type: ignore[arg-type]
