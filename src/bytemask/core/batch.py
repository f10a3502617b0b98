"""Batch decoding into contiguous key/value storage with an entry cap.

Each row becomes an (offset, length) window into shared `keys`/`values`
lists. Null rows occupy a zero-length window at the current end.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Literal

from bytemask.core.endian import DEFAULT_ENDIAN, Endian, normalize_endian
from bytemask.core.mask import ParseError
from bytemask.core.rows import FieldValue, Row, decode_row

logger = logging.getLogger(__name__)

# Matches the vector size of the SQL engine the mask function first shipped in
DEFAULT_MAX_ENTRIES = 2048

OnError = Literal["raise", "null"]


class CapacityError(Exception):
    """Raised when a unit of work would hold more entries than allowed."""

    def __init__(self, needed: int, max_entries: int) -> None:
        super().__init__(
            f"Exceeded maximum number of map entries: {needed} > {max_entries}"
        )
        self.needed = needed
        self.max_entries = max_entries


@dataclass(frozen=True)
class BatchEntry:
    offset: int
    length: int


@dataclass
class FieldBatch:
    max_entries: int = DEFAULT_MAX_ENTRIES
    keys: list[str] = field(default_factory=list)
    values: list[int] = field(default_factory=list)
    entries: list[BatchEntry] = field(default_factory=list)
    valid: list[bool] = field(default_factory=list)
    errors: dict[int, ParseError] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.max_entries <= 0:
            raise ValueError("max_entries must be positive")

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def total_entries(self) -> int:
        return len(self.keys)

    def append(self, pairs: list[FieldValue]) -> None:
        """Store one decoded row.

        Raises:
            CapacityError: If the row would push the total past `max_entries`
        """
        needed = self.total_entries + len(pairs)
        if needed > self.max_entries:
            raise CapacityError(needed, self.max_entries)
        self.entries.append(BatchEntry(self.total_entries, len(pairs)))
        self.valid.append(True)
        for name, value in pairs:
            self.keys.append(name)
            self.values.append(value)

    def append_null(self, error: ParseError | None = None) -> None:
        if error is not None:
            self.errors[len(self.entries)] = error
        self.entries.append(BatchEntry(self.total_entries, 0))
        self.valid.append(False)

    def row(self, index: int) -> list[FieldValue] | None:
        if not self.valid[index]:
            return None
        entry = self.entries[index]
        stop = entry.offset + entry.length
        return list(zip(self.keys[entry.offset : stop], self.values[entry.offset : stop]))

    def rows(self) -> list[list[FieldValue] | None]:
        return [self.row(i) for i in range(len(self.entries))]


def decode_batch(
    rows: Iterable[Row],
    *,
    max_entries: int = DEFAULT_MAX_ENTRIES,
    default_endian: Endian = DEFAULT_ENDIAN,
    on_error: OnError = "raise",
) -> FieldBatch:
    """Decode every row into one `FieldBatch`.

    With on_error="raise" the first row error aborts the batch; with "null"
    the failing row is stored as null and its error kept in `batch.errors`.
    CapacityError always aborts, as does an invalid `default_endian`.
    """
    default_endian = normalize_endian(default_endian) or DEFAULT_ENDIAN
    if on_error not in ("raise", "null"):
        raise ValueError(f"on_error must be 'raise' or 'null', got: {on_error}")
    batch = FieldBatch(max_entries=max_entries)
    for i, row in enumerate(rows):
        try:
            pairs = decode_row(row, default_endian=default_endian)
        except ParseError as e:
            if on_error == "raise":
                raise
            logger.debug("row %d: %s", i, e)
            batch.append_null(e)
            continue
        if pairs is None:
            logger.debug("row %d: null mask or payload", i)
            batch.append_null()
            continue
        batch.append(pairs)
    logger.debug("decoded %d rows, %d entries", len(batch), batch.total_entries)
    return batch
