from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import suppress

try:
    import mmap as _mmap_mod  # type: ignore
except Exception:  # pragma: no cover - platform-specific
    _mmap_mod = None  # type: ignore


class InvalidOffset(ValueError):
    """Raised when an invalid (e.g., negative) offset or length is provided."""


class RecordReader:
    """Reads a binary file as consecutive fixed-size records.

    Records start at `offset` and are `record_size` bytes long; the final
    record may be shorter when the file does not divide evenly. Uses `mmap`
    where available and falls back to seek/read otherwise.
    """

    def __init__(
        self,
        path: str,
        record_size: int,
        *,
        offset: int = 0,
        use_mmap: bool = True,
    ) -> None:
        if record_size <= 0:
            raise ValueError("record_size must be positive")
        if offset < 0:
            raise InvalidOffset("offset must be >= 0")

        self._path = path
        try:
            st = os.stat(path)
        except FileNotFoundError:
            raise FileNotFoundError(f"File not found: {path}") from None

        self._size = int(st.st_size)
        self._record_size = int(record_size)
        self._offset = int(offset)
        self._fh = open(path, "rb", buffering=0)  # noqa: SIM115

        self._mmap = None
        if use_mmap and _mmap_mod is not None and self._size > 0:
            try:
                self._mmap = _mmap_mod.mmap(
                    self._fh.fileno(),
                    length=0,
                    access=_mmap_mod.ACCESS_READ,
                )
            except Exception:
                self._mmap = None

    def close(self) -> None:
        if getattr(self, "_mmap", None) is not None:
            with suppress(Exception):
                self._mmap.close()  # type: ignore[union-attr]
            self._mmap = None
        with suppress(Exception):
            self._fh.close()

    def __enter__(self) -> RecordReader:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def size(self) -> int:
        """File size in bytes."""
        return self._size

    @property
    def path(self) -> str:
        return self._path

    @property
    def record_size(self) -> int:
        return self._record_size

    @property
    def record_count(self) -> int:
        """Number of records, counting a trailing short record."""
        avail = self._size - self._offset
        if avail <= 0:
            return 0
        return -(-avail // self._record_size)

    def read(self, offset: int, length: int) -> bytes:
        """Read up to `length` bytes at absolute file `offset`.

        Negative values raise `InvalidOffset`; reads past EOF are truncated.
        """
        if offset < 0:
            raise InvalidOffset("offset must be >= 0")
        if length < 0:
            raise InvalidOffset("length must be >= 0")
        if length == 0 or offset >= self._size:
            return b""
        end = min(self._size, offset + length)
        if self._mmap is not None:
            return bytes(self._mmap[offset:end])  # type: ignore[index]
        self._fh.seek(offset)
        return self._fh.read(end - offset)

    def record_offset(self, index: int) -> int:
        return self._offset + index * self._record_size

    def record(self, index: int) -> bytes:
        """Payload of record `index` (b"" past the last record)."""
        if index < 0:
            raise InvalidOffset("record index must be >= 0")
        return self.read(self.record_offset(index), self._record_size)

    def iter_records(
        self, start: int = 0, max_records: int | None = None
    ) -> Iterator[tuple[int, int, bytes]]:
        """Yield (index, file offset, payload) for each record from `start`."""
        stop = self.record_count
        if max_records is not None:
            stop = min(stop, start + max_records)
        for index in range(start, stop):
            yield index, self.record_offset(index), self.record(index)
