"""Per-row decoding: mask + payload (+ endianness) into ordered name/value pairs."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from bytemask.core.endian import DEFAULT_ENDIAN, Endian, is_big, resolve_endian
from bytemask.core.mask import parse_mask
from bytemask.core.numbers import decode_field

logger = logging.getLogger(__name__)

FieldValue = tuple[str, int]


@dataclass(frozen=True)
class Row:
    """One input row. None in any slot means the value is null."""

    mask: str | None
    payload: bytes | None
    endian: str | None = None


def decode_row(row: Row, *, default_endian: Endian = DEFAULT_ENDIAN) -> list[FieldValue] | None:
    """Decode one row into (name, value) pairs in mask order.

    Returns None when the mask or the payload is null. The endianness is
    validated before the mask is parsed; the first error raised by either
    propagates unchanged.

    Raises:
        ParseError: Malformed mask string or endianness value
    """
    if row.mask is None or row.payload is None:
        return None
    endian, source = resolve_endian(row.endian, default_endian)
    logger.debug("endian=%s (from %s)", endian, source)
    big = is_big(endian)
    payload = row.payload
    return [
        (spec.name, decode_field(payload, spec.start_byte, spec.end_byte, big))
        for spec in parse_mask(row.mask)
    ]


def as_mapping(pairs: Iterable[FieldValue]) -> dict[str, int]:
    """Collapse pairs into a dict; later duplicates overwrite earlier ones."""
    out: dict[str, int] = {}
    for name, value in pairs:
        if name in out:
            logger.debug("duplicate field name %r, keeping last value", name)
        out[name] = value
    return out
