from __future__ import annotations

# Widest value a field can hold; wider ranges keep their first 8 bytes
MAX_FIELD_BYTES = 8

_INT64_SIGN = 1 << 63
_UINT64_SPAN = 1 << 64


def to_int64(value: int) -> int:
    """Reinterpret an unsigned 64-bit value as two's-complement signed."""
    value &= _UINT64_SPAN - 1
    if value & _INT64_SIGN:
        return value - _UINT64_SPAN
    return value


def decode_field(
    payload: bytes | bytearray | memoryview, start: int, end: int, big_endian: bool = True
) -> int:
    """Assemble bytes ``start..end`` (inclusive) of `payload` into an int64.

    Never raises. Positions past the payload are not consumed, so short
    payloads yield partial values and ranges with no overlap yield 0. At most
    `MAX_FIELD_BYTES` bytes are consumed, lowest offset first.

    Big endian puts the lowest offset in the most significant position;
    little endian puts it in the least significant one.
    """
    start = max(start, 0)
    stop = min(end + 1, len(payload), start + MAX_FIELD_BYTES)
    result = 0
    consumed = 0
    for pos in range(start, stop):
        byte = payload[pos]
        if big_endian:
            result = (result << 8) | byte
        else:
            result |= byte << (8 * consumed)
        consumed += 1
    return to_int64(result)

