"""Endianness values for bytemask: types, validation, and resolution."""

from __future__ import annotations

from typing import Literal

from bytemask.core.mask import InvalidEndianness

# Type alias for endianness
Endian = Literal["big", "little"]

# Where the effective endianness came from
EndianSource = Literal["row", "default"]

# Used whenever a row carries no endianness of its own
DEFAULT_ENDIAN: Endian = "big"


def normalize_endian(value: str | None) -> Endian | None:
    """Validate an endianness token.

    Args:
        value: Exactly 'big' or 'little' (case-sensitive), or None

    Returns:
        The token, or None if input was None

    Raises:
        InvalidEndianness: If value is anything else
    """
    if value is None:
        return None
    if value not in ("big", "little"):
        raise InvalidEndianness(
            f"Invalid endianness parameter. Must be 'big' or 'little', got: {value}", value
        )
    return value  # type: ignore[return-value]


def resolve_endian(
    row_endian: str | None, default: Endian = DEFAULT_ENDIAN
) -> tuple[Endian, EndianSource]:
    """Resolve the endianness for one row.

    A value on the row wins; a missing (None) value falls back to `default`.

    Returns:
        Tuple of (effective_endian, source)

    Raises:
        InvalidEndianness: If the row value is present but not 'big'/'little'
    """
    endian = normalize_endian(row_endian)
    if endian is not None:
        return endian, "row"
    return default, "default"


def is_big(endian: Endian) -> bool:
    return endian == "big"
