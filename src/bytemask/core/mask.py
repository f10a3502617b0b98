"""Mask string parsing: ``name:start-end`` tokens into field specs."""

from __future__ import annotations

from dataclasses import dataclass

# Characters trimmed around tokens, names, ranges and numbers
_WS = " \t"


class ParseError(ValueError):
    """Base class for malformed mask strings and endianness values.

    `text` holds the offending token, range or value verbatim.
    """

    def __init__(self, message: str, text: str) -> None:
        super().__init__(message)
        self.text = text


class MissingColon(ParseError):
    pass


class MissingDash(ParseError):
    pass


class InvalidNumber(ParseError):
    pass


class InvalidRange(ParseError):
    pass


class EmptyName(ParseError):
    pass


class InvalidEndianness(ParseError):
    pass


@dataclass(frozen=True)
class FieldSpec:
    name: str
    start_byte: int  # inclusive
    end_byte: int  # inclusive


@dataclass(frozen=True)
class MaskLint:
    """Outcome of validating a mask string without raising.

    Attributes:
        success: True if every token parsed
        fields: Parsed fields (empty if success=False)
        error: The first parse error (None if success=True)
    """

    success: bool
    fields: tuple[FieldSpec, ...]
    error: ParseError | None


def _parse_int(text: str, range_str: str) -> int:
    digits = text[1:] if text[:1] in ("+", "-") else text
    if not digits or not (digits.isascii() and digits.isdigit()):
        raise InvalidNumber(f"Invalid byte range numbers in: {range_str}", range_str)
    return int(text)


def _split_tokens(text: str) -> list[str]:
    tokens = text.split(",")
    # A stream-style split never yields the empty piece after a final comma
    if tokens and tokens[-1] == "":
        tokens.pop()
    return tokens


def parse_field(token: str) -> FieldSpec:
    """Parse one ``name:start-end`` token.

    Raises:
        MissingColon: No ':' separates name and range
        EmptyName: The name is blank
        MissingDash: No '-' separates start and end
        InvalidNumber: start or end is not a decimal integer
        InvalidRange: start is negative or end < start
    """
    token = token.strip(_WS)
    name, sep, range_str = token.partition(":")
    if not sep:
        raise MissingColon(
            f"Invalid mask format. Expected 'name:start-end', got: {token}", token
        )
    name = name.strip(_WS)
    range_str = range_str.strip(_WS)
    if not name:
        raise EmptyName(f"Missing field name in: {token}", token)

    start_str, sep, end_str = range_str.partition("-")
    if not sep:
        raise MissingDash(
            f"Invalid range format. Expected 'start-end', got: {range_str}", range_str
        )
    start = _parse_int(start_str.strip(_WS), range_str)
    end = _parse_int(end_str.strip(_WS), range_str)
    if start < 0 or end < start:
        raise InvalidRange(f"Invalid byte range: {start}-{end}", range_str)
    return FieldSpec(name, start, end)


def parse_mask(text: str) -> list[FieldSpec]:
    """Parse a comma-separated mask string into field specs, in token order.

    Stops at the first malformed token; see `parse_field` for the errors.
    Duplicate names are preserved.
    """
    return [parse_field(token) for token in _split_tokens(text)]


def lint_mask(text: str) -> MaskLint:
    try:
        fields = parse_mask(text)
    except ParseError as e:
        return MaskLint(success=False, fields=(), error=e)
    return MaskLint(success=True, fields=tuple(fields), error=None)

