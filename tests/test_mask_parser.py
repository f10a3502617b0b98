from __future__ import annotations

import pytest

from bytemask.core.mask import (
    EmptyName,
    FieldSpec,
    InvalidNumber,
    InvalidRange,
    MissingColon,
    MissingDash,
    ParseError,
    lint_mask,
    parse_mask,
)


def test_parse_two_fields_in_order() -> None:
    assert parse_mask("a:0-1,b:2-3") == [FieldSpec("a", 0, 1), FieldSpec("b", 2, 3)]


def test_whitespace_is_trimmed_everywhere() -> None:
    fields = parse_mask(" \tlen : 1 - 2 ,\tseq:  3-6\t")
    assert fields == [FieldSpec("len", 1, 2), FieldSpec("seq", 3, 6)]


def test_bounds_are_kept_verbatim() -> None:
    (f,) = parse_mask("x:7-7")
    assert (f.start_byte, f.end_byte) == (7, 7)


def test_duplicate_names_preserved() -> None:
    fields = parse_mask("a:0-0,a:1-1,b:2-2,a:3-3")
    assert [f.name for f in fields] == ["a", "a", "b", "a"]


def test_field_count_matches_tokens() -> None:
    tokens = [f"f{i}:{i}-{i + 1}" for i in range(20)]
    fields = parse_mask(",".join(tokens))
    assert len(fields) == 20
    assert [f.name for f in fields] == [f"f{i}" for i in range(20)]


def test_empty_mask_and_trailing_comma() -> None:
    assert parse_mask("") == []
    assert parse_mask("a:0-1,") == [FieldSpec("a", 0, 1)]


def test_interior_empty_token_rejected() -> None:
    with pytest.raises(MissingColon):
        parse_mask("a:0-1,,b:2-3")


def test_missing_colon_quotes_token() -> None:
    with pytest.raises(MissingColon) as ei:
        parse_mask("bad")
    assert "bad" in str(ei.value)
    assert ei.value.text == "bad"


def test_missing_dash_quotes_range() -> None:
    with pytest.raises(MissingDash) as ei:
        parse_mask("a:0")
    assert str(ei.value) == "Invalid range format. Expected 'start-end', got: 0"


@pytest.mark.parametrize("mask", ["a:x-1", "a:1-y", "a: -1", "a:-1-3", "a:1.5-2", "a:1_0-20"])
def test_invalid_number(mask: str) -> None:
    with pytest.raises(InvalidNumber) as ei:
        parse_mask(mask)
    assert ei.value.text in str(ei.value)


def test_invalid_range_reports_both_values() -> None:
    with pytest.raises(InvalidRange) as ei:
        parse_mask("a:3-1")
    assert "3-1" in str(ei.value)


def test_signed_numbers_accepted_when_valid() -> None:
    assert parse_mask("a:+2-+4") == [FieldSpec("a", 2, 4)]


def test_empty_name_rejected() -> None:
    with pytest.raises(EmptyName):
        parse_mask(" :0-1")


def test_stops_at_first_error() -> None:
    # Both tokens are bad; the first one wins
    with pytest.raises(MissingColon):
        parse_mask("bad,a:3-1")


def test_errors_are_value_errors() -> None:
    assert issubclass(ParseError, ValueError)
    for cls in (MissingColon, MissingDash, InvalidNumber, InvalidRange, EmptyName):
        assert issubclass(cls, ParseError)


def test_lint_mask_reports_without_raising() -> None:
    ok = lint_mask("a:0-1")
    assert ok.success and ok.fields == (FieldSpec("a", 0, 1),) and ok.error is None
    bad = lint_mask("a:0")
    assert not bad.success and bad.fields == ()
    assert isinstance(bad.error, MissingDash)
