"""YAML run configuration for bytemask.

Example::

    mask: "msg_type:0-0, length:1-2, seq:3-6"
    endian: big
    record_size: 16
    offset: 0
    max_records: 100
    max_entries: 2048
    on_error: raise

Every key is optional. Values given on the command line override the file.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from bytemask.core.batch import DEFAULT_MAX_ENTRIES
from bytemask.core.endian import DEFAULT_ENDIAN


class ConfigError(Exception):
    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


@dataclass(frozen=True)
class MaskConfig:
    """Settings for one decoding run.

    Attributes:
        mask: Mask string applied to every record (None = not configured)
        endian: Default endianness for rows without their own
        record_size: Bytes per record when reading a file (None = whole file)
        offset: File offset of the first record
        max_records: Maximum number of records to decode (None = no limit)
        max_entries: Cap on decoded fields across the whole run
        on_error: 'raise' aborts on the first bad row, 'null' nulls it out
    """

    mask: str | None = None
    endian: str = DEFAULT_ENDIAN
    record_size: int | None = None
    offset: int = 0
    max_records: int | None = None
    max_entries: int = DEFAULT_MAX_ENTRIES
    on_error: str = "raise"

    def merged(self, **overrides: Any) -> MaskConfig:
        """Copy with every override that is not None applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)


_KEYS = {
    "mask",
    "endian",
    "record_size",
    "offset",
    "max_records",
    "max_entries",
    "on_error",
}


def _check_int(
    data: dict[str, Any], key: str, errors: list[str], *, minimum: int, nullable: bool
) -> None:
    if key not in data:
        return
    value = data[key]
    if value is None and nullable:
        return
    # bool is an int subclass; reject it explicitly
    if not isinstance(value, int) or isinstance(value, bool) or value < minimum:
        errors.append(f"{key} must be an integer >= {minimum}")


def load_config(text: str) -> MaskConfig:
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError([f"YAML parse error: {e}"]) from None

    if not isinstance(data, dict):
        raise ConfigError(["Top-level YAML must be a mapping."])

    errors: list[str] = []
    for key in sorted(set(data) - _KEYS, key=str):
        errors.append(f"unknown key: {key}")

    mask = data.get("mask")
    if mask is not None and not isinstance(mask, str):
        errors.append("mask must be a string")

    if data.get("endian", DEFAULT_ENDIAN) not in ("big", "little"):
        errors.append("endian must be 'big' or 'little'")

    _check_int(data, "record_size", errors, minimum=1, nullable=True)
    _check_int(data, "offset", errors, minimum=0, nullable=False)
    _check_int(data, "max_records", errors, minimum=1, nullable=True)
    _check_int(data, "max_entries", errors, minimum=1, nullable=False)

    if data.get("on_error", "raise") not in ("raise", "null"):
        errors.append("on_error must be 'raise' or 'null'")

    if errors:
        raise ConfigError(errors)

    known = {k: v for k, v in data.items() if k in _KEYS}
    return MaskConfig(**known)


def load_config_file(path: str | Path) -> MaskConfig:
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError([f"config file not found: {p}"]) from None
    return load_config(text)
