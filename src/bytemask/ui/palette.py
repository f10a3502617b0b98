from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Palette:
    accent: str
    panel_border: str
    record_label: str
    field_value: str
    null_value: str
    negative_value: str
    status_ok: str
    status_error: str


DEFAULT = Palette(
    accent="#5ea1ff",
    panel_border="#3b4252",
    record_label="#8892a0",
    field_value="#ffffff",
    null_value="#6b7280",
    negative_value="#ffa657",
    status_ok="#a3be8c",
    status_error="#ff6b6b",
)

PALETTE = DEFAULT
