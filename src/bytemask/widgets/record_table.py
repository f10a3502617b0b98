from __future__ import annotations

from contextlib import suppress

from rich.text import Text
from textual.widgets import DataTable

from bytemask.core.batch import FieldBatch
from bytemask.ui.palette import PALETTE


def value_cell(value: int | None) -> Text:
    if value is None:
        return Text("—", style=PALETTE.null_value, justify="right")
    style = PALETTE.negative_value if value < 0 else PALETTE.field_value
    return Text(str(value), style=style, justify="right")


class RecordTable(DataTable):
    """One row per record, one column per mask field (in mask order)."""

    def __init__(self, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        with suppress(Exception):
            self.cursor_type = "row"
        self.zebra_stripes = True

    def show_batch(self, batch: FieldBatch, labels: list[str], names: list[str]) -> None:
        self.clear(columns=True)
        self.add_column("record", key="record")
        # Keys by position so duplicate field names still get their own column
        for i, name in enumerate(names):
            self.add_column(name, key=f"f{i}")
        for i, pairs in enumerate(batch.rows()):
            label = Text(labels[i], style=PALETTE.record_label)
            if pairs is None:
                cells = [value_cell(None) for _ in names]
            else:
                cells = [value_cell(value) for _name, value in pairs]
            self.add_row(label, *cells, key=str(i))
