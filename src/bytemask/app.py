from __future__ import annotations

import os

from rich.text import Text
from textual.app import App, ComposeResult
from textual.widgets import Footer, Header, Input, Static

from bytemask.core.batch import CapacityError, decode_batch
from bytemask.core.config import MaskConfig
from bytemask.core.io import RecordReader
from bytemask.core.mask import lint_mask
from bytemask.core.rows import Row
from bytemask.ui.palette import PALETTE
from bytemask.widgets.record_table import RecordTable


class BytemaskApp(App):
    """Textual viewer: a record file decoded through an editable mask."""

    CSS = f"""
    #mask {{
        border: tall {PALETTE.panel_border};
    }}
    #records {{
        height: 1fr;
    }}
    #status {{
        height: 1;
        padding: 0 1;
    }}
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("e", "toggle_endian", "Toggle Endian"),
        ("r", "reapply", "Re-apply"),
    ]

    def __init__(self, path: str, config: MaskConfig) -> None:
        super().__init__()
        self._path = path
        self._config = config
        self._endian = config.endian
        self._mask = config.mask or ""
        self._labels: list[str] = []
        self._payloads: list[bytes] = []
        self.title = f"bytemask — {os.path.basename(path)}"
        self.mask_input: Input | None = None
        self.table: RecordTable | None = None
        self.status: Static | None = None

    def compose(self) -> ComposeResult:
        self.mask_input = Input(value=self._mask, placeholder="name:start-end, ...", id="mask")
        self.table = RecordTable(id="records")
        self.status = Static(id="status")
        yield Header()
        yield self.mask_input
        yield self.table
        yield self.status
        yield Footer()

    def on_mount(self) -> None:
        self.load_records()
        self.apply_mask()
        self.table.focus()

    def load_records(self) -> None:
        cfg = self._config
        record_size = cfg.record_size or max(1, os.path.getsize(self._path) - cfg.offset)
        with RecordReader(self._path, record_size, offset=cfg.offset) as reader:
            self._labels = []
            self._payloads = []
            for index, offset, payload in reader.iter_records(max_records=cfg.max_records):
                self._labels.append(f"{index} @0x{offset:08X}")
                self._payloads.append(payload)

    def apply_mask(self) -> None:
        lint = lint_mask(self._mask)
        if not lint.success:
            self._set_status(str(lint.error), error=True)
            return
        rows = [Row(self._mask, payload, self._endian) for payload in self._payloads]
        try:
            batch = decode_batch(rows, max_entries=self._config.max_entries, on_error="null")
        except CapacityError as e:
            self._set_status(f"{e} (lower max_records or raise max_entries)", error=True)
            return
        self.table.show_batch(batch, self._labels, [f.name for f in lint.fields])
        self._set_status(
            f"{len(batch)} records  {len(lint.fields)} fields  endian={self._endian}"
        )

    def _set_status(self, message: str, *, error: bool = False) -> None:
        style = PALETTE.status_error if error else PALETTE.status_ok
        self.status.update(Text(message, style=style))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._mask = event.value
        self.apply_mask()

    def action_toggle_endian(self) -> None:
        self._endian = "little" if self._endian == "big" else "big"
        self.apply_mask()

    def action_reapply(self) -> None:
        self._mask = self.mask_input.value
        self.apply_mask()
