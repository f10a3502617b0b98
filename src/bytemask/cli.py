from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from rich.console import Console
from rich.table import Table

from bytemask.core.batch import CapacityError, FieldBatch, decode_batch
from bytemask.core.config import ConfigError, MaskConfig, load_config_file
from bytemask.core.io import RecordReader
from bytemask.core.mask import ParseError, lint_mask
from bytemask.core.rows import Row, as_mapping
from bytemask.logs import configure_logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bytemask", description="Decode named integer fields from binary records"
    )
    parser.add_argument("path", nargs="?", help="Binary file of fixed-size records")
    parser.add_argument(
        "--hex",
        dest="hex_payloads",
        action="append",
        metavar="HEX",
        help="Decode a hex-encoded payload instead of a file (repeatable)",
    )
    parser.add_argument("-m", "--mask", help="Mask string, e.g. 'type:0-0,len:1-2'")
    parser.add_argument("-e", "--endian", choices=["big", "little"], help="Byte order")
    parser.add_argument("-r", "--record-size", type=int, help="Bytes per record")
    parser.add_argument("--offset", type=int, help="File offset of the first record")
    parser.add_argument("-n", "--max-records", type=int, help="Stop after N records")
    parser.add_argument("--max-entries", type=int, help="Cap on decoded fields per run")
    parser.add_argument("-c", "--config", help="YAML config file")
    parser.add_argument("-f", "--format", choices=["table", "jsonl"], default="table")
    parser.add_argument("--view", action="store_true", help="Open the interactive viewer")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def _fail(message: str, code: int) -> int:
    print(f"bytemask: {message}", file=sys.stderr)
    return code


def _hex_rows(payloads: list[str], config: MaskConfig) -> tuple[list[Row], list[str]]:
    rows: list[Row] = []
    for text in payloads:
        try:
            payload = bytes.fromhex(text)
        except ValueError:
            raise ValueError(f"invalid hex payload: {text}") from None
        rows.append(Row(config.mask, payload, config.endian))
    return rows, [f"hex[{i}]" for i in range(len(rows))]


def _file_rows(path: str, config: MaskConfig) -> tuple[list[Row], list[str]]:
    # Without a record size the whole file is one record
    record_size = config.record_size or max(1, os.path.getsize(path) - config.offset)
    with RecordReader(path, record_size, offset=config.offset) as reader:
        rows: list[Row] = []
        labels: list[str] = []
        for index, offset, payload in reader.iter_records(max_records=config.max_records):
            rows.append(Row(config.mask, payload, config.endian))
            labels.append(f"{index} @0x{offset:08X}")
    logger.debug("read %d records of %d bytes from %s", len(rows), record_size, path)
    return rows, labels


def _render_table(batch: FieldBatch, labels: list[str], names: list[str]) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("record")
    for name in names:
        table.add_column(name, justify="right")
    if batch.errors:
        table.add_column("error", style="red")
    for i, pairs in enumerate(batch.rows()):
        cells = [labels[i]]
        if pairs is None:
            cells += ["—"] * len(names)
        else:
            cells += [str(value) for _name, value in pairs]
        if batch.errors:
            err = batch.errors.get(i)
            cells.append(str(err) if err is not None else "")
        table.add_row(*cells)
    Console().print(table)


def _render_jsonl(batch: FieldBatch) -> None:
    for pairs in batch.rows():
        print(json.dumps(None if pairs is None else as_mapping(pairs)))


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        base = load_config_file(args.config) if args.config else MaskConfig()
        config = base.merged(
            mask=args.mask,
            endian=args.endian,
            record_size=args.record_size,
            offset=args.offset,
            max_records=args.max_records,
            max_entries=args.max_entries,
        )
    except ConfigError as e:
        return _fail(f"invalid config: {e}", 2)

    if config.mask is None:
        return _fail("no mask given (use --mask or a config file)", 2)
    if bool(args.path) == bool(args.hex_payloads):
        return _fail("give exactly one of PATH or --hex", 2)
    if args.path and not os.path.exists(args.path):
        return _fail(f"file not found: {args.path}", 2)

    lint = lint_mask(config.mask)
    if not lint.success:
        return _fail(str(lint.error), 1)

    if args.view:
        if not args.path:
            return _fail("--view needs a PATH", 2)
        from bytemask.app import BytemaskApp

        BytemaskApp(args.path, config).run()
        return 0

    try:
        if args.hex_payloads:
            rows, labels = _hex_rows(args.hex_payloads, config)
        else:
            rows, labels = _file_rows(args.path, config)
    except (ValueError, OSError) as e:
        return _fail(str(e), 2)

    try:
        batch = decode_batch(
            rows,
            max_entries=config.max_entries,
            default_endian=config.endian,  # type: ignore[arg-type]
            on_error=config.on_error,  # type: ignore[arg-type]
        )
    except (ParseError, CapacityError) as e:
        return _fail(str(e), 1)
    except ValueError as e:
        return _fail(str(e), 2)

    if args.format == "jsonl":
        _render_jsonl(batch)
    else:
        _render_table(batch, labels, [f.name for f in lint.fields])
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
