"""Serialize post-pipeline rows into the output format.

CSV and TSV use minimal quoting and ``\\n`` line ends. LTSV writes every
known label on every row. JSONL writes one compact JSON value per
non-empty ``data`` cell.
"""

from __future__ import annotations

import csv
import io
from typing import Callable, Sequence

from core.constants import (
    CSV_DELIMITER,
    JSON_DATA_COLUMN,
    LTSV_FIELD_SEPARATOR,
    LTSV_LABEL_SEPARATOR,
    OUTPUT_LINE_TERMINATOR,
    TEXT_ENCODING,
    TSV_DELIMITER,
)
from core.json_text import compact_json
from core.types import BaseFormat

RowWriter = Callable[[Sequence[str], Sequence[Sequence[str]]], str]


def write_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    output_format: BaseFormat,
) -> bytes:
    """Serialize rows into output bytes.

    Args:
        headers: Column names in source order.
        rows: Rows to emit, each of header length.
        output_format: Target format; CSV, TSV, LTSV or JSONL.

    Returns:
        UTF-8 encoded payload.

    Raises:
        ValueError: If the output format has no writer.
    """
    writer = _WRITERS.get(output_format)
    if writer is None:
        raise ValueError(f"no writer for output format {output_format.value}")
    return writer(headers, rows).encode(TEXT_ENCODING)


def count_json_rows(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> int:
    """Count rows whose ``data`` cell would be emitted as JSON."""
    position = _data_position(headers)
    if position is None:
        return 0
    return sum(1 for row in rows if row[position] != "")


def _write_csv(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    return _write_delimited(headers, rows, CSV_DELIMITER)


def _write_tsv(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    return _write_delimited(headers, rows, TSV_DELIMITER)


def _write_delimited(headers: Sequence[str], rows: Sequence[Sequence[str]], delimiter: str) -> str:
    buffer = io.StringIO()
    writer = csv.writer(
        buffer,
        delimiter=delimiter,
        lineterminator=OUTPUT_LINE_TERMINATOR,
        quoting=csv.QUOTE_MINIMAL,
    )
    writer.writerow(headers)
    writer.writerows(rows)
    return buffer.getvalue()


def _write_ltsv(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    lines = [
        LTSV_FIELD_SEPARATOR.join(
            f"{label}{LTSV_LABEL_SEPARATOR}{value}" for label, value in zip(headers, row)
        )
        for row in rows
    ]
    return "".join(line + OUTPUT_LINE_TERMINATOR for line in lines)


def _write_jsonl(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    position = _data_position(headers)
    if position is None:
        return ""
    return "".join(
        compact_json(row[position]) + OUTPUT_LINE_TERMINATOR for row in rows if row[position] != ""
    )


def _data_position(headers: Sequence[str]) -> int | None:
    for position, header in enumerate(headers):
        if header == JSON_DATA_COLUMN:
            return position
    return None


_WRITERS: dict[BaseFormat, RowWriter] = {
    BaseFormat.CSV: _write_csv,
    BaseFormat.TSV: _write_tsv,
    BaseFormat.LTSV: _write_ltsv,
    BaseFormat.JSONL: _write_jsonl,
}
