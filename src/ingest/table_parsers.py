"""Format parsers producing a uniform header-plus-rows table.

Every parser returns a ``ParsedTable`` whose rows are lists of strings of
exactly header length. Parquet and XLSX support load pyarrow and openpyxl
lazily so text-only installs stay light.
"""

from __future__ import annotations

import csv
from datetime import date, datetime, time
import io
import sys
from typing import Any, Callable

from core.constants import (
    CSV_DELIMITER,
    JSON_DATA_COLUMN,
    LTSV_FIELD_SEPARATOR,
    LTSV_LABEL_SEPARATOR,
    TSV_DELIMITER,
)
from core.errors import SiftDependencyError, SiftEmptyInputError, SiftParseError
from core.json_text import describe_json_error, is_valid_json, split_top_level_elements
from core.logging_config import get_logger
from core.types import BaseFormat, ParsedTable
from transforms.coercion import format_float

_LOGGER = get_logger(__name__)


def _raise_csv_field_limit() -> None:
    limit = sys.maxsize
    while True:
        try:
            csv.field_size_limit(limit)
            return
        except OverflowError:
            limit //= 2


_raise_csv_field_limit()


def parse_table(data: bytes, base_format: BaseFormat) -> ParsedTable:
    """Parse decompressed bytes into a table.

    Args:
        data: Decompressed input bytes.
        base_format: Format of the bytes.

    Returns:
        Parsed table with normalized rows.

    Raises:
        SiftEmptyInputError: If input is empty or yields no table.
        SiftParseError: If input is structurally malformed.
        SiftDependencyError: If a format library is missing.
    """
    if len(data) == 0:
        raise SiftEmptyInputError(
            f"Input is empty: no {base_format.value} data to process. Provide a non-empty file."
        )
    table = _PARSERS[base_format](data)
    if not table.headers and not table.rows:
        raise SiftEmptyInputError(
            f"Input contains no {base_format.value} rows or headers. Provide a file with data."
        )
    _LOGGER.info(
        "table_parsed",
        format=base_format.value,
        column_count=len(table.headers),
        row_count=len(table.rows),
    )
    return table


def parse_csv(data: bytes) -> ParsedTable:
    """Parse comma-separated values."""
    return _parse_delimited(data, CSV_DELIMITER, "CSV")


def parse_tsv(data: bytes) -> ParsedTable:
    """Parse tab-separated values."""
    return _parse_delimited(data, TSV_DELIMITER, "TSV")


def _parse_delimited(data: bytes, delimiter: str, label: str) -> ParsedTable:
    """Parse delimited text with standard quoting.

    Blank lines are skipped. Short rows are right-padded with empty
    strings; rows longer than the header are rejected.

    Args:
        data: Raw text bytes.
        delimiter: Field delimiter.
        label: Format label for error messages.

    Returns:
        Parsed table.

    Raises:
        SiftParseError: If quoting is malformed or a row is too long.
    """
    text = _decode_text(data, label)
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter, strict=True)
    headers: list[str] | None = None
    rows: list[list[str]] = []
    try:
        for record in reader:
            if not record:
                continue
            if headers is None:
                headers = record
                continue
            rows.append(_fit_delimited_row(record, len(headers), len(rows) + 1, label))
    except csv.Error as error:
        raise SiftParseError(
            f"Failed to parse {label} near line {reader.line_num}: {error}. Fix the quoting and retry."
        ) from error
    return ParsedTable(headers=tuple(headers or ()), rows=rows)


def _fit_delimited_row(record: list[str], width: int, row_number: int, label: str) -> list[str]:
    if len(record) > width:
        raise SiftParseError(
            f"Failed to parse {label} row {row_number}: expected at most {width} fields, "
            f"got {len(record)}. Remove extra fields or add matching header columns."
        )
    return record + [""] * (width - len(record))


def parse_ltsv(data: bytes) -> ParsedTable:
    """Parse labeled tab-separated values.

    Headers are the union of labels in first-seen order; a row missing a
    label reads ``""`` there. Labels are stripped, values are kept as is.

    Args:
        data: Raw text bytes.

    Returns:
        Parsed table.

    Raises:
        SiftEmptyInputError: If no line holds a ``label:value`` pair.
    """
    text = _decode_text(data, "LTSV")
    header_positions: dict[str, int] = {}
    records: list[dict[str, str]] = []
    for line in text.split("\n"):
        line = line.rstrip("\r")
        if not line.strip():
            continue
        record: dict[str, str] = {}
        for pair in line.split(LTSV_FIELD_SEPARATOR):
            label, separator, value = pair.partition(LTSV_LABEL_SEPARATOR)
            if not separator:
                continue
            label = label.strip()
            record[label] = value
            header_positions.setdefault(label, len(header_positions))
        if record:
            records.append(record)
    if not records:
        raise SiftEmptyInputError("LTSV input contains no label:value pairs. Provide LTSV data.")
    headers = tuple(header_positions)
    rows = [[record.get(label, "") for label in headers] for record in records]
    return ParsedTable(headers=headers, rows=rows)


def parse_json(data: bytes) -> ParsedTable:
    """Parse a JSON document into a single ``data`` column.

    A top-level array yields one row per element; any other value is a
    single row. Cells hold raw element text.

    Args:
        data: Raw JSON bytes.

    Returns:
        Parsed table.

    Raises:
        SiftParseError: If the document is not valid JSON.
    """
    text = _decode_text(data, "JSON")
    try:
        elements = split_top_level_elements(text)
    except ValueError as error:
        raise SiftParseError(
            f"Failed to parse JSON input: {describe_json_error(text) or error}. Fix the JSON syntax and retry."
        ) from error
    return ParsedTable(headers=(JSON_DATA_COLUMN,), rows=[[element] for element in elements])


def parse_jsonl(data: bytes) -> ParsedTable:
    """Parse JSON Lines into a single ``data`` column.

    Args:
        data: Raw JSONL bytes.

    Returns:
        Parsed table with one row per non-blank line.

    Raises:
        SiftParseError: If a line is not valid JSON.
    """
    text = _decode_text(data, "JSONL")
    rows: list[list[str]] = []
    for line_number, line in enumerate(text.split("\n"), 1):
        stripped = line.strip()
        if not stripped:
            continue
        if not is_valid_json(stripped):
            raise SiftParseError(
                f"Failed to parse JSONL line {line_number}: {describe_json_error(stripped)}. "
                "Fix the JSON syntax and retry."
            )
        rows.append([stripped])
    return ParsedTable(headers=(JSON_DATA_COLUMN,), rows=rows)


def parse_parquet(data: bytes) -> ParsedTable:
    """Parse a Parquet file with pyarrow.

    Args:
        data: Raw Parquet bytes.

    Returns:
        Parsed table with stringified cells.

    Raises:
        SiftDependencyError: If pyarrow is missing.
        SiftParseError: If the file cannot be read.
    """
    pyarrow, parquet = _import_pyarrow()
    try:
        arrow_table = parquet.read_table(pyarrow.BufferReader(data))
    except (pyarrow.ArrowException, OSError) as error:
        raise SiftParseError(
            f"Failed to read Parquet input: {error}. Check that the file is a complete Parquet file."
        ) from error
    headers = tuple(arrow_table.column_names)
    columns = []
    for arrow_field, column in zip(arrow_table.schema, arrow_table.columns):
        float_bits = 32 if pyarrow.types.is_float32(arrow_field.type) else 64
        columns.append([_stringify_cell(value, float_bits) for value in column.to_pylist()])
    rows = [list(row) for row in zip(*columns)] if columns else []
    return ParsedTable(headers=headers, rows=rows)


def parse_xlsx(data: bytes) -> ParsedTable:
    """Parse the first worksheet of an XLSX workbook with openpyxl.

    Fully blank rows are skipped, trailing empty cells are dropped, short
    rows are padded, and cells beyond the header width are discarded.

    Args:
        data: Raw XLSX bytes.

    Returns:
        Parsed table with stringified cells.

    Raises:
        SiftDependencyError: If openpyxl is missing.
        SiftParseError: If the workbook cannot be opened.
    """
    openpyxl = _import_openpyxl()
    try:
        workbook = openpyxl.load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    except Exception as error:
        raise SiftParseError(
            f"Failed to open XLSX input: {error}. Check that the file is a valid workbook."
        ) from error
    try:
        if not workbook.worksheets:
            return ParsedTable(headers=(), rows=[])
        return _read_worksheet(workbook.worksheets[0])
    finally:
        workbook.close()


def _read_worksheet(worksheet: Any) -> ParsedTable:
    headers: tuple[str, ...] | None = None
    rows: list[list[str]] = []
    for sheet_row_number, values in enumerate(worksheet.iter_rows(values_only=True), 1):
        cells = [_stringify_cell(value, 64) for value in values]
        while cells and cells[-1] == "":
            cells.pop()
        if not cells:
            continue
        if headers is None:
            headers = tuple(cells)
            continue
        if len(cells) > len(headers):
            _LOGGER.warning(
                "xlsx_row_truncated",
                sheet_row=sheet_row_number,
                cell_count=len(cells),
                header_count=len(headers),
            )
            cells = cells[: len(headers)]
        rows.append(cells + [""] * (len(headers) - len(cells)))
    return ParsedTable(headers=headers or (), rows=rows)


def _stringify_cell(value: Any, float_bits: int) -> str:
    """Render a native cell value as text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return format_float(value, float_bits)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def _decode_text(data: bytes, label: str) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as error:
        raise SiftParseError(
            f"Failed to decode {label} input as UTF-8 at byte {error.start}. Re-encode the file as UTF-8."
        ) from error


def _import_pyarrow() -> tuple[Any, Any]:
    try:
        import pyarrow
        import pyarrow.parquet as parquet
    except ImportError as error:
        raise SiftDependencyError(
            "Parquet input requires pyarrow, but it is not installed. Install with 'pip install pyarrow'."
        ) from error
    return pyarrow, parquet


def _import_openpyxl() -> Any:
    try:
        import openpyxl
    except ImportError as error:
        raise SiftDependencyError(
            "XLSX input requires openpyxl, but it is not installed. Install with 'pip install openpyxl'."
        ) from error
    return openpyxl


_PARSERS: dict[BaseFormat, Callable[[bytes], ParsedTable]] = {
    BaseFormat.CSV: parse_csv,
    BaseFormat.TSV: parse_tsv,
    BaseFormat.LTSV: parse_ltsv,
    BaseFormat.JSON: parse_json,
    BaseFormat.JSONL: parse_jsonl,
    BaseFormat.PARQUET: parse_parquet,
    BaseFormat.XLSX: parse_xlsx,
}
