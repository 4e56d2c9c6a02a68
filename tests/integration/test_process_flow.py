"""Integration tests for end-to-end processing through the SDK surface."""

from __future__ import annotations

import bz2
from dataclasses import dataclass, field
import gzip
import io
import lzma
from pathlib import Path
import zlib

import cramjam
import openpyxl
import pyarrow
import pyarrow.parquet as parquet
import pytest

from sift import (
    FieldSpec,
    SiftConfig,
    SiftInvalidJSONError,
    UInt16,
    load_schema_file,
    process_path,
)
from tests.fixture_paths import fixture_bytes, fixture_path


@dataclass
class Event:
    """LTSV event record."""

    Host: str = field(default="", metadata={"validate": "required"})
    Port: UInt16 = field(default=0, metadata={"validate": "required"})
    Region: str = field(default="", metadata={"prep": "uppercase"})


JSON_SPECS = (FieldSpec(identifier="Data", prep="trim", validate="required"),)
EXPECTED_JSONL = '{"id":1,"tags":["a","b"]}\n{"id":2,"note":"  spaced  "}\n{}\n'


def test_csv_flow_with_yaml_schema() -> None:
    """CSV input should bind first duplicate headers, pad rows, and report errors."""
    specs = load_schema_file(str(fixture_path("schemas/orders.yaml")))

    stream, result = process_path(fixture_path("orders.csv"), specs, config=SiftConfig())

    assert stream.read_text() == (
        "order_id,customer,quantity,email,customer\n"
        "1001,Ada Lovelace,3,ada@example.com,ignored\n"
        "1002,Bob,0,bob@example,\n"
        "1003,,256,cy@example.com,x\n"
    )
    assert [(error.row, error.field, error.tag) for error in result.errors] == [
        (2, "Quantity", "min"),
        (2, "Email", "email"),
        (3, "Customer", "required"),
        (3, "Quantity", "type_conversion"),
    ]
    assert result.row_count == 3
    assert result.valid_row_count == 1
    assert result.valid_row_count == result.row_count - len({error.row for error in result.errors})
    assert result.records[0] == {
        "OrderID": 1001,
        "Customer": "Ada Lovelace",
        "Quantity": 3,
        "Email": "ada@example.com",
    }


def test_ltsv_flow_unions_keys_and_filters_rows() -> None:
    """LTSV input should union labels and support valid-only output."""
    full_stream, full_result = process_path(fixture_path("events.ltsv"), Event, config=SiftConfig())
    valid_stream, valid_result = process_path(
        fixture_path("events.ltsv"),
        Event,
        valid_rows_only=True,
        config=SiftConfig(),
    )

    assert full_stream.read_text() == (
        "host:web-01\tport:8080\tregion:\n"
        "host:db-01\tport:99999\tregion:EU\n"
        "host:\tport:\tregion:US\n"
    )
    assert [(error.row, error.tag) for error in full_result.errors] == [
        (2, "type_conversion"),
        (3, "required"),
        (3, "required"),
    ]
    assert valid_stream.read_text() == "host:web-01\tport:8080\tregion:\n"
    assert valid_result.records == (Event("web-01", 8080, ""),)
    assert valid_result.row_count == full_result.row_count == 3


@pytest.mark.parametrize(
    ("suffix", "compress"),
    [
        ("", lambda data: data),
        (".gz", gzip.compress),
        (".bz2", bz2.compress),
        (".xz", lzma.compress),
        (".z", zlib.compress),
    ],
)
def test_jsonl_flow_across_stdlib_codecs(tmp_path: Path, suffix: str, compress) -> None:
    """Compressed JSONL should decode and emit compact JSON lines."""
    input_path = tmp_path / f"payloads.jsonl{suffix}"
    input_path.write_bytes(compress(fixture_bytes("payloads.jsonl")))

    stream, result = process_path(input_path, JSON_SPECS, config=SiftConfig())

    assert stream.read_text() == EXPECTED_JSONL
    assert result.row_count == 3
    assert result.errors == ()


@pytest.mark.parametrize(("suffix", "module_name"), [(".zst", "zstd"), (".snappy", "snappy"), (".lz4", "lz4")])
def test_jsonl_flow_across_cramjam_codecs(tmp_path: Path, suffix: str, module_name: str) -> None:
    """Framed cramjam codecs should decode transparently."""
    input_path = tmp_path / f"payloads.jsonl{suffix}"
    payload = fixture_bytes("payloads.jsonl")
    input_path.write_bytes(bytes(getattr(cramjam, module_name).compress(payload)))

    stream, _ = process_path(input_path, JSON_SPECS, config=SiftConfig())

    assert stream.read_text() == EXPECTED_JSONL


def test_json_flow_fails_when_truncation_breaks_structure(tmp_path: Path) -> None:
    """Truncating JSON cells into invalid JSON should fail the whole call."""
    input_path = tmp_path / "payloads.json"
    input_path.write_text('[{"id": 1, "name": "ada"}]', encoding="utf-8")
    specs = (FieldSpec(identifier="Data", prep="truncate=5"),)

    with pytest.raises(SiftInvalidJSONError, match="Row 1"):
        process_path(input_path, specs, config=SiftConfig())


def test_parquet_flow_emits_csv(tmp_path: Path) -> None:
    """Parquet input should be emitted as CSV."""
    input_path = tmp_path / "events.parquet"
    parquet.write_table(
        pyarrow.table({"host": ["web-01", "db-01"], "port": [80, 70000], "region": ["eu", None]}),
        str(input_path),
    )

    stream, result = process_path(input_path, Event, config=SiftConfig())

    assert stream.read_text() == "host,port,region\nweb-01,80,EU\ndb-01,70000,\n"
    assert [(error.row, error.tag) for error in result.errors] == [(2, "type_conversion")]


def test_xlsx_flow_emits_csv(tmp_path: Path) -> None:
    """XLSX input should read the first sheet and emit CSV."""
    workbook = openpyxl.Workbook()
    worksheet = workbook.active
    worksheet.append(["host", "port"])
    worksheet.append(["web-01", 443])
    buffer = io.BytesIO()
    workbook.save(buffer)
    input_path = tmp_path / "events.xlsx.gz"
    input_path.write_bytes(gzip.compress(buffer.getvalue()))

    stream, result = process_path(input_path, Event, config=SiftConfig())

    assert stream.read_text() == "host,port\nweb-01,443\n"
    assert result.records == (Event("web-01", 443, ""),)
