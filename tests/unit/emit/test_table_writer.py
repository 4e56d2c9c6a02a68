"""Unit tests for output serialization."""

from __future__ import annotations

import pytest

from core.types import BaseFormat
from emit.table_writer import count_json_rows, write_table


def test_write_table_csv_uses_minimal_quoting() -> None:
    """CSV output should quote only cells that need it."""
    payload = write_table(("name", "note"), [["ada", "a, b"], ["bob", 'say "hi"']], BaseFormat.CSV)

    assert payload == b'name,note\nada,"a, b"\nbob,"say ""hi"""\n'


def test_write_table_tsv_uses_tabs() -> None:
    """TSV output should separate cells with tabs."""
    payload = write_table(("a", "b"), [["1", "x,y"]], BaseFormat.TSV)

    assert payload == b"a\tb\n1\tx,y\n"


def test_write_table_ltsv_writes_full_key_set() -> None:
    """LTSV output should include every label on every row."""
    payload = write_table(("a", "b"), [["1", ""], ["", "2"]], BaseFormat.LTSV)

    assert payload == b"a:1\tb:\na:\tb:2\n"


def test_write_table_jsonl_skips_empty_rows() -> None:
    """JSONL output should compact values and skip empty cells."""
    payload = write_table(("data",), [['{ "a" : [1, 2] }'], [""], ['"x  y"']], BaseFormat.JSONL)

    assert payload == b'{"a":[1,2]}\n"x  y"\n'


def test_write_table_rejects_input_only_formats() -> None:
    """Formats that are never emitted should have no writer."""
    with pytest.raises(ValueError, match="parquet"):
        write_table(("a",), [], BaseFormat.PARQUET)


def test_count_json_rows() -> None:
    """Counting should ignore empty data cells."""
    assert count_json_rows(("data",), [["1"], [""], ["{}"]]) == 2
    assert count_json_rows(("other",), [["1"]]) == 0
