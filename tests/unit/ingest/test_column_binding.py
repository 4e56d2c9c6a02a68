"""Unit tests for column binding."""

from __future__ import annotations

from core.types import FieldSpec
from ingest.column_binding import bind_columns
from schema.compiler import compile_schema


def test_bind_columns_uses_first_duplicate_header() -> None:
    """Duplicate headers should bind to the leftmost occurrence."""
    schema = compile_schema((FieldSpec(identifier="Name"), FieldSpec(identifier="Age")))

    column_index = bind_columns(("age", "name", "name"), schema)

    assert column_index == (1, 0)


def test_bind_columns_is_case_sensitive_and_marks_missing() -> None:
    """Unmatched or differently cased headers should bind to None."""
    schema = compile_schema((FieldSpec(identifier="Name"), FieldSpec(identifier="Zip", column="ZIP")))

    column_index = bind_columns(("Name", "zip"), schema)

    assert column_index == (None, None)
