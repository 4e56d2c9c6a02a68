"""Unit tests for YAML schema definition files."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from core.errors import SiftSchemaFileError
from core.types import FieldSpec
from schema.schema_file import load_schema_file
from tests.fixture_paths import fixture_path


def test_load_schema_file_reads_fixture() -> None:
    """Loader should return field specs in file order."""
    specs = load_schema_file(str(fixture_path("schemas/orders.yaml")))

    assert specs[0] == FieldSpec(
        identifier="OrderID",
        semantic_type="int64",
        column="order_id",
        prep="trim",
        validate="required",
    )
    assert [spec.identifier for spec in specs] == ["OrderID", "Customer", "Quantity", "Email"]
    assert specs[2].semantic_type == "uint8"


def test_load_schema_file_raises_for_missing_file(tmp_path: Path) -> None:
    """Loader should fail for missing files."""
    with pytest.raises(SiftSchemaFileError, match="does not exist"):
        load_schema_file(str(tmp_path / "missing.yaml"))


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("", "is empty"),
        ("version: 2\nfields:\n  - field: A\n", "Unsupported schema version"),
        ("version: 1\nfields: []\n", "at least one field"),
        ("version: 1\nfields:\n  - field: A\n    type: decimal\n", "Unsupported type"),
        ("version: 1\nfields:\n  - field: A\n    color: red\n", "unknown fields color"),
        ("version: 1\nfields:\n  - field: A\n  - field: A\n", "more than once"),
        ("version: 1\nfields:\n  - type: int\n", "non-empty string"),
        ("version: [1\n", "Failed to parse YAML"),
    ],
)
def test_load_schema_file_rejects_invalid_content(tmp_path: Path, content: str, message: str) -> None:
    """Loader should explain invalid schema files."""
    schema_file = tmp_path / "schema.yaml"
    schema_file.write_text(content, encoding="utf-8")

    with pytest.raises(SiftSchemaFileError, match=message):
        load_schema_file(str(schema_file))


def test_load_schema_file_reads_dumped_document(tmp_path: Path) -> None:
    """Loader should accept documents produced by a YAML serializer."""
    schema_file = tmp_path / "schema.yaml"
    document = {
        "version": 1,
        "fields": [{"field": "Score", "type": "float32", "column": "score", "validate": "min=0"}],
    }
    schema_file.write_text(yaml.safe_dump(document), encoding="utf-8")

    specs = load_schema_file(str(schema_file))

    assert specs == (
        FieldSpec(identifier="Score", semantic_type="float32", column="score", validate="min=0"),
    )
