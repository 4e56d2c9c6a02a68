"""Unit tests for default column name derivation."""

from __future__ import annotations

import pytest

from schema.field_names import to_snake_case


@pytest.mark.parametrize(
    ("identifier", "expected"),
    [
        ("Name", "name"),
        ("UserName", "user_name"),
        ("HTTPServer", "http_server"),
        ("ID", "id"),
        ("OrderID", "order_id"),
        ("already_snake", "already_snake"),
        ("zip_code", "zip_code"),
    ],
)
def test_to_snake_case(identifier: str, expected: str) -> None:
    """Identifiers should map to snake_case column names."""
    assert to_snake_case(identifier) == expected
