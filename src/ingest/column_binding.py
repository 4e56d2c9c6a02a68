"""Column binding between schema fields and parsed headers."""

from __future__ import annotations

from typing import Optional, Sequence

from schema.compiler import RecordSchema

ColumnIndex = tuple[Optional[int], ...]


def bind_columns(headers: Sequence[str], schema: RecordSchema) -> ColumnIndex:
    """Resolve each field's column name to a header position.

    Matching is exact and case-sensitive. When a header name repeats, the
    leftmost occurrence wins. Unmatched fields map to None and read as
    empty strings on every row.

    Args:
        headers: Parsed header names in source order.
        schema: Compiled record schema.

    Returns:
        One position (or None) per schema field, in field order.
    """
    first_positions: dict[str, int] = {}
    for position, header in enumerate(headers):
        first_positions.setdefault(header, position)
    return tuple(first_positions.get(field_rule.column) for field_rule in schema.fields)
