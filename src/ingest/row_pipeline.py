"""Per-row preprocess, coerce, and validate pipeline.

Rows are processed in order. For each field the preprocessed value is
written back into the row so the emitter sees it; cross-field rules run
after every field of the row is done and read those written-back cells.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from core.constants import EMPTY_JSON_DATA_TAG, JSON_DATA_COLUMN, TYPE_CONVERSION_TAG
from core.errors import SiftInvalidJSONError
from core.json_text import is_valid_json
from core.types import ParsedTable, PrepError, RowError, ValidationError
from ingest.column_binding import ColumnIndex
from schema.compiler import FieldRule, RecordSchema
from transforms.coercion import coerce_value, restringify
from transforms.cross_field import check_cross_field
from transforms.preprocessors import apply_preprocessors
from transforms.validators import check_value


@dataclass
class PipelineOutput:
    """Accumulated outcome of running every row.

    Attributes:
        errors: Row errors in row-major, then field order.
        row_validity: One flag per row, True when the row has no errors.
        records: One materialized record per row.
    """

    errors: list[RowError] = field(default_factory=list)
    row_validity: list[bool] = field(default_factory=list)
    records: list[Any] = field(default_factory=list)

    @property
    def valid_row_count(self) -> int:
        """Count rows without errors."""
        return sum(self.row_validity)


def run_rows(
    table: ParsedTable,
    schema: RecordSchema,
    column_index: ColumnIndex,
    json_mode: bool,
    preview_length: int,
) -> PipelineOutput:
    """Run the pipeline over every row of a parsed table.

    Rows are modified in place with preprocessed values.

    Args:
        table: Parsed input table.
        schema: Compiled record schema.
        column_index: Header position per schema field.
        json_mode: Enforce the JSON structure check on the ``data`` column.
        preview_length: Max characters of a value quoted in messages.

    Returns:
        Accumulated errors, validity flags, and records.

    Raises:
        SiftInvalidJSONError: If preprocessing leaves a JSON cell invalid.
    """
    output = PipelineOutput()
    for row_offset, row in enumerate(table.rows):
        row_number = row_offset + 1
        row_errors: list[RowError] = []
        values: dict[str, Any] = {}
        for field_rule, position in zip(schema.fields, column_index):
            values[field_rule.identifier] = _process_field(
                row, row_number, field_rule, position, json_mode, preview_length, row_errors
            )
        row_errors.extend(_check_cross_fields(row, row_number, schema, column_index))
        output.errors.extend(row_errors)
        output.row_validity.append(not row_errors)
        output.records.append(schema.record_factory(values))
    return output


def _process_field(
    row: list[str],
    row_number: int,
    field_rule: FieldRule,
    position: int | None,
    json_mode: bool,
    preview_length: int,
    row_errors: list[RowError],
) -> Any:
    """Preprocess, coerce, and validate one cell.

    Args:
        row: Row cells, updated in place.
        row_number: One-based row number.
        field_rule: Compiled rules for the field.
        position: Bound header position, or None.
        json_mode: Whether the JSON structure check applies.
        preview_length: Max characters of a value quoted in messages.
        row_errors: Error list for the current row, appended to.

    Returns:
        Coerced field value.

    Raises:
        SiftInvalidJSONError: If preprocessing leaves a JSON cell invalid.
    """
    raw_value = row[position] if position is not None else ""
    processed = apply_preprocessors(field_rule.preprocessors, raw_value)
    if position is not None:
        row[position] = processed
        if json_mode and field_rule.column == JSON_DATA_COLUMN:
            _check_json_cell(raw_value, processed, row_number, field_rule, preview_length, row_errors)

    coercion = coerce_value(processed, field_rule.semantic_type)
    checked_value = processed
    if coercion.error is not None:
        row_errors.append(
            PrepError(
                row=row_number,
                column=field_rule.column,
                field=field_rule.identifier,
                tag=TYPE_CONVERSION_TAG,
                message=(
                    f"failed to convert value {_preview(processed, preview_length)!r} "
                    f"to {field_rule.semantic_type}: {coercion.error}"
                ),
            )
        )
    elif processed != "":
        checked_value = restringify(coercion.value, field_rule.semantic_type)

    for validator in field_rule.validators:
        message = check_value(validator, checked_value)
        if message is not None:
            row_errors.append(
                ValidationError(
                    row=row_number,
                    column=field_rule.column,
                    field=field_rule.identifier,
                    value=checked_value,
                    tag=validator.tag,
                    message=message,
                )
            )
    return coercion.value


def _check_json_cell(
    raw_value: str,
    processed: str,
    row_number: int,
    field_rule: FieldRule,
    preview_length: int,
    row_errors: list[RowError],
) -> None:
    if processed != "" and not is_valid_json(processed):
        raise SiftInvalidJSONError(
            f"Row {row_number}, column {field_rule.column!r}: JSON is invalid after preprocessing: "
            f"{_preview(processed, preview_length)}. Remove prep tags that break JSON structure."
        )
    if raw_value != "" and processed == "":
        row_errors.append(
            PrepError(
                row=row_number,
                column=field_rule.column,
                field=field_rule.identifier,
                tag=EMPTY_JSON_DATA_TAG,
                message=(
                    "JSON data is empty after preprocessing "
                    f"(original: {_preview(raw_value, preview_length)})"
                ),
            )
        )


def _check_cross_fields(
    row: list[str],
    row_number: int,
    schema: RecordSchema,
    column_index: ColumnIndex,
) -> list[ValidationError]:
    errors: list[ValidationError] = []
    for field_rule, position in zip(schema.fields, column_index):
        if not field_rule.cross_field_rules:
            continue
        source_value = row[position] if position is not None else ""
        for rule in field_rule.cross_field_rules:
            if rule.target_index is None:
                message: str | None = f"target field {rule.target_field} not found"
            else:
                target_position = column_index[rule.target_index]
                target_value = row[target_position] if target_position is not None else ""
                message = check_cross_field(rule, source_value, target_value)
            if message is not None:
                errors.append(
                    ValidationError(
                        row=row_number,
                        column=field_rule.column,
                        field=field_rule.identifier,
                        value=source_value,
                        tag=rule.tag,
                        message=message,
                        target_field=rule.target_field,
                    )
                )
    return errors


def _preview(value: str, preview_length: int) -> str:
    if len(value) <= preview_length:
        return value
    return value[:preview_length] + "..."
