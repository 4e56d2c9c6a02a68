"""Processing entry point.

This module coordinates decompression, parsing, column binding, the row
pipeline, and emission for one input. Each call is independent; only the
compiled record schema is shared between calls.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any, BinaryIO

from core.config import SiftConfig
from core.errors import SiftEmptyJSONOutputError
from core.logging_config import get_logger
from core.types import FileType, ProcessingResult
from emit.stream import SiftStream
from emit.table_writer import count_json_rows, write_table
from ingest.column_binding import bind_columns
from ingest.compression import read_decompressed
from ingest.file_types import detect_file_type, is_json_format, output_file_type
from ingest.row_pipeline import run_rows
from ingest.table_parsers import parse_table
from schema.compiler import compile_schema

_LOGGER = get_logger(__name__)


class Processor:
    """Preprocess and validate inputs of one declared file type."""

    def __init__(
        self,
        file_type: FileType | str,
        *,
        strict_tags: bool | None = None,
        valid_rows_only: bool | None = None,
        config: SiftConfig | None = None,
    ) -> None:
        """Create a processor.

        Args:
            file_type: Declared input type, or a declaration such as
                ``"csv.gz"``.
            strict_tags: Override for strict tag parsing.
            valid_rows_only: Override for emitting only error-free rows.
            config: Base configuration; read from the environment when
                omitted.

        Raises:
            SiftUnsupportedFileTypeError: If a declaration string is unknown.
            SiftConfigError: If environment configuration is invalid.
        """
        self._file_type = FileType.parse(file_type) if isinstance(file_type, str) else file_type
        self._config = config or SiftConfig.from_env()
        self._strict_tags = (
            self._config.strict_tag_parsing if strict_tags is None else strict_tags
        )
        self._valid_rows_only = (
            self._config.valid_rows_only if valid_rows_only is None else valid_rows_only
        )

    @property
    def file_type(self) -> FileType:
        """Return the declared input type."""
        return self._file_type

    def process(self, source: bytes | BinaryIO, target: Any) -> tuple[SiftStream, ProcessingResult]:
        """Process one input into an output stream and a result.

        Args:
            source: Raw input bytes, or a readable binary stream.
            target: Dataclass type, or a sequence of ``FieldSpec``.

        Returns:
            Emitted stream and processing result.

        Raises:
            SiftRecordTypeError: If target is not a record type description.
            SiftTagFormatError: In strict mode, for invalid tag tokens.
            SiftCompressionError: If the input cannot be decompressed.
            SiftEmptyInputError: If the input holds no table.
            SiftParseError: If the input is malformed.
            SiftInvalidJSONError: If preprocessing breaks a JSON cell.
            SiftEmptyJSONOutputError: If no JSON row is left to emit.
        """
        schema = compile_schema(target, strict=self._strict_tags)
        reader = io.BytesIO(source) if isinstance(source, (bytes, bytearray)) else source
        data = read_decompressed(reader, self._file_type.compression)
        table = parse_table(data, self._file_type.base_format)
        column_index = bind_columns(table.headers, schema)
        json_mode = is_json_format(self._file_type)
        output = run_rows(
            table,
            schema,
            column_index,
            json_mode=json_mode,
            preview_length=self._config.error_preview_length,
        )
        emitted_rows = table.rows
        records = output.records
        if self._valid_rows_only:
            emitted_rows = [row for row, valid in zip(table.rows, output.row_validity) if valid]
            records = [record for record, valid in zip(output.records, output.row_validity) if valid]
        if json_mode and count_json_rows(table.headers, emitted_rows) == 0:
            raise SiftEmptyJSONOutputError(
                f"No JSON rows left to emit out of {len(table.rows)}; every row is empty after "
                "preprocessing or was filtered as invalid. Check prep tags on the data field."
            )
        output_type = output_file_type(self._file_type)
        payload = write_table(table.headers, emitted_rows, output_type.base_format)
        result = ProcessingResult(
            row_count=len(table.rows),
            valid_row_count=output.valid_row_count,
            errors=tuple(output.errors),
            columns=table.headers,
            output_format=output_type,
            original_format=self._file_type,
            records=tuple(records),
        )
        _LOGGER.info(
            "process_completed",
            record_type=schema.type_name,
            input_format=str(self._file_type),
            output_format=str(output_type),
            row_count=result.row_count,
            valid_row_count=result.valid_row_count,
            error_count=len(result.errors),
            emitted_row_count=len(emitted_rows),
        )
        return SiftStream(payload, output_type, self._file_type), result


def process_path(
    path: str | Path,
    target: Any,
    *,
    file_type: FileType | str | None = None,
    strict_tags: bool | None = None,
    valid_rows_only: bool | None = None,
    config: SiftConfig | None = None,
) -> tuple[SiftStream, ProcessingResult]:
    """Process a file, detecting its type from the path.

    Args:
        path: Input file path.
        target: Dataclass type, or a sequence of ``FieldSpec``.
        file_type: Declared type overriding extension detection.
        strict_tags: Override for strict tag parsing.
        valid_rows_only: Override for emitting only error-free rows.
        config: Base configuration.

    Returns:
        Emitted stream and processing result.

    Raises:
        SiftUnsupportedFileTypeError: If the extension is unknown.
        SiftError: For any processing failure; see ``Processor.process``.
        OSError: If the file cannot be opened.
    """
    input_path = Path(path).expanduser()
    processor = Processor(
        file_type if file_type is not None else detect_file_type(input_path),
        strict_tags=strict_tags,
        valid_rows_only=valid_rows_only,
        config=config,
    )
    with input_path.open("rb") as handle:
        return processor.process(handle, target)
