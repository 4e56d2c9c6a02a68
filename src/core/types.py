"""Shared typed models.

This module defines immutable data models used by the schema, ingest,
transform, and emit layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Literal, Union

from core.errors import SiftUnsupportedFileTypeError

SemanticKind = Literal["string", "int", "uint", "float", "bool", "unsupported"]


class BaseFormat(str, Enum):
    """Uncompressed table formats."""

    CSV = "csv"
    TSV = "tsv"
    LTSV = "ltsv"
    JSON = "json"
    JSONL = "jsonl"
    PARQUET = "parquet"
    XLSX = "xlsx"


class Compression(str, Enum):
    """Compression codecs that may wrap a base format."""

    NONE = "none"
    GZIP = "gzip"
    BZIP2 = "bzip2"
    XZ = "xz"
    ZSTD = "zstd"
    ZLIB = "zlib"
    SNAPPY = "snappy"
    S2 = "s2"
    LZ4 = "lz4"


_COMPRESSION_SUFFIXES = {
    Compression.NONE: "",
    Compression.GZIP: ".gz",
    Compression.BZIP2: ".bz2",
    Compression.XZ: ".xz",
    Compression.ZSTD: ".zst",
    Compression.ZLIB: ".z",
    Compression.SNAPPY: ".snappy",
    Compression.S2: ".s2",
    Compression.LZ4: ".lz4",
}


@dataclass(frozen=True)
class FileType:
    """Declared input type: a base format plus optional compression.

    Attributes:
        base_format: Table format of the decompressed bytes.
        compression: Codec wrapping the raw bytes.
    """

    base_format: BaseFormat
    compression: Compression = Compression.NONE

    @classmethod
    def parse(cls, declared: str) -> "FileType":
        """Parse a declaration such as ``csv``, ``csv.gz`` or ``jsonl+zstd``.

        Args:
            declared: Base format name, optionally followed by a codec
                suffix or codec name.

        Returns:
            Parsed file type.

        Raises:
            SiftUnsupportedFileTypeError: If format or codec is unknown.
        """
        normalized = declared.strip().lower().lstrip(".")
        base_name, _, codec_name = normalized.replace("+", ".").partition(".")
        try:
            base_format = BaseFormat(base_name)
        except ValueError as error:
            raise SiftUnsupportedFileTypeError(
                f"Unsupported file type '{declared}'. "
                f"Choose one of: {', '.join(item.value for item in BaseFormat)}."
            ) from error
        return cls(base_format=base_format, compression=_parse_compression(declared, codec_name))

    @property
    def is_compressed(self) -> bool:
        """Return whether the input bytes are wrapped by a codec."""
        return self.compression is not Compression.NONE

    @property
    def extension(self) -> str:
        """Return the stacked file extension, e.g. ``.csv.gz``."""
        return f".{self.base_format.value}{_COMPRESSION_SUFFIXES[self.compression]}"

    def __str__(self) -> str:
        label = self.base_format.value.upper()
        if self.base_format is BaseFormat.PARQUET:
            label = "Parquet"
        if self.is_compressed:
            return f"{label} ({self.compression.value})"
        return label


def _parse_compression(declared: str, codec_name: str) -> Compression:
    """Resolve a codec token from either its suffix or its name."""
    if not codec_name:
        return Compression.NONE
    for compression, suffix in _COMPRESSION_SUFFIXES.items():
        if codec_name in (compression.value, suffix.lstrip(".")) and compression is not Compression.NONE:
            return compression
    raise SiftUnsupportedFileTypeError(
        f"Unsupported compression in file type '{declared}'. "
        f"Choose one of: {', '.join(item.value for item in Compression)}."
    )


@dataclass(frozen=True)
class SemanticType:
    """Target type a preprocessed cell is coerced into.

    Attributes:
        kind: Value family.
        bits: Width for numeric kinds; 0 for string/bool/unsupported.
    """

    kind: SemanticKind
    bits: int = 0

    def __str__(self) -> str:
        if self.kind in ("int", "uint", "float"):
            return f"{self.kind}{self.bits}"
        return self.kind


STRING_TYPE = SemanticType("string")
BOOL_TYPE = SemanticType("bool")
UNSUPPORTED_TYPE = SemanticType("unsupported")

Int8 = Annotated[int, SemanticType("int", 8)]
Int16 = Annotated[int, SemanticType("int", 16)]
Int32 = Annotated[int, SemanticType("int", 32)]
Int64 = Annotated[int, SemanticType("int", 64)]
UInt8 = Annotated[int, SemanticType("uint", 8)]
UInt16 = Annotated[int, SemanticType("uint", 16)]
UInt32 = Annotated[int, SemanticType("uint", 32)]
UInt64 = Annotated[int, SemanticType("uint", 64)]
Float32 = Annotated[float, SemanticType("float", 32)]
Float64 = Annotated[float, SemanticType("float", 64)]

SEMANTIC_TYPE_NAMES: dict[str, SemanticType] = {
    "string": STRING_TYPE,
    "str": STRING_TYPE,
    "bool": BOOL_TYPE,
    "int": SemanticType("int", 64),
    "int8": SemanticType("int", 8),
    "int16": SemanticType("int", 16),
    "int32": SemanticType("int", 32),
    "int64": SemanticType("int", 64),
    "uint": SemanticType("uint", 64),
    "uint8": SemanticType("uint", 8),
    "uint16": SemanticType("uint", 16),
    "uint32": SemanticType("uint", 32),
    "uint64": SemanticType("uint", 64),
    "float": SemanticType("float", 64),
    "float32": SemanticType("float", 32),
    "float64": SemanticType("float", 64),
}


@dataclass(frozen=True)
class FieldSpec:
    """Explicit field descriptor for schemas built without a dataclass.

    Attributes:
        identifier: Field identifier used in messages and cross-field tags.
        semantic_type: Type name from ``SEMANTIC_TYPE_NAMES``.
        column: Optional explicit column name; derived when omitted.
        prep: Comma-separated preprocessor tags.
        validate: Comma-separated validator tags.
    """

    identifier: str
    semantic_type: str = "string"
    column: str | None = None
    prep: str = ""
    validate: str = ""


@dataclass(frozen=True)
class ParsedTable:
    """Parser output shared by every format.

    Attributes:
        headers: Ordered column names; duplicates allowed.
        rows: Ordered rows, each holding exactly ``len(headers)`` cells.
    """

    headers: tuple[str, ...]
    rows: list[list[str]]


@dataclass(frozen=True)
class PrepError:
    """Recoverable preprocessing or type conversion failure for one cell.

    Attributes:
        row: One-based data row number (header excluded).
        column: Bound column name.
        field: Field identifier.
        tag: Rule tag that failed, e.g. ``type_conversion``.
        message: Human-readable description.
    """

    row: int
    column: str
    field: str
    tag: str
    message: str

    def __str__(self) -> str:
        return (
            f"row {self.row}, column {self.column!r} (field {self.field}): "
            f"prep error - {self.message} (tag={self.tag})"
        )


@dataclass(frozen=True)
class ValidationError:
    """Validation rule failure for one cell.

    Attributes:
        row: One-based data row number (header excluded).
        column: Bound column name.
        field: Field identifier.
        value: Value the rule was evaluated against.
        tag: Validator tag that failed.
        message: Human-readable description.
        target_field: Referenced field for cross-field rules.
    """

    row: int
    column: str
    field: str
    value: str
    tag: str
    message: str
    target_field: str | None = None

    def __str__(self) -> str:
        return (
            f"row {self.row}, column {self.column!r} (field {self.field}): "
            f"{self.message} (value={self.value!r}, tag={self.tag})"
        )


RowError = Union[PrepError, ValidationError]


@dataclass(frozen=True)
class ProcessingResult:
    """Summary of one processing call.

    Attributes:
        row_count: Number of parsed data rows.
        valid_row_count: Rows that produced zero errors.
        errors: Ordered row errors (row-major, then field order).
        columns: Header list present in the source.
        output_format: Format of the emitted stream.
        original_format: Declared input type including compression.
        records: Materialized records (valid rows only when filtering).
    """

    row_count: int
    valid_row_count: int
    errors: tuple[RowError, ...]
    columns: tuple[str, ...]
    output_format: FileType
    original_format: FileType
    records: tuple[Any, ...] = field(default_factory=tuple)

    @property
    def invalid_row_count(self) -> int:
        """Count rows with at least one error."""
        return self.row_count - self.valid_row_count

    @property
    def has_errors(self) -> bool:
        """Return whether any row error was recorded."""
        return bool(self.errors)

    def validation_errors(self) -> list[ValidationError]:
        """Return validation errors only, in recorded order."""
        return [error for error in self.errors if isinstance(error, ValidationError)]

    def prep_errors(self) -> list[PrepError]:
        """Return preprocessing errors only, in recorded order."""
        return [error for error in self.errors if isinstance(error, PrepError)]
