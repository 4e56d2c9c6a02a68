"""Public SDK surface for Sift.

This module provides a stable import path for library users.
It re-exports the processor, field type markers, and typed result models.
"""

from __future__ import annotations

from core.config import SiftConfig
from core.errors import (
    SiftCompressionError,
    SiftConfigError,
    SiftDependencyError,
    SiftEmptyInputError,
    SiftEmptyJSONOutputError,
    SiftError,
    SiftInvalidJSONError,
    SiftParseError,
    SiftRecordTypeError,
    SiftSchemaFileError,
    SiftTagFormatError,
    SiftUnsupportedFileTypeError,
)
from core.types import (
    BaseFormat,
    Compression,
    FieldSpec,
    FileType,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    PrepError,
    ProcessingResult,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    ValidationError,
)
from emit.stream import SiftStream
from ingest.file_types import detect_file_type
from ingest.processor import Processor, process_path
from schema.compiler import clear_schema_cache, compile_schema
from schema.schema_file import load_schema_file

__all__ = [
    "BaseFormat",
    "Compression",
    "FieldSpec",
    "FileType",
    "Float32",
    "Float64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "PrepError",
    "ProcessingResult",
    "Processor",
    "SiftCompressionError",
    "SiftConfig",
    "SiftConfigError",
    "SiftDependencyError",
    "SiftEmptyInputError",
    "SiftEmptyJSONOutputError",
    "SiftError",
    "SiftInvalidJSONError",
    "SiftParseError",
    "SiftRecordTypeError",
    "SiftSchemaFileError",
    "SiftStream",
    "SiftTagFormatError",
    "SiftUnsupportedFileTypeError",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "ValidationError",
    "clear_schema_cache",
    "compile_schema",
    "detect_file_type",
    "load_schema_file",
    "process_path",
]
