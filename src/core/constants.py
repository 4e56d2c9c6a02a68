"""Core constants used across Sift modules.

This module centralizes format, codec, and tag grammar constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

JSON_DATA_COLUMN = "data"
EMPTY_JSON_DATA_TAG = "empty_json_data"
TYPE_CONVERSION_TAG = "type_conversion"
DEFAULT_ERROR_PREVIEW_LENGTH = 100
TAG_NAME_KEY = "name"
TAG_PREP_KEY = "prep"
TAG_VALIDATE_KEY = "validate"
TAG_SEPARATOR = ","
TAG_ARGUMENT_SEPARATOR = "="
PAIR_ARGUMENT_SEPARATOR = ":"
CSV_DELIMITER = ","
TSV_DELIMITER = "\t"
LTSV_FIELD_SEPARATOR = "\t"
LTSV_LABEL_SEPARATOR = ":"
OUTPUT_LINE_TERMINATOR = "\n"
TEXT_ENCODING = "utf-8"
BASE_FORMAT_EXTENSIONS = {
    ".csv": "csv",
    ".tsv": "tsv",
    ".ltsv": "ltsv",
    ".json": "json",
    ".jsonl": "jsonl",
    ".parquet": "parquet",
    ".xlsx": "xlsx",
}
COMPRESSION_EXTENSIONS = {
    ".gz": "gzip",
    ".bz2": "bzip2",
    ".xz": "xz",
    ".zst": "zstd",
    ".z": "zlib",
    ".snappy": "snappy",
    ".s2": "s2",
    ".lz4": "lz4",
}
TRUE_BOOL_LITERALS = ("1", "t", "T", "TRUE", "true", "True")
FALSE_BOOL_LITERALS = ("0", "f", "F", "FALSE", "false", "False")
