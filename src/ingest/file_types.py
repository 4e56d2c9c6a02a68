"""File type detection from paths.

Extensions stack: a base format suffix optionally followed by one
compression suffix, e.g. ``orders.csv.gz``. Matching is case-insensitive.
"""

from __future__ import annotations

from pathlib import Path

from core.constants import BASE_FORMAT_EXTENSIONS, COMPRESSION_EXTENSIONS
from core.errors import SiftUnsupportedFileTypeError
from core.types import BaseFormat, Compression, FileType

_PASSTHROUGH_FORMATS = (BaseFormat.CSV, BaseFormat.TSV, BaseFormat.LTSV)
_JSON_FORMATS = (BaseFormat.JSON, BaseFormat.JSONL)


def detect_file_type(path: str | Path) -> FileType:
    """Detect the file type of a path from its stacked extension.

    Args:
        path: File path or file name.

    Returns:
        Detected base format and compression.

    Raises:
        SiftUnsupportedFileTypeError: If no supported extension matches.
    """
    file_name = Path(path).name.lower()
    compression = Compression.NONE
    for extension, codec_name in COMPRESSION_EXTENSIONS.items():
        if file_name.endswith(extension):
            compression = Compression(codec_name)
            file_name = file_name[: -len(extension)]
            break
    for extension, format_name in BASE_FORMAT_EXTENSIONS.items():
        if file_name.endswith(extension):
            return FileType(base_format=BaseFormat(format_name), compression=compression)
    supported_rows = ", ".join(BASE_FORMAT_EXTENSIONS)
    raise SiftUnsupportedFileTypeError(
        f"Unsupported file type for {path}: no known extension. "
        f"Use one of {supported_rows}, optionally followed by a compression suffix."
    )


def output_file_type(file_type: FileType) -> FileType:
    """Return the uncompressed format a processed input is emitted as.

    CSV, TSV and LTSV keep their format, JSON and JSONL become JSONL, and
    Parquet and XLSX become CSV.

    Args:
        file_type: Declared input type.

    Returns:
        Output file type, never compressed.
    """
    if file_type.base_format in _PASSTHROUGH_FORMATS:
        return FileType(base_format=file_type.base_format)
    if file_type.base_format in _JSON_FORMATS:
        return FileType(base_format=BaseFormat.JSONL)
    return FileType(base_format=BaseFormat.CSV)


def is_json_format(file_type: FileType) -> bool:
    """Return whether rows of this type hold raw JSON text."""
    return file_type.base_format in _JSON_FORMATS
