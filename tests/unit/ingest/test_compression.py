"""Unit tests for the compression codec adapter."""

from __future__ import annotations

import bz2
import gzip
import io
import lzma
import zlib
from typing import Callable

import cramjam
import pytest

from core.errors import SiftCompressionError
from core.types import Compression
from ingest.compression import open_decompressed, read_decompressed

PAYLOAD = b"name,age\nada,36\n"


@pytest.mark.parametrize(
    ("compression", "compress"),
    [
        (Compression.NONE, lambda data: data),
        (Compression.GZIP, gzip.compress),
        (Compression.BZIP2, bz2.compress),
        (Compression.XZ, lzma.compress),
        (Compression.ZLIB, zlib.compress),
    ],
)
def test_read_decompressed_handles_stdlib_codecs(
    compression: Compression,
    compress: Callable[[bytes], bytes],
) -> None:
    """Stdlib codecs should round-trip payload bytes."""
    source = io.BytesIO(compress(PAYLOAD))

    assert read_decompressed(source, compression) == PAYLOAD


@pytest.mark.parametrize(
    ("compression", "module_name"),
    [
        (Compression.ZSTD, "zstd"),
        (Compression.SNAPPY, "snappy"),
        (Compression.S2, "snappy"),
        (Compression.LZ4, "lz4"),
    ],
)
def test_read_decompressed_handles_cramjam_codecs(compression: Compression, module_name: str) -> None:
    """Framed cramjam codecs should round-trip payload bytes."""
    compressed = bytes(getattr(cramjam, module_name).compress(PAYLOAD))

    assert read_decompressed(io.BytesIO(compressed), compression) == PAYLOAD


@pytest.mark.parametrize(
    "compression",
    [Compression.GZIP, Compression.BZIP2, Compression.XZ, Compression.ZLIB],
)
def test_read_decompressed_raises_for_corrupt_input(compression: Compression) -> None:
    """Corrupt stdlib-compressed input should raise a compression error."""
    with pytest.raises(SiftCompressionError, match=compression.value):
        read_decompressed(io.BytesIO(b"definitely not compressed"), compression)


def test_read_decompressed_raises_for_corrupt_zstd() -> None:
    """Corrupt cramjam input should raise a compression error."""
    with pytest.raises(SiftCompressionError, match="zstd"):
        read_decompressed(io.BytesIO(b"definitely not compressed"), Compression.ZSTD)


def test_read_decompressed_raises_for_truncated_gzip() -> None:
    """Truncated streams should fail rather than return partial data."""
    truncated = gzip.compress(PAYLOAD * 50)[:-12]

    with pytest.raises(SiftCompressionError):
        read_decompressed(io.BytesIO(truncated), Compression.GZIP)


def test_open_decompressed_leaves_source_open() -> None:
    """The wrapper should be closed on exit but the source left open."""
    source = io.BytesIO(gzip.compress(PAYLOAD))

    with open_decompressed(source, Compression.GZIP) as reader:
        data = reader.read()

    assert data == PAYLOAD
    assert reader.closed is True
    assert source.closed is False
