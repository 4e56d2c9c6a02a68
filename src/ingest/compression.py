"""Compression codec adapter.

Wraps a raw byte source with the decompressor matching its codec. The
stdlib covers gzip, bzip2, xz and zlib; zstd, snappy, s2 and lz4 come
from cramjam, imported only when such input is read.
"""

from __future__ import annotations

import bz2
from contextlib import contextmanager
import gzip
import io
import lzma
from typing import Any, BinaryIO, Iterator
import zlib

from core.errors import SiftCompressionError, SiftDependencyError
from core.types import Compression

_CRAMJAM_MODULES = {
    Compression.ZSTD: "zstd",
    Compression.SNAPPY: "snappy",
    Compression.S2: "snappy",
    Compression.LZ4: "lz4",
}


@contextmanager
def open_decompressed(source: BinaryIO, compression: Compression) -> Iterator[BinaryIO]:
    """Open a decompressing reader over a byte source.

    The yielded reader is closed on exit; the source itself is left open.

    Args:
        source: Readable binary stream of raw (compressed) bytes.
        compression: Codec wrapping the bytes.

    Yields:
        Readable binary stream of decompressed bytes.

    Raises:
        SiftCompressionError: If the codec rejects the input.
        SiftDependencyError: If cramjam is needed but not installed.
    """
    reader = _open_reader(source, compression)
    try:
        yield reader
    finally:
        if reader is not source:
            reader.close()


def read_decompressed(source: BinaryIO, compression: Compression) -> bytes:
    """Read and decompress an entire byte source.

    Args:
        source: Readable binary stream of raw bytes.
        compression: Codec wrapping the bytes.

    Returns:
        Decompressed bytes.

    Raises:
        SiftCompressionError: If the input is corrupt or truncated.
    """
    with open_decompressed(source, compression) as reader:
        try:
            return reader.read()
        except (OSError, EOFError, lzma.LZMAError, zlib.error) as error:
            raise SiftCompressionError(
                f"Failed to decompress {compression.value} input: {error}. "
                "Check that the file extension matches its codec and the file is complete."
            ) from error


def _open_reader(source: BinaryIO, compression: Compression) -> BinaryIO:
    if compression is Compression.NONE:
        return source
    if compression is Compression.GZIP:
        return gzip.GzipFile(fileobj=source, mode="rb")  # type: ignore[return-value]
    if compression is Compression.BZIP2:
        return bz2.BZ2File(source, mode="rb")  # type: ignore[return-value]
    if compression is Compression.XZ:
        return lzma.LZMAFile(source, mode="rb")  # type: ignore[return-value]
    if compression is Compression.ZLIB:
        try:
            return io.BytesIO(zlib.decompress(source.read()))
        except zlib.error as error:
            raise SiftCompressionError(
                f"Failed to decompress zlib input: {error}. "
                "Check that the file extension matches its codec and the file is complete."
            ) from error
    return io.BytesIO(_decompress_with_cramjam(source.read(), compression))


def _decompress_with_cramjam(payload: bytes, compression: Compression) -> bytes:
    """Decompress framed zstd, snappy, s2 or lz4 payloads.

    S2 input is decoded with the snappy framing reader, which accepts S2
    streams written in snappy-compatible mode.

    Args:
        payload: Compressed bytes.
        compression: Codec wrapping the bytes.

    Returns:
        Decompressed bytes.

    Raises:
        SiftDependencyError: If cramjam is not installed.
        SiftCompressionError: If the payload cannot be decoded.
    """
    cramjam = _import_cramjam(compression)
    codec: Any = getattr(cramjam, _CRAMJAM_MODULES[compression])
    try:
        return bytes(codec.decompress(payload))
    except cramjam.DecompressionError as error:
        hint = "Check that the file extension matches its codec and the file is complete."
        if compression is Compression.S2:
            hint = "Only snappy-compatible S2 streams can be decoded; re-encode with snappy compatibility."
        raise SiftCompressionError(f"Failed to decompress {compression.value} input: {error}. {hint}") from error


def _import_cramjam(compression: Compression) -> Any:
    try:
        import cramjam
    except ImportError as error:
        raise SiftDependencyError(
            f"{compression.value} input requires cramjam, but it is not installed. "
            "Install with 'pip install cramjam'."
        ) from error
    return cramjam
