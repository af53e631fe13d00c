"""Compression codecs for files stored on disk."""

from __future__ import annotations

import gzip
import zlib
from typing import Protocol

from yamldb.config import Compression


class Codec(Protocol):
    def compress(self, data: bytes) -> bytes: ...

    def decompress(self, data: bytes) -> bytes: ...


class ZlibCodec:
    def __init__(self, level: int = zlib.Z_DEFAULT_COMPRESSION) -> None:
        self.level = level

    def compress(self, data: bytes) -> bytes:
        return zlib.compress(data, self.level)

    def decompress(self, data: bytes) -> bytes:
        return zlib.decompress(data)


class GzipCodec:
    def __init__(self, level: int = 9) -> None:
        self.level = level

    def compress(self, data: bytes) -> bytes:
        # mtime=0 keeps identical payloads byte-identical on disk
        return gzip.compress(data, compresslevel=self.level, mtime=0)

    def decompress(self, data: bytes) -> bytes:
        return gzip.decompress(data)


def get_codec(compression: Compression) -> Codec | None:
    """Return the codec for a compression method, or None for plain files."""
    if compression == Compression.ZLIB:
        return ZlibCodec()
    if compression == Compression.GZIP:
        return GzipCodec()
    return None
