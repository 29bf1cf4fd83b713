"""
Whole-stream compressors wrapped around the archive bytes.
"""

import enum
import zlib
from abc import ABC, abstractmethod

import brotli


class Encoding(str, enum.Enum):
    NONE = "none"
    GZIP = "gzip"
    BROTLI = "brotli"


class StreamCompressor(ABC):
    @abstractmethod
    def compress(self, data: bytes) -> bytes:
        raise NotImplementedError

    @abstractmethod
    def flush(self) -> bytes:
        raise NotImplementedError


class IdentityCompressor(StreamCompressor):
    def compress(self, data: bytes) -> bytes:
        return data

    def flush(self) -> bytes:
        return b""


class GzipCompressor(StreamCompressor):
    def __init__(self, level: int = 6):
        # wbits=31 selects the gzip container rather than a raw zlib stream.
        self.compressor = zlib.compressobj(level, zlib.DEFLATED, 31)

    def compress(self, data: bytes) -> bytes:
        return self.compressor.compress(data)

    def flush(self) -> bytes:
        return self.compressor.flush(zlib.Z_FINISH)


class BrotliCompressor(StreamCompressor):
    def __init__(self, quality: int = 11):
        self.compressor = brotli.Compressor(quality=quality)

    def compress(self, data: bytes) -> bytes:
        return self.compressor.process(data)

    def flush(self) -> bytes:
        return self.compressor.finish()


def create_compressor(encoding: Encoding) -> StreamCompressor:
    """
    A fresh compressor for one response stream.
    """
    if encoding == Encoding.GZIP:
        return GzipCompressor()
    elif encoding == Encoding.BROTLI:
        return BrotliCompressor()
    else:
        return IdentityCompressor()
