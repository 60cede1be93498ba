"""
Big-endian primitive reader/writer and compression handling for NBT streams.
"""

import gzip
import io
import struct
import zlib
from typing import BinaryIO, Optional, Union

from .errors import (
    DecompressionError,
    EncodeError,
    InvalidEncoding,
    InvalidLength,
    UnexpectedEndOfStream,
)


GZIP_MAGIC = b"\x1f\x8b"
ZLIB_DEFLATE = 8
READ_CHUNK = 1 << 20

COMPRESSIONS = ("auto", "gzip", "zlib", None)


def detect_compression(head: bytes) -> Optional[str]:
    """Guess the compression from the first two bytes of a file."""
    if head[:2] == GZIP_MAGIC:
        return "gzip"
    if len(head) >= 2 and head[0] & 0x0F == ZLIB_DEFLATE and int.from_bytes(head[:2], "big") % 31 == 0:
        return "zlib"
    return None


def open_stream(source: Union[bytes, bytearray, BinaryIO], compression: Optional[str] = "auto") -> BinaryIO:
    """Wrap ``source`` so reads return decompressed tag bytes."""
    if compression not in COMPRESSIONS:
        raise ValueError(f"Unknown compression: {compression!r}")

    if isinstance(source, (bytes, bytearray)):
        raw = io.BytesIO(source)
    else:
        raw = source

    if compression == "auto":
        if not hasattr(raw, "peek"):
            raw = _Rewindable(raw)
        compression = detect_compression(raw.peek(2)[:2])

    if compression == "gzip":
        return gzip.GzipFile(fileobj=raw, mode="rb")
    if compression == "zlib":
        try:
            return io.BytesIO(zlib.decompress(raw.read()))
        except zlib.error as e:
            raise DecompressionError(f"Corrupt zlib stream: {e}") from e
    return raw


class _Rewindable:
    """Adds peek() to a stream that lacks it by buffering the peeked bytes."""

    def __init__(self, stream: BinaryIO):
        self.stream = stream
        self.buf = b""

    def peek(self, n: int = 1) -> bytes:
        if len(self.buf) < n:
            self.buf += self.stream.read(n - len(self.buf))
        return self.buf

    def read(self, n: int = -1) -> bytes:
        if n is None or n < 0:
            data, self.buf = self.buf + self.stream.read(), b""
            return data
        head, self.buf = self.buf[:n], self.buf[n:]
        if len(head) < n:
            head += self.stream.read(n - len(head))
        return head

    def close(self) -> None:
        # the wrapped stream belongs to the caller
        self.buf = b""


class NBTReader:
    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def read(self, n: int) -> bytes:
        # n comes from untrusted length prefixes; never hand it to read() whole
        chunks = []
        remaining = n
        while remaining > 0:
            try:
                chunk = self.stream.read(min(remaining, READ_CHUNK))
            except (OSError, EOFError, zlib.error) as e:
                raise DecompressionError(f"Corrupt compressed stream: {e}") from e
            if not chunk:
                raise UnexpectedEndOfStream(n, n - remaining)
            chunks.append(chunk)
            remaining -= len(chunk)
        return b"".join(chunks)

    def _unpack(self, fmt: str, size: int):
        return struct.unpack(fmt, self.read(size))[0]

    def read_byte(self) -> int:
        return self._unpack(">b", 1)

    def read_ubyte(self) -> int:
        return self._unpack(">B", 1)

    def read_short(self) -> int:
        return self._unpack(">h", 2)

    def read_ushort(self) -> int:
        return self._unpack(">H", 2)

    def read_int(self) -> int:
        return self._unpack(">i", 4)

    def read_long(self) -> int:
        return self._unpack(">q", 8)

    def read_float(self) -> float:
        return self._unpack(">f", 4)

    def read_double(self) -> float:
        return self._unpack(">d", 8)

    def read_count(self, what="length") -> int:
        n = self.read_int()
        if n < 0:
            raise InvalidLength(n, what)
        return n

    def read_array(self, code: str, width: int, count: int) -> list:
        if count == 0:
            return []
        return list(struct.unpack(f">{count}{code}", self.read(count * width)))

    def read_string(self) -> str:
        length = self.read_ushort()
        if length == 0:
            return ""
        data = self.read(length)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidEncoding(f"Invalid UTF-8 string: {e}") from e


class NBTWriter:
    def __init__(self, stream: Optional[BinaryIO] = None):
        self.stream = stream if stream is not None else io.BytesIO()

    def write(self, data: bytes) -> None:
        self.stream.write(data)

    def _pack(self, fmt: str, v) -> None:
        try:
            self.write(struct.pack(fmt, v))
        except (struct.error, OverflowError) as e:
            raise EncodeError(f"Value {v!r} does not fit format {fmt!r}: {e}") from e

    def write_byte(self, v: int) -> None:
        self._pack(">b", v)

    def write_ubyte(self, v: int) -> None:
        self._pack(">B", v)

    def write_short(self, v: int) -> None:
        self._pack(">h", v)

    def write_ushort(self, v: int) -> None:
        self._pack(">H", v)

    def write_int(self, v: int) -> None:
        self._pack(">i", v)

    def write_long(self, v: int) -> None:
        self._pack(">q", v)

    def write_float(self, v: float) -> None:
        self._pack(">f", v)

    def write_double(self, v: float) -> None:
        self._pack(">d", v)

    def write_array(self, code: str, values: list) -> None:
        self.write_int(len(values))
        if values:
            self._pack_many(f">{len(values)}{code}", values)

    def _pack_many(self, fmt: str, values: list) -> None:
        try:
            self.write(struct.pack(fmt, *values))
        except struct.error as e:
            raise EncodeError(f"Array value out of range for {fmt[-1]!r}: {e}") from e

    def write_string(self, s: str) -> None:
        try:
            encoded = s.encode("utf-8")
        except (UnicodeEncodeError, AttributeError) as e:
            raise EncodeError(f"Cannot encode {s!r} as UTF-8: {e}") from e
        if len(encoded) > 0xFFFF:
            raise EncodeError(f"String of {len(encoded)} bytes exceeds the 65535 byte limit")
        self.write_ushort(len(encoded))
        self.write(encoded)

    def get_bytes(self) -> bytes:
        return self.stream.getvalue()
