"""Big-endian byte readers and writers over in-memory buffers."""

from __future__ import annotations


class JpeglError(ValueError):
    """Raised when a lossless JPEG stream is malformed or cannot be written."""


class ByteReader:
    """Sequential reader over an immutable byte buffer."""

    def __init__(self, data):
        self._data = bytes(data)
        self._pos = 0

    def _take(self, count: int) -> bytes:
        if count < 0:
            raise JpeglError(f"negative read length {count}")
        end = self._pos + count
        if end > len(self._data):
            raise JpeglError(
                f"unexpected end of buffer: need {count} bytes, "
                f"{len(self._data) - self._pos} remaining"
            )
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def read_byte(self) -> int:
        """Read one unsigned byte."""
        return self._take(1)[0]

    def read_ushort(self) -> int:
        """Read a big-endian unsigned 16-bit value."""
        return int.from_bytes(self._take(2), "big")

    def read_bytes(self, count: int) -> bytes:
        """Read exactly ``count`` bytes."""
        return self._take(count)

    def peek(self, count: int) -> bytes:
        """Return up to ``count`` upcoming bytes without consuming them."""
        if count < 0:
            raise JpeglError(f"negative peek length {count}")
        return self._data[self._pos:self._pos + count]

    def remaining(self) -> int:
        """Number of bytes not yet consumed."""
        return len(self._data) - self._pos


class ByteWriter:
    """Append-only byte buffer with an optional size limit."""

    def __init__(self, limit=None):
        if limit is not None and limit < 0:
            raise JpeglError(f"negative buffer limit {limit}")
        self._limit = limit
        self._buf = bytearray()

    def _reserve(self, count: int) -> None:
        if self._limit is not None and len(self._buf) + count > self._limit:
            raise JpeglError(
                f"buffer overflow: alloc = {self._limit}, "
                f"request = {len(self._buf) + count}"
            )

    def write_byte(self, value: int) -> None:
        """Append one unsigned byte."""
        if not 0 <= value <= 0xFF:
            raise JpeglError(f"byte value {value} out of range")
        self._reserve(1)
        self._buf.append(value)

    def write_ushort(self, value: int) -> None:
        """Append a big-endian unsigned 16-bit value."""
        if not 0 <= value <= 0xFFFF:
            raise JpeglError(f"ushort value {value} out of range")
        self._reserve(2)
        self._buf += value.to_bytes(2, "big")

    def write_bytes(self, data) -> None:
        """Append a sequence of bytes."""
        chunk = bytes(data)
        self._reserve(len(chunk))
        self._buf += chunk

    def getvalue(self) -> bytes:
        """Return everything written so far."""
        return bytes(self._buf)

    def __len__(self) -> int:
        return len(self._buf)