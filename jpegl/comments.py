"""Reading, writing and inserting COM (comment) segments."""

from __future__ import annotations

from jpegl.bytestream import ByteReader, ByteWriter, JpeglError
from jpegl.headers import read_jfif_header, write_jfif_header
from jpegl.markers import Marker, MarkerExpectation, read_marker


def _as_bytes(comment) -> bytes:
    if comment is None:
        return b""
    if isinstance(comment, str):
        return comment.encode("utf-8")
    return bytes(comment)


def _c_string(data: bytes) -> bytes:
    """Text up to, not including, the first NUL byte."""
    return data.split(b"\x00", 1)[0]


def read_comment(reader: ByteReader) -> bytes:
    """Read a comment body that follows a COM marker.

    The segment length is read first; exactly that many comment bytes
    are returned.
    """
    hdr_size = reader.read_ushort()
    size = hdr_size - 2
    if size < 0:
        raise JpeglError(f"invalid comment segment length {hdr_size}")
    return reader.read_bytes(size)


def write_comment(writer: ByteWriter, marker, comment) -> None:
    """Write ``marker``, a segment length and the comment bytes."""
    data = _as_bytes(comment)
    if 2 + len(data) > 0xFFFF:
        raise JpeglError(f"comment of {len(data)} bytes is too long")
    writer.write_ushort(marker)
    writer.write_ushort(2 + len(data))
    writer.write_bytes(data)


def add_comment(data, comment) -> bytes:
    """Insert a comment segment into an encoded stream.

    The new segment goes after the SOI marker, the JFIF header if present
    and any comment segments already at the start of the stream.
    """
    text = _c_string(_as_bytes(comment))
    if not text:
        raise JpeglError("empty comment passed")

    source = bytes(data)
    reader = ByteReader(source)
    writer = ByteWriter()

    marker = read_marker(reader, MarkerExpectation.SOI)
    writer.write_ushort(marker)

    marker = reader.read_ushort()
    if marker == Marker.APP0:
        write_jfif_header(read_jfif_header(reader), writer)
        marker = reader.read_ushort()

    while marker == Marker.COM:
        existing = read_comment(reader)
        write_comment(writer, Marker.COM, _c_string(existing))
        marker = reader.read_ushort()

    # Back up to the start of the last marker read.
    rest_start = len(source) - reader.remaining() - 2

    write_comment(writer, Marker.COM, text)
    writer.write_bytes(source[rest_start:])
    return writer.getvalue()