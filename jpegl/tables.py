"""Dispatch of table and comment segments found between markers."""

from __future__ import annotations

from jpegl.bytestream import ByteReader, JpeglError
from jpegl.comments import read_comment
from jpegl.hufftable import read_huffman_table_jpegl
from jpegl.markers import Marker


def read_table(marker, tables, reader: ByteReader):
    """Read the segment introduced by ``marker``.

    A DHT segment is stored in ``tables`` and the Huffman table returned;
    a COM segment's text is returned. Any other marker is an error.
    """
    if marker == Marker.DHT:
        return read_huffman_table_jpegl(tables, reader)
    if marker == Marker.COM:
        return read_comment(reader)
    raise JpeglError(f"Invalid table defined -> {{{int(marker)}}}")