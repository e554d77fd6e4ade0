"""Reading and writing of DHT (Huffman table) segments."""

from __future__ import annotations

from dataclasses import dataclass, field

from jpegl.bytestream import ByteReader, ByteWriter, JpeglError

MAX_HUFFBITS = 16


@dataclass
class RawHuffmanTable:
    """A Huffman table as stored on the wire: code-length counts and values."""

    table_id: int
    bits: list[int] = field(default_factory=list)
    values: list[int] = field(default_factory=list)
    bytes_left: int = 0

    @property
    def num_values(self) -> int:
        """Number of Huffman values the table defines."""
        return sum(self.bits)


def read_huffman_table(reader: ByteReader, max_huffcounts, bytes_left=None):
    """Read one Huffman table from ``reader``.

    When ``bytes_left`` is None the segment length is read from the stream
    first; otherwise it gives the bytes remaining in the current segment.
    The returned table's ``bytes_left`` holds what remains after this table.
    The value list is padded with zeros to ``max_huffcounts + 1`` entries.
    """
    if bytes_left is None:
        bytes_left = reader.read_ushort() - 2

    if bytes_left <= 0:
        raise JpeglError("no huffman table bytes remaining")

    table_id = reader.read_byte()
    bytes_left -= 1

    bits = list(reader.read_bytes(MAX_HUFFBITS))
    bytes_left -= MAX_HUFFBITS

    num_hufvals = sum(bits)
    if num_hufvals > max_huffcounts + 1:
        raise JpeglError(
            f"num_hufvals ({num_hufvals}) is larger than "
            f"MAX_HUFFCOUNTS ({max_huffcounts + 1})"
        )

    values = list(reader.read_bytes(num_hufvals))
    values += [0] * (max_huffcounts + 1 - num_hufvals)
    bytes_left -= num_hufvals

    return RawHuffmanTable(
        table_id=table_id, bits=bits, values=values, bytes_left=bytes_left
    )


def write_huffman_table(writer: ByteWriter, marker, table_id, huffbits,
                        huffvalues) -> None:
    """Write a marker followed by one Huffman table."""
    bits = list(huffbits)[:MAX_HUFFBITS]
    if len(bits) < MAX_HUFFBITS:
        raise JpeglError(
            f"expected {MAX_HUFFBITS} code-length counts, got {len(bits)}"
        )
    num_values = sum(bits)
    values = list(huffvalues)
    if len(values) < num_values:
        raise JpeglError(
            f"huffman table needs {num_values} values, got {len(values)}"
        )

    writer.write_ushort(marker)
    writer.write_ushort(3 + MAX_HUFFBITS + num_values)
    writer.write_byte(table_id)
    for count in bits:
        writer.write_byte(count)
    for value in values[:num_values]:
        writer.write_byte(value)