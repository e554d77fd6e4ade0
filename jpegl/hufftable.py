"""Per-component Huffman tables for lossless JPEG coding."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from jpegl.bytestream import ByteReader, JpeglError
from jpegl.huffcodes import (
    build_huffcode_table,
    build_huffcodes,
    build_huffsizes,
    gen_decode_table,
)
from jpegl.huffio import read_huffman_table
from jpegl.huffsizes import (
    MAX_HUFFCOUNTS_JPEGL,
    find_huff_sizes,
    find_num_huff_sizes,
    sort_code_sizes,
    sort_huffbits,
)
from jpegl.image import MAX_CMPNTS

MIN_HUFFTABLE_ID = 16

_log = logging.getLogger(__name__)


@dataclass
class HuffmanTable:
    """A Huffman table with the data needed to encode or decode with it."""

    table_id: int = 0
    freq: list[int] = field(default_factory=list)
    codesize: list[int] = field(default_factory=list)
    bits: list[int] = field(default_factory=list)
    values: list[int] = field(default_factory=list)
    last_size: int = 0
    huffcode_table: list | None = None
    maxcode: list[int] = field(default_factory=list)
    mincode: list[int] = field(default_factory=list)
    valptr: list[int] = field(default_factory=list)
    defined: bool = False


def gen_huff_tables(tables):
    """Build encoder code tables from each table's category frequencies."""
    for i, table in enumerate(tables):
        table.table_id = MIN_HUFFTABLE_ID + i
        table.codesize = find_huff_sizes(table.freq, MAX_HUFFCOUNTS_JPEGL)
        bits, adjust = find_num_huff_sizes(table.codesize,
                                           MAX_HUFFCOUNTS_JPEGL)
        if adjust:
            bits = sort_huffbits(bits)
        table.bits = bits
        table.values = sort_code_sizes(table.codesize, MAX_HUFFCOUNTS_JPEGL)
        sized, table.last_size = build_huffsizes(table.bits,
                                                 MAX_HUFFCOUNTS_JPEGL)
        build_huffcodes(sized)
        table.huffcode_table = build_huffcode_table(
            sized, table.last_size, table.values, MAX_HUFFCOUNTS_JPEGL
        )
    return tables


def _existing(tables, index):
    if isinstance(tables, dict):
        return tables.get(index)
    if 0 <= index < len(tables):
        return tables[index]
    raise JpeglError(f"no slot for huffman table {index}")


def read_huffman_table_jpegl(tables, reader: ByteReader) -> HuffmanTable:
    """Read one DHT table body, store it in ``tables`` and return it."""
    raw = read_huffman_table(reader, MAX_HUFFCOUNTS_JPEGL)
    table_id = raw.table_id

    if raw.bytes_left:
        raise JpeglError(
            f"extra bytes after huffman table ID = {table_id}"
        )

    last_id = MIN_HUFFTABLE_ID + MAX_CMPNTS - 1
    if not MIN_HUFFTABLE_ID <= table_id <= last_id:
        if table_id <= 3:
            _log.warning(
                "huffman table index %d not in range %d - %d; "
                "assuming index values 0-3 are being used",
                table_id, MIN_HUFFTABLE_ID, last_id,
            )
            table_id += MIN_HUFFTABLE_ID
        else:
            raise JpeglError(
                f"huffman table index {table_id} not in range "
                f"{MIN_HUFFTABLE_ID} - {last_id}"
            )

    index = table_id - MIN_HUFFTABLE_ID
    previous = _existing(tables, index)
    if previous is not None and previous.defined:
        raise JpeglError(f"huffman table {table_id} illegally redefined")

    sized, last_size = build_huffsizes(raw.bits, MAX_HUFFCOUNTS_JPEGL)
    build_huffcodes(sized)
    maxcode, mincode, valptr = gen_decode_table(sized, raw.bits)

    table = HuffmanTable(
        table_id=table_id,
        bits=raw.bits,
        values=raw.values,
        last_size=last_size,
        maxcode=maxcode,
        mincode=mincode,
        valptr=valptr,
        defined=True,
    )
    tables[index] = table
    return table