"""Canonical Huffman code construction and decoder lookup tables."""

from __future__ import annotations

from dataclasses import dataclass

from jpegl.bytestream import JpeglError

MAX_HUFFBITS = 16


@dataclass
class HuffCode:
    """Length and bit pattern of one Huffman code word."""

    size: int = 0
    code: int = 0


def build_huffsizes(huffbits, max_huffcounts):
    """Expand per-length code counts into a table of code sizes.

    Returns ``(table, last_size)``: the table holds one entry per code in
    increasing size order, followed by at least one entry of size 0;
    ``last_size`` is the number of codes.
    """
    counts = list(huffbits)[:MAX_HUFFBITS]
    if len(counts) < MAX_HUFFBITS:
        raise JpeglError(
            f"expected {MAX_HUFFBITS} code-length counts, got {len(counts)}"
        )
    sizes = [
        size
        for size, count in enumerate(counts, start=1)
        for _ in range(count)
    ]
    length = max(max_huffcounts + 1, len(sizes) + 1)
    table = [HuffCode(size=size) for size in sizes]
    table += [HuffCode() for _ in range(length - len(sizes))]
    return table, len(sizes)


def build_huffcodes(huffcode_table):
    """Assign canonical code words to a size-ordered table, in place.

    The table is returned for convenience.
    """
    def size_at(index):
        if index < len(huffcode_table):
            return huffcode_table[index].size
        return 0

    if size_at(0) == 0:
        return huffcode_table

    temp_size = huffcode_table[0].size
    temp_code = 0
    pointer = 0
    while True:
        while True:
            huffcode_table[pointer].code = temp_code
            temp_code = (temp_code + 1) & 0xFFFF
            pointer += 1
            if size_at(pointer) != temp_size:
                break
        next_size = size_at(pointer)
        if next_size == 0:
            return huffcode_table
        if next_size < temp_size:
            raise JpeglError("huffman code sizes are not in increasing order")
        temp_code = (temp_code << (next_size - temp_size)) & 0xFFFF
        temp_size = next_size


def build_huffcode_table(huffcode_table, last_size, values, max_huffcounts):
    """Reorder codes so that entry ``values[k]`` holds the k-th code."""
    result = [HuffCode() for _ in range(max_huffcounts + 1)]
    for entry, value in zip(huffcode_table[:last_size], values[:last_size]):
        if not 0 <= value <= max_huffcounts:
            raise JpeglError(f"huffman value {value} out of range")
        result[value] = HuffCode(size=entry.size, code=entry.code)
    return result


def gen_decode_table(huffcode_table, huffbits):
    """Build the ``(maxcode, mincode, valptr)`` tables used for decoding.

    Each list is indexed by code length 1..16; index 0 is unused. A length
    with no codes has a ``maxcode`` of -1.
    """
    maxcode = [0] * (MAX_HUFFBITS + 1)
    mincode = [0] * (MAX_HUFFBITS + 1)
    valptr = [0] * (MAX_HUFFBITS + 1)

    position = 0
    for length, count in enumerate(list(huffbits)[:MAX_HUFFBITS], start=1):
        if count == 0:
            maxcode[length] = -1
            continue
        if position + count > len(huffcode_table):
            raise JpeglError("huffman code table shorter than its counts")
        valptr[length] = position
        mincode[length] = huffcode_table[position].code
        position += count
        maxcode[length] = huffcode_table[position - 1].code

    return maxcode, mincode, valptr