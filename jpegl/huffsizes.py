"""Huffman code-length computation from category frequencies."""

from __future__ import annotations

from jpegl.bytestream import JpeglError

MAX_HUFFBITS = 16
MAX_HUFFCOUNTS_JPEGL = 16


def find_least_freq(freq, max_huffcounts):
    """Return the two least frequent categories, preferring larger indices.

    Either value is -1 when fewer than that many nonzero entries exist.
    """
    value1 = value2 = -1
    code1 = code2 = 0
    seen = 0
    for i, count in enumerate(freq[:max_huffcounts + 1]):
        if count == 0:
            continue
        if seen == 0:
            code1, value1 = count, i
            seen = 1
            continue
        if seen == 1:
            code2, value2 = count, i
            seen = 2
        if code1 < count and code2 < count:
            continue
        if count < code1 or (count == code1 and i > value1):
            code2, value2 = code1, value1
            code1, value1 = count, i
            continue
        if count < code2 or (count == code2 and i > value2):
            code2, value2 = count, i
    return value1, value2


def find_huff_sizes(freq, max_huffcounts):
    """Compute optimal code sizes for each category from its frequency."""
    freq = list(freq)
    codesize = [0] * (max_huffcounts + 1)
    others = [-1] * (max_huffcounts + 1)
    while True:
        value1, value2 = find_least_freq(freq, max_huffcounts)
        if value2 == -1:
            return codesize
        freq[value1] += freq[value2]
        freq[value2] = 0

        codesize[value1] += 1
        while others[value1] != -1:
            value1 = others[value1]
            codesize[value1] += 1
        others[value1] = value2
        codesize[value2] += 1
        while others[value2] != -1:
            value2 = others[value2]
            codesize[value2] += 1


def find_num_huff_sizes(codesize, max_huffcounts):
    """Count codes of each length; report whether any exceed 16 bits.

    Returns ``(bits, adjust)`` where ``bits`` has 32 entries.
    """
    bits = [0] * (MAX_HUFFBITS * 2)
    adjust = False
    for size in codesize[:max_huffcounts]:
        if size != 0:
            bits[size - 1] += 1
        if size > MAX_HUFFBITS:
            adjust = True
    return bits, adjust


def sort_huffbits(bits):
    """Rebalance code-length counts so that no code exceeds 16 bits."""
    tbits = list(bits)
    if len(tbits) != MAX_HUFFBITS * 2:
        raise JpeglError(f"expected {MAX_HUFFBITS * 2} code-length counts")
    for i in range(MAX_HUFFBITS * 2 - 1, MAX_HUFFBITS - 1, -1):
        while tbits[i] > 0:
            j = i - 2
            while j >= 0 and tbits[j] == 0:
                j -= 1
            if j < 0:
                raise JpeglError("no shorter code available to rebalance")
            tbits[i] -= 2
            tbits[i - 1] += 1
            tbits[j + 1] += 2
            tbits[j] -= 1
        tbits[i] = 0

    i = MAX_HUFFBITS - 1
    while i >= 0 and tbits[i] == 0:
        i -= 1
    if i < 0:
        raise JpeglError("no huffman codes to rebalance")
    tbits[i] -= 1

    result = [count & 0xFF for count in tbits]
    for length, count in enumerate(result[MAX_HUFFBITS:], start=MAX_HUFFBITS):
        if count > 0:
            raise JpeglError(
                f"Code length of {length} is greater than {MAX_HUFFBITS}."
            )
    return result


def sort_code_sizes(codesize, max_huffcounts):
    """Order categories by code size, then by category index."""
    ordered = [
        category
        for size in range(1, MAX_HUFFBITS * 2 + 1)
        for category in range(max_huffcounts)
        if codesize[category] == size
    ]
    return ordered + [0] * (max_huffcounts + 1 - len(ordered))