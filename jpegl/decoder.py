"""Decoding of lossless JPEG streams held in memory."""

from __future__ import annotations

from jpegl.bytestream import ByteReader, JpeglError
from jpegl.headers import (
    get_ppi,
    read_frame_header,
    read_jfif_header,
    read_scan_header,
)
from jpegl.image import MAX_CMPNTS, setup_decode
from jpegl.markers import Marker, MarkerExpectation, read_marker
from jpegl.predictor import categorize, predict
from jpegl.tables import read_table

MAX_CATEGORY = 10
LARGESTDIFF = 511
BITSPERBYTE = 8
MAX_HUFFBITS = 16


class BitReader:
    """Reads bit fields from entropy-coded data, removing stuffed zeros."""

    def __init__(self, reader):
        self._reader = reader
        self._code = 0
        self._bit_count = 0

    def _load(self) -> None:
        code = self._reader.read_byte()
        if code == 0xFF:
            if self._reader.read_byte() != 0x00:
                raise JpeglError("no stuffed zeros")
        self._code = code
        self._bit_count = BITSPERBYTE

    def next_bits(self, count):
        """Return the next ``count`` bits, most significant first."""
        if count < 0:
            raise JpeglError(f"negative bit count {count}")
        result = 0
        while count > 0:
            if self._bit_count == 0:
                self._load()
            take = min(count, self._bit_count)
            shift = self._bit_count - take
            result = (result << take) | ((self._code >> shift) & ((1 << take) - 1))
            self._bit_count = shift
            self._code &= (1 << shift) - 1
            count -= take
        return result & 0xFFFF


def build_huff_decode_table():
    """Map ``[category][extra bits]`` to the full difference value."""
    table = [[0] * (LARGESTDIFF + 1) for _ in range(MAX_CATEGORY)]
    for count in range(-LARGESTDIFF, LARGESTDIFF + 1):
        cat = categorize(count)
        code = count
        if count < 0:
            code = (count - 1) & ((1 << cat) - 1)
        table[cat][code] = count
    return table


def decode_category(table, bits):
    """Decode one Huffman-coded difference category from ``bits``."""
    code = bits.next_bits(1)
    length = 1
    while code > table.maxcode[length]:
        length += 1
        if length > MAX_HUFFBITS:
            raise JpeglError("invalid huffman code in data stream")
        code = (code << 1) + bits.next_bits(1)
    index = table.valptr[length] + code - table.mincode[length]
    if not 0 <= index < len(table.values):
        raise JpeglError("huffman code points outside the value table")
    return table.values[index]


def _decode_scan(image, scan_header, tables, reader, decode_table) -> None:
    cmpnt_i = scan_header.component_ids[0]
    plane = image.image[cmpnt_i]
    table = tables[cmpnt_i]
    width = image.samp_width[cmpnt_i]
    pred_type = image.predict[cmpnt_i]
    point_trans = image.point_trans[cmpnt_i]
    bits = BitReader(reader)

    for pixel in range(image.plane_size(cmpnt_i)):
        diff_cat = decode_category(table, bits)
        if not 0 <= diff_cat < MAX_CATEGORY:
            raise JpeglError(f"invalid difference category {diff_cat}")
        diff_code = bits.next_bits(diff_cat)
        full_diff = decode_table[diff_cat][diff_code]
        pred = predict(plane, width, pixel, image.cmpnt_depth, pred_type,
                       point_trans)
        plane[pixel] = (full_diff + pred) & 0xFF

    if point_trans:
        for pixel, value in enumerate(plane):
            plane[pixel] = (value << point_trans) & 0xFF


def decode(data):
    """Decode a lossless JPEG stream and return its ``ImageData``."""
    decode_table = build_huff_decode_table()
    tables = [None] * MAX_CMPNTS
    reader = ByteReader(data)

    read_marker(reader, MarkerExpectation.SOI)
    read_marker(reader, MarkerExpectation.APP0)
    ppi = get_ppi(read_jfif_header(reader))

    marker = read_marker(reader, MarkerExpectation.TBLS_N_SOF)
    while marker != Marker.SOF3:
        read_table(marker, tables, reader)
        marker = read_marker(reader, MarkerExpectation.TBLS_N_SOF)

    image = setup_decode(ppi, read_frame_header(reader))

    marker = read_marker(reader, MarkerExpectation.TBLS_N_SOS)
    while marker != Marker.EOI:
        while marker != Marker.SOS:
            read_table(marker, tables, reader)
            marker = read_marker(reader, MarkerExpectation.TBLS_N_SOS)

        scan_header = read_scan_header(reader)
        image.update_decode(scan_header, tables)
        if image.intrlv:
            raise JpeglError(
                "this decoder does not handle encoded data that is interleaved"
            )
        _decode_scan(image, scan_header, tables, reader, decode_table)

        marker = reader.read_ushort()

    return image