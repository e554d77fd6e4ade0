from types import SimpleNamespace

import pytest

from jpegl.bytestream import ByteReader, ByteWriter, JpeglError
from jpegl.headers import (
    FrameHeader,
    JfifHeader,
    ScanHeader,
    get_ppi,
    read_frame_header,
    read_jfif_header,
    read_scan_header,
    setup_frame_header,
    setup_jfif_header,
    setup_scan_header,
    write_frame_header,
    write_jfif_header,
    write_scan_header,
)
from jpegl.markers import Marker


def _image(intrlv=0):
    return SimpleNamespace(
        intrlv=intrlv,
        n_cmpnts=3,
        cmpnt_depth=8,
        max_width=40,
        max_height=30,
        hor_sampfctr=[2, 1, 1],
        vrt_sampfctr=[2, 1, 1],
        point_trans=[1, 2, 3],
        predict=[4, 5, 6],
    )


def test_setup_jfif_unknown_density():
    header = setup_jfif_header(1, -1, 500)
    assert (header.units, header.dx, header.dy) == (0, 0, 0)


def test_setup_jfif_known_density():
    header = setup_jfif_header(1, 500, 400)
    assert (header.units, header.dx, header.dy) == (1, 500, 400)
    assert (header.tx, header.ty) == (0, 0)


def test_jfif_wire_prefix():
    writer = ByteWriter()
    write_jfif_header(setup_jfif_header(1, 500, 500), writer)
    data = writer.getvalue()
    assert data.startswith(b"\xff\xe0\x00\x10JFIF\x00")
    assert len(data) == 2 + 16


def test_jfif_round_trip():
    original = setup_jfif_header(2, 197, 199)
    writer = ByteWriter()
    write_jfif_header(original, writer)
    reader = ByteReader(writer.getvalue())
    assert reader.read_ushort() == Marker.APP0
    assert read_jfif_header(reader) == original
    assert reader.remaining() == 0


def test_jfif_bad_ident():
    writer = ByteWriter()
    write_jfif_header(setup_jfif_header(1, 500, 500), writer)
    data = bytearray(writer.getvalue())
    data[4] = ord("X")
    reader = ByteReader(bytes(data[2:]))
    with pytest.raises(JpeglError):
        read_jfif_header(reader)


def test_jfif_thumbnail_rejected_on_write():
    header = JfifHeader(units=1, dx=10, dy=10, tx=1)
    with pytest.raises(JpeglError):
        write_jfif_header(header, ByteWriter())


def test_jfif_thumbnail_rejected_on_read():
    writer = ByteWriter()
    write_jfif_header(setup_jfif_header(1, 500, 500), writer)
    data = bytearray(writer.getvalue())
    data[-1] = 1
    with pytest.raises(JpeglError):
        read_jfif_header(ByteReader(bytes(data[2:])))


def test_get_ppi_inches():
    assert get_ppi(setup_jfif_header(1, 500, 300)) == 500


def test_get_ppi_centimetres():
    assert get_ppi(setup_jfif_header(2, 100, 100)) == 254


def test_get_ppi_unknown():
    assert get_ppi(setup_jfif_header(1, -1, -1)) == -1


def test_get_ppi_bad_units():
    with pytest.raises(JpeglError):
        get_ppi(JfifHeader(units=7, dx=1, dy=1))


def test_setup_frame_header():
    header = setup_frame_header(_image())
    assert header.nf == 3
    assert header.component_ids == [0, 1, 2]
    assert header.sampling == [(2 << 4) | 2, (1 << 4) | 1, (1 << 4) | 1]
    assert header.quant_tables == [0, 0, 0]
    assert (header.prec, header.x, header.y) == (8, 40, 30)


def test_frame_header_round_trip():
    original = setup_frame_header(_image())
    writer = ByteWriter()
    write_frame_header(original, writer)
    data = writer.getvalue()
    assert len(data) == 2 + 8 + 3 * original.nf
    reader = ByteReader(data)
    assert reader.read_ushort() == Marker.SOF3
    assert read_frame_header(reader) == original


def test_frame_header_mismatched_lists():
    header = FrameHeader(prec=8, y=1, x=1, component_ids=[0, 1],
                         sampling=[0x11], quant_tables=[0, 0])
    with pytest.raises(JpeglError):
        write_frame_header(header, ByteWriter())


def test_setup_scan_header_nonintrlv():
    header = setup_scan_header(_image(), 1)
    assert header.component_ids == [1]
    assert header.table_ids == [1 << 4]
    assert (header.ss, header.se, header.ahl) == (5, 0, 2)


def test_setup_scan_header_intrlv():
    header = setup_scan_header(_image(intrlv=1), 2)
    assert header.component_ids == [0, 1, 2]
    assert header.table_ids == [0, 1 << 4, 2 << 4]
    assert (header.ss, header.ahl) == (4, 1)


def test_scan_header_round_trip_shifts_table_ids():
    original = setup_scan_header(_image(intrlv=1), 0)
    writer = ByteWriter()
    write_scan_header(original, writer)
    data = writer.getvalue()
    assert len(data) == 2 + 6 + 2 * original.ns
    reader = ByteReader(data)
    assert reader.read_ushort() == Marker.SOS
    back = read_scan_header(reader)
    assert back.component_ids == original.component_ids
    assert back.table_ids == [t >> 4 for t in original.table_ids]
    assert (back.ss, back.se, back.ahl) == (original.ss, original.se,
                                            original.ahl)


def test_scan_header_truncated():
    writer = ByteWriter()
    write_scan_header(ScanHeader([0], [0], 1, 0, 0), writer)
    with pytest.raises(JpeglError):
        read_scan_header(ByteReader(writer.getvalue()[2:-1]))