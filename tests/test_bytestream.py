import pytest

from jpegl.bytestream import ByteReader, ByteWriter, JpeglError


def test_read_byte_sequence():
    reader = ByteReader(b"\x01\x02\x03")
    assert [reader.read_byte() for _ in range(3)] == [1, 2, 3]
    assert reader.remaining() == 0


def test_read_ushort_is_big_endian():
    reader = ByteReader(b"\xff\xd8")
    assert reader.read_ushort() == 0xFFD8


def test_read_past_end_raises():
    reader = ByteReader(b"\x07")
    reader.read_byte()
    with pytest.raises(JpeglError):
        reader.read_byte()


def test_read_ushort_short_buffer_raises():
    with pytest.raises(JpeglError):
        ByteReader(b"\x01").read_ushort()


def test_read_bytes_and_remaining():
    reader = ByteReader(b"abcdef")
    assert reader.read_bytes(4) == b"abcd"
    assert reader.remaining() == 2
    with pytest.raises(JpeglError):
        reader.read_bytes(3)


def test_peek_does_not_consume():
    reader = ByteReader(b"hello")
    assert reader.peek(3) == b"hel"
    assert reader.remaining() == 5
    assert reader.read_bytes(5) == b"hello"


def test_peek_truncates_at_end():
    reader = ByteReader(b"xy")
    assert reader.peek(10) == b"xy"


def test_writer_round_trip():
    writer = ByteWriter(None)
    writer.write_ushort(0xFFD8)
    writer.write_byte(42)
    writer.write_bytes(b"JFIF")
    data = writer.getvalue()
    assert len(writer) == len(data)
    reader = ByteReader(data)
    assert reader.read_ushort() == 0xFFD8
    assert reader.read_byte() == 42
    assert reader.read_bytes(4) == b"JFIF"
    assert reader.remaining() == 0


def test_write_ushort_wire_bytes():
    writer = ByteWriter(2)
    writer.write_ushort(0xFFD9)
    assert writer.getvalue() == b"\xff\xd9"


def test_writer_limit_overflow():
    writer = ByteWriter(3)
    writer.write_ushort(0x1234)
    with pytest.raises(JpeglError):
        writer.write_ushort(0x5678)
    assert writer.getvalue() == b"\x12\x34"


def test_writer_bytes_overflow():
    writer = ByteWriter(2)
    with pytest.raises(JpeglError):
        writer.write_bytes(b"abc")
    assert writer.getvalue() == b""


@pytest.mark.parametrize("value", [-1, 256])
def test_write_byte_out_of_range(value):
    with pytest.raises(JpeglError):
        ByteWriter(None).write_byte(value)


def test_write_ushort_out_of_range():
    with pytest.raises(JpeglError):
        ByteWriter(None).write_ushort(0x10000)