from types import SimpleNamespace

import pytest

from jpegl.bytestream import JpeglError
from jpegl.headers import FrameHeader, ScanHeader, setup_frame_header
from jpegl.image import setup_decode, setup_nonintrlv_encode


def _gray(width=5, height=3):
    data = bytes(range(width * height))
    return data, setup_nonintrlv_encode(data, width, height, 8, 500, [1], [1],
                                        1, 0, 1)


def test_gray_round_trip_through_get_image():
    data, img = _gray()
    assert img.get_image() == (data, 5, 3, 8, 500)


def test_gray_plane_matches_full_size():
    _, img = _gray()
    assert img.samp_width == [img.max_width]
    assert img.samp_height == [img.max_height]
    assert img.cmpnt_depth == 8
    assert img.intrlv == 0
    assert img.predict == [1]


def test_color_subsampled_planes_round_trip():
    sizes = (16, 4, 4)
    data = bytes(i % 256 for i in range(sum(sizes)))
    img = setup_nonintrlv_encode(data, 4, 4, 24, 300, [2, 1, 1], [2, 1, 1],
                                 3, 0, 1)
    assert [img.plane_size(i) for i in range(3)] == list(sizes)
    assert img.samp_width[0] == img.max_width
    joined, w, h, d, ppi = img.get_image()
    assert joined == data
    assert (w, h, d, ppi) == (4, 4, 24, 300)


def test_extra_input_bytes_are_ignored():
    data = bytes(20)
    img = setup_nonintrlv_encode(data, 4, 4, 8, -1, [1], [1], 1, 0, 1)
    assert len(img.get_image()[0]) == 16


@pytest.mark.parametrize(
    "depth,n_cmpnts",
    [(16, 1), (24, 5), (8, 3), (24, 1)],
)
def test_bad_depth_or_component_count_raises(depth, n_cmpnts):
    with pytest.raises(JpeglError):
        setup_nonintrlv_encode(bytes(100), 4, 4, depth, 300,
                               [1] * n_cmpnts, [1] * n_cmpnts, n_cmpnts, 0, 1)


def test_short_data_raises():
    with pytest.raises(JpeglError):
        setup_nonintrlv_encode(bytes(3), 4, 4, 8, 300, [1], [1], 1, 0, 1)


def test_frame_header_round_trip_through_decode_setup():
    data = bytes(48)
    enc = setup_nonintrlv_encode(data, 4, 4, 24, 300, [2, 1, 1], [2, 1, 1],
                                 3, 0, 1)
    dec = setup_decode(300, setup_frame_header(enc))
    assert dec.samp_width == enc.samp_width
    assert dec.samp_height == enc.samp_height
    assert dec.hor_sampfctr == enc.hor_sampfctr
    assert dec.vrt_sampfctr == enc.vrt_sampfctr
    assert dec.pix_depth == enc.pix_depth
    assert dec.n_cmpnts == 3
    assert dec.intrlv == -1
    assert dec.image == [None, None, None]


def test_setup_decode_rejects_zero_sampling():
    frame = FrameHeader(prec=8, y=2, x=2, component_ids=[0], sampling=[0],
                        quant_tables=[0])
    with pytest.raises(JpeglError):
        setup_decode(300, frame)


def _decode_image():
    frame = FrameHeader(prec=8, y=3, x=5, component_ids=[0, 1, 2],
                        sampling=[0x22, 0x11, 0x11], quant_tables=[0, 0, 0])
    return setup_decode(-1, frame)


def test_update_decode_allocates_scanned_plane():
    img = _decode_image()
    tables = [SimpleNamespace(defined=True)] * 3
    img.update_decode(ScanHeader(component_ids=[1], table_ids=[1], ss=4,
                                 ahl=2), tables)
    assert img.intrlv == 0
    assert img.predict[1] == 4
    assert img.point_trans[1] == 2
    assert len(img.image[1]) == img.plane_size(1)
    assert img.image[0] is None


def test_update_decode_marks_interleaved():
    img = _decode_image()
    tables = {0: SimpleNamespace(defined=True), 1: SimpleNamespace(defined=True)}
    img.update_decode(ScanHeader(component_ids=[0, 1], table_ids=[0, 1]),
                      tables)
    assert img.intrlv == 1
    assert img.image[2] is None


def test_update_decode_missing_table_raises():
    img = _decode_image()
    with pytest.raises(JpeglError):
        img.update_decode(ScanHeader(component_ids=[2], table_ids=[2]),
                          [SimpleNamespace(defined=True), None, None])


def test_update_decode_undefined_table_raises():
    img = _decode_image()
    with pytest.raises(JpeglError):
        img.update_decode(ScanHeader(component_ids=[0], table_ids=[0]),
                          [SimpleNamespace(defined=False)])


def test_get_image_before_decoding_raises():
    with pytest.raises(JpeglError):
        _decode_image().get_image()