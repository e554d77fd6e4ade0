"""Pixel prediction and difference categories for lossless JPEG."""

from __future__ import annotations

import enum

from jpegl.bytestream import JpeglError

MAX_HUFFBITS = 16
_CATMASK = 0x8000


class Predictor(enum.IntEnum):
    """Lossless JPEG predictor selection values (Ss in the scan header)."""

    PRED1 = 1
    PRED2 = 2
    PRED3 = 3
    PRED4 = 4
    PRED5 = 5
    PRED6 = 6
    PRED7 = 7


def _to_short(value: int) -> int:
    return ((value + 0x8000) & 0xFFFF) - 0x8000


def predict(plane, width, pixel_num, cmpnt_depth, pred_type, point_trans):
    """Predict sample ``pixel_num`` of ``plane`` from its decoded neighbours.

    The first sample is predicted from the component depth and point
    transform, the rest of the first row from the left neighbour, the first
    sample of every later row from the one above, and all others with the
    chosen predictor.
    """
    if pixel_num == 0:
        return _to_short(1 << (cmpnt_depth - point_trans - 1))

    if 0 < pixel_num < width:
        return _to_short(plane[pixel_num - 1])

    if pixel_num % width == 0:
        return _to_short(plane[pixel_num - width])

    left = plane[pixel_num - 1]
    above = plane[pixel_num - width]
    upper_left = plane[pixel_num - width - 1]

    if pred_type == Predictor.PRED1:
        value = left
    elif pred_type == Predictor.PRED2:
        value = above
    elif pred_type == Predictor.PRED3:
        value = upper_left
    elif pred_type == Predictor.PRED4:
        value = left + above - upper_left
    elif pred_type == Predictor.PRED5:
        value = left + ((above >> 1) - (upper_left >> 1))
    elif pred_type == Predictor.PRED6:
        value = above + ((left >> 1) - (upper_left >> 1))
    elif pred_type == Predictor.PRED7:
        value = (left + above) // 2
    else:
        raise JpeglError(
            f"invalid prediction type {pred_type} not in range "
            f"[{int(Predictor.PRED1)}..{int(Predictor.PRED7)}]"
        )
    return _to_short(value)


def categorize(diff):
    """Return the category (number of magnitude bits) of a difference value."""
    value = _to_short(diff)
    if value == 0:
        return 0
    magnitude = abs(value) & 0xFFFF
    if magnitude & _CATMASK:
        return MAX_HUFFBITS
    category = magnitude.bit_length()
    if category > MAX_HUFFBITS:
        return -1
    return category