"""Image description shared by the lossless JPEG encoder and decoder."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from jpegl.bytestream import JpeglError

MAX_CMPNTS = 4
NO_INTRLV = 0


@dataclass
class ImageData:
    """A pixmap split into component planes, with its coding attributes."""

    max_width: int
    max_height: int
    pix_depth: int
    ppi: int
    intrlv: int
    n_cmpnts: int
    cmpnt_depth: int
    hor_sampfctr: list[int] = field(default_factory=list)
    vrt_sampfctr: list[int] = field(default_factory=list)
    samp_width: list[int] = field(default_factory=list)
    samp_height: list[int] = field(default_factory=list)
    point_trans: list[int] = field(default_factory=list)
    predict: list[int] = field(default_factory=list)
    image: list = field(default_factory=list)
    diff: list = field(default_factory=list)

    def plane_size(self, cmpnt_i: int) -> int:
        """Number of samples in one component plane."""
        return self.samp_width[cmpnt_i] * self.samp_height[cmpnt_i]

    def get_image(self):
        """Return ``(data, width, height, depth, ppi)`` with planes joined."""
        chunks = []
        for i in range(self.n_cmpnts):
            plane = self.image[i]
            if plane is None:
                raise JpeglError(f"component {i} has no image data")
            chunks.append(bytes(plane[:self.plane_size(i)]))
        return (b"".join(chunks), self.max_width, self.max_height,
                self.pix_depth, self.ppi)

    def update_decode(self, scan_header, tables) -> None:
        """Apply a scan header and allocate planes for its components."""
        self.intrlv = 1 if scan_header.ns > 1 else 0
        for cmpnt_i in scan_header.component_ids:
            if not 0 <= cmpnt_i < self.n_cmpnts:
                raise JpeglError(
                    f"scan component {cmpnt_i} not in frame of "
                    f"{self.n_cmpnts} components"
                )
            table = _lookup_table(tables, cmpnt_i)
            if table is None or not getattr(table, "defined", True):
                raise JpeglError(f"huffman table {cmpnt_i} not defined")
            self.point_trans[cmpnt_i] = scan_header.ahl
            self.predict[cmpnt_i] = scan_header.ss
            self.image[cmpnt_i] = bytearray(self.plane_size(cmpnt_i))


def _lookup_table(tables, index):
    if isinstance(tables, dict):
        return tables.get(index)
    if 0 <= index < len(tables):
        return tables[index]
    return None


def _sampled_dims(width, height, hor, vrt):
    max_hor = max(hor, default=-1)
    max_vrt = max(vrt, default=-1)
    if hor and (max_hor <= 0 or max_vrt <= 0):
        raise JpeglError("sampling factors must be positive")
    widths = [math.ceil(width * (h / float(max_hor))) for h in hor]
    heights = [math.ceil(height * (v / float(max_vrt))) for v in vrt]
    return widths, heights


def setup_nonintrlv_encode(data, width, height, depth, ppi, hor_sampfctr,
                           vrt_sampfctr, n_cmpnts, point_trans, predictor):
    """Describe a non-interleaved pixmap of component planes for encoding."""
    if depth not in (8, 24):
        raise JpeglError(f"image pixel depth {depth} != 8 or 24")
    if n_cmpnts > MAX_CMPNTS:
        raise JpeglError(
            f"number of components = {n_cmpnts} > {MAX_CMPNTS}"
        )
    if (depth == 8 and n_cmpnts != 1) or (depth == 24 and n_cmpnts != 3):
        raise JpeglError(
            f"depth = {depth} mismatched with n_cmpnts = {n_cmpnts}"
        )
    hor = list(hor_sampfctr)[:n_cmpnts]
    vrt = list(vrt_sampfctr)[:n_cmpnts]
    if len(hor) < n_cmpnts or len(vrt) < n_cmpnts:
        raise JpeglError("missing sampling factors")

    widths, heights = _sampled_dims(width, height, hor, vrt)
    source = bytes(data)
    planes = []
    offset = 0
    for w, h in zip(widths, heights):
        size = w * h
        if offset + size > len(source):
            raise JpeglError(
                f"image data too short: need {offset + size} bytes, "
                f"got {len(source)}"
            )
        planes.append(bytearray(source[offset:offset + size]))
        offset += size

    return ImageData(
        max_width=width,
        max_height=height,
        pix_depth=depth,
        ppi=ppi,
        intrlv=NO_INTRLV,
        n_cmpnts=n_cmpnts,
        cmpnt_depth=8,
        hor_sampfctr=hor,
        vrt_sampfctr=vrt,
        samp_width=widths,
        samp_height=heights,
        point_trans=[point_trans] * n_cmpnts,
        predict=[predictor] * n_cmpnts,
        image=planes,
        diff=[None] * n_cmpnts,
    )


def setup_decode(ppi, frame_header):
    """Describe the image a frame header announces, without pixel data."""
    nf = frame_header.nf
    hor = [hv >> 4 for hv in frame_header.sampling[:nf]]
    vrt = [hv & 0x0F for hv in frame_header.sampling[:nf]]
    widths, heights = _sampled_dims(frame_header.x, frame_header.y, hor, vrt)
    return ImageData(
        max_width=frame_header.x,
        max_height=frame_header.y,
        pix_depth=nf * 8,
        ppi=ppi,
        intrlv=-1,
        n_cmpnts=nf,
        cmpnt_depth=frame_header.prec,
        hor_sampfctr=hor,
        vrt_sampfctr=vrt,
        samp_width=widths,
        samp_height=heights,
        point_trans=[0] * nf,
        predict=[0] * nf,
        image=[None] * nf,
        diff=[None] * nf,
    )