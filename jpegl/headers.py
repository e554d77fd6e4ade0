"""JFIF, frame and scan headers of lossless JPEG streams."""

from __future__ import annotations

from dataclasses import dataclass, field

from jpegl.bytestream import ByteReader, ByteWriter, JpeglError
from jpegl.markers import Marker

JFIF_IDENT = "JFIF"
JFIF_VERSION = 0x0102
JFIF_HEADER_LEN = 16

UNKNOWN_UNITS = 0
PPI_UNITS = 1
PPCM_UNITS = 2

CM_PER_INCH = 2.54


@dataclass
class JfifHeader:
    """Contents of an APP0 (JFIF) segment."""

    units: int = UNKNOWN_UNITS
    dx: int = 0
    dy: int = 0
    ident: str = JFIF_IDENT
    ver: int = JFIF_VERSION
    tx: int = 0
    ty: int = 0


@dataclass
class FrameHeader:
    """Contents of a SOF3 segment."""

    prec: int
    y: int
    x: int
    component_ids: list[int] = field(default_factory=list)
    sampling: list[int] = field(default_factory=list)
    quant_tables: list[int] = field(default_factory=list)

    @property
    def nf(self) -> int:
        """Number of image components in the frame."""
        return len(self.component_ids)


@dataclass
class ScanHeader:
    """Contents of a SOS segment."""

    component_ids: list[int] = field(default_factory=list)
    table_ids: list[int] = field(default_factory=list)
    ss: int = 0
    se: int = 0
    ahl: int = 0

    @property
    def ns(self) -> int:
        """Number of components in the scan."""
        return len(self.component_ids)


def setup_jfif_header(units, dx, dy) -> JfifHeader:
    """Build a JFIF header; a density of -1 means unknown resolution."""
    if dx == -1 or dy == -1:
        return JfifHeader(units=UNKNOWN_UNITS, dx=0, dy=0)
    return JfifHeader(units=units, dx=dx, dy=dy)


def read_jfif_header(reader: ByteReader) -> JfifHeader:
    """Read a JFIF header body that follows an APP0 marker."""
    reader.read_ushort()  # segment length
    ident = reader.read_bytes(len(JFIF_IDENT) + 1)
    if ident != JFIF_IDENT.encode("ascii") + b"\x00":
        raise JpeglError("Not a JFIF Header")
    header = JfifHeader(
        ident=JFIF_IDENT,
        ver=reader.read_ushort(),
        units=reader.read_byte(),
        dx=reader.read_ushort(),
        dy=reader.read_ushort(),
        tx=reader.read_byte(),
        ty=reader.read_byte(),
    )
    if header.tx != 0 or header.ty != 0:
        raise JpeglError("Can't handle thumbnails")
    return header


def write_jfif_header(header: JfifHeader, writer: ByteWriter) -> None:
    """Write an APP0 marker followed by the JFIF header."""
    if header.ident != JFIF_IDENT:
        raise JpeglError("Not a JFIF Header")
    if header.tx != 0 or header.ty != 0:
        raise JpeglError("Can't handle thumbnails")
    writer.write_ushort(Marker.APP0)
    writer.write_ushort(JFIF_HEADER_LEN)
    writer.write_bytes(header.ident.encode("ascii") + b"\x00")
    writer.write_ushort(header.ver)
    writer.write_byte(header.units)
    writer.write_ushort(header.dx)
    writer.write_ushort(header.dy)
    writer.write_byte(header.tx)
    writer.write_byte(header.ty)


def get_ppi(jfif_header: JfifHeader) -> int:
    """Scan resolution in pixels per inch, or -1 when unknown."""
    units = jfif_header.units
    if units == PPI_UNITS:
        return jfif_header.dx
    if units == PPCM_UNITS:
        return int(jfif_header.dx * CM_PER_INCH + 0.5)
    if units == UNKNOWN_UNITS:
        return -1
    raise JpeglError(f"illegal density unit = {units}")


def setup_frame_header(image) -> FrameHeader:
    """Build a frame header from an image description."""
    n = image.n_cmpnts
    return FrameHeader(
        prec=image.cmpnt_depth,
        y=image.max_height,
        x=image.max_width,
        component_ids=list(range(n)),
        sampling=[
            (h << 4) | v
            for h, v in zip(image.hor_sampfctr[:n], image.vrt_sampfctr[:n])
        ],
        quant_tables=[0] * n,
    )


def read_frame_header(reader: ByteReader) -> FrameHeader:
    """Read a frame header body that follows a SOF3 marker."""
    reader.read_ushort()  # Lf
    prec = reader.read_byte()
    y = reader.read_ushort()
    x = reader.read_ushort()
    nf = reader.read_byte()
    header = FrameHeader(prec=prec, y=y, x=x)
    for _ in range(nf):
        header.component_ids.append(reader.read_byte())
        header.sampling.append(reader.read_byte())
        header.quant_tables.append(reader.read_byte())
    return header


def write_frame_header(header: FrameHeader, writer: ByteWriter) -> None:
    """Write a SOF3 marker followed by the frame header."""
    nf = header.nf
    if len(header.sampling) != nf or len(header.quant_tables) != nf:
        raise JpeglError("frame header component lists differ in length")
    writer.write_ushort(Marker.SOF3)
    writer.write_ushort(8 + 3 * nf)
    writer.write_byte(header.prec)
    writer.write_ushort(header.y)
    writer.write_ushort(header.x)
    writer.write_byte(nf)
    for c, hv, tq in zip(header.component_ids, header.sampling,
                         header.quant_tables):
        writer.write_byte(c)
        writer.write_byte(hv)
        writer.write_byte(tq)


def setup_scan_header(image, cmpnt_i) -> ScanHeader:
    """Build a scan header for one component, or all when interleaved."""
    if not image.intrlv:
        return ScanHeader(
            component_ids=[cmpnt_i],
            table_ids=[cmpnt_i << 4],
            ss=image.predict[cmpnt_i],
            se=0,
            ahl=image.point_trans[cmpnt_i],
        )
    n = image.n_cmpnts
    return ScanHeader(
        component_ids=list(range(n)),
        table_ids=[i << 4 for i in range(n)],
        ss=image.predict[0],
        se=0,
        ahl=image.point_trans[0],
    )


def read_scan_header(reader: ByteReader) -> ScanHeader:
    """Read a scan header body that follows a SOS marker."""
    reader.read_ushort()  # Ls
    ns = reader.read_byte()
    header = ScanHeader()
    for _ in range(ns):
        header.component_ids.append(reader.read_byte())
        header.table_ids.append(reader.read_byte() >> 4)
    header.ss = reader.read_byte()
    header.se = reader.read_byte()
    header.ahl = reader.read_byte()
    return header


def write_scan_header(header: ScanHeader, writer: ByteWriter) -> None:
    """Write a SOS marker followed by the scan header."""
    ns = header.ns
    if len(header.table_ids) != ns:
        raise JpeglError("scan header component lists differ in length")
    writer.write_ushort(Marker.SOS)
    writer.write_ushort(6 + 2 * ns)
    writer.write_byte(ns)
    for cs, tda in zip(header.component_ids, header.table_ids):
        writer.write_byte(cs)
        writer.write_byte(tda)
    writer.write_byte(header.ss)
    writer.write_byte(header.se)
    writer.write_byte(header.ahl)