"""Lossless JPEG marker codes and marker validation."""

from __future__ import annotations

import enum

from jpegl.bytestream import ByteReader, JpeglError


class Marker(enum.IntEnum):
    """Marker codes used in lossless JPEG streams."""

    SOF3 = 0xFFC3
    DHT = 0xFFC4
    SOI = 0xFFD8
    EOI = 0xFFD9
    SOS = 0xFFDA
    APP0 = 0xFFE0
    COM = 0xFFFE


class MarkerExpectation(enum.Enum):
    """Which markers are acceptable at a given point in the stream."""

    SOI = "soi"
    APP0 = "app0"
    TBLS_N_SOF = "tables_or_sof"
    TBLS_N_SOS = "tables_or_sos"
    ANY = "any"


_ALLOWED = {
    MarkerExpectation.SOI: ({Marker.SOI}, "No SOI marker"),
    MarkerExpectation.APP0: ({Marker.APP0}, "No APP0 (JFIF) marker"),
    MarkerExpectation.TBLS_N_SOF: (
        {Marker.DHT, Marker.COM, Marker.SOF3},
        "No DHT, COM, or SOF3 markers",
    ),
    MarkerExpectation.TBLS_N_SOS: (
        {Marker.DHT, Marker.COM, Marker.SOS},
        "No DHT, COM, or SOS markers",
    ),
}


def read_marker(reader: ByteReader, expected: MarkerExpectation) -> int:
    """Read a 16-bit marker and check it against ``expected``."""
    if not isinstance(expected, MarkerExpectation):
        raise JpeglError(f"invalid marker expectation {expected!r}")
    value = reader.read_ushort()
    if expected is MarkerExpectation.ANY:
        if value & 0xFF00 != 0xFF00:
            raise JpeglError(f"no marker found {{{value:04X}}}")
    else:
        allowed, message = _ALLOWED[expected]
        if value not in allowed:
            raise JpeglError(f"{message}. {{{value:04X}}}")
    try:
        return Marker(value)
    except ValueError:
        return value