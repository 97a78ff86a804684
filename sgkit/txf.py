"""Reader for TXF texture font files."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Union

from .errors import Severity, SgError, set_error

TXF_MAGIC = b"\xfftxf"
ENDIAN_MARKER = 0x12345678

_HEADER_FORMAT = "6i"
_GLYPH_FORMAT = "HBBbbbBhh"


class TxfError(SgError):
    """Raised when a TXF font cannot be read."""

    def __init__(self, message: str) -> None:
        super().__init__(message, Severity.WARNING)


class TxfFormat(IntEnum):
    """How the glyph image is stored in the file."""

    BYTE = 0
    BITMAP = 1


@dataclass(frozen=True)
class TxfGlyph:
    """One glyph record as stored in the file."""

    ch: int
    width: int
    height: int
    x_off: int
    y_off: int
    step: int
    unknown: int
    x: int
    y: int


@dataclass(frozen=True)
class TxfFont:
    """The contents of a TXF file with a 1-bit-per-pixel image."""

    format: TxfFormat
    tex_width: int
    tex_height: int
    max_height: int
    glyphs: tuple[TxfGlyph, ...]
    bitmap: bytes


def _error(message: str) -> TxfError:
    set_error(Severity.WARNING, message)
    return TxfError(message)


def _parse(data: bytes, name: str) -> TxfFont:
    data = bytes(data)
    if len(data) < 4:
        raise _error(f"load_txf: '{name}' is an empty file")
    if data[:4] != TXF_MAGIC:
        raise _error(f"load_txf: '{name}' is not a 'txf' font file")

    header_end = 8 + struct.calcsize("<" + _HEADER_FORMAT)
    if len(data) < header_end:
        raise _error(f"load_txf: premature EOF in '{name}'")
    (marker,) = struct.unpack_from("<I", data, 4)
    order = "<" if marker == ENDIAN_MARKER else ">"
    format_code, tex_width, tex_height, max_height, _, num_glyphs = struct.unpack_from(
        order + _HEADER_FORMAT, data, 8
    )
    if tex_width <= 0 or tex_height <= 0:
        raise _error(f"load_txf: bad texture size in '{name}'")

    glyph_struct = struct.Struct(order + _GLYPH_FORMAT)
    offset = header_end
    glyphs = []
    for _ in range(max(num_glyphs, 0)):
        if len(data) < offset + glyph_struct.size:
            raise _error(f"load_txf: premature EOF in '{name}'")
        glyphs.append(TxfGlyph(*glyph_struct.unpack_from(data, offset)))
        offset += glyph_struct.size

    try:
        fmt = TxfFormat(format_code)
    except ValueError:
        raise _error(f"load_txf: unrecognised format type in '{name}'") from None
    if fmt is TxfFormat.BYTE:
        raise _error(f"load_txf: byte format texture no longer supported ('{name}')")

    size = tex_width * tex_height // 8
    bitmap = data[offset:offset + size]
    if len(bitmap) != size:
        raise _error(f"load_txf: premature EOF in '{name}'")

    return TxfFont(fmt, tex_width, tex_height, max_height, tuple(glyphs), bitmap)


def parse_txf(data: bytes) -> TxfFont:
    """Parse the bytes of a TXF file."""
    return _parse(data, "<data>")


def load_txf(path: Union[str, os.PathLike]) -> TxfFont:
    """Read and parse a TXF file from disk."""
    name = os.fspath(path)
    try:
        with open(path, "rb") as fh:
            data = fh.read()
    except OSError:
        raise _error(f"load_txf: failed to open '{name}' for reading") from None
    return _parse(data, name)