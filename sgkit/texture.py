"""Texture layout helpers: twiddled (Morton) ordering and 1bpp VQ textures."""

from __future__ import annotations

import struct
from typing import Iterator, Sequence

CODEBOOK_SIZE = 2048


def _check_dims(width: int, height: int) -> None:
    for n in (width, height):
        if n <= 0 or n & (n - 1):
            raise ValueError(f"texture dimensions must be powers of two, got {width}x{height}")


def _square_indices(size: int, x: int, y: int, tex_width: int) -> Iterator[int]:
    if size > 1:
        half = size // 2
        for dx, dy in ((0, 0), (0, half), (half, 0), (half, half)):
            yield from _square_indices(half, x + dx, y + dy, tex_width)
    else:
        yield x + y * tex_width


def _twiddled_order(width: int, height: int) -> Iterator[int]:
    """Source indices in twiddled order; rectangles are tiled with squares."""
    _check_dims(width, height)
    if width < height:
        for y in range(0, height, width):
            yield from _square_indices(width, 0, y, width)
    else:
        for x in range(0, width, height):
            yield from _square_indices(height, x, 0, width)


def twiddle_texture(src: Sequence[int], width: int, height: int) -> list[int]:
    """Reorder a row-major ``width`` x ``height`` texel list into twiddled order."""
    if len(src) < width * height:
        raise ValueError("texture data is shorter than width * height")
    return [src[i] for i in _twiddled_order(width, height)]


def twiddle_bitmap(src: bytes, width: int, height: int) -> bytes:
    """Reorder a 1-bit-per-pixel bitmap (LSB first) into twiddled order."""
    nbytes = (width * height + 7) // 8
    if len(src) < nbytes:
        raise ValueError("bitmap data is shorter than width * height bits")
    dst = bytearray(nbytes)
    for index, src_index in enumerate(_twiddled_order(width, height)):
        bit = (src[src_index >> 3] >> (src_index & 7)) & 1
        dst[index >> 3] |= bit << (index & 7)
    return bytes(dst)


def vq_bitmap_texture(
    bitmap: bytes, width: int, height: int, color0: int, color1: int
) -> bytes:
    """Build a VQ texture: a two-colour codebook followed by one index per nibble.

    The result is ``2048 + width * height // 2`` bytes, 16-bit colours little-endian.
    """
    if width % 8:
        raise ValueError("bitmap width must be a multiple of 8")
    stride = width // 8
    nbytes = stride * height
    if len(bitmap) < nbytes:
        raise ValueError("bitmap data is shorter than width * height bits")

    color0 &= 0xFFFF
    color1 &= 0xFFFF
    entries = [color1 if i & (1 << k) else color0 for i in range(16) for k in range(4)]
    texture = bytearray(CODEBOOK_SIZE + (width * height) // 2)
    struct.pack_into(f"<{len(entries)}H", texture, 0, *entries)

    offset = CODEBOOK_SIZE
    for value in bitmap[:nbytes]:
        texture[offset] = value & 0x0F
        texture[offset + 1] = (value & 0xF0) >> 4
        offset += 2
    return bytes(texture)


def twiddled_vq_bitmap_texture(
    bitmap: bytes, width: int, height: int, color0: int, color1: int
) -> bytes:
    """Twiddle a 1bpp bitmap and turn it into a VQ texture."""
    return vq_bitmap_texture(twiddle_bitmap(bitmap, width, height), width, height, color0, color1)