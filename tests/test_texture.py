import struct

import pytest

from sgkit.texture import (
    CODEBOOK_SIZE,
    twiddle_bitmap,
    twiddle_texture,
    twiddled_vq_bitmap_texture,
    vq_bitmap_texture,
)


def _bits(data, count):
    return [(data[i >> 3] >> (i & 7)) & 1 for i in range(count)]


def test_twiddle_2x2_order():
    assert twiddle_texture([10, 20, 30, 40], 2, 2) == [10, 30, 20, 40]


def test_twiddle_is_permutation_for_square():
    src = list(range(64))
    result = twiddle_texture(src, 8, 8)
    assert sorted(result) == src


def test_twiddle_top_left_quadrant_first():
    src = list(range(16))
    quadrant = [src[0], src[1], src[4], src[5]]
    assert twiddle_texture(src, 4, 4)[:4] == twiddle_texture(quadrant, 2, 2)


def test_twiddle_rectangle_tall():
    src = list(range(8))
    result = twiddle_texture(src, 2, 4)
    assert sorted(result) == src
    assert result[:4] == twiddle_texture(src[:4], 2, 2)


def test_twiddle_rectangle_wide():
    src = list(range(8))
    result = twiddle_texture(src, 4, 2)
    assert sorted(result) == src


def test_twiddle_rejects_non_power_of_two():
    with pytest.raises(ValueError):
        twiddle_texture(list(range(9)), 3, 3)


def test_twiddle_rejects_short_data():
    with pytest.raises(ValueError):
        twiddle_texture([1, 2, 3], 2, 2)


def test_twiddle_bitmap_matches_texel_twiddle():
    src = bytes([0x5A, 0x01, 0xF0, 0x33, 0x80, 0x7E, 0x00, 0xC3])
    bits = _bits(src, 64)
    out = twiddle_bitmap(src, 8, 8)
    assert len(out) == 8
    assert _bits(out, 64) == twiddle_texture(bits, 8, 8)


def test_twiddle_bitmap_preserves_all_ones():
    src = bytes([0xFF] * 8)
    assert twiddle_bitmap(src, 8, 8) == src


def test_vq_layout():
    bitmap = bytes([0xA5]) + bytes(7)
    tex = vq_bitmap_texture(bitmap, 8, 8, 0x1234, 0xFFFF)
    assert len(tex) == CODEBOOK_SIZE + 8 * 8 // 2
    codebook = struct.unpack_from("<64H", tex, 0)
    assert codebook[0:4] == (0x1234,) * 4
    assert codebook[60:64] == (0xFFFF,) * 4
    assert tex[CODEBOOK_SIZE] == 0xA5 & 0x0F
    assert tex[CODEBOOK_SIZE + 1] == 0xA5 >> 4
    assert set(tex[128:CODEBOOK_SIZE]) == {0}


def test_vq_codebook_entry_bits():
    tex = vq_bitmap_texture(bytes(8), 8, 8, 0, 1)
    codebook = struct.unpack_from("<64H", tex, 0)
    for i in range(16):
        assert list(codebook[i * 4:i * 4 + 4]) == [(i >> k) & 1 for k in range(4)]


def test_vq_rejects_bad_width():
    with pytest.raises(ValueError):
        vq_bitmap_texture(bytes(16), 4, 4, 0, 0xFFFF)


def test_twiddled_vq_combines_steps():
    bitmap = bytes([0x12, 0x34, 0x56, 0x78, 0x9A, 0xBC, 0xDE, 0xF0])
    expected = vq_bitmap_texture(twiddle_bitmap(bitmap, 8, 8), 8, 8, 0, 0xFFFF)
    assert twiddled_vq_bitmap_texture(bitmap, 8, 8, 0, 0xFFFF) == expected