"""Texture-mapped fonts: glyph metrics, layout and quad vertices."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

from .errors import Severity, set_error
from .texture import twiddled_vq_bitmap_texture
from .txf import TxfError, TxfFont, load_txf

Color = Sequence[float]
Pos = tuple[float, float, float]

LINE_SPACING = 1.333


@dataclass(frozen=True)
class Glyph:
    """Texture and vertex extents of one character, vertices in point units."""

    tex_left: float
    tex_right: float
    tex_bot: float
    tex_top: float
    vtx_left: float
    vtx_right: float
    vtx_bot: float
    vtx_top: float


@dataclass(frozen=True)
class Vertex:
    """One textured, coloured vertex of a glyph quad strip."""

    x: float
    y: float
    z: float
    u: float
    v: float
    argb: int
    end_of_strip: bool = False


def _code(c: Union[str, int]) -> int:
    code = c if isinstance(c, int) else ord(c)
    if not 0 <= code <= 0xFF:
        raise ValueError(f"character code {code} is outside 0..255")
    return code


def _pack_color(color: Color) -> int:
    r, g, b, a = (int(max(0.0, min(1.0, v)) * 255) for v in color[:4])
    return (a << 24) | (r << 16) | (g << 8) | b


@dataclass
class TexFont:
    """A font whose glyphs are rectangles of one texture."""

    gap: float = 0.1
    width: float = 1.0
    fixed_pitch: bool = True
    tex_width: int = 0
    tex_height: int = 0
    texture: bytes = b""
    glyphs: dict[int, Glyph] = field(default_factory=dict)

    def set_glyph(self, c: Union[str, int], glyph: Glyph) -> None:
        """Define the glyph for character ``c``."""
        self.glyphs[_code(c)] = glyph

    def get_glyph(self, c: Union[str, int]) -> Optional[Glyph]:
        """Return the glyph for ``c`` exactly, or None."""
        return self.glyphs.get(_code(c))

    def _resolve(self, code: int) -> tuple[bool, Optional[Glyph]]:
        """Look up a glyph, trying the other case; (is_space, glyph)."""
        if code not in self.glyphs:
            if ord("A") <= code <= ord("Z"):
                code += 32
            elif ord("a") <= code <= ord("z"):
                code -= 32
            if code == ord(" "):
                return True, None
        return False, self.glyphs.get(code)

    def _advance(self, glyph: Glyph) -> float:
        return self.gap + (self.width if self.fixed_pitch else glyph.vtx_right)

    def bbox(self, text: str, pointsize: float, italic: float) -> tuple[float, float, float, float]:
        """Bounding box (left, right, bot, top) of ``text`` at ``pointsize``."""
        h_pos = v_pos = 0.0
        left = right = bot = top = 0.0
        for ch in text:
            if ch == "\n":
                right = h_pos = 0.0
                v_pos -= LINE_SPACING
                continue
            space, g = self._resolve(_code(ch))
            if space:
                right += 0.5
                h_pos += 0.5
                continue
            if g is None:
                continue
            if italic >= 0:
                left = min(left, h_pos + g.vtx_left)
                right = max(right, self.gap + h_pos + g.vtx_right + italic)
            else:
                left = min(left, h_pos + g.vtx_left + italic)
                if right < self.gap + h_pos + g.vtx_right + italic:
                    right = self.gap + h_pos + g.vtx_right
            bot = min(bot, v_pos + g.vtx_bot)
            top = max(top, v_pos + g.vtx_top)
            h_pos += self._advance(g)
        return (left * pointsize, right * pointsize, bot * pointsize, top * pointsize)

    def putch(
        self,
        curpos: Sequence[float],
        pointsize: float,
        italic: float,
        c: Union[str, int],
        color: Color = (1.0, 1.0, 1.0, 1.0),
    ) -> tuple[list[Vertex], Pos]:
        """Vertices for one character and the pen position after it.

        ``color`` is (red, green, blue, alpha) in 0..1.
        """
        x, y, z = (float(v) for v in curpos[:3])
        space, g = self._resolve(_code(c))
        if space:
            return [], (x + pointsize / 2.0, y, z)
        if g is None:
            return [], (x, y, z)
        argb = _pack_color(color)
        ps = pointsize
        vertices = [
            Vertex(x + g.vtx_left * ps, y - g.vtx_bot * ps, z, g.tex_left, g.tex_bot, argb),
            Vertex(x + italic + g.vtx_left * ps, y - g.vtx_top * ps, z, g.tex_left, g.tex_top, argb),
            Vertex(x + g.vtx_right * ps, y - g.vtx_bot * ps, z, g.tex_right, g.tex_bot, argb),
            Vertex(
                x + italic + g.vtx_right * ps, y - g.vtx_top * ps, z,
                g.tex_right, g.tex_top, argb, end_of_strip=True,
            ),
        ]
        return vertices, (x + self._advance(g) * ps, y, z)

    def puts(
        self,
        curpos: Sequence[float],
        pointsize: float,
        italic: float,
        text: str,
        color: Color = (1.0, 1.0, 1.0, 1.0),
    ) -> tuple[list[Vertex], Pos]:
        """Vertices for a string and the final pen position; newlines move down."""
        pos: Pos = (float(curpos[0]), float(curpos[1]), float(curpos[2]))
        origin_x = pos[0]
        vertices: list[Vertex] = []
        for ch in text:
            if ch == "\n":
                pos = (origin_x, pos[1] + pointsize * LINE_SPACING, pos[2])
                continue
            quad, pos = self.putch(pos, pointsize, italic, ch, color)
            vertices.extend(quad)
        return vertices, pos


def font_from_txf(txf: TxfFont) -> TexFont:
    """Build a proportional font and its VQ texture from parsed TXF data."""
    w, h, mh = txf.tex_width, txf.tex_height, txf.max_height
    if mh <= 0:
        set_error(Severity.WARNING, "load_font: bad maximum glyph height")
        raise TxfError("load_font: bad maximum glyph height")
    xstep = 0.5 / w
    ystep = 0.5 / h
    font = TexFont(fixed_pitch=False, tex_width=w, tex_height=h)
    for g in txf.glyphs:
        font.set_glyph(
            g.ch & 0xFF,
            Glyph(
                g.x / w + xstep,
                (g.x + g.width) / w + xstep,
                g.y / h + ystep,
                (g.y + g.height) / h + ystep,
                g.x_off / mh,
                (g.x_off + g.width) / mh,
                g.y_off / mh,
                (g.y_off + g.height) / mh,
            ),
        )
    font.glyphs.pop(ord(" "), None)
    font.texture = twiddled_vq_bitmap_texture(txf.bitmap, w, h, 0x0000, 0xFFFF)
    return font


def load_font(path: Union[str, os.PathLike]) -> TexFont:
    """Load a font file; only the ``.txf`` format is recognised."""
    name = os.fspath(path)
    cut = max(name.rfind("."), name.rfind("/"), 0)
    if name[cut:] != ".txf":
        message = f"load_font: unrecognised file format for '{name}'"
        set_error(Severity.WARNING, message)
        raise TxfError(message)
    return font_from_txf(load_txf(path))