"""4x4 transformation matrices stored as four rows, translation in the last row."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from .errors import fail
from .vec import Vec3, cross, dot, length, normalize

Mat4 = tuple[tuple[float, float, float, float], ...]

FLT_EPSILON = 1.1920929e-07


@dataclass(frozen=True)
class Coord:
    """A position and heading/pitch/roll orientation in degrees."""

    xyz: Vec3
    hpr: Vec3


def _rows(*rows: Sequence[float]) -> Mat4:
    return tuple(tuple(float(x) for x in row) for row in rows)


def identity() -> Mat4:
    """The identity matrix."""
    return _rows((1, 0, 0, 0), (0, 1, 0, 0), (0, 0, 1, 0), (0, 0, 0, 1))


def make_rot_mat4(angle: float, axis: Sequence[float]) -> Mat4:
    """Rotation of ``angle`` degrees about ``axis``."""
    x, y, z = normalize(axis[:3])
    a = math.radians(angle)
    s, c = math.sin(a), math.cos(a)
    t = 1.0 - c
    return _rows(
        (t * x * x + c, t * x * y + s * z, t * x * z - s * y, 0),
        (t * y * x - s * z, t * y * y + c, t * y * z + s * x, 0),
        (t * z * x + s * y, t * z * y - s * x, t * z * z + c, 0),
        (0, 0, 0, 1),
    )


def make_pick_matrix(
    x: float, y: float, width: float, height: float, viewport: Sequence[float]
) -> Mat4:
    """Matrix restricting drawing to a ``width`` by ``height`` region at (x, y)."""
    sx = viewport[2] / width
    sy = viewport[3] / height
    tx = (viewport[2] + 2.0 * (viewport[0] - x)) / width
    ty = (viewport[3] + 2.0 * (viewport[1] - y)) / height
    return _rows((sx, 0, 0, 0), (0, sy, 0, 0), (0, 0, 1, 0), (tx, ty, 0, 1))


def make_look_at_mat4(eye: Sequence[float], center: Sequence[float], up: Sequence[float]) -> Mat4:
    """Matrix placing a viewer at ``eye`` looking along +Y towards ``center``."""
    y_axis = tuple(c - e for c, e in zip(center[:3], eye[:3]))
    x_axis = cross(y_axis, up)
    z_axis = cross(x_axis, y_axis)
    x_axis, y_axis, z_axis = (normalize(v) for v in (x_axis, y_axis, z_axis))
    return _rows((*x_axis, 0), (*y_axis, 0), (*z_axis, 0), (*eye[:3], 1))


def make_coord_mat4(x: float, y: float, z: float, h: float, p: float, r: float) -> Mat4:
    """Matrix for position (x, y, z) and heading, pitch, roll in degrees."""
    sh, ch = math.sin(math.radians(h)), math.cos(math.radians(h))
    sp, cp = math.sin(math.radians(p)), math.cos(math.radians(p))
    sr, cr = math.sin(math.radians(r)), math.cos(math.radians(r))
    srsp, crsp, srcp = sr * sp, cr * sp, sr * cp
    return _rows(
        (ch * cr - sh * srsp, cr * sh + srsp * ch, -srcp, 0),
        (-sh * cp, ch * cp, sp, 0),
        (sr * ch + sh * crsp, sr * sh - crsp * ch, cr * cp, 0),
        (x, y, z, 1),
    )


def make_trans_mat4(x, y: Optional[float] = None, z: Optional[float] = None) -> Mat4:
    """Translation matrix; takes three numbers or one three-component vector."""
    if y is None and z is None:
        x, y, z = x[:3]
    elif y is None or z is None:
        raise TypeError("make_trans_mat4 takes either a vector or x, y and z")
    return _rows((1, 0, 0, 0), (0, 1, 0, 0), (0, 0, 1, 0), (x, y, z, 1))


def _clamp_unity(v: float) -> float:
    return max(-1.0, min(1.0, v))


def coord_from_mat4(mat: Sequence[Sequence[float]]) -> Coord:
    """Recover position and heading/pitch/roll in degrees from a matrix."""
    xyz = (mat[3][0], mat[3][1], mat[3][2])
    s = length(mat[0][:3])
    if s <= 0.00001:
        fail("coord_from_mat4: bad matrix")
    m = [[v / s for v in row] for row in mat]

    pitch = math.asin(_clamp_unity(m[1][2]))
    cp = math.cos(pitch)

    if -0.00001 < cp < 0.00001:
        cr = _clamp_unity(m[0][1])
        sr = _clamp_unity(-m[2][1])
        heading = 0.0
    else:
        sr = _clamp_unity(-m[0][2] / cp)
        cr = _clamp_unity(m[2][2] / cp)
        sh = _clamp_unity(-m[1][0] / cp)
        ch = _clamp_unity(m[1][1] / cp)
        if (sh == 0 and ch == 0) or (sr == 0 and cr == 0):
            cr = _clamp_unity(m[0][1])
            sr = _clamp_unity(-m[2][1])
            heading = 0.0
        else:
            heading = math.atan2(sh, ch)
    roll = math.atan2(sr, cr)
    return Coord(xyz, (math.degrees(heading), math.degrees(pitch), math.degrees(roll)))


def mult_mat4(m1: Sequence[Sequence[float]], m2: Sequence[Sequence[float]]) -> Mat4:
    """Product applying ``m2`` first and then ``m1`` to row vectors."""
    cols = list(zip(*m1))
    return tuple(tuple(dot(row, col) for col in cols) for row in m2)


def pre_mult_mat4(dst: Sequence[Sequence[float]], src: Sequence[Sequence[float]]) -> Mat4:
    """Return ``dst`` multiplied by ``src`` on the right-hand side."""
    return mult_mat4(dst, src)


def post_mult_mat4(dst: Sequence[Sequence[float]], src: Sequence[Sequence[float]]) -> Mat4:
    """Return ``src`` multiplied by ``dst`` on the right-hand side."""
    return mult_mat4(src, dst)


def transpose_negate_mat4(src: Sequence[Sequence[float]]) -> Mat4:
    """Fast inverse for a matrix that only rotates and translates."""
    r0, r1, r2, t = (row[:3] for row in src)
    return _rows(
        (r0[0], r1[0], r2[0], 0),
        (r0[1], r1[1], r2[1], 0),
        (r0[2], r1[2], r2[2], 0),
        (-dot(t, r0), -dot(t, r1), -dot(t, r2), 1),
    )


def invert_mat4(src: Sequence[Sequence[float]]) -> Mat4:
    """General inverse by Gauss-Jordan elimination; raises SgError if singular."""
    tmp = [list(map(float, row)) for row in src]
    dst = [list(row) for row in identity()]

    for i in range(4):
        ind, val = i, tmp[i][i]
        for j in range(i + 1, 4):
            if abs(tmp[i][j]) > abs(val):
                ind, val = j, tmp[i][j]

        if ind != i:
            for row in (*dst, *tmp):
                row[i], row[ind] = row[ind], row[i]

        if abs(val) <= FLT_EPSILON:
            fail("invert_mat4: singular matrix, no inverse")

        ival = 1.0 / val
        for row in (*tmp, *dst):
            row[i] *= ival

        for j in range(4):
            if j == i:
                continue
            factor = tmp[i][j]
            for row in (*tmp, *dst):
                row[j] -= row[i] * factor

    return _rows(*dst)


def xform_vec3(src: Sequence[float], mat: Sequence[Sequence[float]]) -> Vec3:
    """Transform a direction, ignoring translation."""
    return tuple(dot(src[:3], (mat[0][c], mat[1][c], mat[2][c])) for c in range(3))


def xform_pnt3(src: Sequence[float], mat: Sequence[Sequence[float]]) -> Vec3:
    """Transform a point, including translation."""
    return tuple(
        dot(src[:3], (mat[0][c], mat[1][c], mat[2][c])) + mat[3][c] for c in range(3)
    )


def xform_pnt4(src: Sequence[float], mat: Sequence[Sequence[float]]) -> tuple[float, ...]:
    """Transform a homogeneous four-component point."""
    return tuple(dot(src[:4], (mat[0][c], mat[1][c], mat[2][c], mat[3][c])) for c in range(4))


def full_xform_pnt3(src: Sequence[float], mat: Sequence[Sequence[float]]) -> Vec3:
    """Transform a point with perspective division by the resulting w."""
    x, y, z, w = xform_pnt4((src[0], src[1], src[2], 1.0), mat)
    return (x / w, y / w, z / w)