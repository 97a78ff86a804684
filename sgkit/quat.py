"""Quaternions stored as (x, y, z, w) tuples, angles in degrees."""

from __future__ import annotations

import math
from typing import Sequence

from .vec import Vec3, normalize

Quat = tuple[float, float, float, float]


def _clamp_unity(v: float) -> float:
    return max(-1.0, min(1.0, v))


def quat_to_angle_axis(quat: Sequence[float]) -> tuple[float, Vec3]:
    """Return the rotation angle in degrees and the axis of ``quat``."""
    x, y, z, w = quat
    a = math.acos(_clamp_unity(w))
    s = math.sin(a)
    angle = math.degrees(a) * 2.0
    if s == 0.0:
        return angle, (0.0, 0.0, 1.0)
    return angle, (x / s, y / s, z / s)


def angle_axis_to_quat(angle: float, axis: Sequence[float]) -> Quat:
    """Quaternion for a rotation of ``angle`` degrees about ``axis``."""
    half = math.radians(angle) / 2.0
    ax, ay, az = normalize(axis[:3])
    s = -math.sin(half)
    return (ax * s, ay * s, az * s, math.cos(half))


def matrix_to_quat(mat: Sequence[Sequence[float]]) -> Quat:
    """Quaternion for the rotation part of ``mat``."""
    m = mat
    tr = m[0][0] + m[1][1] + m[2][2]
    if tr > 0.0:
        s = math.sqrt(tr + 1.0)
        w = s / 2.0
        s = 0.5 / s
        return (
            (m[1][2] - m[2][1]) * s,
            (m[2][0] - m[0][2]) * s,
            (m[0][1] - m[1][0]) * s,
            w,
        )

    nxt = (1, 2, 0)
    i = 0
    if m[1][1] > m[0][0]:
        i = 1
    if m[2][2] > m[i][i]:
        i = 2
    j = nxt[i]
    k = nxt[j]
    s = math.sqrt((m[i][i] - (m[j][j] + m[k][k])) + 1.0)
    q = [0.0, 0.0, 0.0, 0.0]
    q[i] = s * 0.5
    if s != 0.0:
        s = 0.5 / s
    q[3] = (m[j][k] - m[k][j]) * s
    q[j] = (m[i][j] + m[j][i]) * s
    q[k] = (m[i][k] + m[k][i]) * s
    return (q[0], q[1], q[2], q[3])


def mult_quat(a: Sequence[float], b: Sequence[float]) -> Quat:
    """Product of two quaternions."""
    ax, ay, az, aw = a
    bx, by, bz, bw = b
    t0 = (aw + ax) * (bw + bx)
    t1 = (az - ay) * (by - bz)
    t2 = (ax - aw) * (by + bz)
    t3 = (ay + az) * (bx - bw)
    t4 = (ax + az) * (bx + by)
    t5 = (ax - az) * (bx - by)
    t6 = (aw + ay) * (bw - bz)
    t7 = (aw - ay) * (bw + bz)
    return (
        t0 - ((t4 + t5 + t6 + t7) * 0.5),
        -t2 + ((t4 - t5 + t6 - t7) * 0.5),
        -t3 + ((t4 - t5 - t6 + t7) * 0.5),
        t1 + ((-t4 - t5 + t6 + t7) * 0.5),
    )


def euler_to_quat(hpr: Sequence[float]) -> Quat:
    """Quaternion for heading, pitch and roll in degrees."""
    h, p, r = (math.radians(v) / 2.0 for v in hpr[:3])
    cr, cp, cy = math.cos(r), math.cos(p), math.cos(h)
    sr, sp, sy = math.sin(r), math.sin(p), math.sin(h)
    cpcy = cp * cy
    spsy = sp * sy
    return (
        sr * cpcy - cr * spsy,
        cr * sp * cy + sr * cp * sy,
        cr * cp * sy - sr * sp * cy,
        cr * cpcy + sr * spsy,
    )


def quat_to_euler(quat: Sequence[float]) -> Vec3:
    """Three Euler angles in degrees for ``quat``.

    The first and last angles come back in the opposite order to the one
    :func:`euler_to_quat` takes them in.
    """
    x, y, z, w = quat
    m00 = 1.0 - 2.0 * y * y - 2.0 * z * z
    m10 = 2.0 * x * y + 2.0 * w * z
    m20 = 2.0 * x * z - 2.0 * w * y
    m21 = 2.0 * y * z + 2.0 * w * x
    m22 = 1.0 - 2.0 * x * x - 2.0 * y * y

    sy = -m20
    cy = math.sqrt(max(0.0, 1.0 - sy * sy))
    second = math.degrees(math.atan2(sy, cy))

    if sy not in (1.0, -1.0) and cy != 0.0:
        first = math.degrees(math.atan2(m21 / cy, m22 / cy))
        third = math.degrees(math.atan2(m10 / cy, m00 / cy))
    else:
        m11 = 1.0 - 2.0 * x * x - 2.0 * z * z
        m12 = 2.0 * y * z - 2.0 * w * x
        first = math.degrees(math.atan2(-m12, m11))
        third = math.degrees(math.atan2(0.0, 1.0))
    return (first, second, third)


def quat_to_matrix(quat: Sequence[float]) -> tuple[tuple[float, float, float, float], ...]:
    """Rotation matrix for ``quat``."""
    x, y, z, w = quat
    two_xx = x * (x + x)
    two_xy = x * (y + y)
    two_xz = x * (z + z)
    two_wx = w * (x + x)
    two_wy = w * (y + y)
    two_wz = w * (z + z)
    two_yy = y * (y + y)
    two_yz = y * (z + z)
    two_zz = z * (z + z)
    return (
        (1.0 - (two_yy + two_zz), two_xy - two_wz, two_xz + two_wy, 0.0),
        (two_xy + two_wz, 1.0 - (two_xx + two_zz), two_yz - two_wx, 0.0),
        (two_xz - two_wy, two_yz + two_wx, 1.0 - (two_xx + two_yy), 0.0),
        (0.0, 0.0, 0.0, 1.0),
    )


def slerp_quat(start: Sequence[float], end: Sequence[float], t: float) -> Quat:
    """Spherical interpolation from ``start`` (t=0) to ``end`` (t=1)."""
    fx, fy, fz, fw = start
    tx, ty, tz, tw = end
    co = fx * tx + fy * ty + fx * tz + fw * tw
    if co < 0.0:
        co = -co
        sign = -1.0
    else:
        sign = 1.0

    if co < 1.0:
        o = math.acos(co)
        so = math.sin(o)
        scale0 = math.sin((1.0 - t) * o) / so
        scale1 = math.sin(t * o) / so
    else:
        scale0 = 1.0 - t
        scale1 = t

    scale1 *= sign
    return (
        scale0 * fx + scale1 * tx,
        scale0 * fy + scale1 * ty,
        scale0 * fz + scale1 * tz,
        scale0 * fw + scale1 * tw,
    )


def slerp_quat2(start: Sequence[float], end: Sequence[float], t: float) -> Quat:
    """Spherical interpolation taking the shorter path between the two."""
    cosom = sum(a * b for a, b in zip(start, end))
    if cosom < 0.0:
        cosom = -cosom
        target = tuple(-v for v in end)
    else:
        target = tuple(end)

    if 1.0 - cosom > 0.0:
        omega = math.acos(cosom)
        sinom = math.sin(omega)
        scale0 = math.sin((1.0 - t) * omega) / sinom
        scale1 = math.sin(t * omega) / sinom
    else:
        scale0 = 1.0 - t
        scale1 = t

    x, y, z, w = (scale0 * a + scale1 * b for a, b in zip(start, target))
    return (x, y, z, w)