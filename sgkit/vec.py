"""Three-component vector helpers, lines and line segments."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from .errors import fail

Vec = Sequence[float]
Vec3 = tuple[float, float, float]


@dataclass(frozen=True)
class Line3:
    """An infinite line through a point along a direction."""

    point_on_line: Vec3
    direction_vector: Vec3


@dataclass(frozen=True)
class LineSegment3:
    """A line segment between two end points."""

    a: Vec3
    b: Vec3


def _sub(a: Vec, b: Vec) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def cross(a: Vec, b: Vec) -> Vec3:
    """Vector product of the first three components of ``a`` and ``b``."""
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def dot(a: Vec, b: Vec) -> float:
    """Scalar product over the components both vectors share."""
    return sum(x * y for x, y in zip(a, b))


def length(v: Vec) -> float:
    """Euclidean length of ``v``."""
    return math.sqrt(dot(v, v))


def normalize(v: Vec) -> tuple[float, ...]:
    """Return ``v`` scaled to unit length."""
    n = length(v)
    if n == 0.0:
        raise ValueError("cannot normalize a zero-length vector")
    return tuple(x / n for x in v)


def distance(a: Vec, b: Vec) -> float:
    """Distance between two points."""
    return length(_sub(b, a))


def compare_sqd_dist(v1: Vec, v2: Vec, sqd_dist: float) -> int:
    """Compare the squared distance between two points with ``sqd_dist``.

    Returns 1 if greater, -1 if less and 0 if equal.
    """
    d = _sub(v2, v1)
    sqdist = dot(d, d)
    if sqdist > sqd_dist:
        return 1
    if sqdist < sqd_dist:
        return -1
    return 0


def make_normal(a: Vec, b: Vec, c: Vec) -> Vec3:
    """Unit normal of the triangle ``a``, ``b``, ``c``."""
    return normalize(cross(_sub(b, a), _sub(c, a)))


def tri_area(p0: Vec, p1: Vec, p2: Vec) -> float:
    """Area of the triangle ``p0``, ``p1``, ``p2``."""
    norm = make_normal(p0, p1, p2)
    pts = (p0, p1, p2)
    total = [0.0, 0.0, 0.0]
    for p, q in zip(pts, pts[1:] + pts[:1]):
        for axis, value in enumerate(cross(p, q)):
            total[axis] += value
    return abs(dot(norm, total)) / 2.0


def angle_between_normalized(first: Vec, second: Vec, normal: Vec) -> float:
    """Angle in radians, 0 to 2*pi, from unit ``first`` to unit ``second``.

    ``normal`` decides which way round the angle is measured.
    """
    if normal[0] == 0 and normal[1] == 0 and normal[2] == 0:
        fail("angle_between: normal is zero")
    temp = cross(first, second)
    my_norm = length(temp)
    if dot(temp, normal) < 0:
        my_norm = -my_norm

    if my_norm < -0.99999:
        delta = -math.pi * 0.5
    elif my_norm > 0.99999:
        delta = math.pi * 0.5
    else:
        delta = math.asin(my_norm)

    if delta < 0:
        delta += 2 * math.pi

    sproduct = dot(first, second)
    my_cos = math.cos(delta)
    abs1 = abs(sproduct - my_cos)
    abs2 = abs(sproduct + my_cos)
    if abs2 < abs1:
        delta = math.pi - delta if delta <= math.pi else 3 * math.pi - delta
    return delta


def angle_between(v1: Vec, v2: Vec, normal: Vec) -> float:
    """Angle in radians from ``v1`` to ``v2`` seen along unit ``normal``."""
    return angle_between_normalized(normalize(v1), normalize(v2), normal)


def reflect_in_plane(src: Vec, plane: Vec) -> Vec3:
    """Reflect direction ``src`` in a plane through the origin with unit normal ``plane``."""
    k = 2.0 * dot(src[:3], plane[:3])
    return (src[0] - plane[0] * k, src[1] - plane[1] * k, src[2] - plane[2] * k)


def hpr_from_vec(src: Vec) -> Vec3:
    """Heading and pitch in degrees of direction ``src``; roll is zero."""
    x, y, z = normalize(src[:3])
    heading = -math.degrees(math.atan2(x, y))
    pitch = -math.degrees(math.atan2(z, math.hypot(x, y)))
    return (heading, pitch, 0.0)


def dist_squared_to_line(line: Line3, pnt: Vec) -> float:
    """Squared-distance measure from ``pnt`` to ``line``."""
    r = _sub(pnt, line.point_on_line)
    return dot(r, r) - dot(r, line.direction_vector)


def dist_squared_to_line_segment(segment: LineSegment3, pnt: Vec) -> float:
    """Squared-distance measure from ``pnt`` to ``segment``."""
    v = _sub(segment.b, segment.a)
    r1 = _sub(pnt, segment.a)
    r1_dot_v = dot(r1, v)
    if r1_dot_v <= 0:
        return dot(r1, r1)
    r2 = _sub(pnt, segment.b)
    if dot(r2, v) >= 0:
        return dot(r2, r2)
    return dot(r1, r1) - r1_dot_v