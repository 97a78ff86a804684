"""Bounding boxes, bounding spheres and view frustums."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Sequence

from .errors import fail
from .matrix import Mat4, xform_pnt4
from .vec import Vec3, compare_sqd_dist, cross, distance, dot, normalize

_INF = math.inf


class Containment(IntEnum):
    """Where a volume lies relative to a frustum."""

    OUTSIDE = 0
    INSIDE = 1
    STRADDLE = 2


_OC_LEFT_SHIFT = 0
_OC_RIGHT_SHIFT = 1
_OC_TOP_SHIFT = 2
_OC_BOT_SHIFT = 3
_OC_NEAR_SHIFT = 4
_OC_FAR_SHIFT = 5
OC_ALL_ON_SCREEN = 0x3F


def _vec3(v: Sequence[float]) -> Vec3:
    return (float(v[0]), float(v[1]), float(v[2]))


@dataclass
class Box:
    """An axis-aligned box; empty until something is added to it."""

    min_point: Vec3 = (_INF, _INF, _INF)
    max_point: Vec3 = (-_INF, -_INF, -_INF)

    def is_empty(self) -> bool:
        """True if the box encloses nothing."""
        return any(lo > hi for lo, hi in zip(self.min_point, self.max_point))

    def extend_point(self, v: Sequence[float]) -> None:
        """Grow the box to include point ``v``."""
        p = _vec3(v)
        if self.is_empty():
            self.min_point = p
            self.max_point = p
            return
        self.min_point = tuple(min(a, b) for a, b in zip(self.min_point, p))
        self.max_point = tuple(max(a, b) for a, b in zip(self.max_point, p))

    def extend_box(self, other: Box) -> None:
        """Grow the box to include box ``other``."""
        if other.is_empty():
            return
        if self.is_empty():
            self.min_point = other.min_point
            self.max_point = other.max_point
            return
        self.extend_point(other.min_point)
        self.extend_point(other.max_point)

    def extend_sphere(self, sphere: Sphere) -> None:
        """Grow the box to include ``sphere``."""
        if sphere.is_empty():
            return
        r = sphere.radius
        self.extend_point(tuple(c + r for c in sphere.center))
        self.extend_point(tuple(c - r for c in sphere.center))

    def intersects_plane(self, plane: Sequence[float]) -> bool:
        """True if the plane (A, B, C, D) passes through the box."""
        a, b, c, d = plane[:4]
        xs = (a * self.min_point[0], a * self.max_point[0])
        ys = (b * self.min_point[1], b * self.max_point[1])
        zs = (c * self.min_point[2] + d, c * self.max_point[2] + d)
        count = sum(x + y + z > 0.0 for x in xs for y in ys for z in zs)
        return count not in (0, 8)


@dataclass
class Sphere:
    """A bounding sphere; a negative radius marks it empty."""

    center: Vec3 = (0.0, 0.0, 0.0)
    radius: float = -1.0

    def is_empty(self) -> bool:
        """True if the sphere encloses nothing."""
        return self.radius < 0.0

    def extend_point(self, v: Sequence[float]) -> None:
        """Grow the sphere to include point ``v``."""
        p = _vec3(v)
        if self.is_empty():
            self.center = p
            self.radius = 0.0
            return
        d = distance(self.center, p)
        if d <= self.radius:
            return
        new_radius = (self.radius + d) / 2.0
        ratio = (new_radius - self.radius) / d
        self.center = tuple(c + (q - c) * ratio for c, q in zip(self.center, p))
        self.radius = new_radius

    def extend_box(self, box: Box) -> None:
        """Grow the sphere to include ``box``."""
        if box.is_empty():
            return
        lo, hi = box.min_point, box.max_point
        if self.is_empty():
            self.center = tuple((a + b) * 0.5 for a, b in zip(lo, hi))
            self.radius = distance(self.center, hi)
            return
        for corner in (
            lo,
            (lo[0], lo[1], hi[2]),
            (lo[0], hi[1], lo[2]),
            (lo[0], hi[1], hi[2]),
            (hi[0], lo[1], lo[2]),
            (hi[0], lo[1], hi[2]),
            (hi[0], hi[1], lo[2]),
            hi,
        ):
            self.extend_point(corner)

    def extend_sphere(self, other: Sphere) -> None:
        """Grow the sphere to include sphere ``other``."""
        if other.is_empty():
            return
        if self.is_empty():
            self.center = other.center
            self.radius = other.radius
            return
        d = distance(self.center, other.center)
        if d + other.radius <= self.radius:
            return
        if d + self.radius <= other.radius:
            self.center = other.center
            self.radius = other.radius
            return
        new_radius = (self.radius + d + other.radius) / 2.0
        ratio = (new_radius - self.radius) / d
        self.center = tuple(c + (q - c) * ratio for c, q in zip(self.center, other.center))
        self.radius = new_radius

    def intersects_box(self, box: Box) -> bool:
        """True if the sphere touches or overlaps ``box``."""
        closest = tuple(
            min(max(c, lo), hi) if lo <= c <= hi or lo > c or hi < c else c
            for c, lo, hi in zip(self.center, box.min_point, box.max_point)
        )
        closest = tuple(
            lo if lo > c else hi if hi < c else c
            for c, lo, hi in zip(self.center, box.min_point, box.max_point)
        )
        return compare_sqd_dist(closest, self.center, self.radius * self.radius) <= 0


@dataclass
class Frustum:
    """A perspective view volume looking down -Z from the origin.

    With non-zero ``hfov`` and ``vfov`` (degrees) the screen edges are derived
    from them; otherwise ``left``, ``right``, ``bot`` and ``top`` are used.
    Call :meth:`update` after changing any field.
    """

    hfov: float = 45.0
    vfov: float = 45.0
    near: float = 1.0
    far: float = 10000.0
    left: float = 0.0
    right: float = 0.0
    bot: float = 0.0
    top: float = 0.0
    top_plane: Vec3 = field(default=(0.0, 0.0, 0.0), init=False)
    right_plane: Vec3 = field(default=(0.0, 0.0, 0.0), init=False)
    bot_plane: Vec3 = field(default=(0.0, 0.0, 0.0), init=False)
    left_plane: Vec3 = field(default=(0.0, 0.0, 0.0), init=False)
    mat: Mat4 = field(default=(), init=False)

    def __post_init__(self) -> None:
        self.update()

    def update(self) -> None:
        """Recompute the side planes and projection matrix."""
        if abs(self.far - self.near) < 0.1:
            fail("Frustum: can't support depth of view <0.1 units")

        if self.hfov != 0.0 and self.vfov != 0.0:
            if abs(self.hfov) < 0.1 or abs(self.vfov) < 0.1:
                fail("Frustum: can't support fields of view narrower than 0.1 degrees")
            self.right = self.near * math.tan(math.radians(self.hfov) / 2.0)
            self.top = self.near * math.tan(math.radians(self.vfov) / 2.0)
            self.left = -self.right
            self.bot = -self.top

        n, f = self.near, self.far
        v1 = normalize((self.left, self.top, -n))
        v2 = normalize((self.right, self.top, -n))
        v3 = normalize((self.left, self.bot, -n))
        v4 = normalize((self.right, self.bot, -n))

        self.top_plane = cross(v1, v2)
        self.right_plane = cross(v2, v4)
        self.bot_plane = cross(v4, v3)
        self.left_plane = cross(v3, v1)

        w = self.right - self.left
        h = self.top - self.bot
        d = f - n
        self.mat = (
            (2.0 * n / w, 0.0, 0.0, 0.0),
            (0.0, 2.0 * n / h, 0.0, 0.0),
            ((self.right + self.left) / w, (self.top + self.bot) / h, -(f + n) / d, -1.0),
            (0.0, 0.0, -2.0 * n * f / d, 0.0),
        )

    def get_outcode(self, pt: Sequence[float]) -> int:
        """Bit mask of the frustum faces ``pt`` lies inside of."""
        x, y, z, w = xform_pnt4((pt[0], pt[1], pt[2], 1.0), self.mat)
        return (
            (int(x <= w) << _OC_RIGHT_SHIFT)
            | (int(x >= -w) << _OC_LEFT_SHIFT)
            | (int(y <= w) << _OC_TOP_SHIFT)
            | (int(y >= -w) << _OC_BOT_SHIFT)
            | (int(z <= w) << _OC_FAR_SHIFT)
            | (int(z >= -w) << _OC_NEAR_SHIFT)
        )

    def contains_point(self, pt: Sequence[float]) -> bool:
        """True if ``pt`` lies inside the frustum."""
        return self.get_outcode(pt) == OC_ALL_ON_SCREEN

    def contains_sphere(self, sphere: Sphere) -> Containment:
        """Classify ``sphere`` as outside, inside or straddling the frustum."""
        c, r = sphere.center, sphere.radius
        if -c[2] + r < self.near or -c[2] - r > self.far:
            return Containment.OUTSIDE

        sps = [dot(plane, c) for plane in (
            self.left_plane, self.right_plane, self.bot_plane, self.top_plane)]
        if any(-sp >= r for sp in sps):
            return Containment.OUTSIDE

        if (
            -c[2] - r > self.near
            and -c[2] + r < self.far
            and all(sp >= r for sp in sps)
        ):
            return Containment.INSIDE
        return Containment.STRADDLE