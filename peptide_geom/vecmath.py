"""Small 3D vector and quaternion types used for molecular geometry."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

_PARALLEL_EPS = 1e-12


@dataclass(frozen=True, slots=True)
class Vec3:
    """An immutable 3D vector."""

    x: float
    y: float
    z: float

    @classmethod
    def zero(cls) -> Vec3:
        """The zero vector."""
        return cls(0.0, 0.0, 0.0)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: float) -> Vec3:
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec3:
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def magnitude(self) -> float:
        return math.sqrt(self.dot(self))

    def to_normalized(self) -> Vec3:
        """Return a unit vector in the same direction.

        Raises ValueError for a zero-length vector.
        """
        mag = self.magnitude()
        if mag == 0.0:
            raise ValueError("cannot normalize a zero-length vector")
        return self / mag

    def project_to_plane(self, normal: Vec3) -> Vec3:
        """Project onto the plane through the origin with the given normal."""
        norm_sq = normal.dot(normal)
        if norm_sq == 0.0:
            raise ValueError("plane normal must be non-zero")
        return self - normal * (self.dot(normal) / norm_sq)


@dataclass(frozen=True, slots=True)
class Quaternion:
    """A quaternion, used here as a 3D rotation."""

    w: float
    x: float
    y: float
    z: float

    @classmethod
    def identity(cls) -> Quaternion:
        return cls(1.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_axis_angle(cls, axis: Vec3, angle: float) -> Quaternion:
        """Rotation of `angle` radians around `axis` (right-handed)."""
        unit = axis.to_normalized()
        half = angle / 2.0
        s = math.sin(half)
        return cls(math.cos(half), unit.x * s, unit.y * s, unit.z * s)

    @classmethod
    def from_unit_vecs(cls, v0: Vec3, v1: Vec3) -> Quaternion:
        """The shortest rotation taking unit vector `v0` onto unit vector `v1`."""
        dot = v0.dot(v1)
        if dot > 1.0 - _PARALLEL_EPS:
            return cls.identity()
        if dot < -1.0 + _PARALLEL_EPS:
            axis = Vec3(1.0, 0.0, 0.0).cross(v0)
            if axis.magnitude() < 1e-6:
                axis = Vec3(0.0, 1.0, 0.0).cross(v0)
            return cls.from_axis_angle(axis, math.pi)
        c = v0.cross(v1)
        return cls(1.0 + dot, c.x, c.y, c.z)._normalized()

    def _normalized(self) -> Quaternion:
        mag = math.sqrt(self.w**2 + self.x**2 + self.y**2 + self.z**2)
        if mag == 0.0:
            raise ValueError("cannot normalize a zero quaternion")
        return Quaternion(self.w / mag, self.x / mag, self.y / mag, self.z / mag)

    def __mul__(self, other: Quaternion) -> Quaternion:
        """Hamilton product; `(a * b).rotate_vec(v) == a.rotate_vec(b.rotate_vec(v))`."""
        return Quaternion(
            self.w * other.w - self.x * other.x - self.y * other.y - self.z * other.z,
            self.w * other.x + self.x * other.w + self.y * other.z - self.z * other.y,
            self.w * other.y - self.x * other.z + self.y * other.w + self.z * other.x,
            self.w * other.z + self.x * other.y - self.y * other.x + self.z * other.w,
        )

    def inverse(self) -> Quaternion:
        norm_sq = self.w**2 + self.x**2 + self.y**2 + self.z**2
        if norm_sq == 0.0:
            raise ValueError("a zero quaternion has no inverse")
        return Quaternion(
            self.w / norm_sq, -self.x / norm_sq, -self.y / norm_sq, -self.z / norm_sq
        )

    def rotate_vec(self, vec: Vec3) -> Vec3:
        """Rotate a vector by this (unit) quaternion."""
        q = Vec3(self.x, self.y, self.z)
        t = q.cross(vec) * 2.0
        return vec + t * self.w + q.cross(t)


def det_from_cols(a: Vec3, b: Vec3, c: Vec3) -> float:
    """Determinant of the 3x3 matrix whose columns are `a`, `b` and `c`."""
    return a.dot(b.cross(c))