"""Small value types for 3D math: vectors, quaternions and poses."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator

SMALLEST_NON_DENORMAL = 1.1754943508222875e-38


def rcp_sqrt(x: float) -> float:
    """Return 1/sqrt(x), or 1.0 when x is too small to invert safely."""
    if x >= SMALLEST_NON_DENORMAL:
        return 1.0 / math.sqrt(x)
    return 1.0


def _decay_component(value: float, amount: float) -> float:
    if abs(value) > amount:
        return value - amount if value > 0.0 else value + amount
    return 0.0


@dataclass(frozen=True)
class Vec3:
    """An immutable three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def splat(cls, value: float) -> Vec3:
        """Return a vector with every component set to ``value``."""
        return cls(value, value, value)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float) -> Vec3:
        if not isinstance(factor, (int, float)):
            return NotImplemented
        return Vec3(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def minimum(self, other: Vec3) -> Vec3:
        """Component-wise minimum."""
        return Vec3(min(self.x, other.x), min(self.y, other.y), min(self.z, other.z))

    def maximum(self, other: Vec3) -> Vec3:
        """Component-wise maximum."""
        return Vec3(max(self.x, other.x), max(self.y, other.y), max(self.z, other.z))

    def decay(self, value: float) -> Vec3:
        """Move each component towards zero by ``value``, clamping at zero."""
        return Vec3(
            _decay_component(self.x, value),
            _decay_component(self.y, value),
            _decay_component(self.z, value),
        )

    def lerp(self, other: Vec3, fraction: float) -> Vec3:
        """Linear interpolation from this vector to ``other``."""
        return Vec3(
            self.x + fraction * (other.x - self.x),
            self.y + fraction * (other.y - self.y),
            self.z + fraction * (other.z - self.z),
        )

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        """Right-handed cross product."""
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def normalized(self) -> Vec3:
        """Return a unit-length copy; a near-zero vector is returned unchanged."""
        return self * rcp_sqrt(self.dot(self))

    def length(self) -> float:
        return math.sqrt(self.dot(self))


@dataclass(frozen=True)
class Vec4:
    """An immutable four-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z
        yield self.w


@dataclass(frozen=True)
class Quat:
    """An immutable quaternion stored as (x, y, z, w)."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    @classmethod
    def identity(cls) -> Quat:
        return cls(0.0, 0.0, 0.0, 1.0)

    @classmethod
    def from_axis_angle(cls, axis: Vec3, angle: float) -> Quat:
        """Rotation of ``angle`` radians around ``axis`` (need not be unit length)."""
        s = math.sin(angle / 2.0)
        length_rcp = rcp_sqrt(axis.dot(axis))
        return cls(
            s * axis.x * length_rcp,
            s * axis.y * length_rcp,
            s * axis.z * length_rcp,
            math.cos(angle / 2.0),
        )

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    def lerp(self, other: Quat, fraction: float) -> Quat:
        """Normalised linear interpolation along the shorter arc."""
        s = self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w
        fa = 1.0 - fraction
        fb = -fraction if s < 0.0 else fraction
        x = self.x * fa + other.x * fb
        y = self.y * fa + other.y * fb
        z = self.z * fa + other.z * fb
        w = self.w * fa + other.w * fb
        length_rcp = rcp_sqrt(x * x + y * y + z * z + w * w)
        return Quat(x * length_rcp, y * length_rcp, z * length_rcp, w * length_rcp)

    def __mul__(self, other: Quat) -> Quat:
        """Compose rotations: ``self`` is applied first, then ``other``."""
        if not isinstance(other, Quat):
            return NotImplemented
        a, b = self, other
        return Quat(
            (b.w * a.x) + (b.x * a.w) + (b.y * a.z) - (b.z * a.y),
            (b.w * a.y) - (b.x * a.z) + (b.y * a.w) + (b.z * a.x),
            (b.w * a.z) + (b.x * a.y) - (b.y * a.x) + (b.z * a.w),
            (b.w * a.w) - (b.x * a.x) - (b.y * a.y) - (b.z * a.z),
        )

    def conjugate(self) -> Quat:
        return Quat(-self.x, -self.y, -self.z, self.w)

    def rotate(self, vector: Vec3) -> Vec3:
        """Rotate ``vector`` by this (unit) quaternion."""
        axis = Vec3(self.x, self.y, self.z)
        uv = axis.cross(vector)
        uuv = axis.cross(uv)
        return vector + (uv * self.w + uuv) * 2.0


@dataclass(frozen=True)
class Pose:
    """An orientation and a position."""

    orientation: Quat = field(default_factory=Quat.identity)
    position: Vec3 = field(default_factory=Vec3)