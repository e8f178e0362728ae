"""Column-major 4x4 matrices and field-of-view helpers for 3D rendering."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from itertools import product
from typing import Iterator

from clayutils.vector import Quat, Vec3, Vec4, rcp_sqrt

_IDENTITY = (
    1.0, 0.0, 0.0, 0.0,
    0.0, 1.0, 0.0, 0.0,
    0.0, 0.0, 1.0, 0.0,
    0.0, 0.0, 0.0, 1.0,
)

_CHECK_EPSILON = 1e-4


@dataclass(frozen=True)
class Fov:
    """Field of view given as four angles in radians."""

    angle_left: float
    angle_right: float
    angle_up: float
    angle_down: float


@dataclass(frozen=True)
class Mat4:
    """An immutable 4x4 matrix stored column-major, meant for pre-multiplication."""

    m: tuple[float, ...] = field(default=_IDENTITY)

    def __post_init__(self) -> None:
        values = tuple(float(v) for v in self.m)
        if len(values) != 16:
            raise ValueError(f"a 4x4 matrix needs 16 values, got {len(values)}")
        object.__setattr__(self, "m", values)

    def __iter__(self) -> Iterator[float]:
        return iter(self.m)

    def __getitem__(self, index: int) -> float:
        return self.m[index]

    # -- constructors -----------------------------------------------------

    @classmethod
    def identity(cls) -> Mat4:
        return cls(_IDENTITY)

    @classmethod
    def translation(cls, x: float, y: float, z: float) -> Mat4:
        return cls((
            1.0, 0.0, 0.0, 0.0,
            0.0, 1.0, 0.0, 0.0,
            0.0, 0.0, 1.0, 0.0,
            x, y, z, 1.0,
        ))

    @classmethod
    def rotation(cls, degrees_x: float, degrees_y: float, degrees_z: float) -> Mat4:
        """Rotation from Euler angles in degrees (pitch, yaw, roll for -Z forward, +Y up)."""
        sin_x = math.sin(math.radians(degrees_x))
        cos_x = math.cos(math.radians(degrees_x))
        rot_x = cls((1, 0, 0, 0, 0, cos_x, sin_x, 0, 0, -sin_x, cos_x, 0, 0, 0, 0, 1))
        sin_y = math.sin(math.radians(degrees_y))
        cos_y = math.cos(math.radians(degrees_y))
        rot_y = cls((cos_y, 0, -sin_y, 0, 0, 1, 0, 0, sin_y, 0, cos_y, 0, 0, 0, 0, 1))
        sin_z = math.sin(math.radians(degrees_z))
        cos_z = math.cos(math.radians(degrees_z))
        rot_z = cls((cos_z, sin_z, 0, 0, -sin_z, cos_z, 0, 0, 0, 0, 1, 0, 0, 0, 0, 1))
        return rot_z @ (rot_y @ rot_x)

    @classmethod
    def scaling(cls, x: float, y: float, z: float) -> Mat4:
        return cls((
            x, 0.0, 0.0, 0.0,
            0.0, y, 0.0, 0.0,
            0.0, 0.0, z, 0.0,
            0.0, 0.0, 0.0, 1.0,
        ))

    @classmethod
    def from_quaternion(cls, quat: Quat) -> Mat4:
        x2 = quat.x + quat.x
        y2 = quat.y + quat.y
        z2 = quat.z + quat.z

        xx2 = quat.x * x2
        yy2 = quat.y * y2
        zz2 = quat.z * z2

        yz2 = quat.y * z2
        wx2 = quat.w * x2
        xy2 = quat.x * y2
        wz2 = quat.w * z2
        xz2 = quat.x * z2
        wy2 = quat.w * y2

        return cls((
            1.0 - yy2 - zz2, xy2 + wz2, xz2 - wy2, 0.0,
            xy2 - wz2, 1.0 - xx2 - zz2, yz2 + wx2, 0.0,
            xz2 + wy2, yz2 - wx2, 1.0 - xx2 - yy2, 0.0,
            0.0, 0.0, 0.0, 1.0,
        ))

    @classmethod
    def translation_rotation_scale(cls, translation: Vec3, rotation: Quat, scale: Vec3) -> Mat4:
        """Combined translate(rotate(scale(object))) matrix."""
        scale_matrix = cls.scaling(scale.x, scale.y, scale.z)
        rotation_matrix = cls.from_quaternion(rotation)
        translation_matrix = cls.translation(translation.x, translation.y, translation.z)
        return translation_matrix @ (rotation_matrix @ scale_matrix)

    @classmethod
    def projection(
        cls,
        tan_left: float,
        tan_right: float,
        tan_up: float,
        tan_down: float,
        near_z: float,
        far_z: float,
    ) -> Mat4:
        """Vulkan-style projection (+Y down, [0,1] depth); far plane at infinity if far_z <= near_z."""
        tan_width = tan_right - tan_left
        tan_height = tan_down - tan_up
        offset_z = 0.0

        if far_z <= near_z:
            m10 = -1.0
            m14 = -(near_z + offset_z)
        else:
            m10 = -(far_z + offset_z) / (far_z - near_z)
            m14 = -(far_z * (near_z + offset_z)) / (far_z - near_z)

        return cls((
            2.0 / tan_width, 0.0, 0.0, 0.0,
            0.0, 2.0 / tan_height, 0.0, 0.0,
            (tan_right + tan_left) / tan_width, (tan_up + tan_down) / tan_height, m10, -1.0,
            0.0, 0.0, m14, 0.0,
        ))

    @classmethod
    def projection_fov(cls, fov: Fov, near_z: float, far_z: float) -> Mat4:
        return cls.projection(
            math.tan(fov.angle_left),
            math.tan(fov.angle_right),
            math.tan(fov.angle_up),
            math.tan(fov.angle_down),
            near_z,
            far_z,
        )

    # -- arithmetic -------------------------------------------------------

    def __matmul__(self, other: Mat4) -> Mat4:
        if not isinstance(other, Mat4):
            return NotImplemented
        a, b = self.m, other.m
        return Mat4(tuple(
            sum(a[k * 4 + row] * b[col * 4 + k] for k in range(4))
            for col, row in product(range(4), range(4))
        ))

    def transposed(self) -> Mat4:
        return Mat4(tuple(self.m[row * 4 + col] for col, row in product(range(4), range(4))))

    def minor(self, r0: int, r1: int, r2: int, c0: int, c1: int, c2: int) -> float:
        """Determinant of the 3x3 sub-matrix picked by the given rows and columns."""
        m = self.m
        return (
            m[4 * r0 + c0] * (m[4 * r1 + c1] * m[4 * r2 + c2] - m[4 * r2 + c1] * m[4 * r1 + c2])
            - m[4 * r0 + c1] * (m[4 * r1 + c0] * m[4 * r2 + c2] - m[4 * r2 + c0] * m[4 * r1 + c2])
            + m[4 * r0 + c2] * (m[4 * r1 + c0] * m[4 * r2 + c1] - m[4 * r2 + c0] * m[4 * r1 + c1])
        )

    def inverted(self) -> Mat4:
        """General inverse; raises ValueError for a singular matrix."""
        m = self.m
        det = (
            m[0] * self.minor(1, 2, 3, 1, 2, 3)
            - m[1] * self.minor(1, 2, 3, 0, 2, 3)
            + m[2] * self.minor(1, 2, 3, 0, 1, 3)
            - m[3] * self.minor(1, 2, 3, 0, 1, 2)
        )
        if det == 0.0:
            raise ValueError("matrix is singular and cannot be inverted")
        rcp_det = 1.0 / det
        return Mat4((
            self.minor(1, 2, 3, 1, 2, 3) * rcp_det,
            -self.minor(0, 2, 3, 1, 2, 3) * rcp_det,
            self.minor(0, 1, 3, 1, 2, 3) * rcp_det,
            -self.minor(0, 1, 2, 1, 2, 3) * rcp_det,
            -self.minor(1, 2, 3, 0, 2, 3) * rcp_det,
            self.minor(0, 2, 3, 0, 2, 3) * rcp_det,
            -self.minor(0, 1, 3, 0, 2, 3) * rcp_det,
            self.minor(0, 1, 2, 0, 2, 3) * rcp_det,
            self.minor(1, 2, 3, 0, 1, 3) * rcp_det,
            -self.minor(0, 2, 3, 0, 1, 3) * rcp_det,
            self.minor(0, 1, 3, 0, 1, 3) * rcp_det,
            -self.minor(0, 1, 2, 0, 1, 3) * rcp_det,
            -self.minor(1, 2, 3, 0, 1, 2) * rcp_det,
            self.minor(0, 2, 3, 0, 1, 2) * rcp_det,
            -self.minor(0, 1, 3, 0, 1, 2) * rcp_det,
            self.minor(0, 1, 2, 0, 1, 2) * rcp_det,
        ))

    def inverted_rigid_body(self) -> Mat4:
        """Inverse of a rotation-plus-translation matrix."""
        m = self.m
        return Mat4((
            m[0], m[4], m[8], 0.0,
            m[1], m[5], m[9], 0.0,
            m[2], m[6], m[10], 0.0,
            -(m[0] * m[12] + m[1] * m[13] + m[2] * m[14]),
            -(m[4] * m[12] + m[5] * m[13] + m[6] * m[14]),
            -(m[8] * m[12] + m[9] * m[13] + m[10] * m[14]),
            1.0,
        ))

    def offset_scale_for_bounds(self, mins: Vec3, maxs: Vec3) -> Mat4:
        """Matrix mapping the [-1, 1] cube onto the given bounds, then through this matrix."""
        m = self.m
        offset = (maxs + mins) * 0.5
        scale = (maxs - mins) * 0.5
        return Mat4((
            m[0] * scale.x, m[1] * scale.x, m[2] * scale.x, m[3] * scale.x,
            m[4] * scale.y, m[5] * scale.y, m[6] * scale.y, m[7] * scale.y,
            m[8] * scale.z, m[9] * scale.z, m[10] * scale.z, m[11] * scale.z,
            m[12] + m[0] * offset.x + m[4] * offset.y + m[8] * offset.z,
            m[13] + m[1] * offset.x + m[5] * offset.y + m[9] * offset.z,
            m[14] + m[2] * offset.x + m[6] * offset.y + m[10] * offset.z,
            m[15] + m[3] * offset.x + m[7] * offset.y + m[11] * offset.z,
        ))

    # -- predicates -------------------------------------------------------

    def is_affine(self, epsilon: float) -> bool:
        m = self.m
        return (
            abs(m[3]) <= epsilon
            and abs(m[7]) <= epsilon
            and abs(m[11]) <= epsilon
            and abs(m[15] - 1.0) <= epsilon
        )

    def _column_dot(self, i: int, j: int) -> float:
        m = self.m
        return m[4 * i] * m[4 * j] + m[4 * i + 1] * m[4 * j + 1] + m[4 * i + 2] * m[4 * j + 2]

    def _row_dot(self, i: int, j: int) -> float:
        m = self.m
        return m[i] * m[j] + m[4 + i] * m[4 + j] + m[8 + i] * m[8 + j]

    def is_orthogonal(self, epsilon: float) -> bool:
        return all(
            abs(self._column_dot(i, j)) <= epsilon and abs(self._row_dot(i, j)) <= epsilon
            for i, j in product(range(3), range(3))
            if i != j
        )

    def is_orthonormal(self, epsilon: float) -> bool:
        for i, j in product(range(3), range(3)):
            delta = 1.0 if i == j else 0.0
            if abs(delta - self._column_dot(i, j)) > epsilon:
                return False
            if abs(delta - self._row_dot(i, j)) > epsilon:
                return False
        return True

    def is_rigid_body(self, epsilon: float) -> bool:
        return self.is_affine(epsilon) and self.is_orthonormal(epsilon)

    # -- decomposition ----------------------------------------------------

    def _require_affine(self) -> None:
        if not self.is_affine(_CHECK_EPSILON):
            raise ValueError("matrix is not affine")

    def _require_decomposable(self) -> None:
        self._require_affine()
        if not self.is_orthogonal(_CHECK_EPSILON):
            raise ValueError("matrix is not orthogonal")

    def get_translation(self) -> Vec3:
        self._require_decomposable()
        return Vec3(self.m[12], self.m[13], self.m[14])

    def get_rotation(self) -> Quat:
        self._require_decomposable()
        src = self.m
        rx = rcp_sqrt(src[0] * src[0] + src[1] * src[1] + src[2] * src[2])
        ry = rcp_sqrt(src[4] * src[4] + src[5] * src[5] + src[6] * src[6])
        rz = rcp_sqrt(src[8] * src[8] + src[9] * src[9] + src[10] * src[10])
        m00, m01, m02 = src[0] * rx, src[1] * rx, src[2] * rx
        m10, m11, m12 = src[4] * ry, src[5] * ry, src[6] * ry
        m20, m21, m22 = src[8] * rz, src[9] * rz, src[10] * rz

        if m00 + m11 + m22 > 0.0:
            t = m00 + m11 + m22 + 1.0
            s = rcp_sqrt(t) * 0.5
            return Quat((m12 - m21) * s, (m20 - m02) * s, (m01 - m10) * s, s * t)
        if m00 > m11 and m00 > m22:
            t = m00 - m11 - m22 + 1.0
            s = rcp_sqrt(t) * 0.5
            return Quat(s * t, (m01 + m10) * s, (m20 + m02) * s, (m12 - m21) * s)
        if m11 > m22:
            t = -m00 + m11 - m22 + 1.0
            s = rcp_sqrt(t) * 0.5
            return Quat((m01 + m10) * s, s * t, (m12 + m21) * s, (m20 - m02) * s)
        t = -m00 - m11 + m22 + 1.0
        s = rcp_sqrt(t) * 0.5
        return Quat((m20 + m02) * s, (m12 + m21) * s, s * t, (m01 - m10) * s)

    def get_scale(self) -> Vec3:
        self._require_decomposable()
        m = self.m
        return Vec3(
            math.sqrt(m[0] * m[0] + m[1] * m[1] + m[2] * m[2]),
            math.sqrt(m[4] * m[4] + m[5] * m[5] + m[6] * m[6]),
            math.sqrt(m[8] * m[8] + m[9] * m[9] + m[10] * m[10]),
        )

    # -- transforms -------------------------------------------------------

    def transform_vector3(self, vector: Vec3) -> Vec3:
        """Transform a point, dividing by the resulting w."""
        m, v = self.m, vector
        w = m[3] * v.x + m[7] * v.y + m[11] * v.z + m[15]
        rcp_w = 1.0 / w
        return Vec3(
            (m[0] * v.x + m[4] * v.y + m[8] * v.z + m[12]) * rcp_w,
            (m[1] * v.x + m[5] * v.y + m[9] * v.z + m[13]) * rcp_w,
            (m[2] * v.x + m[6] * v.y + m[10] * v.z + m[14]) * rcp_w,
        )

    def transform_vector4(self, vector: Vec4) -> Vec4:
        m, v = self.m, vector
        return Vec4(
            m[0] * v.x + m[4] * v.y + m[8] * v.z + m[12] * v.w,
            m[1] * v.x + m[5] * v.y + m[9] * v.z + m[13] * v.w,
            m[2] * v.x + m[6] * v.y + m[10] * v.z + m[14] * v.w,
            m[3] * v.x + m[7] * v.y + m[11] * v.z + m[15] * v.w,
        )

    def transform_bounds(self, mins: Vec3, maxs: Vec3) -> tuple[Vec3, Vec3]:
        """Axis-aligned bounds enclosing the given bounds after transformation."""
        self._require_affine()
        m = self.m
        center = (mins + maxs) * 0.5
        extents = maxs - center
        new_center = Vec3(
            m[0] * center.x + m[4] * center.y + m[8] * center.z + m[12],
            m[1] * center.x + m[5] * center.y + m[9] * center.z + m[13],
            m[2] * center.x + m[6] * center.y + m[10] * center.z + m[14],
        )
        new_extents = Vec3(
            abs(extents.x * m[0]) + abs(extents.y * m[4]) + abs(extents.z * m[8]),
            abs(extents.x * m[1]) + abs(extents.y * m[5]) + abs(extents.z * m[9]),
            abs(extents.x * m[2]) + abs(extents.y * m[6]) + abs(extents.z * m[10]),
        )
        return new_center - new_extents, new_center + new_extents

    def cull_bounds(self, mins: Vec3, maxs: Vec3) -> bool:
        """True if the bounds lie completely off one side of this clip-space matrix."""
        if maxs.x <= mins.x and maxs.y <= mins.y and maxs.z <= mins.z:
            return False

        corners = [
            self.transform_vector4(Vec4(
                maxs.x if i & 1 else mins.x,
                maxs.y if i & 2 else mins.y,
                maxs.z if i & 4 else mins.z,
                1.0,
            ))
            for i in range(8)
        ]
        return (
            all(c.x <= -c.w for c in corners)
            or all(c.x >= c.w for c in corners)
            or all(c.y <= -c.w for c in corners)
            or all(c.y >= c.w for c in corners)
            or all(c.z <= -c.w for c in corners)
            or all(c.z >= c.w for c in corners)
        )