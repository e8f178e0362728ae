"""View and projection matrices for head-mounted rendering, plus ray picking."""

from __future__ import annotations

import math

from clayutils.matrix import Fov, Mat4
from clayutils.vector import Pose, Quat, Vec3


def head_lock_view_matrix(pose: Pose) -> Mat4:
    """View matrix that only undoes the head orientation, ignoring position."""
    return Mat4.from_quaternion(pose.orientation.conjugate())


def world_lock_view_matrix(
    eye_pose: Pose,
    camera_position: Vec3,
    camera_orientation: Quat,
    head_pose: Pose,
) -> Mat4:
    """View matrix for an eye whose tracked pose is carried by a movable camera rig."""
    head_position = head_pose.position
    rotated_head = camera_orientation.rotate(head_position)
    rotated_eye = camera_orientation.rotate(eye_pose.position - head_position)
    eye_final = rotated_head + camera_position + rotated_eye
    translation = Mat4.translation(-eye_final.x, -eye_final.y, -eye_final.z)
    # The eye orientation is applied first, then the camera orientation.
    combined = eye_pose.orientation * camera_orientation
    return Mat4.from_quaternion(combined.conjugate()) @ translation


def frustum(
    left: float,
    right: float,
    bottom: float,
    top: float,
    near_z: float,
    far_z: float,
) -> Mat4:
    """Right-handed perspective frustum mapping depth to the [-1, 1] range."""
    width = right - left
    height = top - bottom
    depth = far_z - near_z
    if width == 0.0 or height == 0.0 or depth == 0.0:
        raise ValueError("frustum bounds must not be degenerate")
    return Mat4((
        2.0 * near_z / width, 0.0, 0.0, 0.0,
        0.0, 2.0 * near_z / height, 0.0, 0.0,
        (right + left) / width, (top + bottom) / height, -(far_z + near_z) / depth, -1.0,
        0.0, 0.0, -(2.0 * far_z * near_z) / depth, 0.0,
    ))


def projection_matrix(fov: Fov, near_z: float, far_z: float) -> Mat4:
    """Projection for the given field of view, with Y flipped for a Y-down clip space."""
    left = math.tan(fov.angle_left) * near_z
    right = math.tan(fov.angle_right) * near_z
    bottom = math.tan(fov.angle_down) * near_z
    top = math.tan(fov.angle_up) * near_z
    # Swapping top and bottom flips the Y axis.
    return frustum(left, right, top, bottom, near_z, far_z)


def is_ray_intersecting_sphere(
    ray_origin: Vec3,
    ray_dir: Vec3,
    sphere_center: Vec3,
    sphere_radius: float,
) -> bool:
    """True if the line through ``ray_origin`` along ``ray_dir`` touches the sphere."""
    oc = ray_origin - sphere_center
    a = ray_dir.dot(ray_dir)
    b = 2.0 * oc.dot(ray_dir)
    c = oc.dot(oc) - sphere_radius * sphere_radius
    return b * b - 4.0 * a * c >= 0.0