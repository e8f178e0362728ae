import math

import pytest

from clayutils.matrix import Fov, Mat4
from clayutils.vector import Pose, Quat, Vec3
from clayutils.views import (
    frustum,
    head_lock_view_matrix,
    is_ray_intersecting_sphere,
    projection_matrix,
    world_lock_view_matrix,
)


def _assert_mat_close(a, b, tol=1e-9):
    assert all(x == pytest.approx(y, abs=tol) for x, y in zip(a, b))


def _assert_vec_close(a, b, tol=1e-9):
    assert all(x == pytest.approx(y, abs=tol) for x, y in zip(a, b))


def test_head_lock_identity_pose_is_identity():
    _assert_mat_close(head_lock_view_matrix(Pose()), Mat4.identity())


def test_head_lock_ignores_position():
    pose = Pose(Quat.identity(), Vec3(3.0, 4.0, 5.0))
    _assert_mat_close(head_lock_view_matrix(pose), Mat4.identity())


def test_head_lock_inverts_orientation():
    q = Quat.from_axis_angle(Vec3(1.0, 2.0, 0.5), 0.8)
    view = head_lock_view_matrix(Pose(q, Vec3()))
    _assert_mat_close(view @ Mat4.from_quaternion(q), Mat4.identity())


def test_world_lock_moves_eye_to_origin():
    eye = Pose(Quat.identity(), Vec3(0.1, 1.6, 0.0))
    head = Pose(Quat.identity(), Vec3(0.0, 1.6, 0.0))
    camera = Vec3(2.0, 0.0, -3.0)
    view = world_lock_view_matrix(eye, camera, Quat.identity(), head)
    eye_world = camera + eye.position
    _assert_vec_close(view.transform_vector3(eye_world), Vec3())


def test_world_lock_with_rotation_maps_eye_to_origin():
    cam_q = Quat.from_axis_angle(Vec3(0.0, 1.0, 0.0), math.pi / 2)
    eye = Pose(Quat.identity(), Vec3(0.0, 0.0, 0.0))
    head = Pose(Quat.identity(), Vec3(1.0, 0.0, 0.0))
    camera = Vec3(0.0, 0.0, 0.0)
    view = world_lock_view_matrix(eye, camera, cam_q, head)
    # Eye final position = rotated head + camera + rotated(eye - head)
    eye_world = cam_q.rotate(head.position) + camera + cam_q.rotate(eye.position - head.position)
    _assert_vec_close(view.transform_vector3(eye_world), Vec3())


def test_world_lock_rotation_part_is_orthonormal():
    cam_q = Quat.from_axis_angle(Vec3(0.0, 1.0, 0.0), 0.3)
    eye_q = Quat.from_axis_angle(Vec3(1.0, 0.0, 0.0), 0.2)
    view = world_lock_view_matrix(
        Pose(eye_q, Vec3(0.0, 1.0, 0.0)), Vec3(1.0, 2.0, 3.0), cam_q, Pose(Quat.identity(), Vec3())
    )
    assert view.is_rigid_body(1e-9)


def test_frustum_near_and_far_depths():
    m = frustum(-1.0, 1.0, -1.0, 1.0, 1.0, 10.0)
    assert m.transform_vector3(Vec3(0.0, 0.0, -1.0)).z == pytest.approx(-1.0)
    assert m.transform_vector3(Vec3(0.0, 0.0, -10.0)).z == pytest.approx(1.0)


def test_frustum_corner_maps_to_clip_corner():
    m = frustum(-0.5, 2.0, -1.5, 0.75, 0.5, 20.0)
    p = m.transform_vector3(Vec3(2.0, 0.75, -0.5))
    _assert_vec_close(p, Vec3(1.0, 1.0, -1.0))
    q = m.transform_vector3(Vec3(-0.5, -1.5, -0.5))
    _assert_vec_close(q, Vec3(-1.0, -1.0, -1.0))


def test_frustum_degenerate_raises():
    with pytest.raises(ValueError):
        frustum(1.0, 1.0, -1.0, 1.0, 0.1, 10.0)


def test_projection_matrix_flips_y():
    fov = Fov(-0.5, 0.5, 0.4, -0.3)
    near, far = 0.05, 100.0
    m = projection_matrix(fov, near, far)
    top_right = Vec3(math.tan(0.5) * near, math.tan(0.4) * near, -near)
    _assert_vec_close(m.transform_vector3(top_right), Vec3(1.0, -1.0, -1.0))
    bottom_left = Vec3(math.tan(-0.5) * near, math.tan(-0.3) * near, -near)
    _assert_vec_close(m.transform_vector3(bottom_left), Vec3(-1.0, 1.0, -1.0))


def test_projection_matrix_far_plane_depth():
    m = projection_matrix(Fov(-0.7, 0.7, 0.7, -0.7), 0.1, 50.0)
    assert m.transform_vector3(Vec3(0.0, 0.0, -50.0)).z == pytest.approx(1.0)


def test_ray_hits_sphere():
    assert is_ray_intersecting_sphere(Vec3(0, 0, -5), Vec3(0, 0, 1), Vec3(0, 0, 0), 1.0) is True


def test_ray_misses_sphere():
    assert is_ray_intersecting_sphere(Vec3(0, 3, -5), Vec3(0, 0, 1), Vec3(0, 0, 0), 1.0) is False


def test_ray_tangent_counts_as_hit():
    assert is_ray_intersecting_sphere(Vec3(0, 1, -5), Vec3(0, 0, 1), Vec3(0, 0, 0), 1.0) is True


def test_ray_test_is_a_line_test():
    # The sphere lies behind the origin, but the line through it still hits.
    assert is_ray_intersecting_sphere(Vec3(0, 0, 5), Vec3(0, 0, 1), Vec3(0, 0, 0), 1.0) is True