# clayutils

A small maths and utility toolkit for XR and 3D rendering code. All value
types are immutable.

## Modules

### `clayutils.vector`

- `rcp_sqrt(x)` returns `1/sqrt(x)`. It returns `1.0` when `x` is below the
  smallest normal single-precision float.
- `Vec3` supports `+`, `-`, scaling by a number (`v * 2.0` or `2.0 * v`) and
  unary `-`. It also has `splat`, `minimum`, `maximum`, `decay`, `lerp`,
  `dot`, `cross`, `normalized` and `length`. `decay` moves each component
  toward zero and stops at zero.
- `Vec4` is a plain four-component vector.
- `Quat` is stored as `(x, y, z, w)`. It has `identity`, `from_axis_angle`,
  `lerp` (normalised, along the shorter arc), `conjugate` and `rotate`. With
  `a * b`, rotation `a` is applied first and then `b`.
- `Pose` holds an `orientation` quaternion and a `position` vector.

### `clayutils.matrix`

- `Fov` holds `angle_left`, `angle_right`, `angle_up` and `angle_down`, all in
  radians.
- `Mat4` is a column-major 4x4 matrix of 16 floats.
  - Constructors: `identity`, `translation`, `rotation` (Euler angles in
    degrees), `scaling`, `from_quaternion`, `translation_rotation_scale`,
    `projection` and `projection_fov`.
  - Projections use a Y-down, `[0, 1]` depth clip space. The far plane is
    placed at infinity when `far_z <= near_z`.
  - Operations: `a @ b`, `transposed`, `minor`, `inverted`,
    `inverted_rigid_body` and `offset_scale_for_bounds`. `inverted` raises
    `ValueError` for a singular matrix.
  - Predicates: `is_affine`, `is_orthogonal`, `is_orthonormal` and
    `is_rigid_body`.
  - Decomposition: `get_translation`, `get_rotation` and `get_scale`. They
    raise `ValueError` if the matrix is not affine and orthogonal.
  - Transforms: `transform_vector3` (with the divide by w),
    `transform_vector4`, `transform_bounds` (affine matrices only) and
    `cull_bounds`.

### `clayutils.views`

- `head_lock_view_matrix(pose)`
- `world_lock_view_matrix(eye_pose, camera_position, camera_orientation, head_pose)`
- `frustum(left, right, bottom, top, near_z, far_z)` builds a right-handed
  perspective with `[-1, 1]` depth. It raises `ValueError` when the bounds are
  degenerate.
- `projection_matrix(fov, near_z, far_z)` builds a frustum from a `Fov` and
  flips Y.
- `is_ray_intersecting_sphere(ray_origin, ray_dir, sphere_center, sphere_radius)`

### `clayutils.files`

- `load_file(path)` returns a `FileData`. It has a `data` attribute holding
  bytes and a `size` attribute.
- `load_image(path)` decodes an image with Pillow and returns an `ImageData`
  with `pixels`, `width`, `height` and `channels`. The pixels are 8 bits per
  channel and keep the image's own channel count, from 1 to 4.
- Both raise `FileLoadError`, a subclass of `OSError`, when the file cannot
  be read or decoded.

### `clayutils.debug`

- `Severity` and `MessageType` are `IntFlag`s.
- `severity_names` and `message_type_names` return comma-separated labels such
  as `"INFO,WARN"` or `"GEN,SPEC"`.
- `format_debug_message(function_name, severity, message_type, message_id, message)`
  builds a one-line report.
- `log_info`, `log_warning` and `log_error` write a prefixed line to the given
  stream, or to standard output if none is given.
- `bitwise_check`, `align` (for power-of-two alignments) and
  `contains_string` are small helpers.
- `LineSplitter` collects text through `feed()` and returns only complete
  lines. `pending()` returns the unfinished remainder.

## What it does not do

This package only does maths and loading. It does not open a window, talk to a
GPU or a headset, play audio or render anything. It also provides no command
line tool.

## Installing

```
pip install .
```

To run the tests, install with the test extra and then run pytest:

```
pip install .[test]
pytest
```

## Example

```python
import math

from clayutils.vector import Vec3, Quat
from clayutils.matrix import Mat4, Fov
from clayutils.views import is_ray_intersecting_sphere

turn = Quat.from_axis_angle(Vec3(0.0, 1.0, 0.0), math.pi / 2)
model = Mat4.translation_rotation_scale(Vec3(1.0, 2.0, 3.0), turn, Vec3(1.0, 1.0, 1.0))
print(model.get_translation())          # Vec3(x=1.0, y=2.0, z=3.0)

view = Mat4.translation(0.0, 0.0, -5.0)
model_view = view @ model

fov = Fov(-0.8, 0.8, 0.7, -0.7)
proj = Mat4.projection_fov(fov, 0.05, 100.0)

hit = is_ray_intersecting_sphere(Vec3(0, 0, 0), Vec3(0, 0, -1), Vec3(0, 0, -5), 1.0)
print(hit)                              # True
```