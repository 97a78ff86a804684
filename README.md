# sgkit

A compact, dependency-free toolkit for real-time 3D graphics code. Vectors,
matrices and quaternions are plain tuples of floats.

- **Vectors** (`sgkit.vec`): `cross`, `dot`, `length`, `normalize`,
  `distance`, `compare_sqd_dist`, `make_normal`, `tri_area`,
  `angle_between` / `angle_between_normalized` (an angle in radians from 0 to
  2π, measured around a given normal), `reflect_in_plane`, `hpr_from_vec`.
  It also has the `Line3` and `LineSegment3` dataclasses with
  `dist_squared_to_line` and `dist_squared_to_line_segment`.
- **Matrices** (`sgkit.matrix`): 4x4 matrices stored as four rows, with the
  translation in the last row. It has `identity`, `make_rot_mat4`,
  `make_trans_mat4`, `make_look_at_mat4`, `make_pick_matrix` and
  `make_coord_mat4` (position plus heading/pitch/roll in degrees). You can
  combine matrices with `mult_mat4`, `pre_mult_mat4` and `post_mult_mat4`, and
  invert them with `invert_mat4` or `transpose_negate_mat4` (the latter only
  for rotate-and-translate matrices). Points and vectors go through
  `xform_vec3`, `xform_pnt3`, `xform_pnt4` and `full_xform_pnt3`.
  `coord_from_mat4` recovers a `Coord` (position and heading/pitch/roll)
  from a matrix.
- **Quaternions** (`sgkit.quat`): stored as `(x, y, z, w)`, with angles in
  degrees. It converts to and from angle/axis, Euler angles and matrices, and
  has `mult_quat`, `slerp_quat` and `slerp_quat2`.
- **Bounding volumes** (`sgkit.bounds`): an axis-aligned `Box` and a `Sphere`,
  each empty until extended with points, boxes or spheres. There is also a
  perspective `Frustum` looking down -Z. It can compute an outcode, test
  whether it contains a point, and classify a sphere as a `Containment`:
  `OUTSIDE`, `INSIDE` or `STRADDLE`.
- **Textures** (`sgkit.texture`): puts texels and 1-bit bitmaps into twiddled
  (Morton) order, and builds two-colour VQ textures. Each such texture is a
  2048-byte codebook followed by the indices.
- **TXF fonts** (`sgkit.txf`): `parse_txf` and `load_txf` read TXF files with
  a 1-bit-per-pixel image into a `TxfFont` of `TxfGlyph` records.
- **Textured fonts** (`sgkit.font`): `TexFont` holds `Glyph` metrics. It
  measures text with `bbox` and lays text out with `putch` / `puts`. These
  return lists of `Vertex` quads and the pen position that follows.
  `load_font` and `font_from_txf` build a proportional font and its VQ texture
  from a TXF file.

## Errors

Failures are recorded in `sgkit.errors` and then raised as `SgError`. Font
file problems raise the subclass `TxfError`.

- `get_error()` returns the last message and `clear_error()` forgets it.
- `set_error_callback()` installs a handler that is called with
  `(severity, message)` before the exception is raised.
- Without a handler, messages are logged.
- `normalize` raises `ValueError` for a zero-length vector.

## Installation

```
pip install .
```

## Examples

```python
from sgkit.matrix import make_rot_mat4, xform_pnt3, invert_mat4

rot = make_rot_mat4(90.0, (0.0, 0.0, 1.0))
point = xform_pnt3((1.0, 0.0, 0.0), rot)
back = xform_pnt3(point, invert_mat4(rot))
```

```python
from sgkit.bounds import Box, Sphere, Frustum, Containment

box = Box()
box.extend_point((0.0, 0.0, 0.0))
box.extend_point((1.0, 2.0, 3.0))

sphere = Sphere()
sphere.extend_box(box)
assert sphere.intersects_box(box)

frustum = Frustum(hfov=60.0, vfov=45.0, near=1.0, far=100.0)
frustum.contains_sphere(Sphere((0.0, 0.0, -10.0), 1.0))  # Containment.INSIDE
```

```python
from sgkit.font import load_font

font = load_font("helvetica.txf")
left, right, bottom, top = font.bbox("Hello\nworld", 16.0, 0.0)
vertices, pen = font.puts((0.0, 0.0, 0.0), 16.0, 0.0, "Hello", (1.0, 1.0, 1.0, 1.0))
```

## What it does not do

- sgkit does no drawing. The font code produces vertex lists and texture bytes
  for you to hand to your own renderer.
- `load_font` recognises only `.txf` files.
- TXF files that store their image in byte format are rejected with
  `TxfError`.
- There is no command-line tool.

## Running the tests

```
pip install .[test]
pytest
```