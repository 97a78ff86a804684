import pytest

from sgkit.errors import SgError, set_error_callback
from sgkit.matrix import (
    coord_from_mat4,
    full_xform_pnt3,
    identity,
    invert_mat4,
    make_coord_mat4,
    make_look_at_mat4,
    make_pick_matrix,
    make_rot_mat4,
    make_trans_mat4,
    mult_mat4,
    post_mult_mat4,
    pre_mult_mat4,
    transpose_negate_mat4,
    xform_pnt3,
    xform_pnt4,
    xform_vec3,
)
from sgkit.vec import length, normalize


def _flat(m):
    return [v for row in m for v in row]


@pytest.fixture
def quiet_errors():
    set_error_callback(lambda sev, msg: None)
    yield
    set_error_callback(None)


def _sample():
    return mult_mat4(make_trans_mat4(1.0, -2.0, 3.5), make_rot_mat4(37.0, (1.0, 2.0, 3.0)))


def _rows_scale(s):
    return ((s, 0.0, 0.0, 0.0), (0.0, s, 0.0, 0.0), (0.0, 0.0, s, 0.0), (0.0, 0.0, 0.0, 1.0))


def test_identity_is_neutral_for_multiplication():
    m = _sample()
    assert _flat(mult_mat4(m, identity())) == pytest.approx(_flat(m))
    assert _flat(mult_mat4(identity(), m)) == pytest.approx(_flat(m))


def test_invert_gives_identity_product():
    m = mult_mat4(make_coord_mat4(1.0, 2.0, 3.0, 10.0, 20.0, 30.0), _rows_scale(2.0))
    inv = invert_mat4(m)
    assert _flat(mult_mat4(inv, m)) == pytest.approx(_flat(identity()), abs=1e-9)
    assert _flat(mult_mat4(m, inv)) == pytest.approx(_flat(identity()), abs=1e-9)


def test_invert_singular_raises(quiet_errors):
    with pytest.raises(SgError):
        invert_mat4(_rows_scale(0.0))


def test_transpose_negate_matches_inverse_for_rigid_transform():
    m = _sample()
    assert _flat(transpose_negate_mat4(m)) == pytest.approx(_flat(invert_mat4(m)))


def test_rotation_preserves_length_and_undoes():
    axis = (0.3, -1.0, 2.0)
    v = (1.0, 2.0, 3.0)
    rotated = xform_vec3(v, make_rot_mat4(50.0, axis))
    assert length(rotated) == pytest.approx(length(v))
    assert xform_vec3(rotated, make_rot_mat4(-50.0, axis)) == pytest.approx(v)


def test_rotation_keeps_axis_fixed():
    axis = (0.3, -1.0, 2.0)
    assert xform_vec3(axis, make_rot_mat4(75.0, axis)) == pytest.approx(axis)


def test_translation_moves_points_not_directions():
    m = make_trans_mat4((4.0, 5.0, 6.0))
    assert xform_pnt3((1.0, 1.0, 1.0), m) == pytest.approx((5.0, 6.0, 7.0))
    assert xform_vec3((1.0, 1.0, 1.0), m) == pytest.approx((1.0, 1.0, 1.0))


def test_trans_mat4_vector_and_scalar_forms_agree():
    assert make_trans_mat4((1.0, 2.0, 3.0)) == make_trans_mat4(1.0, 2.0, 3.0)


def test_full_xform_matches_affine_xform():
    m = _sample()
    p = (0.5, -1.5, 2.0)
    assert full_xform_pnt3(p, m) == pytest.approx(xform_pnt3(p, m))


def test_xform_pnt4_with_unit_w_matches_pnt3():
    m = _sample()
    p = (0.5, -1.5, 2.0)
    x, y, z, w = xform_pnt4((*p, 1.0), m)
    assert (x, y, z) == pytest.approx(xform_pnt3(p, m))
    assert w == pytest.approx(1.0)


def test_pre_and_post_mult_compose_translations():
    a = make_trans_mat4(1.0, 2.0, 3.0)
    b = make_rot_mat4(90.0, (0.0, 0.0, 1.0))
    assert pre_mult_mat4(a, b) == mult_mat4(a, b)
    assert post_mult_mat4(a, b) == mult_mat4(b, a)


def test_coord_round_trip():
    m = make_coord_mat4(1.0, 2.0, 3.0, 30.0, 20.0, 10.0)
    coord = coord_from_mat4(m)
    assert coord.xyz == pytest.approx((1.0, 2.0, 3.0))
    assert coord.hpr == pytest.approx((30.0, 20.0, 10.0))


def test_coord_from_zero_matrix_raises(quiet_errors):
    zero = ((0.0,) * 4,) * 4
    with pytest.raises(SgError):
        coord_from_mat4(zero)


def test_coord_from_pure_translation_has_no_rotation():
    coord = coord_from_mat4(make_trans_mat4(1.0, 2.0, 3.0))
    assert coord.xyz == pytest.approx((1.0, 2.0, 3.0))
    assert coord.hpr == pytest.approx((0.0, 0.0, 0.0))


def test_look_at_points_forward_axis_at_center():
    eye = (1.0, 2.0, 3.0)
    center = (4.0, -2.0, 3.0)
    m = make_look_at_mat4(eye, center, (0.0, 0.0, 1.0))
    expected = normalize(tuple(c - e for c, e in zip(center, eye)))
    assert xform_vec3((0.0, 1.0, 0.0), m) == pytest.approx(expected)
    assert m[3][:3] == pytest.approx(eye)


def test_pick_matrix_over_whole_viewport_is_identity():
    viewport = (10.0, 20.0, 640.0, 480.0)
    m = make_pick_matrix(10.0 + 320.0, 20.0 + 240.0, 640.0, 480.0, viewport)
    assert _flat(m) == pytest.approx(_flat(identity()))