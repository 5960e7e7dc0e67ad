import math

import numpy as np
import pytest

from miratope.coxeter import Cox
from miratope.geometry import MatrixOrd


def test_a3_matrix():
    expected = Cox([[1.0, 3.0, 2.0], [3.0, 1.0, 3.0], [2.0, 3.0, 1.0]])
    assert Cox.a(3) == expected


def test_i2_matrix():
    assert Cox.i2(5.0) == Cox([[1.0, 5.0], [5.0, 1.0]])


def test_trivial():
    cox = Cox.trivial()
    assert cox.dim() == 1
    assert cox[0, 0] == 1.0


def test_link_is_symmetric():
    cox = Cox.a(4)
    cox.link(0, 3, 7.0)
    assert cox[0, 3] == 7.0
    assert cox[3, 0] == 7.0


def test_b_and_h_first_edges():
    assert Cox.b(4)[0, 1] == 4.0
    assert Cox.h(3)[0, 1] == 5.0
    assert Cox.b(4)[1, 2] == 3.0


@pytest.mark.parametrize("cox", [Cox.a(5), Cox.b(4), Cox.d(5), Cox.e(6), Cox.h(4)])
def test_matrices_are_symmetric_with_unit_diagonal(cox):
    assert np.array_equal(cox.matrix, cox.matrix.T)
    assert np.all(np.diag(cox.matrix) == 1.0)


def test_d_and_e_links():
    d = Cox.d(4)
    assert d[0, 1] == 2.0 and d[0, 2] == 3.0
    e = Cox.e(6)
    assert e[0, 1] == 2.0 and e[0, 3] == 3.0


def test_equality_differs_on_change():
    cox = Cox.a(3)
    other = Cox.a(3)
    other.link(0, 1, 4.0)
    assert not cox == other


@pytest.mark.parametrize("cox", [Cox.a(4), Cox.b(3), Cox.h(3), Cox.d(4), Cox.i2(7.0)])
def test_normals_match_angles(cox):
    normals = cox.normals()
    dim = cox.dim()
    assert np.allclose(normals, np.triu(normals))
    for i in range(dim):
        assert math.isclose(float(normals[:, i] @ normals[:, i]), 1.0, abs_tol=1e-9)
        for j in range(i):
            dot = float(normals[:, i] @ normals[:, j])
            assert math.isclose(dot, math.cos(math.pi / cox[i, j]), abs_tol=1e-9)


def test_normals_none_for_affine_triangle():
    cox = Cox.a(3)
    cox.link(0, 2, 3.0)
    assert cox.normals() is None


@pytest.mark.parametrize(
    "cox, order",
    [(Cox.a(3), 24), (Cox.b(3), 48), (Cox.h(3), 120), (Cox.i2(5.0), 10)],
)
def test_group_orders(cox, order):
    elements = list(cox.gen_iter())
    assert len(elements) == order
    keys = sorted(MatrixOrd(m) for m in elements)
    assert all(a != b for a, b in zip(keys, keys[1:]))


def test_trivial_group_has_identity_and_reflection():
    elements = list(Cox.trivial().gen_iter())
    assert len(elements) == 2
    assert np.allclose(elements[0], [[-1.0]])
    assert np.allclose(elements[1], [[1.0]])


def test_gen_iter_elements_are_orthogonal():
    for m in Cox.b(3).gen_iter():
        assert np.allclose(m @ m.T, np.eye(3))


def test_gen_iter_none_when_not_spherical():
    assert Cox([[1.0, 6.0, 2.0], [6.0, 1.0, 3.0], [2.0, 3.0, 1.0]]).gen_iter() is None


def test_invalid_sizes():
    with pytest.raises(ValueError):
        Cox.a(0)
    with pytest.raises(ValueError):
        Cox.b(1)