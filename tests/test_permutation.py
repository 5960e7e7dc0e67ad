import numpy as np
import pytest

from miratope.cyclic import Cyclic
from miratope.group_item import MatrixOps, ScalarOps
from miratope.permutation import Permutation, PermutationIter, PermutationOps


def rotation(n):
    theta = 2 * np.pi / n
    c, s = np.cos(theta), np.sin(theta)
    return np.array([[c, -s], [s, c]])


def test_identity_is_neutral():
    p = Permutation([2, 0, 3, 1])
    e = Permutation.identity(4)
    assert p * e == p
    assert e * p == p
    assert list(e) == list(range(4))


def test_inverse_round_trip():
    p = Permutation([3, 1, 4, 0, 2])
    assert p * p.inverse() == Permutation.identity(5)
    assert p.inverse() * p == Permutation.identity(5)
    assert p.inverse().inverse() == p


def test_composition_applies_left_then_right():
    p = Permutation([1, 2, 0])
    q = Permutation([2, 0, 1])
    r = p * q
    assert [r[i] for i in range(3)] == [q[p[i]] for i in range(3)]


def test_invalid_data_rejected():
    with pytest.raises(ValueError):
        Permutation([0, 0, 1])
    with pytest.raises(ValueError):
        Permutation([1, 2])


def test_swap_twice_restores():
    p = Permutation([0, 1, 2, 3])
    p.swap(1, 3)
    assert p[1] == 3 and p[3] == 1
    p.swap(1, 3)
    assert p == Permutation.identity(4)


def test_ordering_is_lexicographic():
    assert Permutation([0, 1, 2]) < Permutation([0, 2, 1])
    assert sorted([Permutation([1, 0]), Permutation([0, 1])])[0] == Permutation.identity(2)


def test_len_and_getitem():
    p = Permutation([1, 0, 2])
    assert len(p) == 3
    assert p[0] == 1


def test_permutation_ops_inverse():
    ops = PermutationOps(4)
    p = Permutation([1, 3, 0, 2])
    assert ops.eq(ops.mul(p, ops.inverse(p)), ops.identity())


def test_involution_permutations():
    perms = list(PermutationIter([1.0, -1.0], ScalarOps()))
    assert perms[0] == Permutation.identity(2)
    assert perms[1] == Permutation([1, 0])


def test_rotation_group_permutations_form_latin_square():
    n = 6
    ops = MatrixOps(2)
    elements = list(Cyclic(rotation(n), ops))
    perms = list(PermutationIter(elements, ops))
    assert len(perms) == n
    for col in range(n):
        assert sorted(p[col] for p in perms) == list(range(n))
    identity_index = next(i for i, el in enumerate(elements) if ops.eq(el, ops.identity()))
    assert perms[identity_index] == Permutation.identity(n)


def test_permutation_iter_is_homomorphism():
    n = 5
    ops = MatrixOps(2)
    elements = list(Cyclic(rotation(n), ops))
    perms = list(PermutationIter(elements, ops))
    it = PermutationIter(elements, ops)
    for i, a in enumerate(elements):
        for j, b in enumerate(elements):
            k = it._index(ops.mul(a, b))
            assert perms[k] == perms[j] * perms[i]


def test_not_closed_raises():
    with pytest.raises(ValueError):
        list(PermutationIter([1.0, 2.0], ScalarOps()))