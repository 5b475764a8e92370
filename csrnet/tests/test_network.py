import pytest
from ..sparse import Matrix
from ..network import rand, random_normal, random_standard_normal


def counter():
    """ Deterministic "random" function: 1, 2, 3, ... """
    n = 0

    def fn():
        nonlocal n
        n += 1
        return n

    return fn


def test_rand_vector():
    t = rand([3], counter())
    assert t.shape == [1, 3]
    assert isinstance(t.matrices, Matrix)
    assert t.matrices.data == [[1, 2, 3]]


def test_rand_matrix():
    t = rand([2, 2], counter())
    assert t.shape == [2, 2]
    assert t.matrices.data == [[1, 2], [3, 4]]


def test_rand_nested():
    t = rand((2, 3, 1, 2), counter())
    assert t.shape == [2, 3, 1, 2]
    assert len(t.matrices) == 2
    assert all(len(inner) == 3 for inner in t.matrices)
    assert t.matrices[0][0].shape == (1, 2)
    assert t.matrices[0][0].data == [[1, 2]]
    assert t.matrices[1][2].data == [[11, 12]]


def test_rand_invalid():
    for shape in ([], None, "ab"):
        with pytest.raises(ValueError):
            rand(shape, counter())


def test_random_normal():
    t = random_normal([4, 5], mean=3.0, std_dev=0.5, seed=7)
    assert t.matrices.shape == (4, 5)
    u = random_normal([4, 5], mean=3.0, std_dev=0.5, seed=7)
    assert t.matrices == u.matrices


def test_random_standard_normal_int():
    t = random_standard_normal([2, 3, 3], dtype="int32", seed=0)
    for m in t.matrices:
        assert m.shape == (3, 3)
        assert all(isinstance(v, int) for v in m.V)
