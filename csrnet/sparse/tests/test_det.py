import math
import logging
import pytest
import numpy as np
from ..matrix import Matrix, MatrixIndexError, NotSquareMatrix
from ..det import determinant, lu_determinant, submatrix, COFACTOR_WARN_SIZE


def eye(n: int) -> Matrix:
    """ Helper function.  (Not a test!)
    `Matrix.identity` stores nothing, so fill in the diagonal. """
    m = Matrix.identity(n)
    for k in range(n):
        m.set(k, k, 1)
    return m


def test_det2():
    assert Matrix(2, 2, [[1, 2], [3, 4]]).determinant() == -2


def test_det1():
    assert Matrix(1, 1, [[7]]).determinant() == 7
    assert Matrix(1, 1).determinant() == 0


def test_det0():
    """ Empty minors, such as that of a 1x1, have determinant one """
    m0 = submatrix(Matrix(1, 1, [[5]]), 0, 0)
    assert m0.shape == (0, 0)
    assert determinant(m0) == 1


def test_det_identity():
    for n in range(1, 7):
        assert eye(n).determinant() == 1


def test_det3():
    m = Matrix(3, 3, [[2, 0, 1], [1, 3, 2], [1, 1, 1]])
    assert m.determinant() == 2 * (3 - 2) - 0 + 1 * (1 - 3)


def test_det_empty_column():
    """ Square matrices with an all-zero trailing column (and minors with them) are still square """
    m = Matrix(3, 3, [[1, 2, 3], [4, 5, 0], [7, 8, 0]])
    assert m.determinant() == 3 * (4 * 8 - 5 * 7)
    z = Matrix(2, 2, [[1, 0], [0, 0]])
    assert z.determinant() == 0


def test_det_sparse_first_row():
    """ Implicit zeros in row zero contribute nothing """
    m = Matrix(3, 3, [[0, 0, 4], [1, 2, 0], [3, 5, 6]])
    assert m.determinant() == 4 * (1 * 5 - 2 * 3)


def test_det_vs_numpy():
    rng = np.random.default_rng(11)
    for n in range(2, 6):
        arr = rng.integers(-3, 4, size=(n, n)) * (rng.random((n, n)) < 0.6)
        m = Matrix(n, n, arr)
        assert math.isclose(m.determinant(), np.linalg.det(arr), abs_tol=1e-6)
        assert math.isclose(lu_determinant(m), np.linalg.det(arr), abs_tol=1e-6)


def test_not_square():
    with pytest.raises(NotSquareMatrix):
        Matrix(2, 3, [[1, 2, 3], [4, 5, 6]]).determinant()
    with pytest.raises(NotSquareMatrix):
        lu_determinant(Matrix(3, 2))


def test_submatrix():
    m = Matrix(3, 3, [[1, 2, 3], [4, 5, 6], [7, 8, 9]])
    s = submatrix(m, 0, 1)
    assert s.shape == (2, 2)
    assert s.data == [[4, 6], [7, 9]]
    s = submatrix(m, 1, 2)
    assert s.data == [[1, 2], [7, 8]]
    # Source untouched, and shares nothing
    assert m.data == [[1, 2, 3], [4, 5, 6], [7, 8, 9]]
    assert s.V is not m.V


def test_submatrix_sparse():
    m = Matrix(4, 6, [[10, 20], [0, 30, 0, 40], [0, 0, 50, 60, 70], [0, 0, 0, 0, 0, 80]])
    s = submatrix(m, 2, 3)
    assert s.shape == (3, 5)
    assert s.data == [
        [10, 20, 0, 0, 0],
        [0, 30, 0, 0, 0],
        [0, 0, 0, 0, 80],
    ]
    assert s.ROW_INDEX == [0, 2, 3, 4]


def test_large_warning(caplog):
    n = COFACTOR_WARN_SIZE + 1
    m = Matrix(n, n)  # Empty first row: no recursion
    with caplog.at_level(logging.WARNING, logger="csrnet.sparse.det"):
        assert m.determinant() == 0
    assert "lu_determinant" in caplog.text


def test_submatrix_out_of_bounds():
    m = Matrix(2, 2, [[1, 2], [3, 4]])
    for row, col in [(0, -1), (-1, 0), (2, 0), (0, 2)]:
        with pytest.raises(MatrixIndexError):
            submatrix(m, row, col)
    # The edges are fine
    s = submatrix(m, 1, 1)
    s._checkup()
    assert s.data == [[1]]
