"""
Determinants of sparse Matrices

`determinant` is the reference: Laplace (cofactor) expansion along the first row.
Its cost is factorial in the matrix size, so it is meant for small matrices.
`lu_determinant` is a separate, dense alternative for larger ones.
"""

import logging

import numpy as np

from .matrix import Matrix, MatrixIndexError, NotSquareMatrix

logger = logging.getLogger(__name__)

# Matrix size above which `determinant` logs a warning. Cofactor expansion of a dense 11x11 is ~40M minors.
COFACTOR_WARN_SIZE = 10


def submatrix(m: Matrix, exclude_row: int, exclude_col: int) -> Matrix:
    """ Create the minor of `m` with row `exclude_row` and column `exclude_col` removed.
    Columns after `exclude_col` shift down by one. The result has its own, freshly built lists. """
    MatrixIndexError.assert_true(m.in_bounds(exclude_row, exclude_col),
                                 f'Cannot exclude ({exclude_row}, {exclude_col}) from shape {m.shape}')
    V, COL_INDEX, ROW_INDEX = [], [], [0]
    for row in range(m.rows):
        if row == exclude_row:
            continue
        for val, col in m.row_elements(row):
            if col == exclude_col:
                continue
            V.append(val)
            COL_INDEX.append(col if col < exclude_col else col - 1)
        ROW_INDEX.append(len(V))

    return Matrix._from_csr(m.rows - 1, m.cols - 1, V, COL_INDEX, ROW_INDEX)


def determinant(m: Matrix) -> float:
    """ Determinant of square Matrix `m`, by cofactor expansion along row zero.
    Only stored row-zero entries contribute; implicit zeros are skipped outright. """
    NotSquareMatrix.assert_eq(m.rows, m.cols, f'Determinant requires a square matrix, not {m.shape}')
    logger.debug(f'Cofactor determinant of {m!r}')
    if m.rows > COFACTOR_WARN_SIZE:
        logger.warning(f'Cofactor determinant of a {m.rows}x{m.cols} matrix may take a very long time. '
                       f'Consider `lu_determinant`.')
    return _cofactor(m)


def _cofactor(m: Matrix) -> float:
    n = m.rows
    if n == 0: return 1
    if n == 1: return m.get(0, 0)

    det = 0
    for val, col in m.row_elements(0):
        sign = 1 if col % 2 == 0 else -1
        det += sign * val * _cofactor(submatrix(m, 0, col))
    return det


def lu_determinant(m: Matrix) -> float:
    """ Determinant via dense LU factorization (numpy/LAPACK). O(n**3), floating-point results. """
    NotSquareMatrix.assert_eq(m.rows, m.cols, f'Determinant requires a square matrix, not {m.shape}')
    logger.debug(f'Dense LU determinant of {m!r}')
    return float(np.linalg.det(m.to_numpy()))
