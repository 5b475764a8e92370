from .matrix import (
    Matrix,
    MatrixError,
    InvalidShape,
    DimensionMismatch,
    NotSquareMatrix,
    MatrixIndexError,
)
from .det import determinant, lu_determinant, submatrix
from .yaml import MatrixYaml, dump_matrix, load_matrix
