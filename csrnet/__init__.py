"""
csrnet: Compressed Sparse Row matrices, and a minimal neural-network scaffold built on them
"""

from .sparse import (
    Matrix,
    MatrixError,
    InvalidShape,
    DimensionMismatch,
    NotSquareMatrix,
    MatrixIndexError,
    determinant,
    lu_determinant,
    submatrix,
    MatrixYaml,
    dump_matrix,
    load_matrix,
)
from .rand import NormalGenerator, rand_function
from .network import RandomTensor, rand, random_normal, random_standard_normal
from .model import Model, Dense, ModelError

__version__ = "0.1.0"
