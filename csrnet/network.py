"""
Random-initialized (nested) Matrices
"""

from typing import Callable, List, Optional, Sequence, Union

from .rand import DEFAULT_DTYPE, rand_function
from .sparse import Matrix

# A Matrix, or arbitrarily-nested lists of them
Matrices = Union[Matrix, List["Matrices"]]


class RandomTensor(object):
    """ Result of `rand`: the normalized `shape`, and its nested `matrices`.
    The last two `shape` entries are each Matrix's rows and columns.
    Any leading entries are lengths of the nested lists around them. """

    def __init__(self, shape: List[int], matrices: Matrices):
        self.shape = shape
        self.matrices = matrices

    def __repr__(self):
        return f'<{self.__class__.__name__}(shape={self.shape})>'


def rand(shape: Sequence[int], fn: Callable[[], float]) -> RandomTensor:
    """ Create Matrices of `shape`, drawing each cell from `fn`.
    One-dimensional shapes `[n]` are treated as row-vectors `[1, n]`. """
    if isinstance(shape, (str, bytes)) or not isinstance(shape, Sequence) or len(shape) == 0:
        raise ValueError("The shape must be a sequence of length greater than 0")

    shape = list(shape)
    if len(shape) == 1:
        shape = [1, shape[0]]

    if len(shape) == 2:
        matrices = Matrix.random(shape[0], shape[1], fn)
    else:
        matrices = [rand(shape[1:], fn).matrices for _ in range(shape[0])]
    return RandomTensor(shape=shape, matrices=matrices)


def random_normal(shape: Sequence[int], mean: float = 0.0, std_dev: float = 1.0,
                  dtype: str = DEFAULT_DTYPE, seed: Optional[int] = None) -> RandomTensor:
    return rand(shape, rand_function(mean=mean, std_dev=std_dev, dtype=dtype, seed=seed))


def random_standard_normal(shape: Sequence[int], dtype: str = DEFAULT_DTYPE,
                           seed: Optional[int] = None) -> RandomTensor:
    return random_normal(shape, mean=0.0, std_dev=1.0, dtype=dtype, seed=seed)
