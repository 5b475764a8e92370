"""
Normal-distribution sampling, for weight initialization
"""

import math
from typing import Optional

import numpy as np

""" 'Configuration' of the default sample type """
DEFAULT_DTYPE = "float32"
DTYPES = ("float32", "int32")


class NormalGenerator(object):
    """ Zero-argument callable drawing normal samples, via the polar Box-Muller method.

    Each accepted trial produces two independent deviates. The first is returned,
    the second is kept in `spare` and returned (and cleared) by the next call.
    With `dtype="int32"` both are rounded to the nearest integer. """

    def __init__(self, mean: float = 0.0, std_dev: float = 1.0, dtype: str = DEFAULT_DTYPE,
                 seed: Optional[int] = None, rng: Optional[np.random.Generator] = None):
        if dtype not in DTYPES:
            raise ValueError(f'Invalid dtype {dtype!r}, expecting one of {DTYPES}')
        self.mean = mean
        self.std_dev = std_dev
        self.dtype = dtype
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.spare: Optional[float] = None

    def __repr__(self):
        return f'<{self.__class__.__name__}(mean={self.mean}, std_dev={self.std_dev}, dtype={self.dtype})>'

    def __call__(self) -> float:
        if self.spare is not None:
            val, self.spare = self.spare, None
            return val

        # Rejection-sample a point inside the unit circle, excluding the origin
        while True:
            v1 = 2 * self.rng.random() - 1
            v2 = 2 * self.rng.random() - 1
            s = v1 * v1 + v2 * v2
            if 0 < s < 1:
                break

        mul = math.sqrt(-2.0 * math.log(s) / s)
        self.spare = self._convert(self.mean + self.std_dev * v2 * mul)
        return self._convert(self.mean + self.std_dev * v1 * mul)

    def _convert(self, x: float):
        if self.dtype == "int32":
            return math.floor(x + 0.5)  # Halves round up
        return float(x)


def rand_function(mean: float = 0.0, std_dev: float = 1.0, dtype: str = DEFAULT_DTYPE,
                  seed: Optional[int] = None) -> NormalGenerator:
    """ Create a normal sample-generator with the given parameters """
    return NormalGenerator(mean=mean, std_dev=std_dev, dtype=dtype, seed=seed)
