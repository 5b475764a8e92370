import math
import pytest
import numpy as np
from ..rand import NormalGenerator, rand_function


class FixedRng(object):
    """ Stand-in for `np.random.Generator`, replaying fixed uniform samples """

    def __init__(self, samples):
        self.samples = iter(samples)

    def random(self):
        return next(self.samples)


def test_spare_value():
    """ Each accepted trial yields two deviates; the second is returned by the next call """
    # Uniforms (0.75, 0.5) map to (v1, v2) = (0.5, 0.0), s = 0.25
    gen = NormalGenerator(rng=FixedRng([0.75, 0.5]))
    mul = math.sqrt(-2.0 * math.log(0.25) / 0.25)
    assert math.isclose(gen(), 0.5 * mul)
    assert gen.spare is not None
    assert gen() == 0.0
    assert gen.spare is None


def test_rejection():
    """ Points outside the unit circle, and the origin, are rejected """
    # (1.0, 1.0) -> s = 2; (0.5, 0.5) -> s = 0; then (0.75, 0.5) accepted
    gen = NormalGenerator(mean=1.0, std_dev=2.0, rng=FixedRng([0.999999, 0.999999, 0.5, 0.5, 0.75, 0.5]))
    mul = math.sqrt(-2.0 * math.log(0.25) / 0.25)
    assert math.isclose(gen(), 1.0 + 2.0 * 0.5 * mul)
    assert math.isclose(gen(), 1.0)


def test_int32():
    gen = NormalGenerator(mean=10, std_dev=3, dtype="int32", seed=3)
    samples = [gen() for _ in range(50)]
    assert all(isinstance(s, int) for s in samples)


def test_invalid_dtype():
    with pytest.raises(ValueError):
        NormalGenerator(dtype="float64")


def test_seeded():
    a = rand_function(seed=42)
    b = rand_function(seed=42)
    assert [a() for _ in range(9)] == [b() for _ in range(9)]


def test_statistics():
    gen = rand_function(mean=5.0, std_dev=2.0, seed=1234)
    samples = np.array([gen() for _ in range(20000)])
    assert abs(samples.mean() - 5.0) < 0.1
    assert abs(samples.std() - 2.0) < 0.1
