import random

import pytest

from bank_sim.config import DelayRange
from bank_sim.timing import pause, sample_delay_seconds


def test_delay_range_rejects_bad_bounds():
    with pytest.raises(ValueError):
        DelayRange(-1, 10)
    with pytest.raises(ValueError):
        DelayRange(20, 10)


def test_sample_delay_stays_in_range_and_is_deterministic_with_rng():
    delay = DelayRange(5, 30)
    a = [sample_delay_seconds(delay, rng=random.Random(123)) for _ in range(3)]
    b = [sample_delay_seconds(delay, rng=random.Random(123)) for _ in range(3)]
    assert a == b

    rng = random.Random(7)
    for _ in range(200):
        s = sample_delay_seconds(delay, rng=rng)
        assert 0.005 <= s <= 0.030


def test_zero_delay_does_not_sleep():
    assert pause(DelayRange(0, 0)) == 0.0


def test_module_is_documented():
    import bank_sim.timing

    assert bank_sim.timing.__doc__ and "DelayRange" in bank_sim.timing.__doc__
