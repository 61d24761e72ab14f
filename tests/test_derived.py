import numpy as np
import pytest

from vitalsim.physiology.derived import compute_map


def test_map_textbook_value():
    assert compute_map(120, 80) == pytest.approx(93.333, abs=1e-3)


def test_map_equal_pressures():
    assert compute_map(90, 90) == 90


def test_map_between_diastolic_and_systolic():
    rng = np.random.default_rng(0)
    for _ in range(1000):
        d = rng.uniform(40, 100)
        s = d + rng.uniform(0, 80)
        m = compute_map(s, d)
        assert d <= m <= s
        # Closer to diastolic than systolic.
        assert m - d <= s - m + 1e-9
