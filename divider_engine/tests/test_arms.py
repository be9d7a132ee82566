"""
Tests for arm resistance and the divider transfer function.

Validates:
1. Single/series/parallel arm resistance
2. Vectorized pair helpers agree exactly with arm_resistance
3. Vout = Vin·R2/(R1+R2) and its monotonicity in the upper arm
"""

import numpy as np
import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from divider_engine.arms import (
    arm_resistance,
    series_pairs,
    parallel_pairs,
    divider_output,
    relative_error_percent,
)


class TestArmResistance:
    """Test effective resistance of an arm."""

    def test_empty_arm(self):
        assert arm_resistance([], False) == 0.0
        assert arm_resistance([], True) == 0.0

    def test_single_ignores_topology(self):
        """A single resistor is itself, whatever the flag."""
        assert arm_resistance([4700.0], True) == 4700.0
        assert arm_resistance([4700.0], False) == 4700.0

    def test_series_sum(self):
        assert arm_resistance([1000.0, 2200.0], False) == 3200.0

    def test_parallel_reciprocal(self):
        assert arm_resistance([1000.0, 1000.0], True) == pytest.approx(500.0)
        assert arm_resistance([3000.0, 6000.0], True) == pytest.approx(2000.0)

    def test_parallel_below_smallest(self):
        """Parallel combination is smaller than either resistor."""
        for a, b in [(100.0, 100.0), (47.0, 10_000.0), (1e6, 1.5)]:
            assert arm_resistance([a, b], True) < min(a, b)

    def test_three_resistors(self):
        assert arm_resistance([100.0, 200.0, 300.0], False) == 600.0
        assert arm_resistance([300.0, 300.0, 300.0], True) == pytest.approx(100.0)


class TestPairHelpers:
    """The vectorized helpers must match arm_resistance bit for bit."""

    def test_series_matches_scalar(self):
        a = np.array([100.0, 470.0, 6800.0])
        b = np.array([1.5, 220.0, 91_000.0])
        for x, y, r in zip(a, b, series_pairs(a, b)):
            assert r == arm_resistance([x, y], False)

    def test_parallel_matches_scalar(self):
        a = np.array([100.0, 470.0, 6800.0, 1.1])
        b = np.array([1.5, 220.0, 91_000.0, 1.3])
        for x, y, r in zip(a, b, parallel_pairs(a, b)):
            assert r == arm_resistance([float(x), float(y)], True)


class TestDividerOutput:
    """Test the voltage divider transfer function."""

    def test_equal_arms_halve(self):
        assert divider_output(10.0, 1000.0, 1000.0) == pytest.approx(5.0)

    def test_known_ratio(self):
        """18k over 13k from 12 V gives about 5.03 V."""
        assert divider_output(12.0, 18_000.0, 13_000.0) == pytest.approx(12.0 * 13 / 31)

    def test_decreasing_in_upper_arm(self):
        """Holding Vin and R_lower fixed, Vout falls as R_upper rises."""
        uppers = np.array([100.0, 220.0, 470.0, 1000.0, 2200.0, 4700.0, 10_000.0])
        v_out = divider_output(5.0, uppers, 1000.0)
        assert np.all(np.diff(v_out) < 0)

    def test_broadcasts(self):
        upper = np.array([[1000.0], [3000.0]])
        lower = np.array([[1000.0, 3000.0]])
        v_out = divider_output(8.0, upper, lower)
        assert v_out.shape == (2, 2)
        assert v_out[0, 0] == pytest.approx(4.0)
        assert v_out[1, 0] == pytest.approx(2.0)
        assert v_out[0, 1] == pytest.approx(6.0)


class TestRelativeError:

    def test_zero_for_exact(self):
        assert relative_error_percent(5.0, 5.0) == 0.0

    def test_symmetric(self):
        assert relative_error_percent(5.05, 5.0) == pytest.approx(1.0)
        assert relative_error_percent(4.95, 5.0) == pytest.approx(1.0)

    def test_array(self):
        errors = relative_error_percent(np.array([3.3, 3.0, 3.6]), 3.3)
        assert errors[0] == 0.0
        assert errors[1] == pytest.approx(errors[2])


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
