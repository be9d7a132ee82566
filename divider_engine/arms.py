"""
Arm resistance and voltage-divider transfer function.

An arm is one side of the divider: the upper arm connects the input to the
output node, the lower arm connects the output node to ground. Each arm holds
one or two resistors, combined in series or in parallel.

The scalar functions are used by DividerNetwork; the pair functions are the
numpy equivalents the search engine evaluates in bulk. Both use the same
arithmetic, so a candidate that passes the vectorized tolerance filter yields
the identical error when rebuilt as a network.
"""

from typing import Sequence, Union

import numpy as np

ArrayLike = Union[float, np.ndarray]


def arm_resistance(values: Sequence[float], parallel: bool = False) -> float:
    """
    Effective resistance of an arm.

    Args:
        values: Resistor values (Ohms) making up the arm
        parallel: Combine 2+ resistors in parallel instead of series

    Returns:
        0.0 for an empty arm, the value itself for a single resistor,
        Σr for series, 1/Σ(1/r) for parallel.
    """
    if len(values) == 0:
        return 0.0
    if len(values) == 1:
        return float(values[0])
    if parallel:
        return 1.0 / sum(1.0 / r for r in values)
    return float(sum(values))


def series_pairs(a: ArrayLike, b: ArrayLike) -> ArrayLike:
    """Series resistance of two resistors, elementwise."""
    return a + b


def parallel_pairs(a: ArrayLike, b: ArrayLike) -> ArrayLike:
    """Parallel resistance of two resistors, elementwise."""
    return 1.0 / (1.0 / a + 1.0 / b)


def divider_output(v_in: float, r_upper: ArrayLike, r_lower: ArrayLike) -> ArrayLike:
    """Vout = Vin · R_lower / (R_upper + R_lower)."""
    return v_in * r_lower / (r_upper + r_lower)


def relative_error_percent(v_out_actual: ArrayLike, v_out_required: float) -> ArrayLike:
    """Relative deviation from the required output, in percent."""
    return abs(v_out_actual - v_out_required) / v_out_required * 100
