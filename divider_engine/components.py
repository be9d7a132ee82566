"""
E-series standard resistor values and engineering notation.

Provides the IEC 60063 base tables and expands them into the decade-scaled
candidate values used by the divider search.
"""

import math
from enum import Enum
from typing import List, Union

import numpy as np

from divider_engine.errors import EmptyRangeError, InvalidParameterError

# E-series base values (multiplied by decades to get full range)
# These are the standard IEC 60063 values per decade (1.0 to <10.0)

E6_BASE = [1.0, 1.5, 2.2, 3.3, 4.7, 6.8]

E12_BASE = [1.0, 1.2, 1.5, 1.8, 2.2, 2.7, 3.3, 3.9, 4.7, 5.6, 6.8, 8.2]

E24_BASE = [
    1.0, 1.1, 1.2, 1.3, 1.5, 1.6, 1.8, 2.0, 2.2, 2.4, 2.7, 3.0,
    3.3, 3.6, 3.9, 4.3, 4.7, 5.1, 5.6, 6.2, 6.8, 7.5, 8.2, 9.1,
]

E48_BASE = [
    1.00, 1.05, 1.10, 1.15, 1.21, 1.27, 1.33, 1.40, 1.47, 1.54, 1.62, 1.69,
    1.78, 1.87, 1.96, 2.05, 2.15, 2.26, 2.37, 2.49, 2.61, 2.74, 2.87, 3.01,
    3.16, 3.32, 3.48, 3.65, 3.83, 4.02, 4.22, 4.42, 4.64, 4.87, 5.11, 5.36,
    5.62, 5.90, 6.19, 6.49, 6.81, 7.15, 7.50, 7.87, 8.25, 8.66, 9.09, 9.53,
]

E96_BASE = [
    1.00, 1.02, 1.05, 1.07, 1.10, 1.13, 1.15, 1.18, 1.21, 1.24, 1.27, 1.30,
    1.33, 1.37, 1.40, 1.43, 1.47, 1.50, 1.54, 1.58, 1.62, 1.65, 1.69, 1.74,
    1.78, 1.82, 1.87, 1.91, 1.96, 2.00, 2.05, 2.10, 2.15, 2.21, 2.26, 2.32,
    2.37, 2.43, 2.49, 2.55, 2.61, 2.67, 2.74, 2.80, 2.87, 2.94, 3.01, 3.09,
    3.16, 3.24, 3.32, 3.40, 3.48, 3.57, 3.65, 3.74, 3.83, 3.92, 4.02, 4.12,
    4.22, 4.32, 4.42, 4.53, 4.64, 4.75, 4.87, 4.99, 5.11, 5.23, 5.36, 5.49,
    5.62, 5.76, 5.90, 6.04, 6.19, 6.34, 6.49, 6.65, 6.81, 6.98, 7.15, 7.32,
    7.50, 7.68, 7.87, 8.06, 8.25, 8.45, 8.66, 8.87, 9.09, 9.31, 9.53, 9.76,
]

E192_BASE = [
    1.00, 1.01, 1.02, 1.04, 1.05, 1.06, 1.07, 1.09, 1.10, 1.11, 1.13, 1.14,
    1.15, 1.17, 1.18, 1.20, 1.21, 1.23, 1.24, 1.26, 1.27, 1.29, 1.30, 1.32,
    1.33, 1.35, 1.37, 1.38, 1.40, 1.42, 1.43, 1.45, 1.47, 1.49, 1.50, 1.52,
    1.54, 1.56, 1.58, 1.60, 1.62, 1.64, 1.65, 1.67, 1.69, 1.72, 1.74, 1.76,
    1.78, 1.80, 1.82, 1.84, 1.87, 1.89, 1.91, 1.93, 1.96, 1.98, 2.00, 2.03,
    2.05, 2.08, 2.10, 2.13, 2.15, 2.18, 2.21, 2.23, 2.26, 2.29, 2.32, 2.34,
    2.37, 2.40, 2.43, 2.46, 2.49, 2.52, 2.55, 2.58, 2.61, 2.64, 2.67, 2.71,
    2.74, 2.77, 2.80, 2.84, 2.87, 2.91, 2.94, 2.98, 3.01, 3.05, 3.09, 3.12,
    3.16, 3.20, 3.24, 3.28, 3.32, 3.36, 3.40, 3.44, 3.48, 3.52, 3.57, 3.61,
    3.65, 3.70, 3.74, 3.79, 3.83, 3.88, 3.92, 3.97, 4.02, 4.07, 4.12, 4.17,
    4.22, 4.27, 4.32, 4.37, 4.42, 4.48, 4.53, 4.59, 4.64, 4.70, 4.75, 4.81,
    4.87, 4.93, 4.99, 5.05, 5.11, 5.17, 5.23, 5.30, 5.36, 5.42, 5.49, 5.56,
    5.62, 5.69, 5.76, 5.83, 5.90, 5.97, 6.04, 6.12, 6.19, 6.26, 6.34, 6.42,
    6.49, 6.57, 6.65, 6.73, 6.81, 6.90, 6.98, 7.06, 7.15, 7.23, 7.32, 7.41,
    7.50, 7.59, 7.68, 7.77, 7.87, 7.96, 8.06, 8.16, 8.25, 8.35, 8.45, 8.56,
    8.66, 8.76, 8.87, 8.98, 9.09, 9.20, 9.31, 9.42, 9.53, 9.65, 9.76, 9.88,
]


class ResistorSeries(str, Enum):
    E6 = "E6"
    E12 = "E12"
    E24 = "E24"
    E48 = "E48"
    E96 = "E96"
    E192 = "E192"


E_SERIES = {
    ResistorSeries.E6: E6_BASE,
    ResistorSeries.E12: E12_BASE,
    ResistorSeries.E24: E24_BASE,
    ResistorSeries.E48: E48_BASE,
    ResistorSeries.E96: E96_BASE,
    ResistorSeries.E192: E192_BASE,
}

# Decimal places kept at the 1-10 Ohm decade, shifted by one per decade so every
# value keeps the same significant digits; strips float noise like 110.00000000000001
_VALUE_DECIMALS = 8

# SI prefix table
_SI_PREFIXES = [
    (1e-15, 'f'),
    (1e-12, 'p'),
    (1e-9,  'n'),
    (1e-6,  'µ'),
    (1e-3,  'm'),
    (1e0,   ''),
    (1e3,   'k'),
    (1e6,   'M'),
    (1e9,   'G'),
]


def resolve_series(series: Union[ResistorSeries, str]) -> ResistorSeries:
    """Return the ResistorSeries for an enum member or a name such as 'e24'."""
    if isinstance(series, ResistorSeries):
        return series
    try:
        return ResistorSeries(str(series).strip().upper())
    except ValueError:
        raise InvalidParameterError(
            "series in " + ", ".join(s.value for s in ResistorSeries),
            f"Unknown series '{series}'. Must be one of: {[s.value for s in ResistorSeries]}",
        ) from None


def series_base_values(series: Union[ResistorSeries, str]) -> List[float]:
    """Base mantissas in [1, 10) for a series."""
    return list(E_SERIES[resolve_series(series)])


def generate_series_values(
    series: Union[ResistorSeries, str],
    min_resistance: float,
    max_resistance: float,
) -> List[float]:
    """
    Expand a series into every decade-scaled value inside a resistance range.

    Args:
        series: Which E-series to use ('E6', 'E12', 'E24', 'E48', 'E96', 'E192')
        min_resistance: Lower bound in Ohms (inclusive)
        max_resistance: Upper bound in Ohms (inclusive)

    Returns:
        Sorted list of distinct values in Ohms.

    Raises:
        InvalidParameterError: unknown series, a non-finite or non-positive bound.
        EmptyRangeError: the range is inverted or holds no series value.
    """
    resolved = resolve_series(series)

    if not (math.isfinite(min_resistance) and math.isfinite(max_resistance)):
        raise InvalidParameterError("finite resistance bounds")
    if min_resistance <= 0:
        raise InvalidParameterError("min_resistance > 0")
    if max_resistance <= 0:
        raise InvalidParameterError("max_resistance > 0")
    if min_resistance > max_resistance:
        raise EmptyRangeError(resolved.value, min_resistance, max_resistance)

    # Every base value lies in [1, 10), so these decades cover the whole range
    first_decade = math.floor(math.log10(min_resistance))
    last_decade = math.ceil(math.log10(max_resistance))
    base = np.asarray(E_SERIES[resolved])

    candidates = np.concatenate([
        np.round(base * 10.0 ** decade, _VALUE_DECIMALS - decade)
        for decade in range(first_decade, last_decade + 1)
    ])
    in_range = candidates[(candidates >= min_resistance) & (candidates <= max_resistance)]

    if in_range.size == 0:
        raise EmptyRangeError(resolved.value, min_resistance, max_resistance)

    return np.unique(in_range).tolist()


def engineering_notation(value: float, unit: str = '', precision: int = 3) -> str:
    """
    Format a value in engineering notation with SI prefix.

    Examples:
        engineering_notation(1000, 'Ω')     → '1kΩ'
        engineering_notation(4700, 'Ω')     → '4.7kΩ'
        engineering_notation(0.0025, 'A')   → '2.5mA'
        engineering_notation(2.2e6, 'Ω')    → '2.2MΩ'
    """
    if value == 0:
        return f"0{unit}"

    abs_value = abs(value)
    sign = '-' if value < 0 else ''

    for scale, prefix in reversed(_SI_PREFIXES):
        if abs_value >= scale:
            scaled = abs_value / scale
            # Format with appropriate precision, strip trailing zeros
            if scaled == int(scaled):
                formatted = f"{sign}{int(scaled)}{prefix}{unit}"
            else:
                formatted = f"{sign}{scaled:.{precision}g}{prefix}{unit}"
            return formatted

    # Fallback for extremely small values
    return f"{value:.{precision}g}{unit}"
