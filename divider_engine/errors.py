"""Exceptions raised by the divider engine."""

from typing import Optional


class DividerError(Exception):
    """Base class for divider engine errors."""


class InvalidParameterError(DividerError, ValueError):
    """A search or calculator input violates a precondition.

    `constraint` names the violated condition, e.g. ``"v_out_required < v_in"``.
    """

    def __init__(self, constraint: str, message: Optional[str] = None):
        self.constraint = constraint
        super().__init__(message or f"Invalid parameter: expected {constraint}")


class EmptyRangeError(DividerError, ValueError):
    """No value of the requested series falls inside the resistance range."""

    def __init__(self, series: str, min_resistance: float, max_resistance: float):
        self.series = series
        self.min_resistance = min_resistance
        self.max_resistance = max_resistance
        super().__init__(
            f"No {series} values between {min_resistance}Ω and {max_resistance}Ω"
        )
