"""
Candidate two-arm voltage-divider networks and their ranking.

A DividerNetwork is built once per candidate that passes the search
tolerance filter. Its derived quantities are computed at construction and
never change afterwards.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from divider_engine.arms import arm_resistance, divider_output, relative_error_percent
from divider_engine.components import engineering_notation


@dataclass(frozen=True)
class DividerNetwork:
    """
    One resistor divider candidate.

    Attributes:
        upper_arm: Resistors between the input and the output node (Ohms)
        lower_arm: Resistors between the output node and ground (Ohms)
        upper_parallel: Upper arm resistors are in parallel (two-resistor arms only)
        lower_parallel: Lower arm resistors are in parallel (two-resistor arms only)
        v_in: Input voltage (V)
        v_out_required: Requested output voltage (V)
        v_out_actual: Output voltage this network produces (V)
        error_percent: |v_out_actual - v_out_required| / v_out_required · 100
        total_resistance: Upper plus lower arm resistance (Ohms)
        current: Divider current, v_in / total_resistance (A)
        power_dissipation: v_in · current (W)
    """
    upper_arm: Tuple[float, ...]
    lower_arm: Tuple[float, ...]
    upper_parallel: bool
    lower_parallel: bool
    v_in: float
    v_out_required: float
    v_out_actual: float = field(init=False)
    error_percent: float = field(init=False)
    total_resistance: float = field(init=False)
    current: float = field(init=False)
    power_dissipation: float = field(init=False)

    def __post_init__(self):
        upper_arm = tuple(float(r) for r in self.upper_arm)
        lower_arm = tuple(float(r) for r in self.lower_arm)
        # Topology is only meaningful for two-resistor arms
        upper_parallel = bool(self.upper_parallel) and len(upper_arm) > 1
        lower_parallel = bool(self.lower_parallel) and len(lower_arm) > 1

        r_upper = arm_resistance(upper_arm, upper_parallel)
        r_lower = arm_resistance(lower_arm, lower_parallel)
        v_out = divider_output(self.v_in, r_upper, r_lower)
        total = r_upper + r_lower
        current = self.v_in / total

        object.__setattr__(self, 'upper_arm', upper_arm)
        object.__setattr__(self, 'lower_arm', lower_arm)
        object.__setattr__(self, 'upper_parallel', upper_parallel)
        object.__setattr__(self, 'lower_parallel', lower_parallel)
        object.__setattr__(self, 'v_out_actual', v_out)
        object.__setattr__(self, 'error_percent', relative_error_percent(v_out, self.v_out_required))
        object.__setattr__(self, 'total_resistance', total)
        object.__setattr__(self, 'current', current)
        object.__setattr__(self, 'power_dissipation', self.v_in * current)

    @property
    def upper_resistance(self) -> float:
        return arm_resistance(self.upper_arm, self.upper_parallel)

    @property
    def lower_resistance(self) -> float:
        return arm_resistance(self.lower_arm, self.lower_parallel)

    @property
    def resistor_count(self) -> int:
        return len(self.upper_arm) + len(self.lower_arm)

    def arm_label(self, upper: bool = True) -> str:
        """Human-readable arm, e.g. '6.8kΩ + 4.7kΩ' or '10kΩ || 10kΩ'."""
        values = self.upper_arm if upper else self.lower_arm
        parallel = self.upper_parallel if upper else self.lower_parallel
        joiner = ' || ' if parallel else ' + '
        return joiner.join(engineering_notation(r, 'Ω') for r in values)

    def topology_label(self) -> str:
        """Describe both arms, e.g. 'upper: parallel, lower: single'."""
        def describe(values, parallel):
            if len(values) < 2:
                return 'single'
            return 'parallel' if parallel else 'series'

        return (f"upper: {describe(self.upper_arm, self.upper_parallel)}, "
                f"lower: {describe(self.lower_arm, self.lower_parallel)}")

    def summary(self) -> str:
        """One-line description stored in calculation history."""
        return (f"Vout={self.v_out_actual:.4f} V ({self.error_percent:.3f}%), "
                f"R_upper={self.arm_label(upper=True)}, "
                f"R_lower={self.arm_label(upper=False)}, "
                f"{self.resistor_count} resistors")

    def to_dict(self) -> Dict:
        return {
            'upper_arm': list(self.upper_arm),
            'lower_arm': list(self.lower_arm),
            'upper_parallel': self.upper_parallel,
            'lower_parallel': self.lower_parallel,
            'upper_resistance': self.upper_resistance,
            'lower_resistance': self.lower_resistance,
            'v_in': self.v_in,
            'v_out_required': self.v_out_required,
            'v_out_actual': self.v_out_actual,
            'error_percent': self.error_percent,
            'total_resistance': self.total_resistance,
            'current': self.current,
            'power_dissipation': self.power_dissipation,
            'resistor_count': self.resistor_count,
            'topology': self.topology_label(),
            'summary': self.summary(),
        }


def ranking_key(network: DividerNetwork) -> Tuple[float, int, float]:
    """Composite ordering: accuracy, then fewer resistors, then lower power."""
    return (network.error_percent, network.resistor_count, network.power_dissipation)


def compare_networks(a: DividerNetwork, b: DividerNetwork) -> int:
    """Three-way comparison on ranking_key: -1, 0 or 1."""
    key_a, key_b = ranking_key(a), ranking_key(b)
    return (key_a > key_b) - (key_a < key_b)


def rank_networks(networks: Iterable[DividerNetwork]) -> List[DividerNetwork]:
    """Sort networks best first."""
    return sorted(networks, key=ranking_key)

