"""
Combinatorial search for resistor voltage dividers.

Given an input voltage, a required output voltage and a resistor series, the
search enumerates divider networks with one or two resistors per arm and
keeps every network whose output lies within the tolerance:

    1. two resistors     R1 / R2
    2. split upper arm   (R1a + R1b) / R2 and (R1a || R1b) / R2
    3. split lower arm   R1 / (R2a + R2b) and R1 / (R2a || R2b)
    4. split both arms   all four series/parallel combinations

Phases 1-3 cover every ordered combination of candidate values. Phase 4 only
visits unordered pairs (second index >= first) and, once the candidate set is
larger than STRIDE_THRESHOLD values, steps every index by 2. That stride is an
approximation: skipped pairs are not proven to be dominated, so the best
four-resistor network can be missed on wide ranges of fine series.

Candidates are evaluated with numpy in blocks of upper-arm values; only those
that pass the tolerance filter are built into DividerNetwork objects.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

import numpy as np

from divider_engine.arms import divider_output, parallel_pairs, relative_error_percent, series_pairs
from divider_engine.components import ResistorSeries, generate_series_values, resolve_series
from divider_engine.errors import EmptyRangeError, InvalidParameterError
from divider_engine.network import DividerNetwork, rank_networks

logger = logging.getLogger(__name__)

# Candidate set size above which phase 4 strides its indices by 2
STRIDE_THRESHOLD = 50
# Upper-by-lower elements evaluated per numpy block
BLOCK_ELEMENTS = 1 << 20


def enumeration_stride(n_values: int, threshold: int = STRIDE_THRESHOLD) -> int:
    """Index step used by the four-resistor phase for a candidate set of n_values."""
    return 2 if n_values > threshold else 1


def arm_pair_indices(n_values: int, stride: int = 1) -> Iterator[Tuple[int, int]]:
    """Yield (i, j) with j >= i, both stepping by stride from 0 and i respectively."""
    for i in range(0, n_values, stride):
        for j in range(i, n_values, stride):
            yield i, j


def four_resistor_indices(n_values: int, stride: int = 1) -> Iterator[Tuple[int, int, int, int]]:
    """
    Yield the (i1, i2, i3, i4) index quadruples visited by the four-resistor phase.

    (i1, i2) index the upper arm and (i3, i4) the lower arm, with i2 >= i1 and
    i4 >= i3. four_resistor_phase evaluates exactly these quadruples, in bulk.
    """
    pairs = list(arm_pair_indices(n_values, stride))
    for i1, i2 in pairs:
        for i3, i4 in pairs:
            yield i1, i2, i3, i4


class ResultBuilder:
    """
    Append-only sink shared by the search phases.

    Networks are collected unranked; seal() sorts them by ranking_key and cuts
    the list to max_results. A builder can be sealed once.
    """

    def __init__(self, max_results: int):
        self.max_results = max_results
        self._networks: List[DividerNetwork] = []
        self._sealed = False

    def __len__(self) -> int:
        return len(self._networks)

    @property
    def sealed(self) -> bool:
        return self._sealed

    def add(self, network: DividerNetwork) -> None:
        if self._sealed:
            raise RuntimeError("ResultBuilder is already sealed")
        self._networks.append(network)

    def extend(self, networks: Iterable[DividerNetwork]) -> None:
        for network in networks:
            self.add(network)

    def seal(self) -> List[DividerNetwork]:
        if self._sealed:
            raise RuntimeError("ResultBuilder is already sealed")
        self._sealed = True
        return rank_networks(self._networks)[:self.max_results]


class ArmCandidates:
    """
    Every way to build one arm in a phase, as parallel numpy arrays.

    `first` holds the first resistor of each candidate and `second` the
    second one (None for single-resistor arms). `resistance` is the effective
    arm resistance of each candidate.
    """

    def __init__(self, first: np.ndarray, second: Optional[np.ndarray] = None, parallel: bool = False):
        self.first = first
        self.second = second
        self.parallel = parallel and second is not None
        if second is None:
            self.resistance = first
        elif self.parallel:
            self.resistance = parallel_pairs(first, second)
        else:
            self.resistance = series_pairs(first, second)

    def __len__(self) -> int:
        return len(self.first)

    @classmethod
    def single(cls, values: np.ndarray) -> 'ArmCandidates':
        return cls(values)

    @classmethod
    def ordered_pairs(cls, values: np.ndarray, parallel: bool) -> 'ArmCandidates':
        """All (a, b) value pairs, both orderings included."""
        n = len(values)
        return cls(np.repeat(values, n), np.tile(values, n), parallel)

    @classmethod
    def index_pairs(cls, values: np.ndarray, pairs: np.ndarray, parallel: bool) -> 'ArmCandidates':
        """Pairs selected by an (N, 2) index array."""
        return cls(values[pairs[:, 0]], values[pairs[:, 1]], parallel)

    def arm(self, index: int) -> Tuple[float, ...]:
        if self.second is None:
            return (float(self.first[index]),)
        return (float(self.first[index]), float(self.second[index]))


def _matching_indices(
    v_in: float,
    v_out_required: float,
    tolerance_percent: float,
    r_upper: np.ndarray,
    r_lower: np.ndarray,
) -> Iterator[Tuple[int, int]]:
    """Yield (upper, lower) index pairs whose divider output is within tolerance."""
    lower_row = r_lower[np.newaxis, :]
    rows_per_block = max(1, BLOCK_ELEMENTS // max(1, len(r_lower)))
    for start in range(0, len(r_upper), rows_per_block):
        block = r_upper[start:start + rows_per_block, np.newaxis]
        errors = relative_error_percent(divider_output(v_in, block, lower_row), v_out_required)
        rows, cols = np.nonzero(errors <= tolerance_percent)
        for row, col in zip(rows.tolist(), cols.tolist()):
            yield start + row, col


def _collect(
    builder: ResultBuilder,
    upper: ArmCandidates,
    lower: ArmCandidates,
    v_in: float,
    v_out_required: float,
    tolerance_percent: float,
) -> int:
    """Add every passing upper/lower combination to the builder; return how many."""
    found = 0
    for i, j in _matching_indices(v_in, v_out_required, tolerance_percent,
                                  upper.resistance, lower.resistance):
        builder.add(DividerNetwork(
            upper_arm=upper.arm(i),
            lower_arm=lower.arm(j),
            upper_parallel=upper.parallel,
            lower_parallel=lower.parallel,
            v_in=v_in,
            v_out_required=v_out_required,
        ))
        found += 1
    return found


def two_resistor_phase(builder, values, v_in, v_out_required, tolerance_percent) -> int:
    """One resistor per arm, full cross product."""
    singles = ArmCandidates.single(values)
    return _collect(builder, singles, singles, v_in, v_out_required, tolerance_percent)


def split_upper_phase(builder, values, v_in, v_out_required, tolerance_percent) -> int:
    """Two resistors in the upper arm, in series and in parallel, one in the lower arm."""
    singles = ArmCandidates.single(values)
    found = 0
    for parallel in (False, True):
        upper = ArmCandidates.ordered_pairs(values, parallel)
        found += _collect(builder, upper, singles, v_in, v_out_required, tolerance_percent)
    return found


def split_lower_phase(builder, values, v_in, v_out_required, tolerance_percent) -> int:
    """One resistor in the upper arm, two in the lower arm, in series and in parallel."""
    singles = ArmCandidates.single(values)
    found = 0
    for parallel in (False, True):
        lower = ArmCandidates.ordered_pairs(values, parallel)
        found += _collect(builder, singles, lower, v_in, v_out_required, tolerance_percent)
    return found


def four_resistor_phase(builder, values, v_in, v_out_required, tolerance_percent, stride: int = 1) -> int:
    """Two resistors in each arm, every series/parallel combination."""
    pairs = np.array(list(arm_pair_indices(len(values), stride)), dtype=np.intp).reshape(-1, 2)
    found = 0
    for upper_parallel in (False, True):
        upper = ArmCandidates.index_pairs(values, pairs, upper_parallel)
        for lower_parallel in (False, True):
            lower = ArmCandidates.index_pairs(values, pairs, lower_parallel)
            found += _collect(builder, upper, lower, v_in, v_out_required, tolerance_percent)
    return found


def search_dividers(
    v_in: float,
    v_out_required: float,
    tolerance_percent: float,
    series: Union[ResistorSeries, str] = ResistorSeries.E24,
    min_resistance: float = 100.0,
    max_resistance: float = 1e6,
    max_results: int = 50,
    stride_threshold: int = STRIDE_THRESHOLD,
) -> List[DividerNetwork]:
    """
    Find resistor dividers producing v_out_required from v_in.

    Args:
        v_in: Input voltage (V)
        v_out_required: Required output voltage (V), 0 < v_out_required < v_in
        tolerance_percent: Maximum relative output error (%)
        series: E-series to draw resistor values from
        min_resistance: Smallest resistor value to consider (Ohms)
        max_resistance: Largest resistor value to consider (Ohms)
        max_results: Maximum number of networks returned
        stride_threshold: Candidate count above which phase 4 strides by 2

    Returns:
        Networks within tolerance, best first: lowest error, then fewest
        resistors, then lowest power dissipation. Empty when nothing matches,
        when the tolerance is not positive, or when the series has no value
        in the range.

    Raises:
        InvalidParameterError: v_out_required <= 0, v_out_required >= v_in,
            max_results < 0, unknown series or non-positive resistance bound.
    """
    if v_out_required <= 0:
        raise InvalidParameterError("v_out_required > 0", "Output voltage must be positive")
    if v_out_required >= v_in:
        raise InvalidParameterError("v_out_required < v_in", "Output voltage must be lower than input voltage")
    if max_results < 0:
        raise InvalidParameterError("max_results >= 0")
    resolved = resolve_series(series)

    logger.info("Divider search: Vin=%s, Vout=%s, tolerance=%s%%, series=%s, range=%s..%s",
                v_in, v_out_required, tolerance_percent, resolved.value,
                min_resistance, max_resistance)

    if tolerance_percent <= 0:
        logger.info("Non-positive tolerance %s%%, no divider can match", tolerance_percent)
        return []

    try:
        values = np.asarray(generate_series_values(resolved, min_resistance, max_resistance))
    except EmptyRangeError as e:
        logger.warning("No candidate resistors: %s", e)
        return []

    stride = enumeration_stride(len(values), stride_threshold)
    builder = ResultBuilder(max_results)
    args = (builder, values, v_in, v_out_required, tolerance_percent)

    counts: Dict[str, int] = {
        'two_resistor': two_resistor_phase(*args),
        'split_upper': split_upper_phase(*args),
        'split_lower': split_lower_phase(*args),
        'four_resistor': four_resistor_phase(*args, stride=stride),
    }
    logger.debug("Candidates=%d, phase-4 stride=%d, matches per phase: %s",
                 len(values), stride, counts)

    results = builder.seal()
    logger.info("Found %d combinations, returning %d", len(builder), len(results))
    return results
