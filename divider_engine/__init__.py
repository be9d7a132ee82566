"""
DividerForge Compute Engine

Core computation library for finding resistor voltage dividers built from
standard E-series values, plus the Ohm's law calculator.

All math is deterministic and side-effect free; searches are safe to run
concurrently from worker threads.
"""

from divider_engine.errors import DividerError, InvalidParameterError, EmptyRangeError
from divider_engine.components import ResistorSeries, E_SERIES, generate_series_values, engineering_notation
from divider_engine.arms import arm_resistance, divider_output
from divider_engine.network import DividerNetwork, ranking_key, compare_networks, rank_networks
from divider_engine.search import search_dividers, ResultBuilder, arm_pair_indices, four_resistor_indices
from divider_engine.ohm import OhmResult, calculate_voltage, calculate_current, calculate_resistance

__version__ = "0.1.0"
