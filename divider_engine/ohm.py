"""
Ohm's law calculator.

    V = I · R      I = V / R      R = V / I      P = V · I

Each solver returns an OhmResult carrying the solved quantity plus the
formatted input/result strings stored in calculation history.
"""

from dataclasses import dataclass

from divider_engine.errors import InvalidParameterError


@dataclass(frozen=True)
class OhmResult:
    voltage: float
    current: float
    resistance: float
    power: float
    solved_for: str      # 'voltage', 'current' or 'resistance'
    input_summary: str
    result_summary: str


def calculate_power(voltage: float, current: float) -> float:
    return voltage * current


def calculate_voltage(current: float, resistance: float) -> OhmResult:
    """Voltage from current (A) and resistance (Ω)."""
    voltage = current * resistance
    return OhmResult(
        voltage=voltage,
        current=current,
        resistance=resistance,
        power=calculate_power(voltage, current),
        solved_for='voltage',
        input_summary=f"I = {format_current(current)}, R = {format_resistance(resistance)}",
        result_summary=f"V = {format_voltage(voltage)}",
    )


def calculate_current(voltage: float, resistance: float) -> OhmResult:
    """Current from voltage (V) and resistance (Ω)."""
    if resistance == 0:
        raise InvalidParameterError("resistance != 0", "Resistance cannot be zero")
    current = voltage / resistance
    return OhmResult(
        voltage=voltage,
        current=current,
        resistance=resistance,
        power=calculate_power(voltage, current),
        solved_for='current',
        input_summary=f"V = {format_voltage(voltage)}, R = {format_resistance(resistance)}",
        result_summary=f"I = {format_current(current)}",
    )


def calculate_resistance(voltage: float, current: float) -> OhmResult:
    """Resistance from voltage (V) and current (A)."""
    if current == 0:
        raise InvalidParameterError("current != 0", "Current cannot be zero")
    resistance = voltage / current
    return OhmResult(
        voltage=voltage,
        current=current,
        resistance=resistance,
        power=calculate_power(voltage, current),
        solved_for='resistance',
        input_summary=f"V = {format_voltage(voltage)}, I = {format_current(current)}",
        result_summary=f"R = {format_resistance(resistance)}",
    )


def format_voltage(voltage: float) -> str:
    if abs(voltage) < 0.001:
        return f"{voltage * 1_000_000:.3f} µV"
    if abs(voltage) < 1:
        return f"{voltage * 1000:.3f} mV"
    if abs(voltage) >= 1000:
        return f"{voltage / 1000:.3f} kV"
    return f"{voltage:.3f} V"


def format_current(current: float) -> str:
    if abs(current) < 0.000001:
        return f"{current * 1_000_000_000:.3f} nA"
    if abs(current) < 0.001:
        return f"{current * 1_000_000:.3f} µA"
    if abs(current) < 1:
        return f"{current * 1000:.3f} mA"
    return f"{current:.3f} A"


def format_resistance(resistance: float) -> str:
    if resistance >= 1_000_000:
        return f"{resistance / 1_000_000:.3f} MΩ"
    if resistance >= 1000:
        return f"{resistance / 1000:.3f} kΩ"
    if resistance < 1:
        return f"{resistance * 1000:.3f} mΩ"
    return f"{resistance:.3f} Ω"
