"""Conversion between device units and canonical Celsius."""

from __future__ import annotations

from pyvenstar._constants import celsius_to_fahrenheit, fahrenheit_to_celsius, round_half_up
from pyvenstar.models.snapshot import TemperatureUnit


def to_canonical(value: float, unit: TemperatureUnit) -> float:
    """Convert a device reading to °C."""
    if unit == TemperatureUnit.FAHRENHEIT:
        return fahrenheit_to_celsius(value)
    return float(value)


def from_canonical(value_c: float, unit: TemperatureUnit) -> int:
    """Convert °C to an integer setpoint in the device unit."""
    if unit == TemperatureUnit.FAHRENHEIT:
        return round_half_up(celsius_to_fahrenheit(value_c))
    return round_half_up(value_c)
