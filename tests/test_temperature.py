from __future__ import annotations

import pytest

from pyvenstar._constants import round_half_up
from pyvenstar.models.snapshot import TemperatureUnit
from pyvenstar.translate.temperature import from_canonical, to_canonical


def test_fahrenheit_reference_points() -> None:
    assert to_canonical(32, TemperatureUnit.FAHRENHEIT) == pytest.approx(0.0)
    assert to_canonical(212, TemperatureUnit.FAHRENHEIT) == pytest.approx(100.0)
    assert to_canonical(70, TemperatureUnit.FAHRENHEIT) == pytest.approx(21.111, abs=1e-3)


def test_celsius_is_passthrough() -> None:
    assert to_canonical(21.5, TemperatureUnit.CELSIUS) == 21.5
    assert from_canonical(21.4, TemperatureUnit.CELSIUS) == 21


def test_from_canonical_returns_integers() -> None:
    value = from_canonical(22.0, TemperatureUnit.FAHRENHEIT)
    assert isinstance(value, int)
    assert value == 72


def test_half_degrees_round_up() -> None:
    assert round_half_up(22.5) == 23
    assert round_half_up(21.5) == 22
    assert round_half_up(-0.5) == 0
    assert from_canonical(22.5, TemperatureUnit.CELSIUS) == 23


@pytest.mark.parametrize("unit", list(TemperatureUnit))
def test_round_trip_recovers_device_value(unit: TemperatureUnit) -> None:
    for device_value in range(-40, 121):
        assert from_canonical(to_canonical(device_value, unit), unit) == device_value


@pytest.mark.parametrize("unit", list(TemperatureUnit))
def test_round_trip_of_fractional_readings_matches_rounding(unit: TemperatureUnit) -> None:
    for tenths in range(500, 900, 3):
        device_value = tenths / 10
        if abs(device_value - int(device_value) - 0.5) < 0.05:
            continue
        assert from_canonical(to_canonical(device_value, unit), unit) == round_half_up(device_value)
