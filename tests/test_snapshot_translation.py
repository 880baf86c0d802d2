from __future__ import annotations

import pytest

from pyvenstar.models.snapshot import Activity, DeviceSnapshot, TemperatureUnit, ThermostatMode
from pyvenstar.models.state import NormalizedState
from pyvenstar.translate.snapshot import translate_snapshot


def _snapshot(**overrides: object) -> DeviceSnapshot:
    payload = {
        "mode": 3,
        "spacetemp": 70,
        "heattemp": 68,
        "cooltemp": 74,
        "tempunits": 0,
        "state": 0,
        "fan": 0,
        **overrides,
    }
    return DeviceSnapshot.from_payload(payload)


def test_auto_snapshot_in_fahrenheit() -> None:
    state = translate_snapshot(_snapshot(), NormalizedState())

    assert state.current_temp == pytest.approx(21.1, abs=0.05)
    assert state.heating_threshold == pytest.approx(20.0, abs=0.05)
    assert state.cooling_threshold == pytest.approx(23.3, abs=0.05)
    assert state.target_temp == pytest.approx(21.67, abs=0.01)
    assert state.current_activity == Activity.IDLE
    assert state.mode == ThermostatMode.AUTO
    assert state.display_unit == TemperatureUnit.FAHRENHEIT
    assert state.fan_on is False


def test_heat_mode_targets_heat_setpoint() -> None:
    snapshot = _snapshot(mode=1, tempunits=1, spacetemp=19.5, heattemp=21, cooltemp=25)
    state = translate_snapshot(snapshot, NormalizedState())
    assert state.target_temp == 21
    assert state.current_temp == 19.5


def test_cool_mode_targets_cool_setpoint() -> None:
    state = translate_snapshot(_snapshot(mode=2, tempunits=1, heattemp=21, cooltemp=25), NormalizedState())
    assert state.target_temp == 25


def test_off_mode_targets_room_temperature() -> None:
    state = translate_snapshot(_snapshot(mode=0, spacetemp=77), NormalizedState())
    assert state.target_temp == pytest.approx(25.0)


def test_thresholds_only_follow_device_in_auto() -> None:
    previous = NormalizedState(heating_threshold=19.0, cooling_threshold=26.0)

    state = translate_snapshot(_snapshot(mode=1, tempunits=1, heattemp=22, cooltemp=30), previous)

    assert state.heating_threshold == 19.0
    assert state.cooling_threshold == 26.0


def test_thresholds_stay_unknown_outside_auto() -> None:
    state = translate_snapshot(_snapshot(mode=2), NormalizedState())
    assert state.heating_threshold is None
    assert state.cooling_threshold is None


@pytest.mark.parametrize(
    ("code", "expected"),
    [(0, Activity.IDLE), (1, Activity.HEATING), (2, Activity.COOLING)],
)
def test_activity_mapping(code: int, expected: Activity) -> None:
    assert translate_snapshot(_snapshot(state=code), NormalizedState()).current_activity == expected


def test_fan_on() -> None:
    assert translate_snapshot(_snapshot(fan=1), NormalizedState()).fan_on is True


def test_display_unit_follows_device_until_user_sets_it() -> None:
    state = translate_snapshot(_snapshot(tempunits=1), NormalizedState(display_unit=TemperatureUnit.FAHRENHEIT))
    assert state.display_unit == TemperatureUnit.CELSIUS
    assert state.display_unit_locked is False


@pytest.mark.parametrize("chosen", list(TemperatureUnit))
def test_user_display_unit_survives_any_poll(chosen: TemperatureUnit) -> None:
    state = NormalizedState().with_display_unit(chosen)
    for tempunits in (0, 1, 0, 1):
        state = translate_snapshot(_snapshot(tempunits=tempunits), state)
        assert state.display_unit == chosen
        assert state.display_unit_locked is True


@pytest.mark.parametrize("mode", [0, 1, 2, 3])
def test_translation_is_idempotent(mode: int) -> None:
    snapshot = _snapshot(mode=mode, state=1, fan=1)
    previous = NormalizedState(heating_threshold=18.0, cooling_threshold=27.0)

    first = translate_snapshot(snapshot, previous)
    second = translate_snapshot(snapshot, previous)

    assert first == second
    assert translate_snapshot(snapshot, first) == first


def test_previous_state_is_not_mutated() -> None:
    previous = NormalizedState()
    translate_snapshot(_snapshot(), previous)
    assert previous == NormalizedState()
