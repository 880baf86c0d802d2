from __future__ import annotations

import pytest

from pyvenstar.exceptions import MalformedSnapshotError
from pyvenstar.models.commands import DeviceWrite, SetTargetTemp
from pyvenstar.models.snapshot import Activity, DeviceSnapshot, FanSetting, TemperatureUnit, ThermostatMode
from pyvenstar.models.state import NormalizedState

_INFO = {
    "name": "Hallway",
    "mode": 3,
    "spacetemp": 70,
    "heattemp": 68,
    "cooltemp": 74,
    "tempunits": 0,
    "state": 0,
    "fan": 0,
}


def test_snapshot_maps_wire_fields() -> None:
    snapshot = DeviceSnapshot.from_payload(_INFO)

    assert snapshot.mode == ThermostatMode.AUTO
    assert snapshot.space_temp == 70
    assert snapshot.heat_temp == 68
    assert snapshot.cool_temp == 74
    assert snapshot.temp_unit == TemperatureUnit.FAHRENHEIT
    assert snapshot.activity == Activity.IDLE
    assert snapshot.fan == FanSetting.AUTO
    assert snapshot.name == "Hallway"
    assert snapshot.raw == _INFO


def test_snapshot_ignores_unknown_fields_and_blank_limits() -> None:
    snapshot = DeviceSnapshot.from_payload(
        {**_INFO, "schedule": 1, "away": 0, "heattempmin": "", "setpointdelta": 3}
    )

    assert snapshot.heat_temp_min is None
    assert snapshot.effective_setpoint_delta == 3
    assert snapshot.raw["heattempmin"] == ""


@pytest.mark.parametrize(
    "payload",
    [
        {key: value for key, value in _INFO.items() if key != "cooltemp"},
        {**_INFO, "mode": 7},
        {**_INFO, "tempunits": 2},
        {**_INFO, "state": 9},
        {**_INFO, "spacetemp": None},
        {**_INFO, "heattemp": "warm"},
        {**_INFO, "spacetemp": float("nan")},
    ],
)
def test_incomplete_or_invalid_snapshot_is_malformed(payload: dict[str, object]) -> None:
    with pytest.raises(MalformedSnapshotError):
        DeviceSnapshot.from_payload(payload, endpoint="/query/info")


@pytest.mark.parametrize("payload", [None, [], "ok", 3])
def test_non_object_snapshot_is_malformed(payload: object) -> None:
    with pytest.raises(MalformedSnapshotError) as exc_info:
        DeviceSnapshot.from_payload(payload, endpoint="/query/info")
    assert exc_info.value.endpoint == "/query/info"


def test_device_write_form_omits_fan_when_unchanged() -> None:
    write = DeviceWrite(mode=ThermostatMode.HEAT, heat_temp=22, cool_temp=24)
    assert write.to_form() == {"mode": "1", "heattemp": "22", "cooltemp": "24"}


def test_device_write_form_includes_fan() -> None:
    write = DeviceWrite(mode=ThermostatMode.AUTO, heat_temp=68, cool_temp=74, fan=FanSetting.ON)
    assert write.to_form() == {"mode": "3", "heattemp": "68", "cooltemp": "74", "fan": "1"}


def test_normalized_state_defaults_before_first_poll() -> None:
    state = NormalizedState()
    assert state.current_temp == 20.0
    assert state.target_temp == 22.0
    assert state.heating_threshold is None
    assert state.cooling_threshold is None
    assert state.mode == ThermostatMode.OFF
    assert state.display_unit == TemperatureUnit.CELSIUS
    assert state.display_unit_locked is False
    assert state.fan_on is False


def test_with_display_unit_sets_sticky_flag() -> None:
    state = NormalizedState().with_display_unit(TemperatureUnit.FAHRENHEIT)
    assert state.display_unit == TemperatureUnit.FAHRENHEIT
    assert state.display_unit_locked is True


def test_commands_reject_non_finite_temperatures() -> None:
    with pytest.raises(ValueError):
        SetTargetTemp(temperature_c=float("inf"))
