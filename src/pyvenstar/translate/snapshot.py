"""Device snapshot -> normalized state."""

from __future__ import annotations

from pyvenstar.models.snapshot import Activity, DeviceSnapshot, FanSetting, ThermostatMode
from pyvenstar.models.state import NormalizedState
from pyvenstar.translate.temperature import to_canonical


def _target_temperature(snapshot: DeviceSnapshot) -> float:
    unit = snapshot.temp_unit
    if snapshot.mode == ThermostatMode.AUTO:
        return to_canonical((snapshot.heat_temp + snapshot.cool_temp) / 2, unit)
    if snapshot.mode == ThermostatMode.HEAT:
        return to_canonical(snapshot.heat_temp, unit)
    if snapshot.mode == ThermostatMode.COOL:
        return to_canonical(snapshot.cool_temp, unit)
    return to_canonical(snapshot.space_temp, unit)


def _activity(snapshot: DeviceSnapshot) -> Activity:
    if snapshot.activity in (Activity.HEATING, Activity.COOLING):
        return snapshot.activity
    return Activity.IDLE


def translate_snapshot(snapshot: DeviceSnapshot, previous: NormalizedState) -> NormalizedState:
    """Build the normalized state for *snapshot*.

    Thresholds are only device-authoritative in AUTO; in the other modes the
    previous values are kept so switching back to AUTO restores them.  The
    display unit follows the device until the user picks one explicitly.
    """
    unit = snapshot.temp_unit

    heating_threshold = previous.heating_threshold
    cooling_threshold = previous.cooling_threshold
    if snapshot.mode == ThermostatMode.AUTO:
        heating_threshold = to_canonical(snapshot.heat_temp, unit)
        cooling_threshold = to_canonical(snapshot.cool_temp, unit)

    display_unit = previous.display_unit if previous.display_unit_locked else unit

    return NormalizedState(
        current_temp=to_canonical(snapshot.space_temp, unit),
        target_temp=_target_temperature(snapshot),
        heating_threshold=heating_threshold,
        cooling_threshold=cooling_threshold,
        mode=snapshot.mode,
        current_activity=_activity(snapshot),
        display_unit=display_unit,
        display_unit_locked=previous.display_unit_locked,
        fan_on=snapshot.fan == FanSetting.ON,
    )
