"""Normalized command -> device write.

Every write carries both setpoints because the ``/control`` endpoint
rejects requests missing either of them.  Setpoints a command does not own
are filled from :class:`TranslationSettings` defaults, except for fan
toggles which pass the device's current setpoints through untouched.
"""

from __future__ import annotations

import logging
import math

from pyvenstar._constants import round_half_up
from pyvenstar.exceptions import InvalidCommandError, UnsupportedInModeError
from pyvenstar.models.commands import (
    Command,
    CommandPlan,
    DeviceWrite,
    SetCoolingThreshold,
    SetFan,
    SetHeatingThreshold,
    SetMode,
    SetTargetTemp,
)
from pyvenstar.models.snapshot import DeviceSnapshot, FanSetting, ThermostatMode
from pyvenstar.models.state import NormalizedState
from pyvenstar.translate.settings import TranslationSettings
from pyvenstar.translate.temperature import from_canonical, to_canonical

_logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = TranslationSettings()


def _check_temperature(value: float, settings: TranslationSettings, what: str) -> float:
    if not math.isfinite(value):
        raise InvalidCommandError(f"{what} must be a finite number, got {value!r}")
    if not settings.min_temp_c <= value <= settings.max_temp_c:
        raise InvalidCommandError(
            f"{what} must be between {settings.min_temp_c} and {settings.max_temp_c} °C, got {value}"
        )
    return float(value)


def _clamp(value: float, settings: TranslationSettings) -> float:
    return max(settings.min_temp_c, min(settings.max_temp_c, value))


def _check_device_limits(write: DeviceWrite, snapshot: DeviceSnapshot) -> None:
    limits = (
        ("heattemp", write.heat_temp, snapshot.heat_temp_min, snapshot.heat_temp_max),
        ("cooltemp", write.cool_temp, snapshot.cool_temp_min, snapshot.cool_temp_max),
    )
    for name, value, low, high in limits:
        if low is not None and value < low:
            raise InvalidCommandError(f"{name}={value} is below the thermostat minimum {low}")
        if high is not None and value > high:
            raise InvalidCommandError(f"{name}={value} is above the thermostat maximum {high}")


def _setpoint_delta(snapshot: DeviceSnapshot, settings: TranslationSettings) -> float:
    delta = snapshot.effective_setpoint_delta
    return settings.min_setpoint_delta if delta is None else delta


def _finalize(
    mode: ThermostatMode,
    heat: int,
    cool: int,
    snapshot: DeviceSnapshot,
    settings: TranslationSettings,
    *,
    fan: FanSetting | None = None,
    keep_valid_band: bool = False,
) -> DeviceWrite:
    """Apply the AUTO band and device limits to device-unit setpoints.

    With *keep_valid_band* a pair already satisfying ``cool >= heat + delta``
    is left alone; only a pair below the band is corrected.
    """
    if mode == ThermostatMode.AUTO:
        delta = _setpoint_delta(snapshot, settings)
        violated = cool < heat + delta if keep_valid_band else cool <= heat + delta
        if violated:
            bumped = heat + math.ceil(delta) + 1
            _logger.debug("AUTO band: raising cooltemp %s -> %s (heattemp=%s delta=%s)", cool, bumped, heat, delta)
            cool = bumped
    write = DeviceWrite(mode=mode, heat_temp=heat, cool_temp=cool, fan=fan)
    _check_device_limits(write, snapshot)
    return write


def _build_write(
    mode: ThermostatMode,
    heat_c: float | None,
    cool_c: float | None,
    snapshot: DeviceSnapshot,
    settings: TranslationSettings,
) -> DeviceWrite:
    unit = snapshot.temp_unit
    heat = from_canonical(settings.default_heat_c if heat_c is None else heat_c, unit)
    cool = from_canonical(settings.default_cool_c if cool_c is None else cool_c, unit)
    return _finalize(mode, heat, cool, snapshot, settings)


def _auto_plan(
    state: NormalizedState,
    heat_c: float | None,
    cool_c: float | None,
    snapshot: DeviceSnapshot,
    settings: TranslationSettings,
) -> CommandPlan:
    """Write both thresholds; stored thresholds follow any band correction."""
    heat_c = settings.default_heat_c if heat_c is None else heat_c
    cool_c = settings.default_cool_c if cool_c is None else cool_c
    write = _build_write(ThermostatMode.AUTO, heat_c, cool_c, snapshot, settings)
    if write.cool_temp != from_canonical(cool_c, snapshot.temp_unit):
        cool_c = to_canonical(write.cool_temp, snapshot.temp_unit)
    state = state.model_copy(update={"heating_threshold": heat_c, "cooling_threshold": cool_c})
    return CommandPlan(state=state, write=write)


def _plan_set_mode(
    command: SetMode,
    snapshot: DeviceSnapshot,
    previous: NormalizedState,
    settings: TranslationSettings,
) -> CommandPlan:
    mode = command.mode
    state = previous.model_copy(update={"mode": mode})
    target = _clamp(previous.target_temp, settings)
    if mode == ThermostatMode.HEAT:
        return CommandPlan(state=state, write=_build_write(mode, target, None, snapshot, settings))
    if mode == ThermostatMode.COOL:
        return CommandPlan(state=state, write=_build_write(mode, None, target, snapshot, settings))
    if mode == ThermostatMode.AUTO:
        return _auto_plan(state, previous.heating_threshold, previous.cooling_threshold, snapshot, settings)
    return CommandPlan(state=state, write=_build_write(mode, None, None, snapshot, settings))


def _plan_set_target(
    command: SetTargetTemp,
    snapshot: DeviceSnapshot,
    previous: NormalizedState,
    settings: TranslationSettings,
) -> CommandPlan:
    target = _check_temperature(command.temperature_c, settings, "target temperature")
    mode = snapshot.mode
    if mode == ThermostatMode.AUTO:
        raise UnsupportedInModeError(
            "Target temperature cannot be set in AUTO; set the heating/cooling thresholds instead",
            mode=mode,
        )
    if mode == ThermostatMode.OFF:
        # In OFF the target tracks the room temperature.
        raise UnsupportedInModeError("Target temperature cannot be set while the thermostat is OFF", mode=mode)
    state = previous.model_copy(update={"target_temp": target})
    if mode == ThermostatMode.HEAT:
        return CommandPlan(state=state, write=_build_write(mode, target, None, snapshot, settings))
    return CommandPlan(state=state, write=_build_write(mode, None, target, snapshot, settings))


def _plan_set_threshold(
    command: SetHeatingThreshold | SetCoolingThreshold,
    snapshot: DeviceSnapshot,
    previous: NormalizedState,
    settings: TranslationSettings,
) -> CommandPlan:
    if isinstance(command, SetHeatingThreshold):
        heat_c = _check_temperature(command.temperature_c, settings, "heating threshold")
        cool_c = previous.cooling_threshold
        stored = previous.model_copy(update={"heating_threshold": heat_c})
    else:
        cool_c = _check_temperature(command.temperature_c, settings, "cooling threshold")
        heat_c = previous.heating_threshold
        stored = previous.model_copy(update={"cooling_threshold": cool_c})

    if snapshot.mode != ThermostatMode.AUTO:
        return CommandPlan(state=stored)
    return _auto_plan(stored, heat_c, cool_c, snapshot, settings)


def _plan_set_fan(
    command: SetFan,
    snapshot: DeviceSnapshot,
    previous: NormalizedState,
    settings: TranslationSettings,
) -> CommandPlan:
    fan = FanSetting.ON if command.on else FanSetting.AUTO
    write = _finalize(
        snapshot.mode,
        round_half_up(snapshot.heat_temp),
        round_half_up(snapshot.cool_temp),
        snapshot,
        settings,
        fan=fan,
        keep_valid_band=True,
    )
    return CommandPlan(state=previous.model_copy(update={"fan_on": command.on}), write=write)


def translate_command(
    command: Command,
    snapshot: DeviceSnapshot,
    previous: NormalizedState,
    settings: TranslationSettings = DEFAULT_SETTINGS,
) -> CommandPlan:
    """Translate *command* into a device write.

    Parameters
    ----------
    command
        The caller's request.
    snapshot
        Freshly fetched device state.  Its ``temp_unit`` decides the unit of
        every emitted setpoint and its ``mode`` is the "current mode".
    previous
        The controller's current normalized state.
    settings
        Delta, fallback setpoints and accepted temperature range.

    Raises
    ------
    UnsupportedInModeError
        Target temperature changes while the thermostat is in AUTO or OFF.
    InvalidCommandError
        Out-of-range or non-finite values.
    """
    if isinstance(command, SetMode):
        return _plan_set_mode(command, snapshot, previous, settings)
    if isinstance(command, SetTargetTemp):
        return _plan_set_target(command, snapshot, previous, settings)
    if isinstance(command, (SetHeatingThreshold, SetCoolingThreshold)):
        return _plan_set_threshold(command, snapshot, previous, settings)
    if isinstance(command, SetFan):
        return _plan_set_fan(command, snapshot, previous, settings)
    raise InvalidCommandError(f"Unsupported command {type(command).__name__}")
