"""Normalized thermostat state.

This is the unit-independent view published to the automation layer.  All
temperatures are Celsius; the device unit only exists in
:class:`~pyvenstar.models.snapshot.DeviceSnapshot` and
:class:`~pyvenstar.models.commands.DeviceWrite`.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from pyvenstar.models.snapshot import Activity, TemperatureUnit, ThermostatMode


class NormalizedState(BaseModel):
    """Canonical state of one thermostat.

    The defaults are what the automation layer sees before the first
    successful poll.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", allow_inf_nan=False)

    current_temp: float = 20.0
    """Room temperature, °C."""
    target_temp: float = 22.0
    """Target temperature, °C.  In AUTO the midpoint of the two setpoints."""
    heating_threshold: float | None = None
    """AUTO heating setpoint, °C.  ``None`` until an AUTO snapshot was seen."""
    cooling_threshold: float | None = None
    """AUTO cooling setpoint, °C.  ``None`` until an AUTO snapshot was seen."""
    mode: ThermostatMode = ThermostatMode.OFF
    current_activity: Activity = Activity.IDLE
    display_unit: TemperatureUnit = TemperatureUnit.CELSIUS
    display_unit_locked: bool = False
    """Set once the user picks a display unit; polls then leave it alone."""
    fan_on: bool = False

    def with_display_unit(self, unit: TemperatureUnit) -> NormalizedState:
        """Return a copy with a user-chosen (sticky) display unit."""
        return self.model_copy(update={"display_unit": unit, "display_unit_locked": True})
