"""Typed models for thermostat commands and the device writes they produce.

Commands are expressed in normalized terms (°C, :class:`ThermostatMode`).
The command translator turns them into a :class:`DeviceWrite`, which is
encoded as the form body of ``POST /control``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pyvenstar.models.snapshot import FanSetting, ThermostatMode
from pyvenstar.models.state import NormalizedState

__all__ = [
    "Command",
    "CommandPlan",
    "DeviceWrite",
    "SetCoolingThreshold",
    "SetFan",
    "SetHeatingThreshold",
    "SetMode",
    "SetTargetTemp",
    "ThermostatCommand",
]


class ThermostatCommand(BaseModel):
    """Base class for caller-issued commands."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
        allow_inf_nan=False,
    )


class SetMode(ThermostatCommand):
    mode: ThermostatMode


class SetTargetTemp(ThermostatCommand):
    """Set the target temperature.  Only valid outside AUTO."""

    temperature_c: float


class SetHeatingThreshold(ThermostatCommand):
    """Set the AUTO heating setpoint."""

    temperature_c: float


class SetCoolingThreshold(ThermostatCommand):
    """Set the AUTO cooling setpoint."""

    temperature_c: float


class SetFan(ThermostatCommand):
    on: bool


Command = SetMode | SetTargetTemp | SetHeatingThreshold | SetCoolingThreshold | SetFan


class DeviceWrite(BaseModel):
    """Body of a ``POST /control`` request.

    The API requires ``mode``, ``heattemp`` and ``cooltemp`` on every write;
    setpoints are integers in the thermostat's current unit.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    mode: ThermostatMode
    heat_temp: int = Field(serialization_alias="heattemp")
    cool_temp: int = Field(serialization_alias="cooltemp")
    fan: FanSetting | None = None

    def to_form(self) -> dict[str, str]:
        """Return the form fields, omitting ``fan`` when it is not being changed."""
        dumped: dict[str, Any] = self.model_dump(by_alias=True, exclude_none=True, mode="json")
        return {key: str(value) for key, value in dumped.items()}


class CommandPlan(BaseModel):
    """Outcome of translating a command.

    ``state`` carries the caller's intent (new mode, stored thresholds, ...);
    ``write`` is ``None`` when the command only updates stored values.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    state: NormalizedState
    write: DeviceWrite | None = None
