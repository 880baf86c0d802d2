"""Device snapshot model.

Mapped from the ``/query/info`` response of the local API::

    {"name": "Hallway", "mode": 3, "state": 0, "fan": 0, "tempunits": 0,
     "spacetemp": 70, "heattemp": 68, "cooltemp": 74, "setpointdelta": 2, ...}
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, ValidationError, model_validator

from pyvenstar.exceptions import MalformedSnapshotError
from pyvenstar.models._base import VenstarBaseModel, VenstarEnum

__all__ = [
    "Activity",
    "DeviceSnapshot",
    "FanSetting",
    "TemperatureUnit",
    "ThermostatMode",
]


class ThermostatMode(VenstarEnum):
    """Operating mode (``mode``)."""

    OFF = 0
    HEAT = 1
    COOL = 2
    AUTO = 3


class TemperatureUnit(VenstarEnum):
    """Unit the thermostat reports and accepts setpoints in (``tempunits``)."""

    FAHRENHEIT = 0
    CELSIUS = 1


class Activity(VenstarEnum):
    """What the equipment is doing right now (``state``)."""

    IDLE = 0
    HEATING = 1
    COOLING = 2


class FanSetting(VenstarEnum):
    """Fan setting (``fan``)."""

    AUTO = 0
    ON = 1


class DeviceSnapshot(VenstarBaseModel):
    """A single point-in-time read of the thermostat."""

    mode: ThermostatMode
    space_temp: float = Field(alias="spacetemp")
    """Room temperature, device units."""
    heat_temp: float = Field(alias="heattemp")
    """Heating setpoint, device units."""
    cool_temp: float = Field(alias="cooltemp")
    """Cooling setpoint, device units."""
    temp_unit: TemperatureUnit = Field(alias="tempunits")
    activity: Activity = Field(alias="state")
    fan: FanSetting

    # --- Optional fields reported by newer firmware ---
    name: str | None = None
    setpoint_delta: float | None = Field(default=None, alias="setpointdelta")
    """Minimum heat/cool separation enforced by the device, device units."""
    heat_temp_min: float | None = Field(default=None, alias="heattempmin")
    heat_temp_max: float | None = Field(default=None, alias="heattempmax")
    cool_temp_min: float | None = Field(default=None, alias="cooltempmin")
    cool_temp_max: float | None = Field(default=None, alias="cooltempmax")

    @model_validator(mode="before")
    @classmethod
    def _drop_null_optionals(cls, values: Any) -> Any:
        # Some firmware sends "" for limits it does not enforce.
        if not isinstance(values, dict):
            return values
        optional = ("name", "setpointdelta", "heattempmin", "heattempmax", "cooltempmin", "cooltempmax")
        cleaned = {k: v for k, v in values.items() if not (k in optional and v in (None, ""))}
        cleaned.setdefault("raw", dict(values))
        return cleaned

    @classmethod
    def from_payload(cls, payload: Any, *, endpoint: str = "") -> DeviceSnapshot:
        """Validate a decoded ``/query/info`` body.

        Raises :class:`MalformedSnapshotError` when the payload is not an
        object or any required field is missing or out of range.
        """
        if not isinstance(payload, dict):
            raise MalformedSnapshotError(
                f"Expected a JSON object from {endpoint or 'device'}, got {type(payload).__name__}",
                endpoint=endpoint,
            )
        try:
            return cls.model_validate(payload)
        except ValidationError as exc:
            fields = sorted({".".join(str(part) for part in err["loc"]) for err in exc.errors()})
            raise MalformedSnapshotError(
                f"Incomplete or invalid snapshot from {endpoint or 'device'}: {', '.join(fields)}",
                endpoint=endpoint,
            ) from exc

    @property
    def effective_setpoint_delta(self) -> float | None:
        """Device-reported delta, or ``None`` when the firmware does not send one."""
        if self.setpoint_delta is None or self.setpoint_delta < 0:
            return None
        return self.setpoint_delta
