"""Per-characteristic interface consumed by the automation layer.

Each characteristic maps to one field of :class:`NormalizedState`.  Reads
are served from the controller's current state; writes go through
:meth:`ReconciliationController.async_execute`, so they are serialized
against polling like every other command.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from pyvenstar.controller import ReconciliationController
from pyvenstar.exceptions import InvalidCommandError
from pyvenstar.models.commands import (
    SetCoolingThreshold,
    SetFan,
    SetHeatingThreshold,
    SetMode,
    SetTargetTemp,
    ThermostatCommand,
)
from pyvenstar.models.snapshot import TemperatureUnit, ThermostatMode
from pyvenstar.models.state import NormalizedState

Getter = Callable[[NormalizedState], Any]
Setter = Callable[[Any], Awaitable[Any]]


@dataclass(slots=True)
class Characteristic:
    """One readable (and optionally writable) value."""

    name: str
    _controller: ReconciliationController
    _getter: Getter
    _setter: Setter | None = None

    @property
    def writable(self) -> bool:
        return self._setter is not None

    def get(self) -> Any:
        return self._getter(self._controller.state)

    async def set(self, value: Any) -> None:
        """Write *value*; raises a :class:`~pyvenstar.exceptions.VenstarError` on failure."""
        if self._setter is None:
            raise InvalidCommandError(f"{self.name} is read-only")
        await self._setter(value)


def _build_command(cls: type[ThermostatCommand], **kwargs: Any) -> Any:
    try:
        return cls(**kwargs)
    except ValidationError as exc:
        raise InvalidCommandError(f"Invalid value for {cls.__name__}: {kwargs}") from exc


def _to_enum(enum_cls: type[ThermostatMode] | type[TemperatureUnit], value: Any) -> Any:
    try:
        return enum_cls(int(value))
    except (TypeError, ValueError) as exc:
        raise InvalidCommandError(f"{value!r} is not a valid {enum_cls.__name__}") from exc


class ThermostatAccessory:
    """Thermostat plus fan characteristics for one device."""

    def __init__(
        self,
        controller: ReconciliationController,
        *,
        manufacturer: str = "Venstar",
        model: str = "Explorer Mini",
    ) -> None:
        self._controller = controller
        self.manufacturer = manufacturer
        self.model = model
        self._characteristics: dict[str, Characteristic] = {}

        self._add("current_temperature", lambda s: s.current_temp)
        self._add("target_temperature", lambda s: s.target_temp, self._set_target_temperature)
        self._add("heating_threshold", lambda s: s.heating_threshold, self._set_heating_threshold)
        self._add("cooling_threshold", lambda s: s.cooling_threshold, self._set_cooling_threshold)
        self._add("target_mode", lambda s: s.mode, self._set_target_mode)
        self._add("current_state", lambda s: s.current_activity)
        self._add("display_units", lambda s: s.display_unit, self._set_display_units)
        self._add("fan_on", lambda s: s.fan_on, self._set_fan_on)

    def _add(self, name: str, getter: Getter, setter: Setter | None = None) -> None:
        self._characteristics[name] = Characteristic(name, self._controller, getter, setter)

    @property
    def name(self) -> str:
        return self._controller.name

    @property
    def controller(self) -> ReconciliationController:
        return self._controller

    def __getitem__(self, name: str) -> Characteristic:
        return self._characteristics[name]

    def __iter__(self) -> Iterator[Characteristic]:
        return iter(self._characteristics.values())

    # ------------------------------------------------------------------
    # Setters
    # ------------------------------------------------------------------

    async def _set_target_temperature(self, value: Any) -> None:
        await self._controller.async_execute(_build_command(SetTargetTemp, temperature_c=value))

    async def _set_heating_threshold(self, value: Any) -> None:
        await self._controller.async_execute(_build_command(SetHeatingThreshold, temperature_c=value))

    async def _set_cooling_threshold(self, value: Any) -> None:
        await self._controller.async_execute(_build_command(SetCoolingThreshold, temperature_c=value))

    async def _set_target_mode(self, value: Any) -> None:
        await self._controller.async_execute(SetMode(mode=_to_enum(ThermostatMode, value)))

    async def _set_display_units(self, value: Any) -> None:
        await self._controller.async_set_display_unit(_to_enum(TemperatureUnit, value))

    async def _set_fan_on(self, value: Any) -> None:
        await self._controller.async_execute(_build_command(SetFan, on=value))
