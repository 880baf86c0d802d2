"""Data models for the Venstar local API."""

from pyvenstar.models._base import VenstarBaseModel, VenstarEnum
from pyvenstar.models.commands import (
    Command,
    CommandPlan,
    DeviceWrite,
    SetCoolingThreshold,
    SetFan,
    SetHeatingThreshold,
    SetMode,
    SetTargetTemp,
    ThermostatCommand,
)
from pyvenstar.models.snapshot import Activity, DeviceSnapshot, FanSetting, TemperatureUnit, ThermostatMode
from pyvenstar.models.state import NormalizedState

__all__ = [
    "Activity",
    "Command",
    "CommandPlan",
    "DeviceSnapshot",
    "DeviceWrite",
    "FanSetting",
    "NormalizedState",
    "SetCoolingThreshold",
    "SetFan",
    "SetHeatingThreshold",
    "SetMode",
    "SetTargetTemp",
    "TemperatureUnit",
    "ThermostatCommand",
    "ThermostatMode",
    "VenstarBaseModel",
    "VenstarEnum",
]
