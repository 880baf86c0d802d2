"""pyvenstar - Async Python bridge for the Venstar thermostat local API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyvenstar")
except PackageNotFoundError:
    __version__ = "0+local"
from pyvenstar.accessory import Characteristic, ThermostatAccessory
from pyvenstar.client import VenstarClient
from pyvenstar.config import VenstarConfig, load_thermostat_configs
from pyvenstar.controller import ControllerPhase, ReconciliationController
from pyvenstar.exceptions import (
    ControllerClosedError,
    InvalidCommandError,
    MalformedSnapshotError,
    NetworkError,
    UnsupportedInModeError,
    VenstarApiError,
    VenstarConfigError,
    VenstarError,
)
from pyvenstar.models import (
    Activity,
    CommandPlan,
    DeviceSnapshot,
    DeviceWrite,
    FanSetting,
    NormalizedState,
    SetCoolingThreshold,
    SetFan,
    SetHeatingThreshold,
    SetMode,
    SetTargetTemp,
    TemperatureUnit,
    ThermostatMode,
)
from pyvenstar.platform import VenstarPlatform
from pyvenstar.translate import TranslationSettings, translate_command, translate_snapshot

__all__ = [
    "__version__",
    "Activity",
    "Characteristic",
    "CommandPlan",
    "ControllerClosedError",
    "ControllerPhase",
    "DeviceSnapshot",
    "DeviceWrite",
    "FanSetting",
    "InvalidCommandError",
    "MalformedSnapshotError",
    "NetworkError",
    "NormalizedState",
    "ReconciliationController",
    "SetCoolingThreshold",
    "SetFan",
    "SetHeatingThreshold",
    "SetMode",
    "SetTargetTemp",
    "TemperatureUnit",
    "ThermostatAccessory",
    "ThermostatMode",
    "TranslationSettings",
    "UnsupportedInModeError",
    "VenstarApiError",
    "VenstarClient",
    "VenstarConfig",
    "VenstarConfigError",
    "VenstarError",
    "VenstarPlatform",
    "load_thermostat_configs",
    "translate_command",
    "translate_snapshot",
]
