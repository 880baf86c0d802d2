"""Client configuration for pyvenstar."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from typing import Any

from pyvenstar._constants import (
    DEFAULT_COOL_SETPOINT_C,
    DEFAULT_HEAT_SETPOINT_C,
    DEFAULT_MAX_TEMP_C,
    DEFAULT_MIN_SETPOINT_DELTA,
    DEFAULT_MIN_TEMP_C,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_PORT,
    DEFAULT_REQUEST_TIMEOUT,
)
from pyvenstar.exceptions import VenstarConfigError
from pyvenstar.translate.settings import TranslationSettings


@dataclasses.dataclass(frozen=True)
class VenstarConfig:
    """Per-thermostat configuration.

    Parameters
    ----------
    host : str
        IP address or hostname of the thermostat.
    name : str
        Display name handed to the automation layer.
    port : int
        HTTP port of the local API.
    poll_interval : float
        Seconds between scheduled polls.
    request_timeout : float
        Total timeout for a single HTTP request, seconds.
    min_setpoint_delta : float
        Minimum heat/cool separation in AUTO, device-unit degrees.
    default_heat_c : float
        Heating setpoint written when a command cannot derive one.
    default_cool_c : float
        Cooling setpoint written when a command cannot derive one.
    min_temp_c : float
        Lowest temperature accepted from callers.
    max_temp_c : float
        Highest temperature accepted from callers.
    """

    host: str
    name: str = "Venstar Thermostat"
    port: int = DEFAULT_PORT
    poll_interval: float = DEFAULT_POLL_INTERVAL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    min_setpoint_delta: float = DEFAULT_MIN_SETPOINT_DELTA
    default_heat_c: float = DEFAULT_HEAT_SETPOINT_C
    default_cool_c: float = DEFAULT_COOL_SETPOINT_C
    min_temp_c: float = DEFAULT_MIN_TEMP_C
    max_temp_c: float = DEFAULT_MAX_TEMP_C

    def __post_init__(self) -> None:
        if not self.host or not self.host.strip():
            raise VenstarConfigError("host must be non-empty")
        if self.poll_interval <= 0:
            raise VenstarConfigError("poll_interval must be positive")
        if self.request_timeout <= 0:
            raise VenstarConfigError("request_timeout must be positive")
        if self.min_setpoint_delta < 0:
            raise VenstarConfigError("min_setpoint_delta must be >= 0")
        if self.min_temp_c >= self.max_temp_c:
            raise VenstarConfigError("min_temp_c must be lower than max_temp_c")

    @property
    def base_url(self) -> str:
        host = self.host.strip()
        if self.port == DEFAULT_PORT:
            return f"http://{host}"
        return f"http://{host}:{self.port}"

    @property
    def unique_id(self) -> str:
        """Stable identifier derived from the device address."""
        return f"venstar:{self.host.strip().lower()}"

    def settings(self) -> TranslationSettings:
        """Translator settings derived from this configuration."""
        return TranslationSettings(
            min_setpoint_delta=self.min_setpoint_delta,
            default_heat_c=self.default_heat_c,
            default_cool_c=self.default_cool_c,
            min_temp_c=self.min_temp_c,
            max_temp_c=self.max_temp_c,
        )

    @classmethod
    def from_env(cls, **overrides: Any) -> VenstarConfig:
        """Create configuration from environment variables.

        Reads ``VENSTAR_HOST`` plus optional ``VENSTAR_*`` variables.
        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP: dict[str, tuple[str, type]] = {
            "VENSTAR_HOST": ("host", str),
            "VENSTAR_NAME": ("name", str),
            "VENSTAR_PORT": ("port", int),
            "VENSTAR_POLL_INTERVAL": ("poll_interval", float),
            "VENSTAR_REQUEST_TIMEOUT": ("request_timeout", float),
            "VENSTAR_MIN_SETPOINT_DELTA": ("min_setpoint_delta", float),
            "VENSTAR_DEFAULT_HEAT_C": ("default_heat_c", float),
            "VENSTAR_DEFAULT_COOL_C": ("default_cool_c", float),
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, (field_name, cast) in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = cast(val)
            except ValueError as exc:
                raise VenstarConfigError(f"{env_key} is not a valid {cast.__name__}: {val!r}") from exc

        config_kwargs.update(overrides)
        if "host" not in config_kwargs:
            raise VenstarConfigError("VENSTAR_HOST is not set")
        return cls(**config_kwargs)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> VenstarConfig:
        """Build from one entry of a ``thermostats`` list.

        Accepts ``ip`` as an alias of ``host``; unknown keys are ignored.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        kwargs = {key: value for key, value in data.items() if key in known}
        if "host" not in kwargs and data.get("ip"):
            kwargs["host"] = data["ip"]
        if "host" not in kwargs:
            raise VenstarConfigError(f"Thermostat entry {dict(data)!r} has no ip/host")
        try:
            return cls(**kwargs)
        except TypeError as exc:
            raise VenstarConfigError(f"Invalid thermostat entry {dict(data)!r}: {exc}") from exc


def load_thermostat_configs(data: Mapping[str, Any]) -> list[VenstarConfig]:
    """Parse a platform block of the form ``{"thermostats": [{"name": ..., "ip": ...}, ...]}``."""
    entries = data.get("thermostats") or []
    if not isinstance(entries, list):
        raise VenstarConfigError("'thermostats' must be a list")
    configs: list[VenstarConfig] = []
    for entry in entries:
        if not isinstance(entry, Mapping):
            raise VenstarConfigError(f"Thermostat entry must be an object, got {type(entry).__name__}")
        configs.append(VenstarConfig.from_mapping(entry))
    return configs
