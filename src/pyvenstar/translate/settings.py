"""Tunables injected into the command translator."""

from __future__ import annotations

import dataclasses

from pyvenstar._constants import (
    DEFAULT_COOL_SETPOINT_C,
    DEFAULT_HEAT_SETPOINT_C,
    DEFAULT_MAX_TEMP_C,
    DEFAULT_MIN_SETPOINT_DELTA,
    DEFAULT_MIN_TEMP_C,
)


@dataclasses.dataclass(frozen=True)
class TranslationSettings:
    """Translator parameters.

    Parameters
    ----------
    min_setpoint_delta : float
        Minimum heat/cool separation in AUTO, device-unit degrees.  A
        ``setpointdelta`` reported by the thermostat takes precedence.
    default_heat_c : float
        Heating setpoint (°C) written when a command cannot derive one.
    default_cool_c : float
        Cooling setpoint (°C) written when a command cannot derive one.
    min_temp_c, max_temp_c : float
        Accepted range for temperatures in commands.
    """

    min_setpoint_delta: float = DEFAULT_MIN_SETPOINT_DELTA
    default_heat_c: float = DEFAULT_HEAT_SETPOINT_C
    default_cool_c: float = DEFAULT_COOL_SETPOINT_C
    min_temp_c: float = DEFAULT_MIN_TEMP_C
    max_temp_c: float = DEFAULT_MAX_TEMP_C

    def __post_init__(self) -> None:
        if self.min_setpoint_delta < 0:
            raise ValueError("min_setpoint_delta must be >= 0")
        if self.min_temp_c >= self.max_temp_c:
            raise ValueError("min_temp_c must be lower than max_temp_c")
