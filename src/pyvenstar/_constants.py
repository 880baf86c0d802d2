"""Internal constants shared across the library."""

from __future__ import annotations

import math

INFO_ENDPOINT = "/query/info"
CONTROL_ENDPOINT = "/control"
USER_AGENT = "pyvenstar"

DEFAULT_PORT = 80
#: The embedded web server is slow to answer; poll once a minute.
DEFAULT_POLL_INTERVAL: float = 60.0
DEFAULT_REQUEST_TIMEOUT: float = 10.0

# ------------------------------------------------------------------
# Setpoint defaults
# ------------------------------------------------------------------

#: Minimum heat/cool separation in AUTO, expressed in device-unit degrees.
DEFAULT_MIN_SETPOINT_DELTA = 2
DEFAULT_HEAT_SETPOINT_C = 21.0
DEFAULT_COOL_SETPOINT_C = 24.0

#: Range exposed to the automation layer for target temperatures.
DEFAULT_MIN_TEMP_C = 10.0
DEFAULT_MAX_TEMP_C = 32.0

# ------------------------------------------------------------------
# Temperature conversion  (device unit <-> canonical °C)
# ------------------------------------------------------------------


def round_half_up(value: float) -> int:
    """Round to the nearest integer with ``.5`` going up (``round`` would give 22 for 22.5)."""
    return int(math.floor(value + 0.5))


def fahrenheit_to_celsius(value: float) -> float:
    return (value - 32.0) * 5.0 / 9.0


def celsius_to_fahrenheit(value: float) -> float:
    return value * 9.0 / 5.0 + 32.0
