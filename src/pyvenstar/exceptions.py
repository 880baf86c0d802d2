"""Custom exception hierarchy for pyvenstar."""

from __future__ import annotations

from typing import Any


class VenstarError(Exception):
    """Base exception for all pyvenstar errors."""


class VenstarConfigError(VenstarError):
    """Invalid or missing configuration."""


class NetworkError(VenstarError):
    """HTTP-level failure (connection refused, timeout, non-200 status).

    Transient by nature.  The controller does not retry; the next scheduled
    poll is the retry.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class MalformedSnapshotError(VenstarError):
    """The thermostat returned unparseable or incomplete JSON."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class VenstarApiError(VenstarError):
    """The thermostat answered a write with ``{"error": true, ...}``."""

    def __init__(self, message: str, *, reason: str = "", endpoint: str = "") -> None:
        self.reason = reason
        self.endpoint = endpoint
        super().__init__(message)


class UnsupportedInModeError(VenstarError):
    """Command is not valid for the thermostat's current mode.

    Raised e.g. for a target-temperature change while the device runs in
    AUTO, where only the heating/cooling thresholds apply.
    """

    def __init__(self, message: str, *, mode: Any = None) -> None:
        self.mode = mode
        super().__init__(message)


class InvalidCommandError(VenstarError, ValueError):
    """Command value is out of range or otherwise unusable."""


class ControllerClosedError(VenstarError):
    """The controller was stopped before or while handling a command."""
