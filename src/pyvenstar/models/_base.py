"""Base model and enum for Venstar API payloads.

Every device payload model inherits from :class:`VenstarBaseModel` which
provides:

* frozen instances with unknown keys ignored (the firmware adds fields
  between releases);
* rejection of NaN/inf so a garbled reading never becomes a temperature;
* a ``raw`` dict that captures the original payload.

Wire enums inherit from :class:`VenstarEnum`.  Unlike lenient telemetry
enums, an unmapped code is *not* coerced to an "unknown" member: a mode or
unit the library cannot interpret must fail validation, because translating
it would produce wrong setpoints.
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class VenstarEnum(enum.IntEnum):
    """Base for integer-coded fields of the local API."""


class VenstarBaseModel(BaseModel):
    """Base for models parsed from thermostat payloads."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        allow_inf_nan=False,
    )

    raw: dict[str, Any] = Field(default_factory=dict, exclude=True)
    """Original payload dict."""

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        """Stash the raw payload unless the caller passed ``raw=`` explicitly."""
        if not isinstance(values, dict):
            return values
        if "raw" in values:
            return values
        return {**values, "raw": dict(values)}
