"""Thermostat control endpoint.

Endpoint:
  - /control (form-encoded ``mode``, ``heattemp``, ``cooltemp``, optional ``fan``)

The thermostat replies ``{"success": true}`` or
``{"error": true, "reason": "..."}``; some firmware returns an empty body.
"""

from __future__ import annotations

import logging
from typing import Any

from pyvenstar._constants import CONTROL_ENDPOINT
from pyvenstar._transport import Transport
from pyvenstar.exceptions import VenstarApiError
from pyvenstar.models.commands import DeviceWrite

_logger = logging.getLogger(__name__)


def _check_reply(reply: Any) -> None:
    if not isinstance(reply, dict) or not reply.get("error"):
        return
    reason = str(reply.get("reason", ""))
    raise VenstarApiError(
        f"{CONTROL_ENDPOINT} rejected the write: {reason or 'no reason given'}",
        reason=reason,
        endpoint=CONTROL_ENDPOINT,
    )


async def post_control(transport: Transport, write: DeviceWrite) -> None:
    """Send *write* to the thermostat."""
    form = write.to_form()
    reply = await transport.post_form(CONTROL_ENDPOINT, form)
    _check_reply(reply)
    _logger.info(
        "Thermostat updated: mode=%s heattemp=%s cooltemp=%s fan=%s",
        form["mode"],
        form["heattemp"],
        form["cooltemp"],
        form.get("fan"),
    )
