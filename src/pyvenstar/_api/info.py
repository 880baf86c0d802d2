"""Thermostat status endpoint.

Endpoint:
  - /query/info
"""

from __future__ import annotations

import logging

from pyvenstar._constants import INFO_ENDPOINT
from pyvenstar._transport import Transport
from pyvenstar.models.snapshot import DeviceSnapshot

_logger = logging.getLogger(__name__)


async def fetch_snapshot(transport: Transport) -> DeviceSnapshot:
    """Fetch and validate the current device snapshot.

    Raises :class:`~pyvenstar.exceptions.NetworkError` on transport failure
    and :class:`~pyvenstar.exceptions.MalformedSnapshotError` when the body
    is not a complete snapshot.
    """
    payload = await transport.get_json(INFO_ENDPOINT)
    snapshot = DeviceSnapshot.from_payload(payload, endpoint=INFO_ENDPOINT)
    _logger.debug(
        "Snapshot mode=%s unit=%s space=%s heat=%s cool=%s state=%s fan=%s",
        snapshot.mode.name,
        snapshot.temp_unit.name,
        snapshot.space_temp,
        snapshot.heat_temp,
        snapshot.cool_temp,
        snapshot.activity.name,
        snapshot.fan.name,
    )
    return snapshot
