"""High-level async client for the thermostat's local API."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pyvenstar._api.control import post_control
from pyvenstar._api.info import fetch_snapshot
from pyvenstar._transport import HttpTransport
from pyvenstar.config import VenstarConfig
from pyvenstar.controller import ReconciliationController
from pyvenstar.exceptions import VenstarError
from pyvenstar.models.commands import DeviceWrite
from pyvenstar.models.snapshot import DeviceSnapshot

_logger = logging.getLogger(__name__)


class VenstarClient:
    """Async client for one thermostat.

    Usage::

        async with VenstarClient(VenstarConfig(host="192.168.1.40")) as client:
            snapshot = await client.get_snapshot()
            controller = client.create_controller()
    """

    def __init__(
        self,
        config: VenstarConfig,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: HttpTransport | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> VenstarClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> HttpTransport:
        if self._transport is None:
            raise VenstarError("Client not initialized. Use 'async with VenstarClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def config(self) -> VenstarConfig:
        return self._config

    async def get_snapshot(self) -> DeviceSnapshot:
        """Read ``/query/info`` once."""
        return await fetch_snapshot(self._require_transport())

    async def send_write(self, write: DeviceWrite) -> None:
        """Send a raw write, bypassing translation and reconciliation."""
        await post_control(self._require_transport(), write)

    def create_controller(self) -> ReconciliationController:
        """Build a reconciliation controller bound to this client's transport."""
        return ReconciliationController(
            self._require_transport(),
            name=self._config.name,
            settings=self._config.settings(),
            poll_interval=self._config.poll_interval,
        )
