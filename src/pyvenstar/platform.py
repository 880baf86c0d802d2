"""Run several thermostats side by side.

Devices are fully independent: each gets its own transport, controller and
lock.  The platform only shares the :class:`aiohttp.ClientSession`.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from typing import Any

import aiohttp

from pyvenstar._transport import HttpTransport
from pyvenstar.accessory import ThermostatAccessory
from pyvenstar.config import VenstarConfig, load_thermostat_configs
from pyvenstar.controller import ReconciliationController

_logger = logging.getLogger(__name__)


class VenstarPlatform:
    """Owns one accessory per configured thermostat, keyed by ``unique_id``."""

    def __init__(
        self,
        configs: Sequence[VenstarConfig],
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._configs = list(configs)
        self._external_session = session is not None
        self._http_session = session
        self._accessories: dict[str, ThermostatAccessory] = {}

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], **kwargs: Any) -> VenstarPlatform:
        return cls(load_thermostat_configs(data), **kwargs)

    async def __aenter__(self) -> VenstarPlatform:
        await self.async_setup()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.async_shutdown()

    @property
    def accessories(self) -> dict[str, ThermostatAccessory]:
        return dict(self._accessories)

    def _build_controller(self, config: VenstarConfig, session: aiohttp.ClientSession) -> ReconciliationController:
        return ReconciliationController(
            HttpTransport(config, session),
            name=config.name,
            settings=config.settings(),
            poll_interval=config.poll_interval,
        )

    async def async_setup(self) -> None:
        """Create and start a controller for every configured thermostat."""
        if not self._configs:
            _logger.warning("No thermostats configured.")
            return
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        session = self._http_session

        for config in self._configs:
            if config.unique_id in self._accessories:
                _logger.warning("Ignoring duplicate thermostat %s (%s)", config.name, config.host)
                continue
            _logger.info("Adding thermostat %s (%s)", config.name, config.host)
            self._accessories[config.unique_id] = ThermostatAccessory(self._build_controller(config, session))

        await asyncio.gather(*(acc.controller.async_start() for acc in self._accessories.values()))

    async def async_shutdown(self) -> None:
        await asyncio.gather(*(acc.controller.async_stop() for acc in self._accessories.values()))
        self._accessories.clear()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
