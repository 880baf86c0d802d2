"""HTTP transport for the thermostat's local API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pyvenstar._constants import USER_AGENT
from pyvenstar.config import VenstarConfig
from pyvenstar.exceptions import MalformedSnapshotError, NetworkError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (:class:`HttpTransport`) concrete.
    """

    async def get_json(self, endpoint: str) -> Any: ...

    async def post_form(self, endpoint: str, form: Mapping[str, str]) -> Any: ...


class HttpTransport:
    """Plain HTTP transport backed by an :class:`aiohttp.ClientSession`.

    The embedded server handles one connection at a time; callers are
    expected to serialize requests per device (see
    :class:`pyvenstar.controller.ReconciliationController`).
    """

    def __init__(self, config: VenstarConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def _request(self, method: str, endpoint: str, *, form: Mapping[str, str] | None = None) -> str:
        url = f"{self._config.base_url}{endpoint}"
        headers = {"user-agent": USER_AGENT}
        _logger.debug("%s %s", method, url)
        try:
            async with self._http.request(
                method,
                url,
                data=dict(form) if form is not None else None,
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise NetworkError(
                        f"HTTP {resp.status} from {endpoint}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
                return text
        except NetworkError:
            raise
        except TimeoutError as exc:
            raise NetworkError(f"Request to {endpoint} timed out", endpoint=endpoint) from exc
        except aiohttp.ClientError as exc:
            raise NetworkError(f"Request to {endpoint} failed: {exc}", endpoint=endpoint) from exc

    async def get_json(self, endpoint: str) -> Any:
        """GET *endpoint* and decode the JSON body."""
        text = await self._request("GET", endpoint)
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise MalformedSnapshotError(f"Invalid JSON from {endpoint}: {text[:200]}", endpoint=endpoint) from exc

    async def post_form(self, endpoint: str, form: Mapping[str, str]) -> Any:
        """POST a form-encoded body.

        Returns the decoded JSON reply, or ``None`` when the thermostat answers
        with an empty or non-JSON body (older firmware does).
        """
        text = await self._request("POST", endpoint, form=form)
        if not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            _logger.debug("Non-JSON reply from %s: %s", endpoint, text[:64])
            return None
