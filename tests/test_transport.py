from __future__ import annotations

import asyncio
import contextlib
from collections.abc import AsyncIterator
from typing import Any

import aiohttp
import pytest
from aiohttp import test_utils, web

from pyvenstar._api.control import post_control
from pyvenstar._transport import HttpTransport
from pyvenstar.client import VenstarClient
from pyvenstar.config import VenstarConfig
from pyvenstar.exceptions import MalformedSnapshotError, NetworkError, VenstarApiError, VenstarError
from pyvenstar.models.commands import DeviceWrite, SetMode
from pyvenstar.models.snapshot import ThermostatMode
from pyvenstar.platform import VenstarPlatform

_INFO = {
    "name": "Hallway",
    "mode": 0,
    "spacetemp": 70,
    "heattemp": 68,
    "cooltemp": 74,
    "tempunits": 0,
    "state": 0,
    "fan": 0,
}


class _Device:
    """Minimal aiohttp app mimicking the thermostat's local API."""

    def __init__(self) -> None:
        self.info = dict(_INFO)
        self.forms: list[dict[str, str]] = []
        self.user_agents: list[str] = []
        self.info_body: str | None = None
        self.info_status = 200
        self.control_body: str | None = None
        self.delay = 0.0

    async def handle_info(self, request: web.Request) -> web.StreamResponse:
        self.user_agents.append(request.headers.get("User-Agent", ""))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.info_body is not None:
            return web.Response(text=self.info_body, status=self.info_status)
        return web.json_response(self.info, status=self.info_status)

    async def handle_control(self, request: web.Request) -> web.StreamResponse:
        form = {key: str(value) for key, value in (await request.post()).items()}
        self.forms.append(form)
        for key in ("mode", "heattemp", "cooltemp", "fan"):
            if key in form:
                self.info[key] = int(form[key])
        if self.control_body is not None:
            return web.Response(text=self.control_body)
        return web.json_response({"success": True})

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/query/info", self.handle_info)
        app.router.add_post("/control", self.handle_control)
        return app


@contextlib.asynccontextmanager
async def _serve(device: _Device, **config: Any) -> AsyncIterator[tuple[VenstarConfig, aiohttp.ClientSession]]:
    server = test_utils.TestServer(device.app())
    await server.start_server()
    try:
        async with aiohttp.ClientSession() as session:
            yield VenstarConfig(host=server.host, port=server.port, **config), session
    finally:
        await server.close()


@pytest.mark.asyncio
async def test_get_json_decodes_info() -> None:
    device = _Device()
    async with _serve(device) as (config, session):
        transport = HttpTransport(config, session)
        payload = await transport.get_json("/query/info")

    assert payload == _INFO
    assert device.user_agents == ["pyvenstar"]


@pytest.mark.asyncio
async def test_post_form_sends_fields() -> None:
    device = _Device()
    async with _serve(device) as (config, session):
        transport = HttpTransport(config, session)
        reply = await transport.post_form("/control", {"mode": "1", "heattemp": "70", "cooltemp": "75"})

    assert reply == {"success": True}
    assert device.forms == [{"mode": "1", "heattemp": "70", "cooltemp": "75"}]


@pytest.mark.asyncio
async def test_non_200_is_network_error() -> None:
    device = _Device()
    device.info_status = 500
    async with _serve(device) as (config, session):
        with pytest.raises(NetworkError) as exc_info:
            await HttpTransport(config, session).get_json("/query/info")

    assert exc_info.value.status_code == 500
    assert exc_info.value.endpoint == "/query/info"


@pytest.mark.asyncio
async def test_invalid_json_is_malformed_snapshot() -> None:
    device = _Device()
    device.info_body = "<html>busy</html>"
    async with _serve(device) as (config, session):
        with pytest.raises(MalformedSnapshotError):
            await HttpTransport(config, session).get_json("/query/info")


@pytest.mark.asyncio
async def test_connection_refused_is_network_error() -> None:
    config = VenstarConfig(host="127.0.0.1", port=test_utils.unused_port(), request_timeout=2.0)
    async with aiohttp.ClientSession() as session:
        with pytest.raises(NetworkError) as exc_info:
            await HttpTransport(config, session).get_json("/query/info")

    assert exc_info.value.status_code is None
    assert isinstance(exc_info.value.__cause__, aiohttp.ClientError)


@pytest.mark.asyncio
async def test_timeout_is_network_error() -> None:
    device = _Device()
    device.delay = 0.5
    async with _serve(device, request_timeout=0.05) as (config, session):
        with pytest.raises(NetworkError, match="timed out|failed"):
            await HttpTransport(config, session).get_json("/query/info")


@pytest.mark.asyncio
@pytest.mark.parametrize("body", ["", "OK"])
async def test_empty_or_plain_control_reply_is_accepted(body: str) -> None:
    device = _Device()
    device.control_body = body
    async with _serve(device) as (config, session):
        transport = HttpTransport(config, session)
        assert await transport.post_form("/control", {"mode": "0", "heattemp": "68", "cooltemp": "74"}) is None
        await post_control(transport, DeviceWrite(mode=ThermostatMode.OFF, heat_temp=68, cool_temp=74))

    assert len(device.forms) == 2


@pytest.mark.asyncio
async def test_control_error_reply_raises_api_error() -> None:
    device = _Device()
    device.control_body = '{"error": true, "reason": "Invalid heattemp"}'
    async with _serve(device) as (config, session):
        with pytest.raises(VenstarApiError) as exc_info:
            await post_control(
                HttpTransport(config, session),
                DeviceWrite(mode=ThermostatMode.HEAT, heat_temp=120, cool_temp=74),
            )

    assert exc_info.value.reason == "Invalid heattemp"
    assert exc_info.value.endpoint == "/control"


@pytest.mark.asyncio
async def test_client_requires_context_manager() -> None:
    client = VenstarClient(VenstarConfig(host="127.0.0.1"))
    with pytest.raises(VenstarError, match="not initialized"):
        await client.get_snapshot()


@pytest.mark.asyncio
async def test_client_controller_end_to_end() -> None:
    device = _Device()
    async with _serve(device) as (config, session):
        async with VenstarClient(config, session=session) as client:
            snapshot = await client.get_snapshot()
            assert snapshot.name == "Hallway"

            controller = client.create_controller()
            await controller.async_refresh()
            state = await controller.async_execute(SetMode(mode=ThermostatMode.COOL))
            await controller.async_stop()

            await client.send_write(DeviceWrite(mode=ThermostatMode.OFF, heat_temp=68, cool_temp=74))

        assert not session.closed

    # Room temperature (21.1 °C) becomes the cooling setpoint; heat falls back to 21 °C.
    assert device.forms == [
        {"mode": "2", "heattemp": "70", "cooltemp": "70"},
        {"mode": "0", "heattemp": "68", "cooltemp": "74"},
    ]
    assert state.mode == ThermostatMode.COOL
    assert state.target_temp == pytest.approx(21.1, abs=0.05)


@pytest.mark.asyncio
async def test_platform_starts_one_controller_per_device(caplog: pytest.LogCaptureFixture) -> None:
    device = _Device()
    async with _serve(device) as (config, session):
        data = {
            "thermostats": [
                {"name": "Hallway", "ip": config.host, "port": config.port},
                {"name": "Hallway again", "ip": config.host, "port": config.port},
            ]
        }
        async with VenstarPlatform.from_mapping(data, session=session) as platform:
            accessories = platform.accessories
            assert list(accessories) == [config.unique_id]
            accessory = accessories[config.unique_id]
            assert accessory.controller.available
            assert accessory.controller.is_running
            assert accessory["current_temperature"].get() == pytest.approx(21.1, abs=0.05)

        assert accessory.controller.closed
        assert not session.closed

    assert "Ignoring duplicate thermostat" in caplog.text
