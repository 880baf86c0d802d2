"""Per-thermostat reconciliation between polling and user commands.

The controller owns the single :class:`NormalizedState` of a device.  Poll
cycles and command cycles both run under one :class:`asyncio.Lock`, so a
command's "fetch snapshot -> compute write -> write -> re-poll" sequence is
never interleaved with a scheduled poll or with another command.

Phases::

    IDLE -> POLLING -> IDLE
    IDLE -> COMMANDING -> POLLING -> IDLE
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from enum import StrEnum
from typing import Any

from pyvenstar._api.control import post_control
from pyvenstar._api.info import fetch_snapshot
from pyvenstar._constants import DEFAULT_POLL_INTERVAL
from pyvenstar._transport import Transport
from pyvenstar.exceptions import ControllerClosedError, VenstarError
from pyvenstar.models.commands import Command
from pyvenstar.models.snapshot import DeviceSnapshot, TemperatureUnit
from pyvenstar.models.state import NormalizedState
from pyvenstar.translate.command import DEFAULT_SETTINGS, translate_command
from pyvenstar.translate.settings import TranslationSettings
from pyvenstar.translate.snapshot import translate_snapshot

_logger = logging.getLogger(__name__)

StateListener = Callable[[NormalizedState], None]
SleepCallable = Callable[[float], Awaitable[Any]]


class ControllerPhase(StrEnum):
    IDLE = "idle"
    POLLING = "polling"
    COMMANDING = "commanding"


class ReconciliationController:
    """Keeps one thermostat's normalized state in sync with the device.

    Usage::

        controller = ReconciliationController(transport, name="Hallway")
        controller.add_listener(print)
        async with controller:
            await controller.async_execute(SetMode(mode=ThermostatMode.HEAT))
    """

    def __init__(
        self,
        transport: Transport,
        *,
        name: str = "thermostat",
        settings: TranslationSettings = DEFAULT_SETTINGS,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        initial_state: NormalizedState | None = None,
        sleep: SleepCallable = asyncio.sleep,
    ) -> None:
        self._transport = transport
        self._name = name
        self._settings = settings
        self._poll_interval = poll_interval
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._state = initial_state if initial_state is not None else NormalizedState()
        self._phase = ControllerPhase.IDLE
        self._closed = False
        self._available = False
        self._last_snapshot: DeviceSnapshot | None = None
        self._poll_task: asyncio.Task[None] | None = None
        self._listeners: list[StateListener] = []

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> ReconciliationController:
        await self.async_start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.async_stop()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> NormalizedState:
        """Current normalized state (defaults until the first successful poll)."""
        return self._state

    @property
    def phase(self) -> ControllerPhase:
        return self._phase

    @property
    def available(self) -> bool:
        """Whether the most recent poll succeeded."""
        return self._available

    @property
    def last_snapshot(self) -> DeviceSnapshot | None:
        return self._last_snapshot

    @property
    def is_running(self) -> bool:
        return self._poll_task is not None and not self._poll_task.done()

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, listener: StateListener) -> Callable[[], None]:
        """Register *listener* for published states; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _remove() -> None:
            with contextlib.suppress(ValueError):
                self._listeners.remove(listener)

        return _remove

    def _publish(self, state: NormalizedState) -> None:
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                _logger.debug("State listener failed for %s", self._name, exc_info=True)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _ensure_open(self) -> None:
        if self._closed:
            raise ControllerClosedError(f"Controller for {self._name} is stopped")

    async def _poll_locked(self, previous: NormalizedState) -> NormalizedState:
        """One poll cycle.  Caller must hold ``self._lock``."""
        self._phase = ControllerPhase.POLLING
        snapshot = await fetch_snapshot(self._transport)
        # A response that lands after teardown must not touch the discarded state.
        self._ensure_open()
        state = translate_snapshot(snapshot, previous)
        self._last_snapshot = snapshot
        self._state = state
        self._available = True
        self._publish(state)
        return state

    # ------------------------------------------------------------------
    # Poll cycle
    # ------------------------------------------------------------------

    async def async_refresh(self) -> bool:
        """Poll the device once.

        Device errors are logged and contained: the previous state is kept,
        nothing is published and ``False`` is returned.
        """
        if self._closed:
            return False
        async with self._lock:
            try:
                await self._poll_locked(self._state)
            except ControllerClosedError:
                _logger.debug("Discarding poll result for %s: controller stopped", self._name)
                return False
            except VenstarError as exc:
                self._available = False
                _logger.warning("Error polling thermostat %s: %s", self._name, exc)
                return False
            finally:
                self._phase = ControllerPhase.IDLE
        return True

    async def _run_poll_loop(self) -> None:
        while not self._closed:
            await self._sleep(self._poll_interval)
            if self._closed:
                break
            try:
                await self.async_refresh()
            except Exception:
                _logger.exception("Unexpected error in poll loop for %s", self._name)

    async def async_start(self) -> None:
        """Poll once immediately, then every ``poll_interval`` seconds."""
        self._ensure_open()
        if self._poll_task is not None:
            return
        # Registered before the first refresh; a concurrent start then returns early.
        self._poll_task = asyncio.create_task(self._run_poll_loop(), name=f"pyvenstar-poll-{self._name}")
        await self.async_refresh()

    async def async_stop(self) -> None:
        """Stop polling; in-flight results are discarded once they arrive."""
        self._closed = True
        task = self._poll_task
        self._poll_task = None
        if task is None or task is asyncio.current_task():
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    # ------------------------------------------------------------------
    # Command cycle
    # ------------------------------------------------------------------

    async def async_execute(self, command: Command) -> NormalizedState:
        """Run *command* against the device and return the resynchronized state.

        Raises
        ------
        NetworkError, MalformedSnapshotError
            Fetching the fresh snapshot, the write, or the confirmation poll
            failed.  The write is not assumed to have taken effect.
        UnsupportedInModeError, InvalidCommandError
            The command was rejected before anything was sent.
        VenstarApiError
            The thermostat refused the write.
        ControllerClosedError
            The controller was stopped.
        """
        self._ensure_open()
        async with self._lock:
            self._ensure_open()
            self._phase = ControllerPhase.COMMANDING
            try:
                snapshot = await fetch_snapshot(self._transport)
                self._ensure_open()
                self._last_snapshot = snapshot
                plan = translate_command(command, snapshot, self._state, self._settings)
                if plan.write is None:
                    _logger.debug("%s stored without device write for %s", type(command).__name__, self._name)
                    self._state = plan.state
                    self._publish(plan.state)
                    return plan.state

                await post_control(self._transport, plan.write)
                self._ensure_open()
                try:
                    return await self._poll_locked(plan.state)
                except VenstarError as exc:
                    if not isinstance(exc, ControllerClosedError):
                        self._available = False
                    _logger.warning("Confirmation poll failed for %s after %s: %s", self._name, command, exc)
                    raise
            finally:
                self._phase = ControllerPhase.IDLE

    async def async_set_display_unit(self, unit: TemperatureUnit) -> NormalizedState:
        """Record the user's display unit; later polls will not override it."""
        self._ensure_open()
        async with self._lock:
            self._state = self._state.with_display_unit(unit)
            self._publish(self._state)
            return self._state
