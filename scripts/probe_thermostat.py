#!/usr/bin/env python3
"""Live thermostat probe.

Reads ``/query/info`` from a thermostat, prints the raw snapshot and the
normalized state, and optionally issues one command through the
reconciliation controller.

Examples::

    python scripts/probe_thermostat.py 192.168.1.40
    python scripts/probe_thermostat.py 192.168.1.40 --mode heat
    python scripts/probe_thermostat.py 192.168.1.40 --target 21.5
    python scripts/probe_thermostat.py 192.168.1.40 --watch 3

``VENSTAR_HOST`` is used when no host argument is given.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyvenstar import (  # noqa: E402
    NormalizedState,
    SetCoolingThreshold,
    SetFan,
    SetHeatingThreshold,
    SetMode,
    SetTargetTemp,
    ThermostatMode,
    VenstarClient,
    VenstarConfig,
    VenstarError,
)
from pyvenstar.models.commands import Command  # noqa: E402

_MODES = {mode.name.lower(): mode for mode in ThermostatMode}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("host", nargs="?", help="Thermostat IP/hostname (default: $VENSTAR_HOST)")
    parser.add_argument("--port", type=int, default=None)
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--mode", choices=sorted(_MODES), help="Set operating mode")
    group.add_argument("--target", type=float, metavar="C", help="Set target temperature (°C)")
    group.add_argument("--heat-threshold", type=float, metavar="C", help="Set AUTO heating threshold (°C)")
    group.add_argument("--cool-threshold", type=float, metavar="C", help="Set AUTO cooling threshold (°C)")
    group.add_argument("--fan", choices=("on", "auto"), help="Set fan")
    parser.add_argument("--watch", type=int, default=0, metavar="N", help="Poll N more times after the first read")
    parser.add_argument("--interval", type=float, default=5.0, help="Seconds between --watch polls")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _command_from_args(args: argparse.Namespace) -> Command | None:
    if args.mode is not None:
        return SetMode(mode=_MODES[args.mode])
    if args.target is not None:
        return SetTargetTemp(temperature_c=args.target)
    if args.heat_threshold is not None:
        return SetHeatingThreshold(temperature_c=args.heat_threshold)
    if args.cool_threshold is not None:
        return SetCoolingThreshold(temperature_c=args.cool_threshold)
    if args.fan is not None:
        return SetFan(on=args.fan == "on")
    return None


def _dump_state(state: NormalizedState) -> dict[str, Any]:
    return state.model_dump(mode="json")


async def _run(args: argparse.Namespace) -> int:
    overrides: dict[str, Any] = {}
    if args.host:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    config = VenstarConfig.from_env(**overrides)

    async with VenstarClient(config) as client:
        snapshot = await client.get_snapshot()
        print("raw snapshot:")
        print(json.dumps(snapshot.raw, indent=2, sort_keys=True))

        controller = client.create_controller()
        if not await controller.async_refresh():
            print("poll failed", file=sys.stderr)
            return 1
        print("normalized state:")
        print(json.dumps(_dump_state(controller.state), indent=2))

        command = _command_from_args(args)
        if command is not None:
            state = await controller.async_execute(command)
            print(f"after {type(command).__name__}:")
            print(json.dumps(_dump_state(state), indent=2))

        for _ in range(args.watch):
            await asyncio.sleep(args.interval)
            ok = await controller.async_refresh()
            print(json.dumps({"ok": ok, **_dump_state(controller.state)}))
        await controller.async_stop()
    return 0


def main() -> int:
    args = _build_parser().parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    try:
        return asyncio.run(_run(args))
    except VenstarError as exc:
        print(f"error: {type(exc).__name__}: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
