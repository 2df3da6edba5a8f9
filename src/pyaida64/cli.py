"""Command-line watcher for the GPU fan accessory.

Polls the AIDA64 endpoint the same way the accessory does and prints the
values the host would see.  Configuration comes from ``AIDA_*`` variables
(see :meth:`pyaida64.config.AidaConfig.from_env`), overridden by flags.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time
from collections.abc import Sequence
from typing import Any

from pyaida64.accessory import GpuFanAccessory
from pyaida64.config import AidaConfig
from pyaida64.exceptions import AidaConfigError
from pyaida64.poller import PollOutcome

_LOG = logging.getLogger("pyaida64.cli")


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="aida64-gpu-watch",
        description="Poll AIDA64 GPU fan telemetry and print the accessory view.",
    )
    parser.add_argument("--url", help="Telemetry base URL (default: $AIDA_BASE_URL or built-in).")
    parser.add_argument("--path", help="System info path (default: /system_info).")
    parser.add_argument("--interval", type=float, help="Poll interval in seconds.")
    parser.add_argument("--timeout", type=float, help="Per-request timeout in seconds.")
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single poll, print the result and exit (non-zero on failure).",
    )
    parser.add_argument(
        "--duration",
        type=float,
        default=0,
        help="Maximum runtime in seconds (0 = run until Ctrl+C).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logs.",
    )
    return parser.parse_args(argv)


def _config_from_args(args: argparse.Namespace) -> AidaConfig:
    overrides: dict[str, Any] = {}
    if args.url is not None:
        overrides["base_url"] = args.url
    if args.path is not None:
        overrides["path"] = args.path
    if args.interval is not None:
        overrides["poll_interval"] = args.interval
    if args.timeout is not None:
        overrides["request_timeout"] = args.timeout
    return AidaConfig.from_env(**overrides)


async def _format_view(accessory: GpuFanAccessory) -> str:
    on = await accessory.get_on()
    speed = await accessory.get_rotation_speed()
    temperature = await accessory.get_gpu_temperature()
    updated = accessory.store.last_updated
    updated_text = updated.isoformat(timespec="seconds") if updated is not None else "never"
    return f"on={on} rotation_speed={speed:g}% gpu_temperature={temperature:g}°C updated={updated_text}"


async def _run_once(config: AidaConfig) -> int:
    accessory = GpuFanAccessory(config)
    try:
        outcome = await accessory.poller.poll_once()
        if outcome is not PollOutcome.SUCCESS:
            print(f"[watch] poll failed: {accessory.poller.stats.last_error}", file=sys.stderr)
            return 1
        print(await _format_view(accessory))
        return 0
    finally:
        await accessory.close()


async def _watch(config: AidaConfig, duration: float) -> int:
    started_at = time.monotonic()
    async with GpuFanAccessory(config) as accessory:
        while duration <= 0 or (time.monotonic() - started_at) < duration:
            await asyncio.sleep(config.poll_interval)
            stats = accessory.poller.stats
            print(f"[watch] {await _format_view(accessory)} ok={stats.successes} failed={stats.failures}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _config_from_args(args)
    except AidaConfigError as exc:
        print(f"[watch] invalid configuration: {exc}", file=sys.stderr)
        return 2

    _LOG.info("Watching %s every %.1fs", config.endpoint, config.poll_interval)
    try:
        if args.once:
            return asyncio.run(_run_once(config))
        return asyncio.run(_watch(config, args.duration))
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
