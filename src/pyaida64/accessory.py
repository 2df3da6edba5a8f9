"""GPU fan accessory exposed to the smart-home host.

The host framework binds its characteristic getters/setters to the
``get_*``/``set_*`` coroutines below.  Getters answer from the state
store and return immediately; setters are accepted but do nothing, since
the accessory only reports telemetry and never drives the hardware.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import aiohttp

from pyaida64._constants import ROTATION_SPEED_MAX, ROTATION_SPEED_MIN
from pyaida64._transport import TelemetryClient, Transport
from pyaida64.config import AidaConfig
from pyaida64.models.state import AccessoryInformation, AccessoryState
from pyaida64.poller import Poller
from pyaida64.state.store import StateStore

_logger = logging.getLogger(__name__)


class GpuFanAccessory:
    """Fan + temperature sensor accessory backed by AIDA64 telemetry.

    Usage::

        async with GpuFanAccessory(AidaConfig.from_env()) as accessory:
            speed = await accessory.get_rotation_speed()

    Parameters
    ----------
    config : AidaConfig
        Endpoint, timing and sensor-key configuration.
    store : StateStore or None
        State store to publish into.  A fresh one is created when omitted.
    transport : Transport or None
        Telemetry transport.  When omitted the accessory creates (and later
        closes) its own :class:`TelemetryClient`.
    session : aiohttp.ClientSession or None
        Shared HTTP session for the default transport.  Ignored when
        *transport* is given.
    on_update : callable or None
        Invoked with the new :class:`AccessoryState` after every
        successful poll, e.g. to push characteristic updates.
    """

    def __init__(
        self,
        config: AidaConfig,
        *,
        store: StateStore | None = None,
        transport: Transport | None = None,
        session: aiohttp.ClientSession | None = None,
        on_update: Callable[[AccessoryState], None] | None = None,
    ) -> None:
        self._config = config
        self._store = store if store is not None else StateStore()
        self._owned_client: TelemetryClient | None = None
        if transport is None:
            self._owned_client = TelemetryClient(session)
            transport = self._owned_client
        self._poller = Poller(config, self._store, transport, on_update=on_update)
        self.information = AccessoryInformation(name=config.device_name)

    async def __aenter__(self) -> GpuFanAccessory:
        self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    @property
    def store(self) -> StateStore:
        return self._store

    @property
    def poller(self) -> Poller:
        return self._poller

    def start(self) -> None:
        """Start polling (first poll fires immediately)."""
        self._poller.start()

    async def close(self) -> None:
        """Tear the accessory down: stop the timer and release the transport."""
        await self._poller.stop()
        if self._owned_client is not None:
            await self._owned_client.close()
            self._owned_client = None

    # ------------------------------------------------------------------
    # Characteristic handlers
    # ------------------------------------------------------------------

    async def get_on(self) -> bool:
        """Answer the On characteristic from the derived power flag."""
        is_on = self._store.read().powered
        _logger.debug("Get Characteristic On -> %s", is_on)
        return is_on

    async def set_on(self, value: Any) -> None:
        """Accept an On write from the host without touching the hardware."""
        _logger.debug("Set Characteristic On -> %s (ignored, read-only accessory)", value)

    async def get_rotation_speed(self) -> float:
        """Answer RotationSpeed with the last fan speed, clamped to 0-100."""
        speed = self._store.read().rotation_speed
        return min(ROTATION_SPEED_MAX, max(ROTATION_SPEED_MIN, speed))

    async def set_rotation_speed(self, value: Any) -> None:
        """Accept a RotationSpeed write from the host without touching the hardware."""
        _logger.debug("Set Characteristic RotationSpeed -> %s (ignored, read-only accessory)", value)

    async def get_gpu_temperature(self) -> float:
        """Answer CurrentTemperature with the last GPU temperature in °C."""
        return self._store.read().temperature_celsius
