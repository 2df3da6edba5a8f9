"""Timer-driven telemetry polling.

The poller owns one background asyncio task per accessory.  Each cycle
runs fetch → parse → store write; failures are logged and counted, the
store keeps its previous value, and the next tick is scheduled as usual.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pyaida64._transport import Transport
from pyaida64.config import AidaConfig
from pyaida64.exceptions import AidaError
from pyaida64.ingestion.telemetry import parse_telemetry
from pyaida64.models.state import AccessoryState
from pyaida64.state.store import StateStore

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class PollerState(StrEnum):
    IDLE = "idle"
    POLLING = "polling"
    STOPPED = "stopped"


class PollOutcome(StrEnum):
    SUCCESS = "success"
    FAILURE = "failure"
    SKIPPED = "skipped"


@dataclass(slots=True)
class PollStats:
    """Running counters for one poller."""

    attempts: int = 0
    successes: int = 0
    failures: int = 0
    skipped: int = 0
    last_error: Exception | None = None
    last_success_at: datetime | None = None
    last_failure_at: datetime | None = None


class Poller:
    """Poll the telemetry endpoint on a fixed period and feed a state store.

    Usage::

        async with Poller(config, store, transport):
            ...  # store.read() now tracks the endpoint

    A poll fires as soon as the poller starts, then every
    ``config.poll_interval`` seconds.  At most one cycle is in flight at a
    time: a manual :meth:`poll_once` during a running cycle is skipped, and
    ticks missed because a cycle overran the period are dropped rather than
    replayed.
    """

    def __init__(
        self,
        config: AidaConfig,
        store: StateStore,
        transport: Transport,
        *,
        on_update: Callable[[AccessoryState], None] | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._config = config
        self._store = store
        self._transport = transport
        self._on_update = on_update
        self._clock = clock
        self._lock = asyncio.Lock()
        self._task: asyncio.Task[None] | None = None
        self._first_cycle_started = asyncio.Event()
        self._state = PollerState.IDLE
        self._stats = PollStats()

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> Poller:
        self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()

    @property
    def state(self) -> PollerState:
        return self._state

    @property
    def stats(self) -> PollStats:
        return self._stats

    @property
    def is_running(self) -> bool:
        """Whether the timer task is scheduled and not finished."""
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the timer task on the running loop.

        Calling ``start()`` on a running poller is a no-op.
        """
        if self._state is PollerState.STOPPED:
            raise AidaError("Poller has been stopped and cannot be restarted")
        if self.is_running:
            return
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run(), name=f"pyaida64-poller {self._config.endpoint}")
        _logger.debug(
            "Poller started endpoint=%s interval=%.1fs timeout=%.1fs",
            self._config.endpoint,
            self._config.poll_interval,
            self._config.request_timeout,
        )

    async def stop(self) -> None:
        """Cancel the timer task and wait for it to finish.

        The startup poll is always let through before cancelling, so a
        poller stopped right after ``start()`` still makes exactly one
        attempt.  Safe to call more than once; only the first call cancels.
        """
        if self._state is PollerState.STOPPED:
            return
        if self._task is not None and not self._first_cycle_started.is_set():
            started = asyncio.ensure_future(self._first_cycle_started.wait())
            try:
                await asyncio.wait({started, self._task}, return_when=asyncio.FIRST_COMPLETED)
            finally:
                started.cancel()
            if self._state is PollerState.STOPPED:
                return
        self._state = PollerState.STOPPED
        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        _logger.debug("Poller stopped endpoint=%s", self._config.endpoint)

    async def poll_once(self) -> PollOutcome:
        """Run one fetch → parse → write cycle.

        Never raises for fetch or parse failures; the outcome tells what
        happened and :attr:`stats` records the details.  A stopped poller
        skips without touching the transport.
        """
        if self._state is PollerState.STOPPED:
            self._stats.skipped += 1
            _logger.debug("Poll skipped, poller is stopped endpoint=%s", self._config.endpoint)
            return PollOutcome.SKIPPED
        if self._lock.locked():
            self._stats.skipped += 1
            _logger.debug("Poll skipped, previous cycle still in flight endpoint=%s", self._config.endpoint)
            return PollOutcome.SKIPPED

        async with self._lock:
            self._state = PollerState.POLLING
            self._stats.attempts += 1
            try:
                raw = await self._transport.fetch(self._config.endpoint, self._config.request_timeout)
                snapshot = parse_telemetry(
                    raw,
                    fan_key=self._config.fan_key,
                    temp_key=self._config.temp_key,
                )
            except AidaError as exc:
                self._record_failure(exc)
                _logger.warning(
                    "Telemetry poll failed endpoint=%s kind=%s: %s",
                    self._config.endpoint,
                    getattr(exc, "kind", "error"),
                    exc,
                )
                return PollOutcome.FAILURE
            except Exception as exc:
                self._record_failure(exc)
                _logger.exception("Unexpected error while polling endpoint=%s", self._config.endpoint)
                return PollOutcome.FAILURE
            finally:
                if self._state is PollerState.POLLING:
                    self._state = PollerState.IDLE

            state = self._store.write(snapshot)
            self._stats.successes += 1
            self._stats.last_success_at = self._clock()

        _logger.debug(
            "Telemetry updated rotation_speed=%s temperature_celsius=%s",
            state.rotation_speed,
            state.temperature_celsius,
        )
        if self._on_update is not None:
            try:
                self._on_update(state)
            except Exception:
                _logger.exception("on_update callback failed")
        return PollOutcome.SUCCESS

    def _record_failure(self, exc: Exception) -> None:
        self._stats.failures += 1
        self._stats.last_error = exc
        self._stats.last_failure_at = self._clock()

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        interval = self._config.poll_interval
        next_tick = loop.time()
        self._first_cycle_started.set()
        while True:
            await self.poll_once()

            next_tick += interval
            now = loop.time()
            if now > next_tick:
                missed = int((now - next_tick) // interval) + 1
                next_tick += missed * interval
                self._stats.skipped += missed
                _logger.debug("Poll cycle overran the interval, skipped %d tick(s)", missed)
            await asyncio.sleep(next_tick - now)
