"""In-memory accessory state store.

This is the only component allowed to replace the accessory state.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from pyaida64.models.state import AccessoryState
from pyaida64.models.telemetry import TelemetrySnapshot


def _utcnow() -> datetime:
    return datetime.now(UTC)


class StateStore:
    """Hold the last committed :class:`AccessoryState` for one accessory.

    ``read()`` never blocks and never returns ``None``: before the first
    write it returns the zero-valued default record.  ``write()`` swaps the
    whole immutable record in a single assignment, so a reader sees either
    the previous pair or the new one, never a mix.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = _utcnow,
        initial: AccessoryState | None = None,
    ) -> None:
        self._clock = clock
        self._state = initial if initial is not None else AccessoryState()

    def read(self) -> AccessoryState:
        """Return the last committed state."""
        return self._state

    def write(self, snapshot: TelemetrySnapshot) -> AccessoryState:
        """Commit a parsed snapshot and return the new state."""
        state = AccessoryState(
            rotation_speed=snapshot.rotation_speed,
            temperature_celsius=snapshot.temperature_celsius,
            updated_at=self._clock(),
        )
        self._state = state
        return state

    @property
    def last_updated(self) -> datetime | None:
        """When the current values were committed, if ever."""
        return self._state.updated_at

    @property
    def is_populated(self) -> bool:
        """Whether at least one snapshot has been written."""
        return self._state.updated_at is not None
