from __future__ import annotations

import asyncio
import json
from typing import Any

SAMPLE_BODY = json.dumps(
    {
        "SCPUCLK": {"label": "CPU Clock", "value": 4200, "unit": "MHz"},
        "DGPU1": {"label": "GPU1", "value": 42, "unit": "%"},
        "TGPU1": {"label": "GPU1 Diode", "value": 61, "unit": "°C"},
    }
)


class FakeTransport:
    """Replays queued responses; the last one repeats once the queue drains.

    Queue items are either body strings or exceptions to raise.
    """

    def __init__(self, *responses: str | Exception) -> None:
        self._responses: list[str | Exception] = list(responses) or [SAMPLE_BODY]
        self.calls: list[tuple[str, float]] = []
        self.fetched = asyncio.Event()

    async def fetch(self, url: str, timeout: float) -> str:
        self.calls.append((url, timeout))
        self.fetched.set()
        item = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(item, Exception):
            raise item
        return item


class GatedTransport(FakeTransport):
    """Blocks every fetch until ``release`` is set."""

    def __init__(self, *responses: str | Exception) -> None:
        super().__init__(*responses)
        self.release = asyncio.Event()

    async def fetch(self, url: str, timeout: float) -> Any:
        self.calls.append((url, timeout))
        self.fetched.set()
        await self.release.wait()
        item = self._responses[0]
        if isinstance(item, Exception):
            raise item
        return item
