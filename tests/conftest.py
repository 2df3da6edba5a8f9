from __future__ import annotations

import pytest

from pyaida64.config import AidaConfig


@pytest.fixture
def config() -> AidaConfig:
    return AidaConfig(base_url="http://aida.test:5556", poll_interval=60.0, request_timeout=1.0)
