"""pyaida64 - Async poller exposing AIDA64 GPU fan telemetry as accessory state."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyaida64")
except PackageNotFoundError:
    __version__ = "0+local"
from pyaida64._transport import TelemetryClient, Transport
from pyaida64.accessory import GpuFanAccessory
from pyaida64.config import AidaConfig
from pyaida64.exceptions import (
    AidaConfigError,
    AidaError,
    AidaFetchError,
    AidaParseError,
    FetchErrorKind,
    ParseErrorKind,
)
from pyaida64.ingestion.telemetry import parse_telemetry
from pyaida64.models import (
    AccessoryInformation,
    AccessoryState,
    SensorReading,
    TelemetrySnapshot,
)
from pyaida64.poller import Poller, PollerState, PollOutcome, PollStats
from pyaida64.state.store import StateStore

__all__ = [
    "__version__",
    "AccessoryInformation",
    "AccessoryState",
    "AidaConfig",
    "AidaConfigError",
    "AidaError",
    "AidaFetchError",
    "AidaParseError",
    "FetchErrorKind",
    "GpuFanAccessory",
    "ParseErrorKind",
    "PollOutcome",
    "PollStats",
    "Poller",
    "PollerState",
    "SensorReading",
    "StateStore",
    "TelemetryClient",
    "TelemetrySnapshot",
    "Transport",
    "parse_telemetry",
]
