"""Typed models for pyaida64."""

from pyaida64.models._base import AidaBaseModel, SensorNumber
from pyaida64.models.state import AccessoryInformation, AccessoryState
from pyaida64.models.telemetry import SensorReading, TelemetrySnapshot

__all__ = [
    "AccessoryInformation",
    "AccessoryState",
    "AidaBaseModel",
    "SensorNumber",
    "SensorReading",
    "TelemetrySnapshot",
]
