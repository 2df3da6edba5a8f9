"""Telemetry models parsed from the AIDA64 system info document."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from pyaida64.models._base import AidaBaseModel, SensorNumber


class SensorReading(AidaBaseModel):
    """One sensor entry, e.g. ``{"value": 42, "label": "GPU1", "unit": "%"}``.

    Only ``value`` is read; labels, units and whatever else AIDA64 attaches
    stay available in ``raw`` without being validated.
    """

    value: SensorNumber


class TelemetrySnapshot(BaseModel):
    """The pair of readings produced by one successful parse.

    Parameters
    ----------
    rotation_speed : float
        GPU fan speed in percent.
    temperature_celsius : float
        GPU temperature in degrees Celsius.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    rotation_speed: SensorNumber
    temperature_celsius: SensorNumber
