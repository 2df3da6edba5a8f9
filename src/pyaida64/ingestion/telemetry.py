"""Telemetry document parsing.

Turns the raw body of the AIDA64 system info endpoint into a
:class:`TelemetrySnapshot`.  The document is a flat JSON object keyed by
sensor id::

    {"DGPU1": {"value": 42, ...}, "TGPU1": {"value": 61, ...}, ...}

Only the fan-speed and GPU-temperature entries are read; every other key
is ignored.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from pyaida64._constants import FAN_SPEED_KEY, GPU_TEMPERATURE_KEY
from pyaida64.exceptions import AidaParseError, ParseErrorKind
from pyaida64.models.telemetry import SensorReading, TelemetrySnapshot

_logger = logging.getLogger(__name__)


def decode_document(raw: str) -> dict[str, Any]:
    """Decode *raw* as a JSON object, raising ``MALFORMED`` otherwise."""
    try:
        document = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as exc:
        raise AidaParseError(
            f"Telemetry body is not valid JSON: {str(raw)[:64]!r}",
            kind=ParseErrorKind.MALFORMED,
        ) from exc

    if not isinstance(document, dict):
        raise AidaParseError(
            f"Telemetry body is a JSON {type(document).__name__}, expected an object",
            kind=ParseErrorKind.MALFORMED,
        )
    return document


def _read_sensor(document: dict[str, Any], key: str) -> SensorReading:
    entry = document[key]
    if not isinstance(entry, dict):
        raise AidaParseError(
            f"Sensor {key!r} is a {type(entry).__name__}, expected an object",
            kind=ParseErrorKind.WRONG_TYPE,
            fields=(key,),
        )
    try:
        return SensorReading.model_validate(entry)
    except ValidationError as exc:
        kind = ParseErrorKind.WRONG_TYPE
        if any(err["type"] == "missing" for err in exc.errors()):
            kind = ParseErrorKind.MISSING_FIELD
        raise AidaParseError(
            f"Sensor {key!r} has no usable 'value': {entry.get('value')!r}",
            kind=kind,
            fields=(key,),
        ) from exc


def parse_telemetry(
    raw: str,
    *,
    fan_key: str = FAN_SPEED_KEY,
    temp_key: str = GPU_TEMPERATURE_KEY,
) -> TelemetrySnapshot:
    """Parse a system info body into a fan speed / temperature pair.

    Both sensors must resolve; a body that yields only one of them is
    rejected as a whole.

    Raises
    ------
    AidaParseError
        ``MALFORMED`` when the body is not a JSON object,
        ``MISSING_FIELD`` when a sensor key (or its ``value``) is absent,
        ``WRONG_TYPE`` when a sensor entry or value has the wrong type.
    """
    document = decode_document(raw)

    missing = [key for key in (fan_key, temp_key) if key not in document]
    if missing:
        raise AidaParseError(
            f"Telemetry body is missing sensor(s): {', '.join(missing)}",
            kind=ParseErrorKind.MISSING_FIELD,
            fields=missing,
        )

    fan = _read_sensor(document, fan_key)
    temperature = _read_sensor(document, temp_key)

    _logger.debug("Parsed telemetry %s=%s %s=%s", fan_key, fan.value, temp_key, temperature.value)
    return TelemetrySnapshot(
        rotation_speed=fan.value,
        temperature_celsius=temperature.value,
    )
