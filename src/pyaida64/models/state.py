"""Accessory state and identity models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, computed_field

from pyaida64._constants import (
    ACCESSORY_DEVICE_NAME,
    ACCESSORY_MANUFACTURER,
    ACCESSORY_MODEL,
    ACCESSORY_SERIAL_NUMBER,
    TEMPERATURE_SENSOR_NAME,
)


class AccessoryState(BaseModel):
    """Last-known telemetry exposed by one accessory.

    Instances are immutable; the state store swaps the whole record on
    every successful poll so rotation speed and temperature always come
    from the same cycle.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    rotation_speed: float = 0.0
    temperature_celsius: float = 0.0
    updated_at: datetime | None = None
    """When the values were committed; ``None`` until the first successful poll."""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def powered(self) -> bool:
        """On/off view derived from the fan speed.

        A fan reporting any non-negative speed counts as on, so this is
        ``True`` for the default record as well.
        """
        return self.rotation_speed >= 0


class AccessoryInformation(BaseModel):
    """Identity the accessory registers with the host.

    ``temperature_sensor_name`` names the secondary temperature sensor
    service that sits next to the fan service.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = ACCESSORY_DEVICE_NAME
    manufacturer: str = ACCESSORY_MANUFACTURER
    model: str = ACCESSORY_MODEL
    serial_number: str = ACCESSORY_SERIAL_NUMBER
    temperature_sensor_name: str = TEMPERATURE_SENSOR_NAME
