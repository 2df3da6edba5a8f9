"""Base model for AIDA64 telemetry documents.

Every model inherits from :class:`AidaBaseModel` which provides:

* A frozen, ``extra="ignore"`` config so unknown sensor attributes
  never break parsing.
* A ``raw`` dict that captures the original payload.

:data:`SensorNumber` is the strict numeric type used for sensor values:
only finite ``int``/``float`` inputs are accepted.  Booleans and numeric
strings are rejected rather than coerced.
"""

from __future__ import annotations

import math
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator


def coerce_sensor_number(value: Any) -> float:
    """Validate a JSON sensor value and return it as ``float``."""
    # bool is an int subclass; JSON true/false is not a reading.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected a number, got {type(value).__name__}")
    result = float(value)
    if not math.isfinite(result):
        raise ValueError(f"expected a finite number, got {value!r}")
    return result


SensorNumber = Annotated[float, BeforeValidator(coerce_sensor_number)]
"""Annotated type accepting only finite JSON numbers."""


class AidaBaseModel(BaseModel):
    """Base for models built from AIDA64 payloads."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict, exclude=True, repr=False)
    """Original payload dict."""

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        if not isinstance(values, dict) or "raw" in values:
            return values
        return {**values, "raw": dict(values)}
