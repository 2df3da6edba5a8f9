"""Poller configuration for pyaida64."""

from __future__ import annotations

import dataclasses
import os
from typing import Any
from urllib.parse import urlsplit

from pyaida64._constants import (
    ACCESSORY_DEVICE_NAME,
    BASE_URL,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_REQUEST_TIMEOUT,
    FAN_SPEED_KEY,
    GPU_TEMPERATURE_KEY,
    SYSTEM_INFO_PATH,
)
from pyaida64.exceptions import AidaConfigError


def _env_float(env_key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise AidaConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class AidaConfig:
    """Poller configuration.

    Parameters
    ----------
    base_url : str
        Scheme and authority of the AIDA64 telemetry service
        (e.g. ``"http://192.168.0.112:5556"``).
    path : str
        Path of the system info document on that service.
    poll_interval : float
        Seconds between the starts of two poll cycles.
    request_timeout : float
        Upper bound in seconds for a single HTTP request.  Keep it below
        ``poll_interval`` so a hung service never delays the next tick.
    fan_key : str
        Sensor id carrying the GPU fan speed (percent).
    temp_key : str
        Sensor id carrying the GPU temperature (°C).
    device_name : str
        Display name of the exposed accessory.
    """

    base_url: str = BASE_URL
    path: str = SYSTEM_INFO_PATH
    poll_interval: float = DEFAULT_POLL_INTERVAL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    fan_key: str = FAN_SPEED_KEY
    temp_key: str = GPU_TEMPERATURE_KEY
    device_name: str = ACCESSORY_DEVICE_NAME

    def __post_init__(self) -> None:
        parts = urlsplit(self.base_url)
        if parts.scheme not in {"http", "https"} or not parts.netloc:
            raise AidaConfigError(f"base_url must be an http(s) URL with a host, got {self.base_url!r}")
        if not self.path.startswith("/"):
            raise AidaConfigError(f"path must start with '/', got {self.path!r}")
        if self.poll_interval <= 0:
            raise AidaConfigError(f"poll_interval must be positive, got {self.poll_interval}")
        if self.request_timeout <= 0:
            raise AidaConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        if not self.fan_key or not self.temp_key:
            raise AidaConfigError("fan_key and temp_key must be non-empty")

    @property
    def endpoint(self) -> str:
        """Full URL polled on every cycle."""
        return f"{self.base_url.rstrip('/')}{self.path}"

    @classmethod
    def from_env(cls, **overrides: Any) -> AidaConfig:
        """Create configuration from environment variables.

        Reads the optional ``AIDA_*`` variables listed below.  Explicit
        keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        AidaConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "AIDA_BASE_URL": "base_url",
            "AIDA_PATH": "path",
            "AIDA_FAN_KEY": "fan_key",
            "AIDA_TEMP_KEY": "temp_key",
            "AIDA_DEVICE_NAME": "device_name",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # Numeric fields, handled separately
        for env_key, field_name in (
            ("AIDA_POLL_INTERVAL", "poll_interval"),
            ("AIDA_REQUEST_TIMEOUT", "request_timeout"),
        ):
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_float(env_key, val)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
