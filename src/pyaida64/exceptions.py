"""Custom exception hierarchy for pyaida64."""

from __future__ import annotations

from collections.abc import Sequence
from enum import StrEnum


class FetchErrorKind(StrEnum):
    UNREACHABLE = "unreachable"
    TIMEOUT = "timeout"
    BAD_STATUS = "bad_status"


class ParseErrorKind(StrEnum):
    MALFORMED = "malformed"
    MISSING_FIELD = "missing_field"
    WRONG_TYPE = "wrong_type"


class AidaError(Exception):
    """Base exception for all pyaida64 errors."""


class AidaConfigError(AidaError):
    """Invalid or missing configuration."""


class AidaFetchError(AidaError):
    """HTTP-level failure (network, timeout, non-2xx)."""

    def __init__(
        self,
        message: str,
        *,
        kind: FetchErrorKind,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.kind = kind
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class AidaParseError(AidaError):
    """Telemetry body could not be turned into a snapshot.

    ``fields`` names the sensor keys involved, when the failure is tied
    to specific keys (missing or wrongly typed entries).
    """

    def __init__(
        self,
        message: str,
        *,
        kind: ParseErrorKind,
        fields: Sequence[str] = (),
    ) -> None:
        self.kind = kind
        self.fields = tuple(fields)
        super().__init__(message)
