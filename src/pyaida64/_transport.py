"""HTTP transport for the AIDA64 telemetry endpoint."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import aiohttp

from pyaida64._constants import USER_AGENT
from pyaida64._redact import truncate_for_log
from pyaida64.exceptions import AidaError, AidaFetchError, AidaParseError, FetchErrorKind, ParseErrorKind

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the poller.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`TelemetryClient`) concrete.
    """

    async def fetch(self, url: str, timeout: float) -> str:
        ...


class TelemetryClient:
    """Issue single GET requests against the telemetry service.

    The client never retries; a failed request surfaces as
    :class:`AidaFetchError` and the caller decides what to do next.
    Once closed, the client refuses further requests.
    """

    def __init__(self, http_session: aiohttp.ClientSession | None = None) -> None:
        self._external_session = http_session is not None
        self._http = http_session
        self._closed = False

    async def __aenter__(self) -> TelemetryClient:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def _require_session(self) -> aiohttp.ClientSession:
        if self._closed:
            raise AidaError("TelemetryClient is closed")
        if self._http is None or self._http.closed:
            self._http = aiohttp.ClientSession()
            self._external_session = False
        return self._http

    async def close(self) -> None:
        """Close the HTTP session if this client created it.

        Safe to call more than once.
        """
        self._closed = True
        if not self._external_session and self._http is not None:
            await self._http.close()
        self._http = None

    async def fetch(self, url: str, timeout: float) -> str:
        """GET *url* and return the body text.

        Raises
        ------
        AidaFetchError
            ``TIMEOUT`` when the request exceeds *timeout* seconds,
            ``BAD_STATUS`` for any non-2xx reply, ``UNREACHABLE`` for
            every other connection-level failure.
        AidaParseError
            ``MALFORMED`` when the body cannot be decoded with its declared
            charset (UTF-8 when none is given).
        AidaError
            When the client has been closed.
        """
        http = self._require_session()
        headers = {
            "accept": "application/json, text/plain;q=0.9",
            "user-agent": USER_AGENT,
        }

        _logger.debug("GET %s (timeout=%.1fs)", url, timeout)

        try:
            async with http.get(url, headers=headers, timeout=aiohttp.ClientTimeout(total=timeout)) as resp:
                body = await resp.read()
                charset = resp.charset or "utf-8"
                if not 200 <= resp.status < 300:
                    raise AidaFetchError(
                        f"HTTP {resp.status} from {url}: {body[:200].decode('utf-8', errors='replace')}",
                        kind=FetchErrorKind.BAD_STATUS,
                        status_code=resp.status,
                        endpoint=url,
                    )
        except AidaFetchError:
            raise
        # aiohttp's ServerTimeoutError is also a ClientError; timeouts go first.
        except TimeoutError as exc:
            raise AidaFetchError(
                f"Request to {url} timed out after {timeout:.1f}s",
                kind=FetchErrorKind.TIMEOUT,
                endpoint=url,
            ) from exc
        except aiohttp.ClientError as exc:
            raise AidaFetchError(
                f"Request to {url} failed: {exc}",
                kind=FetchErrorKind.UNREACHABLE,
                endpoint=url,
            ) from exc

        try:
            text = body.decode(charset)
        except (UnicodeDecodeError, LookupError) as exc:
            raise AidaParseError(
                f"Response from {url} is not valid {charset} text: {exc}",
                kind=ParseErrorKind.MALFORMED,
            ) from exc

        _logger.debug("Response from %s: %s", url, truncate_for_log(text, max_string=256))
        return text
