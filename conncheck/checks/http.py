"""Generic HTTP endpoint checker (httpx)."""

from __future__ import annotations

import enum
import logging
from typing import Any

import httpx

from conncheck.checks.base import Checker
from conncheck.checks.errors import CheckConnectionError, PartialFailure, UnsupportedError
from conncheck.models import HttpCheckResult, HttpConfig, Kind

logger = logging.getLogger(__name__)

# Total request timeout in seconds.
REQUEST_TIMEOUT = 10.0


class HttpMethod(enum.Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"

    @classmethod
    def parse(cls, value: str) -> HttpMethod | None:
        try:
            return cls(value)
        except ValueError:
            return None


def _header_text(value: bytes) -> str | None:
    # Visible ASCII plus tab; anything else is not a printable header value.
    if all(b == 9 or 32 <= b < 127 for b in value):
        return value.decode("ascii")
    return None


def encode_headers(headers: dict[str, str]) -> list[tuple[bytes, bytes]]:
    """Header pairs as UTF-8 bytes, so non-ASCII values are sent as-is."""
    return [(key.encode("utf-8"), value.encode("utf-8")) for key, value in headers.items()]


def visible_headers(response: httpx.Response) -> dict[str, str]:
    """Response headers whose values are plain printable ASCII."""
    headers: dict[str, str] = {}
    for raw_key, raw_value in response.headers.raw:
        value = _header_text(raw_value)
        if value is not None:
            headers[raw_key.decode("latin-1").lower()] = value
    return headers


class HttpChecker(Checker[HttpConfig, HttpCheckResult]):
    """Send one request and capture status, headers and body.

    Args:
        transport: Optional httpx transport, e.g. :class:`httpx.MockTransport`
                   in tests.
    """

    kind = Kind.HTTP
    display_name = "HTTP API"

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._transport = transport

    async def probe(self, config: HttpConfig) -> HttpCheckResult:
        method = HttpMethod.parse(config.method)
        if method is None:
            raise UnsupportedError(f"Unsupported HTTP method: {config.method}")

        logger.debug("Making %s request to %s", method.value, config.url)
        async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT, transport=self._transport) as client:
            try:
                request = client.build_request(
                    method.value, config.url, headers=encode_headers(config.headers)
                )
                response = await client.send(request, stream=True)
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                raise CheckConnectionError(f"Request failed: {exc}") from exc

            try:
                status_code = response.status_code
                headers = visible_headers(response)
                logger.debug("Received response with status code: %d", status_code)
                try:
                    await response.aread()
                    body = response.text
                except (httpx.HTTPError, UnicodeDecodeError) as exc:
                    raise PartialFailure(
                        f"Failed to read response body: {exc}",
                        status_code=status_code,
                        response_headers=headers,
                    ) from exc
            finally:
                await response.aclose()

        return HttpCheckResult(
            success=True,
            url=config.url,
            method=method.value,
            status_code=status_code,
            response_headers=headers,
            response_body=body,
        )

    def failed(self, config: HttpConfig, error: str, **fields: Any) -> HttpCheckResult:
        return HttpCheckResult(
            success=False,
            url=config.url,
            method=config.method,
            error=error,
            **fields,
        )
