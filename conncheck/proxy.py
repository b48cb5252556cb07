"""Ad hoc outbound HTTP requests on behalf of the dashboard.

Independent of the ``HTTP_<ID>_<PARAM>`` grammar: the caller supplies the
method, URL, headers and body directly.
"""

from __future__ import annotations

import enum
import logging

import httpx
from pydantic import BaseModel, Field

from conncheck.checks.http import encode_headers, visible_headers

logger = logging.getLogger(__name__)

PROXY_TIMEOUT = 30.0


class ProxyMethod(enum.Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    OPTIONS = "OPTIONS"

    @classmethod
    def parse(cls, value: str) -> ProxyMethod:
        """Case-insensitive lookup; unknown methods are sent as GET."""
        try:
            return cls(value.upper())
        except ValueError:
            return cls.GET


class HttpClientRequest(BaseModel):
    url: str
    method: str
    headers: dict[str, str] = Field(default_factory=dict)
    body: str | None = None


class HttpClientResponse(BaseModel):
    success: bool
    status_code: int | None = None
    headers: dict[str, str] = Field(default_factory=dict)
    body: str | None = None
    error: str | None = None


async def execute_http_request(
    request: HttpClientRequest,
    transport: httpx.AsyncBaseTransport | None = None,
) -> HttpClientResponse:
    """Send *request* once and describe the outcome; never raises."""
    method = ProxyMethod.parse(request.method)
    content = request.body if request.body else None

    async with httpx.AsyncClient(timeout=PROXY_TIMEOUT, transport=transport) as client:
        try:
            response = await client.send(
                client.build_request(
                    method.value,
                    request.url,
                    headers=encode_headers(request.headers),
                    content=content,
                ),
                stream=True,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Proxy request to %s failed: %s", request.url, exc)
            return HttpClientResponse(success=False, error=str(exc))

        try:
            headers = visible_headers(response)
            try:
                await response.aread()
                body: str | None = response.text
            except (httpx.HTTPError, UnicodeDecodeError) as exc:
                logger.warning("Could not read proxy response body from %s: %s", request.url, exc)
                body = None
        finally:
            await response.aclose()

    return HttpClientResponse(
        success=True,
        status_code=response.status_code,
        headers=headers,
        body=body,
    )
