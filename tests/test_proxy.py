"""Tests for the ad hoc outbound HTTP request helper."""

from __future__ import annotations

import httpx
import pytest

from conncheck.proxy import (
    HttpClientRequest,
    ProxyMethod,
    execute_http_request,
)


class TestProxyMethod:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("get", ProxyMethod.GET),
            ("Post", ProxyMethod.POST),
            ("OPTIONS", ProxyMethod.OPTIONS),
            ("patch", ProxyMethod.PATCH),
            ("TRACE", ProxyMethod.GET),
            ("", ProxyMethod.GET),
        ],
    )
    def test_parse(self, raw, expected):
        assert ProxyMethod.parse(raw) is expected


class TestExecuteHttpRequest:
    async def test_request_forwarded(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, headers={"Location": "/items/1"}, text="created")

        request = HttpClientRequest(
            url="http://example.com/items",
            method="post",
            headers={"Content-Type": "application/json"},
            body='{"name": "x"}',
        )
        response = await execute_http_request(request, transport=httpx.MockTransport(handler))

        assert response.success is True
        assert response.status_code == 201
        assert response.headers["location"] == "/items/1"
        assert response.body == "created"
        assert response.error is None
        assert seen[0].method == "POST"
        assert seen[0].content == b'{"name": "x"}'
        assert seen[0].headers["Content-Type"] == "application/json"

    async def test_non_ascii_header_value_sent(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200)

        request = HttpClientRequest(
            url="http://example.com", method="GET", headers={"X-Name": "café"}
        )
        response = await execute_http_request(request, transport=httpx.MockTransport(handler))
        assert response.success is True
        assert response.status_code == 200
        assert (b"X-Name", "café".encode("utf-8")) in seen[0].headers.raw

    async def test_unknown_method_sent_as_get(self):
        methods: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            methods.append(request.method)
            return httpx.Response(200)

        request = HttpClientRequest(url="http://example.com", method="BREW")
        response = await execute_http_request(request, transport=httpx.MockTransport(handler))
        assert response.success is True
        assert methods == ["GET"]

    async def test_empty_body_not_sent(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200)

        request = HttpClientRequest(url="http://example.com", method="PUT", body="")
        await execute_http_request(request, transport=httpx.MockTransport(handler))
        assert seen[0].content == b""

    async def test_transport_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out")

        request = HttpClientRequest(url="http://10.255.255.1", method="GET")
        response = await execute_http_request(request, transport=httpx.MockTransport(handler))
        assert response.success is False
        assert response.status_code is None
        assert response.body is None
        assert response.error == "timed out"

    async def test_error_status_is_success(self):
        transport = httpx.MockTransport(lambda r: httpx.Response(500, text="oops"))
        request = HttpClientRequest(url="http://example.com", method="DELETE")
        response = await execute_http_request(request, transport=transport)
        assert response.success is True
        assert response.status_code == 500
        assert response.body == "oops"
