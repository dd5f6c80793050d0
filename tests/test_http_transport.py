from __future__ import annotations

import asyncio
import json

import httpx

from svcclient.config import ClientConfig
from svcclient.core.http.transport import HttpService


def _service(handler) -> HttpService:
    transport = httpx.MockTransport(handler)
    return HttpService(
        ClientConfig(user_agent="test-agent"),
        client=httpx.Client(transport=transport),
        async_client=httpx.AsyncClient(transport=transport),
    )


def test_get_returns_status_json_and_raw_text() -> None:
    seen: dict[str, httpx.Request] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(200, request=request, json={"ok": True})

    result = _service(handler).get("http://service.local/items", {"page": 2})

    assert result.status == 200
    assert result.parsed_body == {"ok": True}
    assert json.loads(result.raw_body) == {"ok": True}
    assert seen["request"].url.params["page"] == "2"
    assert seen["request"].headers["User-Agent"] == "test-agent"


def test_non_json_body_is_reported_as_missing() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, request=request, text="<html>bad gateway</html>")

    result = _service(handler).get("http://service.local/items")

    assert result.status == 502
    assert result.parsed_body is None
    assert result.raw_body == "<html>bad gateway</html>"


def test_post_and_put_send_json_body_with_headers() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, request=request, json={"id": 1})

    service = _service(handler).add_header("Accept", "application/json").with_headers({"X-One": "1"})
    service.post("http://service.local/items", {"name": "a"})
    service.put("http://service.local/items/1", {"name": "b"}, {"force": "yes"})

    assert [request.method for request in seen] == ["POST", "PUT"]
    assert json.loads(seen[0].content) == {"name": "a"}
    assert json.loads(seen[1].content) == {"name": "b"}
    assert seen[1].url.params["force"] == "yes"
    assert all(request.headers["X-One"] == "1" for request in seen)
    assert all(request.headers["Accept"] == "application/json" for request in seen)


def test_connect_error_maps_to_sentinel_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    result = _service(handler).post("http://service.local/items", {"name": "a"})

    assert result.status == -1
    assert result.parsed_body is None
    assert result.raw_body == ""


def test_post_async_uses_async_client() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, request=request, json={"queued": json.loads(request.content)["n"]})

    service = _service(handler)

    result = asyncio.run(service.post_async("http://service.local/jobs", {"n": 3}))

    assert result.status == 200
    assert result.parsed_body == {"queued": 3}


def test_post_async_connect_error_maps_to_sentinel_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("slow", request=request)

    result = asyncio.run(_service(handler).post_async("http://service.local/jobs", {}))

    assert result.status == -1


def test_context_managers_close_clients() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, request=request, json={})

    with _service(handler) as service:
        service.get("http://service.local/items")
    assert service.client.is_closed

    async def run() -> HttpService:
        async with _service(handler) as async_service:
            await async_service.post_async("http://service.local/jobs", {})
        return async_service

    closed = asyncio.run(run())
    assert closed.client.is_closed
    assert closed.async_client.is_closed
