import asyncio
import json

import httpx
import pytest

from apps.store import Order, RemoteStoreClient, RemoteStoreConfig, RemoteStoreError


def _client(handler) -> RemoteStoreClient:
    transport = httpx.MockTransport(handler)
    http_client = httpx.AsyncClient(transport=transport, base_url="https://store.test")
    return RemoteStoreClient(
        RemoteStoreConfig(base_url="https://store.test", api_key="anon-key"),
        client=http_client,
    )


def test_select_sends_postgrest_params_and_auth_headers() -> None:
    captured: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["method"] = request.method
        captured["path"] = request.url.path
        captured["params"] = dict(request.url.params)
        captured["apikey"] = request.headers.get("apikey")
        captured["authorization"] = request.headers.get("authorization")
        return httpx.Response(200, json=[{"id": 2}, {"id": 1}])

    client = _client(handler)
    rows = asyncio.run(client.select("courses", order=Order("id")))

    assert rows == [{"id": 2}, {"id": 1}]
    assert captured["method"] == "GET"
    assert captured["path"] == "/rest/v1/courses"
    assert captured["params"] == {"select": "*", "order": "id.desc"}
    assert captured["apikey"] == "anon-key"
    assert captured["authorization"] == "Bearer anon-key"


def test_select_with_filters_columns_and_limit() -> None:
    captured: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["params"] = dict(request.url.params)
        return httpx.Response(200, json=[{"image_url": "https://img.test/t.png"}])

    client = _client(handler)
    rows = asyncio.run(client.table("teacher_profile").select(filters={"id": 1}, columns="image_url", limit=1))

    assert rows == [{"image_url": "https://img.test/t.png"}]
    assert captured["params"] == {"select": "image_url", "id": "eq.1", "limit": "1"}


def test_insert_requests_representation_and_wraps_record_in_list() -> None:
    captured: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["payload"] = json.loads(request.content)
        captured["prefer"] = request.headers.get("prefer")
        return httpx.Response(201, json=[{"id": 42, "name": "Ali"}])

    client = _client(handler)
    rows = asyncio.run(client.insert("messages", {"name": "Ali"}))

    assert rows == [{"id": 42, "name": "Ali"}]
    assert captured["payload"] == [{"name": "Ali"}]
    assert captured["prefer"] == "return=representation"


def test_update_and_delete_filter_by_match() -> None:
    calls: list[tuple[str, dict, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        calls.append((request.method, dict(request.url.params), body))
        return httpx.Response(204)

    client = _client(handler)

    async def _run() -> None:
        await client.update("news", {"date": "2025"}, match={"id": "n1"})
        await client.delete("news", match={"id": "n1"})

    asyncio.run(_run())

    assert calls == [
        ("PATCH", {"id": "eq.n1"}, {"date": "2025"}),
        ("DELETE", {"id": "eq.n1"}, None),
    ]


def test_update_without_match_is_rejected() -> None:
    client = _client(lambda request: httpx.Response(204))
    with pytest.raises(ValueError):
        asyncio.run(client.update("courses", {"students": 1}, match={}))
    with pytest.raises(ValueError):
        asyncio.run(client.delete("courses", match={}))


def test_http_error_is_wrapped_with_status_code() -> None:
    client = _client(lambda request: httpx.Response(500, json={"message": "boom"}))

    with pytest.raises(RemoteStoreError) as excinfo:
        asyncio.run(client.select("courses"))

    assert excinfo.value.status_code == 500
    assert excinfo.value.table == "courses"


def test_transport_error_is_wrapped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    client = _client(handler)

    with pytest.raises(RemoteStoreError) as excinfo:
        asyncio.run(client.insert("messages", {"name": "Ali"}))

    assert excinfo.value.status_code is None
    assert "offline" in str(excinfo.value)


def test_non_json_payload_raises() -> None:
    client = _client(lambda request: httpx.Response(200, text="<html>maintenance</html>"))

    with pytest.raises(RemoteStoreError):
        asyncio.run(client.select("news"))


def test_anonymous_client_omits_auth_headers() -> None:
    captured: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["headers"] = dict(request.headers)
        return httpx.Response(200, json=[])

    transport = httpx.MockTransport(handler)
    client = RemoteStoreClient(
        RemoteStoreConfig(base_url="https://store.test"),
        client=httpx.AsyncClient(transport=transport, base_url="https://store.test"),
    )

    assert asyncio.run(client.select("achievements")) == []
    assert "apikey" not in captured["headers"]
    assert "authorization" not in captured["headers"]
