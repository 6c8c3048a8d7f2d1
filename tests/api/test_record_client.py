"""Tests for RecordServiceClient."""

from __future__ import annotations

import json

import httpx
import pytest

from taskflow.api.client import RecordServiceClient
from taskflow.config import BackendConfig
from taskflow.exceptions import RecordServiceError


def _client(handler, token: str | None = "tok") -> RecordServiceClient:
    return RecordServiceClient(
        "https://records.test/api/",
        "client-123",
        token=token,
        transport=httpx.MockTransport(handler),
    )


class _Recorder:
    """Transport handler that records requests and replays one response."""

    def __init__(self, response: httpx.Response):
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response

    @property
    def last_body(self) -> dict:
        return json.loads(self.requests[-1].content)


def test_from_config():
    backend = BackendConfig(endpoint="https://x.test/v1/", client_id="abc", timeout=5)
    client = RecordServiceClient.from_config(backend, token="t")

    assert client.base_url == "https://x.test/v1"
    assert client.client_id == "abc"
    assert client.timeout == 5
    assert client.token == "t"
    assert client._client is None


def test_headers_with_and_without_token():
    client = RecordServiceClient("https://x.test", "abc", token="t")

    headers = client._get_headers()
    assert headers["X-Client-Id"] == "abc"
    assert headers["Authorization"] == "Bearer t"
    assert "Authorization" not in client._get_headers(skip_auth=True)

    anonymous = RecordServiceClient("https://x.test", "abc")
    assert "Authorization" not in anonymous._get_headers()


@pytest.mark.asyncio
async def test_close_resets_http_client():
    client = _client(_Recorder(httpx.Response(200, json={})))
    client._get_client()
    await client.close()
    assert client._client is None


@pytest.mark.asyncio
async def test_fetch_records():
    recorder = _Recorder(httpx.Response(200, json={"data": [{"id": "1"}]}))
    async with _client(recorder) as client:
        records = await client.fetch_records(
            "Tasks", fields=["id"], order_by=[{"field": "updatedAt", "direction": "desc"}]
        )

    assert records == [{"id": "1"}]
    request = recorder.requests[0]
    assert request.url.path == "/api/collections/Tasks/records/query"
    assert request.headers["Authorization"] == "Bearer tok"
    assert request.headers["X-Client-Id"] == "client-123"
    assert recorder.last_body["orderBy"] == [{"field": "updatedAt", "direction": "desc"}]


@pytest.mark.asyncio
async def test_fetch_records_without_data_key():
    recorder = _Recorder(httpx.Response(200, json={}))
    async with _client(recorder) as client:
        assert await client.fetch_records("Tasks") == []


@pytest.mark.asyncio
async def test_create_record_stamps_timestamps():
    recorder = _Recorder(httpx.Response(200, json={"data": {"id": "9"}}))
    async with _client(recorder) as client:
        result = await client.create_record("Tasks", {"title": "x"})

    assert result == {"id": "9"}
    record = recorder.last_body["record"]
    assert record["title"] == "x"
    assert record["createdAt"] == record["updatedAt"]


@pytest.mark.asyncio
async def test_update_record_refreshes_updated_at():
    recorder = _Recorder(httpx.Response(200, json={}))
    async with _client(recorder) as client:
        await client.update_record(
            "Tasks", "9", {"title": "x", "updatedAt": "2000-01-01T00:00:00Z"}
        )

    request = recorder.requests[0]
    assert request.method == "PUT"
    assert request.url.path == "/api/collections/Tasks/records/9"
    assert recorder.last_body["record"]["updatedAt"] != "2000-01-01T00:00:00Z"


@pytest.mark.asyncio
async def test_delete_record_with_empty_body():
    recorder = _Recorder(httpx.Response(204))
    async with _client(recorder) as client:
        assert await client.delete_record("Tasks", "9") == {}
    assert recorder.requests[0].method == "DELETE"


@pytest.mark.asyncio
async def test_login_skips_bearer_token():
    recorder = _Recorder(httpx.Response(200, json={"token": "new", "user": {"id": "u"}}))
    async with _client(recorder) as client:
        payload = await client.login("a@b.c", "pw")

    assert payload["token"] == "new"
    request = recorder.requests[0]
    assert request.url.path == "/api/auth/login"
    assert "Authorization" not in request.headers
    assert recorder.last_body == {"email": "a@b.c", "password": "pw"}


@pytest.mark.asyncio
async def test_signup_sends_first_name():
    recorder = _Recorder(httpx.Response(200, json={}))
    async with _client(recorder) as client:
        await client.signup("a@b.c", "pw", "Ada")

    assert recorder.requests[0].url.path == "/api/auth/signup"
    assert recorder.last_body["firstName"] == "Ada"


@pytest.mark.asyncio
async def test_server_error_uses_body_message():
    recorder = _Recorder(httpx.Response(500, json={"message": "database offline"}))
    async with _client(recorder) as client:
        with pytest.raises(RecordServiceError) as exc_info:
            await client.fetch_records("Tasks")

    assert str(exc_info.value) == "database offline"
    assert exc_info.value.status_code == 500
    assert not exc_info.value.is_auth_error


@pytest.mark.asyncio
async def test_unauthorized_is_auth_error():
    recorder = _Recorder(httpx.Response(401, text="nope"))
    async with _client(recorder) as client:
        with pytest.raises(RecordServiceError) as exc_info:
            await client.fetch_records("Tasks")

    assert exc_info.value.is_auth_error
    assert "401" in str(exc_info.value)


@pytest.mark.asyncio
async def test_connection_error_is_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        with pytest.raises(RecordServiceError) as exc_info:
            await client.fetch_records("Tasks")

    assert exc_info.value.status_code is None
    assert "connection refused" in str(exc_info.value)


@pytest.mark.asyncio
async def test_invalid_json_body():
    recorder = _Recorder(httpx.Response(200, text="<html>"))
    async with _client(recorder) as client:
        with pytest.raises(RecordServiceError):
            await client.fetch_records("Tasks")


@pytest.mark.asyncio
async def test_list_body_is_wrapped_as_data():
    recorder = _Recorder(httpx.Response(200, json=[{"id": "1"}]))
    async with _client(recorder) as client:
        assert await client.fetch_records("Tasks") == [{"id": "1"}]
