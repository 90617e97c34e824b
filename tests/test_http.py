"""Tests for the HTTP client."""

import httpx
import pytest

from xcore_sdk.errors import XCoreHTTPError, XCoreNetworkError
from xcore_sdk.http import HTTPClient


class TestURLBuilding:
    def test_build_url_adds_prefix(self):
        client = HTTPClient("https://hs.test/")
        url = client.build_url("rooms", "!abc:hs.test", "leave")
        assert url == "https://hs.test/_matrix/client/r0/rooms/!abc:hs.test/leave"

    def test_build_url_keeps_homeserver_path(self):
        client = HTTPClient("https://hs.test/base")
        assert client.build_url("sync") == "https://hs.test/base/_matrix/client/r0/sync"

    def test_build_base_url_skips_prefix(self):
        client = HTTPClient("https://hs.test")
        url = client.build_base_url("_matrix", "client", "versions")
        assert url == "https://hs.test/_matrix/client/versions"

    def test_trailing_slash_preserved(self):
        client = HTTPClient("https://hs.test")
        assert client.build_base_url("_matrix", "media/").endswith("/_matrix/media/")

    def test_alias_sigil_escaped(self):
        client = HTTPClient("https://hs.test")
        url = client.build_url("join", "#room:hs.test")
        assert url.endswith("/join/%23room:hs.test")

    def test_custom_prefix(self):
        client = HTTPClient("https://hs.test", prefix="/_matrix/client/v3")
        assert client.build_url("sync") == "https://hs.test/_matrix/client/v3/sync"

    def test_with_query(self):
        client = HTTPClient("https://hs.test")
        url = httpx.URL(client.build_url_with_query(["sync"], {"since": "s1", "timeout": "100"}))
        assert url.path == "/_matrix/client/r0/sync"
        assert url.params["since"] == "s1"
        assert url.params["timeout"] == "100"

    def test_app_service_user_id_on_every_url(self):
        client = HTTPClient("https://hs.test", app_service_user_id="@as_bot:hs.test")
        plain = httpx.URL(client.build_url("joined_rooms"))
        with_query = httpx.URL(client.build_url_with_query(["sync"], {"since": "s1"}))
        assert plain.params["user_id"] == "@as_bot:hs.test"
        assert with_query.params["user_id"] == "@as_bot:hs.test"
        assert with_query.params["since"] == "s1"

    def test_no_query_without_app_service(self):
        client = HTTPClient("https://hs.test")
        assert "?" not in client.build_url("joined_rooms")


@pytest.mark.asyncio
async def test_get_adds_auth_header(http_client):
    client, transport, calls = http_client
    transport.response = httpx.Response(200, json={"ok": True})

    response = await client.get(client.build_url("joined_rooms"))
    assert response.status_code == 200
    assert len(calls) == 1
    assert calls[0]["headers"]["authorization"] == "Bearer test-token"


@pytest.mark.asyncio
async def test_post_sends_json(http_client):
    client, transport, calls = http_client
    await client.post(client.build_url("login"), json={"type": "m.login.password"})
    assert calls[0]["method"] == "POST"
    assert calls[0]["body"] == {"type": "m.login.password"}
    assert calls[0]["headers"]["content-type"] == "application/json"


@pytest.mark.asyncio
async def test_no_auth_header_when_no_token():
    client = HTTPClient("https://hs.test", access_token=None)
    assert "Authorization" not in client._headers()
    await client.close()


@pytest.mark.asyncio
async def test_token_setter():
    client = HTTPClient("https://hs.test")
    assert client.token is None
    client.token = "new-token"
    assert client._headers()["Authorization"] == "Bearer new-token"
    await client.close()


@pytest.mark.asyncio
async def test_raises_on_4xx_with_error_body(http_client):
    client, transport, calls = http_client
    transport.response = httpx.Response(
        403, json={"errcode": "M_FORBIDDEN", "error": "You are not invited."}
    )

    with pytest.raises(XCoreHTTPError) as exc_info:
        await client.get(client.build_url("rooms", "!r:hs.test", "messages"))

    err = exc_info.value
    assert err.status == 403
    assert err.errcode == "M_FORBIDDEN"
    assert "M_FORBIDDEN: You are not invited." in str(err)


@pytest.mark.asyncio
async def test_non_json_error_keeps_body(http_client):
    client, transport, calls = http_client
    transport.response = httpx.Response(502, text="<html>Bad Gateway</html>")

    with pytest.raises(XCoreHTTPError) as exc_info:
        await client.put(client.build_url("rooms", "!r:hs.test", "typing", "@bot:hs.test"))

    err = exc_info.value
    assert err.error is None
    assert err.contents == b"<html>Bad Gateway</html>"
    assert "Failed to PUT JSON to /_matrix/client/r0/rooms/" in err.message
    assert "<html>Bad Gateway</html>" in err.message


@pytest.mark.asyncio
async def test_does_not_retry_server_errors(http_client):
    client, transport, calls = http_client
    transport.response = httpx.Response(503, json={"errcode": "M_UNKNOWN", "error": "busy"})

    with pytest.raises(XCoreHTTPError):
        await client.get(client.build_url("sync"))
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_transport_error_becomes_network_error():
    class FailingTransport(httpx.AsyncBaseTransport):
        async def handle_async_request(self, request):
            raise httpx.ConnectError("connection refused", request=request)

    client = HTTPClient("https://hs.test")
    client._client = httpx.AsyncClient(transport=FailingTransport())
    with pytest.raises(XCoreNetworkError, match="connection refused"):
        await client.get(client.build_url("sync"))


@pytest.mark.asyncio
async def test_undecodable_body_becomes_network_error():
    def handler(request):
        return httpx.Response(200, headers={"content-encoding": "gzip"}, content=b"not gzip")

    client = HTTPClient("https://hs.test")
    client._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    with pytest.raises(XCoreNetworkError) as exc_info:
        await client.get(client.build_url("sync"))
    assert isinstance(exc_info.value.__cause__, httpx.DecodingError)
