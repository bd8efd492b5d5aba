# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import asyncio

import httpx
import pytest

from cleanhttpx.http.client import (
    AsyncClient,
    Client,
    default_client,
    default_pooled_async_client,
    default_pooled_client,
    insecure_client,
)
from cleanhttpx.http.useragent import (
    AsyncUserAgentTransport,
    UserAgentTransport,
    attach_user_agent,
    user_agent,
)

HTTPX_DEFAULT_USER_AGENT = f"python-httpx/{httpx.__version__}"


def _recording_client(seen: list) -> Client:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.headers.get("User-Agent"))
        return httpx.Response(200, text="ok")

    return Client(transport=httpx.MockTransport(handler))


def test_without_decorator_engine_default_is_sent():
    seen = []
    with _recording_client(seen) as client:
        client.get("http://example.test/")
    assert seen == [HTTPX_DEFAULT_USER_AGENT]


def test_attach_sets_header_on_every_request():
    seen = []
    with attach_user_agent(_recording_client(seen), "foo/1") as client:
        client.get("http://example.test/a")
        client.post("http://example.test/b", content=b"x")
    assert seen == ["foo/1", "foo/1"]


def test_attach_returns_same_client():
    client = _recording_client([])
    try:
        assert attach_user_agent(client, "foo/1") is client
        assert isinstance(client.transport, UserAgentTransport)
    finally:
        client.close()


def test_empty_value_removes_header():
    seen = []
    with attach_user_agent(_recording_client(seen), "") as client:
        client.get("http://example.test/")
    assert seen == [None]


def test_decorator_overrides_per_request_header():
    seen = []
    with attach_user_agent(_recording_client(seen), "foo/1") as client:
        client.get("http://example.test/", headers={"user-agent": "caller/2"})
    assert seen == ["foo/1"]


def test_last_attached_wins():
    seen = []
    client = _recording_client(seen)
    attach_user_agent(client, "A")
    attach_user_agent(client, "B")
    try:
        client.get("http://example.test/")
        assert seen == ["B"]

        attach_user_agent(client, "")
        attach_user_agent(client, "C")
        client.get("http://example.test/")
    finally:
        client.close()
    assert seen == ["B", "C"]


def test_marker_does_not_leak_onto_request():
    with attach_user_agent(_recording_client([]), "foo/1") as client:
        response = client.get("http://example.test/")
    assert not any(key.startswith("cleanhttpx") for key in response.request.extensions)


def test_inner_errors_propagate_unchanged():
    raised = []

    def handler(request: httpx.Request) -> httpx.Response:
        exc = httpx.ConnectError("connection refused", request=request)
        raised.append(exc)
        raise exc

    client = attach_user_agent(Client(transport=httpx.MockTransport(handler)), "foo/1")
    with client, pytest.raises(httpx.ConnectError) as excinfo:
        client.get("http://example.test/")
    assert excinfo.value is raised[0]


def test_close_reaches_wrapped_transport():
    class ClosingTransport(httpx.BaseTransport):
        closed = False

        def handle_request(self, request: httpx.Request) -> httpx.Response:  # noqa: ARG002
            return httpx.Response(200)

        def close(self) -> None:
            self.closed = True

    inner = ClosingTransport()
    client = attach_user_agent(Client(transport=inner), "a")
    attach_user_agent(client, "b")
    client.close()
    assert inner.closed is True


def test_async_decorator_last_attached_wins():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.headers.get("User-Agent"))
        return httpx.Response(200)

    async def _run():
        client = AsyncClient(transport=httpx.MockTransport(handler))
        attach_user_agent(client, "A")
        attach_user_agent(client, "B")
        assert isinstance(client.transport, AsyncUserAgentTransport)
        async with client:
            await client.get("http://example.test/")

        client = attach_user_agent(AsyncClient(transport=httpx.MockTransport(handler)), "")
        async with client:
            await client.get("http://example.test/")

    asyncio.run(_run())
    assert seen == ["B", None]


# End-to-end against a local server.


def test_pooled_client_sends_engine_default(ua_server):
    with default_pooled_client() as client:
        assert client.get(ua_server.url).status_code == 200
    assert ua_server.user_agents == [HTTPX_DEFAULT_USER_AGENT]


@pytest.mark.parametrize(
    ("make_client", "expected"),
    [
        (default_client, HTTPX_DEFAULT_USER_AGENT),
        (lambda: default_client(user_agent("")), None),
        (lambda: default_client(user_agent("foo/1")), "foo/1"),
        (lambda: default_pooled_client(0, user_agent("pooled/1")), "pooled/1"),
        (lambda: insecure_client(user_agent("A"), user_agent("B")), "B"),
    ],
)
def test_user_agent_seen_by_server(ua_server, make_client, expected):
    with make_client() as client:
        client.get(ua_server.url)
    assert ua_server.user_agents == [expected]


def test_async_pooled_client_sends_decorated_header(ua_server):
    async def _run():
        async with default_pooled_async_client(0, user_agent("async/1")) as client:
            await client.get(ua_server.url)

    asyncio.run(_run())
    assert ua_server.user_agents == ["async/1"]


@pytest.mark.parametrize("make_client", [default_client, default_pooled_client])
def test_proxied_requests_carry_decorated_header(ua_server, monkeypatch, make_client):
    monkeypatch.setenv("HTTP_PROXY", f"http://127.0.0.1:{ua_server.server_address[1]}")
    client = attach_user_agent(make_client(), "proxied/1")
    with client:
        assert any(isinstance(t, UserAgentTransport) for t in client._mounts.values())
        assert client.get("http://upstream.test/").status_code == 200
    assert ua_server.user_agents == ["proxied/1"]
    assert ua_server.paths == ["http://upstream.test/"]
