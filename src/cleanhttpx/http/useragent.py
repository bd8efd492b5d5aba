# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
User-Agent injection as a transport decorator.

``attach_user_agent`` wraps a client's transports so every outgoing request
carries exactly the configured ``User-Agent``. An empty value strips the header
instead of letting httpx's ``python-httpx/<version>`` default through.

Decorators stack. The most recently attached one is the outermost and marks the
request once it has set the header, so inner decorators leave it alone and the
last attached value is the one sent.
"""

from __future__ import annotations

import httpx

from .client import AsyncClient, Client, ClientOption

USER_AGENT_HEADER = "User-Agent"
_APPLIED_EXTENSION = "cleanhttpx.user_agent"


def _set_user_agent(request: httpx.Request, value: str) -> None:
    if value:
        request.headers[USER_AGENT_HEADER] = value
    else:
        request.headers.pop(USER_AGENT_HEADER, None)


class UserAgentTransport(httpx.BaseTransport):
    """Sets ``User-Agent`` on each request, then delegates to ``inner``."""

    def __init__(self, inner: httpx.BaseTransport, user_agent: str):
        self.inner = inner
        self.user_agent = user_agent

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        if request.extensions.get(_APPLIED_EXTENSION):
            return self.inner.handle_request(request)
        _set_user_agent(request, self.user_agent)
        request.extensions[_APPLIED_EXTENSION] = True
        try:
            return self.inner.handle_request(request)
        finally:
            request.extensions.pop(_APPLIED_EXTENSION, None)

    def __enter__(self) -> UserAgentTransport:
        self.inner.__enter__()
        return self

    def close(self) -> None:
        self.inner.close()


class AsyncUserAgentTransport(httpx.AsyncBaseTransport):
    """Async variant of ``UserAgentTransport``."""

    def __init__(self, inner: httpx.AsyncBaseTransport, user_agent: str):
        self.inner = inner
        self.user_agent = user_agent

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        if request.extensions.get(_APPLIED_EXTENSION):
            return await self.inner.handle_async_request(request)
        _set_user_agent(request, self.user_agent)
        request.extensions[_APPLIED_EXTENSION] = True
        try:
            return await self.inner.handle_async_request(request)
        finally:
            request.extensions.pop(_APPLIED_EXTENSION, None)

    async def __aenter__(self) -> AsyncUserAgentTransport:
        await self.inner.__aenter__()
        return self

    async def aclose(self) -> None:
        await self.inner.aclose()


def attach_user_agent(client: Client | AsyncClient, value: str) -> Client | AsyncClient:
    """Install a User-Agent decorator on ``client`` in place and return it."""
    if isinstance(client, AsyncClient):
        client.wrap_transports(lambda inner: AsyncUserAgentTransport(inner, value))
    else:
        client.wrap_transports(lambda inner: UserAgentTransport(inner, value))
    return client


def user_agent(value: str) -> ClientOption:
    """Client factory option form of ``attach_user_agent``."""

    def _option(client: Client | AsyncClient) -> None:
        attach_user_agent(client, value)

    return _option


__all__ = [
    "AsyncUserAgentTransport",
    "USER_AGENT_HEADER",
    "UserAgentTransport",
    "attach_user_agent",
    "user_agent",
]
