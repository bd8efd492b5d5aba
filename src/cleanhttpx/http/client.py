# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Client handles and factories built on the transport policies."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import httpx

from .models import TransportConfig
from .transport import (
    build_async_transport,
    build_transport,
    default_pooled_transport,
    default_transport,
    environment_proxy_mounts,
    insecure_transport,
)


def _client_kwargs(config: TransportConfig, build: Callable[..., Any], kwargs: dict[str, Any]) -> dict[str, Any]:
    if "transport" not in kwargs:
        if config.proxy_from_environment and "mounts" not in kwargs:
            # Snapshot of *_PROXY/NO_PROXY at construction; proxied transports share the config.
            kwargs["mounts"] = {
                pattern: (build(config, proxy=url) if url else None)
                for pattern, url in environment_proxy_mounts().items()
            }
        kwargs["transport"] = build(config)
    kwargs.setdefault("timeout", config.timeout())
    kwargs.setdefault("trust_env", config.proxy_from_environment)
    if not config.keepalives_enabled:
        headers = httpx.Headers(kwargs.pop("headers", None))
        headers.setdefault("Connection", "close")
        kwargs["headers"] = headers
    return kwargs


class Client(httpx.Client):
    """Synchronous httpx client owning one transport built from ``config``."""

    def __init__(self, config: TransportConfig | None = None, **kwargs: Any):
        self.config = config or default_transport()
        super().__init__(**_client_kwargs(self.config, build_transport, kwargs))

    @property
    def transport(self) -> httpx.BaseTransport:
        return self._transport

    def wrap_transports(self, wrapper: Callable[[httpx.BaseTransport], httpx.BaseTransport]) -> None:
        """Replace the default transport and every mounted one with ``wrapper(transport)``."""
        # Relies on httpx.Client keeping _transport and _mounts (httpx 0.26 through 0.28).
        self._transport = wrapper(self._transport)
        self._mounts = {
            pattern: (wrapper(mounted) if mounted is not None else None) for pattern, mounted in self._mounts.items()
        }


class AsyncClient(httpx.AsyncClient):
    """Asynchronous counterpart of ``Client``."""

    def __init__(self, config: TransportConfig | None = None, **kwargs: Any):
        self.config = config or default_transport()
        super().__init__(**_client_kwargs(self.config, build_async_transport, kwargs))

    @property
    def transport(self) -> httpx.AsyncBaseTransport:
        return self._transport

    def wrap_transports(self, wrapper: Callable[[httpx.AsyncBaseTransport], httpx.AsyncBaseTransport]) -> None:
        # Same private attributes as Client.wrap_transports.
        self._transport = wrapper(self._transport)
        self._mounts = {
            pattern: (wrapper(mounted) if mounted is not None else None) for pattern, mounted in self._mounts.items()
        }


ClientT = TypeVar("ClientT", Client, AsyncClient)
ClientOption = Callable[[Any], None]


def _apply_options(client: ClientT, options: tuple[ClientOption, ...]) -> ClientT:
    for option in options:
        option(client)
    return client


def default_client(*options: ClientOption) -> Client:
    """
    Client with a private transient transport: no keep-alives, no idle pooling.

    Safe to build per use and discard.
    """
    return _apply_options(Client(default_transport()), options)


def default_pooled_client(min_idle_per_host: int = 0, *options: ClientOption) -> Client:
    """
    Client with a pooled transport.

    Keep the returned client and reuse it for repeated requests to the same host(s);
    building one per request leaks idle sockets until they expire.
    """
    return _apply_options(Client(default_pooled_transport(min_idle_per_host)), options)


def insecure_client(*options: ClientOption) -> Client:
    """Transient client that skips TLS certificate verification. Internal endpoints only."""
    return _apply_options(Client(insecure_transport()), options)


def default_async_client(*options: ClientOption) -> AsyncClient:
    return _apply_options(AsyncClient(default_transport()), options)


def default_pooled_async_client(min_idle_per_host: int = 0, *options: ClientOption) -> AsyncClient:
    return _apply_options(AsyncClient(default_pooled_transport(min_idle_per_host)), options)


def insecure_async_client(*options: ClientOption) -> AsyncClient:
    return _apply_options(AsyncClient(insecure_transport()), options)


__all__ = [
    "AsyncClient",
    "Client",
    "ClientOption",
    "default_async_client",
    "default_client",
    "default_pooled_async_client",
    "default_pooled_client",
    "insecure_async_client",
    "insecure_client",
]
