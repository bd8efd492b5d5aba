# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Transport factories.

Each call returns a fresh ``TransportConfig``; nothing here is cached or shared
between callers. Use the transient policy for one-off clients and the pooled
policy only for clients that are kept and reused against the same host(s):
pooled transports hold idle sockets open and leak file descriptors when they
are created per request.
"""

from __future__ import annotations

import ipaddress
import logging
from dataclasses import replace
from urllib.request import getproxies

import httpx

from ..config import NO_IDLE_POOLING, HttpSettings, available_parallelism
from .models import TransportConfig

logger = logging.getLogger(__name__)


def default_pooled_transport(min_idle_per_host: int = 0, settings: HttpSettings | None = None) -> TransportConfig:
    """
    Pooled policy: keep-alives on, idle connections retained per host.

    The per-host idle cap is ``available_parallelism() + 1``, raised to
    ``min_idle_per_host`` when that is larger. Negative minimums count as 0.
    """
    settings = settings or HttpSettings()
    per_host = max(available_parallelism() + 1, max(0, min_idle_per_host))
    config = TransportConfig(
        connect_timeout=settings.connect_timeout,
        keepalive_interval=settings.keepalive_interval,
        tls_handshake_timeout=settings.tls_handshake_timeout,
        max_idle_conns=settings.max_idle_conns,
        max_idle_conns_per_host=per_host,
        idle_conn_timeout=settings.idle_conn_timeout,
        expect_continue_timeout=settings.expect_continue_timeout,
        keepalives_enabled=True,
        verify_tls=True,
        proxy_from_environment=True,
        http2=settings.http2,
    )
    logger.debug("Built pooled transport config: %s", config)
    return config


def default_transport(settings: HttpSettings | None = None) -> TransportConfig:
    """Transient policy: the pooled defaults with keep-alives and idle pooling disabled."""
    return replace(
        default_pooled_transport(0, settings),
        keepalives_enabled=False,
        max_idle_conns_per_host=NO_IDLE_POOLING,
    )


def insecure_transport(settings: HttpSettings | None = None) -> TransportConfig:
    """
    Transient policy with TLS certificate verification disabled.

    Only for internal endpoints whose identity is trusted by other means. No check
    prevents pointing it at a public host.
    """
    config = replace(default_transport(settings), verify_tls=False)
    logger.debug("Built transport config with TLS verification disabled")
    return config


def environment_proxy_mounts() -> dict[str, str | None]:
    """
    Resolve proxy environment variables into httpx mount patterns.

    Patterns map to a proxy URL, or to ``None`` for ``NO_PROXY`` hosts, which then
    fall through to the client's direct transport. A ``NO_PROXY`` of ``*``
    disables proxying entirely. Resolution mirrors httpx's own ``trust_env``
    handling, which httpx skips whenever a client is given an explicit transport.
    """
    proxy_info = getproxies()
    mounts: dict[str, str | None] = {}

    for scheme in ("http", "https", "all"):
        url = proxy_info.get(scheme)
        if url:
            mounts[f"{scheme}://"] = url if "://" in url else f"http://{url}"

    for hostname in (host.strip() for host in proxy_info.get("no", "").split(",")):
        if hostname == "*":
            return {}
        if not hostname:
            continue
        if "://" in hostname:
            mounts[hostname] = None
        elif _ip_version(hostname) == 4:
            mounts[f"all://{hostname}"] = None
        elif _ip_version(hostname) == 6:
            mounts[f"all://[{hostname}]"] = None
        elif hostname.lower() == "localhost":
            mounts["all://localhost"] = None
        else:
            mounts[f"all://*{hostname}"] = None

    return mounts


def _ip_version(hostname: str) -> int | None:
    try:
        return ipaddress.ip_address(hostname.split("/")[0]).version
    except ValueError:
        return None


def build_transport(config: TransportConfig, proxy: str | None = None) -> httpx.HTTPTransport:
    return httpx.HTTPTransport(
        proxy=proxy,
        verify=config.verify_tls,
        http2=config.http2,
        limits=config.limits(),
        socket_options=config.socket_options(),
    )


def build_async_transport(config: TransportConfig, proxy: str | None = None) -> httpx.AsyncHTTPTransport:
    return httpx.AsyncHTTPTransport(
        proxy=proxy,
        verify=config.verify_tls,
        http2=config.http2,
        limits=config.limits(),
        socket_options=config.socket_options(),
    )


__all__ = [
    "build_async_transport",
    "build_transport",
    "default_pooled_transport",
    "default_transport",
    "environment_proxy_mounts",
    "insecure_transport",
]
