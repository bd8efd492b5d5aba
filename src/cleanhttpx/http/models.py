# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport configuration model consumed by the httpx transport builders."""

from __future__ import annotations

import socket
from dataclasses import dataclass

import httpx

from ..config import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_EXPECT_CONTINUE_TIMEOUT,
    DEFAULT_IDLE_CONN_TIMEOUT,
    DEFAULT_KEEPALIVE_INTERVAL,
    DEFAULT_MAX_IDLE_CONNS,
    DEFAULT_TLS_HANDSHAKE_TIMEOUT,
    NO_IDLE_POOLING,
)

SocketOption = tuple[int, int, int]


@dataclass(frozen=True)
class TransportConfig:
    """
    Connection policy for a single transport.

    All durations are seconds. ``max_idle_conns_per_host`` is ``NO_IDLE_POOLING`` (-1)
    whenever keep-alives are disabled. httpx pools connections per origin but only
    caps idle connections globally, so the per-host value is kept for callers and
    for sizing decisions while ``max_idle_conns`` drives ``httpx.Limits``.
    """

    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    keepalive_interval: float = DEFAULT_KEEPALIVE_INTERVAL
    tls_handshake_timeout: float = DEFAULT_TLS_HANDSHAKE_TIMEOUT
    max_idle_conns: int | None = DEFAULT_MAX_IDLE_CONNS
    max_idle_conns_per_host: int = NO_IDLE_POOLING
    idle_conn_timeout: float | None = DEFAULT_IDLE_CONN_TIMEOUT
    expect_continue_timeout: float = DEFAULT_EXPECT_CONTINUE_TIMEOUT
    keepalives_enabled: bool = False
    verify_tls: bool = True
    proxy_from_environment: bool = True
    http2: bool = False

    def limits(self) -> httpx.Limits:
        """Pool limits for httpx; no idle connection survives when keep-alives are off."""
        return httpx.Limits(
            max_connections=None,
            max_keepalive_connections=self.max_idle_conns if self.keepalives_enabled else 0,
            keepalive_expiry=self.idle_conn_timeout,
        )

    def timeout(self) -> httpx.Timeout:
        # httpx's connect phase covers both the TCP dial and the TLS handshake.
        return httpx.Timeout(None, connect=self.connect_timeout + self.tls_handshake_timeout)

    def socket_options(self) -> list[SocketOption]:
        """TCP keep-alive socket options for the platform, empty when the interval is not positive."""
        if self.keepalive_interval <= 0:
            return []
        interval = max(1, int(self.keepalive_interval))
        options: list[SocketOption] = [(socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1)]
        # Linux/Windows name the idle option TCP_KEEPIDLE, macOS TCP_KEEPALIVE.
        idle_option = getattr(socket, "TCP_KEEPIDLE", None)
        if idle_option is None:
            idle_option = getattr(socket, "TCP_KEEPALIVE", None)
        if idle_option is not None:
            options.append((socket.IPPROTO_TCP, idle_option, interval))
        if hasattr(socket, "TCP_KEEPINTVL"):
            options.append((socket.IPPROTO_TCP, socket.TCP_KEEPINTVL, interval))
        return options
