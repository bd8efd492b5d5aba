# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for cleanhttpx."""

import os
from dataclasses import dataclass

DEFAULT_CONNECT_TIMEOUT = 30.0
DEFAULT_KEEPALIVE_INTERVAL = 30.0
DEFAULT_TLS_HANDSHAKE_TIMEOUT = 10.0
DEFAULT_MAX_IDLE_CONNS = 100
DEFAULT_IDLE_CONN_TIMEOUT = 90.0
DEFAULT_EXPECT_CONTINUE_TIMEOUT = 1.0

# Sentinel for max_idle_conns_per_host: no idle connections are retained.
NO_IDLE_POOLING = -1


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        parsed = float(value) if value is not None else default
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        parsed = int(value) if value is not None else default
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def available_parallelism() -> int:
    """Return the number of CPUs this process may run on (at least 1)."""
    process_cpu_count = getattr(os, "process_cpu_count", None)
    if process_cpu_count is not None:
        count = process_cpu_count()
    elif hasattr(os, "sched_getaffinity"):
        count = len(os.sched_getaffinity(0))
    else:
        count = os.cpu_count()
    return max(1, count or 1)


@dataclass
class HttpSettings:
    """Transport defaults shared by every factory policy."""

    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    keepalive_interval: float = DEFAULT_KEEPALIVE_INTERVAL
    tls_handshake_timeout: float = DEFAULT_TLS_HANDSHAKE_TIMEOUT
    max_idle_conns: int = DEFAULT_MAX_IDLE_CONNS
    idle_conn_timeout: float = DEFAULT_IDLE_CONN_TIMEOUT
    expect_continue_timeout: float = DEFAULT_EXPECT_CONTINUE_TIMEOUT
    http2: bool = False

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            connect_timeout=_float_env("CLEANHTTPX_CONNECT_TIMEOUT", cls.connect_timeout),
            keepalive_interval=_float_env("CLEANHTTPX_KEEPALIVE_INTERVAL", cls.keepalive_interval),
            tls_handshake_timeout=_float_env("CLEANHTTPX_TLS_HANDSHAKE_TIMEOUT", cls.tls_handshake_timeout),
            max_idle_conns=_int_env("CLEANHTTPX_MAX_IDLE_CONNS", cls.max_idle_conns),
            idle_conn_timeout=_float_env("CLEANHTTPX_IDLE_CONN_TIMEOUT", cls.idle_conn_timeout),
            http2=_bool_env("CLEANHTTPX_HTTP2", cls.http2),
        )


def load_http_settings() -> HttpSettings:
    """Load transport settings from environment with the built-in defaults as fallback."""
    return HttpSettings.from_env()
