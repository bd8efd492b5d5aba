# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
cleanhttpx package entrypoint.

Factories for httpx clients and transports with explicit connection policies
(transient, pooled, TLS-verification-off) instead of shared process-wide
defaults, plus a transport decorator that forces the outgoing User-Agent.
"""

from .config import HttpSettings, available_parallelism, load_http_settings
from .errors import ErrorCategory, categorize_exception
from .http import (
    AsyncClient,
    Client,
    TransportConfig,
    attach_user_agent,
    default_async_client,
    default_client,
    default_pooled_async_client,
    default_pooled_client,
    default_pooled_transport,
    default_transport,
    insecure_async_client,
    insecure_client,
    insecure_transport,
    user_agent,
)
from .log import setup_logging
from .version import __version__

__all__ = [
    "AsyncClient",
    "Client",
    "ErrorCategory",
    "HttpSettings",
    "TransportConfig",
    "attach_user_agent",
    "available_parallelism",
    "categorize_exception",
    "default_async_client",
    "default_client",
    "default_pooled_async_client",
    "default_pooled_client",
    "default_pooled_transport",
    "default_transport",
    "insecure_async_client",
    "insecure_client",
    "insecure_transport",
    "load_http_settings",
    "setup_logging",
    "user_agent",
    "__version__",
]
