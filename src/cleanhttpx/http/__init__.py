# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport/client factories and the User-Agent decorator."""

from .client import (
    AsyncClient,
    Client,
    ClientOption,
    default_async_client,
    default_client,
    default_pooled_async_client,
    default_pooled_client,
    insecure_async_client,
    insecure_client,
)
from .models import TransportConfig
from .transport import (
    build_async_transport,
    build_transport,
    default_pooled_transport,
    default_transport,
    environment_proxy_mounts,
    insecure_transport,
)
from .useragent import (
    USER_AGENT_HEADER,
    AsyncUserAgentTransport,
    UserAgentTransport,
    attach_user_agent,
    user_agent,
)

__all__ = [
    "AsyncClient",
    "AsyncUserAgentTransport",
    "Client",
    "ClientOption",
    "TransportConfig",
    "USER_AGENT_HEADER",
    "UserAgentTransport",
    "attach_user_agent",
    "build_async_transport",
    "build_transport",
    "default_async_client",
    "default_client",
    "default_pooled_async_client",
    "default_pooled_client",
    "default_pooled_transport",
    "default_transport",
    "environment_proxy_mounts",
    "insecure_async_client",
    "insecure_client",
    "insecure_transport",
    "user_agent",
]
