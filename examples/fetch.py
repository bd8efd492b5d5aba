# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Fetch URLs with a cleanhttpx client.

    python examples/fetch.py https://example.com --pooled --user-agent "demo/1.0" --log-level debug

With ``--pooled`` every URL goes through one shared client, otherwise a transient
client is built per URL. Proxy variables (HTTP_PROXY, HTTPS_PROXY, NO_PROXY) are
read when each client is built.
"""

import argparse
import logging
import sys

import httpx

from cleanhttpx import default_client, default_pooled_client, setup_logging, user_agent
from cleanhttpx.errors import categorize_exception, error_category_to_reason

logger = logging.getLogger("cleanhttpx.examples.fetch")


def _fetch(client: httpx.Client, url: str) -> bool:
    try:
        response = client.get(url)
    except httpx.HTTPError as exc:
        reason = error_category_to_reason(categorize_exception(exc))
        print(f"{url}: {reason} ({exc})", file=sys.stderr)
        return False
    print(f"{url}: {response.status_code} {len(response.content)} bytes")
    return True


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("urls", nargs="+")
    parser.add_argument("--pooled", action="store_true", help="reuse one pooled client for every URL")
    parser.add_argument("--min-idle-per-host", type=int, default=0)
    parser.add_argument("--user-agent", default=None, help="force this User-Agent; empty string sends none")
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    options = [user_agent(args.user_agent)] if args.user_agent is not None else []

    ok = True
    if args.pooled:
        with default_pooled_client(args.min_idle_per_host, *options) as client:
            logger.info("Pooled client: %d idle connections per host", client.config.max_idle_conns_per_host)
            for url in args.urls:
                ok = _fetch(client, url) and ok
    else:
        for url in args.urls:
            with default_client(*options) as client:
                ok = _fetch(client, url) and ok
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
