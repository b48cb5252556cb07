"""conncheck server entry point.

Usage::

    python -m conncheck [--host HOST] [--port PORT] [--log-level LEVEL]
"""

from __future__ import annotations

import argparse

from conncheck.server import serve
from conncheck.settings import ServerSettings


def main() -> None:
    settings = ServerSettings.from_env()
    parser = argparse.ArgumentParser(
        prog="python -m conncheck",
        description="Connectivity diagnostics for environment-configured backends",
    )
    parser.add_argument(
        "--host",
        default=settings.host,
        help="Bind address (default: CONNCHECK_HOST env var or 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.port,
        help="Bind port (default: PORT env var or 8080)",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Logging level (default: LOG_LEVEL env var or INFO)",
    )
    args = parser.parse_args()

    serve(ServerSettings(host=args.host, port=args.port, log_level=args.log_level.upper()))


if __name__ == "__main__":
    main()
