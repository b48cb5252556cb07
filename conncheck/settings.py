"""Process settings for the conncheck server."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8080


@dataclass
class ServerSettings:
    """Server settings, loaded from the environment.

    ``CONNCHECK_HOST``, ``PORT`` and ``LOG_LEVEL`` are read; everything else
    in the environment belongs to the checks.
    """

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServerSettings:
        if environ is None:
            environ = os.environ

        port = DEFAULT_PORT
        raw_port = environ.get("PORT")
        if raw_port:
            try:
                port = int(raw_port)
            except ValueError:
                logger.warning("Invalid PORT %r, using %d", raw_port, DEFAULT_PORT)
            else:
                if not 0 < port <= 65535:
                    logger.warning("PORT %d out of range, using %d", port, DEFAULT_PORT)
                    port = DEFAULT_PORT

        return cls(
            host=environ.get("CONNCHECK_HOST", cls.host),
            port=port,
            log_level=environ.get("LOG_LEVEL", cls.log_level).upper(),
        )
