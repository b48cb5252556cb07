"""conncheck — connectivity diagnostics server.

Exposes:
  GET  /_/health          — liveness check (200, empty body)
  GET  /_/info            — environment snapshot + every configured check
  POST /api/http-client   — send one ad hoc outbound HTTP request

Start with::

    python -m conncheck
    # or
    uvicorn conncheck.server:app --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Response
from fastapi.responses import JSONResponse

from conncheck import __version__
from conncheck.proxy import HttpClientRequest, HttpClientResponse, execute_http_request
from conncheck.report import build_report
from conncheck.settings import ServerSettings

logger = logging.getLogger(__name__)

# ──────────────────────────────────────────────────────────────────
# FastAPI app
# ──────────────────────────────────────────────────────────────────

app = FastAPI(title="conncheck", version=__version__)


# ──────────────────────────────────────────────────────────────────
# Endpoints
# ──────────────────────────────────────────────────────────────────

@app.get("/_/health")
async def health():
    return Response(status_code=200)


@app.get("/_/info")
async def info():
    # Snapshot once per request; parsing never touches os.environ itself.
    namespace = dict(os.environ)
    report = await build_report(namespace)
    return JSONResponse(report.to_dict())


@app.post("/api/http-client", response_model=HttpClientResponse, response_model_exclude_none=True)
async def http_client(request: HttpClientRequest):
    return await execute_http_request(request)


# ──────────────────────────────────────────────────────────────────
# Entry point
# ──────────────────────────────────────────────────────────────────

def serve(settings: ServerSettings) -> None:
    import uvicorn
    logging.basicConfig(level=settings.log_level)
    logger.info("Starting conncheck server on %s:%d", settings.host, settings.port)
    logger.info("Health endpoint: http://%s:%d/_/health", settings.host, settings.port)
    logger.info("Info endpoint: http://%s:%d/_/info", settings.host, settings.port)
    uvicorn.run("conncheck.server:app", host=settings.host, port=settings.port, reload=False)


def main():
    serve(ServerSettings.from_env())


if __name__ == "__main__":
    main()
