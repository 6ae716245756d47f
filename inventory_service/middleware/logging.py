# inventory_service/middleware/logging.py
from __future__ import annotations
import time
import logging
from fastapi import FastAPI, Request

logger = logging.getLogger("inventory.requests")

# health checks hit these every few seconds
QUIET_PATHS = frozenset({"/health"})


def install_request_logging(app: FastAPI) -> None:
    @app.middleware("http")
    async def _log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration = (time.perf_counter() - start) * 1000.0

        path = request.url.path
        if response.status_code >= 500:
            level = logging.ERROR
        elif path in QUIET_PATHS:
            level = logging.DEBUG
        else:
            level = logging.INFO
        query = f"?{request.url.query}" if request.url.query else ""
        logger.log(level, "%s %s%s -> %s (%.2f ms)", request.method, path, query, response.status_code, duration)
        return response
