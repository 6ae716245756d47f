# inventory_service/middleware/correlation.py
from __future__ import annotations

import logging
import re
import uuid
from contextvars import ContextVar
from typing import Callable

from fastapi import FastAPI, Request, Response

HEADER_NAME = "X-Correlation-ID"

# Client-supplied ids are echoed into headers and logs, so only short tokens are trusted
_ACCEPTED = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

_current: ContextVar[str] = ContextVar("correlation_id", default="-")


def get_correlation_id() -> str:
    """Correlation id of the request being served, "-" outside a request."""
    return _current.get()


class CorrelationIdFilter(logging.Filter):
    """Stamps every record with `correlation_id` for the log format."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = _current.get()
        return True


def add_correlation_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def correlation_middleware(request: Request, call_next: Callable):
        incoming = request.headers.get(HEADER_NAME, "")
        corr = incoming if _ACCEPTED.match(incoming) else uuid.uuid4().hex
        request.state.correlation_id = corr
        token = _current.set(corr)
        try:
            response: Response = await call_next(request)
        finally:
            _current.reset(token)
        response.headers[HEADER_NAME] = corr
        return response
