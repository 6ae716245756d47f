# inventory_service/middleware/__init__.py
from .cors import add_cors
from .correlation import CorrelationIdFilter, add_correlation_middleware, get_correlation_id
from .logging import install_request_logging
from .error_handlers import add_error_handlers

__all__ = [
    "add_cors",
    "CorrelationIdFilter",
    "add_correlation_middleware",
    "get_correlation_id",
    "install_request_logging",
    "add_error_handlers",
]
