# inventory_service/main.py
from __future__ import annotations

import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import ORJSONResponse

from inventory_service.config import settings
from inventory_service.logging_conf import setup_logging
from inventory_service.middleware import (
    add_cors,
    add_correlation_middleware,
    add_error_handlers,
    install_request_logging,
)
from inventory_service.db.mongo import close_client, init_indexes
from inventory_service.routers import category_router, health_router, product_router
from inventory_service.seeds import run_all_seeds

logger = logging.getLogger("inventory")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Logging first
    setup_logging()
    logger.info("Starting %s on %s:%s", settings.app_name, settings.host, settings.port)

    # Mongo indexes (the unique name index backs product name uniqueness)
    try:
        await init_indexes()
        logger.info("Mongo indexes initialized")
    except Exception as e:
        logger.exception("Failed to initialize Mongo indexes: %s", e)
        # Let the service start; requests will surface connectivity errors.

    try:
        await run_all_seeds()
        logger.info("Seed routines completed (or skipped)")
    except Exception as e:
        logger.warning("Seeding failed: %s", e)

    yield

    close_client()
    logger.info("Shutdown complete")


app = FastAPI(title=settings.app_name, lifespan=lifespan, default_response_class=ORJSONResponse)

# Middlewares (last added runs first)
install_request_logging(app)
add_correlation_middleware(app)
add_cors(app)
add_error_handlers(app)

# Routers
app.include_router(health_router)
app.include_router(category_router)
app.include_router(product_router)


@app.get("/")
async def root():
    return {
        "service": settings.service_name,
        "name": settings.app_name,
        "status": "ok",
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


def main() -> None:
    import uvicorn

    reload_flag = os.getenv("RELOAD", "0") in ("1", "true", "True")
    uvicorn.run(
        "inventory_service.main:app",
        host=settings.host,
        port=settings.port,
        reload=reload_flag,
        log_level="info",
    )


if __name__ == "__main__":
    main()
