# inventory_service/config.py
from __future__ import annotations
import os
from typing import List

from pydantic import BaseModel


class Settings(BaseModel):
    # App
    app_name: str = "Inventory Service"
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5000"))

    # Mongo
    mongodb_uri: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    mongo_db: str = os.getenv("MONGO_DB", "inventory")

    # Seeding at startup wipes the categories collection, so it is opt-in
    seed_categories: bool = os.getenv("SEED_CATEGORIES", "0") in ("1", "true", "True")

    # Pagination
    default_page_size: int = 10
    max_page_size: int = 100

    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Comma-separated browser origins; empty means any origin
    cors_origins: List[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]

    # Service identity (optional, useful in logs)
    service_name: str = os.getenv("SERVICE_NAME", "inventory-service")


settings = Settings()
