from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass
class Settings:
    api_base_url: str
    http_client_timeout_seconds: float
    page_size: int
    notice_seconds: float

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            api_base_url=os.getenv("INVENTORY_API_URL", "http://localhost:5000/api"),
            http_client_timeout_seconds=float(os.getenv("HTTP_CLIENT_TIMEOUT_SECONDS", "30")),
            page_size=int(os.getenv("INVENTORY_PAGE_SIZE", "10")),
            notice_seconds=float(os.getenv("INVENTORY_NOTICE_SECONDS", "3")),
        )


settings = Settings.from_env()
