from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    api_base_url: str = os.getenv("RACE_API_BASE_URL", "http://localhost:8000")
    request_timeout_s: float = float(os.getenv("RACE_API_TIMEOUT", "30"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def get_settings() -> Settings:
    return Settings()
