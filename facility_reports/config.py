"""Facility reports settings."""
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    service_name: str = "facility-reports"
    debug: bool = False
    log_json: bool = True

    # Durable key-value store (one record holds the whole collection)
    database_url: str = "sqlite:///./facility_reports.db"
    storage_key: str = "hufs_reports"

    # Identity convention: "admin", "admin01", ... are administrators
    admin_token: str = "admin"
    min_reporter_id_length: int = 4

    # Local time for "same calendar day" and whole-day arithmetic
    campus_timezone: str = "Asia/Seoul"

    duplicate_window_seconds: int = 3600  # 1 hour

    # Statistics
    top_locations_limit: int = 10  # admin view; student view uses 5
    busy_building_threshold: int = 4

    cors_origins: List[str] = [
        *[f"http://localhost:{port}" for port in range(3000, 3007)],
        *[f"http://127.0.0.1:{port}" for port in range(3000, 3007)],
    ]

    # Dev server port probing
    port_range_start: int = 8000
    port_range_end: int = 8006

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
