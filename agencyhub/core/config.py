from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Core
    project_name: str = "AgencyHub Metrics API"
    api_v1_prefix: str = "/api/v1"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # ============================================
    # UPSTREAM AGENCYHUB API
    # ============================================
    upstream_base_url: str = "http://localhost:5000"
    upstream_timeout_seconds: float = 10.0
    upstream_session_cookie: str = ""  # Value of connect.sid
    upstream_api_token: str = ""

    # ============================================
    # RESPONSE CACHE
    # ============================================
    cache_ttl_seconds: float = 30.0

    # ============================================
    # PRESENTATION
    # ============================================
    month_label_locale: str = "pt-BR"
    urgent_task_limit: int = 3

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    return Settings()
