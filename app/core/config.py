from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_RESERVED_ROUTES = [
    "about",
    "admin",
    "api",
    "auth",
    "contributions",
    "explore",
    "flexible_projects",
    "login",
    "logout",
    "posts",
    "projects",
    "rewards",
    "search",
    "sessions",
    "sign_up",
    "start",
    "users",
]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    # ─────────── APP ───────────
    app_name: str = "Crowdfunding Project Policy Engine"
    environment: str = "dev"
    log_level: str = "INFO"

    # ─────────── API ───────────
    api_prefix: str = "/api/v1"
    request_id_header: str = "X-Request-Id"

    # ─────────── ROUTING ───────────
    # top-level route segments a project permalink must not collide with
    reserved_routes: List[str] = DEFAULT_RESERVED_ROUTES

    # ─────────── PROJECT RULES ───────────
    max_public_tags: int = 5
    solidarity_integration_name: str = "SOLIDARITY_SERVICE_FEE"
    min_service_fee: float = 0.04
    max_service_fee: float = 0.20


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
