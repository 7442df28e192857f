"""
Settings for the back office, read from the environment and `.env.local`.

Built once by create_app() and kept on app.state; nothing imports a
module-level instance.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env.local", extra="ignore")

    # ── Application ──────────────────────────────────────────────
    app_name: str = "Spherical GIS Back Office"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"
    api_version: str = "v1"
    log_level: str = "INFO"

    # ── Database ─────────────────────────────────────────────────
    mongodb_uri: str = "mongodb://localhost:27017"
    database_name: str = "spherical_gis"
    create_indexes: bool = True

    # ── JWT / Security ───────────────────────────────────────────
    secret_key: str = "change-me-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 30  # 30 days

    # ── Access control ───────────────────────────────────────────
    # JSON file with {"permissions": {PERM: [ROLE, ...]}, "pages": {...}};
    # the built-in table is used when unset.
    access_policy_file: Optional[str] = None
    default_signup_role: str = "REPORT_VIEWER"

    # ── Catalog cache ────────────────────────────────────────────
    catalog_cache_warm: bool = True

    # ── CORS ─────────────────────────────────────────────────────
    cors_allowed_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    cors_allow_credentials: bool = True
    cors_allowed_methods: list[str] = ["*"]
    cors_allowed_headers: list[str] = ["*"]
