from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = "sqlite:///./cashflow.db"
    app_env: str = "dev"
    app_cors_origins: str = "*"
    log_level: str = "INFO"
    # Upstream summary services (accounts payable / accounts receivable)
    payable_service_url: str = "http://accounts-payable:8080"
    receivable_service_url: str = "http://accounts-receivable:8080"
    upstream_timeout_seconds: float = 10.0
    upstream_api_token: str | None = None
    forecast_default_days: int = 30


settings = Settings()
