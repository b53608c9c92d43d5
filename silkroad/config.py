"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "silkroad-compliance"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    log_format: str = "json"

    host: str = "0.0.0.0"
    port: int = 8000

    # Sanctions screening service. No key means demo mode (fail-open).
    range_api_key: str | None = None
    range_api_url: str = "https://api.range.org/v1/risk/score"

    model_config = {"env_prefix": "", "env_file": ".env", "extra": "ignore"}


settings = Settings()
