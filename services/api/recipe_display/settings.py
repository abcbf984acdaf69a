from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = "sqlite:///./recipe_display.db"

    # Logging
    log_level: str = "INFO"

    # Display defaults (used when no user preference can be loaded)
    default_measurement_unit: Literal["metric", "imperial"] = "metric"
    fallback_servings: int = 2

    # Rate limiting (per-IP, slowapi syntax)
    rate_limit: str = "100/minute"
    rate_limit_enabled: bool = True

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost",
        "http://127.0.0.1",
    ]


settings = Settings()
