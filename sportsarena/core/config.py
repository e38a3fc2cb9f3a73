"""Application configuration from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    app_name: str = "Sports Arena"
    debug: bool = True
    secret_key: str = "dev-secret-change-in-production"
    api_prefix: str = "/api/v1"
    log_level: str = "INFO"

    # Database
    database_url: str = "postgresql+asyncpg://arena:arena@db:5432/arena"
    database_echo: bool = False

    # Auth
    access_token_expire_minutes: int = 60
    refresh_token_expire_days: int = 30
    jwt_algorithm: str = "HS256"

    # Booking rules
    timezone: str = "Europe/London"
    booking_window_hours: int = 24

    model_config = {"env_prefix": "SA_", "env_file": ".env", "extra": "ignore"}


settings = Settings()
