"""Application configuration from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    app_name: str = "CourtHub"
    debug: bool = True
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 5000
    client_origin: str = "http://localhost:5173"

    # Database
    database_url: str = "postgresql+asyncpg://courthub:courthub@db:5432/courthub"
    database_echo: bool = False
    database_create_tables: bool = True

    # Auth
    secret_key: str = "dev-secret-change-in-production"
    jwt_algorithm: str = "HS256"
    token_expire_days: int = 7
    token_cookie_name: str = "token"
    cookie_secure: bool = False

    # Stripe (test mode)
    stripe_secret_key: str = ""
    payment_currency: str = "usd"

    # Email / SMTP
    notifications_enabled: bool = False
    smtp_host: str = "localhost"
    smtp_port: int = 1025
    smtp_from: str = "noreply@courthub.io"

    model_config = {"env_prefix": "CH_", "env_file": ".env", "extra": "ignore"}


settings = Settings()
