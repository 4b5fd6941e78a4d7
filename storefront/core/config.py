# storefront/core/config.py
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    All values have development defaults; override them in `.env`:
      - DATABASE_URL (SQLite file by default, Postgres in deployments)
      - CART_SESSION_COOKIE / CART_SESSION_MAX_AGE
      - JWT_SECRET (only needed if shoppers send bearer tokens)
    """

    PROJECT_NAME: str = "Storefront Cart API"
    API_PREFIX: str = "/api"

    # Database
    DATABASE_URL: str = "sqlite:///./storefront.db"
    DATABASE_SSL_REQUIRED: bool = True
    DATABASE_ECHO: bool = False

    # Anonymous cart correlation (not an auth credential)
    CART_SESSION_COOKIE: str = "cart_session_id"
    CART_SESSION_MAX_AGE: int = 60 * 60 * 24 * 30

    # Checkout defaults
    DEFAULT_BRANCH_ID: int = 1
    CART_ORDER_NAME: str = "Order from Cart"

    # Optional bearer identity for carts
    JWT_SECRET: str | None = None
    JWT_ALG: str = "HS256"

    CORS_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173"

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
