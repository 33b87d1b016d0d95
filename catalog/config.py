import logging

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./catalog.db"
    APP_ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Startup
    CREATE_SCHEMA: bool = True
    SEED_ON_STARTUP: bool = True

    # Routing / access control
    API_PREFIX: str = "/api/products"
    CONSOLE_PATH: str = "/console"
    AUTH_REALM: str = "Realm"
    USER_PASSWORD: str = "password"
    ADMIN_PASSWORD: str = "adminpass"

    # Pagination
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()


def configure_logging() -> None:
    """Apply ``LOG_LEVEL`` and the shared log format to the root logger."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
