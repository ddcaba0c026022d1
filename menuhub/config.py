"""
Configuration management for MenuHub
"""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "MenuHub"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"  # ignored when DEBUG is on

    # Database
    DATABASE_URL: str = "sqlite:///./menuhub.db"

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Catalog reads are cached per run, not process-wide
    CATALOG_CACHE_TTL_SECONDS: int = 600  # 10 minutes

    # Status of a new combined menu when the request leaves it out
    DEFAULT_STATUS: str = "active"

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()
