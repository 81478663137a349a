"""Configuration class to handle env variables and settings"""
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Configuration class for managing environment variables and settings.
    Values come from the process environment, ".env" is loaded automatically
    when present. Empty variables fall back to the defaults below.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_ignore_empty=True
    )
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "user_registry"
    MONGO_TIMEOUT_MS: int = 5000
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    CORS_ORIGINS: List[str] = ["*"]
    API_PREFIX: str = "/api"
    LIVE_ROOM: str = "live_users"
    BCRYPT_ROUNDS: int = 12
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False
