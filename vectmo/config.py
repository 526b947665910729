"""
Vectmo Service Configuration
"""

from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # ===== Service =====
    SERVICE_NAME: str = Field(default="vectmo-service")
    SERVICE_VERSION: str = Field(default="1.0.0")
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)
    LOG_LEVEL: str = Field(default="info")
    DEBUG: bool = Field(default=False)

    # ===== CORS =====
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080"]
    )

    # ===== Model storage =====
    MODEL_DIR: str = Field(default=".")
    MODEL_BASE_NAME: str = Field(default="vectmo_training_data")
    WRITE_EMBEDDING_DUMP: bool = Field(default=True)

    # ===== Generation Defaults =====
    DEFAULT_MAX_CHARS: int = Field(default=50, ge=0)
    CYCLE_WINDOW: int = Field(default=6, ge=1)

    # >>> pydantic v2 settings config <<<
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
