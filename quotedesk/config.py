"""
Configuration management for QuoteDesk
"""
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings
from functools import lru_cache

APP_HOME = Path.home() / ".quotedesk"


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "QuoteDesk"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Storage
    STORAGE_BACKEND: str = "file"  # file | memory
    DATA_DIR: Path = APP_HOME / "data"
    DOCUMENTS_DIR: Path = APP_HOME / "documents"
    IMAGES_DIR: Path = APP_HOME / "images"
    MAX_DOCUMENT_SIZE: int = 50 * 1024 * 1024  # 50 MB

    # Quotations
    QUOTATION_PREFIX: str = "QT"
    LOCAL_CURRENCY: str = "iqd"

    # Import / export bundles
    EXPORT_VERSION: str = "1.0.0"

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()
