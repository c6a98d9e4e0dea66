# lhc/core/settings.py
from __future__ import annotations

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR = Path(__file__).resolve().parents[1] / "data"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    PROJECT_NAME: str = "lhc-engine"
    VERSION: str = "1.0.0"
    DATABASE_URL: str = "sqlite:///lhc.db"

    # Question banks / grade tiers (packaged JSON by default)
    BANKS_DIR: Path = DATA_DIR / "banks"
    GRADES_PATH: Path = DATA_DIR / "grades.json"

    DEFAULT_POOL_SIZE: int = 20
    MAX_POOL_SIZE: int = 500
    HISTORY_LIMIT: int = 10

    DEFAULT_COMPANY_SIZE: str = "micro"
    DEFAULT_COMPANY_NAME: str = "вашата компанија"

    CORS_ORIGINS: List[str] = [
        "http://127.0.0.1:3000", "http://localhost:3000",
        "http://127.0.0.1:5173", "http://localhost:5173",
    ]

    LOG_LEVEL: str = "INFO"
    LOG_FILE: Path | None = None

    ALLOW_ALL_CORS: bool = False
    DEBUG: bool = False


# Singleton imported by the rest of the modules
settings = Settings()
