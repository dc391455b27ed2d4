# backend/app/config.py
from pydantic_settings import BaseSettings
from typing import List, Optional
import os


class Settings(BaseSettings):
    APP_NAME: str = "medclarity"

    POSTGRES_USER: str = os.environ.get("POSTGRES_USER", "postgres")
    POSTGRES_PASSWORD: str = os.environ.get("POSTGRES_PASSWORD", "postgres")
    POSTGRES_DB: str = os.environ.get("POSTGRES_DB", "medclarity")
    POSTGRES_HOST: str = os.environ.get("POSTGRES_HOST", "db")
    POSTGRES_PORT: str = os.environ.get("POSTGRES_PORT", "5432")

    DATABASE_URL: str = os.environ.get(
        "DATABASE_URL",
        f"postgresql+asyncpg://{POSTGRES_USER}:{POSTGRES_PASSWORD}@{POSTGRES_HOST}:{POSTGRES_PORT}/{POSTGRES_DB}"
    )

    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")
    DEBUG: bool = os.environ.get("DEBUG", "False").lower() in ("1", "true", "yes")

    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    # Email risk scoring
    # default | client | server (see emailrisk.policy)
    RISK_POLICY: str = os.environ.get("RISK_POLICY", "default")
    REJECT_THRESHOLD: Optional[int] = None
    ADVISORY_THRESHOLD: Optional[int] = None
    SHORT_CIRCUIT_ON_FORMAT_ERROR: Optional[bool] = None

    # JSON document extending the bundled disposable / trusted / pattern tables
    REFERENCE_TABLES_PATH: Optional[str] = None
    # plain-text disposable domain list fetched once at startup
    DISPOSABLE_LIST_URL: Optional[str] = None

    # Batch screening upload limit
    MAX_UPLOAD_SIZE_MB: int = int(os.environ.get("MAX_UPLOAD_SIZE_MB", 16))

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()
