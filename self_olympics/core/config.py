# self_olympics/core/config.py

import os
from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict
# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    PROJECT_NAME: str = "Self Olympics"
    VERSION: str = "1.0.0"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Database (POSTGRES_URL is the name used by the hosted deployment)
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        os.getenv("POSTGRES_URL", "sqlite:///./self_olympics.db"),
    )
    DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", 5))
    DB_MAX_OVERFLOW: int = int(os.getenv("DB_MAX_OVERFLOW", 10))
    DB_POOL_TIMEOUT: int = int(os.getenv("DB_POOL_TIMEOUT", 30))
    AUTO_CREATE_TABLES: bool = os.getenv("AUTO_CREATE_TABLES", "true").lower() == "true"

    # Self identity verification
    SELF_SCOPE: str = os.getenv("SELF_SCOPE", "self-olympics-2024")
    SELF_ENDPOINT: str = os.getenv("SELF_ENDPOINT", "http://localhost:3000/api/register")
    SELF_VERIFIER_URL: str = os.getenv("SELF_VERIFIER_URL", "http://localhost:3001/verify")
    SELF_MOCK_PASSPORT: bool = os.getenv("SELF_MOCK_PASSPORT", "true").lower() == "true"
    SELF_VERIFIER_TIMEOUT: float = float(os.getenv("SELF_VERIFIER_TIMEOUT", 30.0))

    # Rate limiting
    REGISTER_RATE_LIMIT: str = os.getenv("REGISTER_RATE_LIMIT", "30/minute")

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )


# Initialize
settings = Settings()
