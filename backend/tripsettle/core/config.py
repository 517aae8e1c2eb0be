"""
Application configuration and environment settings.
"""
from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Union


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Tripsettle"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Settlement
    SETTLEMENT_TOLERANCE: float = 0.01  # Balances and transfers below this are treated as zero

    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000", "http://localhost:8080"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("SETTLEMENT_TOLERANCE")
    @classmethod
    def check_tolerance(cls, v):
        """Tolerance must be a positive amount."""
        if v <= 0:
            raise ValueError("SETTLEMENT_TOLERANCE must be positive")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
