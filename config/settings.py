"""
Application settings and environment configuration.

Purpose:
- Centralize all config (port, Redis, logging, CORS)
- Load from environment variables for 12-factor app compliance
- Provide sensible defaults for local development
"""
import os
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # API Configuration
    API_TITLE: str = "Bus Booking API"
    API_VERSION: str = "0.1"
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # Bind address / port for `python main.py`
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3001"))

    # Redis: holds every driver / schedule / booking record and the ID lists
    # Format: redis://host:port/db
    # Example: redis://localhost:6379/0
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")

    # Logging: values DEBUG, INFO, WARNING, ERROR, CRITICAL
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS: comma-separated origins, "*" allows any
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")

    # Streamlit UI: where the API lives
    API_URL: str = os.getenv("API_URL", "http://localhost:3001")

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def redis_url_configured(self) -> bool:
        """True when REDIS_URL came from the environment rather than the default."""
        return "REDIS_URL" in os.environ

    class Config:
        env_file = ".env"  # Load from .env file if present
        extra = "allow"

# Global settings instance
settings = Settings()
