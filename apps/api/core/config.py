"""
Centralized configuration management with validation.

All environment variables are loaded and validated here.
This ensures consistent configuration across the application.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    """Application settings with validation."""

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    # Database Configuration
    # DATABASE_URL wins when set (serverless Postgres hands out a single URL).
    DATABASE_URL: Optional[str] = Field(default=None)
    POSTGRES_USER: str = Field(default="postgres")
    POSTGRES_PASSWORD: str = Field(default="postgres")
    POSTGRES_DB: str = Field(default="doomsayer")
    POSTGRES_HOST: str = Field(default="postgres")
    POSTGRES_PORT: int = Field(default=5432)

    # Database Pool Configuration
    DB_POOL_SIZE: int = Field(default=5)
    DB_MAX_OVERFLOW: int = Field(default=5)
    DB_POOL_TIMEOUT: int = Field(default=30)
    DB_POOL_RECYCLE: int = Field(default=3600)  # 1 hour

    # API Configuration
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=8000)
    API_RELOAD: bool = Field(default=False)

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="json")  # json or text

    # External API Configuration (used by the submissions client)
    EXTERNAL_API_TIMEOUT: int = Field(default=30)

    # Environment
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    # CORS - comma-separated list of allowed origins for production
    # e.g., "https://whenwilldeniusthdie.com"
    CORS_ORIGINS: Optional[str] = Field(default=None)

    # Public page that renders prophecies; share links point here.
    SITE_BASE_URL: str = Field(default="http://localhost:5173/")

    # Prophecies and submissions
    DEFAULT_CHARACTER: str = Field(default="Deniusth", min_length=1, max_length=64)
    SUBMISSIONS_DEFAULT_LIMIT: int = Field(default=500, ge=0)
    SUBMISSIONS_MAX_LIMIT: int = Field(default=2000, ge=0)

    @property
    def database_url(self) -> str:
        """Resolved SQLAlchemy URL."""
        if self.DATABASE_URL:
            # Heroku/Neon style URLs use the deprecated "postgres://" scheme
            if self.DATABASE_URL.startswith("postgres://"):
                return "postgresql://" + self.DATABASE_URL[len("postgres://"):]
            return self.DATABASE_URL
        return (
            f"postgresql://{self.POSTGRES_USER}:"
            f"{self.POSTGRES_PASSWORD}@"
            f"{self.POSTGRES_HOST}:"
            f"{self.POSTGRES_PORT}/"
            f"{self.POSTGRES_DB}"
        )


# Global settings instance
settings = Settings()
