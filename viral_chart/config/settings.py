"""
Configuration settings for the viral chart service.

Settings are read from environment variables and an optional ``.env`` file
using pydantic-settings. Class attributes hold the defaults.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Root directory of the viral_chart package
PACKAGE_ROOT_DIR = Path(__file__).parent.parent.resolve()
DEFAULT_FEED_PATH = PACKAGE_ROOT_DIR / "data" / "slop100.json"
DEFAULT_LOGGING_CONFIG_PATH = PACKAGE_ROOT_DIR / "config" / "logging_config.yaml"


class Settings(BaseSettings):
    # Application settings
    APP_NAME: str = "ViralChartService"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8002

    # CORS settings
    CORS_ORIGINS: Union[str, list[str]] = "http://localhost:3000,http://localhost:8080"
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: Union[str, list[str]] = "GET,POST"
    CORS_ALLOW_HEADERS: Union[str, list[str]] = "*"

    # Logging configuration path (can be overridden by env var)
    LOGGING_CONFIG_PATH: str = str(DEFAULT_LOGGING_CONFIG_PATH)

    # Chart feed
    FEED_PATH: str = str(DEFAULT_FEED_PATH)
    FEED_REFRESH_INTERVAL_SECONDS: int = Field(default=300, ge=0)

    # Trending: quantile of the period's engagement totals, unless an
    # absolute threshold is configured.
    TRENDING_QUANTILE: float = 0.75
    TRENDING_THRESHOLD: Optional[int] = Field(default=None, ge=0)

    # Runes
    STARTING_RUNES: int = Field(default=2500, ge=0)
    SUBMISSION_PROCESSING_DELAY_SECONDS: float = Field(default=0.0, ge=0.0)

    # Snapshots
    SNAPSHOT_DIR: str = "snapshots"
    SNAPSHOT_PROTOCOL: str = "slop100"
    SNAPSHOT_VERSION: str = "1.0"
    SNAPSHOT_INTERVAL_SECONDS: float = Field(default=86400, gt=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("TRENDING_QUANTILE")
    @classmethod
    def check_quantile(cls, v: float) -> float:
        if not 0.0 < v < 1.0:
            raise ValueError("TRENDING_QUANTILE must be between 0 and 1 (exclusive)")
        return v

    def model_post_init(self, __context) -> None:
        """Parse comma-separated strings into lists after model initialization."""
        if isinstance(self.CORS_ORIGINS, str):
            self.CORS_ORIGINS = [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

        if isinstance(self.CORS_ALLOW_METHODS, str):
            self.CORS_ALLOW_METHODS = [method.strip() for method in self.CORS_ALLOW_METHODS.split(",") if method.strip()]

        if isinstance(self.CORS_ALLOW_HEADERS, str):
            if self.CORS_ALLOW_HEADERS == "*":
                self.CORS_ALLOW_HEADERS = ["*"]
            else:
                self.CORS_ALLOW_HEADERS = [header.strip() for header in self.CORS_ALLOW_HEADERS.split(",") if header.strip()]


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Configured settings instance
    """
    return Settings()


settings = get_settings()
