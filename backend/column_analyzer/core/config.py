from pydantic_settings import BaseSettings
from typing import List
from functools import lru_cache


class Settings(BaseSettings):
    """Application configuration settings."""

    # Application
    APP_NAME: str = "Column Analyzer - Exploratory Data Analysis Engine"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    API_PREFIX: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Ingestion
    MAX_FILE_SIZE_MB: int = 50
    SUPPORTED_FORMATS: List[str] = ["csv"]

    # Type detection
    TYPE_MATCH_THRESHOLD: float = 0.8  # share of values that must parse as date/number
    CATEGORICAL_MAX_RATIO: float = 0.2  # distinct / total at or below this -> categorical

    # Binning
    MAX_BIN_COUNT: int = 20

    # Forecasting
    DEFAULT_FORECAST_HORIZON: int = 5
    DEFAULT_CONFIDENCE_LEVEL: int = 95

    # Smoothing
    MOVING_AVERAGE_WINDOW: int = 5

    # Display
    DATE_DISPLAY_FORMAT: str = "%Y-%m-%d"

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
