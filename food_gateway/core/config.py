"""
Configuration management for the Food Volume Gateway.
Loads environment variables using Pydantic Settings.
"""

from functools import lru_cache
from typing import List, Union
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Food Volume Gateway"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # CORS Configuration (will be parsed by model_validator)
    CORS_ORIGINS: Union[str, List[str]] = ["*"]

    # Local upload directory (also served under /uploads)
    UPLOAD_DIR: str = "./uploads"

    # Outbound HTTP
    HTTP_TIMEOUT: float = 120.0

    # Downstream inference services
    VOLUME_SERVICE_URL: str = "http://localhost:8080"
    CLASSIFICATION_SERVICE_URL: str = "http://localhost:8081"

    # Object storage (S3-compatible) holding segmented images
    ARTIFACT_SYNC_ENABLED: bool = True
    STORAGE_ENDPOINT: str = ""        # Empty uses the AWS default endpoint
    STORAGE_ACCESS_KEY: str = ""      # Empty falls back to the boto3 credential chain
    STORAGE_SECRET_KEY: str = ""
    STORAGE_SECURE: bool = False      # Only used when STORAGE_ENDPOINT has no scheme
    STORAGE_REGION: str = "us-east-1"
    STORAGE_BUCKET: str = "segmented-volume-images"
    STORAGE_PREFIX: str = "segmented_images/"

    # Artifact sync
    SYNC_MAX_CONCURRENCY: int = 8     # Transfer thread pool size
    SYNC_SKIP_EXISTING: bool = False  # Skip artifacts already present locally

    # Nutritionix natural-language nutrient lookup
    NUTRITIONIX_URL: str = "https://trackapi.nutritionix.com/v2/natural/nutrients"
    NUTRITIONIX_APP_ID: str = ""
    NUTRITIONIX_APP_KEY: str = ""

    @model_validator(mode="before")
    @classmethod
    def parse_cors_origins(cls, values):
        """Parse CORS_ORIGINS from comma-separated string to list."""
        if isinstance(values.get("CORS_ORIGINS"), str):
            values["CORS_ORIGINS"] = [
                origin.strip() for origin in values["CORS_ORIGINS"].split(",")
            ]
        return values


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
