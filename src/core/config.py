"""
Core configuration for the Drug Information API.
Manages environment variables and record store settings.
"""
import os
from typing import List
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Record store selection: "dynamodb" or "file"
    store_backend: str = os.getenv("STORE_BACKEND", "file")

    # AWS Configuration
    aws_region: str = os.getenv("AWS_REGION", "us-east-1")
    dynamodb_table_name: str = os.getenv("DYNAMODB_TABLE_NAME", "Drugs")
    dynamodb_endpoint_url: str = os.getenv("DYNAMODB_ENDPOINT_URL", "")

    # File-backed store for local development
    data_file_path: str = os.getenv("DATA_FILE_PATH", "data/drugs.json")

    # API Configuration
    api_title: str = os.getenv("API_TITLE", "Drug Information API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # Pagination Configuration
    pagination_default_limit: int = int(os.getenv("PAGINATION_DEFAULT_LIMIT", "50"))
    pagination_max_limit: int = int(os.getenv("PAGINATION_MAX_LIMIT", "1000"))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Environment
    environment: str = os.getenv("ENVIRONMENT", "dev")

    @property
    def cors_origin_list(self) -> List[str]:
        """CORS origins as a list, parsed from the comma separated setting."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
