"""Configuration management using Pydantic Settings"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "family-finance"
    log_level: str = "INFO"

    # Tax configuration document (JSON); unset means the 2025 fallback tables
    tax_config_path: Optional[str] = None

    # Projections
    max_projection_months: int = 1200  # 100 years
    projection_checkpoints: List[int] = [12, 36, 60]


settings = Settings()
