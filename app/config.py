"""
Configuration settings for the SmartPark Ticketing API.
Uses Pydantic for type-safe configuration management.
"""
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Literal


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "SmartPark Ticketing System"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool = False

    # Database
    database_url: str = "postgresql+asyncpg://smartpark:smartpark@db:5432/smartpark"

    # Security
    secret_key: str = "your-secret-key-change-this-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 1440  # 24 hours
    admin_username: str = "admin"
    admin_password: str = "admin123"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    # API
    api_v1_prefix: str = "/api/v1"

    # Billing
    negative_duration_policy: Literal["clamp", "reject"] = "clamp"
    default_payment_method: str = "CASH"

    # Printed on bills
    company_name: str = "SmartPark"
    company_address: str = "Rubavu District, Western Province, Rwanda"
    company_phone: str = "+250 788 000 000"
    company_email: str = "info@smartpark.rw"

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
