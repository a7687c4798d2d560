# config.py - Environment configuration
import os
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator

class Settings(BaseSettings):
    # Environment
    environment: str = "development"
    debug: bool = False

    # Database
    mongodb_uri: str = "mongodb://localhost:27017"
    database_name: str = "storyhub"

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:5173"

    # Logging
    log_level: str = "INFO"
    log_file: str = "logs/app.log"

    # Real-time activity feed
    event_buffer_size: int = 50
    visitor_active_minutes: int = 5

    # Optional admin created at startup when missing
    admin_username: Optional[str] = None
    admin_password: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    @field_validator('allowed_origins')
    @classmethod
    def parse_origins(cls, v):
        return [origin.strip() for origin in v.split(',') if origin.strip()]

    @field_validator('event_buffer_size')
    @classmethod
    def validate_buffer_size(cls, v):
        if v < 1:
            raise ValueError('EVENT_BUFFER_SIZE must be at least 1')
        return v

class DevelopmentSettings(Settings):
    debug: bool = True
    log_level: str = "DEBUG"

class ProductionSettings(Settings):
    debug: bool = False
    log_level: str = "WARNING"

def get_settings() -> Settings:
    env = os.getenv("ENVIRONMENT", "development").lower()

    if env == "production":
        return ProductionSettings()
    else:
        return DevelopmentSettings()
