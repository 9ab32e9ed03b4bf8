"""
Parity - Hardening Scan Log Comparison
"""
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application Info
    APP_NAME: str = "Parity"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "WARNING"  # Overridden to INFO when DEBUG is on

    # File Watching
    WATCH_DIRECTORY: Optional[str] = None  # Set to enable auto-parsing of new logs
    WATCH_RECURSIVE: bool = True

    # Scan log files the loader and watcher accept
    LOG_FILE_EXTENSIONS: list[str] = [".txt", ".log", ".html", ".htm"]
    HTML_EXTENSIONS: list[str] = [".html", ".htm"]

    # Multi-log comparison
    MAX_COLLECTION_FILES: int = 20

    # Plain-text report layout
    REPORT_WIDTH: int = 70

    # CORS - comma-separated list of allowed origins, or "*" for all
    # Example: "https://parity.example.com,https://admin.example.com"
    CORS_ORIGINS: str = "*"

    # Allowed hosts for Host header validation (comma-separated, or "*" to disable)
    ALLOWED_HOSTS: str = "*"

    # Maximum request body size in bytes (10MB default)
    MAX_REQUEST_SIZE: int = 10 * 1024 * 1024

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def log_level(self) -> str:
        return "INFO" if self.DEBUG and self.LOG_LEVEL == "WARNING" else self.LOG_LEVEL.upper()


settings = Settings()
