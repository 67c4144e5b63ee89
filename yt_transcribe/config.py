"""
Configuration settings for the YouTube transcriber application.
"""

import os
from pathlib import Path
from dotenv import load_dotenv


# Ensure environment variables are loaded
load_dotenv()


class Config:
    """Base configuration class."""

    # Application info
    APP_VERSION = "0.2.0"

    # Logs go next to where the tool is run, never inside the installed package
    LOGS_DIR = Path(os.getenv("LOGS_DIR", Path.cwd() / "logs"))

    # Transcription service
    DEFAULT_TRANSCRIPTION_MODEL = os.getenv("TRANSCRIPTION_MODEL", "whisper-large-v3-turbo")
    TRANSCRIPTION_LANGUAGE = "en"
    REQUEST_TIMEOUT_SECONDS = float(os.getenv("TRANSCRIPTION_TIMEOUT", "300"))
    MAX_RETRIES = int(os.getenv("TRANSCRIPTION_MAX_RETRIES", "0"))

    @classmethod
    def initialize(cls):
        """Initialize the application configuration."""
        cls.LOGS_DIR.mkdir(parents=True, exist_ok=True)


class DevelopmentConfig(Config):
    """Development configuration."""

    LOG_LEVEL = "DEBUG"


class ProductionConfig(Config):
    """Production configuration."""

    LOG_LEVEL = "INFO"


# Determine which configuration to use based on environment
def get_config():
    """Get the appropriate configuration based on environment."""
    env = os.getenv("ENVIRONMENT", "development").lower()
    if env == "production":
        return ProductionConfig
    else:
        return DevelopmentConfig


# Create a config instance
config = get_config()
config.initialize()
