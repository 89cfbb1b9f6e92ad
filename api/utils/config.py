# api/utils/config.py
import os
import logging

logger = logging.getLogger("sanitary_sizing.api")


class Config:
    """Application configuration loaded from environment variables"""

    # API authentication
    API_KEY = os.environ.get("API_KEY", "dev_key")

    # Optional JSON file with alternate sizing tables
    SIZING_CONFIG_PATH = os.environ.get("SIZING_CONFIG_PATH")

    # Application settings
    DEBUG = os.environ.get("DEBUG", "false").lower() == "true"
    ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")

    @classmethod
    def validate(cls):
        """Validate critical configuration values"""
        if not cls.API_KEY or cls.API_KEY == "dev_key":
            logger.warning("Using development API key - not secure for production!")

        if cls.SIZING_CONFIG_PATH and not os.path.exists(cls.SIZING_CONFIG_PATH):
            logger.error(f"SIZING_CONFIG_PATH '{cls.SIZING_CONFIG_PATH}' does not exist")
