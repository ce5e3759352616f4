"""
Configuration module for LibroInventario.

This module defines the Settings class, which loads environment variables
and provides application-wide configuration: the database URL, the current
environment, the currency symbol used to render prices and the log level
used by the entry points.

Usage:
    Import the `settings` object to access configuration throughout the project.
"""

import logging
import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        DATABASE_URL (str): Database connection string (SQLite file by default).
        ENVIRONMENT (str): Current environment (e.g., 'production', 'development').
        CURRENCY_SYMBOL (str): Prefix used when rendering book prices.
        LOG_LEVEL (str): Logging level name for scripts and the Streamlit app.
        SEED_BOOKS (int): Number of fake books created by the seed script.
    """
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./inventory.db")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "production")
    CURRENCY_SYMBOL: str = os.getenv("CURRENCY_SYMBOL", "$")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    SEED_BOOKS: int = int(os.getenv("SEED_BOOKS", "20"))

    @property
    def log_level(self) -> int:
        """
        Returns the numeric logging level for LOG_LEVEL.

        Returns:
            int: Logging level, INFO when the name is not recognised.
        """
        level = logging.getLevelName(self.LOG_LEVEL.strip().upper())
        return level if isinstance(level, int) else logging.INFO

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
