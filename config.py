"""
Configuration for the Print Shop Console.

The console needs a reachable backend API. Application will fail-fast if
CONSOLE_API_URL is empty or malformed.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file early so environment variables are available for Config class
# This must happen before the Config class is defined
load_dotenv(override=True)

# Base directory (where this file lives)
BASE_DIR = Path(__file__).resolve().parent


class Config:
    """Default configuration for the Flask application."""

    # Flask settings
    SECRET_KEY = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16 MB photo uploads
    ENVIRONMENT = os.environ.get("FLASK_ENV", "development")

    # Debug mode
    DEBUG = os.environ.get("FLASK_DEBUG", "1") == "1"
    TESTING = False

    # ==========================================================================
    # Backend API
    # ==========================================================================
    CONSOLE_API_URL = os.environ.get("CONSOLE_API_URL", "http://localhost:5000/api")
    CONSOLE_API_TOKEN = os.environ.get("CONSOLE_API_TOKEN", "")
    CONSOLE_API_TIMEOUT = float(os.environ.get("CONSOLE_API_TIMEOUT", "10"))

    # ==========================================================================
    # Console behaviour
    # ==========================================================================
    # PRINTER_POLL_INTERVAL_SECONDS: time between printer health checks
    # START_CONSOLE: run initial loads, auto-sync and printer poll at startup
    PRINTER_POLL_INTERVAL_SECONDS = float(
        os.environ.get("PRINTER_POLL_INTERVAL_SECONDS", "60")
    )
    START_CONSOLE = os.environ.get("START_CONSOLE", "1") == "1"

    # Local preferences (filter panel state) survive restarts here
    PREFERENCES_PATH = os.environ.get(
        "PREFERENCES_PATH", str(BASE_DIR / "instance" / "preferences.json")
    )


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False


class TestingConfig(Config):
    """Testing configuration."""
    DEBUG = False
    TESTING = True
    START_CONSOLE = False
    PREFERENCES_PATH = None
