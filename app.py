"""
Print Shop Console - Flask Application Entry Point.

This is a slim app factory that:
1. Builds the backend API client (fail-fast on bad configuration)
2. Creates the operator console and starts it
3. Registers route blueprints
4. Sets up JSON error handlers

ARCHITECTURE:
    Main Thread
    ├── Console startup (initial loads, one auto-sync)
    ├── Flask request handling
    └── Console stop on shutdown

    PrinterHealth Thread (background)
    └── 60-second printer poll, results dropped after stop

Request threads and the poll thread share one API client; stores are
swapped by reference and busy flags are lock-guarded.
"""

from __future__ import annotations

import atexit
import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from werkzeug.exceptions import RequestEntityTooLarge

from logging_config import setup_logging, get_logger
from core.api_client import ConsoleAPIClient
from core.exceptions import ConfigurationError
from core.preferences import PreferenceStore
from services.console import OperatorConsole
from routes import register_blueprints


# Module logger (configured after setup_logging)
logger = get_logger(__name__)

# Local settings file, read before the config class is applied
ENV_FILE = Path(__file__).parent / ".env"


def _error_body(message: str) -> dict:
    return {"ok": False, "notices": [{"level": "error", "message": message}]}


def create_app(
    config_object: str = "config.Config",
    console: Optional[OperatorConsole] = None,
) -> Flask:
    """
    Application factory - creates and configures Flask app.

    FAIL-FAST: If CONSOLE_API_URL is missing or malformed, app will not start.

    Args:
        config_object: Import path of the configuration class
        console: Prebuilt console (tests inject one wired to a mock client)

    Returns:
        Configured Flask application

    Raises:
        ConfigurationError: If the backend API settings are invalid
    """
    # .env next to app.py takes precedence over the shell environment
    if ENV_FILE.exists():
        load_dotenv(ENV_FILE, override=True)
    else:
        load_dotenv(override=True)

    # Create Flask app
    app = Flask(__name__)
    app.config.from_object(config_object)

    # Configure logging
    log_level = logging.DEBUG if app.config.get("DEBUG") else logging.INFO
    enable_file_logging = app.config.get("ENVIRONMENT") == "production"

    root_logger = setup_logging(
        log_level=log_level,
        enable_file_logging=enable_file_logging
    )

    # Set Flask's logger to use our configured logger
    app.logger.handlers = root_logger.handlers
    app.logger.setLevel(log_level)

    logger.info(f"Starting Print Shop Console in {app.config.get('ENVIRONMENT')} mode")

    # =========================================================================
    # CONSOLE INITIALIZATION (FAIL-FAST)
    # =========================================================================

    if console is None:
        try:
            api_client = ConsoleAPIClient(
                app.config.get("CONSOLE_API_URL"),
                token=app.config.get("CONSOLE_API_TOKEN") or None,
                timeout=app.config.get("CONSOLE_API_TIMEOUT", 10.0),
                logger=get_logger("core.api_client"),
            )
        except ConfigurationError as e:
            logger.error(f"FATAL: Cannot start application - {e}")
            raise

        console = OperatorConsole(
            api_client,
            preferences=PreferenceStore(app.config.get("PREFERENCES_PATH")),
            poll_interval_seconds=app.config.get("PRINTER_POLL_INTERVAL_SECONDS", 60.0),
        )

    # Store in app config for access by routes
    app.config["CONSOLE"] = console

    if app.config.get("START_CONSOLE", True):
        console.start()

    # =========================================================================
    # CLEANUP REGISTRATION
    # =========================================================================

    def cleanup():
        """Cleanup on application shutdown."""
        logger.info("Shutting down...")
        console.stop()
        logger.info("Shutdown complete")

    atexit.register(cleanup)

    # =========================================================================
    # REGISTER BLUEPRINTS
    # =========================================================================

    register_blueprints(app)

    # =========================================================================
    # ERROR HANDLERS
    # =========================================================================

    @app.errorhandler(RequestEntityTooLarge)
    def handle_file_too_large(e):
        max_mb = app.config.get("MAX_CONTENT_LENGTH", 16 * 1024 * 1024) / (1024 * 1024)
        return _error_body(f"File too large. Maximum upload size is {max_mb:.0f} MB."), 413

    @app.errorhandler(404)
    def handle_not_found(e):
        return _error_body("Not found."), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(e):
        return _error_body("Method not allowed."), 405

    @app.errorhandler(500)
    def handle_server_error(e):
        logger.error(f"500 error: {e}", exc_info=True)
        return _error_body("An unexpected error occurred. Please try again."), 500

    logger.info("Application initialized successfully")
    return app


if __name__ == "__main__":
    app = create_app()
    debug_mode = os.environ.get("FLASK_DEBUG", "1") == "1"
    # One process, one console, one printer poll
    app.run(debug=debug_mode, use_reloader=False)
