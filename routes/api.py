"""
Dashboard routes.

Handles:
- /health - Health check endpoint
- /api/dashboard - Full console snapshot for the operator UI
- /api/printers/issues - Printer issue names from the last poll
- /api/preferences/filters/toggle - Show/hide the filter panel
"""

from flask import Blueprint, current_app

from routes.common import get_console, respond
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.route("/health", methods=["GET"])
def health():
    """Health check endpoint with service status."""
    health_status = {
        "status": "ok",
        "environment": current_app.config.get("ENVIRONMENT", "unknown"),
        "checks": {}
    }

    console = current_app.config.get("CONSOLE")
    if console is None or console.closed:
        health_status["checks"]["console"] = "not_available"
        health_status["status"] = "degraded"
        return health_status, 503

    health_status["checks"]["console"] = "started" if console.started else "idle"

    # Printer poll
    if console.printers.is_running:
        health_status["checks"]["printer_poll"] = "running"
    else:
        health_status["checks"]["printer_poll"] = "not_running"
        if console.started:
            health_status["status"] = "degraded"

    # Last load results
    health_status["checks"]["orders"] = "error" if console.orders.last_error else "ok"
    health_status["checks"]["filaments"] = "error" if console.filaments.last_error else "ok"
    if console.orders.last_error or console.filaments.last_error:
        health_status["status"] = "degraded"

    status_code = 200 if health_status["status"] == "ok" else 503
    return health_status, status_code


@api_bp.route("/api/dashboard", methods=["GET"])
def dashboard():
    """Everything the operator view renders, in one payload."""
    console = get_console()
    return respond(True, console=console.snapshot())


@api_bp.route("/api/printers/issues", methods=["GET"])
def printer_issues():
    console = get_console()
    return respond(True, printer_issues=console.printers.issues)


@api_bp.route("/api/preferences/filters/toggle", methods=["POST"])
def toggle_filters():
    """Flip the filter panel; the choice survives restarts."""
    console = get_console()
    visible = console.toggle_filter_panel()
    logger.debug(f"Filter panel {'shown' if visible else 'hidden'}")
    return respond(True, filters_visible=visible)
