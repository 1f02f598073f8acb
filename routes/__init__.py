"""
Flask route blueprints for the Print Shop Console.

This module contains all route handlers organized by functionality:
- api: Health check, dashboard snapshot, printer issues, preferences
- orders: Sync, filters, selection, bulk actions, per-order activity
- inventory: Filaments and product profiles
- alerts: Alert panel, settings, trigger

All routes speak JSON and drain the console's notices into each response.
Each blueprint is registered with the Flask app in create_app().
"""

from .api import api_bp
from .orders import orders_bp
from .inventory import inventory_bp
from .alerts import alerts_bp

__all__ = [
    "api_bp",
    "orders_bp",
    "inventory_bp",
    "alerts_bp",
    "register_blueprints",
]


def register_blueprints(app):
    """
    Register all blueprints with the Flask app.

    Args:
        app: Flask application instance
    """
    app.register_blueprint(api_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(inventory_bp)
    app.register_blueprint(alerts_bp)
