"""
Alert routes.

Handles:
- /api/alerts/panel - Open (loads settings + preview) or close the panel
- /api/alerts/settings - Save channel settings
- /api/alerts/trigger - Send alerts now
"""

from flask import Blueprint, request

from routes.common import get_console, json_body, respond, sanitize_text


alerts_bp = Blueprint("alerts", __name__, url_prefix="/api/alerts")

# Settings the operator may change
ALERT_SETTING_FIELDS = ("slack_webhook_url", "discord_webhook_url", "email_enabled", "email_to")


def _alerts_payload(console) -> dict:
    alerts = console.alerts
    return {
        "panel": alerts.state.value,
        "settings": alerts.settings.to_dict(),
        "preview": alerts.preview.to_dict() if alerts.preview else None,
        "saving": alerts.saving,
        "triggering": alerts.triggering,
    }


@alerts_bp.route("/panel", methods=["POST", "DELETE"])
def panel():
    console = get_console()

    if request.method == "POST":
        console.open_alert_settings()
    else:
        console.close_alert_settings()

    return respond(True, alerts=_alerts_payload(console))


@alerts_bp.route("/settings", methods=["PUT"])
def save_settings():
    console = get_console()
    body = json_body()

    changes = {}
    for name in ALERT_SETTING_FIELDS:
        if name not in body:
            continue
        value = body[name]
        if name == "email_enabled":
            changes[name] = bool(value)
        else:
            changes[name] = sanitize_text(value) if isinstance(value, str) else value

    ok = console.save_alert_settings(changes)
    return respond(ok, alerts=_alerts_payload(console))


@alerts_bp.route("/trigger", methods=["POST"])
def trigger():
    console = get_console()
    result = console.trigger_alerts()
    return respond(
        result is not None,
        result=result.to_dict() if result is not None else None,
        alerts=_alerts_payload(console),
    )
