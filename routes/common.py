"""
Helpers shared by the JSON blueprints.

Every response carries the notices the console posted while handling the
request, drained so each notice is delivered once.
"""

import html
from typing import Any, Dict, Optional

import bleach
from flask import current_app, jsonify, request

from services.console import OperatorConsole


# Notice level -> HTTP status for a failed command
FAILURE_STATUS = {
    "error": 502,
    "warning": 400,
}


def get_console() -> OperatorConsole:
    """Operator console created by the app factory."""
    return current_app.config["CONSOLE"]


def sanitize_text(text: Optional[str], max_length: Optional[int] = None) -> str:
    """
    Strip markup from operator-entered text.

    Tags are removed and entities decoded back to plain text for the JSON
    backend.

    Whitespace is preserved apart from the ends so the save commands can
    still reject blank input.
    """
    if not text:
        return ""

    text = html.unescape(bleach.clean(text.strip(), tags=[], strip=True))

    if max_length and len(text) > max_length:
        text = text[:max_length]

    return text


def json_body() -> Dict[str, Any]:
    """Request JSON object, or an empty dict for a missing/non-object body."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def respond(ok: bool = True, status: Optional[int] = None, **payload: Any):
    """
    Build a JSON response with drained notices.

    A failed command maps to 400 when the operator was warned (bad input,
    busy) and 502 when the backend call failed. A closed console gives 503.
    """
    console = get_console()
    notices = [n.to_dict() for n in console.notices.drain()]

    if status is None:
        if ok:
            status = 200
        elif console.closed:
            status = 503
        else:
            levels = {n["level"] for n in notices}
            status = FAILURE_STATUS["error"] if "error" in levels else FAILURE_STATUS["warning"]

    body = {"ok": ok, "notices": notices}
    body.update(payload)
    return jsonify(body), status
