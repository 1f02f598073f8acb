"""
Order routes.

Handles:
- Marketplace sync and the order filter panel
- Order selection and bulk actions
- Per-order notes, customer communications, photos and shipping labels

Drafts live on the console between requests; each POST updates the
draft from the request body and then submits it.
"""

from flask import Blueprint, request
from werkzeug.utils import secure_filename

from models.drafts import StagedPhoto
from routes.common import get_console, json_body, respond, sanitize_text
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

orders_bp = Blueprint("orders", __name__, url_prefix="/api")

# Constants
ALLOWED_PHOTO_EXTENSIONS = {"jpg", "jpeg", "png", "gif", "webp"}
MAX_FILENAME_LENGTH = 255
MAX_NOTE_LENGTH = 5000
MAX_MESSAGE_LENGTH = 5000
MAX_TRACKING_LENGTH = 100


def _allowed_photo(filename: str) -> bool:
    """Check if file extension is allowed."""
    return "." in filename and filename.rsplit(".", 1)[1].lower() in ALLOWED_PHOTO_EXTENSIONS


def _order_payload(order_id: int) -> dict:
    """Current local copy of one order, or None once it left the list."""
    order = get_console().orders.get(order_id)
    return order.to_dict() if order is not None else None


# =============================================================================
# SYNC & FILTERS
# =============================================================================

@orders_bp.route("/orders/sync", methods=["POST"])
def sync_orders():
    """Pull new marketplace orders, then reload the list."""
    console = get_console()
    ok = console.sync_orders()
    return respond(ok, orders=console.orders.to_dicts())


@orders_bp.route("/orders/filters", methods=["GET", "POST", "DELETE"])
def order_filters():
    """
    GET: Current filters and chips
    POST: Apply the JSON body's filter fields and reload
    DELETE: Clear every filter and reload
    """
    console = get_console()
    ok = True

    if request.method == "POST":
        changes = {
            name: sanitize_text(value) if isinstance(value, str) else value
            for name, value in json_body().items()
        }
        ok = console.apply_filters(**changes)
    elif request.method == "DELETE":
        ok = console.clear_filters()

    return respond(
        ok,
        filters=console.orders.filters.to_dict(),
        active_filter_count=console.orders.active_filter_count(),
        active_filter_chips=console.orders.active_filter_chips(),
        orders=console.orders.to_dicts(),
    )


# =============================================================================
# SELECTION & BULK ACTIONS
# =============================================================================

@orders_bp.route("/selection/toggle/<int:order_id>", methods=["POST"])
def toggle_selection(order_id: int):
    console = get_console()
    selected = console.toggle_selection(order_id)
    return respond(True, selected=selected, selected_order_ids=console.selection.ids())


@orders_bp.route("/selection/all", methods=["POST"])
def select_all():
    console = get_console()
    console.select_all()
    return respond(True, selected_order_ids=console.selection.ids())


@orders_bp.route("/selection", methods=["DELETE"])
def clear_selection():
    console = get_console()
    console.clear_selection()
    return respond(True, selected_order_ids=console.selection.ids())


@orders_bp.route("/orders/bulk/<action>", methods=["POST"])
def bulk_action(action: str):
    """Apply an action to every selected order; the selection is kept."""
    console = get_console()
    ok = console.bulk_action(action)
    return respond(
        ok,
        selected_order_ids=console.selection.ids(),
        orders=console.orders.to_dicts(),
    )


@orders_bp.route("/orders/<int:order_id>/auto-assign", methods=["POST"])
def auto_assign(order_id: int):
    console = get_console()
    ok = console.auto_assign_filament(order_id)
    return respond(ok, order=_order_payload(order_id))


# =============================================================================
# NOTES
# =============================================================================

@orders_bp.route("/orders/<int:order_id>/notes", methods=["GET", "POST"])
def notes(order_id: int):
    """
    GET: Order notes, fetched once per session
    POST: Send {"content": ...} (or the saved draft) as a new note
    """
    console = get_console()

    if request.method == "POST":
        body = json_body()
        if "content" in body:
            console.set_note_draft(
                order_id, sanitize_text(body.get("content"), max_length=MAX_NOTE_LENGTH)
            )
        ok = console.save_note(order_id)
        cached = console.drafts.notes.get(order_id)
    else:
        cached = console.load_notes(order_id)
        ok = cached is not None
        if not ok:
            return respond(False, status=502, notes=[])

    return respond(
        ok,
        notes=[n.to_dict() for n in cached or []],
        note_draft=console.drafts.note_draft(order_id),
    )


# =============================================================================
# COMMUNICATIONS
# =============================================================================

@orders_bp.route("/orders/<int:order_id>/communications", methods=["GET", "POST"])
def communications(order_id: int):
    """
    GET: Customer communication log, fetched once per session
    POST: Log {"message", "direction", "channel"} against the order
    """
    console = get_console()

    if request.method == "POST":
        body = json_body()
        fields = {}
        if "message" in body:
            fields["message"] = sanitize_text(body.get("message"), max_length=MAX_MESSAGE_LENGTH)
        for name in ("direction", "channel"):
            if body.get(name):
                fields[name] = sanitize_text(body[name])
        if fields:
            console.set_communication_draft(order_id, **fields)
        ok = console.save_communication(order_id)
        cached = console.drafts.communications.get(order_id)
    else:
        cached = console.load_communications(order_id)
        ok = cached is not None
        if not ok:
            return respond(False, status=502, communications=[])

    return respond(
        ok,
        communications=[c.to_dict() for c in cached or []],
        draft=console.drafts.communication_draft(order_id).to_payload(),
    )


# =============================================================================
# PHOTOS & SHIPPING LABELS
# =============================================================================

@orders_bp.route("/orders/<int:order_id>/photo", methods=["POST"])
def upload_photo(order_id: int):
    """Stage the multipart ``photo`` file (if sent) and upload it."""
    console = get_console()
    photo_file = request.files.get("photo")

    if photo_file and photo_file.filename:
        if not _allowed_photo(photo_file.filename):
            console.notices.warning("Unsupported file type. Please upload an image.")
            return respond(False)

        if len(photo_file.filename) > MAX_FILENAME_LENGTH:
            console.notices.warning(f"Filename too long. Maximum {MAX_FILENAME_LENGTH} characters.")
            return respond(False)

        photo = StagedPhoto(
            filename=secure_filename(photo_file.filename),
            content=photo_file.read(),
            content_type=photo_file.mimetype or "application/octet-stream",
        )
        logger.debug(f"Staged photo {photo.filename} for order {order_id}")
        console.stage_photo(order_id, photo)

    ok = console.upload_photo(order_id)
    return respond(ok, order=_order_payload(order_id))


@orders_bp.route("/orders/<int:order_id>/shipping-label", methods=["POST"])
def shipping_label(order_id: int):
    """Save {"provider", "tracking"} as the order's shipping label."""
    console = get_console()
    body = json_body()

    provider = body.get("provider")
    tracking = body.get("tracking")
    console.set_label_draft(
        order_id,
        provider=sanitize_text(provider) if provider is not None else None,
        tracking=sanitize_text(tracking, max_length=MAX_TRACKING_LENGTH) if tracking is not None else None,
    )

    ok = console.save_shipping_label(order_id)
    return respond(
        ok,
        order=_order_payload(order_id),
        label_draft=console.drafts.label_draft(order_id).to_dict(),
    )
