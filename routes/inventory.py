"""
Inventory routes: filament spools and product profiles.

Every mutation reloads the affected list, so responses always carry the
backend's view of the inventory.
"""

from flask import Blueprint, request

from routes.common import get_console, json_body, respond, sanitize_text


inventory_bp = Blueprint("inventory", __name__, url_prefix="/api")


def _clean_fields(data: dict) -> dict:
    """Strip markup from string values; numbers pass through."""
    return {
        name: sanitize_text(value) if isinstance(value, str) else value
        for name, value in data.items()
    }


def _filament_payload(console) -> dict:
    return {
        "filaments": [f.to_dict() for f in console.filaments.filaments],
        "low_stock_filaments": [f.to_dict() for f in console.filaments.low_stock],
        "low_stock_display": console.filaments.low_stock_display(),
    }


def _profile_payload(console) -> dict:
    return {"product_profiles": [p.to_dict() for p in console.profiles.profiles]}


# =============================================================================
# FILAMENTS
# =============================================================================

@inventory_bp.route("/filaments", methods=["GET", "POST"])
def filaments():
    """
    GET: Filament list and low-stock subset
    POST: Create a spool from the JSON body
    """
    console = get_console()
    ok = True

    if request.method == "POST":
        ok = console.create_filament(_clean_fields(json_body()))

    return respond(ok, **_filament_payload(console))


@inventory_bp.route("/filaments/<int:filament_id>", methods=["PUT", "DELETE"])
def filament(filament_id: int):
    console = get_console()

    if request.method == "PUT":
        ok = console.update_filament(filament_id, _clean_fields(json_body()))
    else:
        ok = console.delete_filament(filament_id)

    return respond(ok, **_filament_payload(console))


# =============================================================================
# PRODUCT PROFILES
# =============================================================================

@inventory_bp.route("/product-profiles", methods=["GET", "POST"])
def product_profiles():
    console = get_console()
    ok = True

    if request.method == "POST":
        ok = console.create_product_profile(_clean_fields(json_body()))

    return respond(ok, **_profile_payload(console))


@inventory_bp.route("/product-profiles/<int:profile_id>", methods=["PUT", "DELETE"])
def product_profile(profile_id: int):
    console = get_console()

    if request.method == "PUT":
        ok = console.update_product_profile(profile_id, _clean_fields(json_body()))
    else:
        ok = console.delete_product_profile(profile_id)

    return respond(ok, **_profile_payload(console))
