"""
Per-order activity: notes, customer communications, photos, shipping labels.

Reads (load_notes, load_communications) are load-once and swallow fetch
errors. Writes validate drafts before any request, raise APIRequestError
on failure, and only touch local state after the backend confirms.
"""

from __future__ import annotations

from typing import List, Optional

from core.api_client import ConsoleAPIClient
from core.exceptions import APIRequestError, ValidationError
from models.order import CommunicationLog, Order, OrderNote
from services.draft_store import DraftStore
from services.order_registry import OrderRegistry
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

LABEL_STATUS_CREATED = "CREATED"


class OrderActivityService:
    """Backend operations behind the draft/cache store."""

    def __init__(
        self,
        api_client: ConsoleAPIClient,
        drafts: DraftStore,
        registry: OrderRegistry,
    ):
        self._api = api_client
        self._drafts = drafts
        self._registry = registry

    # =========================================================================
    # NOTES
    # =========================================================================

    def load_notes(self, order_id: int) -> Optional[List[OrderNote]]:
        """
        Fetch an order's notes unless they are already cached.

        Returns:
            Cached notes newest-first, or None if the fetch failed
        """
        if not self._drafts.notes.is_populated(order_id):
            try:
                raw = self._api.list_notes(order_id)
                self._drafts.notes.populate(order_id, [OrderNote.from_dict(n) for n in raw])
            except APIRequestError as e:
                logger.error(f"Failed to load notes for order {order_id}: {e}")
        return self._drafts.notes.get(order_id)

    def save_note(self, order_id: int) -> OrderNote:
        """
        Send the note draft.

        Raises:
            ValidationError: If the draft is empty or whitespace
            APIRequestError: If the backend rejects the note
        """
        content = self._drafts.note_draft(order_id)
        if not content or not content.strip():
            raise ValidationError("Note cannot be empty", field="content")

        note = OrderNote.from_dict(self._api.add_note(order_id, content))

        self._drafts.reset_note_draft(order_id)
        self._drafts.notes.prepend(order_id, note)
        logger.info(f"Note added to order {order_id}")
        return note

    # =========================================================================
    # COMMUNICATIONS
    # =========================================================================

    def load_communications(self, order_id: int) -> Optional[List[CommunicationLog]]:
        """
        Fetch an order's communications unless they are already cached.

        Returns:
            Cached logs newest-first, or None if the fetch failed
        """
        if not self._drafts.communications.is_populated(order_id):
            try:
                raw = self._api.list_communications(order_id)
                self._drafts.communications.populate(
                    order_id, [CommunicationLog.from_dict(c) for c in raw]
                )
            except APIRequestError as e:
                logger.error(f"Failed to load communications for order {order_id}: {e}")
        return self._drafts.communications.get(order_id)

    def save_communication(self, order_id: int) -> CommunicationLog:
        """
        Send the communication draft, then reload orders.

        Raises:
            ValidationError: If the message is empty or whitespace
            APIRequestError: If the backend rejects the message
        """
        draft = self._drafts.communication_draft(order_id)
        if not draft.message or not draft.message.strip():
            raise ValidationError("Message cannot be empty", field="message")

        log = CommunicationLog.from_dict(self._api.add_communication(order_id, draft.to_payload()))

        self._drafts.communications.prepend(order_id, log)
        self._drafts.reset_communication_draft(order_id)
        logger.info(f"{log.direction.capitalize()} {log.channel} logged for order {order_id}")

        self._registry.load()
        return log

    # =========================================================================
    # PHOTOS
    # =========================================================================

    def upload_photo(self, order_id: int) -> str:
        """
        Upload the staged photo and merge its URL into the order.

        Returns:
            The new photo URL

        Raises:
            ValidationError: If no photo is staged
            APIRequestError: If the upload fails
        """
        photo = self._drafts.staged_photo(order_id)
        if photo is None:
            raise ValidationError("Select a photo first", field="photo")

        response = self._api.upload_photo(order_id, photo) or {}
        photo_url = response.get("photo_url")

        order = self._registry.get(order_id)
        if order is not None:
            order.merge({"photo_url": photo_url})
        self._drafts.clear_photo(order_id)

        logger.info(f"Photo uploaded for order {order_id}: {photo.filename}")
        return photo_url

    # =========================================================================
    # SHIPPING LABELS
    # =========================================================================

    def save_shipping_label(self, order_id: int) -> Optional[Order]:
        """
        Send the label draft and merge the returned order in place.

        Returns:
            The updated local order, or None if it is no longer loaded

        Raises:
            APIRequestError: If the backend rejects the label
        """
        draft = self._drafts.label_draft(order_id)
        payload = {
            "provider": draft.provider or "manual",
            "tracking_number": draft.tracking,
            "status": LABEL_STATUS_CREATED,
        }

        updated = self._api.update_shipping_label(order_id, payload) or {}

        order = self._registry.get(order_id)
        if order is not None:
            order.merge(updated)
        logger.info(f"Shipping label saved for order {order_id} ({payload['provider']})")
        return order
