"""
Per-order drafts and lazily loaded note/communication caches.

Drafts hold operator input that has not been sent yet. They are created
with defaults the first time an order is seen and are never overwritten
by later order reloads, so in-progress typing survives a refresh.

Caches hold the note and communication threads for each order. A thread
is fetched at most once; after that, only successful appends change it.
"""

from __future__ import annotations

from typing import Dict, Generic, Iterable, List, Optional, TypeVar

from models.drafts import CommunicationDraft, LabelDraft, StagedPhoto
from models.order import Order


T = TypeVar("T")


class LazyCache(Generic[T]):
    """
    Load-once cache of ordered records keyed by order id.

    An order id is either absent (never loaded) or populated (possibly with
    an empty list). ``get()`` returns None only for the absent case.
    """

    def __init__(self):
        self._entries: Dict[int, List[T]] = {}

    def is_populated(self, order_id: int) -> bool:
        return order_id in self._entries

    def get(self, order_id: int) -> Optional[List[T]]:
        """Cached records newest-first, or None if never loaded."""
        records = self._entries.get(order_id)
        return list(records) if records is not None else None

    def populate(self, order_id: int, records: Iterable[T]) -> None:
        self._entries[order_id] = list(records)

    def prepend(self, order_id: int, record: T) -> None:
        """Add a new record at the front, creating the entry if absent."""
        self._entries.setdefault(order_id, []).insert(0, record)

    def __contains__(self, order_id: object) -> bool:
        return order_id in self._entries


class DraftStore:
    """
    All unsent input and per-order caches.

    Attributes:
        notes: Lazy note cache
        communications: Lazy communication cache
    """

    def __init__(self):
        self._note_drafts: Dict[int, str] = {}
        self._comm_drafts: Dict[int, CommunicationDraft] = {}
        self._label_drafts: Dict[int, LabelDraft] = {}
        self._photos: Dict[int, Optional[StagedPhoto]] = {}

        self.notes: LazyCache = LazyCache()
        self.communications: LazyCache = LazyCache()

    # =========================================================================
    # INITIALIZATION
    # =========================================================================

    def ensure_drafts(self, order: Order) -> None:
        """
        Create default drafts for an order that has none yet.

        Existing drafts are left untouched.
        """
        self._note_drafts.setdefault(order.id, "")
        if order.id not in self._comm_drafts:
            self._comm_drafts[order.id] = CommunicationDraft()
        if order.id not in self._label_drafts:
            self._label_drafts[order.id] = LabelDraft.for_order(
                order.shipping_provider, order.tracking_number
            )

    def has_drafts(self, order_id: int) -> bool:
        return (
            order_id in self._note_drafts
            and order_id in self._comm_drafts
            and order_id in self._label_drafts
        )

    # =========================================================================
    # NOTE DRAFTS
    # =========================================================================

    def note_draft(self, order_id: int) -> str:
        return self._note_drafts.get(order_id, "")

    def set_note_draft(self, order_id: int, content: str) -> None:
        self._note_drafts[order_id] = content

    def reset_note_draft(self, order_id: int) -> None:
        self._note_drafts[order_id] = ""

    # =========================================================================
    # COMMUNICATION DRAFTS
    # =========================================================================

    def communication_draft(self, order_id: int) -> CommunicationDraft:
        """Current draft, or a fresh default one if the order has none."""
        return self._comm_drafts.get(order_id) or CommunicationDraft()

    def set_communication_draft(
        self,
        order_id: int,
        message: Optional[str] = None,
        direction: Optional[str] = None,
        channel: Optional[str] = None,
    ) -> CommunicationDraft:
        """Update the given draft fields, keeping the others."""
        draft = self._comm_drafts.setdefault(order_id, CommunicationDraft())
        if message is not None:
            draft.message = message
        if direction is not None:
            draft.direction = direction
        if channel is not None:
            draft.channel = channel
        return draft

    def reset_communication_draft(self, order_id: int) -> None:
        self._comm_drafts[order_id] = CommunicationDraft()

    # =========================================================================
    # LABEL DRAFTS
    # =========================================================================

    def label_draft(self, order_id: int) -> LabelDraft:
        return self._label_drafts.get(order_id) or LabelDraft()

    def set_label_draft(
        self,
        order_id: int,
        provider: Optional[str] = None,
        tracking: Optional[str] = None,
    ) -> LabelDraft:
        draft = self._label_drafts.setdefault(order_id, LabelDraft())
        if provider is not None:
            draft.provider = provider
        if tracking is not None:
            draft.tracking = tracking
        return draft

    # =========================================================================
    # STAGED PHOTOS
    # =========================================================================

    def staged_photo(self, order_id: int) -> Optional[StagedPhoto]:
        return self._photos.get(order_id)

    def stage_photo(self, order_id: int, photo: Optional[StagedPhoto]) -> None:
        self._photos[order_id] = photo

    def clear_photo(self, order_id: int) -> None:
        self._photos[order_id] = None
