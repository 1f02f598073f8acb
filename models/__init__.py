"""
Data models for the Print Shop Console.

This module contains dataclasses for:
- Order, OrderNote, CommunicationLog, OrderFilters: marketplace orders
- Filament, ProductProfile: inventory and production templates
- PrinterStatus: latest printer health snapshot
- AlertSettings, AlertPreview, AlertTriggerResult: alert channels
- CommunicationDraft, LabelDraft, StagedPhoto: unsent operator input
- Notice, NoticeBoard: operator-visible messages

Records that are replaced wholesale on reload (Filament, PrinterStatus,
notes, communications) are frozen. Order is mutable so label and photo
results can be merged in place.
"""

from .order import Order, OrderNote, CommunicationLog, OrderFilters
from .filament import Filament, ProductProfile
from .printer import PrinterStatus, PROBLEM_KEYWORDS
from .alerts import AlertSettings, AlertPreview, AlertTriggerResult
from .drafts import CommunicationDraft, LabelDraft, StagedPhoto
from .notices import Notice, NoticeBoard

__all__ = [
    # Order models
    "Order",
    "OrderNote",
    "CommunicationLog",
    "OrderFilters",
    # Inventory models
    "Filament",
    "ProductProfile",
    # Printer models
    "PrinterStatus",
    "PROBLEM_KEYWORDS",
    # Alert models
    "AlertSettings",
    "AlertPreview",
    "AlertTriggerResult",
    # Drafts
    "CommunicationDraft",
    "LabelDraft",
    "StagedPhoto",
    # Notices
    "Notice",
    "NoticeBoard",
]
