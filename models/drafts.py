"""
Unsent operator input, kept per order until submitted.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional


DEFAULT_DIRECTION = "outbound"
DEFAULT_CHANNEL = "message"
DEFAULT_LABEL_PROVIDER = "manual"


@dataclass
class CommunicationDraft:
    """A customer message being composed."""

    message: str = ""
    direction: str = DEFAULT_DIRECTION
    channel: str = DEFAULT_CHANNEL

    def to_payload(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class LabelDraft:
    """Shipping label fields being edited."""

    provider: str = DEFAULT_LABEL_PROVIDER
    tracking: str = ""

    @classmethod
    def for_order(cls, shipping_provider: Optional[str], tracking_number: Optional[str]) -> "LabelDraft":
        """Seed a draft from an order's existing shipping fields."""
        return cls(
            provider=shipping_provider or DEFAULT_LABEL_PROVIDER,
            tracking=tracking_number or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class StagedPhoto:
    """A photo chosen for upload but not yet sent."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"
