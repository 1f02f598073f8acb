"""
Order data models.

These models represent marketplace orders as the console holds them:
the order itself, its note and communication threads, and the filter
struct used to query the order list.

Mutation:
    - Order is mutable; bulk actions, label updates and photo uploads
      patch it in place through Order.merge()
    - OrderNote and CommunicationLog are frozen once created
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Dict, Any, List, Optional


@dataclass
class Order:
    """
    A marketplace order owned by the order registry.

    Fields the console does not model explicitly are kept in ``extra`` so a
    round trip through the console never loses server data.
    """

    id: int
    """Backend order identifier."""

    etsy_order_id: str = ""
    """External marketplace reference."""

    buyer_name: str = ""
    """Buyer display name."""

    total_amount: float = 0.0
    """Order total in ``currency``."""

    currency: str = "USD"

    status: str = ""
    """Lifecycle status (e.g. 'paid', 'shipped')."""

    production_status: str = ""
    """Production status (e.g. 'queued', 'printing', 'done')."""

    shipping_provider: Optional[str] = None
    """Carrier name, None until a label exists."""

    tracking_number: Optional[str] = None

    photo_url: Optional[str] = None
    """URL of the finished-product photo."""

    total_filament_used: float = 0.0
    """Grams of filament consumed by this order."""

    filament_assigned: bool = False

    items: List[Dict[str, Any]] = field(default_factory=list)

    created_at: str = ""

    extra: Dict[str, Any] = field(default_factory=dict)
    """Server fields without a dedicated attribute."""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Order":
        """Create from a backend response dictionary."""
        order = cls(id=data["id"])
        order.merge(data)
        return order

    def merge(self, data: Dict[str, Any]) -> None:
        """
        Merge backend fields into this order in place.

        Only keys present in ``data`` are touched. Attributes absent from
        ``data`` keep their current values; the merge never removes anything.

        Args:
            data: Partial or full order dictionary from the backend
        """
        known = {f.name for f in fields(self)} - {"extra", "id"}
        for key, value in data.items():
            if key == "id":
                continue
            if key in known:
                if key == "items":
                    value = list(value or [])
                setattr(self, key, value)
            else:
                self.extra[key] = value

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON responses."""
        data = dict(self.extra)
        for f in fields(self):
            if f.name != "extra":
                data[f.name] = getattr(self, f.name)
        return data


@dataclass(frozen=True)
class OrderNote:
    """An internal note attached to one order."""

    id: int
    order_id: int
    content: str
    created_at: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OrderNote":
        return cls(
            id=data.get("id", 0),
            order_id=data.get("order_id", 0),
            content=data.get("content", ""),
            created_at=data.get("created_at", ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "order_id": self.order_id,
            "content": self.content,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class CommunicationLog:
    """A logged customer message, inbound or outbound, for one order."""

    id: int
    order_id: int
    message: str
    direction: str = "outbound"
    """'inbound' or 'outbound'."""

    channel: str = "message"
    """Medium used (e.g. 'message', 'email')."""

    created_at: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CommunicationLog":
        return cls(
            id=data.get("id", 0),
            order_id=data.get("order_id", 0),
            message=data.get("message") or "",
            direction=data.get("direction") or "outbound",
            channel=data.get("channel") or "message",
            created_at=data.get("created_at", ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "order_id": self.order_id,
            "message": self.message,
            "direction": self.direction,
            "channel": self.channel,
            "created_at": self.created_at,
        }


@dataclass
class OrderFilters:
    """
    Server-side filter parameters for the order list.

    Empty strings and None mean "not filtering on this field".
    """

    status: str = ""
    production_status: str = ""
    product: str = ""
    start_date: str = ""
    end_date: str = ""
    min_total: Optional[float] = None
    max_total: Optional[float] = None

    # (attribute, chip label) in display order
    _CHIP_LABELS = (
        ("status", "Status"),
        ("production_status", "Prod"),
        ("product", "Product"),
        ("start_date", "From"),
        ("end_date", "To"),
        ("min_total", "Min"),
        ("max_total", "Max"),
    )

    def to_params(self) -> Dict[str, Any]:
        """
        Build query parameters, omitting absent or empty fields.

        Returns:
            Dictionary suitable for ``requests`` ``params``
        """
        params: Dict[str, Any] = {}
        for name, _ in self._CHIP_LABELS:
            value = getattr(self, name)
            if value is None or value == "":
                continue
            params[name] = value
        return params

    def active_count(self) -> int:
        """Number of filters currently in effect."""
        return len(self.to_params())

    def chips(self) -> List[str]:
        """Human-readable labels for the active filters."""
        return [
            f"{label}: {getattr(self, name)}"
            for name, label in self._CHIP_LABELS
            if getattr(self, name) not in (None, "")
        ]

    def update(self, **changes: Any) -> None:
        """
        Set filter fields by name.

        All changes are parsed before any is applied, so a rejected update
        leaves the filters as they were.

        Raises:
            KeyError: If a name is not a filter field
            TypeError, ValueError: If a total is not a number
        """
        valid = {name for name, _ in self._CHIP_LABELS}
        parsed: Dict[str, Any] = {}
        for name, value in changes.items():
            if name not in valid:
                raise KeyError(f"Unknown order filter: {name}")
            if name in ("min_total", "max_total") and value not in (None, ""):
                value = float(value)
            elif name in ("min_total", "max_total"):
                value = None
            parsed[name] = value

        for name, value in parsed.items():
            setattr(self, name, value)

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name, _ in self._CHIP_LABELS}
