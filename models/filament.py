"""
Filament inventory data models.

Filament spools are tracked in grams. Low-stock status can come from two
places: the backend's ``is_low_stock`` flag and a local comparison against
``low_stock_threshold``. Either signal marks the spool for restock.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Dict, Any, Optional


@dataclass(frozen=True)
class Filament:
    """
    A filament spool from the inventory list.

    Frozen: the monitor replaces the whole list on every reload.
    """

    id: int
    material: str = ""
    """Material type (e.g. 'PLA', 'PETG')."""

    color: str = ""

    initial_amount: float = 0.0
    """Spool weight when registered, in ``unit``."""

    current_amount: float = 0.0
    """Remaining weight, never above ``initial_amount``."""

    low_stock_threshold: Optional[float] = None
    """Restock threshold; None when not configured."""

    unit: str = "g"

    cost_per_gram: Optional[float] = None

    used_amount: float = 0.0
    """Server-derived consumption."""

    is_low_stock: bool = False
    """Backend-computed low-stock flag."""

    @property
    def needs_restock(self) -> bool:
        """True when either the backend flag or the local threshold says so."""
        if self.is_low_stock:
            return True
        if self.low_stock_threshold is None:
            return False
        return self.current_amount <= self.low_stock_threshold

    @property
    def label(self) -> str:
        """Short banner text, e.g. 'PLA Red (40g)'."""
        return f"{self.material} {self.color} ({self.current_amount:g}{self.unit})"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Filament":
        """Create from a backend response dictionary."""
        threshold = data.get("low_stock_threshold")
        return cls(
            id=data["id"],
            material=data.get("material", ""),
            color=data.get("color", ""),
            initial_amount=float(data.get("initial_amount") or 0),
            current_amount=float(data.get("current_amount") or 0),
            low_stock_threshold=float(threshold) if threshold is not None else None,
            unit=data.get("unit") or "g",
            cost_per_gram=data.get("cost_per_gram"),
            used_amount=float(data.get("used_amount") or 0),
            is_low_stock=bool(data.get("is_low_stock", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["needs_restock"] = self.needs_restock
        return data


@dataclass(frozen=True)
class ProductProfile:
    """
    Template linking a product name to its expected filament use.

    The backend's auto-assign step matches order items against these
    profiles; the console only lists and edits them.
    """

    id: int
    product_name: str
    standard_filament_amount: float = 0.0
    """Grams per unit."""

    description: str = ""
    preferred_material: str = ""
    preferred_color: str = ""
    print_time_minutes: int = 0
    category: str = ""
    notes: str = ""

    # Production parameters
    nozzle_temp_c: Optional[float] = None
    bed_temp_c: Optional[float] = None
    print_speed_mms: Optional[float] = None
    infill_percent: Optional[float] = None
    layer_height_mm: Optional[float] = None
    support_settings: str = ""

    # Pricing
    material_cost: Optional[float] = None
    labor_minutes: Optional[float] = None
    overhead_cost: Optional[float] = None
    target_margin_pct: Optional[float] = None
    suggested_price: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProductProfile":
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known and v is not None}
        values.setdefault("product_name", "")
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
