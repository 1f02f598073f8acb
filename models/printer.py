"""
Printer status snapshot.

Snapshots are never persisted by the console; each health poll replaces
the previous result.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Any, Optional


# Status fragments that mark a printer as needing attention
PROBLEM_KEYWORDS = ("error", "fail", "fault", "offline")


@dataclass(frozen=True)
class PrinterStatus:
    """Latest known state of one production printer."""

    id: int
    name: str = ""
    type: str = ""
    """Driver family: 'bambu', 'octoprint' or 'klipper'."""

    status: Optional[str] = None
    """Free-form status text reported by the driver."""

    current_job: Optional[str] = None

    @property
    def display_name(self) -> str:
        """Printer name, or 'Printer #<id>' when unnamed."""
        return self.name or f"Printer #{self.id}"

    @property
    def is_problematic(self) -> bool:
        """Whether the status text contains a problem keyword (any case)."""
        text = (self.status or "").lower()
        return any(keyword in text for keyword in PROBLEM_KEYWORDS)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PrinterStatus":
        """
        Raises:
            TypeError: If the entry is not a JSON object
        """
        if not isinstance(data, dict):
            raise TypeError(f"Printer entry must be an object, got {type(data).__name__}")
        return cls(
            id=data.get("id", 0),
            name=data.get("name") or "",
            type=data.get("type") or "",
            status=data.get("status"),
            current_job=data.get("current_job"),
        )
