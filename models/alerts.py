"""
Alert channel configuration and alert results.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Dict, Any, List


@dataclass
class AlertSettings:
    """
    Alert channel configuration (one per operator account).

    Empty webhook URLs mean the channel is disabled.
    """

    slack_webhook_url: str = ""
    discord_webhook_url: str = ""
    email_enabled: bool = False
    email_to: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AlertSettings":
        return cls(
            slack_webhook_url=data.get("slack_webhook_url") or "",
            discord_webhook_url=data.get("discord_webhook_url") or "",
            email_enabled=bool(data.get("email_enabled", False)),
            email_to=data.get("email_to") or "",
        )


@dataclass(frozen=True)
class AlertPreview:
    """What a trigger would currently report."""

    low_stock: List[Dict[str, Any]] = field(default_factory=list)
    printer_issues: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AlertPreview":
        return cls(
            low_stock=list(data.get("low_stock") or []),
            printer_issues=list(data.get("printer_issues") or []),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"low_stock": list(self.low_stock), "printer_issues": list(self.printer_issues)}


@dataclass(frozen=True)
class AlertTriggerResult:
    """
    Outcome of a trigger request.

    ``sent`` False with an empty channel list is a successful call that had
    nothing eligible to notify, not a failure.
    """

    sent: bool
    channels: List[str] = field(default_factory=list)

    def summary(self) -> str:
        """Operator message, e.g. 'Alerts sent: yes (channels: none)'."""
        channel_text = ", ".join(self.channels) or "none"
        return f"Alerts sent: {'yes' if self.sent else 'no'} (channels: {channel_text})"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AlertTriggerResult":
        return cls(
            sent=bool(data.get("sent", False)),
            channels=list(data.get("channels") or []),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"sent": self.sent, "channels": list(self.channels), "summary": self.summary()}
