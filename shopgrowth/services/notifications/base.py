"""Notification service interface."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class NotificationMessage:
    category: str
    message_text: str
    priority: str = "normal"
    timestamp: datetime = field(default_factory=_utcnow)

    def to_payload(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["timestamp"] = self.timestamp.isoformat()
        return payload


@dataclass
class NotificationResult:
    status: str
    reason: str


class NotificationService:
    """Base interface for notification providers."""

    name = "base"

    def send(self, message: NotificationMessage, destination: str) -> bool:
        """Deliver ``message``; return False when the provider rejected it."""
        raise NotImplementedError
