"""No-op notification provider (logs only)."""
from __future__ import annotations

import logging

from shopgrowth.services.notifications.base import NotificationMessage, NotificationService


logger = logging.getLogger(__name__)


class NoopNotificationService(NotificationService):
    name = "noop"

    def send(self, message: NotificationMessage, destination: str) -> bool:
        logger.info(
            "Notification queued (noop) category=%s priority=%s destination=%s",
            message.category,
            message.priority,
            destination,
        )
        return True
