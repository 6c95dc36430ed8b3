"""Outbox provider: logs each message and keeps the most recent ones in memory."""
from __future__ import annotations

import logging
from collections import deque
from threading import Lock
from typing import Deque, List, Tuple

from shopgrowth.services.notifications.base import NotificationMessage, NotificationService


logger = logging.getLogger(__name__)

OUTBOX_SIZE = 200


class LogOutboxNotificationService(NotificationService):
    name = "log_outbox"

    def __init__(self, maxlen: int = OUTBOX_SIZE) -> None:
        self._outbox: Deque[Tuple[str, NotificationMessage]] = deque(maxlen=maxlen)
        self._lock = Lock()

    def send(self, message: NotificationMessage, destination: str) -> bool:
        with self._lock:
            self._outbox.append((destination, message))
        logger.info("[outbox] %s -> %s: %s", message.category, destination, message.message_text)
        return True

    def sent(self) -> List[Tuple[str, NotificationMessage]]:
        with self._lock:
            return list(self._outbox)
