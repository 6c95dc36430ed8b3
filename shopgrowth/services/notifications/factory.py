"""Notification service factory."""
from __future__ import annotations

import logging
from functools import lru_cache

from shopgrowth.core.config import settings
from shopgrowth.services.notifications.base import NotificationService
from shopgrowth.services.notifications.log_outbox import LogOutboxNotificationService
from shopgrowth.services.notifications.noop import NoopNotificationService

logger = logging.getLogger(__name__)

PROVIDERS = {
    "noop": NoopNotificationService,
    "log_outbox": LogOutboxNotificationService,
}


@lru_cache
def get_notification_service() -> NotificationService:
    provider = settings.notifications_provider.lower()
    service_cls = PROVIDERS.get(provider)
    if service_cls is None:
        logger.warning("Unknown notifications provider %r; falling back to noop", provider)
        service_cls = NoopNotificationService
    return service_cls()
