"""Notification configuration routes."""
from __future__ import annotations

from fastapi import APIRouter, Request

from shopgrowth.api.schemas.plan_tasks import NotificationConfigResponse
from shopgrowth.core.config import settings
from shopgrowth.observability.metrics import log_metric
from shopgrowth.observability.tracing import trace


router = APIRouter()


@router.get("/notifications/config", response_model=NotificationConfigResponse, tags=["notifications"])
def get_notifications_config(request: Request) -> NotificationConfigResponse:
    request_id = getattr(request.state, "request_id", None)
    with trace(
        "notifications.config",
        metadata={"provider": settings.notifications_provider},
        request_id=request_id,
    ):
        log_metric("notifications.config.success", 1, metadata={"provider": settings.notifications_provider})
        return NotificationConfigResponse(
            enabled=settings.notifications_enabled,
            provider=settings.notifications_provider,
            destination=settings.notification_destination,
            request_id=request_id or "",
        )
