"""Schemas for tracked plan tasks and reminder runs."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from shopgrowth.api.schemas.growth_plan import TaskCategory


class TrackedTask(BaseModel):
    id: str
    day: str
    text: str
    owner_label: str
    category: TaskCategory
    completed: bool
    completed_at: Optional[datetime] = None


class TaskListResponse(BaseModel):
    plan_id: str
    day: Optional[str] = None
    tasks: List[TrackedTask]


class TaskCompleteResponse(BaseModel):
    plan_id: str
    task: TrackedTask
    request_id: str


class ReminderRunResponse(BaseModel):
    plan_id: str
    day: str
    due_tasks: int
    status: str
    reason: str
    request_id: str


class NotificationConfigResponse(BaseModel):
    enabled: bool
    provider: str
    destination: str
    request_id: str
