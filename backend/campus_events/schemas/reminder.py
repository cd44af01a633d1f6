"""Pydantic schemas for event reminders."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from campus_events.models.reminder import ReminderType


class ReminderSet(BaseModel):
    user_id: str
    reminder_type: ReminderType
    custom_time: Optional[datetime] = None


class ReminderOut(BaseModel):
    reminder_id: str
    event_id: str
    user_id: str
    reminder_type: ReminderType
    remind_at: datetime

    model_config = {"from_attributes": True}
