"""Pydantic schemas for check-ins."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from campus_events.models.checkin import CheckInMethod
from campus_events.schemas.user import ProfileOut


class CheckInCreate(BaseModel):
    user_id: str
    actor_user_id: str
    guest_count: int = 0
    method: CheckInMethod = CheckInMethod.manual
    notes: Optional[str] = None


class QRCheckInRequest(BaseModel):
    payload: str  # "<event_code>:<user_id>"
    actor_user_id: str


class CheckInOut(BaseModel):
    checkin_id: str
    event_id: str
    user_id: str
    rsvp_id: Optional[str] = None
    checked_in_by: str
    check_in_method: CheckInMethod
    guest_count: int
    notes: Optional[str] = None
    checked_in_at: datetime

    model_config = {"from_attributes": True}


class QREventOut(BaseModel):
    event_id: str
    title: str

    model_config = {"from_attributes": True}


class QRCheckInResult(BaseModel):
    success: bool = True
    user: ProfileOut
    event: QREventOut


class UndoCheckInResult(BaseModel):
    success: bool = True
    removed: bool
