"""Pydantic schemas for RSVPs and their aggregates."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from campus_events.models.rsvp import RSVPStatus


class RSVPSubmit(BaseModel):
    user_id: str
    status: RSVPStatus = RSVPStatus.going
    guest_count: int = 0
    notes: Optional[str] = None


class RSVPResult(BaseModel):
    success: bool = True
    status: RSVPStatus  # effective status, may be waitlist when going was requested


class CancelResult(BaseModel):
    success: bool = True
    promoted_user_ids: list[str] = []


class RSVPOut(BaseModel):
    rsvp_id: str
    event_id: str
    user_id: str
    status: RSVPStatus
    guest_count: int
    notes: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class AttendeeOut(RSVPOut):
    checked_in: bool = False


class RSVPCountsOut(BaseModel):
    going: int
    maybe: int
    waitlist: int
    total_guests: int


class TicketOut(BaseModel):
    qr_data: str
    event_title: str
    status: RSVPStatus
