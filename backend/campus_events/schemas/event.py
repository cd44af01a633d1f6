"""Pydantic schemas for Events."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class EventCreate(BaseModel):
    society_id: str
    created_by: str
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    start_time: datetime
    end_time: Optional[datetime] = None
    capacity: Optional[int] = Field(None, ge=1)
    rsvp_deadline: Optional[datetime] = None
    allow_guests: bool = False
    max_guests_per_rsvp: Optional[int] = Field(None, ge=0)
    check_in_enabled: bool = False


class EventUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    capacity: Optional[int] = Field(None, ge=1)
    rsvp_deadline: Optional[datetime] = None
    allow_guests: Optional[bool] = None
    max_guests_per_rsvp: Optional[int] = Field(None, ge=0)
    check_in_enabled: Optional[bool] = None


class EventOut(BaseModel):
    event_id: str
    society_id: str
    created_by: Optional[str] = None
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    start_time: datetime
    end_time: Optional[datetime] = None
    capacity: Optional[int] = None
    rsvp_deadline: Optional[datetime] = None
    allow_guests: bool
    max_guests_per_rsvp: Optional[int] = None
    check_in_enabled: bool
    event_code: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
