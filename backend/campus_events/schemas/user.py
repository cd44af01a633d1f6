"""Pydantic schemas for user profiles."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class ProfileCreate(BaseModel):
    email: str
    full_name: Optional[str] = None
    university: Optional[str] = None
    is_admin: bool = False


class ProfileOut(BaseModel):
    user_id: str
    email: str
    full_name: Optional[str] = None
    university: Optional[str] = None
    is_admin: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
