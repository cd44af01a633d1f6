"""Pydantic schemas for Societies and memberships."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from campus_events.models.society import MemberRole, MemberStatus


class SocietyCreate(BaseModel):
    name: str
    slug: str
    created_by: str


class SocietyOut(BaseModel):
    society_id: str
    name: str
    slug: str
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    members: list[SocietyMemberOut] = []

    model_config = {"from_attributes": True}


class SocietyJoin(BaseModel):
    user_id: str  # the joining user; role and status are decided server-side


class SocietyMemberUpdate(BaseModel):
    role: Optional[MemberRole] = None
    status: Optional[MemberStatus] = None


class SocietyMemberOut(BaseModel):
    user_id: str
    role: MemberRole
    status: MemberStatus
    joined_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


# Rebuild SocietyOut now that SocietyMemberOut is defined
SocietyOut.model_rebuild()
