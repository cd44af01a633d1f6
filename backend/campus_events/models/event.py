"""Event ORM model."""
import uuid
from sqlalchemy import Column, String, Text, Boolean, DateTime, Integer, ForeignKey
from sqlalchemy.sql import func
from campus_events.database import Base


class Event(Base):
    __tablename__ = "events"

    event_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    society_id = Column(String(36), ForeignKey("societies.society_id"), nullable=False)
    created_by = Column(String(36), ForeignKey("profiles.user_id"), nullable=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(500), nullable=True)
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=True)
    capacity = Column(Integer, nullable=True)  # NULL = unlimited
    rsvp_deadline = Column(DateTime(timezone=True), nullable=True)
    allow_guests = Column(Boolean, nullable=False, default=False)
    max_guests_per_rsvp = Column(Integer, nullable=True)  # NULL = no per-RSVP limit
    check_in_enabled = Column(Boolean, nullable=False, default=False)
    event_code = Column(String(16), nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
