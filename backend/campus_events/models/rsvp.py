"""EventRSVP ORM model: one row per (event, user)."""
import uuid
import enum
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, DateTime, Integer, ForeignKey, UniqueConstraint, Enum as SAEnum
from campus_events.database import Base


class RSVPStatus(str, enum.Enum):
    going = "going"
    maybe = "maybe"
    not_going = "not_going"
    waitlist = "waitlist"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EventRSVP(Base):
    __tablename__ = "event_rsvps"
    __table_args__ = (UniqueConstraint("event_id", "user_id", name="uq_event_rsvps_event_user"),)

    rsvp_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = Column(String(36), ForeignKey("events.event_id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("profiles.user_id"), nullable=False)
    status = Column(SAEnum(RSVPStatus), nullable=False, default=RSVPStatus.going)
    guest_count = Column(Integer, nullable=False, default=0)
    notes = Column(Text, nullable=True)
    # Waitlist ordering key: set once on insert, never touched by updates.
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
