"""EventCheckin ORM model: attendance, independent of RSVP status."""
import uuid
import enum
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, DateTime, Integer, ForeignKey, UniqueConstraint, Enum as SAEnum
from campus_events.database import Base


class CheckInMethod(str, enum.Enum):
    qr = "qr"
    manual = "manual"
    self_ = "self"


class EventCheckin(Base):
    __tablename__ = "event_checkins"
    __table_args__ = (UniqueConstraint("event_id", "user_id", name="uq_event_checkins_event_user"),)

    checkin_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = Column(String(36), ForeignKey("events.event_id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("profiles.user_id"), nullable=False)
    rsvp_id = Column(String(36), ForeignKey("event_rsvps.rsvp_id", ondelete="SET NULL"), nullable=True)
    checked_in_by = Column(String(36), ForeignKey("profiles.user_id"), nullable=False)
    check_in_method = Column(
        SAEnum(CheckInMethod, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=CheckInMethod.manual,
    )
    guest_count = Column(Integer, nullable=False, default=0)
    notes = Column(Text, nullable=True)
    checked_in_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
