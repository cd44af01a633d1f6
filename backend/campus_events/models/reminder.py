"""EventReminder ORM model: scheduled rows consumed by an external dispatcher."""
import uuid
import enum
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, Enum as SAEnum
from sqlalchemy.sql import func
from campus_events.database import Base


class ReminderType(str, enum.Enum):
    day_before = "24h"
    hour_before = "1h"
    custom = "custom"


class EventReminder(Base):
    __tablename__ = "event_reminders"
    __table_args__ = (
        UniqueConstraint("event_id", "user_id", "reminder_type", name="uq_event_reminders_event_user_type"),
    )

    reminder_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = Column(String(36), ForeignKey("events.event_id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("profiles.user_id"), nullable=False)
    reminder_type = Column(
        SAEnum(ReminderType, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    remind_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
