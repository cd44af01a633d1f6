"""Profile ORM model: the platform's user record."""
import uuid
from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.sql import func
from campus_events.database import Base


class Profile(Base):
    __tablename__ = "profiles"

    user_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), nullable=False, unique=True)
    full_name = Column(String(150), nullable=True)
    university = Column(String(150), nullable=True)
    is_admin = Column(Boolean, nullable=False, default=False)  # platform admin
    created_at = Column(DateTime(timezone=True), server_default=func.now())
