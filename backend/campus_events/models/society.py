"""Society and SocietyMember ORM models."""
import uuid
import enum
from sqlalchemy import Column, String, DateTime, ForeignKey, Enum as SAEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from campus_events.database import Base


class MemberRole(str, enum.Enum):
    member = "member"
    moderator = "moderator"
    admin = "admin"


class MemberStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class Society(Base):
    __tablename__ = "societies"

    society_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(150), nullable=False)
    slug = Column(String(150), nullable=False, unique=True)
    created_by = Column(String(36), ForeignKey("profiles.user_id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    members = relationship("SocietyMember", back_populates="society", cascade="all, delete-orphan")


class SocietyMember(Base):
    __tablename__ = "society_members"

    society_id = Column(String(36), ForeignKey("societies.society_id"), primary_key=True)
    user_id = Column(String(36), ForeignKey("profiles.user_id"), primary_key=True)
    role = Column(SAEnum(MemberRole), nullable=False, default=MemberRole.member)
    status = Column(SAEnum(MemberStatus), nullable=False, default=MemberStatus.pending)
    joined_at = Column(DateTime(timezone=True), server_default=func.now())

    society = relationship("Society", back_populates="members")
