"""Group, Membership and Venue ORM models."""
import enum
from sqlalchemy import (
    Column, Integer, String, Text, Boolean, Numeric, DateTime, ForeignKey, UniqueConstraint,
    Enum as SAEnum,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from socialeyes.database import Base


class GroupType(str, enum.Enum):
    in_person = "In person"
    online = "Online"


class MembershipStatus(str, enum.Enum):
    member = "member"
    co_host = "co-host"
    pending = "pending"


def _enum_values(enum_cls):
    return [m.value for m in enum_cls]


class Group(Base):
    __tablename__ = "groups"

    id = Column(Integer, primary_key=True, autoincrement=True)
    organizer_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    name = Column(String(60), nullable=False)
    about = Column(Text, nullable=True)
    type = Column(
        SAEnum(GroupType, values_callable=_enum_values, name="group_type"),
        nullable=False,
        default=GroupType.in_person,
    )
    private = Column(Boolean, nullable=False, default=False)
    city = Column(String(100), nullable=False)
    state = Column(String(100), nullable=False)
    timezone = Column(String(50), nullable=False, default="UTC")  # IANA tz
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    memberships = relationship("Membership", back_populates="group", cascade="all, delete-orphan")
    venues = relationship("Venue", back_populates="group", cascade="all, delete-orphan")
    events = relationship("Event", back_populates="group", cascade="all, delete-orphan")


class Membership(Base):
    __tablename__ = "memberships"
    __table_args__ = (UniqueConstraint("group_id", "user_id", name="uq_membership_group_user"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    status = Column(
        SAEnum(MembershipStatus, values_callable=_enum_values, create_constraint=True,
               name="membership_status"),
        nullable=False,
        default=MembershipStatus.pending,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    group = relationship("Group", back_populates="memberships")


class Venue(Base):
    __tablename__ = "venues"

    id = Column(Integer, primary_key=True, autoincrement=True)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False)
    address = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False)
    state = Column(String(100), nullable=False)
    lat = Column(Numeric(10, 7), nullable=True)
    lng = Column(Numeric(10, 7), nullable=True)

    group = relationship("Group", back_populates="venues")
