"""Event and EventImage ORM models."""
import enum
from sqlalchemy import Column, Integer, String, Text, Boolean, Numeric, DateTime, ForeignKey, Enum as SAEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from socialeyes.database import Base


class EventType(str, enum.Enum):
    in_person = "In person"
    online = "Online"


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False)
    venue_id = Column(Integer, ForeignKey("venues.id", ondelete="SET NULL"), nullable=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(
        SAEnum(EventType, values_callable=lambda e: [m.value for m in e], name="event_type"),
        nullable=False,
        default=EventType.in_person,
    )
    capacity = Column(Integer, nullable=False, default=0)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    start_date = Column(DateTime(timezone=True), nullable=False)  # UTC
    end_date = Column(DateTime(timezone=True), nullable=False)  # UTC
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    group = relationship("Group", back_populates="events")
    venue = relationship("Venue")
    attendances = relationship("Attendance", back_populates="event", cascade="all, delete-orphan")
    images = relationship("EventImage", back_populates="event", cascade="all, delete-orphan")


class EventImage(Base):
    __tablename__ = "event_images"

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    url = Column(String(500), nullable=False)
    preview = Column(Boolean, nullable=False, default=False)

    event = relationship("Event", back_populates="images")
