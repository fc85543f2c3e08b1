"""Attendance ORM model: one row per (event, user) attendance request."""
import enum
from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint, Enum as SAEnum
from sqlalchemy.orm import relationship
from socialeyes.database import Base


class AttendanceStatus(str, enum.Enum):
    pending = "pending"
    waitlist = "waitlist"
    attending = "attending"


class Attendance(Base):
    __tablename__ = "attendances"
    __table_args__ = (UniqueConstraint("event_id", "user_id", name="uq_attendance_event_user"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    status = Column(
        SAEnum(AttendanceStatus, create_constraint=True, name="attendance_status"),
        nullable=False,
        default=AttendanceStatus.pending,
    )

    event = relationship("Event", back_populates="attendances")
    user = relationship("User")
