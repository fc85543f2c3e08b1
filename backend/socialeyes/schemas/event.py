"""Pydantic schemas for Events, EventImages and Attendance."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator

from socialeyes.models.attendance import AttendanceStatus
from socialeyes.models.event import EventType
from socialeyes.schemas.base import CamelModel


class EventCreate(CamelModel):
    venue_id: Optional[int] = None
    name: str = Field(min_length=5, max_length=100)
    type: EventType = EventType.in_person
    capacity: int = Field(ge=0)
    price: float = Field(ge=0)
    description: Optional[str] = None
    start_date: datetime
    end_date: datetime


class EventUpdate(CamelModel):
    """Fields an organizer or co-host may change. Anything else is rejected."""

    venue_id: Optional[int] = None
    name: Optional[str] = Field(None, min_length=5, max_length=100)
    type: Optional[EventType] = None
    capacity: Optional[int] = Field(None, ge=0)
    price: Optional[float] = Field(None, ge=0)
    description: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    model_config = {**CamelModel.model_config, "extra": "forbid"}

    @field_validator("name", "type", "capacity", "price", "start_date", "end_date")
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class EventOut(CamelModel):
    id: int
    group_id: int
    venue_id: Optional[int] = None
    name: str
    type: EventType
    capacity: int
    price: float
    description: Optional[str] = None
    start_date: datetime
    end_date: datetime


class GroupSummary(CamelModel):
    id: int
    name: str
    city: str
    state: str


class GroupDetailSummary(GroupSummary):
    private: bool


class VenueSummary(CamelModel):
    id: int
    city: str
    state: str


class VenueDetail(VenueSummary):
    address: str
    lat: Optional[float] = None
    lng: Optional[float] = None


class EventImageCreate(CamelModel):
    url: str = Field(min_length=1, max_length=500)
    preview: bool = False


class EventImageOut(CamelModel):
    id: int
    url: str
    preview: bool


class EventListItem(CamelModel):
    id: int
    group_id: int
    venue_id: Optional[int] = None
    name: str
    type: EventType
    start_date: datetime
    end_date: datetime
    num_attending: int = 0
    preview_image: Optional[str] = None
    group: Optional[GroupSummary] = Field(None, alias="Group")
    venue: Optional[VenueSummary] = Field(None, alias="Venue")


class EventList(CamelModel):
    events: list[EventListItem] = Field(default_factory=list, alias="Events")


class EventDetail(EventOut):
    num_attending: int = 0
    group: Optional[GroupDetailSummary] = Field(None, alias="Group")
    venue: Optional[VenueDetail] = Field(None, alias="Venue")
    event_images: list[EventImageOut] = Field(default_factory=list, alias="EventImages")


class AttendanceRequestOut(CamelModel):
    user_id: int
    status: AttendanceStatus


class AttendanceStatusUpdate(CamelModel):
    user_id: int
    status: AttendanceStatus


class AttendanceOut(CamelModel):
    id: int
    event_id: int
    user_id: int
    status: AttendanceStatus


class AttendeeStatus(CamelModel):
    status: AttendanceStatus


class AttendeeOut(CamelModel):
    id: int
    first_name: str
    last_name: str
    attendance: AttendeeStatus = Field(alias="Attendance")


class AttendeeList(CamelModel):
    attendees: list[AttendeeOut] = Field(default_factory=list, alias="Attendees")
