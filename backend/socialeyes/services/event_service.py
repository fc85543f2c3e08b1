"""Event service: store reads, policy decisions and writes for events.

Responsibilities:
- Resolve the requester's role in the event's group (organizer / co-host /
  member / non-member) and ask the policy module for a decision
- Event create / edit / delete restricted to organizer and co-hosts
- Image upload for staff and confirmed attendees
- Naive event dates are interpreted in the group's timezone and stored in UTC
- Explicit allow-list of editable event fields
"""
import logging
from datetime import datetime
from typing import Any, Optional

import pytz
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from socialeyes.models.attendance import Attendance, AttendanceStatus
from socialeyes.models.event import Event, EventImage
from socialeyes.models.group import Group, Membership, Venue
from socialeyes.schemas.event import (
    EventCreate, EventUpdate, EventOut, EventList, EventListItem, EventDetail,
    EventImageCreate, EventImageOut, GroupSummary, GroupDetailSummary, VenueSummary, VenueDetail,
)
from socialeyes.schemas.base import MessageOut
from socialeyes.services import policy
from socialeyes.services.outcomes import (
    BadRequest, NotFound, Outcome, Success, EVENT_NOT_FOUND, GROUP_NOT_FOUND, VENUE_NOT_FOUND,
)

logger = logging.getLogger(__name__)

EDITABLE_EVENT_FIELDS = (
    "venue_id", "name", "type", "capacity", "price", "description", "start_date", "end_date",
)
END_BEFORE_START = "End date is less than start date"


# ---------------------------------------------------------------------------
# Store accessors
# ---------------------------------------------------------------------------
def get_event(db: Session, event_id: int) -> Optional[Event]:
    return db.query(Event).filter(Event.id == event_id).first()


def get_membership(db: Session, group_id: int, user_id: Optional[int]) -> Optional[Membership]:
    if user_id is None:
        return None
    return (
        db.query(Membership)
        .filter(Membership.group_id == group_id, Membership.user_id == user_id)
        .first()
    )


def get_attendance(db: Session, event_id: int, user_id: int, for_update: bool = False) -> Optional[Attendance]:
    query = db.query(Attendance).filter(Attendance.event_id == event_id, Attendance.user_id == user_id)
    if for_update:
        query = query.with_for_update()
    return query.first()


def role_in_group(db: Session, group: Group, requester_id: Optional[int]) -> policy.Role:
    membership = get_membership(db, group.id, requester_id)
    return policy.resolve_role(
        requester_id,
        group.organizer_id,
        membership.status if membership else None,
    )


def count_attending(db: Session, event_id: int) -> int:
    return (
        db.query(func.count(Attendance.id))
        .filter(Attendance.event_id == event_id, Attendance.status == AttendanceStatus.attending)
        .scalar()
    )


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------
def to_utc(value: datetime, tz_name: str) -> datetime:
    """Naive datetimes are wall-clock time in ``tz_name``; aware ones are converted."""
    if value.tzinfo is None:
        value = pytz.timezone(tz_name).localize(value)
    return value.astimezone(pytz.utc)


def _check_dates(start: datetime, end: datetime) -> Optional[BadRequest]:
    if end < start:
        return BadRequest(errors={"endDate": END_BEFORE_START})
    return None


def _venue_missing(db: Session, venue_id: Optional[int], group_id: int) -> bool:
    """A venue must exist and belong to the event's group."""
    if venue_id is None:
        return False
    return db.query(Venue).filter(Venue.id == venue_id, Venue.group_id == group_id).first() is None


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------
def list_events(db: Session) -> EventList:
    """All events with group/venue summaries and attendance counts, no description."""
    attending = dict(
        db.query(Attendance.event_id, func.count(Attendance.id))
        .filter(Attendance.status == AttendanceStatus.attending)
        .group_by(Attendance.event_id)
        .all()
    )
    events = (
        db.query(Event)
        .options(selectinload(Event.images), selectinload(Event.group), selectinload(Event.venue))
        .order_by(Event.start_date)
        .all()
    )
    items = []
    for event in events:
        preview = next((img.url for img in event.images if img.preview), None)
        items.append(EventListItem(
            id=event.id,
            group_id=event.group_id,
            venue_id=event.venue_id,
            name=event.name,
            type=event.type,
            start_date=event.start_date,
            end_date=event.end_date,
            num_attending=attending.get(event.id, 0),
            preview_image=preview,
            group=GroupSummary.model_validate(event.group),
            venue=VenueSummary.model_validate(event.venue) if event.venue else None,
        ))
    return EventList(events=items)


def get_event_detail(db: Session, event_id: int) -> Outcome:
    event = get_event(db, event_id)
    if not event:
        return NotFound(EVENT_NOT_FOUND)

    detail = EventDetail(
        **EventOut.model_validate(event).model_dump(),
        num_attending=count_attending(db, event.id),
        group=GroupDetailSummary.model_validate(event.group),
        venue=VenueDetail.model_validate(event.venue) if event.venue else None,
        event_images=[EventImageOut.model_validate(img) for img in event.images],
    )
    return Success(detail)


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------
def create_event(db: Session, group_id: int, requester_id: int, payload: EventCreate) -> Outcome:
    """Create an event in a group (organizer or co-host only)."""
    group = db.query(Group).filter(Group.id == group_id).first()
    if not group:
        return NotFound(GROUP_NOT_FOUND)

    decision = policy.authorize_event_management(role_in_group(db, group, requester_id))
    if not isinstance(decision, Success):
        return decision

    if _venue_missing(db, payload.venue_id, group.id):
        return NotFound(VENUE_NOT_FOUND)

    start = to_utc(payload.start_date, group.timezone)
    end = to_utc(payload.end_date, group.timezone)
    invalid = _check_dates(start, end)
    if invalid:
        return invalid

    event = Event(
        group_id=group.id,
        venue_id=payload.venue_id,
        name=payload.name,
        type=payload.type,
        capacity=payload.capacity,
        price=payload.price,
        description=payload.description,
        start_date=start,
        end_date=end,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info("Created event '%s' (%s) in group %s by user %s", event.name, event.id, group.id, requester_id)
    return Success(EventOut.model_validate(event))


def update_event(db: Session, event_id: int, requester_id: int, payload: EventUpdate) -> Outcome:
    """Edit an event. Only fields in EDITABLE_EVENT_FIELDS are ever written."""
    event = get_event(db, event_id)
    if not event:
        return NotFound(EVENT_NOT_FOUND)

    decision = policy.authorize_event_management(role_in_group(db, event.group, requester_id))
    if not isinstance(decision, Success):
        return decision

    updates: dict[str, Any] = {
        field: value
        for field, value in payload.model_dump(exclude_unset=True).items()
        if field in EDITABLE_EVENT_FIELDS
    }

    if _venue_missing(db, updates.get("venue_id"), event.group_id):
        return NotFound(VENUE_NOT_FOUND)

    tz_name = event.group.timezone
    for field in ("start_date", "end_date"):
        if updates.get(field) is not None:
            updates[field] = to_utc(updates[field], tz_name)
    start = updates.get("start_date") or to_utc(event.start_date, "UTC")
    end = updates.get("end_date") or to_utc(event.end_date, "UTC")
    invalid = _check_dates(start, end)
    if invalid:
        return invalid

    for field, value in updates.items():
        setattr(event, field, value)

    db.commit()
    db.refresh(event)
    logger.info("Updated event %s fields %s by user %s", event_id, sorted(updates), requester_id)
    return Success(EventOut.model_validate(event))


def delete_event(db: Session, event_id: int, requester_id: int) -> Outcome:
    event = get_event(db, event_id)
    if not event:
        return NotFound(EVENT_NOT_FOUND)

    decision = policy.authorize_event_management(role_in_group(db, event.group, requester_id))
    if not isinstance(decision, Success):
        return decision

    db.delete(event)
    db.commit()
    logger.info("Deleted event %s by user %s", event_id, requester_id)
    return Success(MessageOut(message="Successfully deleted"))


def add_image(db: Session, event_id: int, requester_id: int, payload: EventImageCreate) -> Outcome:
    """Attach an image to an event (staff, or an attendee whose status is attending)."""
    event = get_event(db, event_id)
    if not event:
        return NotFound(EVENT_NOT_FOUND)

    role = role_in_group(db, event.group, requester_id)
    attendance = get_attendance(db, event.id, requester_id)
    decision = policy.authorize_image_upload(role, attendance.status if attendance else None)
    if not isinstance(decision, Success):
        return decision

    image = EventImage(event_id=event.id, url=payload.url, preview=payload.preview)
    db.add(image)
    db.commit()
    db.refresh(image)
    logger.info("Added image %s to event %s by user %s", image.id, event_id, requester_id)
    return Success(EventImageOut.model_validate(image))
