"""Attendance service: the attendance state machine over the store.

    NoRecord -> pending -> {waitlist | attending}
    any state -> NoRecord (removal)

Each operation follows a fixed check order (which decides whether a caller
sees 404 or 403 first):

- list:    event 404 -> per-attendee visibility filter
- request: event 404 -> duplicate 400 -> membership 403 -> insert
- change:  event 404 -> staff 403 -> pending target 400 -> user 404 -> attendance 404 -> update
- remove:  event 404 -> user 404 -> organizer-or-self 403 -> attendance 404 -> delete
"""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from socialeyes.models.attendance import Attendance, AttendanceStatus
from socialeyes.models.user import User
from socialeyes.schemas.base import MessageOut
from socialeyes.schemas.event import (
    AttendanceOut, AttendanceRequestOut, AttendanceStatusUpdate, AttendeeList, AttendeeOut, AttendeeStatus,
)
from socialeyes.services import policy
from socialeyes.services.event_service import get_attendance, get_event, get_membership, role_in_group
from socialeyes.services.outcomes import NotFound, Outcome, Success, EVENT_NOT_FOUND, USER_NOT_FOUND

logger = logging.getLogger(__name__)

ATTENDANCE_MISSING = "Attendance between the user and the event does not exist"
ATTENDANCE_MISSING_FOR_USER = "Attendance does not exist for this User"


def _get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def list_attendees(db: Session, event_id: int, requester_id: Optional[int]) -> Outcome:
    """Attendees of an event as seen by the requester (pending ones are staff-only)."""
    event = get_event(db, event_id)
    if not event:
        return NotFound(EVENT_NOT_FOUND)

    rows = (
        db.query(Attendance, User)
        .join(User, User.id == Attendance.user_id)
        .filter(Attendance.event_id == event.id)
        .order_by(Attendance.id)
        .all()
    )
    role = role_in_group(db, event.group, requester_id)
    visible = policy.visible_attendees(role, rows, status_of=lambda row: row[0].status)

    return Success(AttendeeList(attendees=[
        AttendeeOut(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            attendance=AttendeeStatus(status=attendance.status),
        )
        for attendance, user in visible
    ]))


def request_attendance(db: Session, event_id: int, requester_id: int) -> Outcome:
    """Create a pending Attendance for the requester.

    The (event, user) unique constraint is the final arbiter: if a concurrent
    request wins the insert, the IntegrityError is reported as the same
    duplicate-request rejection the pre-check would have produced.
    """
    event = get_event(db, event_id)
    if not event:
        return NotFound(EVENT_NOT_FOUND)

    existing = get_attendance(db, event.id, requester_id)
    membership = get_membership(db, event.group_id, requester_id)
    decision = policy.check_attendance_request(
        membership.status if membership else None,
        existing.status if existing else None,
    )
    if not isinstance(decision, Success):
        return decision

    db.add(Attendance(event_id=event.id, user_id=requester_id, status=AttendanceStatus.pending))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        winner = get_attendance(db, event.id, requester_id)
        if winner is None:
            raise
        logger.info("Concurrent attendance request for user %s on event %s", requester_id, event_id)
        return policy.duplicate_attendance(winner.status)

    logger.info("User %s requested attendance to event %s", requester_id, event_id)
    return Success(AttendanceRequestOut(user_id=requester_id, status=AttendanceStatus.pending))


def change_attendance_status(
    db: Session,
    event_id: int,
    requester_id: int,
    payload: AttendanceStatusUpdate,
) -> Outcome:
    """Move an existing Attendance to waitlist or attending (staff only)."""
    event = get_event(db, event_id)
    if not event:
        return NotFound(EVENT_NOT_FOUND)

    decision = policy.authorize_status_change(role_in_group(db, event.group, requester_id))
    if not isinstance(decision, Success):
        return decision

    decision = policy.check_target_status(payload.status)
    if not isinstance(decision, Success):
        return decision

    if not _get_user(db, payload.user_id):
        return NotFound(USER_NOT_FOUND)

    attendance = get_attendance(db, event.id, payload.user_id, for_update=True)
    if not attendance:
        return NotFound(ATTENDANCE_MISSING)

    previous = attendance.status
    attendance.status = payload.status
    db.commit()
    db.refresh(attendance)
    logger.info(
        "User %s moved attendance %s (event %s, user %s) from %s to %s",
        requester_id, attendance.id, event_id, payload.user_id, previous.value, attendance.status.value,
    )
    return Success(AttendanceOut.model_validate(attendance))


def remove_attendance(db: Session, event_id: int, requester_id: int, target_user_id: int) -> Outcome:
    """Delete an Attendance row (group organizer, or the attendee themself)."""
    event = get_event(db, event_id)
    if not event:
        return NotFound(EVENT_NOT_FOUND)

    if not _get_user(db, target_user_id):
        return NotFound(USER_NOT_FOUND)

    decision = policy.authorize_attendance_removal(requester_id, event.group.organizer_id, target_user_id)
    if not isinstance(decision, Success):
        return decision

    attendance = get_attendance(db, event.id, target_user_id, for_update=True)
    if not attendance:
        return NotFound(ATTENDANCE_MISSING_FOR_USER)

    db.delete(attendance)
    db.commit()
    logger.info("User %s removed attendance of user %s from event %s", requester_id, target_user_id, event_id)
    return Success(MessageOut(message="Successfully deleted attendance from event"))
