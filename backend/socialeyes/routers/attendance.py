"""Attendee listing and attendance request / status / removal routes."""
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from socialeyes.auth import get_current_user_id, get_optional_user_id
from socialeyes.database import get_db
from socialeyes.schemas.base import MessageOut
from socialeyes.schemas.event import AttendanceOut, AttendanceRequestOut, AttendanceStatusUpdate, AttendeeList
from socialeyes.services import attendance_service
from socialeyes.services.outcomes import unwrap

router = APIRouter()


@router.get("/{event_id}/attendees", response_model=AttendeeList)
def list_attendees(
    event_id: int,
    requester_id: Optional[int] = Depends(get_optional_user_id),
    db: Session = Depends(get_db),
):
    """All attendees for staff; everyone else does not see pending requests."""
    return unwrap(attendance_service.list_attendees(db, event_id, requester_id))


@router.post("/{event_id}/attendance", response_model=AttendanceRequestOut)
def request_attendance(
    event_id: int,
    requester_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Request to attend an event. The requester must be a member of its group."""
    return unwrap(attendance_service.request_attendance(db, event_id, requester_id))


@router.put("/{event_id}/attendance", response_model=AttendanceOut)
def change_attendance_status(
    event_id: int,
    payload: AttendanceStatusUpdate,
    requester_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Change an attendance status to waitlist or attending (organizer / co-host)."""
    return unwrap(attendance_service.change_attendance_status(db, event_id, requester_id, payload))


@router.delete("/{event_id}/attendance/{user_id}", response_model=MessageOut)
def remove_attendance(
    event_id: int,
    user_id: int,
    requester_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Remove an attendance (group organizer, or the attendee themself)."""
    return unwrap(attendance_service.remove_attendance(db, event_id, requester_id, user_id))
