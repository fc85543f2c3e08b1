"""Event API routes: delegates to event_service for authorization and writes."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from socialeyes.auth import get_current_user_id
from socialeyes.database import get_db
from socialeyes.schemas.base import MessageOut
from socialeyes.schemas.event import EventDetail, EventImageCreate, EventImageOut, EventList, EventOut, EventUpdate
from socialeyes.services import event_service
from socialeyes.services.outcomes import unwrap

router = APIRouter()


@router.get("/", response_model=EventList)
def list_events(db: Session = Depends(get_db)):
    """List all events with group and venue summaries."""
    return event_service.list_events(db)


@router.get("/{event_id}", response_model=EventDetail)
def get_event(event_id: int, db: Session = Depends(get_db)):
    """Fetch a single event with its group, venue and images."""
    return unwrap(event_service.get_event_detail(db, event_id))


@router.put("/{event_id}", response_model=EventOut)
def update_event(
    event_id: int,
    payload: EventUpdate,
    requester_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Edit an event (organizer or co-host only)."""
    return unwrap(event_service.update_event(db, event_id, requester_id, payload))


@router.delete("/{event_id}", response_model=MessageOut)
def delete_event(
    event_id: int,
    requester_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Delete an event with its attendances and images (organizer or co-host only)."""
    return unwrap(event_service.delete_event(db, event_id, requester_id))


@router.post("/{event_id}/images", response_model=EventImageOut)
def add_event_image(
    event_id: int,
    payload: EventImageCreate,
    requester_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Add an image to an event (organizer, co-host, or attending user)."""
    return unwrap(event_service.add_image(db, event_id, requester_id, payload))
