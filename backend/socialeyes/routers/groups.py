"""Group management API routes: groups, memberships, venues and group events."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from socialeyes.auth import get_current_user_id
from socialeyes.database import get_db
from socialeyes.models.group import Group, Membership, MembershipStatus, Venue
from socialeyes.models.user import User
from socialeyes.schemas.event import EventCreate, EventOut
from socialeyes.schemas.group import GroupCreate, GroupOut, MembershipAdd, MembershipOut, VenueCreate, VenueOut
from socialeyes.services import event_service, policy
from socialeyes.services.outcomes import (
    BadRequest, Forbidden, NotFound, Success, raise_for, unwrap, GROUP_NOT_FOUND, USER_NOT_FOUND,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _get_group(db: Session, group_id: int) -> Group:
    group = db.query(Group).filter(Group.id == group_id).first()
    if not group:
        raise_for(NotFound(GROUP_NOT_FOUND))
    return group


@router.post("/", response_model=GroupOut, status_code=status.HTTP_201_CREATED)
def create_group(
    payload: GroupCreate,
    requester_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Create a new group. The requester is its organizer and is added as co-host."""
    group = Group(organizer_id=requester_id, **payload.model_dump())
    db.add(group)
    db.flush()

    db.add(Membership(group_id=group.id, user_id=requester_id, status=MembershipStatus.co_host))
    db.commit()
    db.refresh(group)
    logger.info("Created group '%s' (%s) by user %s", group.name, group.id, requester_id)
    return group


@router.get("/", response_model=list[GroupOut])
def list_groups(db: Session = Depends(get_db)):
    """List all groups."""
    return db.query(Group).order_by(Group.id).all()


@router.get("/{group_id}", response_model=GroupOut)
def get_group(group_id: int, db: Session = Depends(get_db)):
    """Fetch a single group by ID."""
    return _get_group(db, group_id)


@router.post("/{group_id}/members", response_model=MembershipOut, status_code=status.HTTP_201_CREATED)
def add_member(
    group_id: int,
    payload: MembershipAdd,
    requester_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Add a member to a group with the given status (organizer only)."""
    group = _get_group(db, group_id)
    if requester_id != group.organizer_id:
        raise_for(Forbidden())

    if not db.query(User).filter(User.id == payload.user_id).first():
        raise_for(NotFound(USER_NOT_FOUND))

    if event_service.get_membership(db, group_id, payload.user_id):
        raise_for(BadRequest(message="User is already a member of the group"))

    member = Membership(group_id=group_id, user_id=payload.user_id, status=payload.status)
    db.add(member)
    db.commit()
    db.refresh(member)
    logger.info("Added user %s to group %s as %s", payload.user_id, group_id, payload.status.value)
    return member


@router.post("/{group_id}/venues", response_model=VenueOut, status_code=status.HTTP_201_CREATED)
def create_venue(
    group_id: int,
    payload: VenueCreate,
    requester_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Create a venue for a group (organizer or co-host only)."""
    group = _get_group(db, group_id)
    decision = policy.authorize_event_management(event_service.role_in_group(db, group, requester_id))
    if not isinstance(decision, Success):
        raise_for(decision)

    venue = Venue(group_id=group_id, **payload.model_dump())
    db.add(venue)
    db.commit()
    db.refresh(venue)
    logger.info("Created venue %s for group %s by user %s", venue.id, group_id, requester_id)
    return venue


@router.post("/{group_id}/events", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def create_event(
    group_id: int,
    payload: EventCreate,
    requester_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Create an event in a group (organizer or co-host only)."""
    return unwrap(event_service.create_event(db, group_id, requester_id, payload))
