"""Event access and attendance policy.

Pure decision functions over snapshots of Group / Membership / Attendance
rows. Nothing here touches the database: callers fetch the rows, ask for a
decision, and persist the result themselves.

Every decision returns an outcome: ``Success()`` means allow, anything else is
the rejection the caller should hand back unchanged.
"""
import enum
import logging
from typing import Iterable, Optional, TypeVar

from socialeyes.models.attendance import AttendanceStatus
from socialeyes.models.group import MembershipStatus
from socialeyes.services.outcomes import BadRequest, Forbidden, Outcome, Success

logger = logging.getLogger(__name__)

ALLOW = Success()

ATTENDANCE_ALREADY_REQUESTED = "Attendance has already been requested"
ALREADY_ATTENDING = "User is already an attendee of the event"
ALREADY_IN_ATTENDANCE = "Attendee already in attendance"
PENDING_TARGET_REJECTED = "Cannot change an attendance status to pending"


class Role(str, enum.Enum):
    organizer = "organizer"
    co_host = "co-host"
    member = "member"
    non_member = "non-member"


STAFF_ROLES = frozenset({Role.organizer, Role.co_host})


def resolve_role(
    requester_id: Optional[int],
    organizer_id: int,
    membership_status: Optional[MembershipStatus],
) -> Role:
    """Effective role of a requester in a group.

    Precedence is organizer > co-host > member > non-member, so an organizer
    who also holds a Membership row is still the organizer. Any Membership row
    that is not ``co-host`` (including ``pending``) counts as a plain member.
    """
    if requester_id is None:
        return Role.non_member
    if requester_id == organizer_id:
        return Role.organizer
    if membership_status is None:
        return Role.non_member
    if MembershipStatus(membership_status) == MembershipStatus.co_host:
        return Role.co_host
    return Role.member


def is_staff(role: Role) -> bool:
    return role in STAFF_ROLES


T = TypeVar("T")


def visible_attendees(
    role: Role,
    attendees: Iterable[T],
    status_of=lambda attendee: attendee.status,
) -> list[T]:
    """Filter an attendee listing for the given viewer.

    Staff see everyone. Everybody else sees each attendee whose status is not
    ``pending``; the check is made per attendee.
    """
    if is_staff(role):
        return list(attendees)
    return [a for a in attendees if AttendanceStatus(status_of(a)) != AttendanceStatus.pending]


def authorize_event_management(role: Role) -> Outcome:
    """Edit / delete an event (and create events or venues in the group)."""
    if is_staff(role):
        return ALLOW
    logger.debug("Event management denied for role %s", role.value)
    return Forbidden()


def authorize_image_upload(role: Role, attendance_status: Optional[AttendanceStatus]) -> Outcome:
    """Staff may always add images; otherwise only a confirmed attendee may.

    A found Attendance row below ``attending`` is rejected just like a missing
    one.
    """
    if is_staff(role):
        return ALLOW
    if attendance_status is not None and AttendanceStatus(attendance_status) == AttendanceStatus.attending:
        return ALLOW
    logger.debug("Image upload denied for role %s (attendance=%s)", role.value, attendance_status)
    return Forbidden()


def duplicate_attendance_message(existing_status: AttendanceStatus) -> str:
    existing_status = AttendanceStatus(existing_status)
    if existing_status == AttendanceStatus.pending:
        return ATTENDANCE_ALREADY_REQUESTED
    if existing_status == AttendanceStatus.attending:
        return ALREADY_ATTENDING
    return ALREADY_IN_ATTENDANCE


def duplicate_attendance(existing_status: AttendanceStatus) -> BadRequest:
    return BadRequest(message=duplicate_attendance_message(existing_status))


def check_attendance_request(
    membership_status: Optional[MembershipStatus],
    existing_status: Optional[AttendanceStatus],
) -> Outcome:
    """Gate the NoRecord -> pending transition.

    An existing row is reported first, with a message that depends on its
    status; then a Membership (of any status) in the event's group is required.
    """
    if existing_status is not None:
        return duplicate_attendance(existing_status)
    if membership_status is None:
        logger.debug("Attendance request denied: requester is not a group member")
        return Forbidden()
    return ALLOW


def authorize_status_change(role: Role) -> Outcome:
    """Only the organizer or a co-host may change someone's attendance status."""
    if is_staff(role):
        return ALLOW
    logger.debug("Attendance status change denied for role %s", role.value)
    return Forbidden()


def check_target_status(target_status: AttendanceStatus) -> Outcome:
    """``pending`` is an entry-only state and never a valid manual target."""
    if AttendanceStatus(target_status) == AttendanceStatus.pending:
        return BadRequest(errors={"status": PENDING_TARGET_REJECTED})
    return ALLOW


def authorize_attendance_removal(requester_id: int, organizer_id: int, target_user_id: int) -> Outcome:
    """Organizer of the group, or the attendee removing themself."""
    # co-hosts may change attendance status but may not remove other attendees
    if requester_id == organizer_id or requester_id == target_user_id:
        return ALLOW
    logger.debug("Attendance removal of user %s denied for user %s", target_user_id, requester_id)
    return Forbidden()

