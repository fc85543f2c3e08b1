"""Pydantic schemas for Groups, Memberships and Venues."""
from datetime import datetime
from typing import Optional

import pytz
from pydantic import Field, field_validator

from socialeyes.models.group import GroupType, MembershipStatus
from socialeyes.schemas.base import CamelModel


class GroupCreate(CamelModel):
    name: str = Field(min_length=1, max_length=60)
    about: Optional[str] = None
    type: GroupType = GroupType.in_person
    private: bool = False
    city: str
    state: str
    timezone: str = "UTC"

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            pytz.timezone(value)
        except pytz.UnknownTimeZoneError:
            raise ValueError(f"Unknown timezone: {value}")
        return value


class GroupOut(CamelModel):
    id: int
    organizer_id: int
    name: str
    about: Optional[str] = None
    type: GroupType
    private: bool
    city: str
    state: str
    timezone: str
    created_at: Optional[datetime] = None


class MembershipAdd(CamelModel):
    user_id: int
    status: MembershipStatus = MembershipStatus.member


class MembershipOut(CamelModel):
    id: int
    group_id: int
    user_id: int
    status: MembershipStatus


class VenueCreate(CamelModel):
    address: str
    city: str
    state: str
    lat: Optional[float] = Field(None, ge=-90, le=90)
    lng: Optional[float] = Field(None, ge=-180, le=180)


class VenueOut(CamelModel):
    id: int
    group_id: int
    address: str
    city: str
    state: str
    lat: Optional[float] = None
    lng: Optional[float] = None
