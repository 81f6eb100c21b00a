import uuid
from datetime import date, datetime
from typing import ClassVar, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from libs.common.commands import UpdateCommand
from services.members_service.service import (
    MembershipStatus,
    days_left,
    membership_status,
)


class MemberBase(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = ""
    address: str = ""
    notes: Optional[str] = None


class MemberCreate(MemberBase):
    # Generated when omitted
    member_id: Optional[str] = Field(None, min_length=1)
    package_id: uuid.UUID
    start_date: date


class MemberContactUpdate(UpdateCommand):
    """Edit contact details. Package and dates change only through renewal."""

    nullable_fields: ClassVar[FrozenSet[str]] = frozenset({"notes"})

    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None


class MembershipRenewal(UpdateCommand):
    package_id: uuid.UUID
    start_date: date


class Member(MemberBase):
    id: uuid.UUID
    member_id: str
    package_id: uuid.UUID
    package_name: str
    start_date: date
    expiry_date: date
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class MemberWithStatus(Member):
    status: MembershipStatus
    days_left: int

    @classmethod
    def from_member(cls, member: Member, now=None) -> "MemberWithStatus":
        return cls(
            **member.model_dump(),
            status=membership_status(member.expiry_date, now),
            days_left=days_left(member.expiry_date, now),
        )
