import uuid
from datetime import date as date_type
from datetime import datetime
from typing import ClassVar, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field

from libs.common.commands import UpdateCommand
from services.attendance_service.models import CheckInMethod


class AttendanceCreate(BaseModel):
    member_id: uuid.UUID
    class_id: Optional[uuid.UUID] = None
    # Defaults to today
    date: Optional[date_type] = None
    check_in_method: CheckInMethod = CheckInMethod.MANUAL
    notes: Optional[str] = None
    # Backfilled from the member when omitted
    member_name: Optional[str] = None
    member_id_number: Optional[str] = None


class CodeCheckIn(BaseModel):
    """Front-desk check-in by the code printed on a member's card or QR."""

    member_code: str = Field(..., min_length=1)
    class_id: Optional[uuid.UUID] = None
    check_in_method: CheckInMethod = CheckInMethod.QR
    notes: Optional[str] = None


class AttendanceNotesUpdate(UpdateCommand):
    nullable_fields: ClassVar[FrozenSet[str]] = frozenset({"notes"})

    notes: Optional[str] = None


class Attendance(BaseModel):
    id: uuid.UUID
    member_id: uuid.UUID
    member_name: Optional[str] = None
    member_id_number: Optional[str] = None
    class_id: Optional[uuid.UUID] = None
    date: date_type
    check_in_time: datetime
    check_out_time: Optional[datetime] = None
    check_in_method: CheckInMethod
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
