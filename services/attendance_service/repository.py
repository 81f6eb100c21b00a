from __future__ import annotations

import uuid
from datetime import date
from typing import Any, Optional

from sqlalchemy import select

from libs.common.commands import UpdateCommand
from libs.common.datetime_utils import end_of_day, local_today, start_of_day, utc_now
from libs.common.errors import NotFoundError, TransientStoreError, ValidationError
from libs.common.logging import get_logger
from libs.db.adapter import DocumentAdapter
from libs.db.repository import BaseRepository, coerce_id
from services.attendance_service import models, schemas
from services.classes_service.repository import ClassRepository
from services.members_service.repository import MemberRepository
from services.members_service.schemas import Member

logger = get_logger(__name__)


class AttendanceRepository(BaseRepository[models.Attendance, schemas.Attendance]):
    """Check-in history. The API never exposes deletion of these records."""

    model = models.Attendance
    adapter = DocumentAdapter(
        schemas.Attendance,
        date_fields=("date",),
        instant_fields=("check_in_time", "check_out_time"),
    )
    entity_name = "Attendance"

    async def record(self, payload: schemas.AttendanceCreate) -> uuid.UUID:
        """
        Check a member in and return the new attendance id.

        Missing display fields are copied from the member. Only a store
        failure during that lookup is tolerated: the check-in is then
        recorded without display fields. A member that does not exist
        raises ``NotFoundError`` and nothing is written.
        """
        values = payload.model_dump()

        try:
            member = await MemberRepository(self.db, self.context).get_by_id(
                payload.member_id
            )
        except TransientStoreError as exc:
            logger.warning(
                "Error fetching member details for %s, recording attendance without them: %s",
                payload.member_id,
                exc,
            )
        else:
            if member is None:
                raise NotFoundError("Member", payload.member_id)
            values["member_name"] = payload.member_name or member.name
            values["member_id_number"] = payload.member_id_number or member.member_id

        if payload.class_id is not None:
            if await ClassRepository(self.db, self.context).get_by_id(payload.class_id) is None:
                raise NotFoundError("Class", payload.class_id)

        values["date"] = payload.date or local_today()
        values["check_in_time"] = utc_now()
        return await self._insert(self.adapter.to_storage(values))

    async def check_in_by_code(self, check_in: schemas.CodeCheckIn) -> uuid.UUID:
        member = await self.get_member_by_id_number(check_in.member_code)
        if member is None:
            raise NotFoundError("Member", check_in.member_code)
        return await self.record(
            schemas.AttendanceCreate(
                member_id=member.id,
                member_name=member.name,
                member_id_number=member.member_id,
                class_id=check_in.class_id,
                check_in_method=check_in.check_in_method,
                notes=check_in.notes,
            )
        )

    async def check_out(self, record_id: Any) -> None:
        record = await self._require_record(record_id)
        if record.check_out_time is not None:
            raise ValidationError(
                "Member already checked out", details={"attendance_id": str(record_id)}
            )
        await self._apply(record_id, {"check_out_time": utc_now()})

    async def update(self, record_id: Any, command: UpdateCommand) -> None:
        if not isinstance(command, schemas.AttendanceNotesUpdate):
            raise ValidationError(
                f"Unsupported attendance update {type(command).__name__}"
            )
        await super().update(record_id, command)

    async def list_for_member(self, member_id: Any) -> list[schemas.Attendance]:
        """A member's check-ins, most recent first."""
        key = coerce_id(member_id)
        if key is None:
            return []
        stmt = (
            select(models.Attendance)
            .where(models.Attendance.member_id == key)
            .order_by(
                models.Attendance.date.desc(), models.Attendance.check_in_time.desc()
            )
        )
        return self._to_domain(await self._fetch(stmt))

    async def list_for_day(self, day: Optional[date] = None) -> list[schemas.Attendance]:
        """Every check-in bucketed on ``day`` (today by default), latest first."""
        day = day or local_today()
        stmt = (
            select(models.Attendance)
            .where(
                models.Attendance.date >= start_of_day(day),
                models.Attendance.date <= end_of_day(day),
            )
            .order_by(models.Attendance.check_in_time.desc())
        )
        return self._to_domain(await self._fetch(stmt))

    async def get_member_by_id_number(self, code: str) -> Optional[Member]:
        return await MemberRepository(self.db, self.context).get_by_member_code(code)
