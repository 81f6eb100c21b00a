import uuid
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from libs.auth.dependencies import require_resource
from libs.auth.models import AuthUser
from libs.auth.permissions import ATTENDANCE
from libs.common.errors import NotFoundError
from libs.db.session import get_async_db
from services.attendance_service.repository import AttendanceRepository
from services.attendance_service.schemas import (
    Attendance,
    AttendanceCreate,
    AttendanceNotesUpdate,
    CodeCheckIn,
)

router = APIRouter(prefix="/attendance", tags=["attendance"])


def get_attendance_repository(
    db: AsyncSession = Depends(get_async_db),
    current_user: AuthUser = Depends(require_resource(ATTENDANCE)),
) -> AttendanceRepository:
    return AttendanceRepository(db, current_user)


async def _load(repo: AttendanceRepository, attendance_id: uuid.UUID) -> Attendance:
    attendance = await repo.get_by_id(attendance_id)
    if attendance is None:
        raise NotFoundError("Attendance", attendance_id)
    return attendance


@router.post("/check-in", response_model=Attendance, status_code=status.HTTP_201_CREATED)
async def check_in(
    attendance_in: AttendanceCreate,
    repo: AttendanceRepository = Depends(get_attendance_repository),
):
    attendance_id = await repo.record(attendance_in)
    return await _load(repo, attendance_id)


@router.post(
    "/check-in/code", response_model=Attendance, status_code=status.HTTP_201_CREATED
)
async def check_in_by_code(
    check_in_in: CodeCheckIn,
    repo: AttendanceRepository = Depends(get_attendance_repository),
):
    """Check in with the member code scanned from a QR card or typed in."""
    attendance_id = await repo.check_in_by_code(check_in_in)
    return await _load(repo, attendance_id)


@router.post("/{attendance_id}/check-out", response_model=Attendance)
async def check_out(
    attendance_id: uuid.UUID,
    repo: AttendanceRepository = Depends(get_attendance_repository),
):
    await repo.check_out(attendance_id)
    return await _load(repo, attendance_id)


@router.patch("/{attendance_id}", response_model=Attendance)
async def update_attendance_notes(
    attendance_id: uuid.UUID,
    command: AttendanceNotesUpdate,
    repo: AttendanceRepository = Depends(get_attendance_repository),
):
    await repo.update(attendance_id, command)
    return await _load(repo, attendance_id)


@router.get("/daily", response_model=List[Attendance])
async def get_daily_attendance(
    day: Optional[date] = Query(None, description="Defaults to today"),
    repo: AttendanceRepository = Depends(get_attendance_repository),
):
    return await repo.list_for_day(day)


@router.get("/member/{member_id}", response_model=List[Attendance])
async def get_member_attendance(
    member_id: uuid.UUID,
    repo: AttendanceRepository = Depends(get_attendance_repository),
):
    return await repo.list_for_member(member_id)


@router.get("/{attendance_id}", response_model=Attendance)
async def get_attendance(
    attendance_id: uuid.UUID,
    repo: AttendanceRepository = Depends(get_attendance_repository),
):
    return await _load(repo, attendance_id)
