import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from libs.auth.dependencies import require_resource
from libs.auth.models import AuthUser
from libs.auth.permissions import MEMBERS
from libs.common.errors import NotFoundError
from libs.db.session import get_async_db
from services.members_service.repository import MemberRepository
from services.members_service.schemas import (
    MemberContactUpdate,
    MemberCreate,
    MembershipRenewal,
    MemberWithStatus,
)

router = APIRouter(prefix="/members", tags=["members"])


def get_member_repository(
    db: AsyncSession = Depends(get_async_db),
    current_user: AuthUser = Depends(require_resource(MEMBERS)),
) -> MemberRepository:
    return MemberRepository(db, current_user)


async def _load(repo: MemberRepository, member_id: uuid.UUID) -> MemberWithStatus:
    member = await repo.get_by_id(member_id)
    if member is None:
        raise NotFoundError("Member", member_id)
    return MemberWithStatus.from_member(member)


@router.get("", response_model=List[MemberWithStatus])
async def list_members(repo: MemberRepository = Depends(get_member_repository)):
    return [MemberWithStatus.from_member(m) for m in await repo.list()]


@router.post("", response_model=MemberWithStatus, status_code=status.HTTP_201_CREATED)
async def create_member(
    member_in: MemberCreate,
    repo: MemberRepository = Depends(get_member_repository),
):
    member_id = await repo.create(member_in)
    return await _load(repo, member_id)


@router.get("/expiring", response_model=List[MemberWithStatus])
async def list_expiring_members(
    days: Optional[int] = Query(None, ge=0),
    repo: MemberRepository = Depends(get_member_repository),
):
    """Members whose membership ends within ``days`` (30 by default)."""
    return [MemberWithStatus.from_member(m) for m in await repo.list_expiring(days)]


@router.get("/active", response_model=List[MemberWithStatus])
async def list_active_members(repo: MemberRepository = Depends(get_member_repository)):
    return [MemberWithStatus.from_member(m) for m in await repo.list_active()]


@router.get("/by-code/{code}", response_model=MemberWithStatus)
async def get_member_by_code(
    code: str,
    repo: MemberRepository = Depends(get_member_repository),
):
    member = await repo.get_by_member_code(code)
    if member is None:
        raise NotFoundError("Member", code)
    return MemberWithStatus.from_member(member)


@router.get("/{member_id}", response_model=MemberWithStatus)
async def get_member(
    member_id: uuid.UUID,
    repo: MemberRepository = Depends(get_member_repository),
):
    return await _load(repo, member_id)


@router.patch("/{member_id}", response_model=MemberWithStatus)
async def update_member_contact(
    member_id: uuid.UUID,
    command: MemberContactUpdate,
    repo: MemberRepository = Depends(get_member_repository),
):
    await repo.update(member_id, command)
    return await _load(repo, member_id)


@router.post("/{member_id}/renew", response_model=MemberWithStatus)
async def renew_membership(
    member_id: uuid.UUID,
    renewal: MembershipRenewal,
    repo: MemberRepository = Depends(get_member_repository),
):
    await repo.renew(member_id, renewal)
    return await _load(repo, member_id)


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_member(
    member_id: uuid.UUID,
    repo: MemberRepository = Depends(get_member_repository),
):
    """Attendance and payment history for the member is kept."""
    await repo.delete(member_id)
