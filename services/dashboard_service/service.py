"""
Dashboard aggregates.

Each counter is its own count query. They are not read from one snapshot, so a
write landing between two of them can make the numbers briefly inconsistent.
"""

from datetime import date, datetime
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from libs.auth.models import AuthUser
from libs.common.datetime_utils import as_utc_datetime, utc_now
from services.classes_service.repository import ClassRepository
from services.dashboard_service.schemas import DashboardCounters
from services.members_service.repository import MemberRepository
from services.members_service.schemas import MemberWithStatus
from services.trainers_service.repository import TrainerRepository


async def dashboard_counters(
    db: AsyncSession,
    now: Optional[date | datetime] = None,
    context: Optional[AuthUser] = None,
) -> DashboardCounters:
    reference = as_utc_datetime(now) if now is not None else utc_now()
    members = MemberRepository(db, context)

    return DashboardCounters(
        total_members=await members.count(),
        active_members=await members.count_active(reference),
        upcoming_classes=await ClassRepository(db, context).count_upcoming(reference),
        active_trainers=await TrainerRepository(db, context).count_active(),
    )


async def expiring_memberships(
    db: AsyncSession,
    days: Optional[int] = None,
    now: Optional[date | datetime] = None,
    context: Optional[AuthUser] = None,
) -> List[MemberWithStatus]:
    """Members expiring within ``days``, annotated with status and days left."""
    reference = as_utc_datetime(now) if now is not None else utc_now()
    members = await MemberRepository(db, context).list_expiring(days, reference)
    return [MemberWithStatus.from_member(m, reference) for m in members]
