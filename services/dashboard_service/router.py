from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from libs.auth.dependencies import require_resource
from libs.auth.models import AuthUser
from libs.auth.permissions import DASHBOARD
from libs.db.session import get_async_db
from services.dashboard_service.schemas import DashboardCounters
from services.dashboard_service.service import dashboard_counters, expiring_memberships
from services.members_service.schemas import MemberWithStatus

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardCounters)
async def get_dashboard_stats(
    db: AsyncSession = Depends(get_async_db),
    current_user: AuthUser = Depends(require_resource(DASHBOARD)),
):
    return await dashboard_counters(db, context=current_user)


@router.get("/expiring", response_model=List[MemberWithStatus])
async def get_expiring_memberships(
    days: Optional[int] = Query(None, ge=0),
    db: AsyncSession = Depends(get_async_db),
    current_user: AuthUser = Depends(require_resource(DASHBOARD)),
):
    return await expiring_memberships(db, days, context=current_user)
