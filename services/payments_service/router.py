import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from libs.auth.dependencies import require_resource
from libs.auth.models import AuthUser
from libs.auth.permissions import PAYMENTS
from libs.common.errors import NotFoundError
from libs.db.session import get_async_db
from services.payments_service.repository import PaymentRepository
from services.payments_service.schemas import (
    Payment,
    PaymentCreate,
    PaymentStatusUpdate,
)

router = APIRouter(prefix="/payments", tags=["payments"])


def get_payment_repository(
    db: AsyncSession = Depends(get_async_db),
    current_user: AuthUser = Depends(require_resource(PAYMENTS)),
) -> PaymentRepository:
    return PaymentRepository(db, current_user)


async def _load(repo: PaymentRepository, payment_id: uuid.UUID) -> Payment:
    payment = await repo.get_by_id(payment_id)
    if payment is None:
        raise NotFoundError("Payment", payment_id)
    return payment


@router.get("", response_model=List[Payment])
async def list_payments(repo: PaymentRepository = Depends(get_payment_repository)):
    return await repo.list()


@router.post("", response_model=Payment, status_code=status.HTTP_201_CREATED)
async def record_payment(
    payment_in: PaymentCreate,
    repo: PaymentRepository = Depends(get_payment_repository),
):
    payment_id = await repo.record(payment_in)
    return await _load(repo, payment_id)


@router.get("/member/{member_id}", response_model=List[Payment])
async def get_member_payments(
    member_id: uuid.UUID,
    repo: PaymentRepository = Depends(get_payment_repository),
):
    return await repo.list_for_member(member_id)


@router.get("/{payment_id}", response_model=Payment)
async def get_payment(
    payment_id: uuid.UUID,
    repo: PaymentRepository = Depends(get_payment_repository),
):
    return await _load(repo, payment_id)


@router.put("/{payment_id}/status", response_model=Payment)
async def update_payment_status(
    payment_id: uuid.UUID,
    command: PaymentStatusUpdate,
    repo: PaymentRepository = Depends(get_payment_repository),
):
    await repo.update_status(payment_id, command)
    return await _load(repo, payment_id)
