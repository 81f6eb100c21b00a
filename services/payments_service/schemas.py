import uuid
from datetime import date, datetime
from typing import ClassVar, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field

from libs.common.commands import UpdateCommand
from services.payments_service.models import PaymentStatus


class PaymentBase(BaseModel):
    member_id: uuid.UUID
    package_id: uuid.UUID
    amount: float = Field(..., ge=0)
    payment_method: str = Field(..., min_length=1)
    transaction_id: Optional[str] = None
    status: PaymentStatus = PaymentStatus.PENDING
    notes: Optional[str] = None


class PaymentCreate(PaymentBase):
    # Defaults to today
    payment_date: Optional[date] = None


class PaymentStatusUpdate(UpdateCommand):
    nullable_fields: ClassVar[FrozenSet[str]] = frozenset({"notes"})

    status: PaymentStatus
    notes: Optional[str] = None


class Payment(PaymentBase):
    id: uuid.UUID
    payment_date: date
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
