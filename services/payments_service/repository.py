from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import select

from libs.common.commands import UpdateCommand
from libs.common.datetime_utils import local_today
from libs.common.errors import NotFoundError, ValidationError
from libs.db.adapter import DocumentAdapter
from libs.db.repository import BaseRepository, coerce_id
from services.members_service.repository import MemberRepository
from services.packages_service.repository import PackageRepository
from services.payments_service import models, schemas


class PaymentRepository(BaseRepository[models.Payment, schemas.Payment]):
    """Recorded payments. Nothing here charges or refunds money."""

    model = models.Payment
    adapter = DocumentAdapter(schemas.Payment, date_fields=("payment_date",))
    entity_name = "Payment"

    async def record(self, payload: schemas.PaymentCreate) -> uuid.UUID:
        if await MemberRepository(self.db, self.context).get_by_id(payload.member_id) is None:
            raise NotFoundError("Member", payload.member_id)
        if await PackageRepository(self.db, self.context).get_by_id(payload.package_id) is None:
            raise NotFoundError("Package", payload.package_id)

        values = payload.model_dump()
        values["payment_date"] = payload.payment_date or local_today()
        return await self._insert(self.adapter.to_storage(values))

    async def create(self, payload: schemas.PaymentCreate) -> uuid.UUID:
        return await self.record(payload)

    async def update_status(
        self, record_id: Any, command: schemas.PaymentStatusUpdate
    ) -> None:
        await super().update(record_id, command)

    async def update(self, record_id: Any, command: UpdateCommand) -> None:
        if not isinstance(command, schemas.PaymentStatusUpdate):
            raise ValidationError(
                f"Unsupported payment update {type(command).__name__}"
            )
        await self.update_status(record_id, command)

    async def list_for_member(self, member_id: Any) -> list[schemas.Payment]:
        """A member's payments, most recent first."""
        key = coerce_id(member_id)
        if key is None:
            return []
        stmt = (
            select(models.Payment)
            .where(models.Payment.member_id == key)
            .order_by(models.Payment.payment_date.desc())
        )
        return self._to_domain(await self._fetch(stmt))
