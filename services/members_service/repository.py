from __future__ import annotations

import uuid
from datetime import date, datetime, timedelta
from typing import Any, Optional

from sqlalchemy import select

from libs.common.commands import UpdateCommand
from libs.common.config import get_settings
from libs.common.datetime_utils import as_utc_datetime, utc_now
from libs.common.errors import NotFoundError, ValidationError
from libs.common.logging import get_logger
from libs.db.adapter import DocumentAdapter
from libs.db.repository import BaseRepository
from services.members_service import models, schemas
from services.members_service.service import calculate_expiry, generate_member_code
from services.packages_service.repository import PackageRepository
from services.packages_service.schemas import Package

logger = get_logger(__name__)

MAX_CODE_ATTEMPTS = 10


class MemberRepository(BaseRepository[models.Member, schemas.Member]):
    model = models.Member
    adapter = DocumentAdapter(
        schemas.Member, date_fields=("start_date", "expiry_date")
    )
    entity_name = "Member"

    async def _require_package(self, package_id: Any) -> Package:
        package = await PackageRepository(self.db, self.context).get_by_id(package_id)
        if package is None:
            raise NotFoundError("Package", package_id)
        return package

    async def _new_member_code(self) -> str:
        for _ in range(MAX_CODE_ATTEMPTS):
            code = generate_member_code()
            if not await self.count(models.Member.member_id == code):
                return code
        raise ValidationError("Could not allocate a free member code")

    async def create(self, payload: schemas.MemberCreate) -> uuid.UUID:
        """Enroll a member; expiry is derived from the package duration."""
        package = await self._require_package(payload.package_id)
        values = payload.model_dump()
        values["member_id"] = payload.member_id or await self._new_member_code()
        values["package_name"] = package.name
        values["expiry_date"] = calculate_expiry(payload.start_date, package.duration)
        return await self._insert(self.adapter.to_storage(values))

    async def update(self, record_id: Any, command: UpdateCommand) -> None:
        if isinstance(command, schemas.MembershipRenewal):
            await self.renew(record_id, command)
        elif isinstance(command, schemas.MemberContactUpdate):
            await super().update(record_id, command)
        else:
            raise ValidationError(
                f"Unsupported member update {type(command).__name__}"
            )

    async def renew(self, record_id: Any, renewal: schemas.MembershipRenewal) -> date:
        """
        Move a member onto ``renewal.package_id`` starting ``renewal.start_date``.

        Read package, compute, write: not atomic. A concurrent edit of the same
        member between the read and the write is overwritten.
        """
        await self._require_record(record_id)
        package = await self._require_package(renewal.package_id)
        expiry = calculate_expiry(renewal.start_date, package.duration)
        await self._apply(
            record_id,
            self.adapter.to_storage(
                {
                    "package_id": package.id,
                    "package_name": package.name,
                    "start_date": renewal.start_date,
                    "expiry_date": expiry,
                },
                partial=True,
            ),
        )
        logger.info("Renewed member %s on package %s until %s", record_id, package.name, expiry)
        return expiry

    async def get_by_member_code(self, code: str) -> Optional[schemas.Member]:
        """
        Look up a member by display code.

        Codes are expected to be unique; more than one match is reported as
        ambiguous rather than picking one.
        """
        matches = await self.get_by_field("member_id", code)
        if not matches:
            return None
        if len(matches) > 1:
            raise ValidationError(
                f"Member code {code} is ambiguous",
                details={"member_id": code, "matches": [str(m.id) for m in matches]},
            )
        return matches[0]

    async def list_expiring(
        self,
        days: Optional[int] = None,
        now: Optional[date | datetime] = None,
    ) -> list[schemas.Member]:
        """Members whose expiry lies in ``[now, now + days]``, soonest first."""
        if days is None:
            days = get_settings().EXPIRING_WINDOW_DAYS
        if days < 0:
            raise ValidationError("days must not be negative", details={"days": days})
        reference = as_utc_datetime(now) if now is not None else utc_now()
        return await self.list_in_range(
            "expiry_date", reference, reference + timedelta(days=days)
        )

    async def list_active(
        self, now: Optional[date | datetime] = None
    ) -> list[schemas.Member]:
        """Members whose expiry is still ahead of ``now``, soonest first."""
        reference = as_utc_datetime(now) if now is not None else utc_now()
        stmt = (
            select(models.Member)
            .where(models.Member.expiry_date > reference)
            .order_by(models.Member.expiry_date.asc())
        )
        return self._to_domain(await self._fetch(stmt))

    async def count_active(self, now: Optional[date | datetime] = None) -> int:
        reference = as_utc_datetime(now) if now is not None else utc_now()
        return await self.count(models.Member.expiry_date > reference)
