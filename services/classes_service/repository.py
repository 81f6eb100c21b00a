from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Any, Optional

from libs.common.commands import UpdateCommand
from libs.common.datetime_utils import as_utc_datetime, utc_now
from libs.common.errors import NotFoundError, ValidationError
from libs.db.adapter import DocumentAdapter
from libs.db.repository import BaseRepository
from services.classes_service import models, schemas
from services.classes_service.schemas import check_class_invariants
from services.trainers_service.repository import TrainerRepository


class ClassRepository(BaseRepository[models.TrainerClass, schemas.TrainerClass]):
    model = models.TrainerClass
    adapter = DocumentAdapter(schemas.TrainerClass, date_fields=("date",))
    entity_name = "Class"

    async def _require_trainer(self, trainer_id: Any) -> None:
        if await TrainerRepository(self.db, self.context).get_by_id(trainer_id) is None:
            raise NotFoundError("Trainer", trainer_id)

    async def create(self, payload: schemas.TrainerClassCreate) -> uuid.UUID:
        await self._require_trainer(payload.trainer_id)
        values = payload.model_dump()
        if self.context is not None:
            values["created_by"] = self.context.user_id
        return await self._insert(self.adapter.to_storage(values))

    async def update(self, record_id: Any, command: UpdateCommand) -> None:
        """Apply a details, schedule or enrollment change.

        The change is validated against the stored class so that capacity,
        times and recurrence stay consistent.
        """
        if not isinstance(
            command,
            (
                schemas.ClassDetailsUpdate,
                schemas.ClassScheduleUpdate,
                schemas.ClassEnrollmentUpdate,
            ),
        ):
            raise ValidationError(f"Unsupported class update {type(command).__name__}")

        current = await self.get_by_id(record_id)
        if current is None:
            raise NotFoundError(self.entity_name, record_id)

        changes = command.changes()
        if changes.get("is_recurring") is False:
            changes["recurring_days"] = None
        if "trainer_id" in changes and changes["trainer_id"] != current.trainer_id:
            await self._require_trainer(changes["trainer_id"])

        merged = {**current.model_dump(), **changes}
        try:
            check_class_invariants(
                start_time=merged["start_time"],
                end_time=merged["end_time"],
                capacity=merged["capacity"],
                enrolled=merged["enrolled"],
                is_recurring=merged["is_recurring"],
                recurring_days=merged["recurring_days"],
            )
        except ValueError as exc:
            raise ValidationError(str(exc), details={"class_id": str(record_id)})

        await self._apply(record_id, self.adapter.to_storage(changes, partial=True))

    async def list_by_trainer(self, trainer_id: Any) -> list[schemas.TrainerClass]:
        return await self.get_by_field("trainer_id", trainer_id)

    async def list_upcoming(
        self,
        now: Optional[date | datetime] = None,
        limit: Optional[int] = None,
    ) -> list[schemas.TrainerClass]:
        """Classes dated at or after ``now``, earliest first."""
        reference = as_utc_datetime(now) if now is not None else utc_now()
        return await self.list_in_range("date", reference, limit=limit)

    async def count_upcoming(self, now: Optional[date | datetime] = None) -> int:
        reference = as_utc_datetime(now) if now is not None else utc_now()
        return await self.count(models.TrainerClass.date >= reference)

    async def enroll(self, record_id: Any) -> int:
        """
        Take one seat. Returns the new enrolled count.

        Read-modify-write without locking: concurrent enrollments can
        overcount or undercount.
        """
        current = await self.get_by_id(record_id)
        if current is None:
            raise NotFoundError(self.entity_name, record_id)
        if current.is_full:
            raise ValidationError(
                "Class is full",
                details={"class_id": str(record_id), "capacity": current.capacity},
            )
        await self._apply(record_id, {"enrolled": current.enrolled + 1})
        return current.enrolled + 1

    async def unenroll(self, record_id: Any) -> int:
        current = await self.get_by_id(record_id)
        if current is None:
            raise NotFoundError(self.entity_name, record_id)
        if current.enrolled == 0:
            raise ValidationError(
                "Class has no enrollments", details={"class_id": str(record_id)}
            )
        await self._apply(record_id, {"enrolled": current.enrolled - 1})
        return current.enrolled - 1
