from __future__ import annotations

from typing import Any, Optional

from libs.common.commands import UpdateCommand
from libs.common.errors import ValidationError
from libs.db.adapter import DocumentAdapter
from libs.db.repository import BaseRepository
from services.trainers_service import models, schemas

TRAINER_COMMANDS = (
    schemas.TrainerProfileUpdate,
    schemas.TrainerAvailabilityUpdate,
    schemas.TrainerStatusUpdate,
)


class TrainerRepository(BaseRepository[models.Trainer, schemas.Trainer]):
    model = models.Trainer
    adapter = DocumentAdapter(schemas.Trainer, date_fields=("join_date",))
    entity_name = "Trainer"

    async def update(self, record_id: Any, command: UpdateCommand) -> None:
        if not isinstance(command, TRAINER_COMMANDS):
            raise ValidationError(f"Unsupported trainer update {type(command).__name__}")
        await super().update(record_id, command)

    async def get_by_user_id(self, user_id: str) -> Optional[schemas.Trainer]:
        """The trainer profile linked to an auth account, if any."""
        matches = await self.get_by_field("user_id", user_id)
        return matches[0] if matches else None

    async def list_active(self) -> list[schemas.Trainer]:
        return await self.get_by_field("is_active", True)

    async def count_active(self) -> int:
        return await self.count(models.Trainer.is_active.is_(True))
