from __future__ import annotations

from typing import Any

from libs.common.commands import UpdateCommand
from libs.common.errors import ValidationError
from libs.db.adapter import DocumentAdapter
from libs.db.repository import BaseRepository
from services.packages_service import models, schemas


class PackageRepository(BaseRepository[models.Package, schemas.Package]):
    """Membership packages. Members keep their own copy of the package name."""

    model = models.Package
    adapter = DocumentAdapter(schemas.Package)
    entity_name = "Package"

    async def update(self, record_id: Any, command: UpdateCommand) -> None:
        if not isinstance(command, schemas.PackageUpdate):
            raise ValidationError(f"Unsupported package update {type(command).__name__}")
        await super().update(record_id, command)
