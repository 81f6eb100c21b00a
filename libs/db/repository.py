"""Generic CRUD repository over one collection table.

Every operation is a single awaited round trip on the caller's session. There
is no cache: reads always go to the store. Store failures are rolled back and
re-raised as ``TransientStoreError``; nothing is retried.
"""

from __future__ import annotations

import uuid
from contextlib import asynccontextmanager
from datetime import date, datetime
from typing import Any, Generic, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import delete as sa_delete
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from libs.auth.models import AuthUser
from libs.common.commands import UpdateCommand
from libs.common.datetime_utils import as_utc_datetime, utc_now
from libs.common.errors import NotFoundError, TransientStoreError, ValidationError
from libs.common.logging import get_logger
from libs.db.adapter import DocumentAdapter, date_to_timestamp
from libs.db.base import Base

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
SchemaT = TypeVar("SchemaT", bound=BaseModel)


def coerce_id(value: Any) -> Optional[uuid.UUID]:
    """Return ``value`` as a UUID, or None when it cannot be one."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


class BaseRepository(Generic[ModelT, SchemaT]):
    model: Type[ModelT]
    adapter: DocumentAdapter[SchemaT]
    entity_name: str = "Record"

    def __init__(self, db: AsyncSession, context: Optional[AuthUser] = None):
        self.db = db
        self.context = context

    # ------------------------------------------------------------------
    # Store access
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def _store(self, action: str):
        try:
            yield
        except SQLAlchemyError as exc:
            await self.db.rollback()
            logger.error("Error trying to %s %s: %s", action, self.entity_name, exc)
            raise TransientStoreError(
                f"Could not {action} {self.entity_name}",
                details={"entity": self.entity_name, "action": action},
            ) from exc

    async def _fetch(self, stmt) -> list[ModelT]:
        async with self._store("read"):
            result = await self.db.execute(
                stmt.execution_options(populate_existing=True)
            )
            return list(result.scalars().all())

    async def _get_record(self, record_id: Any) -> Optional[ModelT]:
        key = coerce_id(record_id)
        if key is None:
            return None
        rows = await self._fetch(select(self.model).where(self.model.id == key))
        return rows[0] if rows else None

    async def _require_record(self, record_id: Any) -> ModelT:
        record = await self._get_record(record_id)
        if record is None:
            raise NotFoundError(self.entity_name, record_id)
        return record

    async def _insert(self, values: dict[str, Any]) -> uuid.UUID:
        async with self._store("create"):
            record = self.model(**values)
            self.db.add(record)
            await self.db.commit()
            await self.db.refresh(record)
        logger.info("Created %s %s", self.entity_name, record.id)
        return record.id

    async def _apply(self, record_id: Any, values: dict[str, Any]) -> None:
        record = await self._require_record(record_id)
        async with self._store("update"):
            for name, value in values.items():
                setattr(record, name, value)
            record.updated_at = utc_now()
            await self.db.commit()
        logger.info(
            "Updated %s %s (%s)", self.entity_name, record.id, ", ".join(sorted(values))
        )

    def _column(self, field: str):
        column = getattr(self.model, field, None)
        if column is None or field not in self.model.__table__.columns:
            raise ValidationError(
                f"{self.entity_name} has no field {field}", details={"field": field}
            )
        return column

    def _to_domain(self, records: Sequence[ModelT]) -> list[SchemaT]:
        return [self.adapter.from_storage(r) for r in records]

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    async def list(self) -> list[SchemaT]:
        return self._to_domain(await self._fetch(select(self.model)))

    async def get_by_id(self, record_id: Any) -> Optional[SchemaT]:
        record = await self._get_record(record_id)
        return self.adapter.from_storage(record) if record is not None else None

    async def create(self, payload: BaseModel) -> uuid.UUID:
        return await self._insert(self.adapter.to_storage(payload))

    async def update(self, record_id: Any, command: UpdateCommand) -> None:
        await self._apply(
            record_id, self.adapter.to_storage(command.changes(), partial=True)
        )

    async def delete(self, record_id: Any) -> None:
        """Remove the record. Deleting a missing id is a no-op."""
        key = coerce_id(record_id)
        if key is None:
            return
        async with self._store("delete"):
            result = await self.db.execute(
                sa_delete(self.model).where(self.model.id == key)
            )
            await self.db.commit()
        if result.rowcount:
            logger.info("Deleted %s %s", self.entity_name, key)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get_by_field(self, field: str, value: Any) -> list[SchemaT]:
        column = self._column(field)
        if field in self.adapter.date_fields and value is not None:
            value = date_to_timestamp(value, field)
        return self._to_domain(await self._fetch(select(self.model).where(column == value)))

    async def list_in_range(
        self,
        field: str,
        start: Optional[date | datetime] = None,
        end: Optional[date | datetime] = None,
        *,
        limit: Optional[int] = None,
        descending: bool = False,
    ) -> list[SchemaT]:
        """Records whose ``field`` lies in ``[start, end]``, ordered by it."""
        column = self._column(field)
        stmt = select(self.model)
        if start is not None:
            stmt = stmt.where(column >= as_utc_datetime(start))
        if end is not None:
            stmt = stmt.where(column <= as_utc_datetime(end))
        stmt = stmt.order_by(column.desc() if descending else column.asc())
        if limit:
            stmt = stmt.limit(limit)
        return self._to_domain(await self._fetch(stmt))

    async def count(self, *criteria) -> int:
        stmt = select(func.count()).select_from(self.model)
        if criteria:
            stmt = stmt.where(*criteria)
        async with self._store("count"):
            result = await self.db.execute(stmt)
            return int(result.scalar_one())
