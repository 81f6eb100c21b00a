"""Conversion between domain types and storage records.

Domain types carry calendar dates as ``datetime.date`` and instants as aware
``datetime``. Storage keeps both as timezone-aware timestamps: calendar dates
are pinned to midnight UTC so that they survive any session timezone and
compare correctly against "now" in range queries.
"""

from datetime import date, datetime
from typing import Any, Generic, Iterable, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import inspect

from libs.common.datetime_utils import as_utc_datetime, ensure_utc
from libs.common.errors import ValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)

SERVER_FIELDS = frozenset({"id", "created_at", "updated_at"})


def date_to_timestamp(value: Any, field: str = "date") -> datetime:
    """Convert a date, datetime or ISO string to a midnight-UTC timestamp."""
    if value is None:
        raise ValidationError(f"{field} is required", details={"field": field})
    if isinstance(value, str):
        try:
            value = date.fromisoformat(value[:10])
        except ValueError:
            raise ValidationError(
                f"{field} is not a valid date", details={"field": field, "value": value}
            )
    if isinstance(value, datetime):
        value = ensure_utc(value).date()
    if not isinstance(value, date):
        raise ValidationError(
            f"{field} is not a valid date", details={"field": field, "value": repr(value)}
        )
    return as_utc_datetime(value)


def timestamp_to_date(value: datetime) -> date:
    return ensure_utc(value).date()


def instant_to_timestamp(value: Any, field: str = "timestamp") -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            raise ValidationError(
                f"{field} is not a valid timestamp",
                details={"field": field, "value": value},
            )
    if not isinstance(value, datetime):
        raise ValidationError(
            f"{field} is not a valid timestamp", details={"field": field}
        )
    # Second precision is all the store promises.
    return ensure_utc(value).replace(microsecond=0)


class DocumentAdapter(Generic[SchemaT]):
    """Bridge one domain type and its storage record."""

    def __init__(
        self,
        schema: Type[SchemaT],
        *,
        date_fields: Iterable[str] = (),
        optional_date_fields: Iterable[str] = (),
        instant_fields: Iterable[str] = (),
    ):
        self.schema = schema
        self.optional_date_fields = frozenset(optional_date_fields)
        self.date_fields = frozenset(date_fields) | self.optional_date_fields
        self.instant_fields = frozenset(instant_fields) | {"created_at", "updated_at"}

    def to_storage(
        self, entity: BaseModel | Mapping[str, Any], *, partial: bool = False
    ) -> dict[str, Any]:
        """Return column values for ``entity``.

        Server-assigned fields are dropped. Unless ``partial`` is set, every
        required date field must be present.
        """
        if isinstance(entity, BaseModel):
            values = entity.model_dump(exclude=SERVER_FIELDS)
        else:
            values = {k: v for k, v in entity.items() if k not in SERVER_FIELDS}

        if not partial:
            for name in self.date_fields - self.optional_date_fields:
                values.setdefault(name, None)

        converted: dict[str, Any] = {}
        for name, value in values.items():
            if name in self.date_fields:
                if value is None and name in self.optional_date_fields:
                    converted[name] = None
                else:
                    converted[name] = date_to_timestamp(value, name)
            elif name in self.instant_fields:
                converted[name] = instant_to_timestamp(value, name)
            else:
                converted[name] = value
        return converted

    def from_storage(self, record: Any) -> SchemaT:
        """Build the domain type from a mapped storage record."""
        mapper = inspect(record).mapper
        data: dict[str, Any] = {}
        for attr in mapper.column_attrs:
            value = getattr(record, attr.key)
            if value is not None and attr.key in self.date_fields:
                value = timestamp_to_date(value)
            elif value is not None and attr.key in self.instant_fields:
                value = ensure_utc(value)
            data[attr.key] = value
        return self.schema.model_validate(data)
