import uuid
from datetime import date as date_type
from datetime import datetime
from typing import ClassVar, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from libs.common.commands import UpdateCommand
from services.trainers_service.models import Weekday
from services.trainers_service.schemas import TIME_PATTERN


def check_class_invariants(
    *,
    start_time: str,
    end_time: str,
    capacity: int,
    enrolled: int,
    is_recurring: bool,
    recurring_days: Optional[list],
) -> None:
    """Raise ValueError when a class's fields contradict each other."""
    if start_time >= end_time:
        raise ValueError("start_time must be before end_time")
    if enrolled > capacity:
        raise ValueError("enrolled cannot exceed capacity")
    if is_recurring and not recurring_days:
        raise ValueError("Select at least one day for a recurring class")


class TrainerClassBase(BaseModel):
    class_name: str = Field(..., min_length=1)
    description: str = ""
    date: date_type
    start_time: str = Field(..., pattern=TIME_PATTERN)
    end_time: str = Field(..., pattern=TIME_PATTERN)
    capacity: int = Field(..., gt=0)
    location: str = Field(..., min_length=1)
    price: float = Field(0.0, ge=0)
    is_recurring: bool = False
    recurring_days: Optional[List[Weekday]] = None

    model_config = ConfigDict(use_enum_values=True)


class TrainerClassCreate(TrainerClassBase):
    trainer_id: uuid.UUID
    enrolled: int = Field(0, ge=0)

    @model_validator(mode="after")
    def check_invariants(self):
        check_class_invariants(
            start_time=self.start_time,
            end_time=self.end_time,
            capacity=self.capacity,
            enrolled=self.enrolled,
            is_recurring=self.is_recurring,
            recurring_days=self.recurring_days,
        )
        if not self.is_recurring:
            self.recurring_days = None
        return self


class ClassDetailsUpdate(UpdateCommand):
    trainer_id: Optional[uuid.UUID] = None
    class_name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    location: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0)
    capacity: Optional[int] = Field(None, gt=0)


class ClassScheduleUpdate(UpdateCommand):
    nullable_fields: ClassVar[FrozenSet[str]] = frozenset({"recurring_days"})

    date: Optional[date_type] = None
    start_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    end_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    is_recurring: Optional[bool] = None
    recurring_days: Optional[List[Weekday]] = None

    model_config = ConfigDict(use_enum_values=True)


class ClassEnrollmentUpdate(UpdateCommand):
    enrolled: int = Field(..., ge=0)


class TrainerClass(TrainerClassBase):
    id: uuid.UUID
    trainer_id: uuid.UUID
    enrolled: int = 0
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    @property
    def is_full(self) -> bool:
        return self.enrolled >= self.capacity


class OwnClassCreate(TrainerClassBase):
    """A class a trainer schedules for themselves; the trainer comes from the session."""

    @model_validator(mode="after")
    def check_invariants(self):
        check_class_invariants(
            start_time=self.start_time,
            end_time=self.end_time,
            capacity=self.capacity,
            enrolled=0,
            is_recurring=self.is_recurring,
            recurring_days=self.recurring_days,
        )
        return self

    def for_trainer(self, trainer_id: uuid.UUID) -> TrainerClassCreate:
        return TrainerClassCreate(trainer_id=trainer_id, **self.model_dump())
