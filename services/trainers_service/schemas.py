import uuid
from datetime import date, datetime
from typing import ClassVar, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from libs.common.commands import UpdateCommand
from services.trainers_service.models import Weekday

# 24h clock, e.g. 07:30
TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class AvailabilitySlot(BaseModel):
    day: Weekday
    start_time: str = Field(..., pattern=TIME_PATTERN)
    end_time: str = Field(..., pattern=TIME_PATTERN)

    model_config = ConfigDict(use_enum_values=True)

    @model_validator(mode="after")
    def check_times(self):
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        return self


class TrainerBase(BaseModel):
    user_id: Optional[str] = None
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = ""
    specialization: str = ""
    bio: str = ""
    hourly_rate: float = Field(..., gt=0)
    availability: List[AvailabilitySlot] = Field(default_factory=list)
    avatar: Optional[str] = None
    is_active: bool = True
    join_date: date


class TrainerCreate(TrainerBase):
    pass


class TrainerProfileUpdate(UpdateCommand):
    nullable_fields: ClassVar[FrozenSet[str]] = frozenset({"user_id", "avatar"})

    user_id: Optional[str] = None
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    specialization: Optional[str] = None
    bio: Optional[str] = None
    hourly_rate: Optional[float] = Field(None, gt=0)
    avatar: Optional[str] = None
    join_date: Optional[date] = None


class TrainerAvailabilityUpdate(UpdateCommand):
    availability: List[AvailabilitySlot]


class TrainerStatusUpdate(UpdateCommand):
    is_active: bool


class Trainer(TrainerBase):
    id: uuid.UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
