import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from libs.common.commands import UpdateCommand


class PackageBase(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    price: float = Field(..., ge=0)
    duration: int = Field(..., gt=0, description="Duration in days")
    features: List[str] = Field(default_factory=list)


class PackageCreate(PackageBase):
    pass


class PackageUpdate(UpdateCommand):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    duration: Optional[int] = Field(None, gt=0)
    features: Optional[List[str]] = None


class Package(PackageBase):
    id: uuid.UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
