from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from libs.auth.models import UserRole


class UserRegistration(BaseModel):
    # Subject id issued by the identity provider
    user_id: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    role: UserRole = UserRole.TRAINER


class UserResponse(BaseModel):
    id: str
    email: Optional[str] = None
    role: UserRole
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
