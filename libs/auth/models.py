import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    TRAINER = "trainer"


class AuthUser(BaseModel):
    """
    The authenticated caller, passed explicitly to repositories and routers.
    """

    user_id: str = Field(..., alias="sub")
    email: Optional[str] = None
    role: Optional[UserRole] = None

    model_config = ConfigDict(populate_by_name=True)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
