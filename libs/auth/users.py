"""The ``users`` collection: role records for identity-provider accounts."""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlalchemy import Enum as SAEnum
from sqlalchemy import String, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Mapped, mapped_column

from libs.auth.models import UserRole
from libs.common.datetime_utils import utc_now
from libs.common.errors import TransientStoreError
from libs.common.logging import get_logger
from libs.db.base import Base, enum_values

logger = get_logger(__name__)


class User(Base):
    __tablename__ = "users"

    # The identity provider's subject id, not a generated one.
    id: Mapped[str] = mapped_column(String, primary_key=True)
    email: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    role: Mapped[UserRole] = mapped_column(
        SAEnum(
            UserRole,
            name="user_role_enum",
            values_callable=enum_values,
            validate_strings=True,
        ),
        default=UserRole.TRAINER,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )

    def __repr__(self):
        return f"<User {self.id} role={self.role}>"


async def get_user(db: AsyncSession, user_id: str) -> Optional[User]:
    try:
        result = await db.execute(select(User).where(User.id == user_id))
    except SQLAlchemyError as exc:
        logger.error("Error getting user role for %s: %s", user_id, exc)
        raise TransientStoreError(
            "Could not read user", details={"user_id": user_id}
        ) from exc
    return result.scalar_one_or_none()


async def register_user(
    db: AsyncSession,
    *,
    user_id: str,
    email: Optional[str],
    role: UserRole = UserRole.TRAINER,
) -> User:
    """Store the role for a newly registered account.

    Idempotent: an existing record keeps its role.
    """
    existing = await get_user(db, user_id)
    if existing:
        return existing

    user = User(id=user_id, email=email, role=role)
    try:
        db.add(user)
        await db.commit()
        await db.refresh(user)
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Error registering user %s: %s", user_id, exc)
        raise TransientStoreError(
            "Could not register user", details={"user_id": user_id}
        ) from exc

    logger.info("Registered user %s with role %s", user_id, role.value)
    return user
