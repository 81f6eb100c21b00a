from typing import Annotated, Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from libs.auth.models import AuthUser, UserRole
from libs.auth.permissions import can_access
from libs.auth.users import get_user
from libs.common.config import get_settings
from libs.db.session import get_async_db

settings = get_settings()
security = HTTPBearer()


async def get_current_user(
    token: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_async_db)],
) -> AuthUser:
    """
    Validate the identity provider's JWT and resolve the caller's role.

    The role stored in the ``users`` collection wins over any role claim in
    the token.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = jwt.decode(
            token.credentials,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"verify_aud": False},
        )
        claimed_role = payload.get("role")
        user = AuthUser(
            sub=payload["sub"],
            email=payload.get("email"),
            role=claimed_role if claimed_role in {r.value for r in UserRole} else None,
        )
    except (JWTError, ValidationError, KeyError):
        raise credentials_exception

    stored = await get_user(db, user.user_id)
    if stored is not None:
        user.role = stored.role
    return user


def require_resource(resource: str) -> Callable:
    """Build a dependency that admits only roles allowed to reach ``resource``."""

    async def _check(
        current_user: Annotated[AuthUser, Depends(get_current_user)],
    ) -> AuthUser:
        if not can_access(current_user.role, resource):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have access to this resource",
            )
        return current_user

    return _check


def require_roles(*roles: UserRole) -> Callable:
    """Build a dependency that admits only callers holding one of ``roles``."""

    async def _check(
        current_user: Annotated[AuthUser, Depends(get_current_user)],
    ) -> AuthUser:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient privileges",
            )
        return current_user

    return _check
