from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from libs.auth.dependencies import get_current_user, require_roles
from libs.auth.models import AuthUser, UserRole
from libs.auth.users import register_user
from libs.db.session import get_async_db
from services.users_service.schemas import UserRegistration, UserResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=AuthUser)
async def get_me(current_user: AuthUser = Depends(get_current_user)):
    """The caller's identity and resolved role."""
    return current_user


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    registration: UserRegistration,
    db: AsyncSession = Depends(get_async_db),
    _admin: AuthUser = Depends(require_roles(UserRole.ADMIN)),
):
    """Record the role of an account. An existing account keeps its role."""
    return await register_user(
        db,
        user_id=registration.user_id,
        email=registration.email,
        role=registration.role,
    )
