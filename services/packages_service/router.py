import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from libs.auth.dependencies import require_resource
from libs.auth.models import AuthUser
from libs.auth.permissions import PACKAGES
from libs.common.errors import NotFoundError
from libs.db.session import get_async_db
from services.packages_service.repository import PackageRepository
from services.packages_service.schemas import Package, PackageCreate, PackageUpdate

router = APIRouter(prefix="/packages", tags=["packages"])


def get_package_repository(
    db: AsyncSession = Depends(get_async_db),
    current_user: AuthUser = Depends(require_resource(PACKAGES)),
) -> PackageRepository:
    return PackageRepository(db, current_user)


@router.get("", response_model=List[Package])
async def list_packages(repo: PackageRepository = Depends(get_package_repository)):
    return await repo.list()


@router.post("", response_model=Package, status_code=status.HTTP_201_CREATED)
async def create_package(
    package_in: PackageCreate,
    repo: PackageRepository = Depends(get_package_repository),
):
    package_id = await repo.create(package_in)
    return await repo.get_by_id(package_id)


@router.get("/{package_id}", response_model=Package)
async def get_package(
    package_id: uuid.UUID,
    repo: PackageRepository = Depends(get_package_repository),
):
    package = await repo.get_by_id(package_id)
    if package is None:
        raise NotFoundError("Package", package_id)
    return package


@router.patch("/{package_id}", response_model=Package)
async def update_package(
    package_id: uuid.UUID,
    command: PackageUpdate,
    repo: PackageRepository = Depends(get_package_repository),
):
    await repo.update(package_id, command)
    return await repo.get_by_id(package_id)


@router.delete("/{package_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_package(
    package_id: uuid.UUID,
    repo: PackageRepository = Depends(get_package_repository),
):
    """Existing members keep their denormalized package name and dates."""
    await repo.delete(package_id)
