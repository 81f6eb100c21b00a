import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from libs.auth.dependencies import require_resource
from libs.auth.models import AuthUser
from libs.auth.permissions import CLASSES
from libs.common.errors import NotFoundError
from libs.db.session import get_async_db
from services.classes_service.repository import ClassRepository
from services.classes_service.schemas import (
    ClassDetailsUpdate,
    ClassEnrollmentUpdate,
    ClassScheduleUpdate,
    TrainerClass,
    TrainerClassCreate,
)

router = APIRouter(prefix="/classes", tags=["classes"])


def get_class_repository(
    db: AsyncSession = Depends(get_async_db),
    current_user: AuthUser = Depends(require_resource(CLASSES)),
) -> ClassRepository:
    return ClassRepository(db, current_user)


async def _load(repo: ClassRepository, class_id: uuid.UUID) -> TrainerClass:
    trainer_class = await repo.get_by_id(class_id)
    if trainer_class is None:
        raise NotFoundError("Class", class_id)
    return trainer_class


@router.get("", response_model=List[TrainerClass])
async def list_classes(repo: ClassRepository = Depends(get_class_repository)):
    return await repo.list()


@router.post("", response_model=TrainerClass, status_code=status.HTTP_201_CREATED)
async def create_class(
    class_in: TrainerClassCreate,
    repo: ClassRepository = Depends(get_class_repository),
):
    class_id = await repo.create(class_in)
    return await _load(repo, class_id)


@router.get("/upcoming", response_model=List[TrainerClass])
async def list_upcoming_classes(
    limit: Optional[int] = Query(None, gt=0),
    repo: ClassRepository = Depends(get_class_repository),
):
    return await repo.list_upcoming(limit=limit)


@router.get("/trainer/{trainer_id}", response_model=List[TrainerClass])
async def list_trainer_classes(
    trainer_id: uuid.UUID,
    repo: ClassRepository = Depends(get_class_repository),
):
    return await repo.list_by_trainer(trainer_id)


@router.get("/{class_id}", response_model=TrainerClass)
async def get_class(
    class_id: uuid.UUID,
    repo: ClassRepository = Depends(get_class_repository),
):
    return await _load(repo, class_id)


@router.patch("/{class_id}/details", response_model=TrainerClass)
async def update_class_details(
    class_id: uuid.UUID,
    command: ClassDetailsUpdate,
    repo: ClassRepository = Depends(get_class_repository),
):
    await repo.update(class_id, command)
    return await _load(repo, class_id)


@router.patch("/{class_id}/schedule", response_model=TrainerClass)
async def update_class_schedule(
    class_id: uuid.UUID,
    command: ClassScheduleUpdate,
    repo: ClassRepository = Depends(get_class_repository),
):
    await repo.update(class_id, command)
    return await _load(repo, class_id)


@router.put("/{class_id}/enrollment", response_model=TrainerClass)
async def set_class_enrollment(
    class_id: uuid.UUID,
    command: ClassEnrollmentUpdate,
    repo: ClassRepository = Depends(get_class_repository),
):
    await repo.update(class_id, command)
    return await _load(repo, class_id)


@router.post("/{class_id}/enroll", response_model=TrainerClass)
async def enroll_in_class(
    class_id: uuid.UUID,
    repo: ClassRepository = Depends(get_class_repository),
):
    await repo.enroll(class_id)
    return await _load(repo, class_id)


@router.post("/{class_id}/unenroll", response_model=TrainerClass)
async def unenroll_from_class(
    class_id: uuid.UUID,
    repo: ClassRepository = Depends(get_class_repository),
):
    await repo.unenroll(class_id)
    return await _load(repo, class_id)


@router.delete("/{class_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_class(
    class_id: uuid.UUID,
    repo: ClassRepository = Depends(get_class_repository),
):
    await repo.delete(class_id)
