import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from libs.auth.dependencies import require_resource
from libs.auth.models import AuthUser
from libs.auth.permissions import TRAINER_PORTAL, TRAINERS
from libs.common.errors import NotFoundError
from libs.db.session import get_async_db
from services.classes_service.repository import ClassRepository
from services.classes_service.schemas import OwnClassCreate, TrainerClass
from services.trainers_service.repository import TrainerRepository
from services.trainers_service.schemas import (
    Trainer,
    TrainerAvailabilityUpdate,
    TrainerCreate,
    TrainerProfileUpdate,
    TrainerStatusUpdate,
)

router = APIRouter(prefix="/trainers", tags=["trainers"])


def get_trainer_repository(
    db: AsyncSession = Depends(get_async_db),
    current_user: AuthUser = Depends(require_resource(TRAINERS)),
) -> TrainerRepository:
    return TrainerRepository(db, current_user)


async def get_own_trainer(
    db: AsyncSession = Depends(get_async_db),
    current_user: AuthUser = Depends(require_resource(TRAINER_PORTAL)),
) -> Trainer:
    trainer = await TrainerRepository(db, current_user).get_by_user_id(
        current_user.user_id
    )
    if trainer is None:
        raise NotFoundError("Trainer", current_user.user_id)
    return trainer


async def _load(repo: TrainerRepository, trainer_id: uuid.UUID) -> Trainer:
    trainer = await repo.get_by_id(trainer_id)
    if trainer is None:
        raise NotFoundError("Trainer", trainer_id)
    return trainer


# ---------------------------------------------------------------------------
# Trainer portal
# ---------------------------------------------------------------------------


@router.get("/me", response_model=Trainer)
async def get_my_profile(trainer: Trainer = Depends(get_own_trainer)):
    return trainer


@router.get("/me/classes", response_model=List[TrainerClass])
async def list_my_classes(
    trainer: Trainer = Depends(get_own_trainer),
    db: AsyncSession = Depends(get_async_db),
    current_user: AuthUser = Depends(require_resource(TRAINER_PORTAL)),
):
    return await ClassRepository(db, current_user).list_by_trainer(trainer.id)


@router.post(
    "/me/classes", response_model=TrainerClass, status_code=status.HTTP_201_CREATED
)
async def create_my_class(
    class_in: OwnClassCreate,
    trainer: Trainer = Depends(get_own_trainer),
    db: AsyncSession = Depends(get_async_db),
    current_user: AuthUser = Depends(require_resource(TRAINER_PORTAL)),
):
    repo = ClassRepository(db, current_user)
    class_id = await repo.create(class_in.for_trainer(trainer.id))
    return await repo.get_by_id(class_id)


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


@router.get("", response_model=List[Trainer])
async def list_trainers(repo: TrainerRepository = Depends(get_trainer_repository)):
    return await repo.list()


@router.get("/active", response_model=List[Trainer])
async def list_active_trainers(
    repo: TrainerRepository = Depends(get_trainer_repository),
):
    return await repo.list_active()


@router.post("", response_model=Trainer, status_code=status.HTTP_201_CREATED)
async def create_trainer(
    trainer_in: TrainerCreate,
    repo: TrainerRepository = Depends(get_trainer_repository),
):
    trainer_id = await repo.create(trainer_in)
    return await _load(repo, trainer_id)


@router.get("/{trainer_id}", response_model=Trainer)
async def get_trainer(
    trainer_id: uuid.UUID,
    repo: TrainerRepository = Depends(get_trainer_repository),
):
    return await _load(repo, trainer_id)


@router.patch("/{trainer_id}", response_model=Trainer)
async def update_trainer_profile(
    trainer_id: uuid.UUID,
    command: TrainerProfileUpdate,
    repo: TrainerRepository = Depends(get_trainer_repository),
):
    await repo.update(trainer_id, command)
    return await _load(repo, trainer_id)


@router.put("/{trainer_id}/availability", response_model=Trainer)
async def update_trainer_availability(
    trainer_id: uuid.UUID,
    command: TrainerAvailabilityUpdate,
    repo: TrainerRepository = Depends(get_trainer_repository),
):
    await repo.update(trainer_id, command)
    return await _load(repo, trainer_id)


@router.put("/{trainer_id}/status", response_model=Trainer)
async def update_trainer_status(
    trainer_id: uuid.UUID,
    command: TrainerStatusUpdate,
    repo: TrainerRepository = Depends(get_trainer_repository),
):
    await repo.update(trainer_id, command)
    return await _load(repo, trainer_id)


@router.delete("/{trainer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_trainer(
    trainer_id: uuid.UUID,
    repo: TrainerRepository = Depends(get_trainer_repository),
):
    await repo.delete(trainer_id)
