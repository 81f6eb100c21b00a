"""Repository tests for trainers and classes."""

from datetime import date, datetime, timedelta, timezone

import pytest

from libs.auth.models import AuthUser, UserRole
from libs.common.errors import NotFoundError, ValidationError
from services.classes_service.repository import ClassRepository
from services.classes_service.schemas import (
    ClassDetailsUpdate,
    ClassEnrollmentUpdate,
    ClassScheduleUpdate,
    TrainerClassCreate,
)
from services.trainers_service.repository import TrainerRepository
from services.trainers_service.schemas import (
    AvailabilitySlot,
    TrainerAvailabilityUpdate,
    TrainerCreate,
    TrainerStatusUpdate,
)
from tests.factories import TrainerClassFactory, TrainerFactory


async def _seed(db_session, *records):
    db_session.add_all(records)
    await db_session.commit()


# ---------------------------------------------------------------------------
# Trainers
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_trainer_round_trips_join_date(db_session):
    repo = TrainerRepository(db_session)
    trainer_id = await repo.create(
        TrainerCreate(
            name="Sam",
            email="sam@example.com",
            hourly_rate=35.0,
            join_date=date(2023, 9, 1),
            availability=[
                AvailabilitySlot(day="monday", start_time="06:00", end_time="12:00")
            ],
        )
    )

    trainer = await repo.get_by_id(trainer_id)

    assert trainer.join_date == date(2023, 9, 1)
    assert trainer.availability[0].day == "monday"
    assert trainer.is_active is True


@pytest.mark.asyncio
@pytest.mark.integration
async def test_trainer_availability_and_status_updates(db_session):
    trainer = TrainerFactory.create()
    await _seed(db_session, trainer)
    repo = TrainerRepository(db_session)

    await repo.update(
        trainer.id,
        TrainerAvailabilityUpdate(
            availability=[
                {"day": "saturday", "start_time": "08:00", "end_time": "10:00"},
                {"day": "sunday", "start_time": "08:00", "end_time": "10:00"},
            ]
        ),
    )
    await repo.update(trainer.id, TrainerStatusUpdate(is_active=False))
    updated = await repo.get_by_id(trainer.id)

    assert [slot.day for slot in updated.availability] == ["saturday", "sunday"]
    assert updated.is_active is False
    assert await repo.count_active() == 0
    assert await repo.list_active() == []


@pytest.mark.asyncio
@pytest.mark.integration
async def test_get_trainer_by_user_id(db_session):
    linked = TrainerFactory.create(user_id="auth-sam")
    await _seed(db_session, linked, TrainerFactory.create())
    repo = TrainerRepository(db_session)

    assert (await repo.get_by_user_id("auth-sam")).id == linked.id
    assert await repo.get_by_user_id("auth-nobody") is None


# ---------------------------------------------------------------------------
# Classes
# ---------------------------------------------------------------------------


def _class_payload(trainer_id, **overrides) -> TrainerClassCreate:
    values = {
        "trainer_id": trainer_id,
        "class_name": "Spin",
        "date": date(2024, 5, 1),
        "start_time": "18:00",
        "end_time": "19:00",
        "capacity": 2,
        "location": "Studio B",
    }
    values.update(overrides)
    return TrainerClassCreate(**values)


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_class_records_creator(db_session):
    trainer = TrainerFactory.create()
    await _seed(db_session, trainer)
    admin = AuthUser(user_id="admin-1", role=UserRole.ADMIN)
    repo = ClassRepository(db_session, admin)

    class_id = await repo.create(_class_payload(trainer.id))
    created = await repo.get_by_id(class_id)

    assert created.date == date(2024, 5, 1)
    assert created.created_by == "admin-1"
    assert created.enrolled == 0


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_class_for_unknown_trainer(db_session):
    with pytest.raises(NotFoundError):
        await ClassRepository(db_session).create(
            _class_payload("00000000-0000-0000-0000-000000000000")
        )


@pytest.mark.asyncio
@pytest.mark.integration
async def test_enroll_until_full(db_session):
    trainer_class = TrainerClassFactory.create(capacity=2)
    await _seed(db_session, trainer_class)
    repo = ClassRepository(db_session)

    assert await repo.enroll(trainer_class.id) == 1
    assert await repo.enroll(trainer_class.id) == 2
    with pytest.raises(ValidationError):
        await repo.enroll(trainer_class.id)

    assert (await repo.get_by_id(trainer_class.id)).is_full


@pytest.mark.asyncio
@pytest.mark.integration
async def test_unenroll_empty_class(db_session):
    trainer_class = TrainerClassFactory.create(enrolled=1)
    await _seed(db_session, trainer_class)
    repo = ClassRepository(db_session)

    assert await repo.unenroll(trainer_class.id) == 0
    with pytest.raises(ValidationError):
        await repo.unenroll(trainer_class.id)


@pytest.mark.asyncio
@pytest.mark.integration
async def test_updates_are_checked_against_stored_class(db_session):
    trainer_class = TrainerClassFactory.create(
        capacity=10, enrolled=6, start_time="07:00", end_time="08:00"
    )
    await _seed(db_session, trainer_class)
    repo = ClassRepository(db_session)

    with pytest.raises(ValidationError):
        await repo.update(trainer_class.id, ClassDetailsUpdate(capacity=5))
    with pytest.raises(ValidationError):
        await repo.update(trainer_class.id, ClassScheduleUpdate(start_time="09:00"))
    with pytest.raises(ValidationError):
        await repo.update(trainer_class.id, ClassEnrollmentUpdate(enrolled=11))

    await repo.update(trainer_class.id, ClassEnrollmentUpdate(enrolled=10))
    assert (await repo.get_by_id(trainer_class.id)).enrolled == 10


@pytest.mark.asyncio
@pytest.mark.integration
async def test_schedule_update_toggles_recurrence(db_session):
    trainer_class = TrainerClassFactory.create()
    await _seed(db_session, trainer_class)
    repo = ClassRepository(db_session)

    with pytest.raises(ValidationError):
        await repo.update(trainer_class.id, ClassScheduleUpdate(is_recurring=True))

    await repo.update(
        trainer_class.id,
        ClassScheduleUpdate(is_recurring=True, recurring_days=["tuesday", "thursday"]),
    )
    assert (await repo.get_by_id(trainer_class.id)).recurring_days == ["tuesday", "thursday"]

    await repo.update(trainer_class.id, ClassScheduleUpdate(is_recurring=False))
    stopped = await repo.get_by_id(trainer_class.id)
    assert stopped.is_recurring is False
    assert stopped.recurring_days is None


@pytest.mark.asyncio
@pytest.mark.integration
async def test_reassigning_class_checks_trainer(db_session):
    trainer_class = TrainerClassFactory.create()
    other = TrainerFactory.create()
    await _seed(db_session, trainer_class, other)
    repo = ClassRepository(db_session)

    with pytest.raises(NotFoundError):
        await repo.update(
            trainer_class.id,
            ClassDetailsUpdate(trainer_id="00000000-0000-0000-0000-000000000000"),
        )
    await repo.update(trainer_class.id, ClassDetailsUpdate(trainer_id=other.id))
    assert [c.id for c in await repo.list_by_trainer(other.id)] == [trainer_class.id]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_upcoming_classes_start_today(db_session):
    today = date(2024, 5, 10)
    await _seed(
        db_session,
        TrainerClassFactory.create(class_name="past", on=today - timedelta(days=1)),
        TrainerClassFactory.create(class_name="later", on=today + timedelta(days=3)),
        TrainerClassFactory.create(class_name="today", on=today),
    )
    repo = ClassRepository(db_session)

    upcoming = await repo.list_upcoming(today)

    assert [c.class_name for c in upcoming] == ["today", "later"]
    assert [c.class_name for c in await repo.list_upcoming(today, limit=1)] == ["today"]
    assert await repo.count_upcoming(today) == 2


@pytest.mark.asyncio
@pytest.mark.integration
async def test_upcoming_classes_exclude_earlier_today(db_session):
    now = datetime(2024, 5, 10, 15, 0, tzinfo=timezone.utc)
    await _seed(
        db_session,
        TrainerClassFactory.create(class_name="earlier_today", on=date(2024, 5, 10)),
        TrainerClassFactory.create(class_name="tomorrow", on=date(2024, 5, 11)),
    )
    repo = ClassRepository(db_session)

    assert [c.class_name for c in await repo.list_upcoming(now)] == ["tomorrow"]
    assert await repo.count_upcoming(now) == 1
