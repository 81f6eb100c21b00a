"""HTTP tests for authentication, roles and the trainer portal."""

import pytest
from jose import jwt

from libs.auth.models import UserRole
from libs.auth.users import get_user, register_user
from libs.common.config import get_settings
from tests.factories import TrainerClassFactory, TrainerFactory


def _token(**claims) -> str:
    settings = get_settings()
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


async def _seed(db_session, *records):
    db_session.add_all(records)
    await db_session.commit()


@pytest.mark.asyncio
@pytest.mark.integration
async def test_token_role_claim_is_used_without_user_record(token_client):
    response = await token_client.get(
        "/api/v1/packages",
        headers={"Authorization": f"Bearer {_token(sub='owner-1', role='admin')}"},
    )
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
@pytest.mark.integration
async def test_stored_role_overrides_token_claim(token_client, db_session):
    await register_user(
        db_session, user_id="coach-1", email="coach@example.com", role=UserRole.TRAINER
    )

    response = await token_client.get(
        "/api/v1/members",
        headers={"Authorization": f"Bearer {_token(sub='coach-1', role='admin')}"},
    )

    assert response.status_code == 403


@pytest.mark.asyncio
@pytest.mark.integration
async def test_bad_token_is_unauthorized(token_client):
    response = await token_client.get(
        "/api/v1/members", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401

    forged = jwt.encode({"sub": "x", "role": "admin"}, "wrong-secret", algorithm="HS256")
    response = await token_client.get(
        "/api/v1/members", headers={"Authorization": f"Bearer {forged}"}
    )
    assert response.status_code == 401


@pytest.mark.asyncio
@pytest.mark.integration
async def test_missing_token_is_rejected(token_client):
    response = await token_client.get("/api/v1/members")
    assert response.status_code in (401, 403)


@pytest.mark.asyncio
@pytest.mark.integration
async def test_register_user_is_idempotent(db_session):
    first = await register_user(db_session, user_id="u-1", email=None, role=UserRole.ADMIN)
    second = await register_user(
        db_session, user_id="u-1", email=None, role=UserRole.TRAINER
    )

    assert first.role == UserRole.ADMIN
    assert second.role == UserRole.ADMIN
    assert (await get_user(db_session, "u-1")).role == UserRole.ADMIN


@pytest.mark.asyncio
@pytest.mark.integration
async def test_admin_registers_users(client):
    response = await client.post(
        "/api/v1/users",
        json={"user_id": "new-coach", "email": "new@example.com", "role": "trainer"},
    )
    assert response.status_code == 201, response.text
    assert response.json()["role"] == "trainer"

    response = await client.get("/api/v1/users/me")
    assert response.json()["sub"] == "admin-user"
    assert response.json()["role"] == "admin"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_trainer_cannot_register_users(trainer_client):
    response = await trainer_client.post(
        "/api/v1/users", json={"user_id": "sneaky", "role": "admin"}
    )
    assert response.status_code == 403


@pytest.mark.asyncio
@pytest.mark.integration
async def test_trainer_is_kept_out_of_admin_routes(trainer_client):
    for path in ("/api/v1/members", "/api/v1/classes", "/api/v1/dashboard/stats"):
        response = await trainer_client.get(path)
        assert response.status_code == 403, path


@pytest.mark.asyncio
@pytest.mark.integration
async def test_trainer_portal(trainer_client, db_session):
    me = TrainerFactory.create(user_id="trainer-user", name="Sam")
    other = TrainerFactory.create()
    await _seed(
        db_session,
        me,
        other,
        TrainerClassFactory.create(trainer=me, class_name="Mine"),
        TrainerClassFactory.create(trainer=other, class_name="Theirs"),
    )

    response = await trainer_client.get("/api/v1/trainers/me")
    assert response.status_code == 200
    assert response.json()["name"] == "Sam"

    response = await trainer_client.get("/api/v1/trainers/me/classes")
    assert [c["class_name"] for c in response.json()] == ["Mine"]

    response = await trainer_client.post(
        "/api/v1/trainers/me/classes",
        json={
            "class_name": "Pilates",
            "date": "2024-06-01",
            "start_time": "09:00",
            "end_time": "10:00",
            "capacity": 6,
            "location": "Studio C",
        },
    )
    assert response.status_code == 201, response.text
    assert response.json()["trainer_id"] == str(me.id)
    assert response.json()["created_by"] == "trainer-user"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_trainer_without_profile(trainer_client):
    response = await trainer_client.get("/api/v1/trainers/me")
    assert response.status_code == 404
