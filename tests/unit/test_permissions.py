"""Unit tests for the role allow-list and error taxonomy."""

import pytest

from libs.auth.models import AuthUser, UserRole
from libs.auth.permissions import (
    ALL_RESOURCES,
    CLASSES,
    DASHBOARD,
    MEMBERS,
    TRAINER_PORTAL,
    can_access,
)
from libs.common.error_handler import STATUS_BY_ERROR
from libs.common.errors import (
    ErrorCode,
    NotFoundError,
    TransientStoreError,
    ValidationError,
)


@pytest.mark.unit
class TestRolePermissions:
    @pytest.mark.parametrize("resource", sorted(ALL_RESOURCES))
    def test_admin_reaches_every_resource(self, resource):
        assert can_access(UserRole.ADMIN, resource)

    @pytest.mark.parametrize("resource", [MEMBERS, CLASSES, DASHBOARD])
    def test_trainer_is_limited_to_portal(self, resource):
        assert not can_access(UserRole.TRAINER, resource)
        assert can_access(UserRole.TRAINER, TRAINER_PORTAL)

    def test_unknown_role_reaches_nothing(self):
        assert not can_access(None, MEMBERS)
        assert not can_access(None, TRAINER_PORTAL)

    def test_auth_user_accepts_token_subject(self):
        user = AuthUser(sub="abc", role="admin")
        assert user.user_id == "abc"
        assert user.is_admin


@pytest.mark.unit
class TestErrors:
    def test_not_found_details(self):
        error = NotFoundError("Member", "42")
        assert error.code == ErrorCode.NOT_FOUND
        assert error.to_dict() == {
            "error": "not_found",
            "message": "Member not found",
            "details": {"entity": "Member", "id": "42"},
        }

    def test_codes(self):
        assert ValidationError("bad").code == ErrorCode.VALIDATION_FAILED
        assert TransientStoreError("down").code == ErrorCode.STORE_UNAVAILABLE

    def test_http_status_per_error(self):
        assert STATUS_BY_ERROR == {
            NotFoundError: 404,
            ValidationError: 422,
            TransientStoreError: 503,
        }
