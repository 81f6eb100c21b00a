"""Role allow-list deciding which resources a caller may reach."""

from typing import Optional

from libs.auth.models import UserRole

MEMBERS = "members"
PACKAGES = "packages"
TRAINERS = "trainers"
CLASSES = "classes"
ATTENDANCE = "attendance"
PAYMENTS = "payments"
DASHBOARD = "dashboard"
TRAINER_PORTAL = "trainer_portal"

ALL_RESOURCES = frozenset(
    {MEMBERS, PACKAGES, TRAINERS, CLASSES, ATTENDANCE, PAYMENTS, DASHBOARD}
)

ROLE_PERMISSIONS: dict[UserRole, frozenset[str]] = {
    UserRole.ADMIN: ALL_RESOURCES,
    UserRole.TRAINER: frozenset({TRAINER_PORTAL}),
}


def can_access(role: Optional[UserRole], resource: str) -> bool:
    if role is None:
        return False
    return resource in ROLE_PERMISSIONS.get(role, frozenset())
