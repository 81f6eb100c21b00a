"""
Model factories for creating valid test data.

Every factory produces a valid, insertable SQLAlchemy model instance with
storage-format values (calendar dates as midnight UTC timestamps).
Override any field via kwargs.

Usage:
    package = PackageFactory.create(duration=90)
    db_session.add(package)
    await db_session.commit()
"""

import uuid
from datetime import date, datetime, timedelta, timezone

from libs.common.datetime_utils import as_utc_datetime

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _uuid() -> uuid.UUID:
    return uuid.uuid4()


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _today() -> date:
    return _now().date()


def _unique_email() -> str:
    return f"test-{uuid.uuid4().hex[:8]}@example.com"


def _code() -> str:
    return f"GM{uuid.uuid4().int % 90000 + 10000}"


# ---------------------------------------------------------------------------
# Packages
# ---------------------------------------------------------------------------


class PackageFactory:
    @staticmethod
    def create(**overrides):
        from services.packages_service.models import Package

        defaults = {
            "id": _uuid(),
            "name": "Monthly",
            "description": "Full gym access",
            "price": 49.0,
            "duration": 30,
            "features": ["gym floor", "lockers"],
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return Package(**defaults)


# ---------------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------------


class MemberFactory:
    @staticmethod
    def create(package=None, start_date=None, expiry_date=None, **overrides):
        from services.members_service.models import Member

        start = start_date or _today()
        expiry = expiry_date or start + timedelta(days=package.duration if package else 30)
        defaults = {
            "id": _uuid(),
            "member_id": _code(),
            "name": "Test Member",
            "email": _unique_email(),
            "phone": "555-0100",
            "address": "1 Main St",
            "package_id": package.id if package else _uuid(),
            "package_name": package.name if package else "Monthly",
            "start_date": as_utc_datetime(start),
            "expiry_date": as_utc_datetime(expiry),
            "notes": None,
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return Member(**defaults)


# ---------------------------------------------------------------------------
# Trainers
# ---------------------------------------------------------------------------


class TrainerFactory:
    @staticmethod
    def create(**overrides):
        from services.trainers_service.models import Trainer

        defaults = {
            "id": _uuid(),
            "user_id": None,
            "name": "Test Trainer",
            "email": _unique_email(),
            "phone": "555-0101",
            "specialization": "Strength",
            "bio": "",
            "hourly_rate": 40.0,
            "availability": [
                {"day": "monday", "start_time": "09:00", "end_time": "17:00"}
            ],
            "avatar": None,
            "is_active": True,
            "join_date": as_utc_datetime(date(2023, 6, 1)),
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return Trainer(**defaults)


# ---------------------------------------------------------------------------
# Classes
# ---------------------------------------------------------------------------


class TrainerClassFactory:
    @staticmethod
    def create(trainer=None, on=None, **overrides):
        from services.classes_service.models import TrainerClass

        defaults = {
            "id": _uuid(),
            "trainer_id": trainer.id if trainer else _uuid(),
            "class_name": "Morning HIIT",
            "description": "",
            "date": as_utc_datetime(on or _today() + timedelta(days=1)),
            "start_time": "07:00",
            "end_time": "08:00",
            "capacity": 10,
            "enrolled": 0,
            "location": "Studio A",
            "price": 0.0,
            "is_recurring": False,
            "recurring_days": None,
            "created_by": None,
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return TrainerClass(**defaults)


# ---------------------------------------------------------------------------
# Attendance
# ---------------------------------------------------------------------------


class AttendanceFactory:
    @staticmethod
    def create(member=None, on=None, **overrides):
        from services.attendance_service.models import Attendance, CheckInMethod

        defaults = {
            "id": _uuid(),
            "member_id": member.id if member else _uuid(),
            "member_name": member.name if member else "Test Member",
            "member_id_number": member.member_id if member else _code(),
            "class_id": None,
            "date": as_utc_datetime(on or _today()),
            "check_in_time": _now().replace(microsecond=0),
            "check_out_time": None,
            "check_in_method": CheckInMethod.MANUAL,
            "notes": None,
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return Attendance(**defaults)


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------


class PaymentFactory:
    @staticmethod
    def create(member=None, package=None, on=None, **overrides):
        from services.payments_service.models import Payment, PaymentStatus

        defaults = {
            "id": _uuid(),
            "member_id": member.id if member else _uuid(),
            "package_id": package.id if package else _uuid(),
            "amount": 49.0,
            "payment_date": as_utc_datetime(on or _today()),
            "payment_method": "card",
            "transaction_id": None,
            "status": PaymentStatus.COMPLETED,
            "notes": None,
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return Payment(**defaults)
