"""
Membership rules.

Pure functions with no database dependencies for easy testing.
Calendar dates are compared as midnight UTC timestamps.
"""

import enum
import math
import random
from datetime import date, datetime, timedelta
from typing import Optional

from libs.common.config import get_settings
from libs.common.datetime_utils import as_utc_datetime, utc_now

SECONDS_PER_DAY = 24 * 60 * 60


class MembershipStatus(str, enum.Enum):
    ACTIVE = "active"
    EXPIRING_SOON = "expiring_soon"
    EXPIRED = "expired"


def days_left(expiry_date: date | datetime, now: Optional[date | datetime] = None) -> int:
    """Whole days until expiry, rounded up. Negative once expired."""
    expiry = as_utc_datetime(expiry_date)
    reference = as_utc_datetime(now) if now is not None else utc_now()
    return math.ceil((expiry - reference).total_seconds() / SECONDS_PER_DAY)


def membership_status(
    expiry_date: date | datetime,
    now: Optional[date | datetime] = None,
    soon_days: Optional[int] = None,
) -> MembershipStatus:
    """
    Classify a membership.

    - expired: expiry is before now
    - expiring_soon: 0 <= days_left <= soon_days (7 by default)
    - active: otherwise
    """
    if soon_days is None:
        soon_days = get_settings().EXPIRING_SOON_DAYS
    expiry = as_utc_datetime(expiry_date)
    reference = as_utc_datetime(now) if now is not None else utc_now()

    if expiry < reference:
        return MembershipStatus.EXPIRED
    if 0 <= days_left(expiry, reference) <= soon_days:
        return MembershipStatus.EXPIRING_SOON
    return MembershipStatus.ACTIVE


def calculate_expiry(start_date: date, duration_days: int) -> date:
    """Expiry is the start date plus the package duration in days."""
    return start_date + timedelta(days=duration_days)


def generate_member_code(prefix: Optional[str] = None) -> str:
    """Random display code such as GM12345."""
    if prefix is None:
        prefix = get_settings().MEMBER_CODE_PREFIX
    return f"{prefix}{random.randint(10000, 99999)}"
