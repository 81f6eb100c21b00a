import enum
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlalchemy import Enum as SAEnum
from sqlalchemy import String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from libs.common.datetime_utils import utc_now
from libs.db.base import Base, enum_values


class CheckInMethod(str, enum.Enum):
    QR = "qr"
    MANUAL = "manual"


class Attendance(Base):
    __tablename__ = "attendance"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    member_id: Mapped[uuid.UUID] = mapped_column(Uuid, index=True, nullable=False)
    # Copied from the member at check-in for display
    member_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    member_id_number: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    class_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, index=True, nullable=True
    )

    # Calendar day bucket, midnight UTC
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), index=True, nullable=False
    )
    check_in_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
    check_out_time: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    check_in_method: Mapped[CheckInMethod] = mapped_column(
        SAEnum(
            CheckInMethod,
            name="check_in_method_enum",
            values_callable=enum_values,
            validate_strings=True,
        ),
        default=CheckInMethod.MANUAL,
        nullable=False,
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    def __repr__(self):
        return f"<Attendance Member={self.member_id} Date={self.date}>"
