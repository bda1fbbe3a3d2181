import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base
from app.models.common import TimestampMixin, UUIDMixin
from app.models.enums import ReservationStatus, status_enum
from app.models.event import Event


class Reservation(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "reservations"

    event_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("events.id"), index=True, nullable=False)
    customer_email: Mapped[str] = mapped_column(String(200), nullable=False)
    seat_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    status: Mapped[ReservationStatus] = mapped_column(
        status_enum(ReservationStatus), nullable=False, default=ReservationStatus.HELD
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    event: Mapped[Event] = relationship()
